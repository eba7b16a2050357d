"""CLI module for filemon."""

import logging
from pathlib import Path

import click

from filemon.cli.exit_codes import ExitCode
from filemon.cli.output import error_exit
from filemon.config.loader import get_config
from filemon.config.logging_factory import build_logging_config
from filemon.exceptions import ConfigError
from filemon.logging import configure_logging

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(package_name="filemon")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Config file (default: ~/.filemon/config.toml).",
)
@click.option(
    "--history-dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Override the directory holding project summaries.",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    history_dir: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """File Monitor - track edits and generation passes on watched folders."""
    ctx.ensure_object(dict)

    try:
        config = get_config(config_path=config_path, history_dir=history_dir)
    except ConfigError as e:
        error_exit(str(e), ExitCode.CONFIG_ERROR)

    configure_logging(
        build_logging_config(
            config.logging,
            level=log_level,
            file=log_file,
            format="json" if log_json else None,
        )
    )
    logger.debug(
        "filemon starting: data_dir=%s, history_dir=%s",
        config.data_dir,
        config.history_dir,
    )
    ctx.obj["config"] = config


# Defer import to avoid circular dependency
def _register_commands():
    from filemon.cli.markers import gen_command, pause_command, resume_command
    from filemon.cli.report import activity_command, status_command
    from filemon.cli.scan import run_command, scan_command

    main.add_command(scan_command)
    main.add_command(run_command)
    main.add_command(activity_command)
    main.add_command(status_command)
    main.add_command(pause_command)
    main.add_command(resume_command)
    main.add_command(gen_command)


_register_commands()
