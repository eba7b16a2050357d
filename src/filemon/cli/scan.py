"""Scan commands: one-off scans and the monitoring loop."""

from __future__ import annotations

import logging
import signal

import click

from filemon.cli.common import get_cli_config, get_store, resolve_project, resolve_projects
from filemon.cli.exit_codes import ExitCode
from filemon.cli.output import CommandResult, error_exit, success_output
from filemon.exceptions import CorruptStateError, ScanIoError
from filemon.monitor.runner import MonitorSupervisor
from filemon.scanner.orchestrator import perform_scan

logger = logging.getLogger(__name__)


@click.command("scan")
@click.argument("project_name")
@click.option("--gen", "is_gen", is_flag=True, help="Treat this scan as a generation pass.")
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format.")
@click.pass_context
def scan_command(
    ctx: click.Context, project_name: str, is_gen: bool, json_output: bool
) -> None:
    """Scan PROJECT_NAME once and update its summary."""
    project = resolve_project(ctx, project_name, json_output)
    store = get_store(ctx)

    try:
        outcome = perform_scan(project, is_gen, store=store)
    except CorruptStateError as e:
        error_exit(str(e), ExitCode.CORRUPT_STATE, json_output)
    except ScanIoError as e:
        error_exit(str(e), ExitCode.SCAN_IO_ERROR, json_output)
    except OSError as e:
        error_exit(
            f"Cannot read or write summary: {e}", ExitCode.OPERATION_FAILED, json_output
        )

    record = outcome.record
    kind = "generation pass" if record.is_gen else "scan"
    if outcome.is_bootstrap:
        kind = "bootstrap " + kind
    message = (
        f"{project.name}: {kind} checked {record.checked_file_count} file(s), "
        f"{record.changed_file_count} changed"
    )
    success_output(
        CommandResult(
            message=message,
            data={
                "project": project.name,
                "time": record.time.isoformat(),
                "is_gen": record.is_gen,
                "bootstrap": outcome.is_bootstrap,
                "checked_file_count": record.checked_file_count,
                "changed_file_count": record.changed_file_count,
                "summary_path": str(outcome.summary_path),
            },
        ),
        json_output,
    )


@click.command("run")
@click.argument("project_names", nargs=-1)
@click.option("--once", is_flag=True, help="Run a single cycle per project and exit.")
@click.pass_context
def run_command(ctx: click.Context, project_names: tuple[str, ...], once: bool) -> None:
    """Monitor projects until interrupted (all configured projects by default)."""
    config = get_cli_config(ctx)
    projects = resolve_projects(ctx, project_names)
    if not projects:
        error_exit(
            f"No projects configured in {config.projects_dir}",
            ExitCode.PROJECT_NOT_FOUND,
        )

    supervisor = MonitorSupervisor(
        get_store(ctx),
        projects,
        pause_retry_seconds=config.monitor.pause_retry_seconds,
    )

    def handle_signal(signum: int, frame: object) -> None:
        logger.info("Received %s, stopping monitors...", signal.Signals(signum).name)
        supervisor.stop()

    previous_handlers = {
        sig: signal.signal(sig, handle_signal) for sig in (signal.SIGINT, signal.SIGTERM)
    }
    try:
        supervisor.start(max_cycles=1 if once else None)
        while supervisor.is_alive():
            supervisor.join(timeout=1.0)
    finally:
        for sig, handler in previous_handlers.items():
            signal.signal(sig, handler)

    if supervisor.failures:
        names = ", ".join(sorted(supervisor.failures))
        corrupt = any(
            isinstance(e, CorruptStateError) for e in supervisor.failures.values()
        )
        error_exit(
            f"Monitoring stopped on error for: {names}",
            ExitCode.CORRUPT_STATE if corrupt else ExitCode.OPERATION_FAILED,
        )
