"""Helpers shared by CLI commands."""

from __future__ import annotations

import click

from filemon.cli.exit_codes import ExitCode
from filemon.cli.output import error_exit
from filemon.config.models import FileMonConfig, ProjectConfig
from filemon.config.projects import load_project, load_projects
from filemon.exceptions import ProjectConfigError, ProjectNotFoundError
from filemon.store.summary_store import SummaryStore


def get_cli_config(ctx: click.Context) -> FileMonConfig:
    """Configuration loaded by the main group."""
    return ctx.obj["config"]


def get_store(ctx: click.Context) -> SummaryStore:
    """Summary store for the configured history directory.

    Tests may pass a store in ctx.obj to bypass configuration.
    """
    store = ctx.obj.get("store")
    if store is None:
        store = SummaryStore(get_cli_config(ctx).history_dir)
        ctx.obj["store"] = store
    return store


def resolve_project(
    ctx: click.Context, name: str, json_output: bool = False
) -> ProjectConfig:
    """Load a project definition, exiting with a CLI error if it fails."""
    config = get_cli_config(ctx)
    try:
        return load_project(
            name,
            config.projects_dir,
            default_minutes=config.monitor.default_interval_minutes,
        )
    except ProjectNotFoundError as e:
        error_exit(str(e), ExitCode.PROJECT_NOT_FOUND, json_output)
    except ProjectConfigError as e:
        error_exit(str(e), ExitCode.CONFIG_ERROR, json_output)


def resolve_projects(
    ctx: click.Context, names: tuple[str, ...], json_output: bool = False
) -> list[ProjectConfig]:
    """Load the named projects, or every configured project if none named."""
    if names:
        return [resolve_project(ctx, name, json_output) for name in names]

    config = get_cli_config(ctx)
    try:
        return load_projects(
            config.projects_dir,
            default_minutes=config.monitor.default_interval_minutes,
        )
    except ProjectConfigError as e:
        error_exit(str(e), ExitCode.CONFIG_ERROR, json_output)
