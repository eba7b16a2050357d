"""Marker commands: pause, resume and request a generation pass.

These write or remove marker files in the project's history directory. A
running `filemon run` (possibly in another process) picks them up before
its next scan.
"""

from __future__ import annotations

import click

from filemon.cli.common import get_store, resolve_project
from filemon.monitor.signals import Marker, MarkerFileSignals


def _signals(ctx: click.Context, project_name: str) -> tuple[str, MarkerFileSignals]:
    project = resolve_project(ctx, project_name)
    return project.name, MarkerFileSignals(get_store(ctx).project_dir(project.name))


@click.command("pause")
@click.argument("project_name")
@click.pass_context
def pause_command(ctx: click.Context, project_name: str) -> None:
    """Hold off scans of PROJECT_NAME until resumed."""
    name, signals = _signals(ctx, project_name)
    signals.set_marker(Marker.PAUSE)
    click.echo(f"{name}: paused")


@click.command("resume")
@click.argument("project_name")
@click.pass_context
def resume_command(ctx: click.Context, project_name: str) -> None:
    """Resume scans of PROJECT_NAME."""
    name, signals = _signals(ctx, project_name)
    signals.clear_marker(Marker.PAUSE)
    click.echo(f"{name}: resumed")


@click.command("gen")
@click.argument("project_name")
@click.option("--cancel", is_flag=True, help="Withdraw a pending request.")
@click.pass_context
def gen_command(ctx: click.Context, project_name: str, cancel: bool) -> None:
    """Treat the next scan of PROJECT_NAME as a generation pass."""
    name, signals = _signals(ctx, project_name)
    if cancel:
        signals.clear_marker(Marker.GEN)
        click.echo(f"{name}: generation pass request withdrawn")
    else:
        signals.set_marker(Marker.GEN)
        click.echo(f"{name}: next scan will be a generation pass")
