"""Reporting commands: recent activity and project status."""

from __future__ import annotations

import json

import click

from filemon.cli.common import get_store, resolve_project, resolve_projects
from filemon.cli.exit_codes import ExitCode
from filemon.cli.output import error_exit
from filemon.core.datetime_utils import (
    format_local_datetime,
    parse_duration,
    parse_iso_timestamp,
)
from filemon.exceptions import CorruptStateError
from filemon.monitor.signals import Marker, MarkerFileSignals
from filemon.reports.activity import recent_activity_for_project


def _parse_window(value: str) -> float:
    """Parse a --window value into minutes."""
    try:
        return parse_duration(value).total_seconds() / 60.0
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


@click.command("activity")
@click.argument("project_name")
@click.option(
    "--window",
    "-w",
    default="120m",
    show_default=True,
    help="Trailing window, e.g. 30m, 2h, 7d (bare numbers are minutes).",
)
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format.")
@click.pass_context
def activity_command(
    ctx: click.Context, project_name: str, window: str, json_output: bool
) -> None:
    """List files in PROJECT_NAME with activity inside the window."""
    window_minutes = _parse_window(window)
    project = resolve_project(ctx, project_name, json_output)

    try:
        entries = recent_activity_for_project(
            project, window_minutes, store=get_store(ctx)
        )
    except CorruptStateError as e:
        error_exit(str(e), ExitCode.CORRUPT_STATE, json_output)

    if json_output:
        click.echo(
            json.dumps(
                {
                    "project": project.name,
                    "window_minutes": window_minutes,
                    "files": [entry.to_dict() for entry in entries],
                },
                indent=2,
            )
        )
        return

    if not entries:
        click.echo(f"No activity in {project.name} within {window}.")
        return

    width = max(len(entry.label) for entry in entries)
    for entry in entries:
        click.echo(
            f"{format_local_datetime(entry.time)}  "
            f"{entry.label:<{width}}  {entry.key}"
        )


@click.command("status")
@click.argument("project_names", nargs=-1)
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format.")
@click.pass_context
def status_command(
    ctx: click.Context, project_names: tuple[str, ...], json_output: bool
) -> None:
    """Show scan history totals for projects (all configured by default)."""
    store = get_store(ctx)
    rows = []
    for project in resolve_projects(ctx, project_names, json_output):
        try:
            summary = store.load_or_create(project.name)
        except CorruptStateError as e:
            error_exit(str(e), ExitCode.CORRUPT_STATE, json_output)

        signals = MarkerFileSignals(store.project_dir(project.name))
        last = summary.last_scan
        rows.append(
            {
                "project": project.name,
                "root": str(project.root),
                "scans": len(summary.scans),
                "files": len(summary.files),
                "last_scan": last.time.isoformat() if last else None,
                "last_checked": last.checked_file_count if last else None,
                "last_changed": last.changed_file_count if last else None,
                "paused": signals.is_marker_present(Marker.PAUSE),
                "gen_requested": signals.is_marker_present(Marker.GEN),
            }
        )

    if json_output:
        click.echo(json.dumps({"projects": rows}, indent=2))
        return

    if not rows:
        click.echo("No projects configured.")
        return

    for row in rows:
        flags = []
        if row["paused"]:
            flags.append("paused")
        if row["gen_requested"]:
            flags.append("gen requested")
        suffix = f" [{', '.join(flags)}]" if flags else ""
        click.echo(f"{row['project']}{suffix}")
        click.echo(f"  root:  {row['root']}")
        click.echo(f"  scans: {row['scans']}, files tracked: {row['files']}")
        if row["last_scan"] is None:
            click.echo("  last scan: never")
        else:
            last_time = format_local_datetime(parse_iso_timestamp(row["last_scan"]))
            click.echo(
                f"  last scan: {last_time} "
                f"(checked {row['last_checked']}, changed {row['last_changed']})"
            )
