"""Text and JSON output for CLI commands."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from typing import Any, NoReturn

import click

from filemon.cli.exit_codes import ExitCode


@dataclass
class CommandResult:
    """Outcome of a successful command.

    ``message`` is the one-line text rendering; ``data`` holds the fields
    added to the JSON rendering.
    """

    message: str
    data: dict[str, Any] = field(default_factory=dict)

    def to_json(self) -> str:
        return json.dumps(
            {"status": "completed", "message": self.message, **self.data},
            indent=2,
        )


def error_exit(message: str, code: ExitCode, json_output: bool = False) -> NoReturn:
    """Report an error on stderr and exit with ``code``.

    With ``json_output`` the error is written as
    ``{"status": "failed", "error": {"code": <name>, "message": ...}}``.
    """
    if json_output:
        payload = {"status": "failed", "error": {"code": code.name, "message": message}}
        click.echo(json.dumps(payload), err=True)
    else:
        click.echo(f"Error: {message}", err=True)
    sys.exit(int(code))


def success_output(result: CommandResult, json_output: bool = False) -> None:
    """Print a command result as text or JSON on stdout."""
    click.echo(result.to_json() if json_output else result.message)
