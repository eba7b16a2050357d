"""Project definition loading.

Each monitored project is described by a YAML file in the projects
directory (~/.filemon/projects/ by default):

    # ~/.filemon/projects/DokuWiki.yaml
    root: ~/Doku/DokuWikiStick/dokuwiki/data/pages
    subfolders:
      - tools
      - tools/nav
    minutes: 0.5

The file stem is the project name; an optional `name` key must agree
with it.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from filemon.config.models import PROJECT_NAME_PATTERN, ProjectConfig
from filemon.exceptions import ProjectConfigError, ProjectNotFoundError

logger = logging.getLogger(__name__)

_PROJECT_KEYS = frozenset({"name", "root", "subfolders", "minutes"})


def list_projects(projects_dir: Path) -> list[str]:
    """List configured project names, sorted.

    Returns:
        Project names (file stems of *.yaml definitions).
    """
    if not projects_dir.exists():
        return []

    return sorted(
        p.stem
        for p in projects_dir.glob("*.yaml")
        if p.is_file() and not p.name.startswith(".")
    )


def parse_project(
    data: Any, name: str, *, default_minutes: float = 0.5
) -> ProjectConfig:
    """Build a ProjectConfig from a parsed project definition.

    Args:
        data: Parsed YAML mapping.
        name: Project name (the definition's file stem).
        default_minutes: Interval used when the definition sets none.

    Raises:
        ProjectConfigError: If the definition is malformed.
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ProjectConfigError(f"Project '{name}' must be a YAML mapping")

    unknown_keys = set(data) - _PROJECT_KEYS
    if unknown_keys:
        raise ProjectConfigError(
            f"Unknown keys in project '{name}': {sorted(unknown_keys)}. "
            f"Valid keys are: {sorted(_PROJECT_KEYS)}"
        )

    declared_name = data.get("name", name)
    if declared_name != name:
        raise ProjectConfigError(
            f"Project file '{name}.yaml' declares name '{declared_name}'"
        )

    root = data.get("root")
    if not root:
        raise ProjectConfigError(f"Project '{name}' has no root")

    subfolders = data.get("subfolders")
    if isinstance(subfolders, str):
        subfolders = [subfolders]
    if not isinstance(subfolders, list) or not all(
        isinstance(s, str) for s in subfolders
    ):
        raise ProjectConfigError(
            f"Project '{name}' subfolders must be a list of strings"
        )

    try:
        return ProjectConfig(
            name=name,
            root=Path(str(root)).expanduser(),
            subfolders=tuple(s.strip("/") for s in subfolders),
            minutes=float(data.get("minutes", default_minutes)),
        )
    except (TypeError, ValueError) as e:
        raise ProjectConfigError(f"Invalid project '{name}': {e}") from e


def load_project(
    name: str, projects_dir: Path, *, default_minutes: float = 0.5
) -> ProjectConfig:
    """Load a project definition by name.

    Args:
        name: Project name (without .yaml extension).
        projects_dir: Directory holding project definitions.
        default_minutes: Interval used when the definition sets none.

    Returns:
        The project configuration.

    Raises:
        ProjectNotFoundError: If no definition exists.
        ProjectConfigError: If the definition is invalid.
    """
    if not PROJECT_NAME_PATTERN.match(name):
        raise ProjectConfigError(f"Invalid project name: {name!r}")

    project_path = projects_dir / f"{name}.yaml"
    if not project_path.is_file():
        raise ProjectNotFoundError(name, projects_dir)

    try:
        with open(project_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ProjectConfigError(f"Invalid YAML in project {name}: {e}") from e

    project = parse_project(data, name, default_minutes=default_minutes)
    logger.debug("Loaded project %s from %s", name, project_path)
    return project


def load_projects(
    projects_dir: Path, *, default_minutes: float = 0.5
) -> list[ProjectConfig]:
    """Load every project definition in the projects directory."""
    return [
        load_project(name, projects_dir, default_minutes=default_minutes)
        for name in list_projects(projects_dir)
    ]
