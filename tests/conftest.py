"""Shared test fixtures for filemon."""

import os
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import patch

import pytest

from filemon.config.loader import clear_config_cache
from filemon.config.models import ProjectConfig
from filemon.store.summary_store import SummaryStore

# Fixed reference time for scenarios: files and clocks are pinned around it
T0 = datetime(2025, 1, 15, 10, 0, 0, tzinfo=timezone.utc)


def set_mtime(path: Path, when: datetime) -> None:
    """Pin a file's modification time."""
    ts = when.timestamp()
    os.utime(path, (ts, ts))


def write_file(path: Path, when: datetime, content: str = "content") -> Path:
    """Create or overwrite a file and pin its modification time."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    set_mtime(path, when)
    return path


class FakeClock:
    """Settable clock for injecting into scans and reports."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def set(self, when: datetime) -> None:
        self.current = when

    def advance(self, **kwargs: float) -> datetime:
        self.current += timedelta(**kwargs)
        return self.current


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """Temporary directory for test isolation."""
    work = tmp_path / "work"
    work.mkdir()
    return work


@pytest.fixture(autouse=True)
def filemon_data_dir(tmp_path: Path):
    """Point FILEMON_DATA_DIR at a temporary directory for every test.

    Also clears the config file cache so each test sees its own config.
    """
    data_dir = tmp_path / ".filemon"
    (data_dir / "projects").mkdir(parents=True, exist_ok=True)
    clear_config_cache()
    with patch.dict(
        os.environ,
        {"FILEMON_DATA_DIR": str(data_dir)},
    ):
        for var in (
            "FILEMON_CONFIG_PATH",
            "FILEMON_HISTORY_DIR",
            "FILEMON_PAUSE_RETRY_SECONDS",
            "FILEMON_LOG_LEVEL",
        ):
            os.environ.pop(var, None)
        yield data_dir
    clear_config_cache()


@pytest.fixture
def docs_root(temp_dir: Path) -> Path:
    """Project root with a "notes" subfolder holding a.txt (mtime T0)."""
    root = temp_dir / "docs"
    write_file(root / "notes" / "a.txt", T0)
    return root


@pytest.fixture
def docs_project(docs_root: Path) -> ProjectConfig:
    """The "Docs" project watching docs_root/notes."""
    return ProjectConfig(name="Docs", root=docs_root, subfolders=("notes",))


@pytest.fixture
def store(temp_dir: Path) -> SummaryStore:
    """Summary store in a temporary history directory."""
    return SummaryStore(temp_dir / "history")


@pytest.fixture
def clock() -> FakeClock:
    """Clock starting one second after T0."""
    return FakeClock(T0 + timedelta(seconds=1))


@pytest.fixture
def make_clock() -> Callable[[datetime], FakeClock]:
    """Factory for clocks starting at a given time."""
    return FakeClock


@pytest.fixture
def t0() -> datetime:
    """Fixed reference time used by scenarios."""
    return T0


@pytest.fixture(name="write_file")
def write_file_fixture() -> Callable[..., Path]:
    """Create a file with a pinned modification time."""
    return write_file


@pytest.fixture(name="set_mtime")
def set_mtime_fixture() -> Callable[[Path, datetime], None]:
    """Pin an existing file's modification time."""
    return set_mtime
