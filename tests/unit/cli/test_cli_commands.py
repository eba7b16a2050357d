"""Unit tests for the filemon CLI commands."""

import json
import logging
from datetime import timedelta
from pathlib import Path

import pytest
from click.testing import CliRunner

from filemon.cli import main
from filemon.cli.exit_codes import ExitCode
from filemon.core.datetime_utils import utc_now


@pytest.fixture(autouse=True)
def reset_root_logger():
    """Save and restore root logger state between tests."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers[:] = original_handlers
    root.setLevel(original_level)


@pytest.fixture
def runner():
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture
def projects_dir(filemon_data_dir: Path) -> Path:
    return filemon_data_dir / "projects"


@pytest.fixture
def history_dir(filemon_data_dir: Path) -> Path:
    return filemon_data_dir / "history"


@pytest.fixture
def docs_definition(projects_dir: Path, docs_root: Path) -> Path:
    """Project definition for "Docs" watching docs_root/notes."""
    path = projects_dir / "Docs.yaml"
    path.write_text(f"root: {docs_root}\nsubfolders:\n  - notes\nminutes: 0.5\n")
    return path


def invoke(runner: CliRunner, *args: str):
    """Run the CLI quietly so stdout holds only command output."""
    return runner.invoke(main, ["--log-level", "error", *args])


class TestMainGroup:
    """Tests for the top-level group."""

    def test_help_lists_commands(self, runner):
        result = runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        for command in ("scan", "run", "activity", "status", "pause", "resume", "gen"):
            assert command in result.output

    def test_invalid_config_exits_with_config_error(self, runner, filemon_data_dir):
        (filemon_data_dir / "config.toml").write_text("[monitor]\nbogus = 1\n")

        result = runner.invoke(main, ["status"])

        assert result.exit_code == ExitCode.CONFIG_ERROR
        assert "Unknown keys in [monitor]" in result.output

    def test_non_table_section_exits_with_config_error(self, runner, filemon_data_dir):
        (filemon_data_dir / "config.toml").write_text("logging = 5\n")

        result = runner.invoke(main, ["status"])

        assert result.exit_code == ExitCode.CONFIG_ERROR
        assert "[logging] must be a table" in result.output

    def test_history_dir_override(self, runner, docs_definition, temp_dir):
        result = invoke(
            runner, "--history-dir", str(temp_dir / "alt"), "scan", "Docs"
        )

        assert result.exit_code == 0
        assert (temp_dir / "alt" / "Docs" / "summary.json").is_file()


class TestScanCommand:
    """Tests for `filemon scan`."""

    def test_bootstrap_scan(self, runner, docs_definition, history_dir):
        result = invoke(runner, "scan", "Docs")

        assert result.exit_code == 0, result.output
        assert "Docs: bootstrap scan checked 1 file(s), 0 changed" in result.output
        assert (history_dir / "Docs" / "summary.json").is_file()

    def test_edit_detected_on_second_scan(
        self, runner, docs_definition, docs_root, set_mtime
    ):
        invoke(runner, "scan", "Docs")
        set_mtime(docs_root / "notes" / "a.txt", utc_now() + timedelta(hours=1))

        result = invoke(runner, "scan", "Docs")

        assert result.exit_code == 0
        assert "Docs: scan checked 1 file(s), 1 changed" in result.output

    def test_gen_json_output(self, runner, docs_definition, history_dir):
        invoke(runner, "scan", "Docs")

        result = invoke(runner, "scan", "Docs", "--gen", "--json")

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["status"] == "completed"
        assert data["project"] == "Docs"
        assert data["is_gen"] is True
        assert data["bootstrap"] is False
        assert data["checked_file_count"] == 1
        assert data["changed_file_count"] == 0
        assert data["summary_path"] == str(history_dir / "Docs" / "summary.json")
        assert "generation pass" in data["message"]

    def test_unknown_project(self, runner):
        result = invoke(runner, "scan", "Nope")

        assert result.exit_code == ExitCode.PROJECT_NOT_FOUND
        assert "Project 'Nope' not found" in result.output

    def test_invalid_project_definition(self, runner, projects_dir):
        (projects_dir / "Bad.yaml").write_text("subfolders: [a]\n")

        result = invoke(runner, "scan", "Bad")

        assert result.exit_code == ExitCode.CONFIG_ERROR

    def test_missing_root(self, runner, projects_dir, temp_dir):
        (projects_dir / "Gone.yaml").write_text(
            f"root: {temp_dir / 'gone'}\nsubfolders: [notes]\n"
        )

        result = invoke(runner, "scan", "Gone", "--json")

        assert result.exit_code == ExitCode.SCAN_IO_ERROR
        assert "SCAN_IO_ERROR" in result.output

    def test_corrupt_summary(self, runner, docs_definition, history_dir):
        path = history_dir / "Docs" / "summary.json"
        path.parent.mkdir(parents=True)
        path.write_text("{broken")

        result = invoke(runner, "scan", "Docs")

        assert result.exit_code == ExitCode.CORRUPT_STATE
        assert "Corrupt summary" in result.output
        assert path.read_text() == "{broken"

    def test_unreadable_summary_is_operation_failure(
        self, runner, docs_definition, history_dir
    ):
        (history_dir / "Docs" / "summary.json").mkdir(parents=True)

        result = invoke(runner, "scan", "Docs")

        assert result.exit_code == ExitCode.OPERATION_FAILED
        assert "Cannot read or write summary" in result.output


class TestRunCommand:
    """Tests for `filemon run`."""

    def test_once_scans_all_projects(
        self, runner, docs_definition, projects_dir, temp_dir, write_file, t0, history_dir
    ):
        wiki_root = temp_dir / "wiki"
        write_file(wiki_root / "pages" / "start.txt", t0)
        (projects_dir / "Wiki.yaml").write_text(
            f"root: {wiki_root}\nsubfolders: [pages]\n"
        )

        result = invoke(runner, "run", "--once")

        assert result.exit_code == 0, result.output
        assert (history_dir / "Docs" / "summary.json").is_file()
        assert (history_dir / "Wiki" / "summary.json").is_file()

    def test_once_named_project(self, runner, docs_definition, projects_dir, history_dir):
        (projects_dir / "Other.yaml").write_text("root: /nowhere\nsubfolders: [x]\n")

        result = invoke(runner, "run", "Docs", "--once")

        assert result.exit_code == 0
        assert not (history_dir / "Other").exists()

    def test_no_projects(self, runner):
        result = invoke(runner, "run", "--once")

        assert result.exit_code == ExitCode.PROJECT_NOT_FOUND
        assert "No projects configured" in result.output

    def test_failed_project_sets_exit_code(self, runner, projects_dir, temp_dir):
        (projects_dir / "Gone.yaml").write_text(
            f"root: {temp_dir / 'gone'}\nsubfolders: [notes]\n"
        )

        result = invoke(runner, "run", "--once")

        assert result.exit_code == ExitCode.OPERATION_FAILED
        assert "Monitoring stopped on error for: Gone" in result.output

    def test_corrupt_project_sets_exit_code(
        self, runner, docs_definition, history_dir
    ):
        path = history_dir / "Docs" / "summary.json"
        path.parent.mkdir(parents=True)
        path.write_text("[]")

        result = invoke(runner, "run", "--once")

        assert result.exit_code == ExitCode.CORRUPT_STATE


class TestActivityCommand:
    """Tests for `filemon activity`."""

    def test_no_activity(self, runner, docs_definition):
        invoke(runner, "scan", "Docs")

        result = invoke(runner, "activity", "Docs")

        assert result.exit_code == 0
        assert "No activity in Docs within 120m." in result.output

    def test_lists_recent_edits(self, runner, docs_definition, docs_root, set_mtime):
        invoke(runner, "scan", "Docs")
        set_mtime(docs_root / "notes" / "a.txt", utc_now() + timedelta(minutes=1))
        invoke(runner, "scan", "Docs")

        result = invoke(runner, "activity", "Docs", "-w", "2h")

        assert result.exit_code == 0
        assert "edited" in result.output
        assert "notes/a.txt" in result.output

    def test_json_output(self, runner, docs_definition, docs_root, write_file):
        invoke(runner, "scan", "Docs")
        write_file(docs_root / "notes" / "b.txt", utc_now() + timedelta(minutes=1))
        invoke(runner, "scan", "Docs")

        result = invoke(runner, "activity", "Docs", "--window", "30", "--json")

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["project"] == "Docs"
        assert data["window_minutes"] == 30.0
        assert [f["key"] for f in data["files"]] == ["notes/b.txt"]
        assert data["files"][0]["label"] == "added"

    def test_invalid_window(self, runner, docs_definition):
        result = invoke(runner, "activity", "Docs", "--window", "soon")

        assert result.exit_code == 2
        assert "Invalid duration format" in result.output

    def test_corrupt_summary(self, runner, docs_definition, history_dir):
        path = history_dir / "Docs" / "summary.json"
        path.parent.mkdir(parents=True)
        path.write_text("nope")

        result = invoke(runner, "activity", "Docs")

        assert result.exit_code == ExitCode.CORRUPT_STATE


class TestStatusCommand:
    """Tests for `filemon status`."""

    def test_no_projects(self, runner):
        result = invoke(runner, "status")

        assert result.exit_code == 0
        assert "No projects configured." in result.output

    def test_never_scanned(self, runner, docs_definition):
        result = invoke(runner, "status")

        assert result.exit_code == 0
        assert "Docs" in result.output
        assert "last scan: never" in result.output

    def test_json_after_scan_with_markers(self, runner, docs_definition, docs_root):
        invoke(runner, "scan", "Docs")
        invoke(runner, "pause", "Docs")
        invoke(runner, "gen", "Docs")

        result = invoke(runner, "status", "--json")

        assert result.exit_code == 0
        (row,) = json.loads(result.stdout)["projects"]
        assert row["project"] == "Docs"
        assert row["root"] == str(docs_root)
        assert row["scans"] == 1
        assert row["files"] == 1
        assert row["last_checked"] == 1
        assert row["last_changed"] == 0
        assert row["paused"] is True
        assert row["gen_requested"] is True

    def test_text_shows_flags(self, runner, docs_definition):
        invoke(runner, "scan", "Docs")
        invoke(runner, "pause", "Docs")

        result = invoke(runner, "status", "Docs")

        assert "Docs [paused]" in result.output
        assert "(checked 1, changed 0)" in result.output


class TestMarkerCommands:
    """Tests for `filemon pause`, `resume` and `gen`."""

    def test_pause_and_resume(self, runner, docs_definition, history_dir):
        marker = history_dir / "Docs" / "pause_marker.txt"

        result = invoke(runner, "pause", "Docs")
        assert result.exit_code == 0
        assert "Docs: paused" in result.output
        assert marker.is_file()

        result = invoke(runner, "resume", "Docs")
        assert result.exit_code == 0
        assert "Docs: resumed" in result.output
        assert not marker.exists()

    def test_gen_and_cancel(self, runner, docs_definition, history_dir):
        marker = history_dir / "Docs" / "gen_marker.txt"

        result = invoke(runner, "gen", "Docs")
        assert "next scan will be a generation pass" in result.output
        assert marker.is_file()

        result = invoke(runner, "gen", "Docs", "--cancel")
        assert "generation pass request withdrawn" in result.output
        assert not marker.exists()

    def test_unknown_project(self, runner):
        result = invoke(runner, "pause", "Nope")

        assert result.exit_code == ExitCode.PROJECT_NOT_FOUND

    def test_run_honours_gen_marker(
        self, runner, docs_definition, docs_root, set_mtime, history_dir
    ):
        invoke(runner, "scan", "Docs")
        invoke(runner, "gen", "Docs")
        set_mtime(docs_root / "notes" / "a.txt", utc_now() + timedelta(hours=1))

        result = invoke(runner, "run", "--once")

        assert result.exit_code == 0
        summary = json.loads((history_dir / "Docs" / "summary.json").read_text())
        assert summary["scans"][-1]["is_gen"] is True
        assert summary["files"]["notes/a.txt"]["gen_count"] == 1
        assert not (history_dir / "Docs" / "gen_marker.txt").exists()
