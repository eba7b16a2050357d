"""Tests for SummaryStore."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from filemon.domain.models import MonitoredFile, ScanRecord, Summary
from filemon.exceptions import CorruptStateError
from filemon.store.summary_store import SUMMARY_FILE_NAME, SummaryStore


@pytest.fixture
def populated(t0) -> Summary:
    """Summary with two scans and one entry of each shape."""
    return Summary(
        project_name="Docs",
        scans=[
            ScanRecord(t0, is_gen=False, checked_file_count=2, changed_file_count=0),
            ScanRecord(
                t0 + timedelta(minutes=1),
                is_gen=True,
                checked_file_count=3,
                changed_file_count=2,
            ),
        ],
        files={
            "notes/a.txt": MonitoredFile(
                "notes",
                "a.txt",
                time_latest_gen=t0 + timedelta(seconds=30),
                gen_count=1,
            ),
            "notes/b.txt": MonitoredFile(
                "notes", "b.txt", time_added=t0 + timedelta(seconds=40)
            ),
            "tools/nav/c.txt": MonitoredFile("tools/nav", "c.txt"),
        },
    )


class TestPaths:
    """Tests for path helpers."""

    def test_summary_path_layout(self, store):
        assert store.summary_path("Docs") == store.history_dir / "Docs" / SUMMARY_FILE_NAME
        assert store.project_dir("Docs") == store.history_dir / "Docs"

    def test_exists(self, store, populated):
        assert store.exists("Docs") is False
        store.persist(populated)
        assert store.exists("Docs") is True


class TestLoadOrCreate:
    """Tests for SummaryStore.load_or_create()."""

    def test_missing_file_gives_empty_summary(self, store):
        summary = store.load_or_create("Docs")

        assert summary == Summary(project_name="Docs")
        assert not store.history_dir.exists()

    def test_round_trip(self, store, populated):
        store.persist(populated)

        loaded = store.load_or_create("Docs")

        assert loaded == populated

    def test_timestamps_stay_timezone_aware(self, store, populated):
        store.persist(populated)

        loaded = store.load_or_create("Docs")

        assert loaded.scans[0].time.tzinfo is not None
        assert loaded.files["notes/b.txt"].time_added.utcoffset() == timedelta(0)

    def test_invalid_json_is_corrupt(self, store):
        path = store.summary_path("Docs")
        path.parent.mkdir(parents=True)
        path.write_text("{not json")

        with pytest.raises(CorruptStateError) as exc_info:
            store.load_or_create("Docs")

        assert exc_info.value.path == path

    def test_empty_file_is_corrupt(self, store):
        path = store.summary_path("Docs")
        path.parent.mkdir(parents=True)
        path.write_text("")

        with pytest.raises(CorruptStateError):
            store.load_or_create("Docs")

    def test_invalid_utf8_is_corrupt(self, store):
        path = store.summary_path("Docs")
        path.parent.mkdir(parents=True)
        path.write_bytes(b"\xff\xfe\x00garbage")

        with pytest.raises(CorruptStateError, match="UTF-8"):
            store.load_or_create("Docs")

    def test_wrong_project_name_is_corrupt(self, store, populated):
        store.persist(populated)
        other = store.summary_path("Other")
        other.parent.mkdir(parents=True)
        other.write_text(store.summary_path("Docs").read_text())

        with pytest.raises(CorruptStateError, match="belongs to project .Docs."):
            store.load_or_create("Other")

    def test_naive_timestamp_is_corrupt(self, store):
        path = store.summary_path("Docs")
        path.parent.mkdir(parents=True)
        path.write_text(
            json.dumps(
                {
                    "project_name": "Docs",
                    "scans": [
                        {
                            "time": "2025-01-15T10:00:00",
                            "is_gen": False,
                            "checked_file_count": 1,
                            "changed_file_count": 0,
                        }
                    ],
                    "files": {},
                }
            )
        )

        with pytest.raises(CorruptStateError):
            store.load_or_create("Docs")

    def test_mismatched_ledger_key_is_corrupt(self, store):
        path = store.summary_path("Docs")
        path.parent.mkdir(parents=True)
        path.write_text(
            json.dumps(
                {
                    "project_name": "Docs",
                    "scans": [],
                    "files": {"notes/a.txt": {"subfolder": "notes", "name": "b.txt"}},
                }
            )
        )

        with pytest.raises(CorruptStateError, match="does not match"):
            store.load_or_create("Docs")

    def test_out_of_order_scans_are_corrupt(self, store):
        path = store.summary_path("Docs")
        path.parent.mkdir(parents=True)
        scans = [
            {
                "time": ts,
                "is_gen": False,
                "checked_file_count": 0,
                "changed_file_count": 0,
            }
            for ts in ("2025-01-15T10:05:00Z", "2025-01-15T10:00:00Z")
        ]
        path.write_text(
            json.dumps({"project_name": "Docs", "scans": scans, "files": {}})
        )

        with pytest.raises(CorruptStateError, match="out of order"):
            store.load_or_create("Docs")

    def test_unknown_fields_are_corrupt(self, store):
        path = store.summary_path("Docs")
        path.parent.mkdir(parents=True)
        path.write_text(json.dumps({"project_name": "Docs", "extra": 1}))

        with pytest.raises(CorruptStateError):
            store.load_or_create("Docs")


class TestPersist:
    """Tests for SummaryStore.persist()."""

    def test_creates_project_directory(self, store, populated):
        path = store.persist(populated)

        assert path == store.summary_path("Docs")
        assert path.is_file()

    def test_written_json_shape(self, store, populated):
        path = store.persist(populated)

        data = json.loads(path.read_text())

        assert data["project_name"] == "Docs"
        assert len(data["scans"]) == 2
        assert data["scans"][1]["is_gen"] is True
        assert list(data["files"]) == ["notes/a.txt", "notes/b.txt", "tools/nav/c.txt"]
        assert data["files"]["notes/a.txt"]["gen_count"] == 1
        assert data["files"]["tools/nav/c.txt"]["time_added"] is None

    def test_times_written_as_iso_8601(self, store, populated):
        path = store.persist(populated)

        data = json.loads(path.read_text())
        written = datetime.fromisoformat(data["scans"][0]["time"].replace("Z", "+00:00"))

        assert written == populated.scans[0].time
        assert written.tzinfo is not None

    def test_leaves_no_temp_files(self, store, populated):
        store.persist(populated)
        store.persist(populated)

        assert [p.name for p in store.project_dir("Docs").iterdir()] == [
            SUMMARY_FILE_NAME
        ]

    def test_replaces_previous_version(self, store, populated, t0):
        store.persist(populated)
        populated.scans.append(
            ScanRecord(
                t0 + timedelta(minutes=2),
                is_gen=False,
                checked_file_count=3,
                changed_file_count=0,
            )
        )

        store.persist(populated)

        assert len(store.load_or_create("Docs").scans) == 3

    def test_non_utc_offsets_compare_by_instant(self, store):
        plus_two = timezone(timedelta(hours=2))
        summary = Summary(
            project_name="Docs",
            scans=[ScanRecord(datetime(2025, 1, 15, 12, 0, tzinfo=plus_two), False, 0, 0)],
        )
        store.persist(summary)

        loaded = store.load_or_create("Docs")

        assert loaded.scans[0].time == datetime(2025, 1, 15, 10, 0, tzinfo=timezone.utc)
