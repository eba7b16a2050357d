"""Pydantic schemas for the persisted summary file.

These models validate summary.json when it is read back, so a damaged or
hand-edited file is rejected instead of silently corrupting the ledger.

Structure:
    {
        "project_name": "Docs",
        "scans": [
            {"time": "...", "is_gen": false,
             "checked_file_count": 12, "changed_file_count": 1}
        ],
        "files": {
            "notes/a.txt": {"subfolder": "notes", "name": "a.txt",
                            "time_added": null, "time_latest_edit": "...",
                            "time_latest_gen": null,
                            "gen_count": 0, "edit_count": 1}
        }
    }
"""

from __future__ import annotations

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, model_validator

from filemon.domain.models import MonitoredFile, ScanRecord, Summary, make_key


class ScanRecordSchema(BaseModel):
    """One entry of the scan history."""

    model_config = ConfigDict(extra="forbid")

    time: AwareDatetime
    is_gen: bool
    checked_file_count: int = Field(ge=0)
    changed_file_count: int = Field(ge=0)


class MonitoredFileSchema(BaseModel):
    """One ledger entry."""

    model_config = ConfigDict(extra="forbid")

    subfolder: str
    name: str = Field(min_length=1)
    time_added: AwareDatetime | None = None
    time_latest_edit: AwareDatetime | None = None
    time_latest_gen: AwareDatetime | None = None
    gen_count: int = Field(default=0, ge=0)
    edit_count: int = Field(default=0, ge=0)


class SummarySchema(BaseModel):
    """Root schema for summary.json."""

    model_config = ConfigDict(extra="forbid")

    project_name: str = Field(min_length=1)
    scans: list[ScanRecordSchema] = Field(default_factory=list)
    files: dict[str, MonitoredFileSchema] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_consistency(self) -> SummarySchema:
        for key, entry in self.files.items():
            expected = make_key(entry.subfolder, entry.name)
            if key != expected:
                raise ValueError(
                    f"ledger key '{key}' does not match entry '{expected}'"
                )
        for earlier, later in zip(self.scans, self.scans[1:]):
            if later.time < earlier.time:
                raise ValueError(
                    f"scan history out of order at {later.time.isoformat()}"
                )
        return self


def summary_to_schema(summary: Summary) -> SummarySchema:
    """Build the serializable form of a summary, ledger sorted by key."""
    return SummarySchema(
        project_name=summary.project_name,
        scans=[
            ScanRecordSchema(
                time=scan.time,
                is_gen=scan.is_gen,
                checked_file_count=scan.checked_file_count,
                changed_file_count=scan.changed_file_count,
            )
            for scan in summary.scans
        ],
        files={
            key: MonitoredFileSchema(
                subfolder=entry.subfolder,
                name=entry.name,
                time_added=entry.time_added,
                time_latest_edit=entry.time_latest_edit,
                time_latest_gen=entry.time_latest_gen,
                gen_count=entry.gen_count,
                edit_count=entry.edit_count,
            )
            for key, entry in sorted(summary.files.items())
        },
    )


def schema_to_summary(schema: SummarySchema) -> Summary:
    """Convert a validated schema back into the domain model."""
    return Summary(
        project_name=schema.project_name,
        scans=[
            ScanRecord(
                time=scan.time,
                is_gen=scan.is_gen,
                checked_file_count=scan.checked_file_count,
                changed_file_count=scan.changed_file_count,
            )
            for scan in schema.scans
        ],
        files={
            key: MonitoredFile(
                subfolder=entry.subfolder,
                name=entry.name,
                time_added=entry.time_added,
                time_latest_edit=entry.time_latest_edit,
                time_latest_gen=entry.time_latest_gen,
                gen_count=entry.gen_count,
                edit_count=entry.edit_count,
            )
            for key, entry in schema.files.items()
        },
    )
