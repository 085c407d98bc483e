from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_SOURCE_REF = "dev"
DEFAULT_TARGET_REF = "main"
DEFAULT_TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S"


def default_output_path(now: dt.datetime | None = None, timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT) -> Path:
    stamp = (now or dt.datetime.now()).strftime(timestamp_format)
    return Path(f"branch-changes-{stamp}.txt")


@dataclass(frozen=True)
class ComparisonRequest:
    source_ref: str = DEFAULT_SOURCE_REF
    target_ref: str = DEFAULT_TARGET_REF
    output_path: Path = field(default_factory=default_output_path)


@dataclass(frozen=True)
class ReportSection:
    title: str
    body: str


@dataclass(frozen=True)
class SummaryStats:
    commits_ahead: int = 0
    files_changed: int = 0
    lines_added: int = 0
    lines_removed: int = 0


@dataclass(frozen=True)
class FileChange:
    status: str
    path: str
    old_path: str | None = None


@dataclass(frozen=True)
class NumstatEntry:
    path: str
    added: int
    removed: int
    binary: bool = False


@dataclass(frozen=True)
class ConflictAnalysis:
    paths: tuple[str, ...] = ()
    markers: tuple[str, ...] = ()

    @property
    def has_conflicts(self) -> bool:
        return bool(self.markers)


@dataclass(frozen=True)
class ReportResult:
    output_path: Path
    summary: SummaryStats
    conflicts: ConflictAnalysis
    sections: tuple[ReportSection, ...]
