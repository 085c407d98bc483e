from __future__ import annotations

import re

from .model import ConflictAnalysis, FileChange, NumstatEntry, SummaryStats

CONFLICT_START = "<<<<<<< "
CONFLICT_END = ">>>>>>> "

# "  our    100644 3b18e512dba79e4c8300dd08aeb37f8e728b8dad src/app.py"
MERGE_TREE_ENTRY_RE = re.compile(r"^  (?:base|our|their|result)\s+\d+ [0-9a-f]+ (?P<path>.+)$")


def parse_name_status(output: str) -> list[FileChange]:
    changes: list[FileChange] = []
    for line in output.splitlines():
        if not line.strip():
            continue
        parts = line.split("\t")
        status = parts[0].strip()
        if status[:1] in {"R", "C"} and len(parts) >= 3:
            changes.append(FileChange(status=status, path=parts[2], old_path=parts[1]))
        elif len(parts) >= 2:
            changes.append(FileChange(status=status, path=parts[1]))
    return changes


def parse_numstat(output: str) -> list[NumstatEntry]:
    entries: list[NumstatEntry] = []
    for line in output.splitlines():
        parts = line.split("\t", 2)
        if len(parts) < 3:
            continue
        added, removed, path = parts
        if added == "-" or removed == "-":
            entries.append(NumstatEntry(path=path, added=0, removed=0, binary=True))
            continue
        entries.append(NumstatEntry(path=path, added=int(added), removed=int(removed)))
    return entries


def count_changed_files(changes: list[FileChange]) -> int:
    return len({change.path for change in changes})


def build_summary(commits_ahead: int, changes: list[FileChange], numstat: list[NumstatEntry]) -> SummaryStats:
    return SummaryStats(
        commits_ahead=commits_ahead,
        files_changed=count_changed_files(changes),
        lines_added=sum(entry.added for entry in numstat),
        lines_removed=sum(entry.removed for entry in numstat),
    )


def _marker_text(line: str) -> str | None:
    """Return the conflict marker carried by ``line``, if any.

    Legacy merge-tree output embeds the merged file in a diff, so markers
    usually arrive with a one-character ``+``/``-``/`` `` prefix.
    """
    for candidate in (line, line[1:] if line[:1] in {"+", "-", " "} else None):
        if candidate is None:
            continue
        if candidate.startswith(CONFLICT_START) or candidate.startswith(CONFLICT_END):
            return candidate.rstrip()
    return None


def analyze_merge_tree(output: str) -> ConflictAnalysis:
    paths: set[str] = set()
    markers: set[str] = set()
    has_start = False
    entry_paths: list[str] = []
    in_body = False

    for line in output.splitlines():
        if not in_body:
            match = MERGE_TREE_ENTRY_RE.match(line)
            if match:
                entry_paths.append(match.group("path"))
                continue
        if line and line[0].isalpha():
            # new "changed in both" / "added in remote" / ... block
            entry_paths = []
            in_body = False
            continue
        if line.startswith("@@"):
            in_body = True
            continue

        marker = _marker_text(line)
        if marker is None:
            continue
        markers.add(marker)
        if marker.startswith(CONFLICT_START):
            has_start = True
            paths.update(entry_paths)

    if not has_start:
        return ConflictAnalysis()
    return ConflictAnalysis(paths=tuple(sorted(paths)), markers=tuple(sorted(markers)))
