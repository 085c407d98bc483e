from __future__ import annotations

import datetime as dt
from typing import Iterable

from .model import ConflictAnalysis, ReportSection, SummaryStats

STATUS_TITLE = "BRANCH STATUS"
FILES_TITLE = "FILES CHANGED"
STATS_TITLE = "CHANGE STATISTICS"
DIFF_TITLE = "DETAILED CHANGES"
CONFLICTS_TITLE = "MERGE CONFLICT ANALYSIS"
SUMMARY_TITLE = "SUMMARY"

NO_COMMITS_MESSAGE = "No new commits to merge."
DIFF_NOTE = "Note: Below are the actual code changes. Review carefully before merging."
CONFLICTS_FOUND_MESSAGE = "⚠️  POTENTIAL MERGE CONFLICTS DETECTED!"
NO_CONFLICTS_MESSAGE = "✅ No merge conflicts detected."


def commits_title(source_ref: str, target_ref: str) -> str:
    return f"COMMITS TO BE MERGED ({source_ref} -> {target_ref})"


def format_header(
    *,
    generated_on: dt.datetime,
    repository: str,
    source_ref: str,
    target_ref: str,
) -> str:
    title = "Branch Comparison Report"
    lines = [
        title,
        "=" * len(title),
        f"Generated on: {generated_on:%a %b %d %H:%M:%S %Z %Y}",
        f"Repository: {repository}",
        f"Source Branch: {source_ref}",
        f"Target Branch: {target_ref}",
    ]
    return "\n".join(lines) + "\n"


def status_section(source_ref: str, source_commit: str, target_ref: str, target_commit: str) -> ReportSection:
    parts = []
    for ref, commit in ((source_ref, source_commit), (target_ref, target_commit)):
        parts.append(f"Latest commit on {ref}:\n{commit.rstrip()}\n")
    return ReportSection(STATUS_TITLE, "\n".join(parts))


def commits_section(source_ref: str, target_ref: str, commits_ahead: int, range_log: str) -> ReportSection:
    lines = [f"Number of commits ahead: {commits_ahead}", ""]
    if commits_ahead > 0:
        lines.append(range_log.rstrip())
    else:
        lines.append(NO_COMMITS_MESSAGE)
    return ReportSection(commits_title(source_ref, target_ref), "\n".join(lines))


def files_section(name_status: str) -> ReportSection:
    return ReportSection(FILES_TITLE, name_status.rstrip())


def stats_section(diff_stat: str) -> ReportSection:
    return ReportSection(STATS_TITLE, diff_stat.rstrip())


def diff_section(patch: str) -> ReportSection:
    patch = patch.rstrip()
    if not patch:
        return ReportSection(DIFF_TITLE, "")
    return ReportSection(DIFF_TITLE, f"{DIFF_NOTE}\n\n{patch}")


def conflicts_section(analysis: ConflictAnalysis) -> ReportSection:
    if not analysis.has_conflicts:
        return ReportSection(CONFLICTS_TITLE, NO_CONFLICTS_MESSAGE)
    listed = analysis.paths or analysis.markers
    lines = [CONFLICTS_FOUND_MESSAGE, "", "Files that may have conflicts:", *listed]
    return ReportSection(CONFLICTS_TITLE, "\n".join(lines))


def summary_lines(summary: SummaryStats) -> list[str]:
    return [
        f"• Commits to merge: {summary.commits_ahead}",
        f"• Files changed: {summary.files_changed}",
        f"• Lines added: {summary.lines_added}",
        f"• Lines removed: {summary.lines_removed}",
    ]


def summary_section(summary: SummaryStats) -> ReportSection:
    return ReportSection(SUMMARY_TITLE, "\n".join(summary_lines(summary)))


def render_section(section: ReportSection) -> str:
    text = f"=== {section.title} ===\n\n"
    if section.body:
        text += section.body.rstrip("\n") + "\n"
    return text


def render_report(header: str, sections: Iterable[ReportSection]) -> str:
    """Serialize the header and sections; every block ends with a blank line."""
    blocks = [header] + [render_section(section) for section in sections]
    return "\n".join(blocks)
