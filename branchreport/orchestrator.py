from __future__ import annotations

import datetime as dt
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from . import git
from .config import ReportConfig
from .errors import BranchNotFound, ExternalCommandFailed, NotARepository
from .model import ComparisonRequest, ReportResult
from .parsing import analyze_merge_tree, build_summary, parse_name_status, parse_numstat
from .report import (
    commits_section,
    conflicts_section,
    diff_section,
    files_section,
    format_header,
    render_report,
    stats_section,
    status_section,
    summary_section,
)


def resolve_refs(repo: Path, request: ComparisonRequest, remote: str) -> tuple[str, str]:
    resolved: list[str] = []
    for ref in (request.source_ref, request.target_ref):
        name = git.resolve_branch(repo, ref, remote)
        if name is None:
            raise BranchNotFound(ref)
        resolved.append(name)
    return resolved[0], resolved[1]


def sync_remotes(repo: Path, config: ReportConfig, console: Console) -> None:
    if not git.list_remotes(repo):
        console.print("[info]No remotes configured; skipping fetch.[/info]")
        return
    console.print("[progress]📡 Fetching latest changes...[/progress]")
    try:
        git.fetch_all(repo)
    except ExternalCommandFailed as error:
        if config.fetch_policy == "strict":
            raise
        console.print(f"[warning]Warning:[/warning] fetch failed, comparing local refs as they are ({escape(str(error))})")


def assemble_report(
    repo: Path,
    request: ComparisonRequest,
    source: str,
    target: str,
    config: ReportConfig,
) -> ReportResult:
    status = status_section(
        request.source_ref,
        git.latest_commit(repo, source, config.status_date_format),
        request.target_ref,
        git.latest_commit(repo, target, config.status_date_format),
    )

    commits_ahead = git.count_commits(repo, target, source)
    range_log = git.range_log(repo, target, source) if commits_ahead > 0 else ""
    commits = commits_section(request.source_ref, request.target_ref, commits_ahead, range_log)

    name_status = git.diff_name_status(repo, target, source)
    files = files_section(name_status)
    stats = stats_section(git.diff_stat(repo, target, source))
    patch = diff_section(git.diff_patch(repo, target, source, config.exclude_patterns))

    base = git.merge_base(repo, target, source)
    analysis = analyze_merge_tree(git.merge_tree(repo, base, target, source))
    conflicts = conflicts_section(analysis)

    numstat = parse_numstat(git.diff_numstat(repo, target, source))
    summary = build_summary(commits_ahead, parse_name_status(name_status), numstat)

    return ReportResult(
        output_path=request.output_path,
        summary=summary,
        conflicts=analysis,
        sections=(status, commits, files, stats, patch, conflicts, summary_section(summary)),
    )


def generate_report(
    request: ComparisonRequest,
    *,
    repo: Path = Path("."),
    config: ReportConfig | None = None,
    console: Console | None = None,
    fetch: bool = True,
    now: dt.datetime | None = None,
) -> ReportResult:
    """Run the git queries for ``request`` and write the report file.

    Validation happens before anything touches the filesystem; the report is
    written in one piece after every section has been produced, so a failing
    git call never leaves a partial report behind.
    """
    config = config or ReportConfig()
    console = console or Console(quiet=True)
    repo = repo.resolve()

    if not git.is_work_tree(repo):
        raise NotARepository(repo)
    source, target = resolve_refs(repo, request, config.remote)

    if fetch:
        sync_remotes(repo, config, console)

    output_path = request.output_path
    output_path.parent.mkdir(parents=True, exist_ok=True)

    console.print("[progress]📊 Generating comparison report...[/progress]")
    header = format_header(
        generated_on=(now or dt.datetime.now()).astimezone(),
        repository=git.toplevel(repo).name,
        source_ref=request.source_ref,
        target_ref=request.target_ref,
    )
    result = assemble_report(repo, request, source, target, config)

    output_path.write_text(render_report(header, result.sections), encoding="utf-8")
    return result
