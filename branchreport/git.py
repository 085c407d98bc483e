from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Iterable

from .errors import ExternalCommandFailed

STATUS_FORMAT = "Commit: %H%nAuthor: %an <%ae>%nDate: %ad%nMessage: %s%n"
RANGE_LOG_FORMAT = "[%h] %s (%an, %ad)"


def _run(repo: Path, args: list[str]) -> subprocess.CompletedProcess[str]:
    command = ["git", "-C", str(repo), *args]
    try:
        return subprocess.run(
            command,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except FileNotFoundError as error:
        raise ExternalCommandFailed(["git", *args], 127, str(error)) from error


def run_git(repo: Path, args: list[str]) -> str:
    process = _run(repo, args)
    if process.returncode != 0:
        message = process.stderr.strip() or process.stdout.strip()
        raise ExternalCommandFailed(["git", *args], process.returncode, message)
    return process.stdout


def git_succeeds(repo: Path, args: list[str]) -> bool:
    """Run a git query whose exit status is the answer."""
    if not repo.is_dir():
        return False
    return _run(repo, args).returncode == 0


def commit_range(target_ref: str, source_ref: str) -> str:
    return f"{target_ref}..{source_ref}"


def is_work_tree(repo: Path) -> bool:
    if not repo.is_dir():
        return False
    process = _run(repo, ["rev-parse", "--is-inside-work-tree"])
    return process.returncode == 0 and process.stdout.strip() == "true"


def toplevel(repo: Path) -> Path:
    return Path(run_git(repo, ["rev-parse", "--show-toplevel"]).strip())


def ref_exists(repo: Path, full_ref: str) -> bool:
    return git_succeeds(repo, ["show-ref", "--verify", "--quiet", full_ref])


def resolve_branch(repo: Path, ref: str, remote: str) -> str | None:
    """Return the fully qualified ref later git calls should use, or None.

    Local branches win over ``<remote>/<ref>``; a ref that is already a
    qualified remote-tracking name (``origin/dev``) is accepted too. The
    qualified name keeps a same-named tag from shadowing the branch.
    """
    for candidate in (f"refs/heads/{ref}", f"refs/remotes/{remote}/{ref}", f"refs/remotes/{ref}"):
        if ref_exists(repo, candidate):
            return candidate
    return None


def list_remotes(repo: Path) -> list[str]:
    return [line.strip() for line in run_git(repo, ["remote"]).splitlines() if line.strip()]


def fetch_all(repo: Path) -> str:
    return run_git(repo, ["fetch", "--all"])


def latest_commit(repo: Path, ref: str, date_format: str) -> str:
    return run_git(
        repo,
        ["log", "-1", "--no-color", f"--pretty=format:{STATUS_FORMAT}", f"--date=format:{date_format}", ref, "--"],
    )


def count_commits(repo: Path, target_ref: str, source_ref: str) -> int:
    return int(run_git(repo, ["rev-list", "--count", commit_range(target_ref, source_ref), "--"]).strip() or "0")


def range_log(repo: Path, target_ref: str, source_ref: str) -> str:
    return run_git(
        repo,
        ["log", "--no-color", f"--pretty=format:{RANGE_LOG_FORMAT}", "--date=short", commit_range(target_ref, source_ref), "--"],
    )


def diff_name_status(repo: Path, target_ref: str, source_ref: str) -> str:
    return run_git(repo, ["diff", "--no-color", "--name-status", commit_range(target_ref, source_ref), "--"])


def diff_numstat(repo: Path, target_ref: str, source_ref: str) -> str:
    return run_git(repo, ["diff", "--no-color", "--numstat", commit_range(target_ref, source_ref), "--"])


def diff_stat(repo: Path, target_ref: str, source_ref: str) -> str:
    return run_git(repo, ["diff", "--no-color", "--stat", commit_range(target_ref, source_ref), "--"])


def exclude_pathspecs(patterns: Iterable[str]) -> list[str]:
    return [".", *(f":(exclude){pattern}" for pattern in patterns)]


def diff_patch(repo: Path, target_ref: str, source_ref: str, exclude_patterns: Iterable[str]) -> str:
    return run_git(
        repo,
        ["diff", "--no-color", commit_range(target_ref, source_ref), "--", *exclude_pathspecs(exclude_patterns)],
    )


def merge_base(repo: Path, target_ref: str, source_ref: str) -> str:
    return run_git(repo, ["merge-base", target_ref, source_ref]).strip()


def merge_tree(repo: Path, base: str, target_ref: str, source_ref: str) -> str:
    # three-argument form: legacy trivial merge, prints conflicts inline
    return run_git(repo, ["merge-tree", base, target_ref, source_ref])
