from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from .config import ReportConfig, load_report_config
from .console import COLOR_MODES, build_console
from .errors import ReportError
from .model import DEFAULT_SOURCE_REF, DEFAULT_TARGET_REF, ComparisonRequest, ReportResult, default_output_path
from .orchestrator import generate_report
from .report import summary_lines


def parse_compare_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="branch-compare",
        description="Write a text report comparing two git branches (commits, files, stats, diff, conflicts).",
    )
    parser.add_argument("source", nargs="?", default=DEFAULT_SOURCE_REF, help="Source branch (default: dev).")
    parser.add_argument("target", nargs="?", default=DEFAULT_TARGET_REF, help="Target branch (default: main).")
    parser.add_argument(
        "output",
        nargs="?",
        default=None,
        help="Output file (default: branch-changes-<YYYYMMDD-HHMMSS>.txt).",
    )
    parser.add_argument("--repo", default=".", help="Path to git repository (default: current directory).")
    parser.add_argument("--config", help="TOML file with remote / fetch_policy / status_date_format.")
    parser.add_argument("--no-fetch", action="store_true", help="Do not fetch remotes before comparing.")
    fetch_mode = parser.add_mutually_exclusive_group()
    fetch_mode.add_argument("--strict-fetch", action="store_true", help="Abort when fetching remotes fails (default).")
    fetch_mode.add_argument(
        "--lenient-fetch",
        action="store_true",
        help="Warn and compare the refs already present when fetching remotes fails.",
    )
    parser.add_argument("--color", choices=COLOR_MODES, default="auto", help="Colorize console output.")
    return parser.parse_args(argv)


def _print_banner(console: Console, request: ComparisonRequest) -> None:
    console.print("[heading]🔍 Branch Comparison Tool[/heading]")
    console.print("[heading]=========================[/heading]")
    console.print(f"Source Branch: [value]{escape(request.source_ref)}[/value]")
    console.print(f"Target Branch: [value]{escape(request.target_ref)}[/value]")
    console.print(f"Output File: [value]{escape(str(request.output_path))}[/value]")
    console.print("")


def _print_result(console: Console, request: ComparisonRequest, result: ReportResult) -> None:
    console.print("[success]✅ Comparison complete![/success]")
    console.print("")
    console.print("[heading]Summary:[/heading]")
    for line in summary_lines(result.summary):
        console.print(line)
    if result.conflicts.has_conflicts:
        console.print("[warning]⚠️  Potential merge conflicts detected; see the report.[/warning]")
    console.print("")
    console.print(f"[progress]📄 Report saved to: {escape(str(result.output_path))}[/progress]")
    console.print("")
    console.print("[heading]Next steps:[/heading]")
    console.print("1. Review the generated report")
    console.print("2. Check for any merge conflicts")
    console.print("3. Test the changes in a staging environment")
    console.print("4. If everything looks good, merge with:")
    source = escape(request.source_ref)
    target = escape(request.target_ref)
    console.print(f"   [value]git checkout {target} && git merge {source}[/value]")


def run_compare(argv: list[str]) -> int:
    args = parse_compare_args(argv)
    console = build_console(args.color)
    err_console = build_console(args.color, stderr=True)

    repo = Path(args.repo).resolve()
    try:
        config = load_report_config(Path(args.config)) if args.config else ReportConfig()
    except ReportError as error:
        err_console.print(f"[error]Error: {escape(str(error))}[/error]")
        return 1
    if args.strict_fetch:
        config = replace(config, fetch_policy="strict")
    elif args.lenient_fetch:
        config = replace(config, fetch_policy="warn")

    output = Path(args.output) if args.output else default_output_path(timestamp_format=config.timestamp_format)
    if not output.is_absolute():
        output = repo / output
    request = ComparisonRequest(source_ref=args.source, target_ref=args.target, output_path=output)

    _print_banner(console, request)
    try:
        result = generate_report(request, repo=repo, config=config, console=console, fetch=not args.no_fetch)
    except ReportError as error:
        err_console.print(f"[error]Error: {escape(str(error))}[/error]")
        return 1

    _print_result(console, request, result)
    return 0


def main() -> None:
    raise SystemExit(run_compare(sys.argv[1:]))
