import datetime as dt
import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from branchreport.model import ConflictAnalysis, ReportSection, SummaryStats  # noqa: E402
from branchreport.report import (  # noqa: E402
    NO_COMMITS_MESSAGE,
    NO_CONFLICTS_MESSAGE,
    commits_section,
    conflicts_section,
    diff_section,
    format_header,
    render_report,
    summary_section,
)


class TestReportSections(unittest.TestCase):
    def test_commits_section_without_commits(self):
        section = commits_section("dev", "main", 0, "")
        self.assertEqual(section.title, "COMMITS TO BE MERGED (dev -> main)")
        self.assertEqual(section.body, f"Number of commits ahead: 0\n\n{NO_COMMITS_MESSAGE}")

    def test_commits_section_lists_range_log(self):
        log = "[abc1234] Add feature (UT, 2026-02-23)\n[def5678] Fix bug (UT, 2026-02-22)"
        section = commits_section("dev", "main", 2, log)
        self.assertIn("Number of commits ahead: 2", section.body)
        self.assertTrue(section.body.endswith("[def5678] Fix bug (UT, 2026-02-22)"))
        self.assertNotIn(NO_COMMITS_MESSAGE, section.body)

    def test_diff_section_is_empty_without_changes(self):
        self.assertEqual(diff_section("").body, "")
        body = diff_section("diff --git a/x b/x\n").body
        self.assertTrue(body.startswith("Note: Below are the actual code changes."))
        self.assertTrue(body.endswith("diff --git a/x b/x"))

    def test_conflicts_section(self):
        self.assertEqual(conflicts_section(ConflictAnalysis()).body, NO_CONFLICTS_MESSAGE)

        body = conflicts_section(
            ConflictAnalysis(paths=("a.txt", "b.txt"), markers=("<<<<<<< .our",))
        ).body
        lines = body.splitlines()
        self.assertEqual(lines[0], "⚠️  POTENTIAL MERGE CONFLICTS DETECTED!")
        self.assertEqual(lines[-3:], ["Files that may have conflicts:", "a.txt", "b.txt"])

    def test_conflicts_section_falls_back_to_markers(self):
        body = conflicts_section(ConflictAnalysis(markers=("<<<<<<< ours", ">>>>>>> theirs"))).body
        self.assertTrue(body.endswith("<<<<<<< ours\n>>>>>>> theirs"))

    def test_summary_section_has_four_bullets(self):
        section = summary_section(SummaryStats(commits_ahead=3, files_changed=2, lines_added=10, lines_removed=4))
        self.assertEqual(
            section.body.splitlines(),
            [
                "• Commits to merge: 3",
                "• Files changed: 2",
                "• Lines added: 10",
                "• Lines removed: 4",
            ],
        )


class TestRenderReport(unittest.TestCase):
    def test_header_and_section_layout(self):
        header = format_header(
            generated_on=dt.datetime(2026, 2, 23, 9, 30, 0, tzinfo=dt.timezone.utc),
            repository="demo",
            source_ref="dev",
            target_ref="main",
        )
        text = render_report(
            header,
            [
                ReportSection("BRANCH STATUS", "status body"),
                ReportSection("FILES CHANGED", ""),
                ReportSection("SUMMARY", "• Commits to merge: 0"),
            ],
        )
        lines = text.splitlines()
        self.assertEqual(lines[0], "Branch Comparison Report")
        self.assertEqual(lines[1], "========================")
        self.assertEqual(lines[2], "Generated on: Mon Feb 23 09:30:00 UTC 2026")
        self.assertEqual(lines[3:6], ["Repository: demo", "Source Branch: dev", "Target Branch: main"])
        self.assertEqual(lines[6], "")
        self.assertEqual(lines[7:10], ["=== BRANCH STATUS ===", "", "status body"])
        self.assertIn("=== FILES CHANGED ===\n\n\n=== SUMMARY ===", text)
        self.assertTrue(text.endswith("• Commits to merge: 0\n"))


if __name__ == "__main__":
    unittest.main()
