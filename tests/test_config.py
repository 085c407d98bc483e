import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from branchreport.config import DEFAULT_EXCLUDE_PATTERNS, ReportConfig, load_report_config  # noqa: E402
from branchreport.console import build_console  # noqa: E402
from branchreport.errors import ConfigError  # noqa: E402


class TestReportConfig(unittest.TestCase):
    def test_defaults(self):
        config = ReportConfig()
        self.assertEqual(config.remote, "origin")
        self.assertEqual(config.fetch_policy, "strict")
        self.assertEqual(
            config.exclude_patterns,
            ("package-lock.json", "yarn.lock", "*.log", "node_modules", ".env*"),
        )

    def test_load_reads_known_keys_and_keeps_exclusions(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "report.toml"
            path.write_text(
                "\n".join(
                    [
                        'remote = "upstream"',
                        'fetch_policy = "STRICT"',
                        'status_date_format = "%Y-%m-%d"',
                        'exclude_patterns = ["src"]',
                    ]
                )
                + "\n",
                encoding="utf-8",
            )
            config = load_report_config(path)
        self.assertEqual(config.remote, "upstream")
        self.assertEqual(config.fetch_policy, "strict")
        self.assertEqual(config.status_date_format, "%Y-%m-%d")
        self.assertEqual(config.exclude_patterns, DEFAULT_EXCLUDE_PATTERNS)

    def test_load_rejects_unknown_fetch_policy(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "report.toml"
            path.write_text('fetch_policy = "sometimes"\n', encoding="utf-8")
            with self.assertRaises(ConfigError):
                load_report_config(path)

    def test_load_reports_missing_and_invalid_files(self):
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(ConfigError):
                load_report_config(Path(tmp) / "missing.toml")
            broken = Path(tmp) / "broken.toml"
            broken.write_text("remote = \n", encoding="utf-8")
            with self.assertRaises(ConfigError):
                load_report_config(broken)


class TestBuildConsole(unittest.TestCase):
    def test_color_modes(self):
        self.assertTrue(build_console("always").is_terminal)
        self.assertTrue(build_console("never").no_color)
        self.assertTrue(build_console(stderr=True).stderr)

    def test_unknown_color_mode(self):
        with self.assertRaises(ValueError):
            build_console("sometimes")


if __name__ == "__main__":
    unittest.main()
