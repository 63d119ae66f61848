"""
Tests for pattern discovery and the markdown summary.
"""

from redoscope.discovery import discover_patterns, extract_flags, read_pattern
from redoscope.models import DiagnosticReport, ReportDetails
from redoscope.summary import SUMMARY_HEADING, render_summary, write_summary


class TestExtractFlags:

    def test_no_marker(self):
        assert extract_flags("^abc$") == ("", "^abc$")

    def test_marker_is_stripped(self):
        assert extract_flags("(?im)^abc$") == ("im", "^abc$")

    def test_marker_must_be_at_start(self):
        assert extract_flags("a(?i)b") == ("", "a(?i)b")

    def test_unknown_letters_are_not_flags(self):
        assert extract_flags("(?x)abc") == ("", "(?x)abc")

    def test_group_syntax_is_not_a_marker(self):
        assert extract_flags("(?:ab)+") == ("", "(?:ab)+")


class TestDiscovery:

    def test_reads_matching_files(self, tmp_path):
        (tmp_path / "nested").mkdir()
        (tmp_path / "a.regex").write_text("(?i)^(a|a)*$\n", encoding="utf-8")
        (tmp_path / "nested" / "b.regex").write_text("^foo$", encoding="utf-8")
        (tmp_path / "ignored.txt").write_text("bar", encoding="utf-8")

        patterns = list(discover_patterns("**/*.regex", root=tmp_path))

        assert [(p.label, p.source, p.flags) for p in patterns] == [
            ("a.regex", "^(a|a)*$", "i"),
            ("b.regex", "^foo$", ""),
        ]

    def test_no_matches(self, tmp_path):
        assert list(discover_patterns("*.regex", root=tmp_path)) == []

    def test_only_one_trailing_newline_is_dropped(self, tmp_path):
        path = tmp_path / "p.regex"
        path.write_text("a \n\n", encoding="utf-8")
        assert read_pattern(path).source == "a \n"

    def test_only_one_crlf_is_dropped(self, tmp_path):
        path = tmp_path / "p.regex"
        path.write_bytes("a\r\r\n".encode("utf-8"))
        assert read_pattern(path).source == "a\r"

    def test_crlf_line_ending(self, tmp_path):
        path = tmp_path / "p.regex"
        path.write_bytes(b"^foo$\r\n")
        assert read_pattern(path).source == "^foo$"


class TestSummary:

    def reports(self):
        return [
            DiagnosticReport(label="ok.regex", status="safe", status_line=":white_check_mark: Safe regular expression."),
            DiagnosticReport(
                label="bad.regex",
                status="vulnerable",
                status_line=":bomb: Vulnerable regular expression. Complexity: exponential.",
                details=ReportDetails(summary="Attack pattern: 'a'.repeat(31)", body='Hotspots detected: "**a**|a"'),
            ),
        ]

    def test_table_and_details(self):
        text = render_summary(self.reports())
        assert text.startswith(f"## {SUMMARY_HEADING}")
        assert "| ok.regex | :white_check_mark: Safe regular expression. |" in text
        assert "### bad.regex" in text
        assert "### ok.regex" not in text
        assert "<summary>Attack pattern: &#x27;a&#x27;.repeat(31)</summary>" in text
        assert 'Hotspots detected: "**a**|a"' in text

    def test_pipes_are_escaped_in_table(self):
        report = DiagnosticReport(label="a|b", status="safe", status_line="ok")
        assert "| a\\|b | ok |" in render_summary([report])

    def test_write_appends(self, tmp_path):
        path = tmp_path / "summary.md"
        write_summary("first", path)
        write_summary("second\n", path)
        assert path.read_text(encoding="utf-8") == "first\nsecond\n"
