"""Tests for log cleanup, truncation and comment body formatting."""

import pytest

from gh_log_comment.log_formatter import (
    FormattedLog,
    build_comment_body,
    clean_line,
    clean_log,
    format_log,
)

TS = "[2024-01-01T00:00:00.000Z] "


class TestCleanLine:
    """Pin the per-line slice arithmetic."""

    def test_both_markers_present(self) -> None:
        """Test that noise between escape and [Pipeline] is dropped."""
        line = f"{TS}line-one\x1bnoise[Pipeline]kept"
        assert clean_line(line) == "line-one[Pipeline]kept"

    def test_unbracketed_timestamp_loses_one_more_character(self) -> None:
        """Test that the prefix length is applied blindly."""
        line = "2024-01-01T00:00:00.000Z] line-one\x1bnoise[Pipeline]kept"
        assert clean_line(line) == "ine-one[Pipeline]kept"

    def test_no_markers_keeps_whole_remainder(self) -> None:
        """Test that -1 slices add back up to the full line."""
        assert clean_line(f"{TS}hello world") == "hello world"

    def test_missing_end_marker_appends_last_character(self) -> None:
        """Test a line with an escape sequence but no [Pipeline]."""
        assert clean_line(f"{TS}abc\x1b[0mxyz") == "abcz"

    def test_missing_start_marker_duplicates_tail(self) -> None:
        """Test a line with [Pipeline] but no escape sequence."""
        assert (
            clean_line(f"{TS}[Pipeline] stage")
            == "[Pipeline] stag[Pipeline] stage"
        )

    def test_line_shorter_than_prefix(self) -> None:
        """Test that only the last character of a short line survives."""
        assert clean_line("short") == "t"

    def test_empty_line(self) -> None:
        """Test that empty lines stay empty."""
        assert clean_line("") == ""

    def test_zero_prefix(self) -> None:
        """Test that a zero prefix keeps lines without markers intact."""
        assert clean_line("plain", timestamp_prefix_length=0) == "plain"


class TestFormatLog:
    """Test the full formatting transform."""

    def test_literal_log(self) -> None:
        """Test the exact output for a single unbracketed log line."""
        raw = "2024-01-01T00:00:00.000Z] line-one\x1bnoise[Pipeline]kept\n"

        result = format_log(raw, timestamp_prefix_length=27)

        assert result.start_timestamp == "2024-01-01T00:00:00.000Z] l"
        assert result.content == (
            "Pipeline started: 2024-01-01T00:00:00.000Z] l\n\n"
            "ine-one[Pipeline]kept\n"
        )

    def test_start_timestamp_taken_from_whole_log(self) -> None:
        """Test that the timestamp comes from the first characters only."""
        raw = f"{TS}first\n[2024-01-01T00:09:59.000Z] second"

        result = format_log(raw)

        assert result.start_timestamp == TS
        assert result.content == f"Pipeline started: {TS}\n\nfirst\nsecond"

    def test_truncates_to_tail_of_cleaned_log(self) -> None:
        """Test suffix truncation and the notice based on the raw length."""
        lines = [f"{TS}{i:06d}" + "." * 994 for i in range(70)]
        raw = "\n".join(lines)[:70000]
        cleaned = clean_log(raw)
        assert len(raw) == 70000
        assert len(cleaned) > 65250
        assert cleaned[-65250:] != raw[-65250:]

        result = format_log(raw, max_length=65250)

        assert "First 4750 log characters truncated" in result.content
        assert result.content == (
            f"Pipeline started: {TS}\n\n"
            "First 4750 log characters truncated ... \n\n" + cleaned[-65250:]
        )

    def test_notice_uses_raw_length_even_if_cleaned_fits(self) -> None:
        """Test that noise removal does not suppress the notice."""
        raw = f"{TS}ok\x1b" + "n" * 200 + "[Pipeline]end"

        result = format_log(raw, max_length=100)

        notice = f"First {len(raw) - 100} log characters truncated ... \n\n"
        assert result.content == f"Pipeline started: {TS}\n\n{notice}ok[Pipeline]end"

    @pytest.mark.parametrize("max_length", [100, 101])
    def test_no_notice_within_limit(self, max_length: int) -> None:
        """Test that logs up to the limit are not annotated."""
        raw = TS + "a" * 73
        result = format_log(raw, max_length=max_length)
        assert "truncated" not in result.content


class TestBuildCommentBody:
    """Test the collapsible comment wrapper."""

    def test_body_layout(self) -> None:
        """Test the exact comment markup."""
        formatted = FormattedLog(start_timestamp=TS, content="log")

        body = build_comment_body(formatted, "18")

        assert body == (
            f"<details><summary>Last Jenkins Error Log, run #18, started {TS}"
            "</summary>\n\n <pre>log</pre></details>"
        )

    def test_marker_within_first_100_characters(self) -> None:
        """Test that the remove command can find the comment."""
        formatted = format_log(f"{TS}boom")
        body = build_comment_body(formatted, "123456", marker="Nightly Log")
        assert "Nightly Log" in body[:100]
