"""Turn a raw Jenkins console log into a bounded GitHub comment body."""

from dataclasses import dataclass

# Width of a timestamper plugin prefix such as "[2023-02-23T12:15:30.709Z] ".
# Use 0 when the pipeline does not run the timestamper plugin.
DEFAULT_TIMESTAMP_PREFIX_LENGTH = 27

# Escape sequences emitted by ANSI colour plugins start each noise section.
DEFAULT_START_MARKER = "\x1b"
DEFAULT_END_MARKER = "[Pipeline]"

# GitHub caps comments at 65536 characters; leave room for the summary and tags.
DEFAULT_MAX_LENGTH = 65250

DEFAULT_COMMENT_MARKER = "Last Jenkins Error Log"


@dataclass(frozen=True)
class FormattedLog:
    """Cleaned log ready to embed in a comment."""

    start_timestamp: str
    content: str


def clean_line(
    line: str,
    timestamp_prefix_length: int = DEFAULT_TIMESTAMP_PREFIX_LENGTH,
    start_marker: str = DEFAULT_START_MARKER,
    end_marker: str = DEFAULT_END_MARKER,
) -> str:
    """Strip the timestamp prefix and the noise between the two markers.

    A missing marker makes ``find`` return -1 and that value is used as a
    slice index unchanged: without a start marker the first slice loses the
    last character, without an end marker the second slice is the last
    character. For a line with neither marker the two halves add back up to
    the full line minus its prefix.
    """
    start = line.find(start_marker)
    end = line.find(end_marker)
    return line[timestamp_prefix_length:start] + line[end:]


def clean_log(
    raw_log: str,
    timestamp_prefix_length: int = DEFAULT_TIMESTAMP_PREFIX_LENGTH,
    start_marker: str = DEFAULT_START_MARKER,
    end_marker: str = DEFAULT_END_MARKER,
) -> str:
    """Apply :func:`clean_line` to every line of ``raw_log``."""
    return "\n".join(
        clean_line(line, timestamp_prefix_length, start_marker, end_marker)
        for line in raw_log.split("\n")
    )


def format_log(
    raw_log: str,
    timestamp_prefix_length: int = DEFAULT_TIMESTAMP_PREFIX_LENGTH,
    start_marker: str = DEFAULT_START_MARKER,
    end_marker: str = DEFAULT_END_MARKER,
    max_length: int = DEFAULT_MAX_LENGTH,
) -> FormattedLog:
    """Clean and truncate a raw log.

    Args:
        raw_log: Full console log text
        timestamp_prefix_length: Characters to strip from the start of each line
        start_marker: Start of the noise to drop from each line
        end_marker: Start of the text to keep again on each line
        max_length: Maximum number of cleaned log characters to keep

    Returns:
        FormattedLog with the start timestamp and the comment content. When
        the log is too long only its tail is kept, behind a notice counting
        the dropped characters of the raw log.
    """
    start_timestamp = raw_log[:timestamp_prefix_length]
    cleaned = clean_log(raw_log, timestamp_prefix_length, start_marker, end_marker)
    kept = cleaned[-max_length:]

    notice = ""
    if len(raw_log) > max_length:
        notice = (
            f"First {len(raw_log) - max_length} log characters truncated ... \n\n"
        )

    return FormattedLog(
        start_timestamp=start_timestamp,
        content=f"Pipeline started: {start_timestamp}\n\n{notice}{kept}",
    )


def build_comment_body(
    formatted: FormattedLog,
    run_number: str,
    marker: str = DEFAULT_COMMENT_MARKER,
) -> str:
    """Wrap a formatted log in a collapsible comment.

    The marker opens the summary line so it sits within the first 100
    characters of the body, where the remove command looks for it.
    """
    return (
        f"<details><summary>{marker}, run #{run_number}, "
        f"started {formatted.start_timestamp}</summary>\n\n"
        f" <pre>{formatted.content}</pre></details>"
    )
