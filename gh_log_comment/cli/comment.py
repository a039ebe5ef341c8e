"""CLI commands that add, update or remove the build log comment of a PR."""

import logging
import os
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from ..comments import remove_comment, upsert_comment
from ..config import load_remove_config, load_upsert_config
from ..errors import CommentToolError, ConfigError
from ..github_client.client import GitHubCommentClient
from ..log_formatter import build_comment_body, format_log

console = Console()
err_console = Console(stderr=True)
logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "GH_LOG_COMMENT_LOG_LEVEL"


def _configure_logging() -> None:
    name = os.getenv(LOG_LEVEL_ENV, "WARNING").strip().upper()
    # Unknown names fall back to WARNING
    level = logging.getLevelNamesMapping().get(name, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _fail(context: str, error: Exception) -> NoReturn:
    logger.error("%s: %s", context, error)
    err_console.print(
        f"❌ [red]{context}: {escape(str(error))}[/red]",
        highlight=False,
        soft_wrap=True,
    )
    raise typer.Exit(1)


def add_or_update() -> None:
    """Post the build log as a PR comment, or update the existing one.

    Reads GITHUB_TOKEN, GITHUB_REPO, BUILD_URL and LOGFILE from the
    environment. Optional: GITHUB_API_URL, COMMENT_MARKER, APPEND_IF_EXISTS,
    TIMESTAMP_PREFIX_LENGTH, MAX_COMMENT_LENGTH.

    Example:
        BUILD_URL="https://jenkins.domain/job/pr-job/PR-12345/18/" \\
        GITHUB_REPO="organization/repo-name" GITHUB_TOKEN=00000 \\
        LOGFILE=jenkins.log gh-add-or-update-comment
    """
    _configure_logging()
    try:
        config = load_upsert_config()
        raw_log = config.read_log()
    except ConfigError as e:
        _fail("Error", e)

    formatted = format_log(
        raw_log,
        timestamp_prefix_length=config.timestamp_prefix_length,
        max_length=config.max_comment_length,
    )
    body = build_comment_body(formatted, config.run_number, config.marker)
    # Separate appended logs from the previous run's block
    body_on_append = f"\n\n{body}" if config.append_if_exists else None

    try:
        with GitHubCommentClient(
            config.token, config.repo, base_url=config.api_url
        ) as client:
            result = upsert_comment(
                client,
                config.issue_number,
                body,
                body_on_append=body_on_append,
                marker=config.marker,
                append_if_exists=config.append_if_exists,
            )
    except CommentToolError as e:
        _fail("Error while creating or updating GitHub comment", e)

    if result is None:
        console.print(
            f"GitHub PR #{config.issue_number} comment already up to date",
            highlight=False,
            soft_wrap=True,
        )
    else:
        console.print(
            f"GitHub PR commented: {result.html_url or result.url}",
            highlight=False,
            soft_wrap=True,
        )


def remove() -> None:
    """Remove the build log comment from the PR if it exists.

    Reads GITHUB_TOKEN, GITHUB_REPO and BUILD_URL from the environment.
    Optional: GITHUB_API_URL, COMMENT_MARKER.

    Example:
        BUILD_URL="https://jenkins.domain/job/pr-job/PR-12345/18/" \\
        GITHUB_REPO="org/repo-name" GITHUB_TOKEN=00000 gh-remove-comment
    """
    _configure_logging()
    try:
        config = load_remove_config()
    except ConfigError as e:
        _fail("Error", e)

    try:
        with GitHubCommentClient(
            config.token, config.repo, base_url=config.api_url
        ) as client:
            removed = remove_comment(client, config.issue_number, config.marker)
    except CommentToolError as e:
        _fail("Error while removing GitHub comment", e)

    if removed is None:
        console.print(
            f"No comment to remove on GitHub PR #{config.issue_number}",
            highlight=False,
            soft_wrap=True,
        )
    else:
        console.print(
            f"Removed GitHub comment {removed.html_url or removed.url}",
            highlight=False,
            soft_wrap=True,
        )
