"""Configuration loaded from the environment of a Jenkins build."""

import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from .errors import ConfigError
from .github_client.client import DEFAULT_BASE_URL
from .log_formatter import (
    DEFAULT_COMMENT_MARKER,
    DEFAULT_MAX_LENGTH,
    DEFAULT_TIMESTAMP_PREFIX_LENGTH,
)

# e.g. https://jenkins.domain/job/pr-multibranch-job/PR-12345/18/
PR_NUMBER_PATTERN = re.compile(r"PR-(\d+)")
RUN_NUMBER_PATTERN = re.compile(r"(\d+)/$")


def is_true(value: Any) -> bool:
    """Interpret an environment flag the way the pipeline scripts do."""
    return value is True or value in ("true", "1")


def parse_build_url(build_url: str) -> tuple[int, str]:
    """Extract the pull request number and run number from a build URL.

    Args:
        build_url: Jenkins build URL, e.g.
            ``https://jenkins.domain/job/pr-multibranch-job/PR-12345/18/``

    Returns:
        Tuple of (pull request number, run number), e.g. ``(12345, "18")``

    Raises:
        ConfigError: If either number cannot be found
    """
    pr_match = PR_NUMBER_PATTERN.search(build_url)
    if not pr_match:
        raise ConfigError(
            f"BUILD_URL does not reference a pull request (PR-<number>): {build_url}"
        )
    run_match = RUN_NUMBER_PATTERN.search(build_url)
    if not run_match:
        raise ConfigError(
            f"BUILD_URL does not end with a run number and '/': {build_url}"
        )
    return int(pr_match.group(1)), run_match.group(1)


class RemoveConfig(BaseModel):
    """Settings for removing the managed comment."""

    token: str = Field(..., description="GitHub token (GITHUB_TOKEN)")
    repo: str = Field(..., description="owner/name (GITHUB_REPO)")
    build_url: str = Field(..., description="Jenkins build URL (BUILD_URL)")
    issue_number: int = Field(..., description="PR number from the build URL")
    run_number: str = Field(..., description="Run number from the build URL")
    api_url: str = Field(DEFAULT_BASE_URL, description="GitHub API base URL")
    marker: str = Field(
        DEFAULT_COMMENT_MARKER, description="Text identifying the managed comment"
    )


class UpsertConfig(RemoveConfig):
    """Settings for adding or updating the managed comment."""

    log_file: Path = Field(..., description="Log file to post (LOGFILE)")
    append_if_exists: bool = Field(False, description="Append instead of replace")
    timestamp_prefix_length: int = Field(
        DEFAULT_TIMESTAMP_PREFIX_LENGTH, description="Prefix to strip per line"
    )
    max_comment_length: int = Field(
        DEFAULT_MAX_LENGTH, description="Maximum cleaned log characters"
    )

    def read_log(self) -> str:
        """Read the log file once.

        Raises:
            ConfigError: If the file cannot be read
        """
        try:
            return self.log_file.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise ConfigError(f"Cannot read LOGFILE {self.log_file}: {e}") from e


def _require(env: Mapping[str, str], names: list[str]) -> None:
    missing = [name for name in names if not env.get(name)]
    if missing:
        raise ConfigError(
            f"Environment variables required: {', '.join(missing)}"
        )


def _int_setting(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from e
    if value < 0:
        raise ConfigError(f"{name} must not be negative, got {value}")
    return value


def _common_settings(env: Mapping[str, str]) -> dict[str, Any]:
    build_url = env["BUILD_URL"]
    issue_number, run_number = parse_build_url(build_url)
    return {
        "token": env["GITHUB_TOKEN"],
        "repo": env["GITHUB_REPO"],
        "build_url": build_url,
        "issue_number": issue_number,
        "run_number": run_number,
        "api_url": env.get("GITHUB_API_URL") or DEFAULT_BASE_URL,
        "marker": env.get("COMMENT_MARKER") or DEFAULT_COMMENT_MARKER,
    }


def load_remove_config(environ: Mapping[str, str] | None = None) -> RemoveConfig:
    """Load settings for the remove command.

    Args:
        environ: Environment mapping, defaults to ``os.environ``

    Raises:
        ConfigError: If a required variable is missing or invalid
    """
    env = os.environ if environ is None else environ
    _require(env, ["GITHUB_TOKEN", "GITHUB_REPO", "BUILD_URL"])
    return RemoveConfig(**_common_settings(env))


def load_upsert_config(environ: Mapping[str, str] | None = None) -> UpsertConfig:
    """Load settings for the add-or-update command.

    Args:
        environ: Environment mapping, defaults to ``os.environ``

    Raises:
        ConfigError: If a required variable is missing or invalid
    """
    env = os.environ if environ is None else environ
    _require(env, ["GITHUB_TOKEN", "GITHUB_REPO", "BUILD_URL", "LOGFILE"])

    max_comment_length = _int_setting(env, "MAX_COMMENT_LENGTH", DEFAULT_MAX_LENGTH)
    if max_comment_length == 0:
        raise ConfigError("MAX_COMMENT_LENGTH must be greater than 0")

    return UpsertConfig(
        **_common_settings(env),
        log_file=Path(env["LOGFILE"]),
        append_if_exists=is_true(env.get("APPEND_IF_EXISTS")),
        timestamp_prefix_length=_int_setting(
            env, "TIMESTAMP_PREFIX_LENGTH", DEFAULT_TIMESTAMP_PREFIX_LENGTH
        ),
        max_comment_length=max_comment_length,
    )
