"""Test configuration and fixtures."""

from typing import Any

import pytest

from gh_log_comment.errors import NotFoundError
from gh_log_comment.github_client.models import GitHubComment

REPO = "testorg/testrepo"
API = "https://api.github.com"
BUILD_URL = "https://jenkins.domain/job/pr-multibranch-job/PR-12345/18/"

CONFIG_VARS = [
    "GITHUB_TOKEN",
    "GITHUB_REPO",
    "BUILD_URL",
    "LOGFILE",
    "GITHUB_API_URL",
    "COMMENT_MARKER",
    "APPEND_IF_EXISTS",
    "TIMESTAMP_PREFIX_LENGTH",
    "MAX_COMMENT_LENGTH",
    "GH_LOG_COMMENT_LOG_LEVEL",
]


def make_comment(comment_id: int, body: str) -> GitHubComment:
    """Build a comment as GitHub would return it."""
    return GitHubComment(
        id=comment_id,
        url=f"{API}/repos/{REPO}/issues/comments/{comment_id}",
        html_url=f"https://github.com/{REPO}/pull/12345#issuecomment-{comment_id}",
        body=body,
    )


class FakeCommentClient:
    """In-memory stand-in for GitHubCommentClient that records calls."""

    def __init__(self, comments: list[GitHubComment] | None = None):
        self.comments = list(comments or [])
        self.calls: list[tuple[Any, ...]] = []
        self._next_id = 1000

    def __enter__(self) -> "FakeCommentClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        pass

    def list_comments(
        self, issue_number: int, login_page_marker: str | None = None
    ) -> list[GitHubComment]:
        self.calls.append(("list", issue_number, login_page_marker))
        return list(self.comments)

    def create_comment(self, issue_number: int, body: str) -> GitHubComment:
        self.calls.append(("create", issue_number, body))
        self._next_id += 1
        comment = make_comment(self._next_id, body)
        self.comments.append(comment)
        return comment

    def update_comment(self, comment_url: str, body: str) -> GitHubComment:
        self.calls.append(("update", comment_url, body))
        for index, comment in enumerate(self.comments):
            if comment.url == comment_url:
                updated = comment.model_copy(update={"body": body})
                self.comments[index] = updated
                return updated
        raise NotFoundError(f"Not found: {comment_url}", status_code=404)

    def delete_comment(self, comment_url: str) -> None:
        self.calls.append(("delete", comment_url))
        remaining = [c for c in self.comments if c.url != comment_url]
        if len(remaining) == len(self.comments):
            raise NotFoundError(f"Not found: {comment_url}", status_code=404)
        self.comments = remaining

    def mutations(self) -> list[tuple[Any, ...]]:
        return [call for call in self.calls if call[0] != "list"]


@pytest.fixture(name="make_comment")
def make_comment_fixture() -> Any:
    """Provide the comment factory."""
    return make_comment


@pytest.fixture
def fake_client() -> FakeCommentClient:
    """Provide an empty in-memory comment client."""
    return FakeCommentClient()


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove configuration variables inherited from the host environment."""
    for name in CONFIG_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
