"""GitHub issue comment client using the REST API over httpx."""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from .. import __version__
from ..errors import (
    AuthError,
    ConfigError,
    HttpError,
    NetworkError,
    NotFoundError,
    UnauthorizedError,
)
from .models import GitHubComment

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.github.com"
API_VERSION = "2022-11-28"


class GitHubCommentClient:
    """Reads and writes the comments of one repository's issues and PRs.

    Pagination is not handled: only the first page of comments is listed.
    """

    def __init__(
        self,
        token: str,
        repo: str,
        base_url: str = DEFAULT_BASE_URL,
        http_client: httpx.Client | None = None,
    ):
        """Initialize the client.

        Args:
            token: GitHub personal access token with repo scope
            repo: Repository in ``owner/name`` form
            base_url: API base URL, override for GitHub Enterprise
            http_client: Pre-built httpx client, mostly for tests

        Raises:
            ConfigError: If token or repo is empty
        """
        if not token:
            raise ConfigError(
                "GitHub token is required. Set GITHUB_TOKEN environment variable."
            )
        if not repo:
            raise ConfigError(
                "GitHub repository is required. Set GITHUB_REPO environment "
                "variable (e.g. organization/repo_name)."
            )

        self.repo = repo
        self.base_url = base_url.rstrip("/")
        self.headers = {
            "Authorization": f"token {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": API_VERSION,
            "User-Agent": f"gh-log-comment/{__version__}",
        }
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(follow_redirects=False)

    def __enter__(self) -> "GitHubCommentClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            self._http.close()

    def _comments_url(self, issue_number: int) -> str:
        return f"{self.base_url}/repos/{self.repo}/issues/{issue_number}/comments"

    def _request(
        self,
        method: str,
        url: str,
        json: dict[str, Any] | None = None,
        follow_redirects: bool = False,
    ) -> httpx.Response:
        """Send a request and map failures onto the error taxonomy."""
        logger.debug("%s %s", method, url)
        try:
            response = self._http.request(
                method,
                url,
                headers=self.headers,
                json=json,
                follow_redirects=follow_redirects,
            )
        except httpx.TransportError as e:
            raise NetworkError(f"{method} {url} failed: {e}") from e

        logger.debug("%s %s -> %d", method, url, response.status_code)
        if response.is_success:
            return response

        detail = _error_message(response)
        if response.status_code in (401, 403):
            raise AuthError(
                f"GitHub rejected the token ({response.status_code}): {detail}"
            )
        if response.status_code == 404:
            raise NotFoundError(
                f"Not found: {url} ({detail})", status_code=response.status_code
            )
        raise HttpError(
            f"{method} {url} returned {response.status_code}: {detail}",
            status_code=response.status_code,
        )

    def list_comments(
        self, issue_number: int, login_page_marker: str | None = None
    ) -> list[GitHubComment]:
        """List the comments of an issue or pull request.

        Args:
            issue_number: Issue or pull request number
            login_page_marker: Text identifying a login page served in place of
                the API response. When given, redirects are followed so a
                redirect to the login page is detected too. Only checked when
                the payload is not a list.

        Returns:
            Comments in the order GitHub returns them (oldest first)

        Raises:
            UnauthorizedError: If the login page marker is found
            AuthError: If the token is rejected
            NotFoundError: If the repository or issue does not exist
            HttpError: For other non-2xx responses or unexpected payloads
            NetworkError: If the request could not be sent
        """
        response = self._request(
            "GET",
            self._comments_url(issue_number),
            follow_redirects=login_page_marker is not None,
        )
        try:
            data = response.json()
        except ValueError:
            data = None

        if not isinstance(data, list):
            if login_page_marker and login_page_marker in response.text:
                raise UnauthorizedError(
                    "Unauthorized: GitHub request was answered with a login page"
                )
            raise HttpError(
                f"Unexpected payload listing comments of #{issue_number}",
                status_code=response.status_code,
            )

        comments = [_parse_comment(item, response) for item in data]
        logger.debug(
            "list_comments(#%d) returned %d comment(s)", issue_number, len(comments)
        )
        return comments

    def create_comment(self, issue_number: int, body: str) -> GitHubComment:
        """Add a comment to an issue or pull request.

        Args:
            issue_number: Issue or pull request number
            body: Markdown content of the new comment

        Returns:
            The created comment, including its id and urls
        """
        response = self._request(
            "POST", self._comments_url(issue_number), json={"body": body}
        )
        return _parse_comment(_json_payload(response), response)

    def update_comment(self, comment_url: str, body: str) -> GitHubComment:
        """Replace the body of an existing comment.

        Args:
            comment_url: API URL of the comment (``GitHubComment.url``)
            body: New markdown content

        Returns:
            The updated comment
        """
        response = self._request("PATCH", comment_url, json={"body": body})
        return _parse_comment(_json_payload(response), response)

    def delete_comment(self, comment_url: str) -> None:
        """Delete a comment.

        Raises:
            NotFoundError: If the comment is already gone
        """
        self._request("DELETE", comment_url)


def _json_payload(response: httpx.Response) -> Any:
    """Decode a successful response, rejecting non-JSON answers."""
    try:
        return response.json()
    except ValueError as e:
        raise HttpError(
            f"Unexpected payload from {response.request.method} {response.url}: {e}",
            status_code=response.status_code,
        ) from e


def _parse_comment(data: Any, response: httpx.Response) -> GitHubComment:
    """Validate one comment object from a successful response."""
    try:
        return GitHubComment.model_validate(data)
    except ValidationError as e:
        raise HttpError(
            f"Unexpected payload from {response.request.method} {response.url}: "
            f"not a comment ({e.error_count()} validation error(s))",
            status_code=response.status_code,
        ) from e


def _error_message(response: httpx.Response) -> str:
    """Extract GitHub's error message from a response, falling back to reason."""
    try:
        data = response.json()
    except ValueError:
        return response.reason_phrase or "no details"
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return response.reason_phrase or "no details"
