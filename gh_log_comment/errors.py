"""Exceptions raised by gh-log-comment."""


class CommentToolError(Exception):
    """Base class for all gh-log-comment errors."""


class ConfigError(CommentToolError):
    """Required configuration is missing or invalid."""


class NetworkError(CommentToolError):
    """The GitHub API could not be reached."""


class HttpError(CommentToolError):
    """GitHub answered with an unexpected status or payload."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(HttpError):
    """Repository, issue or comment does not exist (HTTP 404)."""


class AuthError(CommentToolError):
    """The token was rejected (HTTP 401/403)."""


class UnauthorizedError(AuthError):
    """A login page came back instead of an API response.

    Some proxies in front of GitHub Enterprise answer unauthenticated
    requests with their login page and status 200. The listing payload is
    then HTML rather than a JSON array.
    """


class TransformError(CommentToolError):
    """Reserved for log transform failures.

    The formatter tolerates malformed lines, so this is not raised today.
    """
