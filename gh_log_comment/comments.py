"""Create, update or remove the comment a pipeline manages on a pull request."""

import logging

from .errors import NotFoundError
from .github_client.client import GitHubCommentClient
from .github_client.models import GitHubComment

logger = logging.getLogger(__name__)

# Text of the login page some proxies serve with status 200 instead of a 401.
LOGIN_PAGE_MARKER = "Log in to toolchain"

# The remove command only matches the marker near the top of a comment.
REMOVE_SEARCH_WINDOW = 100


def find_comment(
    comments: list[GitHubComment], marker: str, window: int | None = None
) -> GitHubComment | None:
    """Return the first comment whose body contains ``marker``.

    Args:
        comments: Comments in list order
        marker: Case-sensitive substring to look for
        window: Only search the first ``window`` characters of each body

    Returns:
        The first matching comment, or None
    """
    for comment in comments:
        body = comment.body if window is None else comment.body[:window]
        if marker in body:
            return comment
    return None


def upsert_comment(
    client: GitHubCommentClient,
    issue_number: int,
    body: str,
    body_on_append: str | None = None,
    marker: str = "",
    append_if_exists: bool = False,
) -> GitHubComment | None:
    """Create a comment, or update the one carrying ``marker``.

    Args:
        client: Comment client for the target repository
        issue_number: Issue or pull request number
        body: Content of a new comment, or the replacement content
        body_on_append: Content appended instead of ``body`` when appending
        marker: Text identifying the managed comment. Empty means always create.
        append_if_exists: Append to the existing comment instead of replacing it

    Returns:
        The created or updated comment, or None when ``body_on_append`` was
        already present and nothing changed
    """
    if not marker:
        logger.info("Adding new comment to #%d", issue_number)
        return client.create_comment(issue_number, body)

    existing = find_comment(client.list_comments(issue_number), marker)
    if existing is None:
        logger.info("Adding new comment to #%d", issue_number)
        return client.create_comment(issue_number, body)

    if not append_if_exists:
        new_body = body
    elif body_on_append:
        if body_on_append in existing.body:
            logger.info(
                "Comment %d already contains the appended content", existing.id
            )
            return None
        new_body = existing.body + body_on_append
    else:
        new_body = existing.body + body

    logger.info("Updating comment %d on #%d", existing.id, issue_number)
    return client.update_comment(existing.url, new_body)


def remove_comment(
    client: GitHubCommentClient, issue_number: int, marker: str
) -> GitHubComment | None:
    """Delete the comment whose first 100 characters contain ``marker``.

    A missing comment is not an error. A comment that disappears between
    listing and deleting is logged and treated as removed.

    Returns:
        The removed comment, or None if there was none

    Raises:
        UnauthorizedError: If the listing returned a login page
    """
    comments = client.list_comments(issue_number, login_page_marker=LOGIN_PAGE_MARKER)
    existing = find_comment(comments, marker, window=REMOVE_SEARCH_WINDOW)
    if existing is None:
        logger.info("No comment matching %r on #%d", marker, issue_number)
        return None

    try:
        client.delete_comment(existing.url)
    except NotFoundError as e:
        logger.warning("Comment %d was already deleted: %s", existing.id, e)
    else:
        logger.info("Deleted comment %d on #%d", existing.id, issue_number)
    return existing
