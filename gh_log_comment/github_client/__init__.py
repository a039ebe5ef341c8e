"""GitHub client package for issue comment interaction."""

from .client import GitHubCommentClient
from .models import GitHubComment, GitHubUser

__all__ = [
    "GitHubCommentClient",
    "GitHubComment",
    "GitHubUser",
]
