"""Pydantic models for GitHub data structures.

These models map directly to GitHub's REST API v3 response structures.
API Reference: https://docs.github.com/en/rest/issues/comments
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GitHubUser(BaseModel):
    """GitHub user model representing a user account.

    Maps to GitHub REST API User object.
    API Reference: https://docs.github.com/en/rest/users/users
    """

    model_config = ConfigDict(extra="ignore")

    login: str = Field(..., description="GitHub username/login (string)")
    id: int = Field(..., description="Unique user identifier (integer)")


class GitHubComment(BaseModel):
    """GitHub comment model representing issue/PR comments.

    Maps to GitHub REST API Issue Comment object. Only the fields needed to
    find, edit and delete a comment are kept.
    """

    model_config = ConfigDict(extra="ignore")

    id: int = Field(..., description="Unique comment identifier (integer)")
    url: str = Field(..., description="API URL of the comment, used for PATCH/DELETE")
    html_url: str | None = Field(
        None, description="Browser URL of the comment (string)"
    )
    body: str = Field("", description="Text content of the comment (string)")
    user: GitHubUser | None = Field(None, description="Comment author details")

    @field_validator("body", mode="before")
    @classmethod
    def _empty_body(cls, value: Any) -> Any:
        # GitHub returns null for comments whose body was cleared
        return "" if value is None else value
