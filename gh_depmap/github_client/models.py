"""Pydantic models for the JSON written by the GitHub CLI.

Two record shapes are accepted:

* ``gh issue list --json number,title,state,body,comments,projectItems,url``
  (also ``gh search issues``, which adds a ``repository`` object)
* ``gh project item-list --format json``, where the issue fields sit under
  ``content`` and the outer item carries the repository URL. These items
  have no ``state`` and drafts have no ``number``

Only the fields gh-depmap reads are modelled. Anything else, including
labels, assignees and project status, is ignored.
CLI reference: https://cli.github.com/manual/gh_issue_list
"""

from datetime import datetime
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from ..models import IssueState
from .urls import normalize_slug, parse_slug, split_github_url


class GitHubComment(BaseModel):
    """Issue comment as listed by ``gh issue list --json comments``."""

    body: str | None = Field(None, description="Text content of the comment")


class GitHubProjectItem(BaseModel):
    """Project membership entry from ``projectItems``."""

    title: str = Field(..., description="Title of the project board")


class GitHubRepositoryRef(BaseModel):
    """Repository object attached to search results."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(None, description="Repository name")
    name_with_owner: str | None = Field(
        None, alias="nameWithOwner", description="owner/name slug"
    )
    owner: dict[str, Any] | None = Field(None, description="Owner object with login")

    def slug(self) -> str | None:
        if self.name_with_owner:
            return parse_slug(self.name_with_owner)
        if self.name and self.owner and self.owner.get("login"):
            return normalize_slug(self.owner["login"], self.name)
        return None


class GitHubIssueRecord(BaseModel):
    """One issue or project item from ``gh`` JSON output.

    ``number`` and ``state`` are optional here because project items may lack
    them. The store decides whether a record without them can be used.
    """

    model_config = ConfigDict(populate_by_name=True)

    number: int | None = Field(
        None, gt=0, description="Issue number within the repository"
    )
    state: IssueState | None = Field(
        None, description="OPEN or CLOSED (MERGED counts as closed)"
    )
    item_type: str | None = Field(
        None, alias="type", description="Project item type, e.g. Issue or DraftIssue"
    )
    title: str = Field("", description="Issue title")
    body: str | None = Field(None, description="Issue body in markdown")
    url: str = Field("", description="Web URL of the issue")
    comments: list[GitHubComment] = Field(
        default_factory=list, description="Comments in posting order"
    )
    project_items: list[GitHubProjectItem] = Field(
        default_factory=list,
        alias="projectItems",
        description="Project boards the issue belongs to",
    )
    repository: GitHubRepositoryRef | str | None = Field(
        None, description="owner/name, repository URL or repository object"
    )
    updated_at: datetime | None = Field(
        None, alias="updatedAt", description="Timestamp of last update (ISO 8601)"
    )

    @model_validator(mode="before")
    @classmethod
    def flatten_project_item(cls, data: Any) -> Any:
        """Lift ``content`` fields of a project item to the top level."""
        if isinstance(data, dict) and isinstance(data.get("content"), dict):
            outer = {key: value for key, value in data.items() if key != "content"}
            return {**outer, **data["content"]}
        return data

    @field_validator("state", mode="before")
    @classmethod
    def normalize_state(cls, value: Any) -> Any:
        if isinstance(value, str):
            state = value.strip().upper()
            if state == "OPEN":
                return IssueState.OPEN
            if state in ("CLOSED", "MERGED"):
                return IssueState.CLOSED
        return value

    @field_validator("comments", mode="before")
    @classmethod
    def wrap_comment_strings(cls, value: Any) -> Any:
        """Accept bare strings where ``gh`` sometimes emits them."""
        if not isinstance(value, list):
            return value
        return [{"body": item} if isinstance(item, str) else item for item in value]

    @field_validator("project_items", mode="before")
    @classmethod
    def wrap_project_titles(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return value
        return [{"title": item} if isinstance(item, str) else item for item in value]

    def repository_slug(self) -> str | None:
        """Work out the ``owner/name`` slug from whatever the record carries."""
        if isinstance(self.repository, GitHubRepositoryRef):
            slug = self.repository.slug()
            if slug:
                return slug
        elif isinstance(self.repository, str) and self.repository:
            split = split_github_url(self.repository)
            slug = split[0] if split else parse_slug(self.repository)
            if slug:
                return slug

        if self.url:
            split = split_github_url(self.url)
            if split:
                return split[0]

        return None
