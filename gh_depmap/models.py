"""Domain models for the dependency graph.

These are the decoded, normalized forms of GitHub issues. Raw ``gh`` JSON
records live in :mod:`gh_depmap.github_client.models`.
"""

from datetime import datetime
from enum import Enum
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field


class IssueId(NamedTuple):
    """Composite issue identity: ``owner/name`` slug plus issue number."""

    repository: str
    number: int

    def __str__(self) -> str:
        return f"{self.repository}#{self.number}"


class IssueState(str, Enum):
    """State of an issue as shown by GitHub."""

    OPEN = "open"
    CLOSED = "closed"


class Issue(BaseModel):
    """A loaded issue. Immutable once created by the store."""

    model_config = ConfigDict(frozen=True)

    id: IssueId = Field(..., description="Repository and number of the issue")
    title: str = Field("", description="Issue title")
    state: IssueState = Field(..., description="Open or closed")
    body: str = Field("", description="Issue body in markdown")
    comments: tuple[str, ...] = Field(
        default_factory=tuple, description="Comment bodies in posting order"
    )
    project_items: frozenset[str] = Field(
        default_factory=frozenset, description="Titles of projects the issue is in"
    )
    url: str = Field("", description="Web URL of the issue")
    updated_at: datetime | None = Field(None, description="Timestamp of last update")
    position: int = Field(0, description="Index in the store's input order")

    @property
    def is_closed(self) -> bool:
        return self.state is IssueState.CLOSED

    def text_lines(self) -> list[str]:
        """Body lines followed by the lines of each comment, in order."""
        lines = self.body.splitlines()
        for comment in self.comments:
            lines.extend(comment.splitlines())
        return lines


class Edge(NamedTuple):
    """Directed dependency: ``dependent`` depends on ``blocker``."""

    blocker: IssueId
    dependent: IssueId


class Graph(BaseModel):
    """Nodes keyed by id and a deduplicated edge set."""

    model_config = ConfigDict(frozen=True)

    nodes: dict[IssueId, Issue] = Field(default_factory=dict)
    edges: frozenset[Edge] = Field(default_factory=frozenset)

    def ordered_nodes(self) -> list[Issue]:
        """Nodes by input position, ties broken by id."""
        return sorted(self.nodes.values(), key=lambda issue: (issue.position, issue.id))

    def ordered_edges(self) -> list[Edge]:
        return sorted(self.edges)
