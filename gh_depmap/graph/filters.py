"""Selecting which issues appear in the diagram."""

import logging
from datetime import UTC, datetime, timedelta

from pydantic import BaseModel, Field

from ..models import Graph, Issue

logger = logging.getLogger(__name__)


class FilterOptions(BaseModel):
    """Inclusion rules for rendering."""

    include_project: str | None = Field(
        None, description="Keep only issues in the project with exactly this title"
    )
    all: bool = Field(False, description="Keep issues that have no dependencies")
    closed_within_days: int | None = Field(
        None, ge=0, description="Drop closed issues not updated in this many days"
    )
    now: datetime | None = Field(
        None, description="Reference time for closed_within_days (default: now)"
    )


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment


def _in_project(issue: Issue, project: str | None) -> bool:
    return project is None or project in issue.project_items


def _recent_enough(issue: Issue, cutoff: datetime | None) -> bool:
    if cutoff is None or not issue.is_closed or issue.updated_at is None:
        return True
    return _as_utc(issue.updated_at) >= cutoff


def apply_filters(graph: Graph, options: FilterOptions | None = None) -> Graph:
    """Return the subgraph to render.

    Project and closed-recency rules run first. Edges then survive only
    between surviving issues. Unless ``options.all`` is set, issues left
    without any surviving edge are dropped last.
    """
    if options is None:
        options = FilterOptions()

    cutoff = None
    if options.closed_within_days is not None:
        now = _as_utc(options.now or datetime.now(UTC))
        cutoff = now - timedelta(days=options.closed_within_days)

    nodes = {
        issue_id: issue
        for issue_id, issue in graph.nodes.items()
        if _in_project(issue, options.include_project)
        and _recent_enough(issue, cutoff)
    }
    edges = frozenset(
        edge
        for edge in graph.edges
        if edge.blocker in nodes and edge.dependent in nodes
    )

    if not options.all:
        connected = {issue_id for edge in edges for issue_id in edge}
        nodes = {
            issue_id: issue
            for issue_id, issue in nodes.items()
            if issue_id in connected
        }

    logger.debug(
        "Filter kept %d of %d issues and %d of %d edges",
        len(nodes),
        len(graph.nodes),
        len(edges),
        len(graph.edges),
    )
    return Graph(nodes=nodes, edges=edges)
