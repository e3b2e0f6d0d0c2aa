"""Graph construction from extracted dependencies."""

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor

from pydantic import BaseModel, Field

from ..models import Edge, Graph
from ..storage.store import IssueStore
from .extractor import Extraction, extract

logger = logging.getLogger(__name__)


class ExtractionReport(BaseModel):
    """Per-issue extraction results for a whole store."""

    extractions: list[Extraction] = Field(default_factory=list)

    @property
    def unresolved_count(self) -> int:
        return sum(len(extraction.unresolved) for extraction in self.extractions)

    @property
    def malformed_count(self) -> int:
        return sum(len(extraction.malformed) for extraction in self.extractions)

    def per_issue_edges(self) -> list[tuple[Edge, ...]]:
        return [extraction.edges for extraction in self.extractions]


def extract_all(store: IssueStore, workers: int | None = None) -> ExtractionReport:
    """Run the extractor over every issue in the store.

    Args:
        store: Loaded issues
        workers: Thread count; None or 1 extracts in the calling thread

    Returns:
        One extraction per issue, in store order
    """
    known_ids = store.ids()
    issues = list(store)

    if workers and workers > 1:
        logger.debug("Extracting %d issues on %d threads", len(issues), workers)
        with ThreadPoolExecutor(max_workers=workers) as executor:
            extractions = list(
                executor.map(lambda issue: extract(issue, known_ids), issues)
            )
    else:
        extractions = [extract(issue, known_ids) for issue in issues]

    return ExtractionReport(extractions=extractions)


def build(store: IssueStore, per_issue_edges: Iterable[Iterable[Edge]]) -> Graph:
    """Union per-issue edges into one graph holding every loaded issue.

    Duplicate edges collapse. Self-edges and edges to issues missing from
    the store are dropped.
    """
    nodes = {issue.id: issue for issue in store}
    edges: set[Edge] = set()

    for issue_edges in per_issue_edges:
        for edge in issue_edges:
            if edge.blocker == edge.dependent:
                continue
            if edge.blocker not in nodes or edge.dependent not in nodes:
                continue
            edges.add(edge)

    logger.debug("Built graph with %d nodes and %d edges", len(nodes), len(edges))
    return Graph(nodes=nodes, edges=frozenset(edges))


def build_graph(
    store: IssueStore, workers: int | None = None
) -> tuple[Graph, ExtractionReport]:
    """Extract dependencies from every issue and build the graph."""
    report = extract_all(store, workers=workers)
    return build(store, report.per_issue_edges()), report
