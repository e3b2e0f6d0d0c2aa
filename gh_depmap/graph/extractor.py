"""Dependency extraction from issue text.

An issue depends on every issue it references from

* a task-list item: ``- [ ] #12`` or ``- [x] https://github.com/o/r/issues/12``
* a ``Depends on:`` line: ``Depends on: #12, #13 octo/app#7``

Lines are matched one at a time, body first, then each comment in order.
"""

import logging
import re
from collections.abc import Collection

from pydantic import BaseModel, ConfigDict, Field

from ..models import Edge, Issue, IssueId
from .references import Resolver, resolve_reference, scan_references

logger = logging.getLogger(__name__)

TASK_ITEM_PATTERN = re.compile(r"^\s*- \[[ xX]\]")

# "Depends on", any case, optional colon
DEPENDS_ON_PATTERN = re.compile(r"^\s*depends\s+on\b\s*:?\s*", re.IGNORECASE)


class Extraction(BaseModel):
    """Dependencies found in one issue."""

    model_config = ConfigDict(frozen=True)

    dependent: IssueId = Field(..., description="Issue the text belongs to")
    edges: tuple[Edge, ...] = Field(
        default_factory=tuple, description="Edges in order found, may repeat"
    )
    unresolved: tuple[str, ...] = Field(
        default_factory=tuple, description="References to issues not loaded"
    )
    malformed: tuple[str, ...] = Field(
        default_factory=tuple, description="Depends-on lines without a reference"
    )


def dependency_text(line: str) -> tuple[str, bool] | None:
    """Split off the part of ``line`` that lists dependencies.

    Returns:
        ``(text, explicit)`` where ``explicit`` is True for a ``Depends on``
        line, or None if the line declares no dependency
    """
    match = TASK_ITEM_PATTERN.match(line)
    if match:
        return line[match.end() :], False

    match = DEPENDS_ON_PATTERN.match(line)
    if match:
        return line[match.end() :], True

    return None


def extract(
    issue: Issue,
    known_ids: Collection[IssueId],
    resolve: Resolver = resolve_reference,
) -> Extraction:
    """Find the issues ``issue`` depends on.

    Args:
        issue: Issue whose body and comments are scanned
        known_ids: Ids of all loaded issues
        resolve: Maps ``(issue.id, reference text)`` to an issue id

    Returns:
        Edges with ``issue`` as the dependent, plus dropped references
    """
    edges: list[Edge] = []
    unresolved: list[str] = []
    malformed: list[str] = []

    for line in issue.text_lines():
        parsed = dependency_text(line)
        if parsed is None:
            continue
        text, explicit = parsed

        references = scan_references(text)
        if explicit and not references and text.strip():
            logger.warning(
                "Malformed dependency %r in issue %s (%s)",
                text.strip(),
                issue.id,
                issue.title,
            )
            malformed.append(text.strip())
            continue

        for reference in references:
            target = resolve(issue.id, reference)
            if target == issue.id:
                continue
            if target is None or target not in known_ids:
                logger.debug("Unresolved reference %s in issue %s", reference, issue.id)
                unresolved.append(reference)
                continue
            edges.append(Edge(blocker=target, dependent=issue.id))

    return Extraction(
        dependent=issue.id,
        edges=tuple(edges),
        unresolved=tuple(unresolved),
        malformed=tuple(malformed),
    )
