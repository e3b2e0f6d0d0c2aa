"""In-memory issue store built from ``gh`` JSON dumps."""

import json
import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from pydantic import ValidationError

from ..errors import InputDecodeError
from ..github_client.models import GitHubIssueRecord
from ..github_client.urls import parse_slug
from ..models import Issue, IssueId

logger = logging.getLogger(__name__)

# Keys under which gh wraps record arrays (``gh project item-list`` uses "items")
WRAPPER_KEYS = ("items", "issues")

DEFAULT_SOURCE = "<input>"

# Project items without an issue behind them
DRAFT_ISSUE_TYPE = "DraftIssue"


class IssueStore:
    """Issues keyed by ``(repository, number)``, iterated in input order.

    Build one with :func:`load`, :func:`load_json` or :func:`load_many`.
    The store is not modified after loading.
    """

    def __init__(self) -> None:
        self._issues: dict[IssueId, Issue] = {}

    def __len__(self) -> int:
        return len(self._issues)

    def __iter__(self) -> Iterator[Issue]:
        return iter(self._issues.values())

    def __contains__(self, issue_id: object) -> bool:
        return issue_id in self._issues

    def __getitem__(self, issue_id: IssueId) -> Issue:
        return self._issues[issue_id]

    def get(self, issue_id: IssueId) -> Issue | None:
        return self._issues.get(issue_id)

    def ids(self) -> frozenset[IssueId]:
        return frozenset(self._issues)

    def _add_document(
        self, document: Any, source: str, default_repository: str | None
    ) -> None:
        records = unwrap_records(document, source)
        for index, raw in enumerate(records):
            issue = decode_record(
                raw,
                source=source,
                index=index,
                position=len(self._issues),
                default_repository=default_repository,
                known=self._issues,
            )
            if issue is None:
                continue
            existing = self._issues.get(issue.id)
            if existing is None:
                self._issues[issue.id] = issue
                continue

            # Same issue seen twice, e.g. in an issue list and a project export
            logger.debug("Merging duplicate record for %s from %s", issue.id, source)
            self._issues[issue.id] = existing.model_copy(
                update={"project_items": existing.project_items | issue.project_items}
            )


def unwrap_records(document: Any, source: str = DEFAULT_SOURCE) -> list[Any]:
    """Return the record array of a decoded JSON document.

    Raises:
        InputDecodeError: If the document is neither an array nor an object
            wrapping one
    """
    if isinstance(document, list):
        return document
    if isinstance(document, dict):
        for key in WRAPPER_KEYS:
            if isinstance(document.get(key), list):
                return document[key]
    raise InputDecodeError(
        source,
        "expected a JSON array of issues or an object with an 'items' array",
    )


def _describe_validation_error(error: ValidationError) -> str:
    problems = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"]) or "record"
        problems.append(f"{location}: {detail['msg']}")
    return "; ".join(problems)


def decode_record(
    raw: Any,
    source: str = DEFAULT_SOURCE,
    index: int = 0,
    position: int = 0,
    default_repository: str | None = None,
    known: Mapping[IssueId, Issue] | None = None,
) -> Issue | None:
    """Decode one ``gh`` record into an :class:`Issue`.

    Project items carry no ``state``. Such a record is accepted when its issue
    is already in ``known`` and takes the state loaded there.

    Args:
        raw: Decoded JSON object for one issue or project item
        source: Input name used in error messages
        index: Index of the record within its document
        position: Position to record on the issue for output ordering
        default_repository: ``owner/name`` used when the record has none
        known: Issues loaded so far

    Returns:
        The decoded issue, or None for a draft project item

    Raises:
        InputDecodeError: If a required field (number, state) is missing or
            malformed
    """
    try:
        record = GitHubIssueRecord.model_validate(raw)
    except ValidationError as e:
        raise InputDecodeError(
            source, f"record {index}: {_describe_validation_error(e)}"
        ) from e

    if record.number is None:
        if record.item_type == DRAFT_ISSUE_TYPE:
            logger.debug("Skipping draft item %r in %s", record.title, source)
            return None
        raise InputDecodeError(source, f"record {index}: number: Field required")

    repository = record.repository_slug()
    if repository is None and default_repository:
        repository = parse_slug(default_repository)
    if repository is None:
        logger.warning(
            "Could not determine the repository of issue #%d (%s) in %s",
            record.number,
            record.title,
            source,
        )
        repository = ""

    issue_id = IssueId(repository, record.number)
    state = record.state
    if state is None:
        existing = known.get(issue_id) if known is not None else None
        if existing is None:
            raise InputDecodeError(
                source,
                f"record {index}: state: Field required "
                f"({issue_id} is not in an issue list loaded before it)",
            )
        state = existing.state

    return Issue(
        id=issue_id,
        title=record.title,
        state=state,
        body=record.body or "",
        comments=tuple(comment.body or "" for comment in record.comments),
        project_items=frozenset(item.title for item in record.project_items),
        url=record.url,
        updated_at=record.updated_at,
        position=position,
    )


def load(
    records: Any,
    source: str = DEFAULT_SOURCE,
    default_repository: str | None = None,
) -> IssueStore:
    """Build a store from one decoded JSON document.

    Args:
        records: An array of records, or an object wrapping one
        source: Input name used in error messages
        default_repository: ``owner/name`` for records without repository info

    Returns:
        The populated store
    """
    return load_many([(source, records)], default_repository=default_repository)


def load_many(
    documents: Iterable[tuple[str, Any]], default_repository: str | None = None
) -> IssueStore:
    """Build one store from several ``(source, document)`` pairs, in order."""
    store = IssueStore()
    for source, document in documents:
        store._add_document(document, source, default_repository)
    logger.debug("Loaded %d issues", len(store))
    return store


def decode_json(text: str, source: str = DEFAULT_SOURCE) -> Any:
    """Parse JSON text, reporting failures against ``source``."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise InputDecodeError(source, f"invalid JSON: {e}") from e


def load_json(
    text: str,
    source: str = DEFAULT_SOURCE,
    default_repository: str | None = None,
) -> IssueStore:
    """Build a store from JSON text."""
    return load(decode_json(text, source), source, default_repository)
