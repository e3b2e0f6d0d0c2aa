"""Test configuration and fixtures."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

RecordFactory = Callable[..., dict[str, Any]]


def make_record(
    number: int,
    title: str = "",
    state: str = "OPEN",
    body: str = "",
    repo: str = "octo/app",
    comments: list[str] | None = None,
    projects: list[str] | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """Build a record shaped like ``gh issue list --json`` output."""
    record: dict[str, Any] = {
        "number": number,
        "title": title,
        "state": state,
        "body": body,
        "url": f"https://github.com/{repo}/issues/{number}",
        "comments": [
            {"author": {"login": "octocat"}, "body": comment}
            for comment in comments or []
        ],
        "projectItems": [
            {"status": {"name": "Todo"}, "title": project} for project in projects or []
        ],
    }
    record.update(extra)
    return record


@pytest.fixture
def record() -> RecordFactory:
    """Factory for ``gh`` issue records."""
    return make_record


@pytest.fixture
def write_issues(tmp_path: Path) -> Callable[..., Path]:
    """Write records to a JSON file and return its path."""

    def _write(records: Any, name: str = "issues.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(records), encoding="utf-8")
        return path

    return _write
