"""Tests for the issue store."""

import logging

import pytest

from gh_depmap.errors import InputDecodeError
from gh_depmap.models import IssueId, IssueState
from gh_depmap.storage.store import (
    decode_record,
    load,
    load_json,
    load_many,
    unwrap_records,
)


class TestLoad:
    """Test building a store from decoded records."""

    def test_lookup_and_order(self, record) -> None:
        """Test lookup by id and iteration in input order."""
        store = load(
            [
                record(3, "Third"),
                record(1, "First", state="CLOSED"),
                record(2, "Second"),
            ]
        )

        assert len(store) == 3
        assert [issue.id.number for issue in store] == [3, 1, 2]
        assert [issue.position for issue in store] == [0, 1, 2]
        assert store[IssueId("octo/app", 1)].title == "First"
        assert store[IssueId("octo/app", 1)].state is IssueState.CLOSED
        assert IssueId("octo/app", 2) in store
        assert IssueId("octo/other", 2) not in store
        assert store.get(IssueId("octo/app", 99)) is None

    def test_same_number_in_two_repositories(self, record) -> None:
        """Test that the repository is part of the identity."""
        store = load(
            [record(1, "App", repo="octo/app"), record(1, "Lib", repo="octo/lib")]
        )

        assert len(store) == 2
        assert store[IssueId("octo/lib", 1)].title == "Lib"

    def test_decodes_text_fields(self, record) -> None:
        """Test body, comments and projects on the loaded issue."""
        store = load(
            [
                record(
                    5,
                    "Five",
                    body="body text",
                    comments=["one", "two"],
                    projects=["Q1", "Q2"],
                )
            ]
        )
        issue = store[IssueId("octo/app", 5)]

        assert issue.body == "body text"
        assert issue.comments == ("one", "two")
        assert issue.project_items == frozenset({"Q1", "Q2"})
        assert issue.url == "https://github.com/octo/app/issues/5"

    def test_wrapped_items(self, record) -> None:
        """Test the ``{"items": [...]}`` wrapper from project exports."""
        store = load({"items": [record(1), record(2)], "totalCount": 2})
        assert len(store) == 2

    def test_missing_number_is_rejected(self, record) -> None:
        """Test that a record without a number aborts loading."""
        bad = record(1)
        del bad["number"]

        with pytest.raises(InputDecodeError, match="record 1: number"):
            load([record(2), bad], source="issues.json")

    def test_missing_state_is_rejected(self, record) -> None:
        """Test that a record without a state aborts loading."""
        bad = record(1)
        del bad["state"]

        with pytest.raises(InputDecodeError) as exc_info:
            load([bad], source="issues.json")

        assert exc_info.value.source == "issues.json"
        assert "state" in exc_info.value.message

    def test_default_repository(self) -> None:
        """Test records without repository info use the default."""
        store = load([{"number": 4, "state": "OPEN"}], default_repository="Octo/App")
        assert IssueId("octo/app", 4) in store

    def test_unknown_repository_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test records without any repository info load with a warning."""
        with caplog.at_level(logging.WARNING):
            store = load([{"number": 4, "state": "OPEN", "title": "Orphan"}])

        assert IssueId("", 4) in store
        assert "Could not determine the repository" in caplog.text

    def test_duplicate_records_merge(self, record) -> None:
        """Test that a repeated issue keeps its first position and merges projects."""
        store = load_many(
            [
                ("issues.json", [record(1, "One"), record(2, "Two")]),
                ("project.json", [record(1, "One again", projects=["Q1"])]),
            ]
        )

        assert len(store) == 2
        issue = store[IssueId("octo/app", 1)]
        assert issue.title == "One"
        assert issue.position == 0
        assert issue.project_items == frozenset({"Q1"})

    def test_project_item_takes_loaded_state(self, record) -> None:
        """Test a project item without state merges into its loaded issue."""
        item = {
            "content": {
                "type": "Issue",
                "number": 1,
                "repository": "octo/app",
                "title": "One",
                "url": "https://github.com/octo/app/issues/1",
            },
            "id": "PVTI_1",
            "status": "Todo",
        }
        store = load_many(
            [
                ("issues.json", [record(1, "One", state="CLOSED")]),
                ("project.json", {"items": [item], "totalCount": 1}),
            ]
        )

        assert len(store) == 1
        assert store[IssueId("octo/app", 1)].state is IssueState.CLOSED

    def test_project_item_without_loaded_issue(self) -> None:
        """Test a stateless project item for an unknown issue is rejected."""
        item = {"content": {"type": "Issue", "number": 1, "repository": "octo/app"}}

        with pytest.raises(InputDecodeError, match="record 0: state") as exc_info:
            load({"items": [item]}, source="project.json")

        assert exc_info.value.source == "project.json"

    def test_draft_items_are_skipped(self, record) -> None:
        draft = {"content": {"type": "DraftIssue", "title": "Idea"}, "id": "PVTI_2"}
        store = load({"items": [record(1), draft]})

        assert [issue.id.number for issue in store] == [1]


class TestDecoding:
    """Test document and JSON decoding errors."""

    def test_unwrap_rejects_scalars(self) -> None:
        with pytest.raises(InputDecodeError, match="expected a JSON array"):
            unwrap_records(42, "numbers.json")

    def test_unwrap_rejects_objects_without_items(self) -> None:
        with pytest.raises(InputDecodeError):
            unwrap_records({"data": []}, "data.json")

    def test_invalid_json(self) -> None:
        """Test that invalid JSON names its source."""
        with pytest.raises(InputDecodeError) as exc_info:
            load_json("[{", source="broken.json")

        assert exc_info.value.source == "broken.json"
        assert "invalid JSON" in str(exc_info.value)

    def test_load_json(self, record) -> None:
        store = load_json(
            '[{"number": 1, "state": "OPEN",'
            ' "url": "https://github.com/o/r/issues/1"}]'
        )
        assert IssueId("o/r", 1) in store

    def test_decode_record_position(self, record) -> None:
        issue = decode_record(record(8), position=4)
        assert issue.position == 4
        assert issue.id == IssueId("octo/app", 8)
