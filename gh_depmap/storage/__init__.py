"""Loading issues into an in-memory store."""

from .store import IssueStore, load, load_json, load_many

__all__ = ["IssueStore", "load", "load_json", "load_many"]
