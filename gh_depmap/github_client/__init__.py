"""Models for the JSON written by the GitHub CLI."""

from .models import (
    GitHubComment,
    GitHubIssueRecord,
    GitHubProjectItem,
    GitHubRepositoryRef,
)
from .urls import parse_slug, split_github_url

__all__ = [
    "GitHubComment",
    "GitHubIssueRecord",
    "GitHubProjectItem",
    "GitHubRepositoryRef",
    "parse_slug",
    "split_github_url",
]
