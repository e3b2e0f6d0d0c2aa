"""Helpers for GitHub web URLs."""

import re
from urllib.parse import urlparse

GITHUB_HOSTS = {"github.com", "www.github.com"}

# owner and repository names as GitHub allows them
SLUG_PART_PATTERN = r"[\w.-]+"
SLUG_PATTERN = re.compile(rf"^({SLUG_PART_PATTERN})/({SLUG_PART_PATTERN})$")


def normalize_slug(owner: str, name: str) -> str:
    """Build the canonical ``owner/name`` slug (GitHub slugs ignore case)."""
    return f"{owner}/{name}".lower()


def parse_slug(text: str) -> str | None:
    """Parse ``owner/name`` into a canonical slug, or None if malformed."""
    match = SLUG_PATTERN.match(text.strip())
    if match is None:
        return None
    return normalize_slug(match.group(1), match.group(2))


def split_github_url(url: str) -> tuple[str, int | None] | None:
    """Split a github.com URL into its repository slug and item number.

    Args:
        url: Repository, issue or pull request URL

    Returns:
        ``(slug, number)`` where number is None for a bare repository URL,
        or None when the URL is not a github.com repository URL
    """
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        return None
    if parsed.netloc.lower() not in GITHUB_HOSTS:
        return None

    parts = [part for part in parsed.path.split("/") if part]
    if len(parts) < 2:
        return None
    slug = parse_slug(f"{parts[0]}/{parts[1]}")
    if slug is None:
        return None
    if len(parts) == 2:
        return slug, None

    if len(parts) >= 4 and parts[2] in ("issues", "pull") and parts[3].isdigit():
        return slug, int(parts[3])

    return None
