"""Finding and resolving issue references in markdown text.

Three reference forms are recognized:

* ``#123``, meaning issue 123 of the referencing issue's repository
* ``owner/name#123``
* ``https://github.com/owner/name/issues/123`` (or ``/pull/123``), found by
  scanning the text for links
"""

import re
from collections.abc import Callable, Iterator

from ..github_client.urls import normalize_slug, split_github_url
from ..models import IssueId

# http(s) links run until whitespace, quotes or brackets
LINK_PATTERN = re.compile(r"https?://[^\s<>\"'`()\[\]]+", re.IGNORECASE)
LINK_TRAILING_PUNCTUATION = ".,;:!?"

# Names without dots, so file anchors like docs/guide.md#12 are not references
REPO_NUMBER_PATTERN = re.compile(
    r"(?<![\w./-])([A-Za-z0-9_-]+)/([A-Za-z0-9_-]+)#(\d+)(?![\w-])"
)

# Not preceded by a name character, "/" or "&" (HTML entities like &#35;)
HASH_NUMBER_PATTERN = re.compile(r"(?<![\w/&-])#(\d+)(?![\w-])")

Resolver = Callable[[IssueId, str], IssueId | None]


def find_links(text: str) -> Iterator[tuple[int, int, str]]:
    """Yield ``(start, end, url)`` for each link in ``text``.

    Trailing sentence punctuation is not part of the link, so
    ``see https://github.com/o/r/issues/1.`` yields the URL without the dot.
    """
    for match in LINK_PATTERN.finditer(text):
        url = match.group(0).rstrip(LINK_TRAILING_PUNCTUATION)
        if url:
            yield match.start(), match.start() + len(url), url


def _blank(text: str, start: int, end: int) -> str:
    return text[:start] + " " * (end - start) + text[end:]


def scan_references(text: str) -> list[str]:
    """Return the issue references in ``text`` in the order they appear.

    Links that are not GitHub issue or pull request URLs are skipped. Each
    matched span is blanked before the next form is scanned, so the
    ``#issuecomment-1`` fragment of a URL or the ``#3`` of ``o/r#3`` is never
    read again as a bare ``#3``.
    """
    found: list[tuple[int, str]] = []

    for start, end, url in find_links(text):
        split = split_github_url(url)
        if split is not None and split[1] is not None:
            found.append((start, url))
        text = _blank(text, start, end)

    for match in REPO_NUMBER_PATTERN.finditer(text):
        found.append((match.start(), match.group(0)))
        text = _blank(text, match.start(), match.end())

    for match in HASH_NUMBER_PATTERN.finditer(text):
        found.append((match.start(), match.group(0)))

    found.sort(key=lambda item: item[0])
    return [reference for _, reference in found]


def resolve_reference(referencing: IssueId, text: str) -> IssueId | None:
    """Resolve one reference relative to the issue it appears in.

    Args:
        referencing: Id of the issue whose text contains the reference
        text: A single reference, e.g. ``#12``, ``octo/app#12`` or a URL

    Returns:
        The referenced issue id, or None if ``text`` is not a reference
    """
    text = text.strip()

    match = HASH_NUMBER_PATTERN.fullmatch(text)
    if match:
        return IssueId(referencing.repository, int(match.group(1)))

    match = REPO_NUMBER_PATTERN.fullmatch(text)
    if match:
        owner, name, number = match.groups()
        return IssueId(normalize_slug(owner, name), int(number))

    split = split_github_url(text)
    if split is not None and split[1] is not None:
        return IssueId(split[0], split[1])

    return None
