"""Mermaid flowchart rendering of a dependency graph.

Output is deterministic: nodes follow input order and edges are sorted, so
the same graph always renders to the same text.
Syntax reference: https://mermaid.js.org/syntax/flowchart.html
"""

import json
import re

from ..models import Graph, Issue, IssueId

OPEN_CLASS = "open"
CLOSED_CLASS = "closed"

# GitHub's issue state colors (open green, closed purple)
CLASS_STYLES = {
    OPEN_CLASS: "fill:#1a7f37,stroke:#1a7f37,color:#ffffff",
    CLOSED_CLASS: "fill:#8250df,stroke:#8250df,color:#ffffff",
}

LEGEND = (
    "A &rarr; B means A blocks B, or B depends on A.",
    "Press &harr; for full screen.",
)

# Mermaid entity codes. "#" goes first so later codes are not re-escaped.
LABEL_ESCAPES = (
    ("#", "#35;"),
    ('"', "#quot;"),
    ("&", "#amp;"),
    ("<", "#lt;"),
    (">", "#gt;"),
    ("[", "#91;"),
    ("]", "#93;"),
    ("|", "#124;"),
    ("`", "#96;"),
)

NODE_ID_UNSAFE = re.compile(r"[^A-Za-z0-9_]")
WHITESPACE = re.compile(r"\s+")


def mermaid_quote(text: str) -> str:
    """Quote ``text`` as a Mermaid label that cannot break the grammar."""
    text = WHITESPACE.sub(" ", text).strip()
    for character, entity in LABEL_ESCAPES:
        text = text.replace(character, entity)
    return f'"{text}"'


def node_ids(issues: list[Issue]) -> dict[IssueId, str]:
    """Assign each issue a Mermaid node id, unique within the diagram.

    Single-repository diagrams use the bare issue number. Otherwise the id
    is the sanitized ``owner_name_number``, suffixed on collision.
    """
    single_repository = len({issue.id.repository for issue in issues}) <= 1
    ids: dict[IssueId, str] = {}
    used: set[str] = set()

    for issue in issues:
        if single_repository:
            base = str(issue.id.number)
        else:
            base = NODE_ID_UNSAFE.sub("_", f"{issue.id.repository}_{issue.id.number}")
        candidate = base
        suffix = 2
        while candidate in used:
            candidate = f"{base}_{suffix}"
            suffix += 1
        used.add(candidate)
        ids[issue.id] = candidate

    return ids


def node_label(issue: Issue, qualified: bool = False) -> str:
    reference = f"#{issue.id.number}"
    if qualified:
        reference = f"{issue.id.repository}{reference}"
    return f"{reference} {issue.title}".strip()


def _click_target(url: str) -> str | None:
    url = WHITESPACE.sub("", url)
    if not url.startswith(("http://", "https://")):
        return None
    return '"' + url.replace('"', "%22") + '"'


def render_flowchart(graph: Graph, title: str | None = None) -> str:
    """Render ``graph`` as Mermaid flowchart source (no markdown fence)."""
    lines: list[str] = []

    if title:
        title_text = WHITESPACE.sub(" ", title).strip()
        lines.extend(
            ["---", f"title: {json.dumps(title_text, ensure_ascii=False)}", "---"]
        )

    lines.append("flowchart LR")
    for class_name, style in CLASS_STYLES.items():
        lines.append(f"  classDef {class_name} {style}")

    issues = graph.ordered_nodes()
    ids = node_ids(issues)
    qualified = len({issue.id.repository for issue in issues}) > 1

    for issue in issues:
        node_id = ids[issue.id]
        lines.append(f"  {node_id}({mermaid_quote(node_label(issue, qualified))})")
        lines.append(
            f"  class {node_id} {CLOSED_CLASS if issue.is_closed else OPEN_CLASS}"
        )
        target = _click_target(issue.url)
        if target:
            lines.append(f"  click {node_id} {target}")

    for edge in graph.ordered_edges():
        lines.append(f"  {ids[edge.blocker]} --> {ids[edge.dependent]}")

    return "\n".join(lines)


def render(
    graph: Graph,
    header: str | None = None,
    *,
    title: str | None = None,
    legend: bool = True,
) -> str:
    """Render ``graph`` as a markdown document holding a Mermaid block.

    Args:
        graph: Filtered graph to draw
        header: Markdown emitted verbatim before everything else
        title: Diagram title shown by Mermaid
        legend: Whether to explain the arrow direction above the diagram

    Returns:
        Markdown text ending in a newline
    """
    parts: list[str] = []
    if header is not None:
        parts.extend([header, ""])
    if legend:
        parts.extend([*LEGEND, ""])
    parts.extend(["```mermaid", render_flowchart(graph, title), "```"])
    return "\n".join(parts) + "\n"
