"""CLI command for rendering issue dependency maps."""

import logging
import sys
from collections.abc import Iterator
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from ..config import Settings
from ..errors import InputDecodeError
from ..graph.builder import build_graph
from ..graph.filters import FilterOptions, apply_filters
from ..render.mermaid import render
from ..storage.store import decode_json, load_many
from .options import (
    ALL_OPTION,
    HEADER_OPTION,
    INCLUDE_PROJECT_OPTION,
    ISSUES_OPTION,
    LEGEND_OPTION,
    OUTPUT_OPTION,
    PRIOR_DAYS_OPTION,
    REPO_OPTION,
    TITLE_OPTION,
    VERBOSE_OPTION,
    WORKERS_OPTION,
)

# Status goes to stderr; stdout carries the diagram
console = Console(stderr=True)

STDIN_SOURCE = "-"


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr, at DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stderr,
        force=True,
    )


def read_sources(paths: list[Path]) -> Iterator[tuple[str, str]]:
    """Yield ``(source name, text)`` for each input, reading '-' from stdin.

    Raises:
        InputDecodeError: If an input is not valid UTF-8
    """
    for path in paths:
        stdin = str(path) == STDIN_SOURCE
        source = "<stdin>" if stdin else str(path)
        try:
            text = sys.stdin.read() if stdin else path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise InputDecodeError(source, f"not valid UTF-8: {e}") from e
        yield source, text


def map_dependencies(
    issues: list[Path] | None = ISSUES_OPTION,
    repo: str | None = REPO_OPTION,
    all_issues: bool = ALL_OPTION,
    include_project: str | None = INCLUDE_PROJECT_OPTION,
    prior_days: int | None = PRIOR_DAYS_OPTION,
    header: str | None = HEADER_OPTION,
    title: str | None = TITLE_OPTION,
    legend: bool = LEGEND_OPTION,
    output: Path | None = OUTPUT_OPTION,
    workers: int | None = WORKERS_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Render the dependency map of GitHub issues as a Mermaid flowchart.

    An issue depends on every issue it lists in a task list item or on a
    "Depends on:" line. Arrows point from the blocker to the dependent.

    Examples:
        # Map the open and closed issues of a repository
        gh issue list --state all --json number,title,state,body,comments,url \\
            | gh-depmap map --issues -

        # Combine several exports and keep one project board
        gh-depmap map --issues frontend.json --issues backend.json \\
            --include-project "Q1 Roadmap" --header "## Q1 dependencies"
    """
    configure_logging(verbose)

    try:
        settings = Settings()
        settings.validate()
    except ValueError as e:
        console.print(f"❌ Configuration error: {escape(str(e))}")
        raise typer.Exit(1)

    if workers is not None and workers < 1:
        console.print("❌ Error: --workers must be at least 1")
        raise typer.Exit(1)
    if prior_days is not None and prior_days < 0:
        console.print("❌ Error: --prior-days must not be negative")
        raise typer.Exit(1)

    try:
        documents = [
            (source, decode_json(text, source))
            for source, text in read_sources(issues or [])
        ]
        store = load_many(documents, default_repository=repo or settings.repository)
    except InputDecodeError as e:
        console.print(f"❌ Could not decode {escape(e.source)}: {escape(e.message)}")
        raise typer.Exit(1)
    except OSError as e:
        console.print(f"❌ Could not read input: {escape(str(e))}")
        raise typer.Exit(1)

    graph, report = build_graph(store, workers=workers or settings.workers)

    if report.unresolved_count:
        console.print(
            f"⚠️  Skipped {report.unresolved_count} references to issues "
            "not found in the input"
        )
    if report.malformed_count:
        console.print(
            f"⚠️  Ignored {report.malformed_count} 'Depends on' lines "
            "without an issue reference"
        )

    filtered = apply_filters(
        graph,
        FilterOptions(
            include_project=include_project,
            all=all_issues,
            closed_within_days=(
                prior_days if prior_days is not None else settings.prior_days
            ),
        ),
    )
    content = render(filtered, header, title=title, legend=legend)

    if output:
        try:
            output.write_text(content, encoding="utf-8")
        except OSError as e:
            console.print(
                f"❌ Could not write {escape(str(output))}: {escape(str(e))}"
            )
            raise typer.Exit(1)
        console.print(
            f"✅ Wrote {len(filtered.nodes)} issues and "
            f"{len(filtered.edges)} dependencies to {escape(str(output))}"
        )
    else:
        typer.echo(content, nl=False)
