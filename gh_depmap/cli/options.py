"""Standardized CLI option definitions.

Shared here so shorthand flags stay consistent as commands are added.
"""

import typer

# Input options
ISSUES_OPTION = typer.Option(
    None,
    "--issues",
    "-i",
    help="JSON issue list from gh; use '-' for stdin. Can be used multiple times.",
)

REPO_OPTION = typer.Option(
    None,
    "--repo",
    "-r",
    help="Default owner/name for records without repository info "
    "(defaults to GH_DEPMAP_REPO)",
)

# Filter options
ALL_OPTION = typer.Option(
    False,
    "--all",
    "-a",
    help="Output all issues; don't drop issues without dependencies",
)

INCLUDE_PROJECT_OPTION = typer.Option(
    None, "--include-project", help="Only include issues in the given project title"
)

PRIOR_DAYS_OPTION = typer.Option(
    None,
    "--prior-days",
    help="Only include closed issues updated in the last N days "
    "(defaults to GH_DEPMAP_PRIOR_DAYS; unset keeps all)",
)

# Output options
HEADER_OPTION = typer.Option(
    None, "--header", help="Header markdown to output at the top of the diagram"
)

TITLE_OPTION = typer.Option(None, "--title", help="Mermaid diagram title")

LEGEND_OPTION = typer.Option(
    True, "--legend/--no-legend", help="Explain the arrow direction above the diagram"
)

OUTPUT_OPTION = typer.Option(
    None, "--output", "-o", help="Output file path (default: print to stdout)"
)

# Behavior options
WORKERS_OPTION = typer.Option(
    None,
    "--workers",
    "-w",
    help="Threads used to scan issue text (defaults to GH_DEPMAP_WORKERS or 1)",
)

VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Enable debug logging")
