"""Main CLI entry point."""

import typer
from dotenv import load_dotenv
from rich.console import Console

from .depmap import map_dependencies

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="gh-depmap",
    help="GitHub issue dependency maps as Mermaid flowcharts",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


app.command(name="map", context_settings={"help_option_names": ["-h", "--help"]})(
    map_dependencies
)


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def version() -> None:
    """Show version information."""
    from gh_depmap import __version__

    console.print(f"gh-depmap v{__version__}")


if __name__ == "__main__":
    app()
