import asyncio
import json
import logging

from dataclasses import asdict
from pathlib import Path
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from typing import Optional

import typer

from codescout import __version__
from codescout.aggregator import highlight_result
from codescout.config import load_config
from codescout.models import STATUS_OK, AnalysisResult, QuerySpec
from codescout.repository import ProjectNotFoundError
from codescout.search import SearchFilter
from codescout.session import AnalysisSession

app = typer.Typer(
    help="codescout - heuristic code structure extraction and search",
    no_args_is_help=True,
)

console = Console()

_STATUS_MESSAGES = {
    "empty": "No {label} found.",
    "no_matches": "No {label} matched the search criteria.",
    "invalid_pattern": "Search pattern is not a valid regular expression; {label} skipped.",
}


@app.command()
def analyze(
    root: Path = typer.Argument(..., help="Directory to analyze"),
    search: str = typer.Option("", "--search", "-s", help="Only keep entities matching this term"),
    regex: Optional[bool] = typer.Option(None, "--regex/--no-regex", help="Treat the term as a regular expression"),
    case_sensitive: Optional[bool] = typer.Option(None, "--case-sensitive/--ignore-case", help="Honor case when matching"),
    highlight: Optional[bool] = typer.Option(None, "--highlight/--no-highlight", help="Highlight matches in the output"),
    extensions: str = typer.Option("", "--extensions", "-e", help="Comma-separated extensions, e.g. .cs,.js"),
    exclude: str = typer.Option("", "--exclude", "-x", help="Exclude paths matching this pattern"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    verbose: bool = typer.Option(False, "--verbose", help="Log analysis progress to stderr"),
):
    """Extract functions, classes and components from a codebase.

    Args:
        root: Directory to analyze
    """
    _configure_logging(verbose)
    config = load_config(root)
    query = QuerySpec(
        search_term=search,
        use_regex=config.search.use_regex if regex is None else regex,
        case_sensitive=config.search.case_sensitive if case_sensitive is None else case_sensitive,
        highlight_matches=config.search.highlight_matches if highlight is None else highlight,
    )

    try:
        result = AnalysisSession().analyze(root, query, extensions, exclude, config)
    except ProjectNotFoundError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)

    if query.search_term and query.highlight_matches:
        try:
            search_filter = SearchFilter.from_query(query, marker=config.search.highlight_marker)
            result = highlight_result(result, search_filter)
        except ValueError:
            # Batches already reported the invalid pattern
            pass

    if json_output:
        typer.echo(json.dumps(asdict(result), indent=2))
    else:
        _print_result(result)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _print_result(result: AnalysisResult) -> None:
    """Print one rich table per dialect that has files in the project."""
    file_types = Table(title="File Types")
    file_types.add_column("Extension")
    file_types.add_column("Count", justify="right")
    for extension, count in result.file_types.items():
        file_types.add_row(escape(extension), str(count))
    console.print(file_types)

    if ".cs" in result.file_types:
        table = Table(title="C# Classes")
        for column in ("Namespace", "Class", "Methods", "File"):
            table.add_column(column)
        for cls in result.csharp.classes:
            table.add_row(
                escape(cls.namespace),
                escape(cls.name),
                escape(", ".join(method.name for method in cls.methods)),
                escape(Path(cls.file_path).name),
            )
        _print_table(table, result.csharp.status, "C# classes")

    if ".js" in result.file_types:
        table = Table(title="JavaScript")
        for column in ("Kind", "Name", "Members", "File"):
            table.add_column(column)
        for function in result.javascript.functions:
            table.add_row(
                "function",
                escape(function.name),
                escape(", ".join(function.parameters)),
                escape(Path(function.file_path).name),
            )
        for cls in result.javascript.classes:
            table.add_row(
                "class",
                escape(cls.name),
                escape(", ".join(method.name for method in cls.methods)),
                escape(Path(cls.file_path).name),
            )
        _print_table(table, result.javascript.status, "JavaScript functions or classes")

    if ".jsx" in result.file_types or ".tsx" in result.file_types:
        table = Table(title="React Components")
        for column in ("Name", "Props", "Hooks", "File"):
            table.add_column(column)
        for component in result.react.components:
            table.add_row(
                escape(component.name),
                escape(", ".join(component.props)),
                escape(", ".join(component.hooks)),
                escape(Path(component.file_path).name),
            )
        _print_table(table, result.react.status, "React components")

    if ".vue" in result.file_types:
        table = Table(title="Vue Components")
        for column in ("Name", "Props", "Data", "Methods", "Computed", "Setup", "File"):
            table.add_column(column)
        for component in result.vue.components:
            table.add_row(
                escape(component.name),
                escape(", ".join(component.props)),
                escape(", ".join(component.data)),
                escape(", ".join(component.methods)),
                escape(", ".join(component.computed_properties)),
                "yes" if component.is_alternate_syntax else "",
                escape(Path(component.file_path).name),
            )
        _print_table(table, result.vue.status, "Vue components")

    if result.failed_files:
        console.print("[bold red]Failed files:[/bold red]")
        for failed in result.failed_files:
            console.print(f"  {escape(failed)}")


def _print_table(table: Table, status: str, label: str) -> None:
    if status == STATUS_OK:
        console.print(table)
    else:
        console.print(f"[dim]{_STATUS_MESSAGES[status].format(label=label)}[/dim]")


@app.command()
def mcp_server():
    """Start the MCP server exposing codescout tools.

    This command starts the Model Context Protocol server that exposes
    codescout's analysis and search tools via structured JSON-RPC.
    """
    from codescout.mcp_server import main

    asyncio.run(main())


def _version_callback(value: bool):
    """Show version and exit."""
    if value:
        console.print(f"codescout version {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    )):
    pass
