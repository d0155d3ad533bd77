"""MCP server that exposes codescout analysis and search tools.

The server keeps one analysis session per process: ``codescout_analyze``
scans a codebase and ``codescout_search`` narrows the last scan with a new
term without reading any file again.
"""

import asyncio
import json
from dataclasses import asdict
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from codescout.aggregator import highlight_result
from codescout.models import AnalysisResult, QuerySpec
from codescout.repository import ProjectNotFoundError
from codescout.search import InvalidSearchPatternError, SearchFilter
from codescout.session import AnalysisSession, SessionEmptyError


# Initialize MCP server
app = Server("codescout")

session = AnalysisSession()

_QUERY_PROPERTIES = {
    "search_term": {
        "type": "string",
        "description": "Only keep entities whose name or attributes match this term",
    },
    "use_regex": {
        "type": "boolean",
        "description": "Treat the search term as a regular expression",
    },
    "case_sensitive": {
        "type": "boolean",
        "description": "Honor case when matching",
    },
    "highlight_matches": {
        "type": "boolean",
        "description": "Wrap matched text in highlight markers",
    },
}


@app.list_tools()
async def list_tools() -> list[Tool]:
    """Declare available tools."""
    return [
        Tool(
            name="codescout_analyze",
            description=(
                "Analyze a codebase and extract its structure: file type counts, the "
                "directory tree, C# namespaces and classes, JavaScript functions and "
                "classes, React components (props, hooks) and Vue components (props, "
                "data, methods, computed). Optionally filter everything by a search term."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "root": {
                        "type": "string",
                        "description": "Directory to analyze",
                    },
                    **_QUERY_PROPERTIES,
                    "extensions": {
                        "type": "string",
                        "description": "Comma-separated file extensions to count (e.g. '.cs,.js')",
                    },
                    "exclude": {
                        "type": "string",
                        "description": "Exclude paths matching this pattern (e.g. '*/bin/*')",
                    },
                },
                "required": ["root"],
            },
        ),
        Tool(
            name="codescout_search",
            description=(
                "Search the most recent codescout_analyze result with a new term. "
                "Does not rescan the codebase."
            ),
            inputSchema={
                "type": "object",
                "properties": _QUERY_PROPERTIES,
                "required": ["search_term"],
            },
        ),
    ]


@app.call_tool()
async def call_tool(name: str, arguments: Any) -> list[TextContent]:
    """Handle tool calls by routing to the session."""
    if name == "codescout_analyze":
        return await _handle_analyze(arguments)
    elif name == "codescout_search":
        return await _handle_search(arguments)

    raise ValueError(f"Unknown tool: {name}")


def _query_from(arguments: dict) -> QuerySpec:
    return QuerySpec(
        search_term=arguments.get("search_term", ""),
        use_regex=arguments.get("use_regex", False),
        case_sensitive=arguments.get("case_sensitive", False),
        highlight_matches=arguments.get("highlight_matches", True),
    )


def _render(result: AnalysisResult, query: QuerySpec) -> list[TextContent]:
    if query.search_term and query.highlight_matches:
        try:
            result = highlight_result(result, SearchFilter.from_query(query, marker=session.marker))
        except InvalidSearchPatternError:
            pass
    return [TextContent(type="text", text=json.dumps(asdict(result), indent=2))]


async def _handle_analyze(arguments: dict) -> list[TextContent]:
    """Handle codescout_analyze tool calls.

    Args:
        arguments: Tool arguments; ``root`` is required

    Returns:
        List containing a single TextContent with the JSON result
    """
    query = _query_from(arguments)
    try:
        result = await asyncio.to_thread(
            session.analyze,
            arguments["root"],
            query,
            arguments.get("extensions", ""),
            arguments.get("exclude", ""),
        )
    except ProjectNotFoundError as e:
        return [TextContent(type="text", text=f"Error: {e}")]
    except Exception as e:
        return [TextContent(type="text", text=f"Unexpected error: {e}")]

    return _render(result, query)


async def _handle_search(arguments: dict) -> list[TextContent]:
    """Handle codescout_search tool calls.

    Args:
        arguments: Tool arguments; ``search_term`` is required

    Returns:
        List containing a single TextContent with the JSON result
    """
    query = _query_from(arguments)
    try:
        result = session.refilter(query)
    except SessionEmptyError as e:
        return [TextContent(type="text", text=str(e))]
    except InvalidSearchPatternError as e:
        return [TextContent(type="text", text=f"Error: {e}")]

    return _render(result, query)


async def main():
    """Run the MCP server using stdio transport."""
    async with stdio_server() as (read_stream, write_stream):
        await app.run(
            read_stream,
            write_stream,
            app.create_initialization_options(),
        )


if __name__ == "__main__":
    asyncio.run(main())
