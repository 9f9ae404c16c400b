"""MCP server implementation for Depsniff."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from depsniff.core.dispatcher import default_dispatcher
from depsniff.core.exceptions import DepsniffError
from depsniff.core.scanner import Scanner

server = Server("depsniff")


def _resolve(path: str) -> Path:
    """Resolve a tool path argument against the working directory."""
    candidate = Path(path)
    if not candidate.is_absolute():
        candidate = Path.cwd() / candidate
    return candidate


@server.list_tools()  # type: ignore[no-untyped-call, untyped-decorator]
async def list_tools() -> list[Tool]:
    """List available tools."""
    return [
        Tool(
            name="depsniff_dependencies",
            description=(
                "List the module dependencies of a JavaScript, TypeScript or stylesheet "
                "file, in source order. The module system is detected automatically."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "path": {
                        "type": "string",
                        "description": "File to read (relative to the working directory)",
                    },
                    "type": {
                        "type": "string",
                        "description": "Dialect override (commonjs, amd, es6, ts, tsx, css, "
                        "scss, sass, less, stylus)",
                    },
                    "include_core": {
                        "type": "boolean",
                        "description": "Keep Node.js built-in modules (default: true)",
                        "default": True,
                    },
                    "mixed_imports": {
                        "type": "boolean",
                        "description": "Report both ES module imports and CommonJS requires",
                        "default": False,
                    },
                },
                "required": ["path"],
            },
        ),
        Tool(
            name="depsniff_scan",
            description=(
                "Scan a directory and list the dependencies of every supported file. "
                "Files that cannot be read are reported as errors."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "path": {
                        "type": "string",
                        "description": "Directory to scan (default: working directory)",
                        "default": ".",
                    },
                    "exclude": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Additional glob patterns to exclude",
                    },
                },
            },
        ),
    ]


@server.call_tool()  # type: ignore[untyped-decorator]
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls."""
    try:
        if name == "depsniff_dependencies":
            result = _handle_dependencies(
                arguments["path"],
                arguments.get("type"),
                arguments.get("include_core", True),
                arguments.get("mixed_imports", False),
            )
        elif name == "depsniff_scan":
            result = _handle_scan(
                arguments.get("path", "."),
                arguments.get("exclude"),
            )
        else:
            result = {"error": f"Unknown tool: {name}"}

        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    except OSError as e:
        return [TextContent(type="text", text=json.dumps({"error": str(e)}))]
    except DepsniffError as e:
        return [TextContent(type="text", text=json.dumps({"error": str(e)}))]


def _handle_dependencies(
    path: str, dialect: str | None, include_core: bool, mixed_imports: bool
) -> dict[str, Any]:
    """Handle depsniff_dependencies tool."""
    options: dict[str, Any] = {"includeCore": include_core}
    if dialect:
        options["type"] = dialect
    if mixed_imports:
        options["es6"] = {"mixedImports": True}

    file = _resolve(path)
    dependencies = default_dispatcher().paperwork(file, options)
    return {"file": str(file), "dependencies": dependencies}


def _handle_scan(path: str, exclude: list[str] | None) -> dict[str, Any]:
    """Handle depsniff_scan tool."""
    directory = _resolve(path)
    if not directory.is_dir():
        return {"error": f"Not a directory: {directory}"}

    report = Scanner(default_dispatcher()).scan_directory(directory, exclude_patterns=exclude)
    return {
        "files": report.dependencies,
        "skipped": report.skipped,
        "errors": report.errors,
    }


async def serve() -> None:
    """Run the MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
