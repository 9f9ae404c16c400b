"""
MCP server for Depsniff.

Exposes dependency detection to LLMs via the Model Context Protocol.

Tools:
    - depsniff_dependencies: List the dependencies of one file
    - depsniff_scan: List the dependencies of every file under a directory

Usage:
    Install: pip install depsniff
    Run: mcp-server-depsniff
"""

import asyncio

from depsniff.mcp.server import serve as _serve


def serve() -> None:
    """Entry point for the MCP server."""
    asyncio.run(_serve())


__all__ = ["serve"]
