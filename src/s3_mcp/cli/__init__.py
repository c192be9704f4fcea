"""
CLI module for s3-mcp.

Provides the command-line interface for running the MCP server and
trying out the storage tools.
"""

from s3_mcp.cli.main import cli

__all__ = ["cli"]
