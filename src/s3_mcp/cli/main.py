"""
CLI for the S3 MCP server.

Runs the MCP stdio server and offers one-shot commands that execute a
single storage tool call locally, which is handy for checking bucket
restrictions and credentials before wiring the server into an agent.
"""

import asyncio
import json
import logging
import sys
from typing import Optional

import click
from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.syntax import Syntax
from rich.text import Text

from s3_mcp import __version__
from s3_mcp.settings import S3Settings
from s3_mcp.storage import LLMStorageTools, S3Resource, ToolResult

# Load environment variables
load_dotenv()

# stdout carries the MCP protocol when serving, so all output goes to stderr
console = Console(stderr=True)

ENVIRONMENT_HELP = """
\b
Environment Variables:
  AWS_REGION              AWS region where your S3 buckets are located
  S3_BUCKETS              Comma-separated list of allowed S3 bucket names
  S3_MAX_BUCKETS          Maximum number of buckets to return in listing
  AWS_ENDPOINT            Custom S3 endpoint (e.g. MinIO)
  AWS_S3_FORCE_PATH_STYLE Set to "true" for path-style addressing
  AWS_ACCESS_KEY_ID       AWS access key (if using explicit credentials)
  AWS_SECRET_ACCESS_KEY   AWS secret key (if using explicit credentials)
"""


def setup_logging(verbose: bool = False) -> None:
    """Setup rich logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )
    # Reduce noise from the AWS SDK
    for name in ("boto3", "botocore", "urllib3", "s3transfer"):
        logging.getLogger(name).setLevel(logging.WARNING)


def load_settings(config_path: Optional[str]) -> S3Settings:
    """Load settings from a file or the environment, exiting on error."""
    try:
        if config_path:
            return S3Settings.from_file(config_path)
        return S3Settings()
    except FileNotFoundError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(1)
    except (ValidationError, ValueError) as e:
        console.print(f"[bold red]Configuration error:[/bold red] {e}")
        sys.exit(1)


def build_tools(settings: S3Settings) -> LLMStorageTools:
    """Wire the client, access policy, resource and tools together."""
    resource = S3Resource(settings.create_client(), settings.to_access_config())
    return LLMStorageTools(resource)


@click.group(epilog=ENVIRONMENT_HELP)
@click.version_option(version=__version__, prog_name="s3-mcp")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to a YAML/JSON config file (default: environment variables)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[str], verbose: bool):
    """S3 MCP server - restricted S3 access for AI agents."""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


@cli.command()
@click.pass_context
def serve(ctx: click.Context):
    """
    Run the MCP server on stdio.

    Examples:

        # Allow two buckets only
        S3_BUCKETS=reports,invoices s3-mcp serve

        # Against a local MinIO
        AWS_ENDPOINT=http://localhost:9000 AWS_S3_FORCE_PATH_STYLE=true s3-mcp serve
    """
    from s3_mcp.server import StorageMCPServer

    logger = logging.getLogger(__name__)
    settings = load_settings(ctx.obj["config_path"])
    logger.info(f"Loaded {settings}")

    mcp_server = StorageMCPServer(build_tools(settings))
    try:
        asyncio.run(mcp_server.run_stdio())
    except Exception as e:
        console.print(f"[bold red]Error starting server:[/bold red] {e}")
        sys.exit(1)


@cli.command()
@click.pass_context
def tools(ctx: click.Context):
    """Print the published tool schemas as JSON."""
    settings = load_settings(ctx.obj["config_path"])
    schemas = build_tools(settings).get_tool_schemas()
    click.echo(json.dumps(schemas, indent=2))


@cli.command()
@click.pass_context
def buckets(ctx: click.Context):
    """
    List the buckets visible to the agent.

    Examples:

        s3-mcp buckets
    """
    _run_tool(ctx, "list-buckets", {})


@cli.command()
@click.argument("bucket")
@click.option("--prefix", "-p", default="", help="Key prefix to filter objects")
@click.option(
    "--max-keys",
    "-n",
    type=click.IntRange(min=1),
    default=1000,
    help="Maximum number of objects to return",
)
@click.pass_context
def objects(ctx: click.Context, bucket: str, prefix: str, max_keys: int):
    """
    List objects in a bucket.

    Examples:

        s3-mcp objects reports --prefix 2024/
    """
    _run_tool(
        ctx, "list-objects", {"bucket": bucket, "prefix": prefix, "maxKeys": max_keys}
    )


@cli.command()
@click.argument("bucket")
@click.argument("key")
@click.pass_context
def get(ctx: click.Context, bucket: str, key: str):
    """
    Retrieve an object the way the agent would see it.

    Examples:

        s3-mcp get reports 2024/summary.pdf
    """
    _run_tool(ctx, "get-object", {"bucket": bucket, "key": key})


def _run_tool(ctx: click.Context, tool_name: str, arguments: dict) -> None:
    """Execute a single tool call and print its result."""
    settings = load_settings(ctx.obj["config_path"])
    storage_tools = build_tools(settings)

    with console.status(f"[bold green]Running {tool_name}..."):
        result = asyncio.run(storage_tools.execute_tool(tool_name, arguments))

    _print_result(tool_name, result)
    if result.is_error:
        sys.exit(1)


def _print_result(tool_name: str, result: ToolResult) -> None:
    """Render a tool result."""
    if result.is_error:
        console.print(Text(result.text, style="bold red"))
        return

    if tool_name in ("list-buckets", "list-objects"):
        console.print(Syntax(result.text, "json"))
    else:
        console.print(Panel(Text(result.text), title=tool_name))


if __name__ == "__main__":
    cli()
