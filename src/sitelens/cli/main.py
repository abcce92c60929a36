"""Main CLI application using Click framework."""

import asyncio
import functools
import sys
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from ..config import get_settings
from ..export import ExportFormatter
from ..scraper import ScrapingOrchestrator
from ..storage import MemorySessionStorage, ScrapingOptions, ScrapingSession
from ..utils.logging import get_structured_logger, setup_logging
from .types import CLIContext, CommandResult, OutputFormat

console = Console()
logger = get_structured_logger(__name__)


def async_command(f):
    """Decorator to run async functions in Click commands."""

    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return asyncio.run(f(*args, **kwargs))
        except KeyboardInterrupt:
            console.print("❌ Operation cancelled by user", style="red")
            sys.exit(1)

    return wrapper


def handle_result(result: CommandResult, ctx: CLIContext) -> None:
    """Handle command result output."""
    if result.success:
        if result.message:
            console.print(f"✅ {result.message}", style="green")
        if result.data and ctx.verbose:
            console.print_json(data=result.data)
    else:
        console.print(f"❌ {result.message}", style="red")
        if result.data and ctx.debug:
            console.print_json(data=result.data)

    if not result.success:
        sys.exit(result.exit_code)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug output")
@click.pass_context
def cli(ctx, verbose: bool, debug: bool) -> None:
    """sitelens - extract images, colors, typography and content from web pages."""
    settings = get_settings()
    if debug:
        log_level = "DEBUG"
    elif verbose:
        log_level = settings.log_level
    else:
        log_level = "WARNING"
    setup_logging(log_level, json_logs=settings.json_logs, stream=sys.stderr)
    ctx.obj = CLIContext(verbose=verbose, debug=debug)


@cli.command()
@click.argument("url")
@click.option("--images/--no-images", default=True, help="Extract images")
@click.option("--colors/--no-colors", default=True, help="Extract color values")
@click.option("--typography/--no-typography", default=False, help="Extract fonts")
@click.option("--content/--no-content", default=False, help="Extract text content")
@click.option(
    "--format",
    "output_format",
    type=click.Choice([f.value for f in OutputFormat]),
    default=OutputFormat.TABLE.value,
    help="Output format",
)
@click.pass_obj
@async_command
async def scrape(
    ctx: CLIContext,
    url: str,
    images: bool,
    colors: bool,
    typography: bool,
    content: bool,
    output_format: str,
) -> None:
    """Scrape a single page and print the results."""
    if "://" not in url:
        url = f"https://{url}"

    options = ScrapingOptions(
        images=images, colors=colors, typography=typography, content=content
    )

    storage = MemorySessionStorage()
    async with ScrapingOrchestrator(storage) as orchestrator:
        created = await orchestrator.create_session(url, options)
        await orchestrator.wait_for_idle()
        session = await storage.get_session(created.id)

    if output_format == OutputFormat.TABLE.value:
        _print_session(session, ctx)
    else:
        payload = ExportFormatter().export([session], output_format)
        click.echo(payload.content)

    if session.error_message:
        handle_result(
            CommandResult(
                success=False,
                message=f"Scraping failed: {session.error_message}",
                data={"url": url},
                exit_code=1,
            ),
            ctx,
        )


@cli.command()
@click.option("--host", default=None, help="Bind address (defaults to settings)")
@click.option("--port", default=None, type=int, help="Port (defaults to settings)")
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host: Optional[str], port: Optional[int], reload: bool) -> None:
    """Start the REST API server."""
    from ..api.app import main as run_api

    run_api(host=host, port=port, reload=reload)


def _print_session(session: ScrapingSession, ctx: CLIContext) -> None:
    """Render a finished session as rich tables."""
    status_style = "green" if session.results is not None else "red"
    console.print(
        f"[bold]{session.url}[/bold] ({session.domain}) "
        f"[{status_style}]{session.status.value}[/{status_style}]"
    )

    results = session.results
    if results is None:
        return

    if results.images is not None:
        table = Table(title=f"Images ({len(results.images)})")
        table.add_column("Source", style="cyan")
        table.add_column("Alt")
        table.add_column("Size")
        for image in results.images:
            size = f"{image.width or '?'}x{image.height or '?'}"
            table.add_row(image.src, image.alt, size)
        console.print(table)

    if results.colors is not None:
        table = Table(title=f"Colors ({len(results.colors)})")
        table.add_column("Value", style="cyan")
        table.add_column("Usage")
        for color in results.colors:
            table.add_row(color.hex or color.rgb, color.usage)
        console.print(table)

    if results.typography is not None:
        table = Table(title=f"Typography ({len(results.typography)})")
        table.add_column("Element", style="cyan")
        table.add_column("Family")
        table.add_column("Size")
        table.add_column("Weight")
        for font in results.typography:
            table.add_row(
                font.element, font.font_family, font.font_size, font.font_weight
            )
        console.print(table)

    if results.content is not None:
        table = Table(title=f"Content ({len(results.content)})")
        table.add_column("Element", style="cyan")
        table.add_column("Level")
        table.add_column("Text")
        for block in results.content:
            text = block.text if ctx.verbose else block.text[:80]
            table.add_row(block.element, str(block.hierarchy), text)
        console.print(table)


if __name__ == "__main__":
    cli()
