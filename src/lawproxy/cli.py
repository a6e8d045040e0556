"""
Law Proxy CLI - Command Line Interface
"""

import asyncio
import json

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from dotenv import load_dotenv

from .config import load_settings
from .models import Success, TargetCollection

# Load environment variables
load_dotenv()

console = Console()

COLLECTIONS = {
    "law": TargetCollection.LAW,
    "precedent": TargetCollection.PRECEDENT,
    "interpretation": TargetCollection.INTERPRETATION,
}


def _run(operation):
    """Run one proxy operation with a short-lived upstream client."""
    from .proxy import LawProxyService, UpstreamClient

    settings = load_settings()

    async def _main():
        client = UpstreamClient(settings)
        try:
            return await operation(LawProxyService(settings, client))
        finally:
            await client.aclose()

    return asyncio.run(_main())


def _print_outcome(outcome) -> None:
    from .server.adapter import build_error, status_for

    if isinstance(outcome, Success):
        console.print_json(json.dumps(outcome.payload, ensure_ascii=False))
        return

    error = build_error(outcome)
    lines = [f"[bold red]{error.error}[/bold red]", error.message, f"OC: {error.oc_key}"]
    if error.outbound_address:
        lines.append(f"Outbound address: {error.outbound_address}")
    if error.details:
        lines.append(f"[dim]{error.details}[/dim]")
    console.print(Panel.fit("\n".join(lines), title=f"HTTP {status_for(outcome)}", border_style="red"))
    raise SystemExit(1)


@click.group()
@click.version_option(version="1.0.0")
def cli():
    """Law Proxy CLI - law.go.kr DRF API proxy"""
    pass


@cli.command()
@click.option("--host", default=None, help="Bind address (default: HOST or 0.0.0.0)")
@click.option("--port", "-p", default=None, type=int, help="Port (default: PORT or 5000)")
@click.option("--reload", is_flag=True, help="Auto-reload on code changes")
def serve(host: str, port: int, reload: bool):
    """Start the proxy server."""
    import uvicorn

    # Fails before any port is bound when OC is missing
    settings = load_settings()

    uvicorn.run(
        "lawproxy.server.main:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        reload=reload or settings.debug,
    )


@cli.command()
@click.argument("collection", type=click.Choice(list(COLLECTIONS)))
@click.argument("query")
@click.option("--page", "-p", default=None, help="Result page number")
def search(collection: str, query: str, page: str):
    """Search a collection and print the upstream payload."""
    target = COLLECTIONS[collection]
    outcome = _run(lambda service: service.search(target, query=query, page=page))
    _print_outcome(outcome)


@cli.command()
@click.argument("collection", type=click.Choice(list(COLLECTIONS)))
@click.argument("identifier")
def show(collection: str, identifier: str):
    """Fetch a single entry by its upstream ID."""
    target = COLLECTIONS[collection]
    outcome = _run(lambda service: service.detail(target, identifier))
    _print_outcome(outcome)


@cli.command()
def config():
    """Show the effective configuration (credential masked)."""
    settings = load_settings()

    table = Table(title="Configuration")
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value")

    for name, value in settings.model_dump().items():
        if name == "oc":
            value = "set" if value else "not set"
        table.add_row(name, str(value))

    console.print(table)


if __name__ == "__main__":
    cli()
