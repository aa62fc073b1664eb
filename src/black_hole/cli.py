"""Command line interface for black-hole.

Provides a Typer-based CLI for running the server and inspecting its
configuration and cache.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from black_hole import __version__
from black_hole.classifier import classify
from black_hole.config import DEFAULT_CONFIG_PATH, Settings, load_settings
from black_hole.errors import BlackHoleError, ConfigError
from black_hole.models import LocalAsset
from black_hole.storage.cache import CacheStore

console = Console()

app = typer.Typer(
    name="black-hole",
    help="Static asset server with a caching unpkg proxy",
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    """Callback for --version flag."""
    if value:
        console.print(f"black-hole version {__version__}")
        raise typer.Exit()


def _load(config_path: Path) -> Settings:
    try:
        return load_settings(config_path)
    except ConfigError as e:
        console.print(f"[red]Error loading config: {escape(str(e))}[/red]")
        raise typer.Exit(1)


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """black-hole: serve static files and cache unpkg packages locally.

    ## Commands

    * [bold cyan]serve[/bold cyan] - Start the HTTP server
    * [bold cyan]classify[/bold cyan] - Show how a /static/ path is routed
    * [bold cyan]config-show[/bold cyan] - Show the effective configuration
    * [bold cyan]cache-clear[/bold cyan] - Delete all cached package files
    """
    pass


@app.command()
def serve(
    config_path: Path = typer.Option(
        DEFAULT_CONFIG_PATH,
        "--config",
        "-c",
        help="Path to config file",
    ),
    host: str = typer.Option(None, "--host", help="Override server.host"),
    port: int = typer.Option(None, "--port", "-p", help="Override server.port"),
) -> None:
    """Start the HTTP server."""
    import uvicorn

    from black_hole.logging_config import setup_logging
    from black_hole.main import create_app

    settings = _load(config_path)
    if host:
        settings.server.host = host
    if port:
        settings.server.port = port

    logger = setup_logging(settings.log)
    logger.info(f"Configuration loaded: {settings.model_dump_json()}")
    logger.info(
        f"Server started at http://{settings.server.host}:{settings.server.port}"
    )

    uvicorn.run(
        create_app(settings),
        host=settings.server.host,
        port=settings.server.port,
        log_level="warning",
    )


@app.command("classify")
def classify_path(
    path: str = typer.Argument(..., help="Path after /static/, e.g. vue@3.2.0/dist/vue.js"),
) -> None:
    """Show how a request path is classified."""
    try:
        asset = classify(path)
    except BlackHoleError as e:
        console.print(f"[red]{e.status_code}: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if isinstance(asset, LocalAsset):
        console.print(f"[cyan]local[/cyan] name={asset.name}")
    else:
        console.print(
            f"[cyan]remote[/cyan] package={asset.package} "
            f"version={asset.version} file={asset.file}"
        )


@app.command("config-show")
def config_show(
    config_path: Path = typer.Option(
        DEFAULT_CONFIG_PATH,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Show the effective configuration."""
    settings = _load(config_path)

    table = Panel.fit(
        f"[cyan]Proxy enabled:[/cyan] {settings.proxy.enabled}\n"
        f"[cyan]Static dir:[/cyan] {settings.proxy.static_dir}\n"
        f"[cyan]Cache dir:[/cyan] {settings.proxy.cache_dir}\n"
        f"[cyan]Fetch timeout:[/cyan] {settings.proxy.fetch_timeout}s\n"
        f"[cyan]Listen:[/cyan] {settings.server.host}:{settings.server.port}\n"
        f"[cyan]UI dir:[/cyan] {settings.server.ui_dir}\n"
        f"[cyan]Log:[/cyan] {settings.log.level if settings.log.enabled else 'disabled'}",
        title="Configuration",
        border_style="green",
    )
    console.print(table)


@app.command("cache-clear")
def cache_clear(
    config_path: Path = typer.Option(
        DEFAULT_CONFIG_PATH,
        "--config",
        "-c",
        help="Path to config file",
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete all cached package files."""
    settings = _load(config_path)
    cache_dir = settings.proxy.cache_dir

    if not yes and not typer.confirm(f"Delete everything under {cache_dir}?"):
        raise typer.Exit(1)

    CacheStore(cache_dir).clear()
    console.print(f"[green]Cleared cache at {cache_dir}[/green]")


if __name__ == "__main__":
    app()
