"""Mini README: Entry point CLI for categorybook.

This script exposes a Typer CLI with two commands: ``run`` serves the
FastAPI interface through uvicorn, and ``summary`` prints every stored
category with its totals straight from the configured data directory.
"""

from __future__ import annotations

from typing import Optional

import typer
import uvicorn

from categorybook.configuration import get_settings
from categorybook.finance import summarise
from categorybook.logging_utils import configure_root_logger
from categorybook.store import open_store

cli = typer.Typer(help="Track income and expenses per category.")


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: Optional[bool] = typer.Option(
        None,
        "--production/--development",
        help="Disable auto-reload. Defaults to on when the configured environment is production.",
    ),
) -> None:
    """Start the web interface using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    if production is None:
        production = settings.environment.strip().lower() == "production"
    configure_root_logger(settings.log_level)

    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Serving categories from {settings.data_directory} on {effective_host}:{effective_port}.\n"
        f"Open http://{browser_host}:{effective_port}/categories"
    )
    uvicorn.run(
        "categorybook.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def summary() -> None:
    """Print each stored category with its income, expense, and profit."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    store = open_store(settings)
    if not store.last_load.ok:
        typer.echo(f"Stored categories could not be read: {store.last_load.detail}", err=True)
        raise typer.Exit(code=1)
    if not len(store):
        typer.echo("No categories yet.")
        return
    for category in store.categories:
        totals = summarise(category)
        typer.echo(
            f"{category.name or '(unnamed)'}: {len(category.entries)} entries, "
            f"income {totals['total_income']:.2f}, "
            f"expense {totals['total_expense']:.2f}, "
            f"profit {totals['total_profit']:.2f}"
        )


if __name__ == "__main__":
    cli()
