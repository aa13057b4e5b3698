"""Database schema CLI commands."""

import typer
from sqlalchemy.exc import SQLAlchemyError

from src.greenmarket.runtime.context import get_config
from src.greenmarket.runtime.init_db import init_db

from ._common import console

db_app = typer.Typer(help="Manage the database schema")


@db_app.command("init")
def init() -> None:
    """Create all missing tables."""
    config = get_config()
    try:
        init_db(config)
    except SQLAlchemyError as e:
        console.print(f"[red]❌ Failed to initialize database: {e}[/red]")
        raise typer.Exit(code=1) from e
    console.print(f"[green]✅ Database ready at {config.database.url}[/green]")
