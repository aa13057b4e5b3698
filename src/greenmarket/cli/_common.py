from collections.abc import Iterator
from contextlib import contextmanager

import typer
from rich.console import Console
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from src.greenmarket.core.services.database import DbSessionService
from src.greenmarket.runtime.context import get_config

console = Console()


@contextmanager
def cli_session() -> Iterator[Session]:
    """Open a committed session against the configured database.

    Database failures are reported on the console and end the command.
    """
    config = get_config()
    db_session_service = DbSessionService(config.database, config.app.environment)
    try:
        with db_session_service.session_scope() as session:
            yield session
    except SQLAlchemyError as e:
        console.print(f"[red]❌ Database error: {e}[/red]")
        raise typer.Exit(code=1) from e
    finally:
        db_session_service.dispose()
