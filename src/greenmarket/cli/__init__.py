"""Main CLI application module."""

import typer

from .category_commands import categories_app
from .db_commands import db_app
from .user_commands import users_app

# Create the main CLI application
app = typer.Typer(
    help="Green Market API management tool",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(db_app, name="db")
app.add_typer(categories_app, name="categories")
app.add_typer(users_app, name="users")


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address (config app.host)"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port (config app.port)"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Run the API with uvicorn."""
    import uvicorn

    from src.greenmarket.runtime.context import get_config

    config = get_config()
    uvicorn.run(
        "src.greenmarket.main:app",
        host=host or config.app.host,
        port=port or config.app.port,
        reload=reload,
        access_log=False,  # We handle access logging in middleware
    )


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
