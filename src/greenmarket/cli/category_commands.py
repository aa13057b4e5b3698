"""Product category CLI commands."""

import typer
from rich.table import Table

from src.greenmarket.entities.category import Category, CategoryRepository

from ._common import cli_session, console

categories_app = typer.Typer(help="Manage product categories")


@categories_app.command("add")
def add_category(
    label: str = typer.Argument(..., help="Category label, e.g. 'Vegetables'"),
) -> None:
    """Add a product category."""
    label = label.strip()
    if not label:
        console.print("[red]❌ Category label cannot be empty[/red]")
        raise typer.Exit(code=1)

    created = None
    with cli_session() as session:
        repo = CategoryRepository(session)
        if repo.get_by_label(label) is None:
            created = repo.create(Category(product_category=label))

    if created is None:
        console.print(f"[yellow]Category '{label}' already exists[/yellow]")
        raise typer.Exit(code=1)
    console.print(
        f"[green]✅ Created category {created.id}: {created.product_category}[/green]"
    )


@categories_app.command("list")
def list_categories() -> None:
    """List all product categories."""
    with cli_session() as session:
        categories = CategoryRepository(session).list_all()

    if not categories:
        console.print("[yellow]No categories found[/yellow]")
        return

    table = Table(title="Product categories")
    table.add_column("ID", style="cyan")
    table.add_column("Label", style="green")
    for category in categories:
        table.add_row(str(category.id), category.product_category)
    console.print(table)
