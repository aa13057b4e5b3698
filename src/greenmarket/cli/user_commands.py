"""User account CLI commands."""

import typer

from src.greenmarket.entities.user import UserRepository

from ._common import cli_session, console

users_app = typer.Typer(help="Manage marketplace accounts")


@users_app.command("promote")
def promote_user(
    email: str = typer.Argument(..., help="Email of the account to change"),
    role: str = typer.Option("admin", "--role", "-r", help="Role to assign"),
) -> None:
    """Assign a role to an existing account."""
    with cli_session() as session:
        repo = UserRepository(session)
        user = repo.get_by_email(email.strip().lower())
        if user is not None:
            user.role = role
            repo.update(user)

    if user is None:
        console.print(f"[red]❌ No user with email {email}[/red]")
        raise typer.Exit(code=1)
    console.print(f"[green]✅ {user.email} now has role '{role}'[/green]")
