"""psowatch CLI application using Typer.

Operator utilities: database initialization, identity linking and
supervisor reassignment without going through the HTTP API.
"""

import asyncio
from typing import Any, Awaitable, List, Optional

import typer
from rich.console import Console
from rich.table import Table
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from psowatch.application.commands import SignInCommand, SignInResult
from psowatch.application.services import (
    ReassignmentResult,
    SupervisorReassignmentOrchestrator,
)
from psowatch.domain.shared.exceptions import DomainException, ErrorCode
from psowatch.domain.user import InvalidRoleError, SupervisorAssignment
from psowatch.infrastructure.notifications import build_notification_client
from psowatch.infrastructure.persistence.sqlalchemy.init_db import (
    create_tables,
    display_url,
)
from psowatch.infrastructure.persistence.sqlalchemy.repositories import (
    SQLAlchemyRepositoryFactory,
)
from psowatch.presentation.log_config import configure_logging
from psowatch_config.settings import get_settings

app = typer.Typer(
    name="psowatch",
    help="psowatch - PSO supervision admin CLI",
    no_args_is_help=True,
)
console = Console()


# Create db subcommand group
db_app = typer.Typer(
    name="db",
    help="Database utilities",
    no_args_is_help=True,
)
app.add_typer(db_app)


@db_app.command("init")
def db_init() -> None:
    """Create all missing database tables (idempotent)."""
    configure_logging()
    settings = get_settings()
    console.print(f"Database: [cyan]{display_url(settings.database_url)}[/cyan]")

    asyncio.run(create_tables())
    console.print("[bold green]Database schema is up to date[/bold green]")


@app.command("reassign")
def reassign(
    caller: str = typer.Option(
        ...,
        "--caller",
        help="Identity-provider object id of the acting user",
    ),
    users: List[str] = typer.Option(
        ...,
        "--user",
        "-u",
        help="Email of a PSO to reassign (repeatable)",
    ),
    supervisor: Optional[str] = typer.Option(
        None,
        "--supervisor",
        "-s",
        help="Email of the new supervisor; omit to unassign",
    ),
) -> None:
    """Assign PSOs to a supervisor, or unassign them."""
    configure_logging()
    assignment = SupervisorAssignment.create(
        user_emails=users,
        new_supervisor_email=supervisor,
    )

    result = _run(_reassign(caller, assignment))
    _print_result(assignment, result)


@app.command("link")
def link(
    caller: str = typer.Option(
        ...,
        "--caller",
        help="Identity-provider object id to link",
    ),
    email: str = typer.Option(..., "--email", "-e", help="Email of the user"),
    name: Optional[str] = typer.Option(None, "--name", help="Display name"),
) -> None:
    """Link an identity-provider id to a user, provisioning an Employee if unknown."""
    configure_logging()
    result = _run(_link(caller, email, name))

    user = result.user
    if not result.linked:
        status = "[dim]already linked[/dim]"
    elif result.created:
        status = "[bold green]provisioned[/bold green]"
    else:
        status = "[bold green]linked[/bold green]"
    console.print(f"{user.email} ({user.role.value}): {status}")


def _run(work: Awaitable[Any]) -> Any:
    """Run ``work`` and turn application errors into a non-zero exit."""
    try:
        return asyncio.run(work)
    except DomainException as e:
        console.print(f"[bold red]{e.code.value}[/bold red]: {e.message}")
        raise typer.Exit(code=1) from e
    except InvalidRoleError as e:
        console.print(
            f"[bold red]{ErrorCode.INTERNAL_ERROR.value}[/bold red]: "
            f"stored role {e.value!r} is not a known role"
        )
        raise typer.Exit(code=1) from e


async def _link(caller_id: str, email: str, name: Optional[str]) -> SignInResult:
    engine = create_async_engine(get_settings().database_url, pool_pre_ping=True)
    session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    try:
        async with session_maker() as session:
            command = SignInCommand.from_factory(SQLAlchemyRepositoryFactory(session))
            return await command.execute(caller_id, email, name)
    finally:
        await engine.dispose()


async def _reassign(
    caller_id: str,
    assignment: SupervisorAssignment,
) -> ReassignmentResult:
    settings = get_settings()
    engine = create_async_engine(settings.database_url, pool_pre_ping=True)
    notifications = build_notification_client(settings)
    session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    try:
        async with session_maker() as session:
            orchestrator = SupervisorReassignmentOrchestrator.from_factory(
                SQLAlchemyRepositoryFactory(session),
                notifier=notifications,
                presence_broadcaster=notifications,
            )
            return await orchestrator.reassign_supervisor(caller_id, assignment)
    finally:
        await notifications.close()
        await engine.dispose()


def _print_result(assignment: SupervisorAssignment, result: ReassignmentResult):
    table = Table(title="Supervisor reassignment")
    table.add_column("PSO", style="cyan")
    for email in assignment.user_emails:
        table.add_row(email)
    console.print(table)

    target = assignment.new_supervisor_email or "[dim]no supervisor[/dim]"
    console.print(
        f"[bold green]{result.affected_count}[/bold green] user(s) now under "
        f"{target} ({result.changed_count} changed)"
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
