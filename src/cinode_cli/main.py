"""CLI entrypoint using typer."""

from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path

import structlog
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.prompt import Prompt

from cinode_cli.render import (
    candidates_table,
    employees_table,
    profile_table,
    skilled_users_table,
    stats_table,
)
from cinode_client.client import CinodeClient
from cinode_client.exporters.excel import export_candidates_to_excel
from cinode_client.exporters.pdf import ResumePdfDownloader
from cinode_client.observability import bind_command_context, configure_logging
from cinode_core.config.settings import Settings
from cinode_core.exceptions import CinodeError
from cinode_infra.repositories.snapshot_repo import SnapshotRepository
from cinode_infra.store.factory import create_snapshot_store

app = typer.Typer(
    name="cinode",
    help="Sync employees, resumes and candidates from the Cinode API",
)
console = Console()
logger = structlog.get_logger()

VERSION = "0.1.0"

DEFAULT_ENV = {
    "CINODE_TOKEN_ENDPOINT": "https://api.cinode.com/token",
    "CINODE_API_ENDPOINT": "https://api.cinode.com/v0.1",
}

DUMMY_ENV = {
    "CINODE_APP_ID": "dummy",
    "CINODE_APP_SECRET": "dummy123",
    "CINODE_COMPANY_ID": "dummy456",
    "EMAIL": "dummy",
    "PASSWORD": "dummy123",
}


@dataclass
class Session:
    """API client and snapshot repository for one command."""

    client: CinodeClient
    repository: SnapshotRepository


@asynccontextmanager
async def open_session(settings: Settings) -> AsyncIterator[Session]:
    """Open the snapshot store and API client, closing both on exit."""
    repository = SnapshotRepository(create_snapshot_store(settings))
    try:
        async with CinodeClient(settings, repository) as client:
            yield Session(client=client, repository=repository)
    finally:
        repository.close()


def _load_settings(verbose: bool) -> Settings:
    """Load settings from the environment and .env, exiting on missing values."""
    try:
        settings = Settings()  # type: ignore[call-arg]
    except ValidationError as e:
        missing = ", ".join(str(err["loc"][0]) for err in e.errors())
        console.print(f"[red]Error:[/red] invalid or missing settings: {missing}")
        console.print("Run [bold]cinode init[/bold] to create a .env file.")
        raise typer.Exit(code=1) from e

    if verbose:
        settings.log_level = "DEBUG"
    configure_logging(settings)
    return settings


def _run(command: str, action: Callable[[Settings], Awaitable[None]], verbose: bool) -> None:
    """Run one async action with settings and logging; CinodeError exits with 1."""
    settings = _load_settings(verbose)
    bind_command_context(command)
    try:
        asyncio.run(action(settings))
    except CinodeError as e:
        logger.error("command_failed", error=str(e), error_type=type(e).__name__)
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1) from e


# ---------------------------------------------------------------------------
# Actions shared by the commands and the interactive menu
# ---------------------------------------------------------------------------


async def update_employees(settings: Settings) -> None:
    """Fetch every employee's resume and store it."""
    async with open_session(settings) as session:
        if await session.repository.get_employee_ids():
            console.print("[dim]Note: existing employee snapshot will be updated[/dim]")
        stored = await session.client.employee_aggregator.fetch_employee_details()
    console.print(f"[green]Stored {len(stored)} employee resume(s)[/green]")


async def read_employees(settings: Settings) -> None:
    """Show the stored employees."""
    async with open_session(settings) as session:
        employees = await session.client.employee_aggregator.read_employee_data()
    if not employees:
        console.print("[yellow]No employee IDs found[/yellow]")
        return
    console.print(employees_table(employees))


async def show_stats(settings: Settings) -> None:
    """Show resume statistics over the stored employees."""
    async with open_session(settings) as session:
        stats = await session.client.employee_aggregator.get_stats()
    console.print(stats_table(stats))


async def download_pdfs(settings: Settings) -> None:
    """Download the resume PDF of every user in the stats listing."""
    async with open_session(settings) as session:
        stats = await session.client.employee_aggregator.get_stats()

    failed = 0
    async with ResumePdfDownloader(settings) as downloader:
        for index, user in enumerate(stats.users):
            if index:
                await asyncio.sleep(settings.pdf_delay_ms / 1000)
            result = await downloader.download(user.name, user.resume_id)
            if result.success:
                console.print(f"[green]Downloaded resume for {user.name}[/green]")
            else:
                console.print(f"[red]Failed to download resume for {user.name}:[/red] {result.error}")
                failed += 1

    if failed:
        console.print(f"[yellow]Failed to download {failed} resume(s)[/yellow]")
    else:
        console.print("[green]All resumes downloaded successfully[/green]")


async def show_candidates(settings: Settings) -> None:
    """Show the stored candidates."""
    async with open_session(settings) as session:
        candidates = await session.repository.list_candidates()
    console.print(candidates_table(candidates))


async def sync_candidates(settings: Settings) -> None:
    """Fetch detailed candidates, store them and export them to Excel."""
    async with open_session(settings) as session:
        candidates = await session.client.candidate_aggregator.get_candidates_with_details()
        if not candidates:
            console.print("[yellow]No candidates fetched; stored snapshot left unchanged[/yellow]")
            return
        await session.repository.save_candidates(candidates)
    path = export_candidates_to_excel(candidates, settings.export_path)
    console.print(f"[green]Stored {len(candidates)} candidate(s) and wrote {path}[/green]")


async def export_candidates(settings: Settings) -> None:
    """Export the stored candidates to Excel."""
    async with open_session(settings) as session:
        candidates = await session.repository.list_candidates()
    path = export_candidates_to_excel(candidates, settings.export_path)
    console.print(f"[green]Excel file created: {path}[/green]")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

VerboseOption = typer.Option(False, "-v", "--verbose", help="Enable debug logging")


@app.command()
def init(
    env_file: Path = typer.Option(Path(".env"), "--env-file", help="File to write"),
    dummy: bool = typer.Option(False, "--dummy", help="Write placeholder values"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
) -> None:
    """Create a .env file with API credentials."""
    if env_file.exists() and not force:
        console.print(f"[red]Error:[/red] {env_file} already exists (use --force)")
        raise typer.Exit(code=1)

    values = dict(DEFAULT_ENV)
    if dummy:
        values.update(DUMMY_ENV)
    else:
        values["EMAIL"] = typer.prompt("Web app email (for PDF download)", default="")
        values["PASSWORD"] = typer.prompt(
            "Web app password", default="", hide_input=True, show_default=False
        )
        values["CINODE_APP_ID"] = typer.prompt("CINODE_APP_ID")
        values["CINODE_APP_SECRET"] = typer.prompt("CINODE_APP_SECRET", hide_input=True)
        values["CINODE_COMPANY_ID"] = typer.prompt("CINODE_COMPANY_ID")

    env_file.write_text("".join(f"{key}={value}\n" for key, value in values.items()))
    console.print(f"[green]Created {env_file}[/green]")


@app.command()
def update(verbose: bool = VerboseOption) -> None:
    """Fetch all employees' resumes into the local snapshot."""
    _run("update", update_employees, verbose)


@app.command()
def read(
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON instead of a table"),
    verbose: bool = VerboseOption,
) -> None:
    """Show the employees stored in the local snapshot."""
    if not as_json:
        _run("read", read_employees, verbose)
        return

    async def _dump(settings: Settings) -> None:
        async with open_session(settings) as session:
            employees = await session.client.employee_aggregator.read_employee_data()
        typer.echo(json.dumps([e.to_payload() for e in employees], indent=2, ensure_ascii=False))

    _run("read", _dump, verbose)


@app.command()
def stats(verbose: bool = VerboseOption) -> None:
    """Show users and resume counts for the stored employees."""
    _run("stats", show_stats, verbose)


@app.command()
def pdf(verbose: bool = VerboseOption) -> None:
    """Download resume PDFs for the stored employees."""
    _run("pdf", download_pdfs, verbose)


@app.command()
def candidates(verbose: bool = VerboseOption) -> None:
    """Show the candidates stored in the local snapshot."""
    _run("candidates", show_candidates, verbose)


@app.command("sync-candidates")
def sync_candidates_command(verbose: bool = VerboseOption) -> None:
    """Fetch detailed candidates, store them and export to Excel."""
    _run("sync-candidates", sync_candidates, verbose)


@app.command()
def export(verbose: bool = VerboseOption) -> None:
    """Export the stored candidates to Excel."""
    _run("export", export_candidates, verbose)


@app.command()
def skill(
    term: str = typer.Argument(..., help="Skill name to search for"),
    verbose: bool = VerboseOption,
) -> None:
    """Find users with work experience in a skill."""

    async def _search(settings: Settings) -> None:
        async with open_session(settings) as session:
            users = await session.client.employee_aggregator.search_users_by_skill(term)
        console.print(skilled_users_table(term, users))

    _run("skill", _search, verbose)


@app.command()
def profile(
    user_id: int = typer.Argument(..., help="Company user id"),
    verbose: bool = VerboseOption,
) -> None:
    """Show education, languages and skills of one user."""

    async def _profile(settings: Settings) -> None:
        async with open_session(settings) as session:
            aggregator = session.client.employee_aggregator
            user_profile = await aggregator.get_user_profile(user_id)
            skills = await aggregator.get_user_skills(user_id)
        console.print(profile_table(user_profile, skills))

    _run("profile", _profile, verbose)


MENU_ACTIONS: dict[str, tuple[str, Callable[[Settings], Awaitable[None]] | None]] = {
    "update": ("Update Database", update_employees),
    "read": ("Read Employee Data", read_employees),
    "stats": ("Show Statistics", show_stats),
    "pdf": ("Download Resume PDF", download_pdfs),
    "candidates": ("Read Candidates Database", show_candidates),
    "sync": ("Show Detailed Company Candidates", sync_candidates),
    "export": ("Export Candidates to Excel", export_candidates),
    "exit": ("Exit", None),
}


@app.command()
def menu(verbose: bool = VerboseOption) -> None:
    """Interactive menu offering every action until Exit is chosen."""
    settings = _load_settings(verbose)
    while True:
        for key, (label, _) in MENU_ACTIONS.items():
            console.print(f"  [bold]{key:<11}[/bold] {label}")
        choice = Prompt.ask(
            "What would you like to do?", choices=list(MENU_ACTIONS), default="exit"
        )
        label, action = MENU_ACTIONS[choice]
        if action is None:
            return

        bind_command_context(choice)
        try:
            asyncio.run(action(settings))
        except CinodeError as e:
            logger.error("menu_action_failed", action=choice, error=str(e))
            console.print(f"[red]{label} failed:[/red] {e}")


@app.command()
def version() -> None:
    """Show version."""
    console.print(f"cinode-sync v{VERSION}")


if __name__ == "__main__":
    app()
