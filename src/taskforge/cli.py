"""Command line entry point: ``taskforge serve | init-db | seed``."""

import click

from taskforge.core.config import Settings
from taskforge.core.logging import configure_logging, log
from taskforge.db.client import DbClient
from taskforge.db.models import Task
from taskforge.db.seed import distribution, seed_tasks
from taskforge.db.store import TaskStore
from taskforge.ui import console, display_distribution, display_table_structure, print_welcome


@click.group()
@click.option("--database-url", default=None, help="Override TASKFORGE_DATABASE_URL.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, database_url: str | None, verbose: bool) -> None:
    overrides = {"database_url": database_url} if database_url else {}
    if verbose:
        overrides["log_level"] = "DEBUG"
    settings = Settings(**overrides)
    configure_logging(settings.log_level)
    ctx.obj = settings


@cli.command()
@click.option("--host", default=None, help="Bind address (default from settings).")
@click.option("--port", type=int, default=None, help="Port (default from settings).")
@click.option("--reload", is_flag=True, help="Reload on code changes.")
@click.pass_obj
def serve(settings: Settings, host: str | None, port: int | None, reload: bool) -> None:
    """Run the API with uvicorn."""
    import uvicorn

    host = host or settings.host
    port = port or settings.port
    print_welcome(settings.project_name, settings.version, host, port)
    uvicorn.run(
        "taskforge.forge:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


@cli.command("init-db")
@click.pass_obj
def init_db(settings: Settings) -> None:
    """Create the tasks table and its indexes."""
    client = DbClient(settings.db_config())
    try:
        with log.timed("Schema creation"):
            client.create_all()
        display_table_structure(Task.__table__)
    finally:
        client.dispose()


@cli.command()
@click.option("-n", "--count", type=click.IntRange(min=1), default=40, show_default=True)
@click.option("--clear/--no-clear", default=True, show_default=True, help="Delete existing tasks first.")
@click.option("--seed", "random_seed", type=int, default=None, help="Random seed for repeatable data.")
@click.pass_obj
def seed(settings: Settings, count: int, clear: bool, random_seed: int | None) -> None:
    """Insert random sample tasks."""
    client = DbClient(settings.db_config())
    try:
        client.create_all()
        tasks = seed_tasks(TaskStore(client), count=count, clear=clear, seed=random_seed)
    finally:
        client.dispose()

    console.print(f"[green]✓[/green] Created {len(tasks)} tasks")
    display_distribution("Status Distribution", distribution(tasks, "status"))
    display_distribution("Priority Distribution", distribution(tasks, "priority"))


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
