"""Command-line interface for Storefront."""

import asyncio
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

import click
from rich import box
from rich.console import Console
from rich.table import Table
from sqlalchemy.ext.asyncio import AsyncSession

from storefront import __version__
from storefront.config import ConfigError, StorefrontConfig, load_config, validate_config
from storefront.errors import StorefrontError
from storefront.logging_config import configure_logging, get_logger

console = Console()
logger = get_logger(__name__)


@asynccontextmanager
async def session_scope(config: StorefrontConfig) -> AsyncIterator[AsyncSession]:
    """A session on a short-lived engine; committed on success."""
    from storefront.db.session import create_engine_from_config, create_session_factory

    engine = create_engine_from_config(config.database)
    factory = create_session_factory(engine)
    try:
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
    finally:
        await engine.dispose()


def _get_config(ctx: click.Context) -> StorefrontConfig:
    return ctx.obj["config"]


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True),
    default=None,
    help="Path to config file (storefront.yaml, .storefrontrc or storefront.toml)",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Set logging level (overrides config file)",
)
@click.option(
    "--log-format",
    type=click.Choice(["json", "human"], case_sensitive=False),
    default=None,
    help="Log output format (overrides config file)",
)
@click.option(
    "--log-file",
    type=click.Path(),
    default=None,
    help="Write logs to file (overrides config file)",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[str],
    log_level: Optional[str],
    log_format: Optional[str],
    log_file: Optional[str],
) -> None:
    """Storefront - catalog and admin backend

    Configuration priority (highest to lowest):
    1. Command-line options
    2. Environment variables
    3. Config file (--config, storefront.yaml, .storefrontrc, storefront.toml)
    4. Built-in defaults
    """
    try:
        loaded = load_config(config_file=config)
    except ConfigError as e:
        console.print(f"[red]Config error:[/red] {e}")
        ctx.exit(1)

    configure_logging(
        level=log_level or loaded.logging.level,
        json_output=(log_format or loaded.logging.format) == "json",
        log_file=log_file or loaded.logging.file,
    )

    ctx.ensure_object(dict)
    ctx.obj["config"] = loaded


@cli.command()
@click.option("--host", default=None, help="Bind address (overrides config)")
@click.option("--port", type=int, default=None, help="Port (overrides config)")
@click.pass_context
def serve(ctx: click.Context, host: Optional[str], port: Optional[int]) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    from storefront.api.app import create_app

    config = _get_config(ctx)
    try:
        for warning in validate_config(config):
            console.print(f"[yellow]Warning:[/yellow] {warning}")
    except ConfigError as e:
        console.print(f"[red]Config error:[/red] {e}")
        ctx.exit(1)

    final_host = host or config.server.host
    final_port = port or config.server.port
    console.print(f"[bold cyan]Storefront API[/bold cyan] on http://{final_host}:{final_port}")
    uvicorn.run(create_app(config), host=final_host, port=final_port, log_config=None)


@cli.command("init-db")
@click.pass_context
def init_db(ctx: click.Context) -> None:
    """Create all tables directly (development; use alembic in production)."""
    from storefront.db.models import Base
    from storefront.db.session import create_engine_from_config

    async def _create() -> None:
        engine = create_engine_from_config(_get_config(ctx).database)
        try:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        finally:
            await engine.dispose()

    asyncio.run(_create())
    console.print("[green]✓[/green] Tables created")


@cli.command()
@click.option("--admin-email", envvar="ADMIN_EMAIL", default="admin@example.com", show_default=True)
@click.option("--admin-password", envvar="ADMIN_PASSWORD", default="admin123", show_default=True)
@click.pass_context
def seed(ctx: click.Context, admin_email: str, admin_password: str) -> None:
    """Create the admin user and sample categories and products."""
    from storefront.db.seed import seed_database

    config = _get_config(ctx)

    async def _seed():
        async with session_scope(config) as session:
            return await seed_database(
                session,
                admin_email=admin_email,
                admin_password=admin_password,
                bcrypt_rounds=config.auth.bcrypt_rounds,
            )

    try:
        result = asyncio.run(_seed())
    except StorefrontError as e:
        console.print(f"[red]Seed failed:[/red] {e.message}")
        ctx.exit(1)

    table = Table(title="Seed results", box=box.ROUNDED)
    table.add_column("Entity", style="cyan")
    table.add_column("Created", style="green")
    table.add_row("Admin user", admin_email if result.admin_created else "-")
    table.add_row("Categories", ", ".join(result.categories_created) or "-")
    table.add_row("Products", ", ".join(result.products_created) or "-")
    console.print(table)
    console.print("[green]✓[/green] Seed completed")


@cli.command("create-admin")
@click.option("--email", prompt=True, help="Admin email")
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True, help="Admin password")
@click.option("--name", default=None, help="Display name")
@click.pass_context
def create_admin(ctx: click.Context, email: str, password: str, name: Optional[str]) -> None:
    """Create an admin user, or promote an existing user and reset the password."""
    from storefront.api.auth.passwords import hash_password
    from storefront.db.repositories import UserRepository

    config = _get_config(ctx)

    async def _create():
        async with session_scope(config) as session:
            password_hash = hash_password(password, rounds=config.auth.bcrypt_rounds)
            user = await UserRepository(session).upsert_admin(email, password_hash, name=name)
            return user.email

    try:
        admin_email = asyncio.run(_create())
    except StorefrontError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        ctx.exit(1)

    console.print(f"[green]✓[/green] Admin ready: {admin_email}")


@cli.command("generate-css")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Stylesheet path (overrides theme.css_path)",
)
@click.pass_context
def generate_css(ctx: click.Context, output: Optional[str]) -> None:
    """Render the stored theme to the public stylesheet."""
    from storefront.api.services.theme import render_theme_css, write_stylesheet
    from storefront.db.repositories import SettingsRepository

    config = _get_config(ctx)

    async def _load_theme():
        async with session_scope(config) as session:
            return await SettingsRepository(session).get_theme()

    theme = asyncio.run(_load_theme())
    try:
        path = write_stylesheet(render_theme_css(theme), Path(output or config.theme.css_path))
    except StorefrontError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        ctx.exit(1)

    console.print(f"[green]✓[/green] Wrote {path}")


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
