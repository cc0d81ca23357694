"""
Command line tools for Extra Fields.

Usage:
    extrafields init-db
    extrafields verify
    extrafields diagnostics
"""

import asyncio

import click
from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from extrafields.bootstrap import load_environment
from extrafields.exceptions import ConfigurationError, ExtraFieldsError

VERIFY_FIELD_NAME = "verification_test_field"
PASS_MARK = "✅"
FAIL_MARK = "❌"


def _engine(database_url: str | None) -> AsyncEngine:
    from extrafields.config import settings
    from extrafields.database import build_engine

    return build_engine(database_url or settings.database_url, settings.environment)


def _report(message: str, success: bool = True) -> None:
    click.echo(f"[verify] {PASS_MARK if success else FAIL_MARK} {message}")


async def run_verification(engine: AsyncEngine) -> bool:
    """Check tables and a create/read/delete cycle; return True when everything passes."""
    from extrafields.models import Field, FieldValue
    from extrafields.services import field_service

    click.echo("[verify] Starting Extra Fields installation verification")
    _report("Models registered")

    for model in (Field, FieldValue):
        try:
            async with engine.connect() as conn:
                exists = await conn.run_sync(lambda sync_conn: inspect(sync_conn).has_table(model.__tablename__))
        except SQLAlchemyError as e:
            _report(f"Could not inspect table {model.__tablename__}: {e}", False)
            return False
        if not exists:
            _report(f"Table {model.__tablename__} is missing. Run 'extrafields init-db' first.", False)
            return False
        _report(f"Table {model.__tablename__} exists")

    Field(), FieldValue()
    _report("Blank Field and FieldValue objects created")

    session_factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as db:
        try:
            field = await field_service.create_field(db, VERIFY_FIELD_NAME)
            _report(f"Created test field (id={field.id})")

            loaded = await field_service.get_field(db, field.id)
            if loaded is None or loaded.name != VERIFY_FIELD_NAME:
                _report("Could not read the test field back", False)
                return False
            _report("Read test field back")

            await field_service.delete_field(db, field.id)
            _report("Deleted test field")
        except (ExtraFieldsError, SQLAlchemyError) as e:
            _report(f"Create/read/delete cycle failed: {e}", False)
            return False

    click.echo(f"[verify] {PASS_MARK} All verification checks passed")
    return True


async def run_diagnostics(engine: AsyncEngine):
    from extrafields.host import Host
    from extrafields.services.diagnostics_service import Diagnostics

    session_factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as db:
        return await Diagnostics(Host(db=db)).run()


async def _with_engine(database_url: str | None, action):
    engine = _engine(database_url)
    try:
        return await action(engine)
    finally:
        await engine.dispose()


database_url_option = click.option(
    "--database-url",
    envvar="DATABASE_URL",
    default=None,
    help="Database URL (defaults to the configured DATABASE_URL)",
)


@click.group()
@click.option("--require-env-file", is_flag=True, envvar="EXTRAFIELDS_REQUIRE_ENV_FILE", help="Fail if no .env is found")
def cli(require_env_file: bool):
    """Extra Fields maintenance commands."""
    try:
        load_environment(require=require_env_file)
    except ConfigurationError as e:
        raise click.ClickException(f"{e.error_code.value}: {e.message}") from e


@cli.command("init-db")
@database_url_option
def init_db(database_url: str | None):
    """Create the extension tables if they do not exist."""
    from extrafields.database import create_tables

    try:
        asyncio.run(_with_engine(database_url, create_tables))
    except SQLAlchemyError as e:
        raise click.ClickException(f"Could not create tables: {e}") from e
    click.echo(f"{PASS_MARK} Tables created")


@cli.command()
@database_url_option
def verify(database_url: str | None):
    """
    Verify the installation.

    Checks that both tables exist, then creates, reads back and deletes a
    field named ``verification_test_field``. Exits with status 1 on the
    first failure.
    """
    if not asyncio.run(_with_engine(database_url, run_verification)):
        raise SystemExit(1)


@cli.command()
@database_url_option
def diagnostics(database_url: str | None):
    """Run the diagnostics checks and print the report."""
    report = asyncio.run(_with_engine(database_url, run_diagnostics))
    click.echo(report.as_text())
    if not report.ok:
        raise SystemExit(1)


if __name__ == "__main__":
    cli()
