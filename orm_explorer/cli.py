# ==============================================
# CLI — Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Provides the command-line interface to the demo.
#
# COMMANDS:
# ---------
# 1. Full demo loop:
#    orm-explorer run --iterations 10
#
# 2. Load the fixture file once:
#    orm-explorer load-fixtures
#
# 3. Show one row per user from the window query:
#    orm-explorer latest-users
#
# 4. Mapping example (no database needed):
#    orm-explorer map-example --policy strict
#
# ==============================================

import dataclasses
from typing import Optional

import click
import pymysql

from orm_explorer.config import get_config
from orm_explorer.demo import ExplorerDemo
from orm_explorer.fixtures import FixtureError
from orm_explorer.mapping import FieldMismatchError, MismatchPolicy
from orm_explorer.models import ModelError

_DEMO_ERRORS = (FixtureError, ModelError, pymysql.MySQLError, ValueError)


def _load_config():
    try:
        return get_config()
    except ValueError as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e


@click.group()
def cli() -> None:
    """Explore MySQL fixtures, queries and structure mapping."""
    pass


@cli.command("run")
@click.option("--iterations", "-n", type=click.IntRange(min=0), default=None,
              help="Fixture/query round trips (default: DEMO_ITERATIONS)")
def run_demo(iterations: Optional[int]) -> None:
    """Run the full demo loop."""
    config = _load_config()
    try:
        with ExplorerDemo(config) as demo:
            summary = demo.run(iterations)
    except _DEMO_ERRORS as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"✓ Done: {summary['iterations']} round trip(s), {summary['users_fetched']} user row(s)")


@cli.command("load-fixtures")
def load_fixtures() -> None:
    """Load the configured fixture file."""
    config = _load_config()
    try:
        with ExplorerDemo(config) as demo:
            demo.load_fixtures()
    except _DEMO_ERRORS as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"✓ Fixtures loaded from {config.fixtures.directory}/{config.fixtures.filename}")


@cli.command("latest-users")
def latest_users() -> None:
    """Show one row per user."""
    config = _load_config()
    try:
        with ExplorerDemo(config) as demo:
            rows = demo.fetch_latest_users()
    except _DEMO_ERRORS as e:
        raise click.ClickException(str(e)) from e
    for row in rows:
        click.echo(f"  {row.id:>5}  {row.updated_at}")
    click.echo(f"✓ {len(rows)} user(s)")


@cli.command("map-example")
@click.option("--policy", type=click.Choice([p.value for p in MismatchPolicy]), default=None,
              help="Mismatch policy (default: MAPPER_MISMATCH_POLICY)")
def map_example(policy: Optional[str]) -> None:
    """Map ProductPart(id="Lock", correlation_number=123) onto an empty Product."""
    config = _load_config()
    mismatch_policy = MismatchPolicy(policy) if policy else None

    try:
        product, report = ExplorerDemo(config).map_product(mismatch_policy)
    except FieldMismatchError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Mapped product: {dataclasses.asdict(product)}")
    click.echo(f"   → copied: {', '.join(report.copied) or '-'}")
    if report.skipped:
        skipped = ", ".join(f"{s.name} ({s.reason.value})" for s in report.skipped)
        click.echo(f"   → skipped: {skipped}")


if __name__ == "__main__":
    cli()
