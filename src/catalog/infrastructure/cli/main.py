import click

from catalog.domain.exceptions import DomainException
from catalog.infrastructure.bootstrap import build_repository
from catalog.infrastructure.cli.product_commands import (
    product_list,
    product_search,
    product_show,
)
from catalog.infrastructure.config import load_settings
from catalog.infrastructure.logging_setup import setup_logging


@click.group()
@click.option("--log-level", default=None, help="Console log level (default from settings).")
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """Product catalog — read-only product listing and search."""
    if ctx.obj is not None:
        # A repository was injected by the caller (tests, embedding).
        return

    try:
        settings = load_settings()
        setup_logging(level=log_level or settings.log_level, log_file=settings.log_file)
        repo = build_repository(settings)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    ctx.obj = repo
    ctx.call_on_close(repo.close)


@cli.group()
def products() -> None:
    """Browse products."""


# Register subcommands
products.add_command(product_list)
products.add_command(product_search)
products.add_command(product_show)
