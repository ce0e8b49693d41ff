"""CLI commands for browsing the product catalog."""

from __future__ import annotations

import click

from catalog.application.dto import ProductPageDTO
from catalog.application.list_products import DEFAULT_PAGE_SIZE, ListProductsHandler
from catalog.application.search_products import SearchProductsHandler
from catalog.application.show_product import ShowProductHandler
from catalog.domain.exceptions import DomainException


def _echo_page(page: ProductPageDTO) -> None:
    if not page.products:
        click.echo("No products found.")
        click.echo(f"Cursor: {page.cursor}")
        return

    click.echo(f"{'ID':<6} {'Name':<28} {'Price':>10} {'Stock':>6}")
    click.echo("-" * 53)
    for p in page.products:
        price = p.price if p.price is not None else "-"
        click.echo(f"{p.id:<6} {p.name:<28} {price:>10} {p.quantity:>6}")
    click.echo()
    click.echo(f"Cursor: {page.cursor}")


@click.command("list")
@click.option("--first", default=DEFAULT_PAGE_SIZE, show_default=True, help="Page size.")
@click.option("--cursor", default="", help="Cursor returned by the previous page.")
@click.option("--order-by", default="", help="Sort keys, e.g. 'name,priceDesc'.")
@click.pass_obj
def product_list(repo, first: int, cursor: str, order_by: str) -> None:
    """List products one page at a time."""
    handler = ListProductsHandler(product_repo=repo)

    try:
        page = handler.handle(first=first, cursor=cursor, order_by=order_by)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _echo_page(page)


@click.command("search")
@click.argument("search_text")
@click.option("--first", default=DEFAULT_PAGE_SIZE, show_default=True, help="Page size.")
@click.option("--cursor", default="", help="Cursor returned by the previous page.")
@click.pass_obj
def product_search(repo, search_text: str, first: int, cursor: str) -> None:
    """Search products by name, id and description."""
    handler = SearchProductsHandler(product_repo=repo)

    try:
        page = handler.handle(search_text, first=first, cursor=cursor)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _echo_page(page)


@click.command("show")
@click.argument("product_id")
@click.pass_obj
def product_show(repo, product_id: str) -> None:
    """Show one product in detail."""
    handler = ShowProductHandler(product_repo=repo)

    try:
        p = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{p.id}  {p.name}")
    click.echo(f"Price:    {p.price if p.price is not None else 'not for sale'}")
    click.echo(f"In stock: {p.quantity}")
    if p.short_description:
        click.echo(f"Summary:  {p.short_description}")
    if p.description:
        click.echo()
        click.echo(p.description)
