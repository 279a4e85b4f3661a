"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from osr.application.add_product import AddProductHandler
from osr.application.show_products import ShowProductsHandler
from osr.domain.exceptions import DomainException
from osr.domain.model.product import ProductStatus
from osr.infrastructure.bootstrap import product_store
from osr.infrastructure.config import Settings


@click.command("add")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", required=True, help="Product name.")
@click.option("--sku", required=True, help="Stock keeping unit, unique per product.")
@click.option("--stock", required=True, type=click.IntRange(min=0), help="Units in stock.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option(
    "--status",
    type=click.Choice([s.value for s in ProductStatus]),
    default=ProductStatus.DRAFT.value,
    show_default=True,
)
@click.pass_obj
def product_add(
    settings: Settings,
    product_id: str,
    name: str,
    sku: str,
    stock: int,
    price: str,
    status: str,
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(store=product_store(settings))

    try:
        dto = handler.handle(
            product_id=product_id,
            name=name,
            sku=sku,
            stock=stock,
            price=price,
            status=status,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{dto.id} '{dto.name}' added with {dto.stock} in stock at {dto.price}")


@click.command("list")
@click.pass_obj
def product_list(settings: Settings) -> None:
    """List all products with their stock."""
    handler = ShowProductsHandler(store=product_store(settings))

    try:
        products = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<10} {'Name':<20} {'SKU':<12} {'Stock':>7} {'Price':>10}  Status")
    click.echo("-" * 75)
    for p in products:
        click.echo(
            f"{p.id:<10} {p.name:<20} {p.sku:<12} {p.stock:>7} {p.price:>10}  {p.stock_status}"
        )


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID to display.")
@click.pass_obj
def product_show(settings: Settings, product_id: str) -> None:
    """Show one product."""
    handler = ShowProductsHandler(store=product_store(settings))

    try:
        dto = handler.handle_one(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{dto.id}  (status={dto.status})")
    click.echo(f"Name:   {dto.name}")
    click.echo(f"SKU:    {dto.sku}")
    click.echo(f"Stock:  {dto.stock} ({dto.stock_status})")
    click.echo(f"Price:  {dto.price}")
