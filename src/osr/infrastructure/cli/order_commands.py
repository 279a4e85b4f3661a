"""CLI commands for order processing."""

from __future__ import annotations

import json

import click

from osr.application.dto import OrderItemSpec, ProcessOrderResponse
from osr.infrastructure.bootstrap import process_order_handler
from osr.infrastructure.config import Settings


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse 'P1:3,P2:5' into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if not pair:
            continue
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductID:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(OrderItemSpec(product_id=product_id.strip(), quantity=qty))
    return specs


def _display_response(response: ProcessOrderResponse) -> None:
    if response.success:
        click.echo(response.message)
        click.echo(f"Total items updated: {response.total_items_updated}")
        for update in response.updated_items:
            click.echo(
                f"  {update.product_name}: {update.old_stock} -> "
                f"{update.new_stock} (-{update.reduced_quantity})"
            )
        return

    click.echo(response.message, err=True)
    if response.insufficient_stock_items:
        click.echo("Insufficient stock for:", err=True)
        for item in response.insufficient_stock_items:
            click.echo(
                f"  {item.product_name}: requested {item.requested_quantity}, "
                f"available {item.available_stock}",
                err=True,
            )


@click.command("process")
@click.option("--items", required=True, help="Items as 'ProductID:Qty,ProductID:Qty'.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the raw response.")
@click.pass_obj
def order_process(settings: Settings, items: str, as_json: bool) -> None:
    """Reduce stock for every item of an order, or for none of them."""
    specs = _parse_items(items)
    handler = process_order_handler(settings)

    response = handler.handle(specs)

    if as_json:
        click.echo(json.dumps(response.to_dict(), indent=2))
    else:
        _display_response(response)

    if not response.success:
        click.get_current_context().exit(1)
