import logging
from pathlib import Path

import click

from osr.domain.exceptions import DomainException
from osr.infrastructure.cli.order_commands import order_process
from osr.infrastructure.cli.product_commands import product_add, product_list, product_show
from osr.infrastructure.config import DATA_DIR_ENV, TIMEOUT_ENV, Settings


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    envvar=DATA_DIR_ENV,
    default=None,
    help="Directory holding products.json.",
)
@click.option(
    "--timeout",
    type=float,
    envvar=TIMEOUT_ENV,
    default=None,
    help="Deadline in seconds for processing one order.",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, data_dir: Path | None, timeout: float | None, verbose: bool) -> None:
    """OSR - Order Stock Reducer"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        defaults = Settings.from_env()
        ctx.obj = Settings(
            data_dir=data_dir if data_dir is not None else defaults.data_dir,
            timeout_seconds=timeout if timeout is not None else defaults.timeout_seconds,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))


@cli.group()
def order() -> None:
    """Process orders."""


@cli.group()
def product() -> None:
    """Manage products."""


# Register subcommands
order.add_command(order_process)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_show)
