import logging

import click

from customizer.infrastructure.bootstrap import settings
from customizer.infrastructure.cli.catalog_commands import catalog_show, product_list
from customizer.infrastructure.cli.customize_commands import order_place, quote


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log debug output.")
def cli(verbose: bool) -> None:
    """Customizer — gift product customization and pricing"""
    level = logging.DEBUG if verbose else getattr(logging, settings().log_level, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.group()
def product() -> None:
    """Browse products."""


@cli.group("catalog")
def catalog_group() -> None:
    """Inspect customization options."""


@cli.group()
def order() -> None:
    """Place orders."""


# Register subcommands
product.add_command(product_list)
catalog_group.add_command(catalog_show)
order.add_command(order_place)
cli.add_command(quote)
