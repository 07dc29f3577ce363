"""CLI commands for browsing products and their customization options."""

from __future__ import annotations

import click

from customizer.domain.exceptions import DomainException
from customizer.infrastructure.bootstrap import catalog, product_repository


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    try:
        products = product_repository().list_all()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<28} {'Category':<16} {'Stock':>6} {'Price':>10}")
    click.echo("-" * 70)
    for p in products:
        click.echo(f"{p.id:<6} {p.name:<28} {p.category:<16} {p.stock:>6} {str(p.price):>10}")


@click.command("show")
@click.option("--product", "product_id", required=True, help="Product ID.")
def catalog_show(product_id: str) -> None:
    """Show the customization options available for a product."""
    try:
        product = product_repository().get_by_id(product_id)
        if product is None:
            raise click.ClickException(f"Product with ID '{product_id}' not found")
        loaded = catalog()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    family = loaded.catalog.family_for(product)
    click.echo(f"{product.name}: {family.label} ({str(product.price)})")
    for axis in family.axes:
        marker = "*" if axis.required else " "
        click.echo(f" {marker} {axis.label} [{axis.id}]")
        for value in axis.values:
            default = " (default)" if value.key == axis.default else ""
            delta = f"+{value.price_delta}" if not value.price_delta.is_zero else ""
            click.echo(f"      {value.key:<14} {value.label:<20} {delta:>10}{default}")

    rules = loaded.rules
    click.echo()
    click.echo("Delivery:")
    for option in rules.delivery_options:
        click.echo(f"      {option.key:<14} {option.label:<20} {str(option.price):>10}")
    if rules.free_delivery_threshold is not None:
        click.echo(f"  Free delivery from {rules.free_delivery_threshold}")
