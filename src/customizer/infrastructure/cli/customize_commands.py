"""CLI commands that drive a customization: quoting and placing orders."""

from __future__ import annotations

from pathlib import Path

import click

from customizer.application.dto import QuoteDTO
from customizer.application.quote_price import QuotePriceHandler
from customizer.application.share_order import ShareOrderHandler
from customizer.application.start_customization import StartCustomizationHandler
from customizer.application.submit_order import SubmitOrderHandler
from customizer.domain.exceptions import (
    DomainException,
    StepValidationError,
    SubmissionError,
)
from customizer.domain.model.customer import CustomerInfo, PaymentMethod, PaymentSelection
from customizer.domain.service.image_intake import RawImage
from customizer.domain.service.wizard import CustomizationWizard
from customizer.infrastructure.bootstrap import (
    catalog,
    message_handoff,
    order_assembler,
    order_intake,
    product_repository,
)


def _parse_options(raw: tuple[str, ...]) -> dict[str, str]:
    """Parse ('size=XL', 'color=blue') into {axis: value}."""
    result: dict[str, str] = {}
    for pair in raw:
        if "=" not in pair:
            raise click.BadParameter(
                f"Invalid option format '{pair}'. Expected 'axis=value'."
            )
        axis, value = pair.split("=", 1)
        result[axis.strip()] = value.strip()
    return result


def _customization_options(command):
    """Options shared by every command that builds a customization."""
    decorators = [
        click.option("--product", "product_id", required=True, help="Product ID."),
        click.option("--option", "options", multiple=True, help="Selection as 'axis=value'. Repeatable."),
        click.option("--text", "custom_text", default="", help="Custom text to print."),
        click.option("--engraving", default="", help="Engraving text."),
        click.option("--instructions", default="", help="Special instructions."),
        click.option(
            "--image", "images", multiple=True,
            type=click.Path(exists=True, dir_okay=False, path_type=Path),
            help="Reference image file. Repeatable.",
        ),
        click.option("--quantity", default=1, type=int, show_default=True, help="Number of units."),
        click.option("--delivery", default=None, help="Delivery option key."),
        click.option("--gift-wrap", is_flag=True, default=False, help="Add gift wrapping."),
    ]
    for decorator in reversed(decorators):
        command = decorator(command)
    return command


def _build_wizard(
    product_id: str,
    options: tuple[str, ...],
    custom_text: str,
    engraving: str,
    instructions: str,
    images: tuple[Path, ...],
    quantity: int,
    delivery: str | None,
    gift_wrap: bool,
) -> CustomizationWizard:
    loaded = catalog()
    handler = StartCustomizationHandler(
        product_repo=product_repository(),
        catalog=loaded.catalog,
        rules=loaded.rules,
        policy=loaded.policy,
    )
    wizard = handler.handle(product_id)

    for axis, value in _parse_options(options).items():
        wizard.select(axis, value)
    wizard.set_quantity(quantity)
    if delivery:
        wizard.set_delivery_option(delivery)
    wizard.set_gift_wrap(gift_wrap)
    wizard.set_custom_text(custom_text)
    wizard.set_engraving_text(engraving)
    wizard.set_special_instructions(instructions)

    if images:
        result = wizard.add_images([RawImage.from_path(p) for p in images])
        for rejection in result.rejections:
            click.echo(f"Skipped image: {rejection.message}", err=True)
    return wizard


def _display_quote(dto: QuoteDTO) -> None:
    click.echo(f"{dto.product_name}")
    click.echo(f"  {'-'*44}")
    for line in dto.lines:
        click.echo(f"  {line.label:<30} {line.amount:>12}")
    click.echo(f"  {'-'*44}")
    if dto.free_delivery:
        click.echo("  Free delivery applied")
    click.echo(f"  {'Total':<30} {dto.total:>12}")


@click.command("quote")
@_customization_options
def quote(**kwargs) -> None:
    """Price a customization without placing an order."""
    try:
        wizard = _build_wizard(**kwargs)
        dto = QuotePriceHandler().handle(wizard)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_quote(dto)


@click.command("place")
@_customization_options
@click.option("--name", required=True, help="Customer name.")
@click.option("--phone", required=True, help="Mobile number (01XXXXXXXXX).")
@click.option("--email", default=None, help="Email address.")
@click.option("--address", required=True, help="Delivery address.")
@click.option("--district", default="", help="District.")
@click.option("--thana", default="", help="Thana / upazila.")
@click.option(
    "--payment",
    type=click.Choice([m.value for m in PaymentMethod]),
    default=PaymentMethod.CASH_ON_DELIVERY.value,
    show_default=True,
    help="Payment method.",
)
@click.option("--trx-id", default=None, help="Transaction ID for mobile payments.")
@click.option("--payer-number", default=None, help="Number the payment was sent from.")
@click.option(
    "--via",
    type=click.Choice(["intake", "whatsapp"]),
    default="intake",
    show_default=True,
    help="Submit to the order service or hand off as a WhatsApp message.",
)
def order_place(
    name: str,
    phone: str,
    email: str | None,
    address: str,
    district: str,
    thana: str,
    payment: str,
    trx_id: str | None,
    payer_number: str | None,
    via: str,
    **kwargs,
) -> None:
    """Customize a product and place the order."""
    try:
        wizard = _build_wizard(**kwargs)
        wizard.advance()  # OPTIONS -> DESIGN
        wizard.advance()  # DESIGN -> CUSTOMER_INFO
        wizard.set_customer(
            CustomerInfo(
                name=name, phone=phone, email=email,
                address=address, district=district, thana=thana,
            )
        )
        wizard.advance()
        wizard.set_payment(
            PaymentSelection(
                method=PaymentMethod(payment),
                transaction_reference=trx_id,
                payer_number=payer_number,
            )
        )
        wizard.advance()
        _display_quote(QuotePriceHandler().handle(wizard))
        click.echo()

        if via == "whatsapp":
            shared = ShareOrderHandler(message_handoff(), order_assembler()).handle(wizard)
            click.echo("Send this order on WhatsApp:")
            click.echo(shared.link)
            return

        with order_intake() as gateway:
            confirmation = SubmitOrderHandler(gateway, order_assembler()).handle(wizard)
    except StepValidationError as exc:
        lines = [f"{err.field}: {err.message}" for err in exc.errors]
        raise click.ClickException("Order incomplete:\n  " + "\n  ".join(lines))
    except SubmissionError as exc:
        hint = " (safe to retry)" if exc.retryable else ""
        raise click.ClickException(f"Order not placed: {exc}{hint}")
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order placed, tracking ID {confirmation.tracking_id}")
    click.echo(f"{confirmation.product_name} x{confirmation.quantity}, total {confirmation.total}")
