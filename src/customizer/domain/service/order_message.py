"""Human-readable rendering of an OrderPayload for messaging hand-off."""

from __future__ import annotations

from customizer.domain.model.order_payload import OrderPayload


def format_order_message(payload: OrderPayload) -> str:
    custom = payload.customization
    customer = payload.customer
    breakdown = payload.breakdown

    lines = [
        "New custom order",
        "",
        f"Product: {payload.product_name} (#{payload.product_id})",
        f"Price: {payload.unit_price}",
        f"Quantity: {payload.quantity}",
    ]
    for option in custom.options:
        lines.append(f"{option.axis_label}: {option.value_label}")
    if custom.custom_text:
        lines.append(f"Custom text: {custom.custom_text}")
    if custom.engraving_text:
        lines.append(f"Engraving: {custom.engraving_text}")
    if custom.images:
        lines.append(f"Reference images: {len(custom.images)}")
    if custom.gift_wrap:
        lines.append("Gift wrap: yes")
    if custom.special_instructions:
        lines.append(f"Instructions: {custom.special_instructions}")

    lines += ["", "Price breakdown:"]
    lines += [f"  {label}: {amount}" for label, amount in breakdown.lines()]
    lines.append(f"Total: {payload.total}")

    lines += [
        "",
        f"Name: {customer.name}",
        f"Phone: {customer.phone}",
    ]
    if customer.email:
        lines.append(f"Email: {customer.email}")
    lines.append(f"Address: {customer.address}")
    area = ", ".join(part for part in (customer.thana, customer.district) if part)
    if area:
        lines.append(f"Area: {area}")

    if payload.payment.method is not None:
        lines.append(f"Payment: {payload.payment.method.value}")
        if payload.payment.transaction_reference:
            lines.append(f"Transaction ID: {payload.payment.transaction_reference}")

    return "\n".join(lines)
