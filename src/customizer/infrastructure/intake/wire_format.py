"""JSON shape of an order as the order-intake service expects it.

The field names and nesting are a contract with that service; add fields
if needed but never rename or move the existing ones.
"""

from __future__ import annotations

import json

from customizer.domain.model.order_payload import OrderPayload
from customizer.domain.model.value_objects import Money


def payload_to_wire(payload: OrderPayload) -> dict:
    custom = payload.customization
    customer = payload.customer
    images = [{"name": image.filename, "dataUrl": image.data_url} for image in custom.images]

    customization: dict = {
        "size": custom.option("size"),
        "color": custom.option("color"),
        "images": images,
        "instructions": custom.special_instructions,
    }
    for option in custom.options:
        customization.setdefault(option.axis_id, option.value_key)
    if custom.custom_text:
        customization["customText"] = custom.custom_text
    if custom.engraving_text:
        customization["engravingText"] = custom.engraving_text
    customization["giftWrap"] = custom.gift_wrap

    return {
        "customer_name": customer.name.strip(),
        "phone": customer.phone.strip(),
        "email": (customer.email or "").strip(),
        "address": customer.address.strip(),
        "district": customer.district,
        "thana": customer.thana,
        "items": [
            {
                "id": payload.product_id,
                "name": payload.product_name,
                "price": _number(payload.unit_price),
                "quantity": payload.quantity,
                "customization": customization,
            }
        ],
        "total": _number(payload.total),
        "delivery_option": custom.delivery_option,
        "delivery_charge": _number(payload.breakdown.delivery_charge),
        "payment_info": _payment_info(payload),
        "custom_instructions": custom.special_instructions,
        "custom_images": json.dumps(images),
    }


def _payment_info(payload: OrderPayload) -> dict:
    payment = payload.payment
    info: dict = {"method": payment.method.value if payment.method else "pending"}
    if payment.transaction_reference:
        info["trx_id"] = payment.transaction_reference.strip()
    if payment.payer_number:
        info["payment_number"] = payment.payer_number.strip()
    return info


def _number(money: Money) -> float | int:
    amount = money.rounded().amount
    return int(amount) if amount == amount.to_integral_value() else float(amount)
