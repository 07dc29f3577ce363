"""Domain service: Order Assembler.

Freezes a completed customization into an ``OrderPayload``. The price is
recomputed here from the same inputs the wizard shows, so the submitted
total can never drift from the displayed one. Customer details go out
trimmed, with the phone in the 01XXXXXXXXX form the validator accepted.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone

from customizer.domain.model.customer import CustomerInfo, PaymentSelection
from customizer.domain.model.order_payload import (
    CustomizationSnapshot,
    OrderPayload,
    SelectedOption,
)
from customizer.domain.model.pricing import PricingRules
from customizer.domain.model.product import Product
from customizer.domain.model.session import CustomizationSession
from customizer.domain.model.value_objects import PhoneNumber
from customizer.domain.service.pricing_calculator import compute_price


class OrderAssembler:

    def __init__(self, rules: PricingRules) -> None:
        self._rules = rules

    def assemble(
        self,
        product: Product,
        session: CustomizationSession,
        customer: CustomerInfo,
        payment: PaymentSelection,
    ) -> OrderPayload:
        breakdown = compute_price(product.price, session.family, session, self._rules)

        options = tuple(
            SelectedOption(
                axis_id=charge.axis_id,
                axis_label=charge.axis_label,
                value_key=charge.value_key,
                value_label=charge.value_label,
            )
            for charge in breakdown.option_charges
        )

        snapshot = CustomizationSnapshot(
            family_id=session.family.id,
            options=options,
            custom_text=session.custom_text.strip(),
            engraving_text=session.engraving_text.strip(),
            special_instructions=session.special_instructions.strip(),
            images=session.images,
            gift_wrap=session.gift_wrap,
            delivery_option=session.delivery_option,
        )

        return OrderPayload(
            product_id=product.id,
            product_name=product.name,
            unit_price=product.price,
            quantity=session.quantity.value,
            customization=snapshot,
            customer=_normalized(customer),
            payment=payment,
            breakdown=breakdown,
            created_at=datetime.now(timezone.utc),
        )


def _normalized(customer: CustomerInfo) -> CustomerInfo:
    """Trimmed fields and the phone in its 01XXXXXXXXX form."""
    return replace(
        customer,
        name=customer.name.strip(),
        phone=str(PhoneNumber.parse(customer.phone)),
        email=(customer.email or "").strip() or None,
        address=customer.address.strip(),
    )
