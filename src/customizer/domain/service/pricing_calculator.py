"""Domain service: Pricing Calculator.

A pure function from (base price, product family, session, rules) to an
itemized ``PriceBreakdown``. It reads the session and never writes to it,
so it is safe to call on every keystroke.

Rules, in display order (all terms are additive):

1. base price
2. the delta of each selected option, in catalog axis order
3. custom text surcharge, once, if the trimmed text is non-empty
4. engraving surcharge, once; special instructions surcharge, once
5. per-image surcharge x number of images
6. gift wrap surcharge
7. per-unit subtotal x quantity  (every surcharge above is per unit)
8. delivery charge, zero when the subtotal reaches the free-delivery threshold
9. total = subtotal + delivery, rounded half-up to two places
"""

from __future__ import annotations

from customizer.domain.exceptions import ConfigurationError
from customizer.domain.model.catalog import ProductFamily
from customizer.domain.model.pricing import OptionCharge, PriceBreakdown, PricingRules
from customizer.domain.model.session import CustomizationSession
from customizer.domain.model.value_objects import Money


def compute_price(
    base_price: Money,
    family: ProductFamily,
    session: CustomizationSession,
    rules: PricingRules,
) -> PriceBreakdown:
    if not isinstance(base_price, Money):
        raise ConfigurationError(
            f"Base price must be Money, got {type(base_price).__name__}"
        )

    # Selections must belong to the family; anything else is a data defect.
    for axis_id, value_key in session.selections.items():
        family.axis(axis_id).value(value_key)

    option_charges: list[OptionCharge] = []
    options_total = Money.zero()
    for axis in family.axes:
        key = session.selections.get(axis.id)
        if key is None:
            continue
        value = axis.value(key)
        option_charges.append(
            OptionCharge(
                axis_id=axis.id,
                axis_label=axis.label,
                value_key=value.key,
                value_label=value.label,
                price_delta=value.price_delta,
            )
        )
        options_total = options_total + value.price_delta

    text_surcharge = _flat_if_present(session.custom_text, rules.text_surcharge)
    engraving_surcharge = _flat_if_present(session.engraving_text, rules.engraving_surcharge)
    instructions_surcharge = _flat_if_present(
        session.special_instructions, rules.instructions_surcharge
    )

    image_count = len(session.image_index)
    image_surcharge = rules.per_image_surcharge * image_count
    gift_wrap_surcharge = rules.gift_wrap_surcharge if session.gift_wrap else Money.zero()

    unit_subtotal = (
        base_price
        + options_total
        + text_surcharge
        + engraving_surcharge
        + instructions_surcharge
        + image_surcharge
        + gift_wrap_surcharge
    )
    quantity = session.quantity.value
    subtotal = unit_subtotal * quantity

    delivery = rules.delivery(session.delivery_option)
    threshold = rules.free_delivery_threshold
    free_delivery = threshold is not None and subtotal >= threshold
    delivery_charge = Money.zero() if free_delivery else delivery.price

    return PriceBreakdown(
        base_price=base_price,
        option_charges=tuple(option_charges),
        options_total=options_total,
        text_surcharge=text_surcharge,
        engraving_surcharge=engraving_surcharge,
        instructions_surcharge=instructions_surcharge,
        image_count=image_count,
        image_surcharge=image_surcharge,
        gift_wrap_surcharge=gift_wrap_surcharge,
        unit_subtotal=unit_subtotal,
        quantity=quantity,
        subtotal=subtotal,
        delivery_option=delivery.key,
        delivery_charge=delivery_charge,
        free_delivery_applied=free_delivery,
        total=(subtotal + delivery_charge).rounded(),
    )


def _flat_if_present(text: str, surcharge: Money) -> Money:
    return surcharge if text and text.strip() else Money.zero()
