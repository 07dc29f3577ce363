"""Pricing rules, customization limits and the derived price breakdown."""

from __future__ import annotations

from dataclasses import dataclass, field

from customizer.domain.exceptions import ConfigurationError
from customizer.domain.model.value_objects import Money

MEGABYTE = 1024 * 1024


@dataclass(frozen=True)
class DeliveryOption:
    key: str
    label: str
    price: Money


def _default_delivery_options() -> tuple[DeliveryOption, ...]:
    return (
        DeliveryOption("standard", "Inside Dhaka", Money.of("80")),
        DeliveryOption("outside_dhaka", "Outside Dhaka", Money.of("120")),
        DeliveryOption("express", "Express delivery", Money.of("200")),
    )


@dataclass(frozen=True)
class PricingRules:
    """Flat surcharges and delivery pricing shared by every product family.

    Every surcharge is per unit: the calculator multiplies the whole
    per-unit subtotal by the quantity.
    """

    text_surcharge: Money = field(default_factory=lambda: Money.of("100"))
    engraving_surcharge: Money = field(default_factory=lambda: Money.of("150"))
    instructions_surcharge: Money = field(default_factory=Money.zero)
    per_image_surcharge: Money = field(default_factory=lambda: Money.of("100"))
    gift_wrap_surcharge: Money = field(default_factory=lambda: Money.of("50"))
    delivery_options: tuple[DeliveryOption, ...] = field(
        default_factory=_default_delivery_options
    )
    default_delivery: str = "standard"
    free_delivery_threshold: Money | None = field(default_factory=lambda: Money.of("2000"))

    def __post_init__(self) -> None:
        if not self.delivery_options:
            raise ConfigurationError("At least one delivery option is required")
        keys = [d.key for d in self.delivery_options]
        if len(keys) != len(set(keys)):
            raise ConfigurationError("Delivery option keys must be unique")
        if self.default_delivery not in keys:
            raise ConfigurationError(
                f"Default delivery option '{self.default_delivery}' is not defined"
            )

    def has_delivery(self, key: str) -> bool:
        return any(d.key == key for d in self.delivery_options)

    def delivery(self, key: str) -> DeliveryOption:
        for d in self.delivery_options:
            if d.key == key:
                return d
        raise ConfigurationError(f"Unknown delivery option '{key}'")


@dataclass(frozen=True)
class CustomizationPolicy:
    """Length limits for free text and the image upload constraints."""

    max_custom_text: int = 50
    max_engraving_text: int = 40
    max_instructions: int = 500
    max_image_bytes: int = 5 * MEGABYTE
    max_images: int = 5
    allowed_image_types: frozenset[str] = frozenset(
        {"image/jpeg", "image/jpg", "image/png", "image/webp"}
    )

    def __post_init__(self) -> None:
        if self.max_images < 1:
            raise ConfigurationError("max_images must be at least 1")
        if self.max_image_bytes < 1:
            raise ConfigurationError("max_image_bytes must be positive")
        if not self.allowed_image_types:
            raise ConfigurationError("At least one image type must be allowed")


@dataclass(frozen=True)
class OptionCharge:
    axis_id: str
    axis_label: str
    value_key: str
    value_label: str
    price_delta: Money


@dataclass(frozen=True)
class PriceBreakdown:
    """Itemized result of ``compute_price``. Never mutated, only recomputed."""

    base_price: Money
    option_charges: tuple[OptionCharge, ...]
    options_total: Money
    text_surcharge: Money
    engraving_surcharge: Money
    instructions_surcharge: Money
    image_count: int
    image_surcharge: Money
    gift_wrap_surcharge: Money
    unit_subtotal: Money
    quantity: int
    subtotal: Money
    delivery_option: str
    delivery_charge: Money
    free_delivery_applied: bool
    total: Money

    def lines(self) -> list[tuple[str, Money]]:
        """Labelled display lines; zero surcharges are left out."""
        result: list[tuple[str, Money]] = [("Base price", self.base_price)]
        for charge in self.option_charges:
            if not charge.price_delta.is_zero:
                result.append(
                    (f"{charge.axis_label}: {charge.value_label}", charge.price_delta)
                )
        optional = [
            ("Custom text", self.text_surcharge),
            ("Engraving", self.engraving_surcharge),
            ("Special instructions", self.instructions_surcharge),
            (f"Images ({self.image_count})", self.image_surcharge),
            ("Gift wrap", self.gift_wrap_surcharge),
        ]
        result.extend((label, amount) for label, amount in optional if not amount.is_zero)
        result.append(("Per unit", self.unit_subtotal))
        result.append((f"Subtotal (x{self.quantity})", self.subtotal))
        result.append(("Delivery", self.delivery_charge))
        return result
