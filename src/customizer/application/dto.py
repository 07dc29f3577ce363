"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PriceLineDTO:
    label: str
    amount: str  # formatted, e.g. "৳450.00"


@dataclass(frozen=True)
class QuoteDTO:
    """Output: the running price of a customization as displayed to the user."""

    product_name: str
    step: str
    lines: list[PriceLineDTO]
    delivery_option: str
    free_delivery: bool
    total: str


@dataclass(frozen=True)
class OrderConfirmationDTO:
    """Output: what the customer sees after a successful submission."""

    tracking_id: str
    product_name: str
    quantity: int
    total: str
    message: str | None = None


@dataclass(frozen=True)
class ShareDTO:
    """Output: an order formatted for a messaging hand-off."""

    message: str
    link: str
    total: str
