"""Small immutable values used by pricing and checkout.

Each one checks itself on construction, so a price, a quantity or a
phone number that reaches a service is already known to be well formed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from functools import total_ordering

from customizer.domain.exceptions import ValidationError

_CENTS = Decimal("0.01")


@total_ordering
@dataclass(frozen=True)
class Money:
    """A non-negative taka amount.

    Uses Decimal so surcharges add up exactly; rounding happens only when
    ``rounded()`` is called on a final figure. There is no subtraction:
    prices here are only ever built up from parts.
    """

    amount: Decimal
    currency: str = "BDT"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Price must be a Decimal amount, not {type(self.amount).__name__}"
            )
        if self.amount < 0:
            raise ValidationError(f"Price cannot be below zero ({self.amount})")

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Build from a catalog or CLI value; ``str()`` first keeps floats exact."""
        try:
            return Money(Decimal(str(amount)))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc

    @staticmethod
    def zero() -> Money:
        return Money(Decimal("0"))

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + self._amount_of(other), self.currency)

    def __mul__(self, count: int) -> Money:
        # Quantities and image counts only.
        if not isinstance(count, int) or isinstance(count, bool):
            raise TypeError(f"Money can only be scaled by a count, got {count!r}")
        return Money(self.amount * count, self.currency)

    def __lt__(self, other: Money) -> bool:
        return self.amount < self._amount_of(other)

    def rounded(self) -> Money:
        """Two-place amount, half-up."""
        return Money(self.amount.quantize(_CENTS, rounding=ROUND_HALF_UP), self.currency)

    def __str__(self) -> str:
        return f"৳{self.amount:.2f}"

    def _amount_of(self, other: Money) -> Decimal:
        if other.currency != self.currency:
            raise ValidationError(
                f"Cannot mix {self.currency} and {other.currency} prices"
            )
        return other.amount


@dataclass(frozen=True)
class Quantity:
    """How many units of the customized product are ordered (at least one)."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}",
                field="quantity",
            )
        if self.value < 1:
            raise ValidationError("Quantity must be positive", field="quantity")

    def __str__(self) -> str:
        return str(self.value)


_MOBILE_PATTERN = re.compile(r"^01[3-9]\d{8}$")
_SEPARATORS = re.compile(r"[\s\-]")


@dataclass(frozen=True)
class PhoneNumber:
    """A Bangladeshi mobile number in its 11-digit local form (01XXXXXXXXX).

    ``parse`` accepts the usual ways people type it: with spaces or
    hyphens, and with a ``+88`` / ``88`` country prefix.
    """

    value: str

    def __post_init__(self) -> None:
        if not _MOBILE_PATTERN.match(self.value):
            raise ValidationError(
                "Enter a valid mobile number (01XXXXXXXXX)", field="phone"
            )

    @staticmethod
    def parse(raw: str) -> PhoneNumber:
        digits = _SEPARATORS.sub("", raw or "")
        if digits.startswith("+"):
            digits = digits[1:]
        if digits.startswith("88") and len(digits) == 13:
            digits = digits[2:]
        return PhoneNumber(digits)

    @staticmethod
    def is_valid(raw: str) -> bool:
        try:
            PhoneNumber.parse(raw)
        except ValidationError:
            return False
        return True

    def __str__(self) -> str:
        return self.value
