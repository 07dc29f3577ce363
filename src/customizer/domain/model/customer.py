"""Customer and payment details collected in the later wizard steps.

Both are plain holders: the wizard stores whatever the customer typed so
nothing is lost on a failed step, and ``StepValidator`` decides whether it
is complete.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class CustomerInfo:
    name: str = ""
    phone: str = ""
    email: str | None = None
    address: str = ""
    district: str = ""
    thana: str = ""


class PaymentMethod(Enum):
    CASH_ON_DELIVERY = "cod"
    BKASH = "bkash"
    NAGAD = "nagad"
    ROCKET = "rocket"

    @property
    def needs_transaction_reference(self) -> bool:
        return self is not PaymentMethod.CASH_ON_DELIVERY


@dataclass(frozen=True)
class PaymentSelection:
    method: PaymentMethod | None = None
    transaction_reference: str | None = None
    payer_number: str | None = None
