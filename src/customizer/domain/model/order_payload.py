"""OrderPayload — the frozen, submission-ready snapshot of a customization.

Built once by ``OrderAssembler`` at submission time. Every field is an
immutable copy, so later edits to the session (after a failed submission,
say) cannot leak into a payload that is already on its way out.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from customizer.domain.model.customer import CustomerInfo, PaymentSelection
from customizer.domain.model.pricing import PriceBreakdown
from customizer.domain.model.session import UploadedImage
from customizer.domain.model.value_objects import Money


@dataclass(frozen=True)
class SelectedOption:
    axis_id: str
    axis_label: str
    value_key: str
    value_label: str


@dataclass(frozen=True)
class CustomizationSnapshot:
    family_id: str
    options: tuple[SelectedOption, ...]
    custom_text: str
    engraving_text: str
    special_instructions: str
    images: tuple[UploadedImage, ...]
    gift_wrap: bool
    delivery_option: str

    def option(self, axis_id: str) -> str | None:
        for o in self.options:
            if o.axis_id == axis_id:
                return o.value_key
        return None


@dataclass(frozen=True)
class OrderPayload:
    product_id: str
    product_name: str
    unit_price: Money
    quantity: int
    customization: CustomizationSnapshot
    customer: CustomerInfo
    payment: PaymentSelection
    breakdown: PriceBreakdown
    created_at: datetime

    @property
    def total(self) -> Money:
        return self.breakdown.total


@dataclass(frozen=True)
class SubmissionReceipt:
    """What the order-intake collaborator hands back on success."""

    tracking_id: str
    message: str | None = None
