"""Application service: Quote Price use case (query)."""

from __future__ import annotations

from customizer.application.dto import PriceLineDTO, QuoteDTO
from customizer.domain.service.wizard import CustomizationWizard


class QuotePriceHandler:

    def handle(self, wizard: CustomizationWizard) -> QuoteDTO:
        breakdown = wizard.price
        return QuoteDTO(
            product_name=wizard.product.name,
            step=wizard.step.value,
            lines=[
                PriceLineDTO(label=label, amount=str(amount))
                for label, amount in breakdown.lines()
            ],
            delivery_option=breakdown.delivery_option,
            free_delivery=breakdown.free_delivery_applied,
            total=str(breakdown.total),
        )
