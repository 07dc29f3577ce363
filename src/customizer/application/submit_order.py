"""Application service: Submit Order use case.

Orchestrates the wizard's submission guard, the Order Assembler and the
order-intake collaborator:

1. Claim the wizard's single submission slot (rejects double submits).
2. Assemble a frozen payload from the current session.
3. Hand it to the intake gateway.
4. On success move the wizard to SUBMITTED; on failure leave every
   field, and the CONFIRM step, exactly as they were so the customer
   can retry.
"""

from __future__ import annotations

import logging

from customizer.application.dto import OrderConfirmationDTO
from customizer.domain.exceptions import SubmissionError
from customizer.domain.model.order_payload import OrderPayload, SubmissionReceipt
from customizer.domain.repository.order_intake import OrderIntakeGateway
from customizer.domain.service.order_assembler import OrderAssembler
from customizer.domain.service.wizard import CustomizationWizard

logger = logging.getLogger(__name__)


class SubmitOrderHandler:

    def __init__(self, gateway: OrderIntakeGateway, assembler: OrderAssembler) -> None:
        self._gateway = gateway
        self._assembler = assembler

    def handle(self, wizard: CustomizationWizard) -> OrderConfirmationDTO:
        wizard.begin_submission()
        try:
            payload = self._assembler.assemble(
                wizard.product, wizard.session, wizard.customer, wizard.payment
            )
            try:
                receipt = self._gateway.submit(payload)
            except SubmissionError as exc:
                logger.warning(
                    "Order for %s rejected (%s, retryable=%s): %s",
                    payload.product_id, exc.reason, exc.retryable, exc,
                )
                raise

            wizard.mark_submitted(receipt)
        finally:
            wizard.end_submission()

        logger.info("Order %s submitted for %s", receipt.tracking_id, payload.product_id)
        return self._to_dto(payload, receipt)

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_dto(payload: OrderPayload, receipt: SubmissionReceipt) -> OrderConfirmationDTO:
        return OrderConfirmationDTO(
            tracking_id=receipt.tracking_id,
            product_name=payload.product_name,
            quantity=payload.quantity,
            total=str(payload.total),
            message=receipt.message,
        )
