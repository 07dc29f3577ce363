"""Application service: Share Order use case.

The alternate path some storefront flows take: instead of posting the
order to the intake service, format the same payload as text and hand it
to a messaging collaborator. The wizard stays at CONFIRM, since nothing
was submitted.
"""

from __future__ import annotations

import logging

from customizer.application.dto import ShareDTO
from customizer.domain.exceptions import StepValidationError, WizardStateError
from customizer.domain.model.session import WizardStep
from customizer.domain.repository.message_handoff import MessageHandoff
from customizer.domain.service.order_assembler import OrderAssembler
from customizer.domain.service.order_message import format_order_message
from customizer.domain.service.wizard import CustomizationWizard

logger = logging.getLogger(__name__)


class ShareOrderHandler:

    def __init__(self, handoff: MessageHandoff, assembler: OrderAssembler) -> None:
        self._handoff = handoff
        self._assembler = assembler

    def handle(self, wizard: CustomizationWizard) -> ShareDTO:
        if wizard.step != WizardStep.CONFIRM:
            raise WizardStateError(
                f"Orders can only be shared from CONFIRM (current step: {wizard.step.value})"
            )
        for step in (WizardStep.OPTIONS, WizardStep.CUSTOMER_INFO):
            errors = wizard.errors(step)
            if errors:
                raise StepValidationError(step.value, errors)

        payload = self._assembler.assemble(
            wizard.product, wizard.session, wizard.customer, wizard.payment
        )
        message = format_order_message(payload)
        link = self._handoff.hand_off(message)
        logger.info("Order for %s handed off for messaging", payload.product_id)
        return ShareDTO(message=message, link=link, total=str(payload.total))
