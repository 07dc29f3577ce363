"""Integration tests for the ShareOrder use case."""

import pytest

from customizer.application.share_order import ShareOrderHandler
from customizer.domain.exceptions import StepValidationError, WizardStateError
from customizer.domain.model.session import WizardStep
from customizer.domain.service.order_assembler import OrderAssembler
from tests.fakes import FakeHandoff, make_rules, make_wizard, wizard_at_confirm


def _handler() -> tuple[ShareOrderHandler, FakeHandoff]:
    handoff = FakeHandoff()
    return ShareOrderHandler(handoff, OrderAssembler(make_rules())), handoff


class TestShareOrder:

    def test_hands_off_formatted_message(self):
        handler, handoff = _handler()
        wizard = wizard_at_confirm()

        dto = handler.handle(wizard)

        assert dto.link == "fake://message/1"
        assert handoff.messages == [dto.message]
        assert "Custom T-Shirt" in dto.message
        assert dto.total == str(wizard.price.total)

    def test_wizard_stays_at_confirm(self):
        handler, _ = _handler()
        wizard = wizard_at_confirm()
        handler.handle(wizard)
        assert wizard.step == WizardStep.CONFIRM
        assert wizard.tracking_id is None

    def test_requires_confirm_step(self):
        handler, handoff = _handler()
        with pytest.raises(WizardStateError):
            handler.handle(make_wizard())
        assert handoff.messages == []

    def test_rechecks_options(self):
        handler, handoff = _handler()
        wizard = wizard_at_confirm()
        wizard.clear_selection("color")
        with pytest.raises(StepValidationError, match="color"):
            handler.handle(wizard)
        assert handoff.messages == []
