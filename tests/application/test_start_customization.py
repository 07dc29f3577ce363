"""Integration tests for the StartCustomization use case.

Uses in-memory fake repositories — no file I/O.
"""

import pytest

from customizer.application.start_customization import StartCustomizationHandler
from customizer.domain.exceptions import EntityNotFoundError, ValidationError
from customizer.domain.model.session import WizardStep
from tests.fakes import (
    FakeProductRepository,
    make_catalog,
    make_policy,
    make_product,
    make_rules,
)


def _handler() -> StartCustomizationHandler:
    products = [
        make_product(),
        make_product(id="2", name="Engraved Keychain", price="200", category="keychains"),
        make_product(id="3", name="Gift Box", price="1500", stock=0, category="boxes"),
    ]
    return StartCustomizationHandler(
        FakeProductRepository(products), make_catalog(), make_rules(), make_policy()
    )


class TestStartCustomization:

    def test_opens_wizard_at_options(self):
        wizard = _handler().handle("1")
        assert wizard.product.name == "Custom T-Shirt"
        assert wizard.step == WizardStep.OPTIONS
        assert wizard.session.family.id == "apparel"
        assert wizard.session.delivery_option == "standard"

    def test_family_defaults_preselected(self):
        wizard = _handler().handle("2")
        assert wizard.session.family.id == "gift"
        assert wizard.session.selections == {"material": "standard"}

    def test_unknown_product(self):
        with pytest.raises(EntityNotFoundError, match="'99' not found"):
            _handler().handle("99")

    def test_out_of_stock_product(self):
        with pytest.raises(ValidationError, match="out of stock"):
            _handler().handle("3")
