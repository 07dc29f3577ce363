"""Unit tests for the pricing calculator rules."""

from decimal import Decimal

import pytest

from customizer.domain.exceptions import ConfigurationError
from customizer.domain.model.session import UploadedImage
from customizer.domain.model.value_objects import Money
from customizer.domain.service.pricing_calculator import compute_price
from tests.fakes import apparel_family, make_policy, make_rules, make_session


def _image(n: int) -> UploadedImage:
    return UploadedImage(
        id=f"img{n}",
        filename=f"photo{n}.png",
        content_type="image/png",
        data_url="data:image/png;base64,AAAA",
        size=3,
    )


def _example_session(quantity: int):
    """XL (+50), blue (+25), text "Hello" (+100), two images (+150 each)."""
    session = make_session()
    session.select("size", "XL")
    session.select("color", "blue")
    session.set_custom_text("Hello")
    session.attach_images([_image(1), _image(2)])
    session.set_quantity(quantity)
    return session


def _price(session, base="450", rules=None):
    return compute_price(Money.of(base), session.family, session, rules or make_rules())


class TestWorkedExamples:

    def test_above_threshold_delivery_is_free(self):
        breakdown = _price(_example_session(quantity=2))
        assert breakdown.unit_subtotal == Money.of("925")
        assert breakdown.subtotal == Money.of("1850")
        assert breakdown.delivery_charge == Money.of("0")
        assert breakdown.free_delivery_applied
        assert breakdown.total == Money.of("1850")

    def test_below_threshold_delivery_is_charged(self):
        breakdown = _price(_example_session(quantity=1))
        assert breakdown.subtotal == Money.of("925")
        assert breakdown.delivery_charge == Money.of("60")
        assert not breakdown.free_delivery_applied
        assert breakdown.total == Money.of("985")


class TestRules:

    def test_option_deltas_follow_catalog_order(self):
        session = make_session()
        session.select("color", "blue")
        session.select("size", "XL")
        breakdown = _price(session)
        assert [c.axis_id for c in breakdown.option_charges] == ["size", "color"]
        assert breakdown.options_total == Money.of("75")

    def test_unselected_axis_contributes_nothing(self):
        session = make_session()
        session.select("size", "XL")
        breakdown = _price(session)
        assert breakdown.options_total == Money.of("50")
        assert len(breakdown.option_charges) == 1

    def test_text_surcharge_charged_once_regardless_of_words(self):
        session = make_session()
        session.set_custom_text("Happy birthday to my dearest friend")
        assert _price(session).text_surcharge == Money.of("100")

    def test_whitespace_only_text_is_free(self):
        session = make_session()
        session.set_custom_text("    ")
        session.set_engraving_text("\t")
        breakdown = _price(session)
        assert breakdown.text_surcharge == Money.zero()
        assert breakdown.engraving_surcharge == Money.zero()

    def test_engraving_surcharge(self):
        session = make_session()
        session.set_engraving_text("A+R")
        assert _price(session).engraving_surcharge == Money.of("150")

    def test_gift_wrap_surcharge(self):
        session = make_session()
        session.set_gift_wrap(True)
        assert _price(session).gift_wrap_surcharge == Money.of("50")

    def test_surcharges_scale_with_quantity(self):
        session = make_session()
        session.set_custom_text("Hi")
        session.attach_images([_image(1)])
        session.set_gift_wrap(True)
        session.set_quantity(3)
        breakdown = _price(session, base="100")
        # (100 + 100 + 150 + 50) x 3
        assert breakdown.subtotal == Money.of("1200")

    def test_threshold_is_inclusive(self):
        session = make_session()
        breakdown = _price(session, base="1000")
        assert breakdown.delivery_charge == Money.zero()

    def test_no_threshold_always_charges_delivery(self):
        session = make_session()
        session.set_quantity(10)
        breakdown = _price(session, base="1000", rules=make_rules(threshold=None))
        assert breakdown.delivery_charge == Money.of("60")

    def test_free_delivery_ignores_chosen_option(self):
        session = make_session()
        session.set_delivery_option("express")
        breakdown = _price(session, base="1500")
        assert breakdown.delivery_option == "express"
        assert breakdown.delivery_charge == Money.zero()

    def test_express_charged_below_threshold(self):
        session = make_session()
        session.set_delivery_option("express")
        assert _price(session, base="100").delivery_charge == Money.of("200")

    def test_total_rounded_half_up_only_at_the_end(self):
        session = make_session()
        session.set_quantity(3)
        breakdown = _price(session, base="0.335", rules=make_rules(threshold=None, standard="0"))
        assert breakdown.subtotal.amount == Decimal("1.005")
        assert breakdown.total.amount == Decimal("1.01")


class TestDataDefects:

    def test_unknown_axis_in_selections_fails_loudly(self):
        session = make_session()
        session.selections["engraving"] = "gold"
        with pytest.raises(ConfigurationError, match="Unknown option axis"):
            _price(session)

    def test_unknown_value_in_selections_fails_loudly(self):
        session = make_session()
        session.selections["size"] = "XXXL"
        with pytest.raises(ConfigurationError, match="Unknown value"):
            _price(session)

    def test_unknown_delivery_option_fails_loudly(self):
        session = make_session()
        session.delivery_option = "drone"
        with pytest.raises(ConfigurationError, match="Unknown delivery option"):
            _price(session)

    def test_raw_decimal_base_price_rejected(self):
        session = make_session()
        with pytest.raises(ConfigurationError, match="must be Money"):
            compute_price(Decimal("-5"), session.family, session, make_rules())


class TestProperties:

    def test_deterministic(self):
        session = _example_session(quantity=2)
        assert _price(session) == _price(session)

    def test_does_not_mutate_session(self):
        session = _example_session(quantity=2)
        before = (dict(session.selections), session.images, session.quantity)
        _price(session)
        assert (dict(session.selections), session.images, session.quantity) == before

    @pytest.mark.parametrize("base", ["0", "99.99", "450", "1999"])
    def test_total_never_decreases_with_quantity(self, base):
        session = _example_session(quantity=1)
        previous = _price(session, base=base).total
        for quantity in range(2, 8):
            session.set_quantity(quantity)
            current = _price(session, base=base).total
            assert current >= previous
            previous = current

    @pytest.mark.parametrize("quantity", [1, 2, 5])
    def test_zero_delta_identity(self, quantity):
        session = make_session(family=apparel_family(), policy=make_policy())
        session.select("size", "M")
        session.select("color", "white")
        session.set_quantity(quantity)
        breakdown = _price(session, rules=make_rules(threshold=None))
        expected = Money.of("450") * quantity + Money.of("60")
        assert breakdown.total == expected.rounded()
