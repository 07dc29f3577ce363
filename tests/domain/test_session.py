"""Unit tests for the CustomizationSession and its invariants."""

import pytest

from customizer.domain.exceptions import (
    EntityNotFoundError,
    SessionLockedError,
    ValidationError,
)
from customizer.domain.model.session import UploadedImage, WizardStep
from tests.fakes import apparel_family, make_policy, make_session


def _image(image_id: str) -> UploadedImage:
    return UploadedImage(
        id=image_id,
        filename=f"{image_id}.jpg",
        content_type="image/jpeg",
        data_url="data:image/jpeg;base64,AAAA",
        size=3,
    )


class TestSelections:

    def test_select_valid_value(self):
        session = make_session()
        session.select("size", "XL")
        assert session.selections == {"size": "XL"}

    def test_unknown_axis_rejected(self):
        session = make_session()
        with pytest.raises(ValidationError) as exc_info:
            session.select("material", "wood")
        assert exc_info.value.field == "material"
        assert session.selections == {}

    def test_unknown_value_rejected_without_mutation(self):
        session = make_session()
        session.select("size", "L")
        with pytest.raises(ValidationError, match="not a valid Size"):
            session.select("size", "XXXL")
        assert session.selections == {"size": "L"}

    def test_start_preselects_defaults(self):
        session = make_session(family=apparel_family(with_defaults=True))
        assert session.selections == {"size": "M", "color": "white"}

    def test_clear_selection(self):
        session = make_session()
        session.select("size", "L")
        session.clear_selection("size")
        assert "size" not in session.selections


class TestFreeText:

    def test_text_within_limit(self):
        session = make_session()
        session.set_custom_text("x" * 50)
        assert len(session.custom_text) == 50

    def test_text_over_limit_rejected_and_previous_kept(self):
        session = make_session()
        session.set_custom_text("Hello")
        with pytest.raises(ValidationError, match="limited to 50") as exc_info:
            session.set_custom_text("x" * 51)
        assert exc_info.value.field == "custom_text"
        assert session.custom_text == "Hello"

    def test_engraving_limit(self):
        session = make_session()
        with pytest.raises(ValidationError) as exc_info:
            session.set_engraving_text("x" * 41)
        assert exc_info.value.field == "engraving_text"

    def test_instructions_limit(self):
        session = make_session()
        with pytest.raises(ValidationError):
            session.set_special_instructions("x" * 501)

    def test_none_clears_text(self):
        session = make_session()
        session.set_custom_text("Hello")
        session.set_custom_text(None)
        assert session.custom_text == ""


class TestQuantity:

    def test_zero_quantity_rejected(self):
        session = make_session()
        with pytest.raises(ValidationError, match="must be positive"):
            session.set_quantity(0)
        assert session.quantity.value == 1


class TestImages:

    def test_attach_keeps_order(self):
        session = make_session()
        session.attach_images([_image("a"), _image("b")])
        session.attach_images([_image("c")])
        assert [i.id for i in session.images] == ["a", "b", "c"]

    def test_batch_over_limit_attaches_nothing(self):
        session = make_session(policy=make_policy(max_images=3))
        session.attach_images([_image("a"), _image("b")])
        with pytest.raises(ValidationError, match="At most 3 images"):
            session.attach_images([_image("c"), _image("d")])
        assert [i.id for i in session.images] == ["a", "b"]

    def test_duplicate_id_rejected(self):
        session = make_session()
        session.attach_images([_image("a")])
        with pytest.raises(ValidationError, match="already attached"):
            session.attach_images([_image("a")])

    def test_remove_by_id_not_position(self):
        session = make_session()
        session.attach_images([_image("a"), _image("b"), _image("c")])
        removed = session.remove_image("b")
        assert removed.id == "b"
        assert [i.id for i in session.images] == ["a", "c"]

    def test_remove_unknown_image(self):
        session = make_session()
        with pytest.raises(EntityNotFoundError):
            session.remove_image("nope")


class TestLocking:

    def test_submitted_session_is_read_only(self):
        session = make_session()
        session.move_to(WizardStep.SUBMITTED)
        with pytest.raises(SessionLockedError):
            session.select("size", "L")
        with pytest.raises(SessionLockedError):
            session.set_quantity(2)
        with pytest.raises(SessionLockedError):
            session.attach_images([_image("a")])
        with pytest.raises(SessionLockedError):
            session.move_to(WizardStep.CONFIRM)


class TestWizardStep:

    def test_order(self):
        assert WizardStep.OPTIONS.next == WizardStep.DESIGN
        assert WizardStep.CONFIRM.next == WizardStep.SUBMITTED
        assert WizardStep.SUBMITTED.next is None
        assert WizardStep.OPTIONS.previous is None
        assert WizardStep.PAYMENT.previous == WizardStep.CUSTOMER_INFO
