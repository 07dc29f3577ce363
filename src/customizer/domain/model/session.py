"""CustomizationSession — the mutable state of one in-progress customization.

The session belongs to exactly one wizard. Every mutator checks its input
against the product family and the customization policy and raises a
field-level ``ValidationError`` *before* touching any state, so a rejected
edit never leaves the session half-updated.

Invariants:
- ``selections`` only holds axes of ``family`` and values of those axes
- ``quantity`` is always >= 1
- once ``current_step`` is SUBMITTED the session is read-only
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from customizer.domain.exceptions import (
    EntityNotFoundError,
    SessionLockedError,
    ValidationError,
)
from customizer.domain.model.catalog import ProductFamily
from customizer.domain.model.pricing import CustomizationPolicy
from customizer.domain.model.value_objects import Quantity


class WizardStep(Enum):
    OPTIONS = "OPTIONS"
    DESIGN = "DESIGN"
    CUSTOMER_INFO = "CUSTOMER_INFO"
    PAYMENT = "PAYMENT"
    CONFIRM = "CONFIRM"
    SUBMITTED = "SUBMITTED"

    @property
    def next(self) -> WizardStep | None:
        steps = list(WizardStep)
        index = steps.index(self)
        return steps[index + 1] if index + 1 < len(steps) else None

    @property
    def previous(self) -> WizardStep | None:
        steps = list(WizardStep)
        index = steps.index(self)
        return steps[index - 1] if index > 0 else None


@dataclass(frozen=True)
class UploadedImage:
    """A reference image, already encoded as a self-contained data URI."""

    id: str
    filename: str
    content_type: str
    data_url: str
    size: int


@dataclass
class CustomizationSession:
    family: ProductFamily
    policy: CustomizationPolicy
    delivery_option: str
    selections: dict[str, str] = field(default_factory=dict)
    quantity: Quantity = field(default_factory=lambda: Quantity(1))
    custom_text: str = ""
    engraving_text: str = ""
    special_instructions: str = ""
    image_index: dict[str, UploadedImage] = field(default_factory=dict)
    gift_wrap: bool = False
    current_step: WizardStep = WizardStep.OPTIONS

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def start(
        family: ProductFamily,
        policy: CustomizationPolicy,
        delivery_option: str,
    ) -> CustomizationSession:
        """New session with every axis default preselected."""
        return CustomizationSession(
            family=family,
            policy=policy,
            delivery_option=delivery_option,
            selections=family.default_selections(),
        )

    # --- Option selections ----------------------------------------------------

    def select(self, axis_id: str, value_key: str) -> None:
        self._ensure_editable()
        if not self.family.has_axis(axis_id):
            raise ValidationError(
                f"'{axis_id}' is not an option for {self.family.label}", field=axis_id
            )
        axis = self.family.axis(axis_id)
        if not axis.has_value(value_key):
            allowed = ", ".join(v.key for v in axis.values)
            raise ValidationError(
                f"'{value_key}' is not a valid {axis.label} (choose from {allowed})",
                field=axis_id,
            )
        self.selections[axis_id] = value_key

    def clear_selection(self, axis_id: str) -> None:
        self._ensure_editable()
        self.selections.pop(axis_id, None)

    # --- Quantity, delivery and gift wrap -------------------------------------

    def set_quantity(self, quantity: int) -> None:
        self._ensure_editable()
        self.quantity = Quantity(quantity)

    def set_delivery_option(self, key: str) -> None:
        self._ensure_editable()
        self.delivery_option = key

    def set_gift_wrap(self, enabled: bool) -> None:
        self._ensure_editable()
        self.gift_wrap = bool(enabled)

    # --- Free text ------------------------------------------------------------

    def set_custom_text(self, text: str) -> None:
        self._ensure_editable()
        self.custom_text = self._checked_text(
            text, self.policy.max_custom_text, "custom_text", "Custom text"
        )

    def set_engraving_text(self, text: str) -> None:
        self._ensure_editable()
        self.engraving_text = self._checked_text(
            text, self.policy.max_engraving_text, "engraving_text", "Engraving text"
        )

    def set_special_instructions(self, text: str) -> None:
        self._ensure_editable()
        self.special_instructions = self._checked_text(
            text, self.policy.max_instructions, "special_instructions", "Special instructions"
        )

    # --- Images ---------------------------------------------------------------

    @property
    def images(self) -> tuple[UploadedImage, ...]:
        return tuple(self.image_index.values())

    def attach_images(self, images: Iterable[UploadedImage]) -> None:
        """Attach a whole batch at once; either all images fit or none are added."""
        self._ensure_editable()
        batch = list(images)
        if len(self.image_index) + len(batch) > self.policy.max_images:
            raise ValidationError(
                f"At most {self.policy.max_images} images can be attached",
                field="images",
            )
        for image in batch:
            if image.id in self.image_index:
                raise ValidationError(f"Image '{image.id}' is already attached", field="images")
        for image in batch:
            self.image_index[image.id] = image

    def remove_image(self, image_id: str) -> UploadedImage:
        self._ensure_editable()
        try:
            return self.image_index.pop(image_id)
        except KeyError:
            raise EntityNotFoundError(f"Image '{image_id}' is not attached") from None

    # --- Step bookkeeping -----------------------------------------------------

    @property
    def is_submitted(self) -> bool:
        return self.current_step == WizardStep.SUBMITTED

    def move_to(self, step: WizardStep) -> None:
        """Set the current step. Transition rules live in the wizard."""
        self._ensure_editable()
        self.current_step = step

    # --- Internal helpers -----------------------------------------------------

    def _ensure_editable(self) -> None:
        if self.is_submitted:
            raise SessionLockedError("This order was already submitted and cannot change")

    @staticmethod
    def _checked_text(text: str | None, limit: int, field_name: str, label: str) -> str:
        value = text or ""
        if len(value) > limit:
            raise ValidationError(
                f"{label} is limited to {limit} characters (got {len(value)})",
                field=field_name,
            )
        return value
