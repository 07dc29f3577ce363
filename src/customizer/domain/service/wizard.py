"""Customization Wizard — the step-gated flow around one session.

OPTIONS -> DESIGN -> CUSTOMER_INFO -> PAYMENT -> CONFIRM -> SUBMITTED

The wizard owns the product being customized, the session, and the
customer and payment details. It moves forward only when
``StepValidator`` finds nothing missing on the current step, and moving
back never clears anything. ``cancel()`` is the only way to discard the
entered data.

Submission itself is orchestrated by the application layer; the wizard
only provides the guard (``begin_submission`` / ``end_submission``) that
keeps a second submission from starting while one is in flight, and the
final ``mark_submitted`` transition.
"""

from __future__ import annotations

import threading
from collections.abc import Sequence

from customizer.domain.exceptions import (
    SessionLockedError,
    StepValidationError,
    SubmissionInProgressError,
    ValidationError,
    WizardStateError,
)
from customizer.domain.model.customer import CustomerInfo, PaymentSelection
from customizer.domain.model.order_payload import SubmissionReceipt
from customizer.domain.model.pricing import PriceBreakdown, PricingRules
from customizer.domain.model.product import Product
from customizer.domain.model.session import CustomizationSession, WizardStep
from customizer.domain.service.image_intake import (
    ImageIntakeService,
    IntakeResult,
    RawImage,
)
from customizer.domain.service.pricing_calculator import compute_price
from customizer.domain.service.step_validator import FieldError, StepValidator

_GATED_STEPS = (
    WizardStep.OPTIONS,
    WizardStep.DESIGN,
    WizardStep.CUSTOMER_INFO,
    WizardStep.PAYMENT,
)


class CustomizationWizard:

    def __init__(
        self,
        product: Product,
        session: CustomizationSession,
        rules: PricingRules,
        validator: StepValidator | None = None,
        intake: ImageIntakeService | None = None,
    ) -> None:
        self.product = product
        self._session: CustomizationSession | None = session
        self._rules = rules
        self._validator = validator or StepValidator()
        self._intake = intake or ImageIntakeService(session.policy)
        self.customer = CustomerInfo()
        self.payment = PaymentSelection()
        self.tracking_id: str | None = None
        self._submission_lock = threading.Lock()

    # --- State ----------------------------------------------------------------

    @property
    def session(self) -> CustomizationSession:
        if self._session is None:
            raise WizardStateError("This customization was cancelled")
        return self._session

    @property
    def is_cancelled(self) -> bool:
        return self._session is None

    @property
    def step(self) -> WizardStep:
        return self.session.current_step

    @property
    def price(self) -> PriceBreakdown:
        session = self.session
        return compute_price(self.product.price, session.family, session, self._rules)

    @property
    def is_submitting(self) -> bool:
        return self._submission_lock.locked()

    # --- Editing --------------------------------------------------------------

    def select(self, axis_id: str, value_key: str) -> None:
        self.session.select(axis_id, value_key)

    def clear_selection(self, axis_id: str) -> None:
        self.session.clear_selection(axis_id)

    def set_quantity(self, quantity: int) -> None:
        self.session.set_quantity(quantity)

    def set_custom_text(self, text: str) -> None:
        self.session.set_custom_text(text)

    def set_engraving_text(self, text: str) -> None:
        self.session.set_engraving_text(text)

    def set_special_instructions(self, text: str) -> None:
        self.session.set_special_instructions(text)

    def set_gift_wrap(self, enabled: bool) -> None:
        self.session.set_gift_wrap(enabled)

    def set_delivery_option(self, key: str) -> None:
        if not self._rules.has_delivery(key):
            allowed = ", ".join(d.key for d in self._rules.delivery_options)
            raise ValidationError(
                f"Unknown delivery option '{key}' (choose from {allowed})",
                field="delivery_option",
            )
        self.session.set_delivery_option(key)

    def add_images(self, files: Sequence[RawImage]) -> IntakeResult:
        """Run a batch through intake, then attach every accepted image at once."""
        session = self.session
        if session.is_submitted:
            raise SessionLockedError("This order was already submitted and cannot change")
        result = self._intake.ingest(files, session.images)
        session.attach_images(result.accepted)
        return result

    def remove_image(self, image_id: str) -> None:
        self.session.remove_image(image_id)

    def set_customer(self, customer: CustomerInfo) -> None:
        self._ensure_editable()
        self.customer = customer

    def set_payment(self, payment: PaymentSelection) -> None:
        self._ensure_editable()
        self.payment = payment

    # --- Navigation -----------------------------------------------------------

    def errors(self, step: WizardStep | None = None) -> tuple[FieldError, ...]:
        """Field errors that would block leaving ``step`` (default: current)."""
        return self._validator.validate(
            step or self.step, self.session, self.customer, self.payment
        )

    def advance(self) -> WizardStep:
        step = self.step
        if step in (WizardStep.CONFIRM, WizardStep.SUBMITTED):
            raise WizardStateError(f"Cannot advance from {step.value}; submit the order instead")

        errors = self.errors(step)
        if errors:
            raise StepValidationError(step.value, errors)

        self.session.move_to(step.next)
        return self.step

    def back(self) -> WizardStep:
        step = self.step
        if step == WizardStep.SUBMITTED:
            raise SessionLockedError("This order was already submitted and cannot change")
        if step.previous is None:
            raise WizardStateError(f"Already at the first step ({step.value})")

        self.session.move_to(step.previous)
        return self.step

    def cancel(self) -> None:
        """Abandon the flow and discard everything entered."""
        if self._session is not None and self._session.is_submitted:
            raise SessionLockedError("A submitted order cannot be cancelled here")
        if self.is_submitting:
            raise SubmissionInProgressError()
        self._session = None
        self.customer = CustomerInfo()
        self.payment = PaymentSelection()

    # --- Submission guard -----------------------------------------------------

    def begin_submission(self) -> None:
        """Claim the single submission slot.

        Raises SubmissionInProgressError while another submission holds it.
        Every gated step is re-checked, since fields stay editable after
        their step was passed.
        """
        step = self.step
        if not self._submission_lock.acquire(blocking=False):
            raise SubmissionInProgressError()

        try:
            if step != WizardStep.CONFIRM:
                raise WizardStateError(
                    f"Orders can only be submitted from CONFIRM (current step: {step.value})"
                )
            for gated in _GATED_STEPS:
                errors = self.errors(gated)
                if errors:
                    raise StepValidationError(gated.value, errors)
        except Exception:
            self._submission_lock.release()
            raise

    def end_submission(self) -> None:
        if self._submission_lock.locked():
            self._submission_lock.release()

    def mark_submitted(self, receipt: SubmissionReceipt) -> None:
        self.session.move_to(WizardStep.SUBMITTED)
        self.tracking_id = receipt.tracking_id

    # --- Internal helpers -----------------------------------------------------

    def _ensure_editable(self) -> None:
        if self.session.is_submitted:
            raise SessionLockedError("This order was already submitted and cannot change")
