"""Domain service: Step Validator.

Decides whether the wizard may leave a step. It reports *every* problem
on the step at once, each tied to the field that needs fixing, so the
caller can highlight them together instead of one per attempt.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from customizer.domain.model.customer import CustomerInfo, PaymentSelection
from customizer.domain.model.session import CustomizationSession, WizardStep
from customizer.domain.model.value_objects import PhoneNumber

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


class StepValidator:

    def validate(
        self,
        step: WizardStep,
        session: CustomizationSession,
        customer: CustomerInfo,
        payment: PaymentSelection,
    ) -> tuple[FieldError, ...]:
        if step == WizardStep.OPTIONS:
            return self._validate_options(session)
        if step == WizardStep.CUSTOMER_INFO:
            return self._validate_customer(customer)
        if step == WizardStep.PAYMENT:
            return self._validate_payment(payment)
        # DESIGN fields are optional and CONFIRM is a review, not a gate.
        return ()

    @staticmethod
    def _validate_options(session: CustomizationSession) -> tuple[FieldError, ...]:
        return tuple(
            FieldError(axis.id, f"Please choose a {axis.label.lower()}")
            for axis in session.family.required_axes
            if axis.id not in session.selections
        )

    @staticmethod
    def _validate_customer(customer: CustomerInfo) -> tuple[FieldError, ...]:
        errors: list[FieldError] = []

        if not customer.name.strip():
            errors.append(FieldError("name", "Name is required"))

        if not customer.phone.strip():
            errors.append(FieldError("phone", "Phone number is required"))
        elif not PhoneNumber.is_valid(customer.phone):
            errors.append(
                FieldError("phone", "Enter a valid mobile number (01XXXXXXXXX)")
            )

        email = (customer.email or "").strip()
        if email and not _EMAIL_PATTERN.match(email):
            errors.append(FieldError("email", "Enter a valid email address"))

        if not customer.address.strip():
            errors.append(FieldError("address", "Address is required"))

        return tuple(errors)

    @staticmethod
    def _validate_payment(payment: PaymentSelection) -> tuple[FieldError, ...]:
        if payment.method is None:
            return (FieldError("payment_method", "Choose a payment method"),)

        if payment.method.needs_transaction_reference and not (
            payment.transaction_reference and payment.transaction_reference.strip()
        ):
            return (
                FieldError(
                    "transaction_reference",
                    f"Transaction ID is required for {payment.method.value} payments",
                ),
            )
        return ()
