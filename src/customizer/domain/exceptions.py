"""Domain-level exceptions.

All rule violations are expressed as subclasses of DomainException so the
CLI layer can catch them uniformly and display user-friendly messages.

Three families matter to callers:

- ``ValidationError`` — the customer entered something we cannot accept.
  Recoverable, reported at the field or step level.
- ``ConfigurationError`` — the catalog or product data is defective.
  Never coerced away; fix the data.
- ``SubmissionError`` — the order-intake collaborator refused or failed.
  ``retryable`` tells whether the same payload may be sent again.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated by user input."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class StepValidationError(ValidationError):
    """The wizard cannot leave its current step until these fields are fixed."""

    def __init__(self, step: str, errors: tuple) -> None:
        details = "; ".join(f"{e.field}: {e.message}" for e in errors)
        super().__init__(f"Cannot leave step {step}: {details}")
        self.step = step
        self.errors = errors


class ConfigurationError(DomainException):
    """Catalog, pricing or product data is inconsistent."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class WizardStateError(DomainException):
    """An operation is not allowed in the wizard's current state."""


class SessionLockedError(WizardStateError):
    """The session was submitted and can no longer change."""


class SubmissionError(DomainException):
    """The order-intake collaborator did not accept the order."""

    VALIDATION_FAILED = "VALIDATION_FAILED"
    STOCK_UNAVAILABLE = "STOCK_UNAVAILABLE"
    TRANSIENT = "TRANSIENT"
    IN_PROGRESS = "IN_PROGRESS"

    def __init__(self, message: str, reason: str, retryable: bool) -> None:
        super().__init__(message)
        self.reason = reason
        self.retryable = retryable


class SubmissionInProgressError(SubmissionError):
    """A submission for this wizard is already outstanding."""

    def __init__(self) -> None:
        super().__init__(
            "An order submission is already in progress",
            reason=SubmissionError.IN_PROGRESS,
            retryable=True,
        )
