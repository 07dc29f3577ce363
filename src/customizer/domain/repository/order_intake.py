"""Abstract order-intake collaborator.

The single point where the customization core talks to the outside world
about an order. Implementations either return a receipt carrying the
tracking id or raise ``SubmissionError`` with a reason and a
``retryable`` flag.

Gateways may hold a connection, so callers use them as context managers
(or call ``close()``) once the order has been handed over.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from customizer.domain.model.order_payload import OrderPayload, SubmissionReceipt


class OrderIntakeGateway(ABC):

    @abstractmethod
    def submit(self, payload: OrderPayload) -> SubmissionReceipt:
        """Hand the order over; raise SubmissionError if it is not accepted."""

    def close(self) -> None:
        """Release any connection held by the gateway."""

    def __enter__(self) -> OrderIntakeGateway:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
