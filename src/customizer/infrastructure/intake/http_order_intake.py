"""HTTP implementation of OrderIntakeGateway (POST /api/orders)."""

from __future__ import annotations

import logging

import httpx

from customizer.domain.exceptions import SubmissionError
from customizer.domain.model.order_payload import OrderPayload, SubmissionReceipt
from customizer.domain.repository.order_intake import OrderIntakeGateway
from customizer.infrastructure.intake.wire_format import payload_to_wire

logger = logging.getLogger(__name__)

ORDERS_PATH = "/api/orders"


class HttpOrderIntakeGateway(OrderIntakeGateway):

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    @staticmethod
    def connect(base_url: str, timeout: float = 15.0) -> HttpOrderIntakeGateway:
        return HttpOrderIntakeGateway(httpx.Client(base_url=base_url, timeout=timeout))

    def close(self) -> None:
        self._client.close()

    # --- OrderIntakeGateway interface -----------------------------------------

    def submit(self, payload: OrderPayload) -> SubmissionReceipt:
        body = payload_to_wire(payload)
        try:
            response = self._client.post(ORDERS_PATH, json=body)
        except httpx.TimeoutException as exc:
            raise SubmissionError(
                "The order service did not answer in time", SubmissionError.TRANSIENT, True
            ) from exc
        except httpx.TransportError as exc:
            raise SubmissionError(
                f"Could not reach the order service: {exc}", SubmissionError.TRANSIENT, True
            ) from exc

        if response.is_success:
            return self._to_receipt(response)
        raise self._to_error(response)

    # --- Response interpretation ----------------------------------------------

    @staticmethod
    def _to_receipt(response: httpx.Response) -> SubmissionReceipt:
        try:
            data = response.json()
        except ValueError as exc:
            raise SubmissionError(
                "The order service sent an unreadable response",
                SubmissionError.TRANSIENT,
                True,
            ) from exc

        if not isinstance(data, dict):
            data = {}
        order = data.get("order") or {}
        tracking_id = order.get("tracking_id") or data.get("tracking_id")
        if not tracking_id:
            # The order may exist on the server; a blind retry could duplicate it.
            raise SubmissionError(
                "The order service did not return a tracking ID",
                SubmissionError.TRANSIENT,
                False,
            )
        return SubmissionReceipt(tracking_id=str(tracking_id), message=data.get("message"))

    @staticmethod
    def _to_error(response: httpx.Response) -> SubmissionError:
        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}
        detail = data.get("error") or data.get("message")
        status = response.status_code
        logger.debug("Order service answered %s: %s", status, response.text[:500])

        if status in (400, 422):
            return SubmissionError(
                detail or "The order was rejected as invalid",
                SubmissionError.VALIDATION_FAILED,
                False,
            )
        if status == 409:
            return SubmissionError(
                detail or "The product is no longer available in that quantity",
                SubmissionError.STOCK_UNAVAILABLE,
                False,
            )
        retryable = status >= 500 or status == 429
        return SubmissionError(
            detail or f"The order service failed with status {status}",
            SubmissionError.TRANSIENT,
            retryable,
        )
