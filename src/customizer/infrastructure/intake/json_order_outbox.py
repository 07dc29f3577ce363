"""JSON-file-backed OrderIntakeGateway for running without an order service.

Each accepted order is appended, in wire format, to a JSON array on disk
together with a freshly issued tracking id. Stock is checked against the
product source so the offline path refuses the same orders the real
service would.
"""

from __future__ import annotations

import json
import logging
import secrets
import time
from pathlib import Path

from customizer.domain.exceptions import SubmissionError
from customizer.domain.model.order_payload import OrderPayload, SubmissionReceipt
from customizer.domain.repository.order_intake import OrderIntakeGateway
from customizer.domain.repository.product_repository import ProductRepository
from customizer.infrastructure.intake.wire_format import payload_to_wire

logger = logging.getLogger(__name__)

_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"


def generate_tracking_id() -> str:
    """``TRY`` + base-36 millisecond timestamp + five random characters."""
    millis = int(time.time() * 1000)
    stamp = ""
    while millis:
        millis, digit = divmod(millis, 36)
        stamp = _ALPHABET[digit] + stamp
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(5))
    return f"TRY{stamp}{suffix}"


class JsonOrderOutbox(OrderIntakeGateway):

    def __init__(self, file_path: Path, product_repo: ProductRepository) -> None:
        self._file_path = file_path
        self._product_repo = product_repo
        self._ensure_file()

    # --- OrderIntakeGateway interface -----------------------------------------

    def submit(self, payload: OrderPayload) -> SubmissionReceipt:
        product = self._product_repo.get_by_id(payload.product_id)
        if product is None:
            raise SubmissionError(
                f"Product '{payload.product_name}' is no longer sold",
                SubmissionError.VALIDATION_FAILED,
                False,
            )
        if payload.quantity > product.stock:
            raise SubmissionError(
                f"Only {product.stock} of {product.name} left in stock",
                SubmissionError.STOCK_UNAVAILABLE,
                False,
            )

        tracking_id = generate_tracking_id()
        record = payload_to_wire(payload)
        record["tracking_id"] = tracking_id
        record["created_at"] = payload.created_at.isoformat()

        try:
            orders = self._load_raw()
            orders.append(record)
            self._persist_raw(orders)
        except OSError as exc:
            raise SubmissionError(
                f"Could not record the order: {exc}", SubmissionError.TRANSIENT, True
            ) from exc

        logger.info("Recorded order %s in %s", tracking_id, self._file_path)
        return SubmissionReceipt(tracking_id=tracking_id, message="Order recorded")

    def list_all(self) -> list[dict]:
        return self._load_raw()

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, orders: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(orders, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
