"""JSON-file-backed implementation of ProductRepository (read-only)."""

from __future__ import annotations

import json
from decimal import Decimal, InvalidOperation
from pathlib import Path

from customizer.domain.exceptions import ConfigurationError, DomainException
from customizer.domain.model.product import Product
from customizer.domain.model.value_objects import Money
from customizer.domain.repository.product_repository import ProductRepository


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._load_raw():
            if str(raw["id"]) == str(product_id):
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._load_raw()]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        try:
            price = Decimal(str(raw["price"]))
        except (InvalidOperation, KeyError) as exc:
            raise ConfigurationError(f"Product {raw.get('id')!r} has no valid price") from exc
        if price < 0:
            raise ConfigurationError(
                f"Product {raw.get('id')!r} has a negative price ({price})"
            )
        try:
            return Product(
                id=str(raw["id"]),
                name=raw["name"],
                price=Money(price, raw.get("currency", "BDT")),
                stock=int(raw.get("stock", 0)),
                category=raw.get("category", ""),
                image_url=raw.get("image_url"),
            )
        except (KeyError, ValueError, DomainException) as exc:
            raise ConfigurationError(f"Invalid product record {raw.get('id')!r}: {exc}") from exc

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        if not self._file_path.exists():
            return []
        return json.loads(self._file_path.read_text(encoding="utf-8"))
