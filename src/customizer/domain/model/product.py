"""Product — read-only view of a catalog item.

Products are owned by the external catalog source. The customization core
only reads them: the base price feeds the calculator, the category and
name feed the option-family classifier.
"""

from __future__ import annotations

from dataclasses import dataclass

from customizer.domain.exceptions import ValidationError
from customizer.domain.model.value_objects import Money


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    price: Money
    stock: int = 0
    category: str = ""
    image_url: str | None = None

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Product name is required")
        if self.stock < 0:
            raise ValidationError(
                f"Stock for {self.name} cannot be negative, got {self.stock}"
            )

    @property
    def in_stock(self) -> bool:
        return self.stock > 0
