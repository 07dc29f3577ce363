"""Option Catalog — the selectable variant axes per product family.

The catalog is read-only once built and may be shared between any number
of open customization flows. All structural checks run at construction
time so a broken catalog never reaches the price calculator.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from customizer.domain.exceptions import ConfigurationError, EntityNotFoundError
from customizer.domain.model.product import Product
from customizer.domain.model.value_objects import Money

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OptionValue:
    key: str
    label: str
    price_delta: Money = field(default_factory=Money.zero)


@dataclass(frozen=True)
class OptionAxis:
    """One customizable dimension, e.g. ``size`` or ``printArea``."""

    id: str
    label: str
    values: tuple[OptionValue, ...]
    required: bool = True
    default: str | None = None

    def __post_init__(self) -> None:
        if not self.values:
            raise ConfigurationError(f"Option axis '{self.id}' has no values")

        keys = [v.key for v in self.values]
        duplicates = sorted({k for k in keys if keys.count(k) > 1})
        if duplicates:
            raise ConfigurationError(
                f"Option axis '{self.id}' has duplicate values: {', '.join(duplicates)}"
            )

        if self.default is not None and self.default not in keys:
            raise ConfigurationError(
                f"Default '{self.default}' is not a value of axis '{self.id}'"
            )

    def has_value(self, key: str) -> bool:
        return any(v.key == key for v in self.values)

    def value(self, key: str) -> OptionValue:
        for v in self.values:
            if v.key == key:
                return v
        raise ConfigurationError(f"Unknown value '{key}' for option axis '{self.id}'")


@dataclass(frozen=True)
class ProductFamily:
    """A group of products sharing the same option axes.

    ``categories`` and ``keywords`` drive ``OptionCatalog.family_for``.
    """

    id: str
    label: str
    axes: tuple[OptionAxis, ...]
    categories: tuple[str, ...] = ()
    keywords: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        ids = [a.id for a in self.axes]
        if len(ids) != len(set(ids)):
            raise ConfigurationError(f"Product family '{self.id}' repeats an option axis")

    def has_axis(self, axis_id: str) -> bool:
        return any(a.id == axis_id for a in self.axes)

    def axis(self, axis_id: str) -> OptionAxis:
        for a in self.axes:
            if a.id == axis_id:
                return a
        raise ConfigurationError(
            f"Unknown option axis '{axis_id}' for product family '{self.id}'"
        )

    @property
    def required_axes(self) -> tuple[OptionAxis, ...]:
        return tuple(a for a in self.axes if a.required)

    def default_selections(self) -> dict[str, str]:
        return {a.id: a.default for a in self.axes if a.default is not None}


@dataclass(frozen=True)
class OptionCatalog:
    """Every product family plus the fallback used for unclassified products."""

    families: tuple[ProductFamily, ...]
    default_family_id: str

    def __post_init__(self) -> None:
        if not self.families:
            raise ConfigurationError("Option catalog must define at least one product family")

        ids = [f.id for f in self.families]
        if len(ids) != len(set(ids)):
            raise ConfigurationError("Option catalog repeats a product family id")

        if self.default_family_id not in ids:
            raise ConfigurationError(
                f"Default product family '{self.default_family_id}' is not defined"
            )

    def family(self, family_id: str) -> ProductFamily:
        for f in self.families:
            if f.id == family_id:
                return f
        raise EntityNotFoundError(f"Product family '{family_id}' not found")

    def family_for(self, product: Product) -> ProductFamily:
        """Classify a product: category tag first, then name keywords.

        Products matching nothing get the default family.
        """
        category = (product.category or "").strip().lower()
        if category:
            for f in self.families:
                if category in f.categories:
                    return f

        name = product.name.lower()
        for f in self.families:
            if any(keyword in name for keyword in f.keywords):
                return f

        logger.debug(
            "Product %s (%r) matched no family, using '%s'",
            product.id, product.name, self.default_family_id,
        )
        return self.family(self.default_family_id)
