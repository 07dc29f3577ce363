"""Loads the option catalog, pricing rules and customization limits from JSON.

Everything is validated while loading: an axis without values, an unknown
default, a negative price or a malformed number raises ConfigurationError
here instead of surfacing later as a wrong total.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path

from customizer.domain.exceptions import ConfigurationError, ValidationError
from customizer.domain.model.catalog import (
    OptionAxis,
    OptionCatalog,
    OptionValue,
    ProductFamily,
)
from customizer.domain.model.pricing import (
    MEGABYTE,
    CustomizationPolicy,
    DeliveryOption,
    PricingRules,
)
from customizer.domain.model.value_objects import Money

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadedCatalog:
    catalog: OptionCatalog
    rules: PricingRules
    policy: CustomizationPolicy


class JsonCatalogLoader:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    def load(self) -> LoadedCatalog:
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise ConfigurationError(f"Catalog file not found: {self._file_path}") from exc
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"Catalog file is not valid JSON: {exc}") from exc

        try:
            loaded = LoadedCatalog(
                catalog=self._to_catalog(raw),
                rules=self._to_rules(raw.get("pricing", {})),
                policy=self._to_policy(raw.get("limits", {})),
            )
        except KeyError as exc:
            raise ConfigurationError(f"Catalog entry is missing {exc}") from exc

        logger.debug(
            "Loaded %d product families from %s",
            len(loaded.catalog.families), self._file_path,
        )
        return loaded

    # --- Serialization --------------------------------------------------------

    @classmethod
    def _to_catalog(cls, raw: dict) -> OptionCatalog:
        families = tuple(cls._to_family(f) for f in raw.get("families", []))
        return OptionCatalog(families=families, default_family_id=raw["default_family"])

    @classmethod
    def _to_family(cls, raw: dict) -> ProductFamily:
        return ProductFamily(
            id=raw["id"],
            label=raw.get("label", raw["id"]),
            axes=tuple(cls._to_axis(a) for a in raw.get("axes", [])),
            categories=tuple(c.lower() for c in raw.get("categories", [])),
            keywords=tuple(k.lower() for k in raw.get("keywords", [])),
        )

    @classmethod
    def _to_axis(cls, raw: dict) -> OptionAxis:
        return OptionAxis(
            id=raw["id"],
            label=raw.get("label", raw["id"]),
            values=tuple(
                OptionValue(
                    key=v["key"],
                    label=v.get("label", v["key"]),
                    price_delta=_money(v.get("price", "0"), f"{raw['id']}.{v['key']}"),
                )
                for v in raw.get("values", [])
            ),
            required=bool(raw.get("required", True)),
            default=raw.get("default"),
        )

    @staticmethod
    def _to_rules(raw: dict) -> PricingRules:
        defaults = PricingRules()
        options = raw.get("delivery_options")
        delivery_options = (
            tuple(
                DeliveryOption(
                    key=d["key"],
                    label=d.get("label", d["key"]),
                    price=_money(d["price"], f"delivery.{d['key']}"),
                )
                for d in options
            )
            if options is not None
            else defaults.delivery_options
        )

        threshold = raw.get("free_delivery_threshold", defaults.free_delivery_threshold)
        if threshold is not None and not isinstance(threshold, Money):
            threshold = _money(threshold, "free_delivery_threshold")

        def surcharge(name: str) -> Money:
            value = raw.get(name)
            return getattr(defaults, name) if value is None else _money(value, name)

        return PricingRules(
            text_surcharge=surcharge("text_surcharge"),
            engraving_surcharge=surcharge("engraving_surcharge"),
            instructions_surcharge=surcharge("instructions_surcharge"),
            per_image_surcharge=surcharge("per_image_surcharge"),
            gift_wrap_surcharge=surcharge("gift_wrap_surcharge"),
            delivery_options=delivery_options,
            default_delivery=raw.get("default_delivery", defaults.default_delivery),
            free_delivery_threshold=threshold,
        )

    @staticmethod
    def _to_policy(raw: dict) -> CustomizationPolicy:
        defaults = CustomizationPolicy()
        max_image_mb = raw.get("max_image_mb")
        types = raw.get("allowed_image_types")
        try:
            return CustomizationPolicy(
                max_custom_text=int(raw.get("max_custom_text", defaults.max_custom_text)),
                max_engraving_text=int(
                    raw.get("max_engraving_text", defaults.max_engraving_text)
                ),
                max_instructions=int(raw.get("max_instructions", defaults.max_instructions)),
                max_image_bytes=(
                    int(float(max_image_mb) * MEGABYTE)
                    if max_image_mb is not None
                    else defaults.max_image_bytes
                ),
                max_images=int(raw.get("max_images", defaults.max_images)),
                allowed_image_types=(
                    frozenset(t.lower() for t in types)
                    if types is not None
                    else defaults.allowed_image_types
                ),
            )
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Invalid customization limits: {exc}") from exc


def _money(value, where: str) -> Money:
    try:
        return Money(Decimal(str(value)))
    except InvalidOperation as exc:
        raise ConfigurationError(f"Invalid amount {value!r} for {where}") from exc
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid amount {value!r} for {where}: {exc}") from exc
