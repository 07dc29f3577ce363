"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from functools import lru_cache

from customizer.domain.model.pricing import MEGABYTE
from customizer.domain.model.value_objects import Money
from customizer.domain.repository.order_intake import OrderIntakeGateway
from customizer.domain.service.order_assembler import OrderAssembler
from customizer.infrastructure.intake.http_order_intake import HttpOrderIntakeGateway
from customizer.infrastructure.intake.json_order_outbox import JsonOrderOutbox
from customizer.infrastructure.messaging.whatsapp_handoff import WhatsAppHandoff
from customizer.infrastructure.persistence.json_catalog_loader import (
    JsonCatalogLoader,
    LoadedCatalog,
)
from customizer.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from customizer.infrastructure.settings import Settings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def settings() -> Settings:
    return Settings.from_env()


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(settings().data_dir / "products.json")


@lru_cache(maxsize=1)
def catalog() -> LoadedCatalog:
    """Catalog, rules and limits from catalog.json with environment overrides."""
    cfg = settings()
    loaded = JsonCatalogLoader(cfg.data_dir / "catalog.json").load()

    policy = loaded.policy
    if cfg.max_images is not None:
        policy = replace(policy, max_images=cfg.max_images)
    if cfg.max_image_mb is not None:
        policy = replace(policy, max_image_bytes=int(cfg.max_image_mb * MEGABYTE))

    rules = loaded.rules
    if cfg.free_delivery_threshold is not None:
        threshold = cfg.free_delivery_threshold.strip().lower()
        rules = replace(
            rules,
            free_delivery_threshold=None if threshold in ("", "none", "off") else Money.of(threshold),
        )

    return LoadedCatalog(catalog=loaded.catalog, rules=rules, policy=policy)


def order_assembler() -> OrderAssembler:
    return OrderAssembler(catalog().rules)


def order_intake() -> OrderIntakeGateway:
    cfg = settings()
    if cfg.order_intake_url:
        logger.debug("Submitting orders to %s", cfg.order_intake_url)
        return HttpOrderIntakeGateway.connect(cfg.order_intake_url, cfg.intake_timeout)
    return JsonOrderOutbox(cfg.data_dir / "orders.json", product_repository())


def message_handoff() -> WhatsAppHandoff:
    return WhatsAppHandoff(settings().whatsapp_number)
