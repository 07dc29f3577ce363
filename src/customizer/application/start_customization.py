"""Application service: Start Customization use case.

Looks the product up, classifies it into an option family and opens a
fresh wizard with the family's defaults preselected.
"""

from __future__ import annotations

import logging

from customizer.domain.exceptions import EntityNotFoundError, ValidationError
from customizer.domain.model.catalog import OptionCatalog
from customizer.domain.model.pricing import CustomizationPolicy, PricingRules
from customizer.domain.model.session import CustomizationSession
from customizer.domain.repository.product_repository import ProductRepository
from customizer.domain.service.wizard import CustomizationWizard

logger = logging.getLogger(__name__)


class StartCustomizationHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        catalog: OptionCatalog,
        rules: PricingRules,
        policy: CustomizationPolicy,
    ) -> None:
        self._product_repo = product_repo
        self._catalog = catalog
        self._rules = rules
        self._policy = policy

    def handle(self, product_id: str) -> CustomizationWizard:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        if not product.in_stock:
            raise ValidationError(f"{product.name} is out of stock")

        family = self._catalog.family_for(product)
        session = CustomizationSession.start(
            family=family,
            policy=self._policy,
            delivery_option=self._rules.default_delivery,
        )
        logger.info("Started customization of %s as family '%s'", product.id, family.id)
        return CustomizationWizard(product, session, self._rules)
