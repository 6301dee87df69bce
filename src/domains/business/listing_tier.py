# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Listing tier service.

New tiers are appended: their ``order`` is the current number of tiers plus
one. Reordering happens through update.
"""

import logging

from src.domains.messaging import EntityReferenceCleaner
from src.infrastructure.database.models import ListingTier, new_id
from src.infrastructure.database.repository import BusinessRepositoryManager
from src.infrastructure.database.specification import Specification
from src.models.business import ListingTierDto
from src.models.common import Result

logger = logging.getLogger(__name__)

TIER_NOT_FOUND = "Listing Tier not found."


class ListingTierService:
    def __init__(self, business: BusinessRepositoryManager, cleaner: EntityReferenceCleaner) -> None:
        self._business = business
        self._cleaner = cleaner

    async def all(self) -> Result[list[ListingTierDto]]:
        spec = Specification(ListingTier).add_order_by(ListingTier.order.asc())
        result = await self._business.listing_tiers.list(spec)
        if not result.succeeded:
            return Result.fail(result.messages)
        return Result.success([ListingTierDto.from_entity(t) for t in result.data or []])

    async def get(self, tier_id: str) -> Result[ListingTierDto]:
        result = await self._business.listing_tiers.first_or_default(
            Specification.by_id(ListingTier, tier_id)
        )
        if not result.succeeded or result.data is None:
            return Result.fail(TIER_NOT_FOUND)
        return Result.success(ListingTierDto.from_entity(result.data))

    async def create(self, dto: ListingTierDto) -> Result[ListingTierDto]:
        count = await self._business.listing_tiers.count()
        if not count.succeeded:
            return Result.fail(count.messages)

        tier = ListingTier(
            id=dto.id or new_id(),
            name=dto.name,
            short_description=dto.short_description,
            description=dto.description,
            price=dto.price,
            order=(count.data or 0) + 1,
            allow_service_and_product_listing=dto.allow_service_and_product_listing,
        )
        created = await self._business.listing_tiers.create(tier)
        if not created.succeeded:
            return Result.fail(created.messages)

        saved = await self._business.listing_tiers.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)

        logger.info("Listing tier created: %s at position %d", tier.id, tier.order)
        return Result.success(ListingTierDto.from_entity(tier))

    async def update(self, dto: ListingTierDto) -> Result[ListingTierDto]:
        result = await self._business.listing_tiers.first_or_default(
            Specification.by_id(ListingTier, dto.id or "")
        )
        if not result.succeeded or result.data is None:
            return Result.fail(TIER_NOT_FOUND)

        tier = result.data
        tier.name = dto.name
        tier.short_description = dto.short_description
        tier.description = dto.description
        tier.price = dto.price
        tier.order = dto.order
        tier.allow_service_and_product_listing = dto.allow_service_and_product_listing

        saved = await self._business.listing_tiers.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)
        return Result.success(ListingTierDto.from_entity(tier))

    async def delete(self, tier_id: str) -> Result[None]:
        """Delete a tier. Listings on the tier keep existing without one."""
        return await self._cleaner.delete_aggregate(
            self._business.listing_tiers,
            tier_id,
            "Listing Tier removed successfully",
        )
