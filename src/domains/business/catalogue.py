# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Services and products offered on a listing.

Both kinds share one shape (name, description, price) and are handled by
``ListingItemService`` parameterized with the repository and a label used in
messages.
"""

import logging
from typing import Generic, TypeVar

from src.infrastructure.database.models import ListingProduct, ListingService, new_id
from src.infrastructure.database.repository import BusinessRepositoryManager, Repository
from src.infrastructure.database.specification import Specification
from src.models.business import ListingProductDto, ListingServiceDto
from src.models.common import Result

logger = logging.getLogger(__name__)

ItemT = TypeVar("ItemT", ListingService, ListingProduct)
DtoT = TypeVar("DtoT", ListingServiceDto, ListingProductDto)

# Both item kinds report a missing row with the same message.
ITEM_NOT_FOUND = "Service not found."


class ListingItemService(Generic[ItemT, DtoT]):
    """Add, update and remove one kind of listing item.

    Attributes:
        _items: Repository of the item kind.
        _model: Mapped item class.
        _label: ``"service"`` or ``"product"``, used in messages.
    """

    def __init__(self, items: Repository[ItemT], model: type[ItemT], label: str) -> None:
        self._items = items
        self._model = model
        self._label = label

    async def add(self, dto: DtoT) -> Result[DtoT]:
        if not (dto.listing_id or "").strip():
            return Result.fail(f"A listing identifier is required to add a {self._label}.")

        item = self._model(
            id=dto.id or new_id(),
            listing_id=dto.listing_id,
            name=dto.name,
            description=dto.description,
            price=dto.price,
        )
        created = await self._items.create(item)
        if not created.succeeded:
            return Result.fail(created.messages)

        saved = await self._items.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)

        logger.info("Listing %s added: %s on %s", self._label, item.id, item.listing_id)
        return Result.success(dto.model_copy(update={"id": item.id}))

    async def update(self, dto: DtoT) -> Result[None]:
        result = await self._items.first_or_default(Specification.by_id(self._model, dto.id or ""))
        if not result.succeeded or result.data is None:
            return Result.fail(ITEM_NOT_FOUND)

        item = result.data
        item.name = dto.name
        item.description = dto.description
        item.price = dto.price

        saved = await self._items.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)
        return Result.success()

    async def remove(self, item_id: str) -> Result[None]:
        deleted = await self._items.delete(item_id)
        if not deleted.succeeded:
            return Result.fail(deleted.messages)

        saved = await self._items.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)
        return Result.success()


def listing_services(business: BusinessRepositoryManager) -> ListingItemService:
    return ListingItemService(business.listing_services, ListingService, "service")


def listing_products(business: BusinessRepositoryManager) -> ListingItemService:
    return ListingItemService(business.listing_products, ListingProduct, "product")
