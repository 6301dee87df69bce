# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Listing image uploads.

Uploaded files are stored by ``MediaUploader`` and recorded as
``ListingImage`` rows appended after the listing's existing images. Uploads
are best effort: the images that were stored are saved and returned, and a
message is added for each file that failed.
"""

import asyncio
import logging
from collections.abc import Sequence

from sqlalchemy.orm import selectinload

from src.infrastructure.database.models import BusinessListing, ListingImage, new_id
from src.infrastructure.database.repository import BusinessRepositoryManager
from src.infrastructure.database.specification import Specification
from src.infrastructure.media import MediaUploader, UploadSource
from src.models.business import ListingImageDto
from src.models.common import Result

logger = logging.getLogger(__name__)

LISTING_NOT_FOUND = "Listing not found."


class ListingImageService:
    def __init__(self, business: BusinessRepositoryManager, uploader: MediaUploader) -> None:
        self._business = business
        self._uploader = uploader

    async def add_images(
        self,
        listing_id: str,
        files: Sequence[UploadSource],
        selector: str | None = None,
        cancel: asyncio.Event | None = None,
    ) -> Result[list[ListingImageDto]]:
        """Upload ``files`` and attach them to the listing.

        Returns:
            The stored images, with a message per failed file. Fails only
            when the listing is missing, no file was given or none was stored.
        """
        if not files:
            return Result.fail("No files were provided.")

        spec = Specification.by_id(BusinessListing, listing_id).add_include(
            selectinload(BusinessListing.images)
        )
        found = await self._business.listings.first_or_default(spec)
        if not found.succeeded:
            return Result.fail(found.messages)
        if found.data is None:
            return Result.fail(LISTING_NOT_FOUND)

        outcomes = await self._uploader.upload_all(f"listings/{listing_id}", files, cancel)
        errors = [o.error for o in outcomes if o.error]
        stored = [o for o in outcomes if o.succeeded]
        if not stored:
            return Result.fail(errors)

        next_order = max((image.order for image in found.data.images), default=-1) + 1
        images = [
            ListingImage(
                id=new_id(),
                listing_id=listing_id,
                url=outcome.url,
                file_name=outcome.file_name,
                content_type=outcome.content_type,
                size=outcome.size,
                selector=selector,
                order=next_order + index,
            )
            for index, outcome in enumerate(stored)
        ]
        created = await self._business.listing_images.create_range(images)
        if not created.succeeded:
            await self._discard(images)
            return Result.fail(created.messages)

        saved = await self._business.listing_images.save()
        if not saved.succeeded:
            await self._discard(images)
            return Result.fail(saved.messages)

        logger.info(
            "Listing %s: %d images stored, %d failed", listing_id, len(images), len(errors)
        )
        return Result.success([ListingImageDto.from_entity(i) for i in images], messages=errors)

    async def remove_image(self, image_id: str) -> Result[None]:
        found = await self._business.listing_images.first_or_default(
            Specification.by_id(ListingImage, image_id)
        )
        if not found.succeeded:
            return Result.fail(found.messages)

        deleted = await self._business.listing_images.delete(image_id)
        if not deleted.succeeded:
            return Result.fail(deleted.messages)

        saved = await self._business.listing_images.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)

        if found.data is not None:
            await self._uploader.remove(found.data.url)
        return Result.success(messages="Image removed successfully")

    async def _discard(self, images: list[ListingImage]) -> None:
        for image in images:
            await self._uploader.remove(image.url)
