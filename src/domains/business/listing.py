# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Business listing service.

Listings are created pending review and active for ``active_days`` from
creation. Renewal extends the active period by the same number of days,
counted from the later of now and the current expiry so that early renewals
do not lose remaining time.

Example:
    >>> service = BusinessListingService(business, cleaner, sender, active_days=365)
    >>> created = await service.create(BusinessListingDto(heading="Bakery"))
    >>> created.data.status
    'pending'
"""

import logging

from sqlalchemy import or_
from sqlalchemy.orm import selectinload

from src.domains.messaging import EntityReferenceCleaner
from src.infrastructure.database.models import (
    BusinessListing,
    ListingProduct,
    ListingService,
    MessageType,
    ReviewStatus,
    new_id,
)
from src.infrastructure.database.repository import BusinessRepositoryManager
from src.infrastructure.database.specification import PagedSpecification, Specification
from src.infrastructure.notifications import NotificationSender
from src.models.business import BusinessListingDto, ListingContactRequest
from src.models.common import PaginatedResult, Result
from src.models.messaging import NotificationDto, RecipientDto
from src.models.paging import BusinessListingPageParameters
from src.utils.datetime import days_from_now, ensure_utc, utc_now

logger = logging.getLogger(__name__)

LISTING_NOT_FOUND = "Listing not found."
SHORT_DESCRIPTION_LENGTH = 55


def listing_details() -> tuple:
    return (
        selectinload(BusinessListing.tier),
        selectinload(BusinessListing.products),
        selectinload(BusinessListing.services),
        selectinload(BusinessListing.images),
    )


def truncate(text: str, length: int) -> str:
    return text if len(text) <= length else text[:length]


class BusinessListingService:
    """Listing lifecycle: create, update, review, renewal and enquiries.

    Attributes:
        _business: Business repositories bound to the request session.
        _cleaner: Removes notifications and messages of deleted listings.
        _sender: Delivers owner enquiries.
        _active_days: Length of an active period in days.
    """

    def __init__(
        self,
        business: BusinessRepositoryManager,
        cleaner: EntityReferenceCleaner,
        sender: NotificationSender,
        active_days: int = 365,
    ) -> None:
        self._business = business
        self._cleaner = cleaner
        self._sender = sender
        self._active_days = active_days

    # =========================================================================
    # Queries
    # =========================================================================

    async def paged(
        self, parameters: BusinessListingPageParameters
    ) -> PaginatedResult[BusinessListingDto]:
        criteria = []
        if parameters.status:
            criteria.append(BusinessListing.status == parameters.status)
        if parameters.tier_id:
            criteria.append(BusinessListing.tier_id == parameters.tier_id)
        if parameters.user_id:
            criteria.append(BusinessListing.user_id == parameters.user_id)

        spec = PagedSpecification(
            BusinessListing,
            parameters,
            *criteria,
            search_columns=[BusinessListing.heading, BusinessListing.slogan],
        ).add_include(*listing_details())

        rows = await self._business.listings.list(spec)
        if not rows.succeeded:
            return PaginatedResult.fail(rows.messages)

        total = await self._business.listings.count(spec)
        if not total.succeeded:
            return PaginatedResult.fail(total.messages)

        return PaginatedResult.success(
            [BusinessListingDto.from_entity(listing) for listing in rows.data or []],
            total_count=total.data or 0,
            page_nr=parameters.page_nr,
            page_size=parameters.page_size,
        )

    async def active(self) -> Result[list[BusinessListingDto]]:
        """Approved listings whose active period has not ended."""
        spec = (
            Specification(
                BusinessListing,
                BusinessListing.status == ReviewStatus.APPROVED,
                or_(BusinessListing.active_until.is_(None), BusinessListing.active_until > utc_now()),
            )
            .add_include(*listing_details())
            .add_order_by(BusinessListing.heading.asc())
        )
        result = await self._business.listings.list(spec)
        if not result.succeeded:
            return Result.fail(result.messages)
        return Result.success(
            [BusinessListingDto.from_entity(listing) for listing in result.data or []]
        )

    async def get(self, listing_id: str) -> Result[BusinessListingDto]:
        spec = Specification.by_id(BusinessListing, listing_id).add_include(*listing_details())
        result = await self._business.listings.first_or_default(spec)
        if not result.succeeded:
            return Result.fail(result.messages)
        if result.data is None:
            return Result.fail(LISTING_NOT_FOUND)
        return Result.success(BusinessListingDto.from_entity(result.data))

    # =========================================================================
    # Commands
    # =========================================================================

    async def create(self, dto: BusinessListingDto) -> Result[BusinessListingDto]:
        listing_id = dto.id or new_id()
        now = utc_now()
        listing = BusinessListing(
            id=listing_id,
            user_id=dto.user_id,
            heading=dto.heading,
            slogan=dto.slogan,
            description=dto.description,
            address=dto.address,
            email=dto.email,
            phone_number=dto.phone_number,
            website_url=dto.website_url,
            tier_id=dto.tier.id if dto.tier is not None else dto.tier_id,
            status=ReviewStatus.PENDING,
            active_from=now,
            active_until=days_from_now(self._active_days, now),
            products=[
                ListingProduct(
                    id=p.id or new_id(), name=p.name, description=p.description, price=p.price
                )
                for p in dto.products
            ],
            services=[
                ListingService(
                    id=s.id or new_id(), name=s.name, description=s.description, price=s.price
                )
                for s in dto.services
            ],
        )

        created = await self._business.listings.create(listing)
        if not created.succeeded:
            return Result.fail(created.messages)

        saved = await self._business.listings.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)

        logger.info("Listing created: %s (%s)", listing_id, listing.heading)
        return Result.success(BusinessListingDto.from_entity(listing))

    async def update(self, dto: BusinessListingDto) -> Result[None]:
        """Copy the editable fields. ``active_until`` only changes when supplied."""
        loaded = await self._load(dto.id or "")
        if not loaded.succeeded:
            return Result.fail(loaded.messages)

        listing = loaded.data
        listing.heading = dto.heading
        listing.slogan = dto.slogan
        listing.description = dto.description
        listing.address = dto.address
        listing.email = dto.email
        listing.phone_number = dto.phone_number
        listing.website_url = dto.website_url
        listing.tier_id = dto.tier.id if dto.tier is not None else dto.tier_id
        listing.status = dto.status
        if dto.active_until is not None:
            listing.active_until = dto.active_until

        saved = await self._business.listings.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)
        return Result.success(messages="Listing updated successfully")

    async def renew(self, listing_id: str) -> Result[BusinessListingDto]:
        if not listing_id.strip():
            return Result.fail("A listing identifier must be provided.")

        loaded = await self._load(listing_id)
        if not loaded.succeeded:
            return Result.fail(loaded.messages)

        listing = loaded.data
        now = utc_now()
        current = ensure_utc(listing.active_until)
        start = current if current is not None and current > now else now
        listing.active_until = days_from_now(self._active_days, start)

        saved = await self._business.listings.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)

        logger.info("Listing renewed: %s until %s", listing_id, listing.active_until)
        return Result.success(BusinessListingDto.from_entity(listing))

    async def approve(self, listing_id: str) -> Result[None]:
        return await self._set_status(listing_id, ReviewStatus.APPROVED)

    async def reject(self, listing_id: str) -> Result[None]:
        return await self._set_status(listing_id, ReviewStatus.REJECTED)

    async def delete(self, listing_id: str) -> Result[None]:
        """Delete a listing with its products, services, images and references."""
        return await self._cleaner.delete_aggregate(
            self._business.listings,
            listing_id,
            "Listing removed successfully",
        )

    async def contact_owner(
        self, listing_id: str, request: ListingContactRequest
    ) -> Result[None]:
        """Send a visitor enquiry to the listing owner as an in-app notification."""
        loaded = await self._load(listing_id)
        if not loaded.succeeded:
            return Result.fail(loaded.messages)

        listing = loaded.data
        if not listing.user_id:
            return Result.fail("No registered user could be resolved to receive a push notification.")

        message = request.message or f"You received a new enquiry from {request.full_name}."
        recipient = RecipientDto(
            id=listing.user_id,
            first_name=listing.heading,
            emails=[listing.email] if listing.email else [],
        )
        notification = NotificationDto(
            entity_id=listing.id,
            title=f"New enquiry for {listing.heading}",
            short_description=truncate(message, SHORT_DESCRIPTION_LENGTH),
            message=message,
            message_type=MessageType.NONE,
            notification_url=f"/listingDetails/{listing.id}",
        )
        sent = await self._sender.enqueue_notifications([recipient], notification)
        if not sent.succeeded:
            return Result.fail(sent.messages)

        logger.info("Enquiry from %s sent to owner of listing %s", request.email, listing.id)
        return Result.success(messages="Enquiry submitted successfully.")

    async def _set_status(self, listing_id: str, status: str) -> Result[None]:
        loaded = await self._load(listing_id)
        if not loaded.succeeded:
            return Result.fail(loaded.messages)

        loaded.data.status = status
        saved = await self._business.listings.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)

        logger.info("Listing %s marked %s", listing_id, status)
        return Result.success(messages=f"Listing {status}")

    async def _load(self, listing_id: str) -> Result:
        """Load the tracked listing as ``data``."""
        result = await self._business.listings.first_or_default(
            Specification.by_id(BusinessListing, listing_id)
        )
        if not result.succeeded:
            return Result.fail(result.messages)
        if result.data is None:
            return Result.fail(LISTING_NOT_FOUND)
        return Result.success(result.data)
