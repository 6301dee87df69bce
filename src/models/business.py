# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Business directory models."""

from datetime import datetime
from decimal import Decimal

from pydantic import EmailStr, Field

from src.infrastructure.database.models import (
    BusinessListing,
    ListingImage,
    ListingProduct,
    ListingService,
    ListingTier,
    ReviewStatus,
)
from src.models.common import ApiModel, loaded


class ListingTierDto(ApiModel):
    """Paid tier a listing can subscribe to.

    ``order`` is assigned on create (number of tiers plus one) and is only
    taken from the request on update.
    """

    id: str | None = None
    name: str = Field(min_length=1, max_length=100)
    short_description: str | None = None
    description: str | None = None
    price: Decimal = Decimal("0")
    order: int = 0
    allow_service_and_product_listing: bool = False

    @classmethod
    def from_entity(cls, tier: ListingTier) -> "ListingTierDto":
        return cls.model_validate(tier)


class ListingServiceDto(ApiModel):
    id: str | None = None
    listing_id: str | None = None
    name: str = Field(min_length=1, max_length=200)
    description: str | None = None
    price: Decimal = Decimal("0")

    @classmethod
    def from_entity(cls, service: ListingService) -> "ListingServiceDto":
        return cls.model_validate(service)


class ListingProductDto(ApiModel):
    id: str | None = None
    listing_id: str | None = None
    name: str = Field(min_length=1, max_length=200)
    description: str | None = None
    price: Decimal = Decimal("0")

    @classmethod
    def from_entity(cls, product: ListingProduct) -> "ListingProductDto":
        return cls.model_validate(product)


class ListingImageDto(ApiModel):
    id: str
    url: str
    file_name: str
    content_type: str | None = None
    size: int = 0
    selector: str | None = None
    order: int = 0

    @classmethod
    def from_entity(cls, image: ListingImage) -> "ListingImageDto":
        return cls.model_validate(image)


class BusinessListingDto(ApiModel):
    """Business listing with its tier, products, services and images.

    Attributes:
        status: Moderation state, one of ``ReviewStatus.ALL``.
        active_until: End of the paid period. Only overwritten on update
            when supplied.
    """

    id: str | None = None
    user_id: str | None = None
    heading: str = Field(min_length=1, max_length=200)
    slogan: str | None = None
    description: str | None = None
    address: str | None = None
    email: EmailStr | None = None
    phone_number: str | None = None
    website_url: str | None = None
    tier_id: str | None = None
    tier: ListingTierDto | None = None
    status: str = ReviewStatus.PENDING
    active_from: datetime | None = None
    active_until: datetime | None = None
    products: list[ListingProductDto] = Field(default_factory=list)
    services: list[ListingServiceDto] = Field(default_factory=list)
    images: list[ListingImageDto] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, listing: BusinessListing) -> "BusinessListingDto":
        tier = loaded(listing, "tier")
        return cls(
            id=listing.id,
            user_id=listing.user_id,
            heading=listing.heading,
            slogan=listing.slogan,
            description=listing.description,
            address=listing.address,
            email=listing.email,
            phone_number=listing.phone_number,
            website_url=listing.website_url,
            tier_id=listing.tier_id,
            tier=ListingTierDto.from_entity(tier) if tier is not None else None,
            status=listing.status,
            active_from=listing.active_from,
            active_until=listing.active_until,
            products=[ListingProductDto.from_entity(p) for p in loaded(listing, "products", [])],
            services=[ListingServiceDto.from_entity(s) for s in loaded(listing, "services", [])],
            images=[ListingImageDto.from_entity(i) for i in loaded(listing, "images", [])],
        )


class ListingContactRequest(ApiModel):
    """Visitor enquiry sent to a listing owner."""

    full_name: str = Field(min_length=1, max_length=150)
    email: EmailStr
    message: str | None = Field(default=None, max_length=2000)
