# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Business directory models."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.infrastructure.database.models.base import Base, EntityMixin, TimestampMixin
from src.utils.datetime import utc_now


class ReviewStatus:
    """Moderation states of a business listing."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    ALL = (PENDING, APPROVED, REJECTED)


class ListingTier(EntityMixin, TimestampMixin, Base):
    __tablename__ = "listing_tiers"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    short_description: Mapped[Optional[str]] = mapped_column(String(255))
    description: Mapped[Optional[str]] = mapped_column(Text)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0"), nullable=False)
    order: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    allow_service_and_product_listing: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )


class BusinessListing(EntityMixin, TimestampMixin, Base):
    """Listing aggregate owning products, services and images."""

    __tablename__ = "business_listings"

    user_id: Mapped[Optional[str]] = mapped_column(String(36), index=True)
    heading: Mapped[str] = mapped_column(String(200), nullable=False)
    slogan: Mapped[Optional[str]] = mapped_column(String(255))
    description: Mapped[Optional[str]] = mapped_column(Text)
    address: Mapped[Optional[str]] = mapped_column(String(500))
    email: Mapped[Optional[str]] = mapped_column(String(255))
    phone_number: Mapped[Optional[str]] = mapped_column(String(30))
    website_url: Mapped[Optional[str]] = mapped_column(String(500))
    status: Mapped[str] = mapped_column(String(20), default=ReviewStatus.PENDING, nullable=False)
    active_from: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), default=utc_now)
    active_until: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    tier_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("listing_tiers.id", ondelete="SET NULL")
    )

    tier: Mapped[Optional[ListingTier]] = relationship()
    products: Mapped[list["ListingProduct"]] = relationship(
        back_populates="listing",
        cascade="all, delete-orphan",
    )
    services: Mapped[list["ListingService"]] = relationship(
        back_populates="listing",
        cascade="all, delete-orphan",
    )
    images: Mapped[list["ListingImage"]] = relationship(
        back_populates="listing",
        cascade="all, delete-orphan",
        order_by="ListingImage.order",
    )


class ListingProduct(EntityMixin, Base):
    __tablename__ = "listing_products"

    listing_id: Mapped[str] = mapped_column(
        ForeignKey("business_listings.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0"), nullable=False)

    listing: Mapped[BusinessListing] = relationship(back_populates="products")


class ListingService(EntityMixin, Base):
    __tablename__ = "listing_services"

    listing_id: Mapped[str] = mapped_column(
        ForeignKey("business_listings.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0"), nullable=False)

    listing: Mapped[BusinessListing] = relationship(back_populates="services")


class ListingImage(EntityMixin, Base):
    """Uploaded image attached to a listing."""

    __tablename__ = "listing_images"

    listing_id: Mapped[str] = mapped_column(
        ForeignKey("business_listings.id", ondelete="CASCADE"), nullable=False, index=True
    )
    url: Mapped[str] = mapped_column(String(500), nullable=False)
    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    content_type: Mapped[Optional[str]] = mapped_column(String(100))
    size: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    selector: Mapped[Optional[str]] = mapped_column(String(50))
    order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    listing: Mapped[BusinessListing] = relationship(back_populates="images")
