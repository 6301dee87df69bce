# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Business directory domain package.

This package provides:
- ListingTierService: paid listing tiers
- BusinessListingService: listing lifecycle, review, renewal and enquiries
- ListingItemService: services and products offered on a listing
- ListingImageService: listing image uploads
"""

from src.domains.business.catalogue import (
    ListingItemService,
    listing_products,
    listing_services,
)
from src.domains.business.images import ListingImageService
from src.domains.business.listing import BusinessListingService
from src.domains.business.listing_tier import ListingTierService

__all__ = [
    "BusinessListingService",
    "ListingImageService",
    "ListingItemService",
    "ListingTierService",
    "listing_products",
    "listing_services",
]
