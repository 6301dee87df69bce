# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Business directory API endpoints.

This module provides endpoints for business listings:
- GET /paged, /active, /{listing_id} - Listing queries
- PUT / - Create, POST /{listing_id} - Update, DELETE /{listing_id}
- POST /{listing_id}/renew - Extend the active period
- POST /approve/{listing_id}, /reject/{listing_id} - Moderation
- POST|PUT|DELETE /listingServices, /listingProducts - Listing items
- POST /{listing_id}/images - Multipart upload, DELETE /deleteImage/{image_id}
- POST /{listing_id}/contact - Anonymous enquiry to the listing owner
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from src.api.dependencies import (
    RequirePermission,
    get_business_listing_service,
    get_listing_image_service,
    get_listing_product_items,
    get_listing_service_items,
    listing_page_parameters,
)
from src.api.middleware.auth import CurrentUser
from src.api.middleware.rate_limit import RATE_LIMIT_ANONYMOUS, RATE_LIMIT_UPLOAD, limiter
from src.domains.auth import Permissions
from src.domains.business import BusinessListingService, ListingImageService, ListingItemService
from src.models.business import (
    BusinessListingDto,
    ListingContactRequest,
    ListingImageDto,
    ListingProductDto,
    ListingServiceDto,
)
from src.models.common import PaginatedResult, Result
from src.models.paging import BusinessListingPageParameters

logger = logging.getLogger(__name__)

router = APIRouter()

Listings = Annotated[BusinessListingService, Depends(get_business_listing_service)]
Services = Annotated[ListingItemService, Depends(get_listing_service_items)]
Products = Annotated[ListingItemService, Depends(get_listing_product_items)]
Images = Annotated[ListingImageService, Depends(get_listing_image_service)]

CanView = Depends(RequirePermission(Permissions.BusinessListing.View))
CanCreate = Depends(RequirePermission(Permissions.BusinessListing.Create))
CanEdit = Depends(RequirePermission(Permissions.BusinessListing.Edit))
CanDelete = Depends(RequirePermission(Permissions.BusinessListing.Delete))
CanReview = Depends(RequirePermission(Permissions.BusinessReview.Edit))


# =========================================================================
# Listing queries
# =========================================================================


@router.get("/paged", response_model=PaginatedResult[BusinessListingDto], summary="Page through listings")
async def paged_listings(
    parameters: Annotated[BusinessListingPageParameters, Depends(listing_page_parameters)],
    service: Listings,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.BusinessListing.Search)),
) -> PaginatedResult[BusinessListingDto]:
    return await service.paged(parameters)


@router.get("/active", response_model=Result[list[BusinessListingDto]], summary="Active listings")
async def active_listings(
    service: Listings, current_user: CurrentUser = CanView
) -> Result[list[BusinessListingDto]]:
    return await service.active()


# =========================================================================
# Listing items
# =========================================================================


@router.post("/listingServices", response_model=Result[ListingServiceDto], summary="Add service")
async def add_service(
    item: ListingServiceDto, service: Services, current_user: CurrentUser = CanEdit
) -> Result[ListingServiceDto]:
    return await service.add(item)


@router.put("/listingServices/{item_id}", response_model=Result[None], summary="Update service")
async def update_service(
    item_id: str, item: ListingServiceDto, service: Services, current_user: CurrentUser = CanEdit
) -> Result[None]:
    return await service.update(item.model_copy(update={"id": item_id}))


@router.delete("/listingServices/{item_id}", response_model=Result[None], summary="Remove service")
async def remove_service(
    item_id: str, service: Services, current_user: CurrentUser = CanEdit
) -> Result[None]:
    return await service.remove(item_id)


@router.post("/listingProducts", response_model=Result[ListingProductDto], summary="Add product")
async def add_product(
    item: ListingProductDto, service: Products, current_user: CurrentUser = CanEdit
) -> Result[ListingProductDto]:
    return await service.add(item)


@router.put("/listingProducts/{item_id}", response_model=Result[None], summary="Update product")
async def update_product(
    item_id: str, item: ListingProductDto, service: Products, current_user: CurrentUser = CanEdit
) -> Result[None]:
    return await service.update(item.model_copy(update={"id": item_id}))


@router.delete("/listingProducts/{item_id}", response_model=Result[None], summary="Remove product")
async def remove_product(
    item_id: str, service: Products, current_user: CurrentUser = CanEdit
) -> Result[None]:
    return await service.remove(item_id)


# =========================================================================
# Moderation and images
# =========================================================================


@router.post("/approve/{listing_id}", response_model=Result[None], summary="Approve listing")
async def approve_listing(
    listing_id: str, service: Listings, current_user: CurrentUser = CanReview
) -> Result[None]:
    return await service.approve(listing_id)


@router.post("/reject/{listing_id}", response_model=Result[None], summary="Reject listing")
async def reject_listing(
    listing_id: str, service: Listings, current_user: CurrentUser = CanReview
) -> Result[None]:
    return await service.reject(listing_id)


@router.delete("/deleteImage/{image_id}", response_model=Result[None], summary="Remove image")
async def delete_image(
    image_id: str, service: Images, current_user: CurrentUser = CanEdit
) -> Result[None]:
    return await service.remove_image(image_id)


# =========================================================================
# Listings
# =========================================================================


@router.get("/{listing_id}", response_model=Result[BusinessListingDto], summary="Get listing")
async def get_listing(
    listing_id: str, service: Listings, current_user: CurrentUser = CanView
) -> Result[BusinessListingDto]:
    return await service.get(listing_id)


@router.put("", response_model=Result[BusinessListingDto], summary="Create listing")
async def create_listing(
    listing: BusinessListingDto, service: Listings, current_user: CurrentUser = CanCreate
) -> Result[BusinessListingDto]:
    """Create a pending listing with its products and services."""
    return await service.create(listing)


@router.post("/{listing_id}", response_model=Result[None], summary="Update listing")
async def update_listing(
    listing_id: str,
    listing: BusinessListingDto,
    service: Listings,
    current_user: CurrentUser = CanEdit,
) -> Result[None]:
    return await service.update(listing.model_copy(update={"id": listing_id}))


@router.post("/{listing_id}/renew", response_model=Result[BusinessListingDto], summary="Renew listing")
async def renew_listing(
    listing_id: str, service: Listings, current_user: CurrentUser = CanEdit
) -> Result[BusinessListingDto]:
    return await service.renew(listing_id)


@router.post(
    "/{listing_id}/images",
    response_model=Result[list[ListingImageDto]],
    summary="Upload listing images",
)
@limiter.limit(RATE_LIMIT_UPLOAD)
async def upload_images(
    request: Request,
    listing_id: str,
    service: Images,
    files: Annotated[list[UploadFile], File()],
    selector: Annotated[str | None, Form()] = None,
    current_user: CurrentUser = CanEdit,
) -> Result[list[ListingImageDto]]:
    """Store the uploaded files in parallel and attach them to the listing.

    Files that fail are reported in ``messages``; the rest are kept.
    """
    return await service.add_images(listing_id, files, selector=selector)


@router.post("/{listing_id}/contact", response_model=Result[None], summary="Contact listing owner")
@limiter.limit(RATE_LIMIT_ANONYMOUS)
async def contact_owner(
    request: Request,
    listing_id: str,
    enquiry: ListingContactRequest,
    service: Listings,
) -> Result[None]:
    """Forward a visitor enquiry to the listing owner. Anonymous."""
    return await service.contact_owner(listing_id, enquiry)


@router.delete("/{listing_id}", response_model=Result[None], summary="Delete listing")
async def delete_listing(
    listing_id: str, service: Listings, current_user: CurrentUser = CanDelete
) -> Result[None]:
    return await service.delete(listing_id)
