# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Listing tier API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.api.dependencies import RequirePermission, get_listing_tier_service
from src.api.middleware.auth import CurrentUser
from src.domains.auth import Permissions
from src.domains.business import ListingTierService
from src.models.business import ListingTierDto
from src.models.common import Result

router = APIRouter()

Service = Annotated[ListingTierService, Depends(get_listing_tier_service)]


@router.get("/all", response_model=Result[list[ListingTierDto]], summary="List tiers")
async def all_tiers(
    service: Service,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.BusinessTier.View)),
) -> Result[list[ListingTierDto]]:
    return await service.all()


@router.get("/{tier_id}", response_model=Result[ListingTierDto], summary="Get tier")
async def get_tier(
    tier_id: str,
    service: Service,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.BusinessTier.View)),
) -> Result[ListingTierDto]:
    return await service.get(tier_id)


@router.put("", response_model=Result[ListingTierDto], summary="Create tier")
async def create_tier(
    tier: ListingTierDto,
    service: Service,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.BusinessTier.Create)),
) -> Result[ListingTierDto]:
    """Create a tier placed after the existing ones."""
    return await service.create(tier)


@router.post("", response_model=Result[ListingTierDto], summary="Update tier")
async def update_tier(
    tier: ListingTierDto,
    service: Service,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.BusinessTier.Edit)),
) -> Result[ListingTierDto]:
    return await service.update(tier)


@router.delete("/{tier_id}", response_model=Result[None], summary="Delete tier")
async def delete_tier(
    tier_id: str,
    service: Service,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.BusinessTier.Delete)),
) -> Result[None]:
    return await service.delete(tier_id)
