# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI dependency injection definitions.

This module provides dependency functions for FastAPI endpoints.
Dependencies are used to:
- Get the request scoped database session
- Get authenticated users and check permissions
- Parse page parameters from the query string
- Build service instances on the request session

FastAPI caches dependencies per request, so every repository manager and
service built for one request shares one session and one unit of work.

Example:
    @router.get("/pagedlearners")
    async def paged(
        parameters: Annotated[LearnerPageParameters, Depends(learner_page_parameters)],
        service: Annotated[LearnerQueryService, Depends(get_learner_query_service)],
        user: CurrentUser = Depends(RequirePermission(Permissions.Learner.Search)),
    ):
        ...
"""

import logging
from typing import Annotated, AsyncGenerator

from fastapi import Depends, HTTPException, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.middleware.auth import CurrentUser, get_current_user
from src.core.config import get_settings
from src.domains.activity_group import ActivityGroupCommandService, ActivityGroupQueryService
from src.domains.age_group import AgeGroupService
from src.domains.business import (
    BusinessListingService,
    ListingImageService,
    ListingItemService,
    ListingTierService,
    listing_products,
    listing_services,
)
from src.domains.discipline import DisciplinaryActionService, DisciplinaryIncidentService
from src.domains.learner import LearnerCommandService, LearnerQueryService
from src.domains.messaging import EntityReferenceCleaner
from src.domains.parent import ParentCommandService, ParentQueryService
from src.domains.school_event import (
    ParentPermissionService,
    SchoolEventCommandService,
    SchoolEventQueryService,
)
from src.domains.school_class import SchoolClassService
from src.domains.school_grade import SchoolGradeService
from src.domains.teacher import TeacherService
from src.infrastructure.database.connection import close_database, get_session, init_database
from src.infrastructure.database.repository import (
    BusinessRepositoryManager,
    MessagingRepositoryManager,
    SchoolsRepositoryManager,
)
from src.infrastructure.media import MediaUploader
from src.infrastructure.notifications import InAppNotificationSender, NotificationSender
from src.models.paging import (
    ActivityGroupPageParameters,
    BusinessListingPageParameters,
    LearnerPageParameters,
    PageParameters,
    ParentPageParameters,
    SchoolClassPageParameters,
    SchoolEventPageParameters,
    SortDirection,
    TeacherPageParameters,
    order_by_from_table_state,
)

logger = logging.getLogger(__name__)


async def init_db() -> None:
    """Initialize the database connection pool."""
    await init_database(get_settings())


async def close_db() -> None:
    """Close the database connection pool."""
    await close_database()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get a database session for the request.

    Yields:
        AsyncSession shared by every repository of the request.
    """
    async with get_session() as session:
        yield session


# =========================================================================
# Authentication Dependencies
# =========================================================================


def require_auth(request: Request) -> CurrentUser:
    """Require authenticated user.

    Args:
        request: HTTP request.

    Returns:
        CurrentUser.

    Raises:
        HTTPException: If not authenticated.
    """
    user = get_current_user(request)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


class RequirePermission:
    """Dependency for requiring specific permissions.

    Example:
        @router.get("/pagedgrades")
        async def paged(
            user: CurrentUser = Depends(RequirePermission(Permissions.SchoolGrade.Search)),
        ):
            ...
    """

    def __init__(self, *permissions: str, require_all: bool = False) -> None:
        """Initialize permission requirement.

        Args:
            permissions: Required permission codes.
            require_all: If True, require all permissions. If False, any.
        """
        self.permissions = permissions
        self.require_all = require_all

    def __call__(self, request: Request) -> CurrentUser:
        """Check permissions and return user.

        Raises:
            HTTPException: 401 without a user, 403 when permissions are missing.
        """
        user = require_auth(request)

        if self.require_all:
            if not user.has_all_permissions(*self.permissions):
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail=f"Missing permissions: {', '.join(self.permissions)}",
                )
        else:
            if not user.has_any_permission(*self.permissions):
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail=f"Requires one of: {', '.join(self.permissions)}",
                )

        return user


# =========================================================================
# Page Parameter Dependencies
# =========================================================================


def page_parameters(
    page_nr: Annotated[int, Query(alias="PageNr", ge=1)] = 1,
    page_size: Annotated[int, Query(alias="PageSize", gt=0)] = 25,
    order_by: Annotated[str | None, Query(alias="OrderBy")] = None,
    search_text: Annotated[str | None, Query(alias="SearchText")] = None,
    sort_label: Annotated[str | None, Query(alias="SortLabel")] = None,
    sort_direction: Annotated[SortDirection, Query(alias="SortDirection")] = SortDirection.NONE,
) -> PageParameters:
    """Read page parameters from the query string.

    An explicit ``OrderBy`` wins over the data table sort state.
    """
    return PageParameters(
        page_nr=page_nr,
        page_size=page_size,
        order_by=order_by or order_by_from_table_state(sort_label, sort_direction),
        search_text=search_text,
    )


Paging = Annotated[PageParameters, Depends(page_parameters)]


def learner_page_parameters(
    paging: Paging,
    grade_id: Annotated[str | None, Query(alias="GradeId")] = None,
    class_id: Annotated[str | None, Query(alias="ClassId")] = None,
    parent_id: Annotated[str | None, Query(alias="ParentId")] = None,
    activity_group_id: Annotated[str | None, Query(alias="ActivityGroupId")] = None,
    min_age: Annotated[int, Query(alias="MinAge", ge=0)] = 0,
    max_age: Annotated[int, Query(alias="MaxAge", ge=0)] = 100,
) -> LearnerPageParameters:
    return LearnerPageParameters(
        **paging.model_dump(),
        grade_id=grade_id,
        class_id=class_id,
        parent_id=parent_id,
        activity_group_id=activity_group_id,
        min_age=min_age,
        max_age=max_age,
    )


def parent_page_parameters(
    paging: Paging,
    learner_id: Annotated[str | None, Query(alias="LearnerId")] = None,
) -> ParentPageParameters:
    return ParentPageParameters(**paging.model_dump(), learner_id=learner_id)


def teacher_page_parameters(
    paging: Paging,
    grade_id: Annotated[str | None, Query(alias="GradeId")] = None,
    class_id: Annotated[str | None, Query(alias="ClassId")] = None,
) -> TeacherPageParameters:
    return TeacherPageParameters(**paging.model_dump(), grade_id=grade_id, class_id=class_id)


def school_class_page_parameters(
    paging: Paging,
    grade_id: Annotated[str | None, Query(alias="GradeId")] = None,
) -> SchoolClassPageParameters:
    return SchoolClassPageParameters(**paging.model_dump(), grade_id=grade_id)


def activity_group_page_parameters(
    paging: Paging,
    age_group_id: Annotated[str | None, Query(alias="AgeGroupId")] = None,
    teacher_id: Annotated[str | None, Query(alias="TeacherId")] = None,
    learner_id: Annotated[str | None, Query(alias="LearnerId")] = None,
) -> ActivityGroupPageParameters:
    return ActivityGroupPageParameters(
        **paging.model_dump(),
        age_group_id=age_group_id,
        teacher_id=teacher_id,
        learner_id=learner_id,
    )


def school_event_page_parameters(
    paging: Paging,
    published_only: Annotated[bool, Query(alias="PublishedOnly")] = False,
) -> SchoolEventPageParameters:
    return SchoolEventPageParameters(**paging.model_dump(), published_only=published_only)


def listing_page_parameters(
    paging: Paging,
    listing_status: Annotated[str | None, Query(alias="Status")] = None,
    tier_id: Annotated[str | None, Query(alias="TierId")] = None,
    user_id: Annotated[str | None, Query(alias="UserId")] = None,
) -> BusinessListingPageParameters:
    return BusinessListingPageParameters(
        **paging.model_dump(),
        status=listing_status,
        tier_id=tier_id,
        user_id=user_id,
    )


# =========================================================================
# Repository and Infrastructure Dependencies
# =========================================================================

DB = Annotated[AsyncSession, Depends(get_db)]


def get_schools(db: DB) -> SchoolsRepositoryManager:
    return SchoolsRepositoryManager(db)


def get_messaging(db: DB) -> MessagingRepositoryManager:
    return MessagingRepositoryManager(db)


def get_business(db: DB) -> BusinessRepositoryManager:
    return BusinessRepositoryManager(db)


Schools = Annotated[SchoolsRepositoryManager, Depends(get_schools)]
Messaging = Annotated[MessagingRepositoryManager, Depends(get_messaging)]
Business = Annotated[BusinessRepositoryManager, Depends(get_business)]


def get_cleaner(messaging: Messaging) -> EntityReferenceCleaner:
    """Reference cleaner honoring ``CASCADE_ATOMIC_DELETES``."""
    return EntityReferenceCleaner(
        messaging.notifications,
        messaging.messages,
        atomic=get_settings().cascade.atomic_deletes,
    )


def get_notification_sender(messaging: Messaging) -> NotificationSender:
    return InAppNotificationSender(messaging.notifications)


def get_media_uploader() -> MediaUploader:
    return MediaUploader.from_settings(get_settings().media)


Cleaner = Annotated[EntityReferenceCleaner, Depends(get_cleaner)]
Sender = Annotated[NotificationSender, Depends(get_notification_sender)]


# =========================================================================
# Service Dependencies
# =========================================================================


def get_school_grade_service(schools: Schools, cleaner: Cleaner) -> SchoolGradeService:
    return SchoolGradeService(schools, cleaner)


def get_school_class_service(schools: Schools, cleaner: Cleaner) -> SchoolClassService:
    return SchoolClassService(schools, cleaner)


def get_age_group_service(schools: Schools, cleaner: Cleaner) -> AgeGroupService:
    return AgeGroupService(schools, cleaner)


def get_teacher_service(schools: Schools, cleaner: Cleaner) -> TeacherService:
    return TeacherService(schools, cleaner)


def get_activity_group_query_service(schools: Schools) -> ActivityGroupQueryService:
    return ActivityGroupQueryService(schools)


def get_activity_group_command_service(
    schools: Schools, cleaner: Cleaner
) -> ActivityGroupCommandService:
    return ActivityGroupCommandService(schools, cleaner)


def get_learner_query_service(schools: Schools) -> LearnerQueryService:
    return LearnerQueryService(schools)


def get_learner_command_service(schools: Schools, cleaner: Cleaner) -> LearnerCommandService:
    return LearnerCommandService(schools, cleaner)


def get_parent_query_service(schools: Schools) -> ParentQueryService:
    return ParentQueryService(schools)


def get_parent_command_service(schools: Schools, cleaner: Cleaner) -> ParentCommandService:
    return ParentCommandService(schools, cleaner)


def get_disciplinary_action_service(schools: Schools) -> DisciplinaryActionService:
    return DisciplinaryActionService(schools)


def get_disciplinary_incident_service(
    schools: Schools, sender: Sender
) -> DisciplinaryIncidentService:
    return DisciplinaryIncidentService(schools, sender)


def get_school_event_query_service(schools: Schools) -> SchoolEventQueryService:
    return SchoolEventQueryService(schools)


def get_school_event_command_service(
    schools: Schools, cleaner: Cleaner
) -> SchoolEventCommandService:
    return SchoolEventCommandService(schools, cleaner)


def get_parent_permission_service(schools: Schools) -> ParentPermissionService:
    return ParentPermissionService(schools)


def get_listing_tier_service(business: Business, cleaner: Cleaner) -> ListingTierService:
    return ListingTierService(business, cleaner)


def get_business_listing_service(
    business: Business, cleaner: Cleaner, sender: Sender
) -> BusinessListingService:
    return BusinessListingService(
        business,
        cleaner,
        sender,
        active_days=get_settings().listing.active_days,
    )


def get_listing_service_items(business: Business) -> ListingItemService:
    return listing_services(business)


def get_listing_product_items(business: Business) -> ListingItemService:
    return listing_products(business)


def get_listing_image_service(
    business: Business,
    uploader: Annotated[MediaUploader, Depends(get_media_uploader)],
) -> ListingImageService:
    return ListingImageService(business, uploader)


# =========================================================================
# Type Aliases for Cleaner Endpoint Signatures
# =========================================================================

AuthenticatedUser = Annotated[CurrentUser, Depends(require_auth)]
