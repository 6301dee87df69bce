# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Permission codes carried in the ``permissions`` claim.

Codes follow ``Permissions.<Group>.<Action>``. Routes check them with
``RequirePermission``.

Example:
    @router.put("")
    async def create(user: CurrentUser = Depends(RequirePermission(Permissions.Learner.Create))):
        ...
"""


class Permissions:
    """Permission groups, each with Create, Edit, Delete, View and Search."""

    class SchoolGrade:
        Create = "Permissions.SchoolGrade.Create"
        Edit = "Permissions.SchoolGrade.Edit"
        Delete = "Permissions.SchoolGrade.Delete"
        View = "Permissions.SchoolGrade.View"
        Search = "Permissions.SchoolGrade.Search"

    class SchoolClass:
        Create = "Permissions.SchoolClass.Create"
        Edit = "Permissions.SchoolClass.Edit"
        Delete = "Permissions.SchoolClass.Delete"
        View = "Permissions.SchoolClass.View"
        Search = "Permissions.SchoolClass.Search"

    class Teacher:
        Create = "Permissions.Teacher.Create"
        Edit = "Permissions.Teacher.Edit"
        Delete = "Permissions.Teacher.Delete"
        View = "Permissions.Teacher.View"
        Search = "Permissions.Teacher.Search"

    class AgeGroup:
        Create = "Permissions.AgeGroup.Create"
        Edit = "Permissions.AgeGroup.Edit"
        Delete = "Permissions.AgeGroup.Delete"
        View = "Permissions.AgeGroup.View"
        Search = "Permissions.AgeGroup.Search"

    class ActivityGroup:
        Create = "Permissions.ActivityGroup.Create"
        Edit = "Permissions.ActivityGroup.Edit"
        Delete = "Permissions.ActivityGroup.Delete"
        View = "Permissions.ActivityGroup.View"
        Search = "Permissions.ActivityGroup.Search"

    class Learner:
        Create = "Permissions.Learner.Create"
        Edit = "Permissions.Learner.Edit"
        Delete = "Permissions.Learner.Delete"
        View = "Permissions.Learner.View"
        Search = "Permissions.Learner.Search"

    class Parent:
        Create = "Permissions.Parent.Create"
        Edit = "Permissions.Parent.Edit"
        Delete = "Permissions.Parent.Delete"
        View = "Permissions.Parent.View"
        Search = "Permissions.Parent.Search"

    class Discipline:
        Create = "Permissions.Discipline.Create"
        Edit = "Permissions.Discipline.Edit"
        Delete = "Permissions.Discipline.Delete"
        View = "Permissions.Discipline.View"
        Search = "Permissions.Discipline.Search"

    class SchoolEvent:
        Create = "Permissions.SchoolEvent.Create"
        Edit = "Permissions.SchoolEvent.Edit"
        Delete = "Permissions.SchoolEvent.Delete"
        View = "Permissions.SchoolEvent.View"
        Search = "Permissions.SchoolEvent.Search"

    class BusinessListing:
        Create = "Permissions.BusinessListing.Create"
        Edit = "Permissions.BusinessListing.Edit"
        Delete = "Permissions.BusinessListing.Delete"
        View = "Permissions.BusinessListing.View"
        Search = "Permissions.BusinessListing.Search"

    class BusinessTier:
        Create = "Permissions.BusinessTier.Create"
        Edit = "Permissions.BusinessTier.Edit"
        Delete = "Permissions.BusinessTier.Delete"
        View = "Permissions.BusinessTier.View"
        Search = "Permissions.BusinessTier.Search"

    class BusinessReview:
        Create = "Permissions.BusinessReview.Create"
        Edit = "Permissions.BusinessReview.Edit"
        Delete = "Permissions.BusinessReview.Delete"
        View = "Permissions.BusinessReview.View"
        Search = "Permissions.BusinessReview.Search"

    @classmethod
    def all(cls) -> list[str]:
        """Every permission code, grouped in declaration order."""
        codes: list[str] = []
        for group in vars(cls).values():
            if isinstance(group, type):
                codes.extend(
                    value for key, value in vars(group).items() if not key.startswith("_")
                )
        return codes
