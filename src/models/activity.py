# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Age group and activity group models."""

from pydantic import Field, model_validator

from src.infrastructure.database.models import ActivityGroup, AgeGroup
from src.models.common import ApiModel, loaded
from src.models.school import LearnerSummaryDto


class AgeGroupDto(ApiModel):
    id: str | None = None
    name: str = Field(min_length=1, max_length=100)
    min_age: int = Field(default=0, ge=0)
    max_age: int = Field(default=99, ge=0)

    @model_validator(mode="after")
    def check_range(self) -> "AgeGroupDto":
        if self.min_age > self.max_age:
            raise ValueError("MinAge must not exceed MaxAge")
        return self

    @classmethod
    def from_entity(cls, age_group: AgeGroup) -> "AgeGroupDto":
        return cls(
            id=age_group.id,
            name=age_group.name,
            min_age=age_group.min_age,
            max_age=age_group.max_age,
        )


class ActivityGroupDto(ApiModel):
    """Team or club with its age group, coach and members.

    On update ``team_members`` is the desired set, matched by learner id.
    """

    id: str | None = None
    name: str = Field(min_length=1, max_length=150)
    age_group_id: str | None = None
    age_group_name: str | None = None
    teacher_id: str | None = None
    teacher_name: str | None = None
    team_members: list[LearnerSummaryDto] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, group: ActivityGroup) -> "ActivityGroupDto":
        age_group = loaded(group, "age_group")
        teacher = loaded(group, "teacher")
        members = [
            LearnerSummaryDto(
                id=member.learner.id,
                first_name=member.learner.first_name,
                last_name=member.learner.last_name,
                school_grade_id=member.learner.school_grade_id,
            )
            for member in loaded(group, "team_members", [])
            if loaded(member, "learner") is not None
        ]
        return cls(
            id=group.id,
            name=group.name,
            age_group_id=group.age_group_id,
            age_group_name=age_group.name if age_group is not None else None,
            teacher_id=group.teacher_id,
            teacher_name=f"{teacher.name} {teacher.surname}" if teacher is not None else None,
            team_members=members,
        )
