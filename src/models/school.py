# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""School structure, learner and parent models.

The same DTO is accepted on create (``PUT``) and update (``POST``). An empty
``id`` on create means "allocate one".

DTO builders read relationships through ``loaded`` so a DTO can be built
from whatever the query eagerly loaded without triggering lazy loads.
"""

from pydantic import Field

from src.infrastructure.database.models import (
    EmergencyContact,
    Learner,
    Parent,
    ParentAddress,
    SchoolClass,
    SchoolGrade,
    Teacher,
)
from src.models.common import ApiModel, loaded
from src.utils.datetime import age_from_id_number


def _default_or_first(items: list, attribute: str) -> str | None:
    if not items:
        return None
    chosen = next((item for item in items if item.is_default), items[0])
    return getattr(chosen, attribute)


# =============================================================================
# School structure
# =============================================================================


class SchoolGradeDto(ApiModel):
    id: str | None = None
    name: str = Field(min_length=1, max_length=100)

    @classmethod
    def from_entity(cls, grade: SchoolGrade) -> "SchoolGradeDto":
        return cls(id=grade.id, name=grade.name)


class SchoolClassDto(ApiModel):
    id: str | None = None
    name: str = Field(min_length=1, max_length=100)
    grade_id: str = Field(min_length=1)
    grade_name: str | None = None

    @classmethod
    def from_entity(cls, school_class: SchoolClass) -> "SchoolClassDto":
        grade = loaded(school_class, "grade")
        return cls(
            id=school_class.id,
            name=school_class.name,
            grade_id=school_class.grade_id,
            grade_name=grade.name if grade is not None else None,
        )


class TeacherDto(ApiModel):
    """Teacher with the grade and class it is attached to.

    ``email`` is the address used for notifications and for the anonymous
    ``exist`` lookup.
    """

    id: str | None = None
    name: str = Field(min_length=1, max_length=100)
    surname: str = Field(min_length=1, max_length=100)
    email: str | None = None
    grade_id: str | None = None
    school_class_id: str | None = None

    @classmethod
    def from_entity(cls, teacher: Teacher) -> "TeacherDto":
        return cls(
            id=teacher.id,
            name=teacher.name,
            surname=teacher.surname,
            email=teacher.email,
            grade_id=teacher.grade_id,
            school_class_id=teacher.school_class_id,
        )


# =============================================================================
# Contact details
# =============================================================================


class ContactNumberDto(ApiModel):
    id: str | None = None
    number: str
    international_code: str = "27"
    is_default: bool = False


class EmailAddressDto(ApiModel):
    id: str | None = None
    email: str
    is_default: bool = False


class AddressDto(ApiModel):
    id: str | None = None
    street: str | None = None
    suburb: str | None = None
    city: str | None = None
    postal_code: str | None = None
    is_default: bool = False

    @classmethod
    def from_entity(cls, address: ParentAddress) -> "AddressDto":
        return cls.model_validate(address)


class EmergencyContactDto(ApiModel):
    id: str | None = None
    name: str
    number: str
    relationship_to_learner: str | None = None

    @classmethod
    def from_entity(cls, contact: EmergencyContact) -> "EmergencyContactDto":
        return cls.model_validate(contact)


# =============================================================================
# Learners
# =============================================================================


class ParentSummaryDto(ApiModel):
    """Parent as seen from a learner."""

    id: str
    first_name: str = ""
    last_name: str = ""
    require_consent: bool = False


class LearnerSummaryDto(ApiModel):
    """Learner as seen from a parent."""

    id: str
    first_name: str = ""
    last_name: str = ""
    school_grade_id: str | None = None


class LearnerDto(ApiModel):
    """Learner with its default contact details and parent links.

    Attributes:
        contact_number: Default contact number, seeded on create.
        email_address: Default email address, seeded on create.
        parents: Linked parents. On update this is the desired set.
        age: Derived from the identity number, read only.
    """

    id: str | None = None
    child_guid: str | None = None
    first_name: str = Field(min_length=1, max_length=100)
    middle_name: str | None = None
    last_name: str = Field(min_length=1, max_length=100)
    id_number: str | None = None
    gender: str | None = None
    description: str | None = None
    medical_notes: str | None = None
    medical_aid_parent_id: str | None = None
    school_grade_id: str | None = None
    school_class_id: str | None = None
    receive_notifications: bool = True
    receive_messages: bool = True
    receive_emails: bool = True
    contact_number: str | None = None
    email_address: str | None = None
    parents: list[ParentSummaryDto] = Field(default_factory=list)
    age: int = 0

    @classmethod
    def from_entity(cls, learner: Learner) -> "LearnerDto":
        parents = [
            ParentSummaryDto(
                id=link.parent.id,
                first_name=link.parent.first_name,
                last_name=link.parent.last_name,
                require_consent=link.parent_consent_required,
            )
            for link in loaded(learner, "parents", [])
            if loaded(link, "parent") is not None
        ]
        return cls(
            id=learner.id,
            child_guid=learner.child_guid,
            first_name=learner.first_name,
            middle_name=learner.middle_name,
            last_name=learner.last_name,
            id_number=learner.id_number,
            gender=learner.gender,
            description=learner.description,
            medical_notes=learner.medical_notes,
            medical_aid_parent_id=learner.medical_aid_parent_id,
            school_grade_id=learner.school_grade_id,
            school_class_id=learner.school_class_id,
            receive_notifications=learner.receive_notifications,
            receive_messages=learner.receive_messages,
            receive_emails=learner.receive_emails,
            contact_number=_default_or_first(loaded(learner, "contact_numbers", []), "number"),
            email_address=_default_or_first(loaded(learner, "email_addresses", []), "email"),
            parents=parents,
            age=age_from_id_number(learner.id_number),
        )


# =============================================================================
# Parents
# =============================================================================


class ParentDto(ApiModel):
    """Parent with contact details and learner links.

    On update ``learners`` is the desired set of linked learners and
    ``require_consent`` is pushed onto every learner link.
    """

    id: str | None = None
    title: str | None = None
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    id_number: str | None = None
    receive_notifications: bool = True
    receive_messages: bool = True
    receive_emails: bool = True
    require_consent: bool = False
    contact_numbers: list[ContactNumberDto] = Field(default_factory=list)
    email_addresses: list[EmailAddressDto] = Field(default_factory=list)
    addresses: list[AddressDto] = Field(default_factory=list)
    emergency_contacts: list[EmergencyContactDto] = Field(default_factory=list)
    learners: list[LearnerSummaryDto] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, parent: Parent) -> "ParentDto":
        learners = [
            LearnerSummaryDto(
                id=link.learner.id,
                first_name=link.learner.first_name,
                last_name=link.learner.last_name,
                school_grade_id=link.learner.school_grade_id,
            )
            for link in loaded(parent, "learners", [])
            if loaded(link, "learner") is not None
        ]
        return cls(
            id=parent.id,
            title=parent.title,
            first_name=parent.first_name,
            last_name=parent.last_name,
            id_number=parent.id_number,
            receive_notifications=parent.receive_notifications,
            receive_messages=parent.receive_messages,
            receive_emails=parent.receive_emails,
            require_consent=parent.require_consent,
            contact_numbers=[
                ContactNumberDto.model_validate(number)
                for number in loaded(parent, "contact_numbers", [])
            ],
            email_addresses=[
                EmailAddressDto.model_validate(email)
                for email in loaded(parent, "email_addresses", [])
            ],
            addresses=[AddressDto.from_entity(a) for a in loaded(parent, "addresses", [])],
            emergency_contacts=[
                EmergencyContactDto.from_entity(c) for c in loaded(parent, "emergency_contacts", [])
            ],
            learners=learners,
        )


class ParentLearnerLinkDto(ApiModel):
    """Body of ``PUT /parents/learners``."""

    parent_id: str
    learner_id: str
