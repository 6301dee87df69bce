# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Schools module models.

Every aggregate root that owns child rows declares ``cascade="all,
delete-orphan"`` on the relationship and ``ondelete="CASCADE"`` on the
foreign key. The activity group and participating activity group foreign
keys are NO ACTION to avoid multiple cascade paths into the same table;
rows behind them must be removed explicitly.
"""

from datetime import date, datetime
from typing import Optional

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.infrastructure.database.models.base import Base, EntityMixin, TimestampMixin


class SchoolGrade(EntityMixin, TimestampMixin, Base):
    """A school grade such as "Grade 4"."""

    __tablename__ = "school_grades"

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    classes: Mapped[list["SchoolClass"]] = relationship(
        back_populates="grade",
        cascade="all, delete-orphan",
    )
    learners: Mapped[list["Learner"]] = relationship(back_populates="school_grade")
    teachers: Mapped[list["Teacher"]] = relationship(back_populates="grade")


class SchoolClass(EntityMixin, TimestampMixin, Base):
    """A class within a grade."""

    __tablename__ = "school_classes"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    grade_id: Mapped[str] = mapped_column(
        ForeignKey("school_grades.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    grade: Mapped[SchoolGrade] = relationship(back_populates="classes")
    teachers: Mapped[list["Teacher"]] = relationship(back_populates="school_class")


class AgeGroup(EntityMixin, Base):
    """Age band used to group activity participants."""

    __tablename__ = "age_groups"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    min_age: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    max_age: Mapped[int] = mapped_column(Integer, default=99, nullable=False)


class Teacher(EntityMixin, TimestampMixin, Base):
    """Teacher, optionally attached to a grade and a class."""

    __tablename__ = "teachers"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    surname: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255))
    grade_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("school_grades.id", ondelete="SET NULL"),
        index=True,
    )
    school_class_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("school_classes.id", ondelete="SET NULL"),
        index=True,
    )

    grade: Mapped[Optional[SchoolGrade]] = relationship(back_populates="teachers")
    school_class: Mapped[Optional[SchoolClass]] = relationship(back_populates="teachers")


class ActivityGroup(EntityMixin, TimestampMixin, Base):
    """Team or club. Its age group and teacher links do not cascade."""

    __tablename__ = "activity_groups"

    name: Mapped[str] = mapped_column(String(150), nullable=False)
    age_group_id: Mapped[Optional[str]] = mapped_column(ForeignKey("age_groups.id"))
    teacher_id: Mapped[Optional[str]] = mapped_column(ForeignKey("teachers.id"))

    age_group: Mapped[Optional[AgeGroup]] = relationship()
    teacher: Mapped[Optional[Teacher]] = relationship()
    team_members: Mapped[list["ActivityGroupTeamMember"]] = relationship(
        back_populates="activity_group",
        cascade="all, delete-orphan",
    )


class Parent(EntityMixin, TimestampMixin, Base):
    """Parent or guardian aggregate root."""

    __tablename__ = "parents"

    title: Mapped[Optional[str]] = mapped_column(String(20))
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    id_number: Mapped[Optional[str]] = mapped_column(String(20))
    receive_notifications: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    receive_messages: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    receive_emails: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    require_consent: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    addresses: Mapped[list["ParentAddress"]] = relationship(
        back_populates="parent",
        cascade="all, delete-orphan",
    )
    contact_numbers: Mapped[list["ParentContactNumber"]] = relationship(
        back_populates="parent",
        cascade="all, delete-orphan",
    )
    email_addresses: Mapped[list["ParentEmailAddress"]] = relationship(
        back_populates="parent",
        cascade="all, delete-orphan",
    )
    emergency_contacts: Mapped[list["EmergencyContact"]] = relationship(
        back_populates="parent",
        cascade="all, delete-orphan",
    )
    learners: Mapped[list["LearnerParent"]] = relationship(
        back_populates="parent",
        cascade="all, delete-orphan",
    )
    event_consents: Mapped[list["ParentPermission"]] = relationship(
        back_populates="parent",
        cascade="all, delete-orphan",
    )


class ParentAddress(EntityMixin, Base):
    __tablename__ = "parent_addresses"

    parent_id: Mapped[str] = mapped_column(
        ForeignKey("parents.id", ondelete="CASCADE"), nullable=False, index=True
    )
    street: Mapped[Optional[str]] = mapped_column(String(255))
    suburb: Mapped[Optional[str]] = mapped_column(String(100))
    city: Mapped[Optional[str]] = mapped_column(String(100))
    postal_code: Mapped[Optional[str]] = mapped_column(String(20))
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    parent: Mapped[Parent] = relationship(back_populates="addresses")


class ParentContactNumber(EntityMixin, Base):
    __tablename__ = "parent_contact_numbers"

    parent_id: Mapped[str] = mapped_column(
        ForeignKey("parents.id", ondelete="CASCADE"), nullable=False, index=True
    )
    number: Mapped[str] = mapped_column(String(30), nullable=False)
    international_code: Mapped[str] = mapped_column(String(5), default="27", nullable=False)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    parent: Mapped[Parent] = relationship(back_populates="contact_numbers")


class ParentEmailAddress(EntityMixin, Base):
    __tablename__ = "parent_email_addresses"

    parent_id: Mapped[str] = mapped_column(
        ForeignKey("parents.id", ondelete="CASCADE"), nullable=False, index=True
    )
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    parent: Mapped[Parent] = relationship(back_populates="email_addresses")


class EmergencyContact(EntityMixin, Base):
    __tablename__ = "emergency_contacts"

    parent_id: Mapped[str] = mapped_column(
        ForeignKey("parents.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(150), nullable=False)
    number: Mapped[str] = mapped_column(String(30), nullable=False)
    relationship_to_learner: Mapped[Optional[str]] = mapped_column(String(50))

    parent: Mapped[Parent] = relationship(back_populates="emergency_contacts")


class Learner(EntityMixin, TimestampMixin, Base):
    """Learner aggregate root."""

    __tablename__ = "learners"

    child_guid: Mapped[Optional[str]] = mapped_column(String(36))
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    middle_name: Mapped[Optional[str]] = mapped_column(String(100))
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    id_number: Mapped[Optional[str]] = mapped_column(String(20))
    gender: Mapped[Optional[str]] = mapped_column(String(20))
    description: Mapped[Optional[str]] = mapped_column(Text)
    medical_notes: Mapped[Optional[str]] = mapped_column(Text)
    receive_notifications: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    receive_messages: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    receive_emails: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    medical_aid_parent_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("parents.id", ondelete="SET NULL")
    )
    school_grade_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("school_grades.id", ondelete="SET NULL"), index=True
    )
    school_class_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("school_classes.id", ondelete="SET NULL"), index=True
    )

    school_grade: Mapped[Optional[SchoolGrade]] = relationship(back_populates="learners")
    school_class: Mapped[Optional[SchoolClass]] = relationship()
    medical_aid_parent: Mapped[Optional[Parent]] = relationship(
        foreign_keys=[medical_aid_parent_id]
    )
    parents: Mapped[list["LearnerParent"]] = relationship(
        back_populates="learner",
        cascade="all, delete-orphan",
    )
    contact_numbers: Mapped[list["LearnerContactNumber"]] = relationship(
        back_populates="learner",
        cascade="all, delete-orphan",
    )
    email_addresses: Mapped[list["LearnerEmailAddress"]] = relationship(
        back_populates="learner",
        cascade="all, delete-orphan",
    )
    parent_permissions: Mapped[list["ParentPermission"]] = relationship(
        back_populates="learner",
        cascade="all, delete-orphan",
    )
    incidents: Mapped[list["DisciplinaryIncident"]] = relationship(
        back_populates="learner",
        cascade="all, delete-orphan",
    )


class LearnerContactNumber(EntityMixin, Base):
    __tablename__ = "learner_contact_numbers"

    learner_id: Mapped[str] = mapped_column(
        ForeignKey("learners.id", ondelete="CASCADE"), nullable=False, index=True
    )
    number: Mapped[str] = mapped_column(String(30), nullable=False)
    international_code: Mapped[str] = mapped_column(String(5), default="27", nullable=False)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    learner: Mapped[Learner] = relationship(back_populates="contact_numbers")


class LearnerEmailAddress(EntityMixin, Base):
    __tablename__ = "learner_email_addresses"

    learner_id: Mapped[str] = mapped_column(
        ForeignKey("learners.id", ondelete="CASCADE"), nullable=False, index=True
    )
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    learner: Mapped[Learner] = relationship(back_populates="email_addresses")


class LearnerParent(EntityMixin, Base):
    """Join row between a learner and a parent."""

    __tablename__ = "learner_parents"
    __table_args__ = (UniqueConstraint("learner_id", "parent_id"),)

    learner_id: Mapped[str] = mapped_column(
        ForeignKey("learners.id", ondelete="CASCADE"), nullable=False, index=True
    )
    parent_id: Mapped[str] = mapped_column(
        ForeignKey("parents.id", ondelete="CASCADE"), nullable=False, index=True
    )
    parent_consent_required: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    learner: Mapped[Learner] = relationship(back_populates="parents")
    parent: Mapped[Optional[Parent]] = relationship(back_populates="learners")


class ActivityGroupTeamMember(EntityMixin, Base):
    """Learner belonging to an activity group."""

    __tablename__ = "activity_group_team_members"
    __table_args__ = (UniqueConstraint("activity_group_id", "learner_id"),)

    activity_group_id: Mapped[str] = mapped_column(
        ForeignKey("activity_groups.id", ondelete="CASCADE"), nullable=False, index=True
    )
    learner_id: Mapped[str] = mapped_column(
        ForeignKey("learners.id", ondelete="CASCADE"), nullable=False, index=True
    )

    activity_group: Mapped[ActivityGroup] = relationship(back_populates="team_members")
    learner: Mapped[Learner] = relationship()


class SeverityScale(EntityMixin, TimestampMixin, Base):
    __tablename__ = "severity_scales"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    score: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)

    actions: Mapped[list["DisciplinaryAction"]] = relationship(back_populates="severity_scale")


class DisciplinaryAction(EntityMixin, TimestampMixin, Base):
    __tablename__ = "disciplinary_actions"

    name: Mapped[str] = mapped_column(String(150), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    severity_scale_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("severity_scales.id", ondelete="SET NULL")
    )

    severity_scale: Mapped[Optional[SeverityScale]] = relationship(back_populates="actions")


class DisciplinaryIncident(EntityMixin, TimestampMixin, Base):
    __tablename__ = "disciplinary_incidents"

    incident_date: Mapped[date] = mapped_column(Date, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    severity_score: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    learner_id: Mapped[str] = mapped_column(
        ForeignKey("learners.id", ondelete="CASCADE"), nullable=False, index=True
    )
    disciplinary_action_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("disciplinary_actions.id", ondelete="SET NULL")
    )

    learner: Mapped[Learner] = relationship(back_populates="incidents")
    disciplinary_action: Mapped[Optional[DisciplinaryAction]] = relationship()


class SchoolEvent(EntityMixin, TimestampMixin, Base):
    """School event. Participating groups must be removed before the event."""

    __tablename__ = "school_events"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    location: Mapped[Optional[str]] = mapped_column(String(255))
    published: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    attendance_consent_required: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    transport_consent_required: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    participating_activity_groups: Mapped[list["ParticipatingActivityGroup"]] = relationship(
        back_populates="event",
        passive_deletes="all",
    )
    parent_permissions: Mapped[list["ParentPermission"]] = relationship(
        back_populates="event",
        cascade="all, delete-orphan",
    )


class ParticipatingActivityGroup(EntityMixin, Base):
    """Activity group taking part in an event. Both foreign keys are NO ACTION."""

    __tablename__ = "participating_activity_groups"

    event_id: Mapped[str] = mapped_column(ForeignKey("school_events.id"), nullable=False, index=True)
    activity_group_id: Mapped[str] = mapped_column(ForeignKey("activity_groups.id"), nullable=False)

    event: Mapped[SchoolEvent] = relationship(back_populates="participating_activity_groups")
    activity_group: Mapped[ActivityGroup] = relationship()
    parent_permissions: Mapped[list["ParentPermission"]] = relationship(
        back_populates="participating_activity_group",
        cascade="all, delete-orphan",
    )


class ParentPermission(EntityMixin, TimestampMixin, Base):
    """A parent's consent for a learner to take part in an event."""

    __tablename__ = "parent_permissions"

    parent_id: Mapped[str] = mapped_column(
        ForeignKey("parents.id", ondelete="CASCADE"), nullable=False, index=True
    )
    learner_id: Mapped[str] = mapped_column(
        ForeignKey("learners.id", ondelete="CASCADE"), nullable=False, index=True
    )
    event_id: Mapped[str] = mapped_column(
        ForeignKey("school_events.id", ondelete="CASCADE"), nullable=False, index=True
    )
    participating_activity_group_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("participating_activity_groups.id", ondelete="CASCADE"), index=True
    )
    consent_type: Mapped[str] = mapped_column(String(30), nullable=False)
    granted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    consent_direction: Mapped[Optional[str]] = mapped_column(String(30))

    parent: Mapped[Parent] = relationship(back_populates="event_consents")
    learner: Mapped[Learner] = relationship(back_populates="parent_permissions")
    event: Mapped[SchoolEvent] = relationship(back_populates="parent_permissions")
    participating_activity_group: Mapped[Optional[ParticipatingActivityGroup]] = relationship(
        back_populates="parent_permissions"
    )
