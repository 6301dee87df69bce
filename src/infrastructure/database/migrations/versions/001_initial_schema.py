# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Initial schema.

Revision ID: 001_initial
Revises: None
Create Date: 2025-06-02
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id() -> sa.Column:
    return sa.Column("id", sa.String(36), primary_key=True)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
    ]


def _fk(table: str, ondelete: str | None = None) -> sa.ForeignKey:
    return sa.ForeignKey(f"{table}.id", ondelete=ondelete)


def upgrade() -> None:
    """Create all tables."""
    # =========================================================================
    # SCHOOL STRUCTURE
    # =========================================================================

    op.create_table(
        "school_grades",
        _id(),
        sa.Column("name", sa.String(100), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "school_classes",
        _id(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("grade_id", sa.String(36), _fk("school_grades", "CASCADE"), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_school_classes_grade_id", "school_classes", ["grade_id"])

    op.create_table(
        "age_groups",
        _id(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("min_age", sa.Integer, nullable=False, server_default="0"),
        sa.Column("max_age", sa.Integer, nullable=False, server_default="99"),
    )

    op.create_table(
        "teachers",
        _id(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("surname", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("grade_id", sa.String(36), _fk("school_grades", "SET NULL"), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_teachers_grade_id", "teachers", ["grade_id"])

    # Age group and teacher links are NO ACTION
    op.create_table(
        "activity_groups",
        _id(),
        sa.Column("name", sa.String(150), nullable=False),
        sa.Column("age_group_id", sa.String(36), _fk("age_groups"), nullable=True),
        sa.Column("teacher_id", sa.String(36), _fk("teachers"), nullable=True),
        *_timestamps(),
    )

    # =========================================================================
    # PARENTS AND LEARNERS
    # =========================================================================

    op.create_table(
        "parents",
        _id(),
        sa.Column("title", sa.String(20), nullable=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("id_number", sa.String(20), nullable=True),
        sa.Column("receive_notifications", sa.Boolean, nullable=False, server_default="true"),
        sa.Column("receive_messages", sa.Boolean, nullable=False, server_default="true"),
        sa.Column("receive_emails", sa.Boolean, nullable=False, server_default="true"),
        sa.Column("require_consent", sa.Boolean, nullable=False, server_default="false"),
        *_timestamps(),
    )

    op.create_table(
        "parent_addresses",
        _id(),
        sa.Column("parent_id", sa.String(36), _fk("parents", "CASCADE"), nullable=False),
        sa.Column("street", sa.String(255), nullable=True),
        sa.Column("suburb", sa.String(100), nullable=True),
        sa.Column("city", sa.String(100), nullable=True),
        sa.Column("postal_code", sa.String(20), nullable=True),
        sa.Column("is_default", sa.Boolean, nullable=False, server_default="false"),
    )
    op.create_index("ix_parent_addresses_parent_id", "parent_addresses", ["parent_id"])

    op.create_table(
        "parent_contact_numbers",
        _id(),
        sa.Column("parent_id", sa.String(36), _fk("parents", "CASCADE"), nullable=False),
        sa.Column("number", sa.String(30), nullable=False),
        sa.Column("international_code", sa.String(5), nullable=False, server_default="27"),
        sa.Column("is_default", sa.Boolean, nullable=False, server_default="false"),
    )
    op.create_index("ix_parent_contact_numbers_parent_id", "parent_contact_numbers", ["parent_id"])

    op.create_table(
        "parent_email_addresses",
        _id(),
        sa.Column("parent_id", sa.String(36), _fk("parents", "CASCADE"), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("is_default", sa.Boolean, nullable=False, server_default="false"),
    )
    op.create_index("ix_parent_email_addresses_parent_id", "parent_email_addresses", ["parent_id"])
    op.create_index("ix_parent_email_addresses_email", "parent_email_addresses", ["email"])

    op.create_table(
        "emergency_contacts",
        _id(),
        sa.Column("parent_id", sa.String(36), _fk("parents", "CASCADE"), nullable=False),
        sa.Column("name", sa.String(150), nullable=False),
        sa.Column("number", sa.String(30), nullable=False),
        sa.Column("relationship_to_learner", sa.String(50), nullable=True),
    )
    op.create_index("ix_emergency_contacts_parent_id", "emergency_contacts", ["parent_id"])

    op.create_table(
        "learners",
        _id(),
        sa.Column("child_guid", sa.String(36), nullable=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("middle_name", sa.String(100), nullable=True),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("id_number", sa.String(20), nullable=True),
        sa.Column("gender", sa.String(20), nullable=True),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("medical_notes", sa.Text, nullable=True),
        sa.Column("receive_notifications", sa.Boolean, nullable=False, server_default="true"),
        sa.Column("receive_messages", sa.Boolean, nullable=False, server_default="true"),
        sa.Column("receive_emails", sa.Boolean, nullable=False, server_default="true"),
        sa.Column("medical_aid_parent_id", sa.String(36), _fk("parents", "SET NULL"), nullable=True),
        sa.Column("school_grade_id", sa.String(36), _fk("school_grades", "SET NULL"), nullable=True),
        sa.Column("school_class_id", sa.String(36), _fk("school_classes", "SET NULL"), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_learners_school_grade_id", "learners", ["school_grade_id"])
    op.create_index("ix_learners_school_class_id", "learners", ["school_class_id"])

    op.create_table(
        "learner_contact_numbers",
        _id(),
        sa.Column("learner_id", sa.String(36), _fk("learners", "CASCADE"), nullable=False),
        sa.Column("number", sa.String(30), nullable=False),
        sa.Column("international_code", sa.String(5), nullable=False, server_default="27"),
        sa.Column("is_default", sa.Boolean, nullable=False, server_default="false"),
    )
    op.create_index("ix_learner_contact_numbers_learner_id", "learner_contact_numbers", ["learner_id"])

    op.create_table(
        "learner_email_addresses",
        _id(),
        sa.Column("learner_id", sa.String(36), _fk("learners", "CASCADE"), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("is_default", sa.Boolean, nullable=False, server_default="false"),
    )
    op.create_index("ix_learner_email_addresses_learner_id", "learner_email_addresses", ["learner_id"])
    op.create_index("ix_learner_email_addresses_email", "learner_email_addresses", ["email"])

    op.create_table(
        "learner_parents",
        _id(),
        sa.Column("learner_id", sa.String(36), _fk("learners", "CASCADE"), nullable=False),
        sa.Column("parent_id", sa.String(36), _fk("parents", "CASCADE"), nullable=False),
        sa.Column("parent_consent_required", sa.Boolean, nullable=False, server_default="false"),
        sa.UniqueConstraint("learner_id", "parent_id"),
    )
    op.create_index("ix_learner_parents_learner_id", "learner_parents", ["learner_id"])
    op.create_index("ix_learner_parents_parent_id", "learner_parents", ["parent_id"])

    # =========================================================================
    # DISCIPLINE
    # =========================================================================

    op.create_table(
        "severity_scales",
        _id(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("score", sa.Integer, nullable=False, server_default="0"),
        sa.Column("description", sa.Text, nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "disciplinary_actions",
        _id(),
        sa.Column("name", sa.String(150), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("severity_scale_id", sa.String(36), _fk("severity_scales", "SET NULL"), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "disciplinary_incidents",
        _id(),
        sa.Column("incident_date", sa.Date, nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("severity_score", sa.Integer, nullable=False, server_default="0"),
        sa.Column("learner_id", sa.String(36), _fk("learners", "CASCADE"), nullable=False),
        sa.Column(
            "disciplinary_action_id",
            sa.String(36),
            _fk("disciplinary_actions", "SET NULL"),
            nullable=True,
        ),
        *_timestamps(),
    )
    op.create_index("ix_disciplinary_incidents_learner_id", "disciplinary_incidents", ["learner_id"])

    # =========================================================================
    # EVENTS AND CONSENT
    # =========================================================================

    op.create_table(
        "school_events",
        _id(),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("published", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("attendance_consent_required", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("transport_consent_required", sa.Boolean, nullable=False, server_default="false"),
        *_timestamps(),
    )

    # Both foreign keys are NO ACTION; rows are removed before the event
    op.create_table(
        "participating_activity_groups",
        _id(),
        sa.Column("event_id", sa.String(36), _fk("school_events"), nullable=False),
        sa.Column("activity_group_id", sa.String(36), _fk("activity_groups"), nullable=False),
    )
    op.create_index(
        "ix_participating_activity_groups_event_id",
        "participating_activity_groups",
        ["event_id"],
    )

    op.create_table(
        "parent_permissions",
        _id(),
        sa.Column("parent_id", sa.String(36), _fk("parents", "CASCADE"), nullable=False),
        sa.Column("learner_id", sa.String(36), _fk("learners", "CASCADE"), nullable=False),
        sa.Column("event_id", sa.String(36), _fk("school_events", "CASCADE"), nullable=False),
        sa.Column(
            "participating_activity_group_id",
            sa.String(36),
            _fk("participating_activity_groups", "CASCADE"),
            nullable=True,
        ),
        sa.Column("consent_type", sa.String(30), nullable=False),
        sa.Column("granted", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("consent_direction", sa.String(30), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_parent_permissions_parent_id", "parent_permissions", ["parent_id"])
    op.create_index("ix_parent_permissions_learner_id", "parent_permissions", ["learner_id"])
    op.create_index("ix_parent_permissions_event_id", "parent_permissions", ["event_id"])
    op.create_index(
        "ix_parent_permissions_participating_activity_group_id",
        "parent_permissions",
        ["participating_activity_group_id"],
    )

    # =========================================================================
    # MESSAGING (no foreign keys; entity_id is a loose reference)
    # =========================================================================

    op.create_table(
        "notifications",
        _id(),
        sa.Column("entity_id", sa.String(36), nullable=True),
        sa.Column("receiver_id", sa.String(36), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("short_description", sa.String(255), nullable=True),
        sa.Column("message", sa.Text, nullable=True),
        sa.Column("message_type", sa.String(20), nullable=False, server_default="none"),
        sa.Column("notification_url", sa.String(500), nullable=True),
        sa.Column("created_on", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.Column("read_on", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_notifications_entity_id", "notifications", ["entity_id"])
    op.create_index("ix_notifications_receiver_id", "notifications", ["receiver_id"])

    op.create_table(
        "messages",
        _id(),
        sa.Column("entity_id", sa.String(36), nullable=True),
        sa.Column("sender_id", sa.String(36), nullable=True),
        sa.Column("receiver_id", sa.String(36), nullable=True),
        sa.Column("title", sa.String(255), nullable=True),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("message_type", sa.String(20), nullable=False, server_default="none"),
        sa.Column("created_on", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
    )
    op.create_index("ix_messages_entity_id", "messages", ["entity_id"])
    op.create_index("ix_messages_receiver_id", "messages", ["receiver_id"])

    # =========================================================================
    # BUSINESS DIRECTORY
    # =========================================================================

    op.create_table(
        "listing_tiers",
        _id(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("short_description", sa.String(255), nullable=True),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("price", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("order", sa.Integer, nullable=False, server_default="1"),
        sa.Column(
            "allow_service_and_product_listing",
            sa.Boolean,
            nullable=False,
            server_default="false",
        ),
        *_timestamps(),
    )

    op.create_table(
        "business_listings",
        _id(),
        sa.Column("user_id", sa.String(36), nullable=True),
        sa.Column("heading", sa.String(200), nullable=False),
        sa.Column("slogan", sa.String(255), nullable=True),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("address", sa.String(500), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone_number", sa.String(30), nullable=True),
        sa.Column("website_url", sa.String(500), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("active_from", sa.DateTime(timezone=True), nullable=True),
        sa.Column("active_until", sa.DateTime(timezone=True), nullable=True),
        sa.Column("tier_id", sa.String(36), _fk("listing_tiers", "SET NULL"), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_business_listings_user_id", "business_listings", ["user_id"])

    for table in ("listing_products", "listing_services"):
        op.create_table(
            table,
            _id(),
            sa.Column("listing_id", sa.String(36), _fk("business_listings", "CASCADE"), nullable=False),
            sa.Column("name", sa.String(200), nullable=False),
            sa.Column("description", sa.Text, nullable=True),
            sa.Column("price", sa.Numeric(12, 2), nullable=False, server_default="0"),
        )
        op.create_index(f"ix_{table}_listing_id", table, ["listing_id"])

    op.create_table(
        "listing_images",
        _id(),
        sa.Column("listing_id", sa.String(36), _fk("business_listings", "CASCADE"), nullable=False),
        sa.Column("url", sa.String(500), nullable=False),
        sa.Column("file_name", sa.String(255), nullable=False),
        sa.Column("content_type", sa.String(100), nullable=True),
        sa.Column("size", sa.Integer, nullable=False, server_default="0"),
        sa.Column("selector", sa.String(50), nullable=True),
        sa.Column("order", sa.Integer, nullable=False, server_default="0"),
    )
    op.create_index("ix_listing_images_listing_id", "listing_images", ["listing_id"])


def downgrade() -> None:
    """Drop all tables."""
    for table in (
        "listing_images",
        "listing_services",
        "listing_products",
        "business_listings",
        "listing_tiers",
        "messages",
        "notifications",
        "parent_permissions",
        "participating_activity_groups",
        "school_events",
        "disciplinary_incidents",
        "disciplinary_actions",
        "severity_scales",
        "learner_parents",
        "learner_email_addresses",
        "learner_contact_numbers",
        "learners",
        "emergency_contacts",
        "parent_email_addresses",
        "parent_contact_numbers",
        "parent_addresses",
        "parents",
        "activity_groups",
        "teachers",
        "age_groups",
        "school_classes",
        "school_grades",
    ):
        op.drop_table(table)
