# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Activity group team members and teacher classes.

Revision ID: 002_team_members
Revises: 001_initial
Create Date: 2025-07-14
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "002_team_members"
down_revision: Union[str, None] = "001_initial"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "activity_group_team_members",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "activity_group_id",
            sa.String(36),
            sa.ForeignKey("activity_groups.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "learner_id",
            sa.String(36),
            sa.ForeignKey("learners.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.UniqueConstraint("activity_group_id", "learner_id"),
    )
    op.create_index(
        "ix_activity_group_team_members_activity_group_id",
        "activity_group_team_members",
        ["activity_group_id"],
    )
    op.create_index(
        "ix_activity_group_team_members_learner_id",
        "activity_group_team_members",
        ["learner_id"],
    )

    op.add_column(
        "teachers",
        sa.Column(
            "school_class_id",
            sa.String(36),
            sa.ForeignKey("school_classes.id", ondelete="SET NULL"),
            nullable=True,
        ),
    )
    op.create_index("ix_teachers_school_class_id", "teachers", ["school_class_id"])


def downgrade() -> None:
    op.drop_index("ix_teachers_school_class_id", table_name="teachers")
    op.drop_column("teachers", "school_class_id")
    op.drop_table("activity_group_team_members")
