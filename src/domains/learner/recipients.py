# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Notification recipients built from learners and their parents."""

from sqlalchemy.orm import selectinload

from src.infrastructure.database.models import Learner, LearnerParent, MessageType, Parent
from src.models.messaging import RecipientDto
from src.utils.datetime import age_from_id_number


def recipient_details() -> tuple:
    """Loader options for the email addresses of a learner and its parents."""
    return (
        selectinload(Learner.email_addresses),
        selectinload(Learner.parents)
        .selectinload(LearnerParent.parent)
        .selectinload(Parent.email_addresses),
    )


def add_learner_recipients(
    recipients: dict[str, RecipientDto],
    learners: list[Learner],
    min_age: int = 0,
    max_age: int = 100,
) -> dict[str, RecipientDto]:
    """Add each learner aged within ``[min_age, max_age]`` followed by its parents.

    ``recipients`` is keyed by id; an id already present is never replaced.
    Parents keep their own notification and email preferences.
    """
    for learner in learners:
        age = age_from_id_number(learner.id_number)
        if age < min_age or age > max_age:
            continue

        recipients.setdefault(
            learner.id,
            RecipientDto(
                id=learner.id,
                first_name=learner.first_name,
                last_name=learner.last_name,
                emails=[e.email for e in learner.email_addresses],
                receive_notifications=True,
                receive_emails=True,
                message_type=MessageType.LEARNER,
            ),
        )
        for link in learner.parents:
            parent = link.parent
            if parent is None or parent.id in recipients:
                continue
            recipients[parent.id] = RecipientDto(
                id=parent.id,
                first_name=parent.first_name,
                last_name=parent.last_name,
                emails=[e.email for e in parent.email_addresses],
                receive_notifications=parent.receive_notifications,
                receive_emails=parent.receive_emails,
                message_type=MessageType.PARENT,
            )
    return recipients
