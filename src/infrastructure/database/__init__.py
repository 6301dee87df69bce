# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database infrastructure for the PostgreSQL store.

Example:
    from src.infrastructure.database import get_session, Repository

    async with get_session() as session:
        grades = await Repository(session, SchoolGrade).list_all()
"""

from src.infrastructure.database.connection import (
    DatabaseError,
    check_database_connection,
    close_database,
    get_engine,
    get_session,
    get_sessionmaker,
    init_database,
)
from src.infrastructure.database.repository import (
    BusinessRepositoryManager,
    MessagingRepositoryManager,
    Repository,
    SchoolsRepositoryManager,
)
from src.infrastructure.database.specification import (
    PagedSpecification,
    Specification,
    parse_order_by,
)

__all__ = [
    # Connection
    "DatabaseError",
    "check_database_connection",
    "close_database",
    "get_engine",
    "get_session",
    "get_sessionmaker",
    "init_database",
    # Repositories
    "Repository",
    "SchoolsRepositoryManager",
    "MessagingRepositoryManager",
    "BusinessRepositoryManager",
    # Specifications
    "Specification",
    "PagedSpecification",
    "parse_order_by",
]
