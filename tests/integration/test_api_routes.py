# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for the HTTP surface.

The application is built with ``create_app`` and exercised without its
lifespan, so no database is opened. Services are replaced through
FastAPI dependency overrides.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.app import create_app
from src.api.dependencies import (
    get_activity_group_command_service,
    get_activity_group_query_service,
    get_age_group_service,
    get_business_listing_service,
    get_learner_query_service,
    get_school_class_service,
    get_school_grade_service,
    get_teacher_service,
)
from src.core.config import get_settings
from src.domains.auth import Permissions
from src.domains.auth.jwt import JWTManager
from src.models.common import PaginatedResult, Result
from src.models.school import SchoolGradeDto


@pytest.fixture
def grade_service() -> MagicMock:
    service = MagicMock()
    service.all = AsyncMock(
        return_value=Result.success([SchoolGradeDto(id="g-1", name="Grade 1")])
    )
    service.paged = AsyncMock(
        return_value=PaginatedResult.success(
            [SchoolGradeDto(id="g-1", name="Grade 1")], total_count=3, page_nr=2, page_size=1
        )
    )
    service.get = AsyncMock(return_value=Result.fail("No School Grade with id 'missing' was found"))
    service.create = AsyncMock(
        return_value=Result.success(SchoolGradeDto(id="g-2", name="Grade 2"))
    )
    service.update = AsyncMock(return_value=Result.success())
    service.delete = AsyncMock(return_value=Result.success())
    return service


@pytest.fixture
def learner_queries() -> MagicMock:
    service = MagicMock()
    service.exist = AsyncMock(return_value=Result.success("learner-1"))
    return service


@pytest.fixture
def listing_service() -> MagicMock:
    service = MagicMock()
    service.contact_owner = AsyncMock(return_value=Result.success(messages="Enquiry sent"))
    return service


@pytest.fixture
def app(
    grade_service: MagicMock,
    learner_queries: MagicMock,
    listing_service: MagicMock,
) -> FastAPI:
    """Create the application with service overrides."""
    app = create_app()
    app.dependency_overrides[get_school_grade_service] = lambda: grade_service
    app.dependency_overrides[get_learner_query_service] = lambda: learner_queries
    app.dependency_overrides[get_business_listing_service] = lambda: listing_service
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create test client. Used without a context so the lifespan never runs."""
    return TestClient(app)


def auth_headers(*permissions: str) -> dict[str, str]:
    token = JWTManager(get_settings().jwt).create_access_token(
        user_id="user-1",
        email="admin@example.com",
        permissions=list(permissions),
    )
    return {"Authorization": f"Bearer {token}"}


class TestHealth:
    """Tests for health endpoints that do not touch the database."""

    def test_liveness(self, client: TestClient) -> None:
        response = client.get("/health/live")

        assert response.status_code == 200
        assert response.json() == {"status": "alive"}


class TestSchoolGradeRoutes:
    """Tests for /api/schoolGrades."""

    def test_routes_registered(self, app: FastAPI) -> None:
        routes = [route.path for route in app.routes]

        assert "/api/schoolGrades/all" in routes
        assert "/api/schoolGrades/pagedgrades" in routes
        assert "/api/schoolGrades/notificationList/{grade_id}" in routes
        assert "/api/schoolGrades/{grade_id}" in routes
        assert "/api/schoolGrades" in routes

    def test_requires_token(self, client: TestClient, grade_service: MagicMock) -> None:
        response = client.get("/api/schoolGrades/all")

        assert response.status_code == 401
        grade_service.all.assert_not_called()

    def test_requires_permission(self, client: TestClient, grade_service: MagicMock) -> None:
        response = client.get(
            "/api/schoolGrades/all",
            headers=auth_headers(Permissions.Learner.View),
        )

        assert response.status_code == 403
        grade_service.all.assert_not_called()

    def test_all_returns_envelope(self, client: TestClient) -> None:
        response = client.get(
            "/api/schoolGrades/all",
            headers=auth_headers(Permissions.SchoolGrade.View),
        )

        assert response.status_code == 200
        body = response.json()
        assert body["Succeeded"] is True
        assert body["Messages"] == []
        assert body["Data"] == [{"Id": "g-1", "Name": "Grade 1"}]

    def test_failure_still_answers_200(self, client: TestClient) -> None:
        response = client.get(
            "/api/schoolGrades/missing",
            headers=auth_headers(Permissions.SchoolGrade.View),
        )

        assert response.status_code == 200
        body = response.json()
        assert body["Succeeded"] is False
        assert body["Messages"] == ["No School Grade with id 'missing' was found"]
        assert body["Data"] is None

    def test_paged_reads_table_state(self, client: TestClient, grade_service: MagicMock) -> None:
        response = client.get(
            "/api/schoolGrades/pagedgrades",
            params={
                "PageNr": 2,
                "PageSize": 1,
                "SortLabel": "Name",
                "SortDirection": "ascending",
                "SearchText": "grade",
            },
            headers=auth_headers(Permissions.SchoolGrade.Search),
        )

        assert response.status_code == 200
        parameters = grade_service.paged.call_args.args[0]
        assert parameters.page_nr == 2
        assert parameters.page_size == 1
        assert parameters.order_by == "Name desc"
        assert parameters.search_text == "grade"

        body = response.json()
        assert body["TotalCount"] == 3
        assert body["PageNr"] == 2
        assert body["PageSize"] == 1

    def test_paged_rejects_page_zero(self, client: TestClient, grade_service: MagicMock) -> None:
        response = client.get(
            "/api/schoolGrades/pagedgrades",
            params={"PageNr": 0},
            headers=auth_headers(Permissions.SchoolGrade.Search),
        )

        assert response.status_code == 422
        grade_service.paged.assert_not_called()

    def test_put_creates(self, client: TestClient, grade_service: MagicMock) -> None:
        response = client.put(
            "/api/schoolGrades",
            json={"Name": "Grade 2"},
            headers=auth_headers(Permissions.SchoolGrade.Create),
        )

        assert response.status_code == 200
        assert response.json()["Data"] == {"Id": "g-2", "Name": "Grade 2"}
        dto = grade_service.create.call_args.args[0]
        assert dto.name == "Grade 2"
        assert dto.id is None
        grade_service.update.assert_not_called()

    def test_post_updates(self, client: TestClient, grade_service: MagicMock) -> None:
        response = client.post(
            "/api/schoolGrades",
            json={"Id": "g-1", "Name": "Renamed"},
            headers=auth_headers(Permissions.SchoolGrade.Edit),
        )

        assert response.status_code == 200
        assert response.json()["Succeeded"] is True
        dto = grade_service.update.call_args.args[0]
        assert dto.id == "g-1"
        assert dto.name == "Renamed"
        grade_service.create.assert_not_called()

    def test_post_needs_edit_permission(self, client: TestClient) -> None:
        response = client.post(
            "/api/schoolGrades",
            json={"Id": "g-1", "Name": "Renamed"},
            headers=auth_headers(Permissions.SchoolGrade.Create),
        )

        assert response.status_code == 403

    def test_delete(self, client: TestClient, grade_service: MagicMock) -> None:
        response = client.delete(
            "/api/schoolGrades/g-1",
            headers=auth_headers(Permissions.SchoolGrade.Delete),
        )

        assert response.status_code == 200
        grade_service.delete.assert_awaited_once_with("g-1")


class TestAnonymousRoutes:
    """Tests for endpoints reachable without a token."""

    def test_learner_exist(self, client: TestClient, learner_queries: MagicMock) -> None:
        response = client.get("/api/learners/exist/ann@example.com")

        assert response.status_code == 200
        assert response.json()["Data"] == "learner-1"
        learner_queries.exist.assert_awaited_once_with("ann@example.com")

    def test_contact_owner(self, client: TestClient, listing_service: MagicMock) -> None:
        response = client.post(
            "/api/businessdirectory/listing-1/contact",
            json={"FullName": "Visitor", "Email": "visitor@example.com", "Message": "Hello"},
        )

        assert response.status_code == 200
        assert response.json()["Messages"] == ["Enquiry sent"]
        listing_id, enquiry = listing_service.contact_owner.call_args.args
        assert listing_id == "listing-1"
        assert enquiry.full_name == "Visitor"

    def test_contact_owner_validates_email(
        self, client: TestClient, listing_service: MagicMock
    ) -> None:
        response = client.post(
            "/api/businessdirectory/listing-1/contact",
            json={"FullName": "Visitor", "Email": "not-an-email"},
        )

        assert response.status_code == 422
        listing_service.contact_owner.assert_not_called()


@pytest.fixture
def structure_services(app: FastAPI) -> dict[str, MagicMock]:
    """Replace the school structure services with mocks."""
    services = {
        "age_groups": MagicMock(),
        "teachers": MagicMock(),
        "classes": MagicMock(),
        "group_queries": MagicMock(),
        "group_commands": MagicMock(),
    }
    services["age_groups"].all = AsyncMock(return_value=Result.success([]))
    services["teachers"].exist = AsyncMock(return_value=Result.success("teacher-1"))
    services["classes"].notification_list = AsyncMock(return_value=Result.success([]))
    services["group_queries"].team_members = AsyncMock(
        return_value=PaginatedResult.success([], total_count=0, page_nr=1, page_size=10)
    )
    services["group_queries"].notification_list = AsyncMock(return_value=Result.success([]))
    services["group_commands"].add_team_member = AsyncMock(
        return_value=Result.success(messages="Team Member successfully added")
    )
    services["group_commands"].remove_team_member = AsyncMock(
        return_value=Result.success(messages="Team Member removed successfully")
    )

    app.dependency_overrides[get_age_group_service] = lambda: services["age_groups"]
    app.dependency_overrides[get_teacher_service] = lambda: services["teachers"]
    app.dependency_overrides[get_school_class_service] = lambda: services["classes"]
    app.dependency_overrides[get_activity_group_query_service] = lambda: services["group_queries"]
    app.dependency_overrides[get_activity_group_command_service] = (
        lambda: services["group_commands"]
    )
    return services


class TestSchoolStructureRoutes:
    """Tests for age group, teacher, class and activity group endpoints."""

    @pytest.mark.parametrize(
        ("method", "path"),
        [
            ("get", "/api/agegroups/all"),
            ("get", "/api/agegroups/pagedagegroups"),
            ("get", "/api/teachers/all"),
            ("get", "/api/teachers/notificationList"),
            ("get", "/api/schoolclasses/all"),
            ("get", "/api/schoolclasses/notificationList/c-1"),
            ("get", "/api/activitygroups/pagedactivitygroups"),
            ("get", "/api/activitygroups/teamMembers"),
            ("put", "/api/activitygroups/teamMembers/add/a-1/l-1"),
            ("delete", "/api/activitygroups/teamMembers/remove/a-1/l-1"),
            ("get", "/api/activitygroups/notificationList/a-1"),
            ("delete", "/api/activitygroups/a-1"),
        ],
    )
    def test_registered_and_guarded(
        self,
        client: TestClient,
        structure_services: dict[str, MagicMock],
        method: str,
        path: str,
    ) -> None:
        """A known route without the right permission answers 403, not 404."""
        response = client.request(method, path, headers=auth_headers(Permissions.Learner.View))

        assert response.status_code == 403

    def test_age_groups_all(
        self, client: TestClient, structure_services: dict[str, MagicMock]
    ) -> None:
        response = client.get(
            "/api/agegroups/all",
            headers=auth_headers(Permissions.AgeGroup.View),
        )

        assert response.status_code == 200
        assert response.json()["Data"] == []
        structure_services["age_groups"].all.assert_awaited_once()

    def test_teacher_exist_is_anonymous(
        self, client: TestClient, structure_services: dict[str, MagicMock]
    ) -> None:
        response = client.get("/api/teachers/exist/tom@school.org")

        assert response.status_code == 200
        assert response.json()["Data"] == "teacher-1"
        structure_services["teachers"].exist.assert_awaited_once_with("tom@school.org")

    def test_class_notification_list_reads_age_range(
        self, client: TestClient, structure_services: dict[str, MagicMock]
    ) -> None:
        response = client.get(
            "/api/schoolclasses/notificationList/c-1",
            params={"MinAge": 6, "MaxAge": 9},
            headers=auth_headers(Permissions.SchoolClass.View),
        )

        assert response.status_code == 200
        structure_services["classes"].notification_list.assert_awaited_once_with(
            "c-1", min_age=6, max_age=9
        )

    def test_team_members_reads_group_id(
        self, client: TestClient, structure_services: dict[str, MagicMock]
    ) -> None:
        response = client.get(
            "/api/activitygroups/teamMembers",
            params={"ActivityGroupId": "a-1"},
            headers=auth_headers(Permissions.ActivityGroup.View),
        )

        assert response.status_code == 200
        parameters = structure_services["group_queries"].team_members.call_args.args[0]
        assert parameters.activity_group_id == "a-1"

    def test_add_team_member(
        self, client: TestClient, structure_services: dict[str, MagicMock]
    ) -> None:
        response = client.put(
            "/api/activitygroups/teamMembers/add/a-1/l-1",
            headers=auth_headers(Permissions.ActivityGroup.Edit),
        )

        assert response.status_code == 200
        assert response.json()["Messages"] == ["Team Member successfully added"]
        structure_services["group_commands"].add_team_member.assert_awaited_once_with("a-1", "l-1")

    def test_remove_team_member(
        self, client: TestClient, structure_services: dict[str, MagicMock]
    ) -> None:
        response = client.delete(
            "/api/activitygroups/teamMembers/remove/a-1/l-1",
            headers=auth_headers(Permissions.ActivityGroup.Edit),
        )

        assert response.status_code == 200
        structure_services["group_commands"].remove_team_member.assert_awaited_once_with(
            "a-1", "l-1"
        )
