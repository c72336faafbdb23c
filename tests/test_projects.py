"""Tests for owner-scoped project CRUD."""

import pytest
from httpx import AsyncClient

from tests.helpers import register_and_login

pytestmark = pytest.mark.asyncio

PROJECTS = "/api/v1/projects"


async def _create(client: AsyncClient, headers: dict, **overrides) -> dict:
    payload = {
        "name": "Pet Store",
        "description": "CRUD UI for the pet store API",
        "spec_url": "https://petstore.example.com/openapi.json",
    }
    payload.update(overrides)
    response = await client.post(PROJECTS, json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestProjects:
    async def test_create_and_get(self, client: AsyncClient, auth_headers: dict):
        created = await _create(client, auth_headers)

        response = await client.get(f"{PROJECTS}/{created['id']}", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Pet Store"
        assert data["spec_url"] == "https://petstore.example.com/openapi.json"

    async def test_requires_authentication(self, client: AsyncClient):
        response = await client.get(PROJECTS)
        assert response.status_code == 401

    async def test_list_only_own_projects(self, client: AsyncClient, auth_headers: dict):
        await _create(client, auth_headers, name="Mine")
        other_headers = await register_and_login(client, "other@example.com")
        await _create(client, other_headers, name="Theirs")

        response = await client.get(PROJECTS, headers=auth_headers)

        assert response.status_code == 200
        assert [p["name"] for p in response.json()] == ["Mine"]

    async def test_other_users_project_is_not_found(self, client: AsyncClient, auth_headers: dict):
        other_headers = await register_and_login(client, "intruder@example.com")
        created = await _create(client, auth_headers)

        response = await client.get(f"{PROJECTS}/{created['id']}", headers=other_headers)
        assert response.status_code == 404

        response = await client.delete(f"{PROJECTS}/{created['id']}", headers=other_headers)
        assert response.status_code == 404

    async def test_duplicate_name_conflicts(self, client: AsyncClient, auth_headers: dict):
        await _create(client, auth_headers, name="Twice")

        response = await client.post(PROJECTS, json={"name": "Twice"}, headers=auth_headers)

        assert response.status_code == 409

    async def test_same_name_for_different_owners(self, client: AsyncClient, auth_headers: dict):
        await _create(client, auth_headers, name="Shared")
        other_headers = await register_and_login(client, "second@example.com")

        await _create(client, other_headers, name="Shared")

    async def test_update(self, client: AsyncClient, auth_headers: dict):
        created = await _create(client, auth_headers)

        response = await client.patch(
            f"{PROJECTS}/{created['id']}",
            json={"name": "Renamed", "description": "  "},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Renamed"
        # Blank description is normalized to None and therefore left unchanged
        assert data["description"] == "CRUD UI for the pet store API"

    async def test_update_to_existing_name_conflicts(self, client: AsyncClient, auth_headers: dict):
        await _create(client, auth_headers, name="First")
        second = await _create(client, auth_headers, name="Second")

        response = await client.patch(
            f"{PROJECTS}/{second['id']}", json={"name": "First"}, headers=auth_headers
        )

        assert response.status_code == 409

    async def test_delete(self, client: AsyncClient, auth_headers: dict):
        created = await _create(client, auth_headers)

        response = await client.delete(f"{PROJECTS}/{created['id']}", headers=auth_headers)
        assert response.status_code == 204

        response = await client.get(f"{PROJECTS}/{created['id']}", headers=auth_headers)
        assert response.status_code == 404

    async def test_blank_name_rejected(self, client: AsyncClient, auth_headers: dict):
        response = await client.post(PROJECTS, json={"name": "   "}, headers=auth_headers)
        assert response.status_code == 422

    async def test_non_http_spec_url_rejected(self, client: AsyncClient, auth_headers: dict):
        response = await client.post(
            PROJECTS,
            json={"name": "Bad URL", "spec_url": "ftp://example.com/spec.json"},
            headers=auth_headers,
        )
        assert response.status_code == 422
