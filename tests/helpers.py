"""Test helper functions for common data creation patterns."""

from httpx import AsyncClient

from tests.factories import DEFAULT_TEST_PASSWORD


async def register_and_login(client: AsyncClient, email: str) -> dict[str, str]:
    """Register a user through the API and return Authorization headers.

    Args:
        client: HTTP client bound to the test app
        email: Email for the new account

    Returns:
        Headers carrying a freshly issued bearer token
    """
    response = await client.post(
        "/api/v1/users",
        json={"email": email, "password": DEFAULT_TEST_PASSWORD, "full_name": "Test User"},
    )
    assert response.status_code == 201, response.text
    response = await client.post(
        "/api/v1/auth/tokens",
        json={"email": email, "password": DEFAULT_TEST_PASSWORD},
    )
    assert response.status_code == 201, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
