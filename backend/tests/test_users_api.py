"""Tests for user registration and role management endpoints."""

from conftest import bearer

from plateshare.models.user import UserRole


class TestRegistration:
    """POST /users."""

    async def test_register_creates_user_role(self, client, store):
        response = await client.post(
            "/users", json={"name": "Ann", "email": "ann@example.com", "profileLink": "http://p"}
        )
        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "User registered successfully"

        stored = await store.get("users", body["userId"])
        assert stored["role"] == "user"
        assert stored["profile_link"] == "http://p"

    async def test_duplicate_email_conflicts(self, client):
        payload = {"name": "Ann", "email": "ann@example.com"}
        assert (await client.post("/users", json=payload)).status_code == 201

        response = await client.post("/users", json=payload)
        assert response.status_code == 400
        assert response.json() == {"message": "User already exists"}

    async def test_missing_name_is_invalid(self, client):
        response = await client.post("/users", json={"name": "", "email": "ann@example.com"})
        assert response.status_code == 400


class TestProfile:
    """GET /users/{email} and GET /users/{id}/role."""

    async def test_get_own_profile(self, client, seed_user):
        await seed_user("ann@example.com")
        response = await client.get("/users/ann@example.com", headers=bearer("ann@example.com"))
        assert response.status_code == 200
        assert response.json()["email"] == "ann@example.com"
        assert response.json()["role"] == "user"

    async def test_other_profile_is_forbidden(self, client, seed_user):
        await seed_user("ann@example.com")
        response = await client.get("/users/ann@example.com", headers=bearer("bob@example.com"))
        assert response.status_code == 403

    async def test_missing_profile_is_404(self, client):
        response = await client.get(
            "/users/ghost@example.com", headers=bearer("ghost@example.com")
        )
        assert response.status_code == 404

    async def test_mixed_case_email_is_one_identity(self, client):
        response = await client.post("/users", json={"name": "Ann", "email": "Ann@Example.com"})
        assert response.status_code == 201

        for path_email, token_email in [
            ("ann@example.com", "ann@example.com"),
            ("Ann@Example.com", "ANN@example.com"),
        ]:
            response = await client.get(f"/users/{path_email}", headers=bearer(token_email))
            assert response.status_code == 200
            assert response.json()["email"] == "ann@example.com"

        response = await client.post("/users", json={"name": "Ann", "email": "ann@example.com"})
        assert response.status_code == 400

    async def test_get_by_id_is_public(self, client, seed_user):
        user = await seed_user("ann@example.com")
        response = await client.get(f"/users/{user.id}/role")
        assert response.status_code == 200
        assert response.json()["id"] == user.id

    async def test_get_by_unknown_id_is_404(self, client):
        response = await client.get("/users/nope/role")
        assert response.status_code == 404


class TestListing:
    """GET /users, /users/charities, /users/search."""

    async def test_list_users_allows_any_of_three_roles(self, client, seed_user):
        await seed_user("admin@example.com", UserRole.ADMIN)
        await seed_user("charity@example.com", UserRole.CHARITY)
        await seed_user("resto@example.com", UserRole.RESTAURANT)

        for email in ("admin@example.com", "charity@example.com", "resto@example.com"):
            response = await client.get("/users", headers=bearer(email))
            assert response.status_code == 200, email
            assert len(response.json()) == 3

    async def test_list_users_rejects_plain_user(self, client, seed_user):
        await seed_user("ann@example.com")
        response = await client.get("/users", headers=bearer("ann@example.com"))
        assert response.status_code == 403

    async def test_list_users_rejects_unregistered_caller(self, client):
        response = await client.get("/users", headers=bearer("ghost@example.com"))
        assert response.status_code == 403

    async def test_list_charities(self, client, seed_user):
        await seed_user("charity@example.com", UserRole.CHARITY)
        await seed_user("ann@example.com")
        response = await client.get("/users/charities", headers=bearer("ann@example.com"))
        assert [user["email"] for user in response.json()] == ["charity@example.com"]

    async def test_search_is_case_insensitive_over_email_or_name(self, client, seed_user):
        await seed_user("admin@example.com", UserRole.ADMIN)
        await seed_user("ann@example.com", name="Annabel")
        await seed_user("bob@sample.org", name="Bob ANNex")

        response = await client.get(
            "/users/search", params={"q": "ANN"}, headers=bearer("admin@example.com")
        )
        assert response.status_code == 200
        assert {user["email"] for user in response.json()} == {
            "ann@example.com",
            "bob@sample.org",
        }

    async def test_search_empty_query_returns_empty_list(self, client, seed_user):
        await seed_user("admin@example.com", UserRole.ADMIN)
        response = await client.get("/users/search", headers=bearer("admin@example.com"))
        assert response.json() == []

    async def test_search_requires_admin(self, client, seed_user):
        await seed_user("charity@example.com", UserRole.CHARITY)
        response = await client.get(
            "/users/search", params={"q": "a"}, headers=bearer("charity@example.com")
        )
        assert response.status_code == 403


class TestSetRole:
    """PATCH /users/{id}/role."""

    async def test_admin_sets_role_directly(self, client, seed_user):
        await seed_user("admin@example.com", UserRole.ADMIN)
        user = await seed_user("ann@example.com")

        response = await client.patch(
            f"/users/{user.id}/role",
            json={"role": "restaurant"},
            headers=bearer("admin@example.com"),
        )
        assert response.status_code == 200
        assert response.json()["user"]["role"] == "restaurant"

    async def test_non_admin_cannot_set_role(self, client, seed_user):
        user = await seed_user("ann@example.com")
        response = await client.patch(
            f"/users/{user.id}/role", json={"role": "admin"}, headers=bearer("ann@example.com")
        )
        assert response.status_code == 403

    async def test_invalid_role_is_rejected(self, client, seed_user):
        await seed_user("admin@example.com", UserRole.ADMIN)
        user = await seed_user("ann@example.com")
        response = await client.patch(
            f"/users/{user.id}/role", json={"role": "overlord"}, headers=bearer("admin@example.com")
        )
        assert response.status_code == 400

    async def test_unknown_user_is_404(self, client, seed_user):
        await seed_user("admin@example.com", UserRole.ADMIN)
        response = await client.patch(
            "/users/nope/role", json={"role": "charity"}, headers=bearer("admin@example.com")
        )
        assert response.status_code == 404
