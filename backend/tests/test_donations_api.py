"""Tests for donation and review endpoints."""

import pytest
from conftest import bearer

from plateshare.models.user import UserRole

RESTO = "resto@example.com"
OTHER_RESTO = "other@example.com"

DONATION = {
    "title": "Leftover bread",
    "foodType": "Bakery",
    "quantity": 12,
    "pickupTime": "2025-08-10T18:00",
    "restaurantName": "Crumbs",
    "location": "12 Main St",
}


@pytest.fixture
async def restaurants(seed_user):
    await seed_user(RESTO, UserRole.RESTAURANT)
    await seed_user(OTHER_RESTO, UserRole.RESTAURANT)


async def _create(client, email=RESTO, **overrides) -> dict:
    response = await client.post("/donations", json={**DONATION, **overrides}, headers=bearer(email))
    assert response.status_code == 201, response.text
    return response.json()["donation"]


class TestCreateDonation:
    """POST /donations."""

    async def test_restaurant_creates_pending_donation(self, client, restaurants):
        donation = await _create(client)
        assert donation["status"] == "Pending"
        assert donation["restaurantEmail"] == RESTO
        assert donation["imageUrl"] is None

    async def test_owner_comes_from_token_not_body(self, client, restaurants):
        donation = await _create(client, restaurantEmail="someone@else.com")
        assert donation["restaurantEmail"] == RESTO

    async def test_status_in_body_is_ignored(self, client, restaurants):
        donation = await _create(client, status="Picked Up")
        assert donation["status"] == "Pending"

    async def test_non_restaurant_is_forbidden(self, client, seed_user):
        await seed_user("charity@example.com", UserRole.CHARITY)
        response = await client.post(
            "/donations", json=DONATION, headers=bearer("charity@example.com")
        )
        assert response.status_code == 403

    async def test_missing_field_is_invalid(self, client, restaurants):
        payload = {key: value for key, value in DONATION.items() if key != "location"}
        response = await client.post("/donations", json=payload, headers=bearer(RESTO))
        assert response.status_code == 400


class TestListDonations:
    """Listing endpoints."""

    async def test_public_list_needs_no_credential(self, client, restaurants):
        await _create(client)
        await _create(client, email=OTHER_RESTO, title="Soup")

        response = await client.get("/donations")
        assert response.status_code == 200
        assert [d["title"] for d in response.json()] == ["Leftover bread", "Soup"]

    async def test_list_by_restaurant(self, client, restaurants):
        await _create(client)
        await _create(client, email=OTHER_RESTO, title="Soup")

        response = await client.get(f"/donations/restaurant/{OTHER_RESTO}", headers=bearer(RESTO))
        assert [d["title"] for d in response.json()] == ["Soup"]

    async def test_list_by_restaurant_requires_credential(self, client):
        response = await client.get(f"/donations/restaurant/{RESTO}")
        assert response.status_code == 401

    async def test_admin_listing(self, client, restaurants, seed_user):
        await seed_user("admin@example.com", UserRole.ADMIN)
        await _create(client)

        assert (await client.get("/donations/admin", headers=bearer(RESTO))).status_code == 403
        response = await client.get("/donations/admin", headers=bearer("admin@example.com"))
        assert len(response.json()) == 1


class TestUpdateDeleteDonation:
    """PUT and DELETE /donations/{id}."""

    async def test_owner_updates_fields(self, client, restaurants):
        donation = await _create(client)
        response = await client.put(
            f"/donations/{donation['id']}",
            json={"title": "Fresh bread", "quantity": "3 kg"},
            headers=bearer(RESTO),
        )
        assert response.status_code == 200
        updated = response.json()["donation"]
        assert updated["title"] == "Fresh bread"
        assert updated["quantity"] == "3 kg"
        assert updated["foodType"] == "Bakery"

    async def test_status_cannot_be_set_by_update(self, client, restaurants):
        donation = await _create(client)
        await client.put(
            f"/donations/{donation['id']}", json={"status": "Picked Up"}, headers=bearer(RESTO)
        )
        response = await client.get(f"/donations/{donation['id']}")
        assert response.json()["donation"]["status"] == "Pending"

    async def test_null_required_field_is_invalid(self, client, restaurants):
        donation = await _create(client)
        response = await client.put(
            f"/donations/{donation['id']}", json={"title": None}, headers=bearer(RESTO)
        )
        assert response.status_code == 400

    async def test_non_owner_cannot_update(self, client, restaurants):
        donation = await _create(client)
        response = await client.put(
            f"/donations/{donation['id']}", json={"title": "Mine now"}, headers=bearer(OTHER_RESTO)
        )
        assert response.status_code == 403

    async def test_owner_deletes(self, client, restaurants):
        donation = await _create(client)
        response = await client.delete(f"/donations/{donation['id']}", headers=bearer(RESTO))
        assert response.status_code == 200
        assert (await client.get(f"/donations/{donation['id']}")).status_code == 404

    async def test_non_owner_cannot_delete(self, client, restaurants):
        donation = await _create(client)
        response = await client.delete(f"/donations/{donation['id']}", headers=bearer(OTHER_RESTO))
        assert response.status_code == 403

    async def test_update_unknown_is_404(self, client, restaurants):
        response = await client.put("/donations/nope", json={"title": "x"}, headers=bearer(RESTO))
        assert response.status_code == 404


class TestDonationDetailsAndReviews:
    """GET /donations/{id} and POST /reviews."""

    async def test_unknown_donation_is_404(self, client):
        response = await client.get("/donations/nope")
        assert response.status_code == 404
        assert response.json() == {"message": "Donation not found"}

    async def test_reviews_are_attached(self, client, restaurants):
        donation = await _create(client)
        for rating in ("5", 3):
            response = await client.post(
                "/reviews",
                json={
                    "donationId": donation["id"],
                    "reviewerName": "Ann",
                    "description": "Great",
                    "rating": rating,
                },
            )
            assert response.status_code == 201
            assert "insertedId" in response.json()

        body = (await client.get(f"/donations/{donation['id']}")).json()
        assert body["donation"]["id"] == donation["id"]
        assert [review["rating"] for review in body["reviews"]] == [5.0, 3.0]
        assert body["reviews"][0]["reviewerName"] == "Ann"

    async def test_review_requires_all_fields(self, client):
        response = await client.post("/reviews", json={"donationId": "d1", "reviewerName": "Ann"})
        assert response.status_code == 400
        assert response.json() == {"message": "All fields are required"}

    async def test_review_rating_must_be_numeric(self, client):
        response = await client.post(
            "/reviews",
            json={"donationId": "d1", "reviewerName": "Ann", "description": "ok", "rating": "five"},
        )
        assert response.status_code == 400
