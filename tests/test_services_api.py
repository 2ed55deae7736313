"""
Tests for the service catalog endpoints.
"""

import json

from tests.support import service_payload, tier_payload


class TestCreateService:
    """Tests for POST /api/services."""

    def test_create(self, client, freelancer):
        user, headers = freelancer
        response = client.post("/api/services", json=service_payload(), headers=headers)

        assert response.status_code == 201
        service = response.json()["service"]
        assert service["ownerId"] == user["id"]
        assert service["owner"] == {
            "id": user["id"],
            "name": "Fran Lancer",
            "email": "freelancer@example.com",
            "role": "freelancer",
        }
        assert service["isActive"] is True
        assert [t["name"] for t in service["tiers"]] == ["Basic", "Standard"]
        assert service["tiers"][0]["basePrice"] == 199
        assert service["tiers"][0]["features"] == ["Responsive layout", "Source files"]

    def test_agency_can_create(self, client, register):
        _, headers = register("agency@example.com", role="agency")
        response = client.post("/api/services", json=service_payload(), headers=headers)
        assert response.status_code == 201

    def test_client_forbidden(self, client, client_user):
        _, headers = client_user
        response = client.post("/api/services", json=service_payload(), headers=headers)

        assert response.status_code == 403
        assert response.json() == {"message": "Access denied. Provider privileges required."}

    def test_anonymous_unauthenticated(self, client):
        assert client.post("/api/services", json=service_payload()).status_code == 401

    def test_zero_tiers_rejected(self, client, freelancer):
        _, headers = freelancer
        response = client.post("/api/services", json=service_payload(tiers=[]), headers=headers)

        assert response.status_code == 400
        assert response.json() == {"message": "Please provide at least one tier"}
        assert client.get("/api/services").json()["count"] == 0

    def test_duplicate_tier_names(self, client, freelancer):
        _, headers = freelancer
        payload = service_payload(tiers=[tier_payload("Basic"), tier_payload("Basic")])
        response = client.post("/api/services", json=payload, headers=headers)
        assert response.status_code == 400

    def test_unknown_tier_name(self, client, freelancer):
        _, headers = freelancer
        payload = service_payload(tiers=[tier_payload("Gold")])
        response = client.post("/api/services", json=payload, headers=headers)
        assert response.status_code == 400

    def test_negative_price(self, client, freelancer):
        _, headers = freelancer
        payload = service_payload(tiers=[tier_payload(base_price=-5)])
        response = client.post("/api/services", json=payload, headers=headers)
        assert response.status_code == 400

    def test_infinite_price(self, client, freelancer):
        _, headers = freelancer
        payload = service_payload(tiers=[tier_payload(base_price=float("inf"))])
        response = client.post(
            "/api/services",
            content=json.dumps(payload),
            headers={**headers, "Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"message": "Basic: base price must be a finite number"}
        assert client.get("/api/services").json()["count"] == 0

    def test_zero_delivery_days(self, client, freelancer):
        _, headers = freelancer
        payload = service_payload(tiers=[tier_payload(delivery_time_days=0)])
        response = client.post("/api/services", json=payload, headers=headers)
        assert response.status_code == 400

    def test_name_too_long(self, client, freelancer):
        _, headers = freelancer
        response = client.post("/api/services", json=service_payload(name="x" * 101), headers=headers)
        assert response.status_code == 400

    def test_description_too_long(self, client, freelancer):
        _, headers = freelancer
        payload = service_payload(description="x" * 1001)
        response = client.post("/api/services", json=payload, headers=headers)
        assert response.status_code == 400


class TestReadServices:
    """Public listing and lookup."""

    def test_list(self, client, service):
        body = client.get("/api/services").json()

        assert body["count"] == 1
        assert body["services"][0]["id"] == service["id"]
        assert body["services"][0]["owner"]["name"] == "Fran Lancer"

    def test_category_filter(self, client, service, freelancer):
        _, headers = freelancer
        client.post("/api/services", json=service_payload(category="Copywriting"), headers=headers)

        assert client.get("/api/services", params={"category": "Copywriting"}).json()["count"] == 1
        assert client.get("/api/services", params={"category": "Web Design"}).json()["count"] == 1
        assert client.get("/api/services", params={"category": "Video"}).json()["count"] == 0

    def test_get(self, client, service):
        response = client.get(f"/api/services/{service['id']}")

        assert response.status_code == 200
        assert response.json()["service"]["name"] == "Landing Page Design"
        assert response.json()["service"]["owner"]["role"] == "freelancer"

    def test_unknown(self, client):
        response = client.get("/api/services/missing")
        assert response.status_code == 404
        assert response.json() == {"message": "Service not found"}

    def test_my_services(self, client, service, other_freelancer, freelancer):
        _, other_headers = other_freelancer
        client.post("/api/services", json=service_payload(name="Logo"), headers=other_headers)

        _, headers = freelancer
        body = client.get("/api/services/user/me", headers=headers).json()

        assert body["count"] == 1
        assert body["services"][0]["id"] == service["id"]

    def test_my_services_requires_auth(self, client):
        assert client.get("/api/services/user/me").status_code == 401


class TestUpdateService:
    """Tests for PUT /api/services/{id}."""

    def test_owner_updates_fields(self, client, service, freelancer):
        _, headers = freelancer
        response = client.put(
            f"/api/services/{service['id']}",
            json={"name": "Landing Page Pro", "isActive": False},
            headers=headers,
        )

        assert response.status_code == 200
        updated = response.json()["service"]
        assert updated["name"] == "Landing Page Pro"
        assert updated["isActive"] is False
        assert len(updated["tiers"]) == 2

    def test_tiers_are_replaced(self, client, service, freelancer):
        _, headers = freelancer
        response = client.put(
            f"/api/services/{service['id']}",
            json={"tiers": [tier_payload("Basic", 249, 4), tier_payload("Premium", 999, 14)]},
            headers=headers,
        )

        assert response.status_code == 200
        tiers = response.json()["service"]["tiers"]
        assert [(t["name"], t["basePrice"]) for t in tiers] == [("Basic", 249), ("Premium", 999)]

        fetched = client.get(f"/api/services/{service['id']}").json()["service"]
        assert [t["name"] for t in fetched["tiers"]] == ["Basic", "Premium"]

    def test_empty_tiers_rejected(self, client, service, freelancer):
        _, headers = freelancer
        response = client.put(f"/api/services/{service['id']}", json={"tiers": []}, headers=headers)
        assert response.status_code == 400

    def test_other_provider_forbidden(self, client, service, other_freelancer):
        _, headers = other_freelancer
        response = client.put(f"/api/services/{service['id']}", json={"name": "Mine"}, headers=headers)
        assert response.status_code == 403

    def test_admin_can_update(self, client, service, admin_headers):
        response = client.put(
            f"/api/services/{service['id']}",
            json={"category": "Design"},
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert response.json()["service"]["category"] == "Design"


class TestDeleteService:
    """Tests for DELETE /api/services/{id}."""

    def test_owner_deletes(self, client, service, freelancer):
        _, headers = freelancer
        response = client.delete(f"/api/services/{service['id']}", headers=headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Service deleted successfully"}
        assert client.get(f"/api/services/{service['id']}").status_code == 404

    def test_other_provider_forbidden(self, client, service, other_freelancer):
        _, headers = other_freelancer
        assert client.delete(f"/api/services/{service['id']}", headers=headers).status_code == 403

    def test_quotes_keep_their_snapshot(self, client, service, freelancer, make_quote):
        _, headers = freelancer
        quote = make_quote().json()["quote"]

        client.delete(f"/api/services/{service['id']}", headers=headers)

        fetched = client.get(f"/api/quotes/{quote['id']}", headers=headers).json()["quote"]
        assert fetched["serviceName"] == "Landing Page Design"
        assert fetched["adjustedPrice"] == 477.6
