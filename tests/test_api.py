"""Tests for the HTTP surface and its response envelopes."""

import pytest
from fastapi.testclient import TestClient

from app.api import deps
from app.core.security import create_access_token
from app.main import create_app
from app.models.base.enums import UserRole


@pytest.fixture
def client(db, broadcaster):
    app = create_app()

    def override_get_db():
        yield db

    app.dependency_overrides[deps.get_db] = override_get_db
    app.dependency_overrides[deps.get_event_broadcaster] = lambda: broadcaster
    return TestClient(app)


def auth(subject="owner-1", role=UserRole.OWNER):
    return {"Authorization": f"Bearer {create_access_token(subject, role)}"}


class TestAuthentication:
    def test_missing_token(self, client):
        response = client.get("/api/v1/properties")

        assert response.status_code == 401
        body = response.json()
        assert body["success"] is False
        assert body["error"]["code"] == "AUTHENTICATION_FAILED"

    def test_garbage_token(self, client):
        response = client.get("/api/v1/properties", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "TOKEN_INVALID"

    def test_health_needs_no_token(self, client):
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        assert "beds" in response.json()["resources"]


class TestSuccessEnvelope:
    def test_create_and_list_property(self, client):
        created = client.post(
            "/api/v1/properties",
            json={"name": "Sunrise PG", "city": "Pune", "pincode": "411001"},
            headers=auth(),
        )

        assert created.status_code == 201
        body = created.json()
        assert body["success"] is True
        assert body["data"]["name"] == "Sunrise PG"
        assert body["data"]["ownerId"] == "owner-1"

        listed = client.get("/api/v1/properties", headers=auth()).json()
        assert listed["meta"] == {"count": 1}

    def test_request_id_echoed(self, client):
        response = client.get("/api/v1/properties", headers={**auth(), "X-Request-ID": "req-42"})

        assert response.headers["X-Request-ID"] == "req-42"
        assert "X-Process-Time" in response.headers

    def test_vacate_warnings_lifted(self, client, build, building):
        build.payment(building["tenant"]["id"], 2500)

        response = client.put(
            f"/api/v1/tenants/{building['tenant']['id']}/vacate",
            json={"leavingDate": "2024-06-15"},
            headers=auth(),
        )

        assert response.status_code == 200
        body = response.json()
        assert len(body["warnings"]) == 1
        assert body["data"]["pendingPayments"]["count"] == 1


class TestErrorEnvelope:
    def test_not_found(self, client):
        response = client.get("/api/v1/beds/missing", headers=auth())

        assert response.status_code == 404
        error = response.json()["error"]
        assert error["code"] == "NOT_FOUND"
        assert error["resourceId"] == "missing"

    def test_other_owner_gets_not_found(self, client, building):
        response = client.get(f"/api/v1/properties/{building['property']['id']}", headers=auth("owner-2"))

        assert response.status_code == 404

    def test_business_rule_is_bad_request(self, client, building):
        response = client.post(
            "/api/v1/beds",
            json={"roomId": building["room"]["id"], "bedNumber": "B9", "rent": 500},
            headers=auth(),
        )

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "INVALID_RENT"
        assert error["field"] == "rent"

    def test_schema_violation(self, client):
        response = client.post("/api/v1/properties", json={"pincode": "12"}, headers=auth())

        assert response.status_code == 422
        body = response.json()
        assert body["error"]["code"] == "VALIDATION_ERROR"
        assert "body.name" in body["error"]["fieldErrors"]

    def test_null_rent_rejected_before_reaching_database(self, client, building):
        bed_url = f"/api/v1/beds/{building['b2']['id']}"

        response = client.put(bed_url, json={"rent": None}, headers=auth())

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"
        assert client.get(bed_url, headers=auth()).json()["data"]["rent"] == 5000.0


class TestDeleteFlow:
    def test_blocked_then_relocated(self, client, building):
        url = f"/api/v1/rooms/{building['room']['id']}"

        blocked = client.delete(url, headers=auth())

        assert blocked.status_code == 400
        body = blocked.json()
        assert body["error"]["code"] == "REQUIRES_RELOCATION_DECISION"
        assert body["requiresAction"] == "RELOCATE_TENANTS"
        relocate = body["actions"][0]
        assert relocate["action"] == "RELOCATE"

        done = client.request("DELETE", url, json=relocate["payload"], headers=auth())

        assert done.status_code == 200
        assert done.json()["data"]["relocated"][0]["toBedId"] == building["b3"]["id"]

    def test_force_delete_bed(self, client, building):
        response = client.request(
            "DELETE",
            f"/api/v1/beds/{building['b1']['id']}",
            json={"forceDelete": True},
            headers=auth(),
        )

        assert response.status_code == 200
        displaced = response.json()["data"]["displacedTenants"]
        assert displaced[0]["tenantId"] == "T001"

    def test_admin_token_reaches_any_property(self, client, building):
        response = client.get(
            f"/api/v1/dashboard/properties/{building['property']['id']}/occupancy",
            headers=auth("admin-1", UserRole.ADMIN),
        )

        assert response.status_code == 200
        assert response.json()["data"]["occupiedBeds"] == 1
