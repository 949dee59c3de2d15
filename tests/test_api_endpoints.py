"""API endpoint tests using FastAPI TestClient."""

import io

import pytest
from fastapi.testclient import TestClient
from openpyxl import load_workbook

from tallyboard.dependencies import get_clock, get_history_service, get_tally_service
from tallyboard.main import app
from tallyboard.services.history_service import HistoryService


@pytest.fixture
def client(tally_service, store, clock):
    """Test client wired to the in-memory store and frozen clock."""
    app.dependency_overrides[get_tally_service] = lambda: tally_service
    app.dependency_overrides[get_history_service] = lambda: HistoryService(store, clock)
    app.dependency_overrides[get_clock] = lambda: clock

    yield TestClient(app)

    app.dependency_overrides.clear()


def _counts(response):
    return {entry["name"]: entry["count"] for entry in response.json()["tallies"]}


class TestHealth:
    def test_health_check(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["active_date"] == "2024-01-15"
        assert data["midnight_watcher"] is False


class TestTallyEndpoints:
    def test_get_board(self, client):
        response = client.get("/api/v1/tallies")

        assert response.status_code == 200
        data = response.json()
        assert data["date"] == "2024-01-15"
        assert data["timezone"] == "America/Vancouver"
        assert data["state"] == "loaded"
        assert len(data["tallies"]) == 5
        assert all(entry["builtin"] for entry in data["tallies"])

    def test_increment_and_decrement(self, client):
        client.post("/api/v1/tallies/increment", json={"name": "DROP-OFFS"})
        client.post("/api/v1/tallies/increment", json={"name": "drop-offs"})
        response = client.post("/api/v1/tallies/decrement", json={"name": "DROP-OFFS"})

        assert response.status_code == 200
        assert _counts(response)["DROP-OFFS"] == 1

    def test_increment_unknown(self, client):
        response = client.post("/api/v1/tallies/increment", json={"name": "NOPE"})

        assert response.status_code == 404
        assert "NOPE" in response.json()["detail"]

    def test_empty_name_rejected(self, client):
        response = client.post("/api/v1/tallies/increment", json={"name": ""})
        assert response.status_code == 422

    def test_add_custom(self, client):
        response = client.post("/api/v1/tallies", json={"name": "vip requests"})

        assert response.status_code == 201
        data = response.json()
        assert data["custom_tally_types"] == ["VIP REQUESTS"]
        assert data["tally_order"][-1] == "VIP REQUESTS"
        assert data["message"] == "New tally type added successfully."

    def test_add_duplicate(self, client):
        client.post("/api/v1/tallies", json={"name": "VIP REQUESTS"})
        response = client.post("/api/v1/tallies", json={"name": " vip requests "})

        assert response.status_code == 409

    def test_add_blank_name(self, client):
        response = client.post("/api/v1/tallies", json={"name": "   "})
        assert response.status_code == 400

    def test_remove_custom(self, client):
        client.post("/api/v1/tallies", json={"name": "VIP REQUESTS"})
        response = client.delete("/api/v1/tallies/VIP%20REQUESTS")

        assert response.status_code == 200
        assert "VIP REQUESTS" not in _counts(response)

    def test_remove_builtin_forbidden(self, client):
        response = client.delete("/api/v1/tallies/DROP-OFFS")
        assert response.status_code == 403

    def test_clear(self, client):
        client.post("/api/v1/tallies/increment", json={"name": "DEFERRALS"})

        rejected = client.post("/api/v1/tallies/clear", json={"confirmation": "ok"})
        assert rejected.status_code == 400
        assert "confirm" in rejected.json()["detail"]

        response = client.post("/api/v1/tallies/clear", json={"confirmation": "confirm"})
        assert response.status_code == 200
        assert set(_counts(response).values()) == {0}

    def test_order(self, client):
        response = client.put(
            "/api/v1/tallies/order",
            json={"source": "DEFERRALS", "target": "PRODUCT SERVICE REQUESTS"},
        )

        assert response.status_code == 200
        assert response.json()["tally_order"][0] == "DEFERRALS"
        assert client.get("/api/v1/tallies/order").json()["tally_order"][0] == "DEFERRALS"
        assert client.get("/api/v1/tallies").json()["tallies"][0]["name"] == "DEFERRALS"

    def test_check_midnight(self, client, frozen_now):
        quiet = client.post("/api/v1/tallies/check-midnight")
        assert quiet.json()["message"] is None

        frozen_now.set_local(2024, 1, 16, 0, 0, 15)
        response = client.post("/api/v1/tallies/check-midnight")

        data = response.json()
        assert data["date"] == "2024-01-16"
        assert data["state"] == "rolled_over"
        assert data["message"] == "Tallies have been automatically reset for the new day."

    def test_store_unavailable(self, client, tally_service, flaky_store):
        tally_service.store = flaky_store
        flaky_store.fail_writes_to.add("tallies")

        response = client.post("/api/v1/tallies/increment", json={"name": "DROP-OFFS"})

        assert response.status_code == 503


class TestHistoryEndpoints:
    def test_list_history(self, client, frozen_now):
        client.post("/api/v1/tallies/increment", json={"name": "DROP-OFFS"})
        frozen_now.set_local(2024, 1, 16, 8, 0, 0)
        client.post("/api/v1/tallies/increment", json={"name": "DEFERRALS"})

        response = client.get("/api/v1/history")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert [item["id"] for item in data["items"]] == ["2024-01-16", "2024-01-15"]
        assert data["items"][1]["tallies"]["DROP-OFFS"] == 1

    def test_export(self, client):
        client.post("/api/v1/tallies/increment", json={"name": "DROP-OFFS"})

        response = client.get("/api/v1/history/export")

        assert response.status_code == 200
        assert "ReCARE_Tally_History_01-15-2024.xlsx" in response.headers["content-disposition"]
        worksheet = load_workbook(io.BytesIO(response.content))["Historical Data"]
        header = [cell.value for cell in worksheet[1]]
        assert header[:2] == ["Day of Week", "Date"]
        assert worksheet.cell(row=2, column=header.index("DROP-OFFS") + 1).value == 1


class TestSystemEndpoints:
    def test_clock(self, client):
        response = client.get("/api/v1/system/clock")

        assert response.status_code == 200
        data = response.json()
        assert data["date_key"] == "2024-01-15"
        assert data["is_boundary_minute"] is False
        assert data["active_date_key"] == "2024-01-15"

    def test_watcher_disabled(self, client):
        response = client.get("/api/v1/system/watcher")
        assert response.status_code == 404
