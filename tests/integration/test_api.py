"""
Integration Tests for FastAPI Backend

Tests for API endpoints: health, policies, scheduling, classification.
Uses async httpx for ASGI app testing.
"""
import pytest
import httpx
from typing import Any, Dict, List

from vitalsched.main import app


@pytest.fixture
async def async_client():
    """Create async test client."""
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test"
    ) as client:
        yield client


@pytest.fixture
def patient_rows() -> List[Dict[str, Any]]:
    return [
        {"patient_id": "A", "patient_name": "Ann", "entry_count": 4, "avg_hr": 80,
         "avg_sys": 120, "avg_dia": 80, "avg_temp": 36.7, "avg_spo2": 98,
         "status": "NORMAL", "first_timestamp": "2025-01-01T09:00:00"},
        {"patient_id": "B", "patient_name": "Ben", "entry_count": 3, "avg_hr": 140,
         "avg_sys": 120, "avg_dia": 80, "avg_temp": 37.2, "avg_spo2": 97,
         "status": "WARNING", "first_timestamp": "2025-01-01T08:00:00"},
    ]


@pytest.mark.asyncio
class TestHealthEndpoints:
    """Tests for health check endpoints."""

    async def test_root_endpoint(self, async_client):
        response = await async_client.get("/")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data

    async def test_health_endpoint(self, async_client):
        response = await async_client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    async def test_list_policies(self, async_client):
        response = await async_client.get("/api/v1/policies")
        assert response.status_code == 200

        policies = {p["name"]: p for p in response.json()["policies"]}
        assert set(policies) == {"fcfs", "sjf", "priority", "round_robin"}
        assert policies["round_robin"]["quantum"] == 2
        assert policies["round_robin"]["preemptive"] is True


@pytest.mark.asyncio
class TestScheduleEndpoint:
    """Tests for JSON scheduling."""

    async def test_all_policies(self, async_client, patient_rows):
        response = await async_client.post("/api/v1/schedule", json={"patients": patient_rows})
        assert response.status_code == 200

        data = response.json()
        assert [run["policy"] for run in data["runs"]] == ["fcfs", "sjf", "priority", "round_robin"]
        assert data["patient_count"] == 2
        assert data["diagnostics"] == []

        rr = {r["patient_id"]: r for r in data["runs"][3]["results"]}
        assert rr["A"]["completion_time"] == 6
        assert rr["A"]["waiting_time"] == 2
        assert rr["B"]["completion_time"] == 7
        assert rr["B"]["waiting_time"] == 4

    async def test_priority_run(self, async_client, patient_rows):
        response = await async_client.post(
            "/api/v1/schedule", json={"patients": patient_rows, "policies": ["priority"]}
        )
        results = response.json()["runs"][0]["results"]

        assert [r["patient_id"] for r in results] == ["B", "A"]
        assert [r["priority_class"] for r in results] == [1, 3]

    async def test_invalid_rows_reported(self, async_client, patient_rows):
        patient_rows[0]["entry_count"] = 0
        patient_rows[1]["status"] = "UNKNOWN"

        response = await async_client.post("/api/v1/schedule", json={"patients": patient_rows})
        assert response.status_code == 200

        data = response.json()
        assert data["patient_count"] == 0
        assert {d["kind"] for d in data["diagnostics"]} == {"MALFORMED_ROW", "UNKNOWN_STATUS"}
        assert all(run["results"] == [] for run in data["runs"])

    async def test_empty_input(self, async_client):
        response = await async_client.post("/api/v1/schedule", json={"patients": []})
        assert response.status_code == 200

        data = response.json()
        assert len(data["runs"]) == 4
        assert all(s["patients"] == 0 for s in data["summaries"])

    async def test_empty_policy_selection(self, async_client, patient_rows):
        response = await async_client.post(
            "/api/v1/schedule", json={"patients": patient_rows, "policies": []}
        )
        assert response.status_code == 200

        data = response.json()
        assert data["runs"] == []
        assert data["summaries"] == []
        assert data["patient_count"] == 2

    async def test_unknown_policy(self, async_client, patient_rows):
        response = await async_client.post(
            "/api/v1/schedule", json={"patients": patient_rows, "policies": ["lottery"]}
        )
        assert response.status_code == 400
        assert response.json()["error"] == "UNKNOWN_POLICY"

    async def test_parallel_matches_sequential(self, async_client, patient_rows):
        seq = await async_client.post("/api/v1/schedule", json={"patients": patient_rows})
        par = await async_client.post(
            "/api/v1/schedule", json={"patients": patient_rows, "parallel": True}
        )
        assert seq.json()["runs"] == par.json()["runs"]


@pytest.mark.asyncio
class TestCsvScheduleEndpoint:
    """Tests for CSV scheduling."""

    async def test_csv_with_bad_rows(self, async_client, summary_csv_text):
        response = await async_client.post(
            "/api/v1/schedule/csv", json={"csv": summary_csv_text, "policies": ["sjf"]}
        )
        assert response.status_code == 200

        data = response.json()
        assert [r["patient_id"] for r in data["runs"][0]["results"]] == ["P001", "P002"]
        assert len(data["diagnostics"]) == 3
        assert data["patient_count"] == 2

    async def test_csv_missing_columns(self, async_client):
        response = await async_client.post("/api/v1/schedule/csv", json={"csv": "patient_id\nA\n"})
        assert response.status_code == 400
        assert response.json()["error"] == "INGESTION_ERROR"


@pytest.mark.asyncio
class TestClassifyEndpoint:
    """Tests for priority classification."""

    async def test_classify_escalation(self, async_client):
        response = await async_client.post("/api/v1/classify", json={
            "status": "WARNING", "avg_hr": 140, "avg_sys": 120, "avg_dia": 80, "avg_spo2": 98,
        })
        assert response.status_code == 200
        assert response.json() == {"priority_class": 1, "label": "CRITICAL"}

    async def test_classify_normal(self, async_client):
        response = await async_client.post("/api/v1/classify", json={
            "status": "NORMAL", "avg_hr": 200, "avg_sys": 200, "avg_dia": 120, "avg_spo2": 80,
        })
        assert response.json()["priority_class"] == 3


@pytest.mark.asyncio
class TestAPIDocumentation:
    """Tests for API documentation availability."""

    async def test_docs_endpoint(self, async_client):
        response = await async_client.get("/docs")
        assert response.status_code == 200


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
