"""
Marketplace Backend — HTTP API Tests
=======================================

What:  End-to-end tests through the FastAPI app (routes, identity header,
       exception handlers, response shapes).
How:   HTTPX AsyncClient over ASGITransport; the session dependency is
       overridden to use the seeded in-memory database.

What we test:
    ✅ Every endpoint's happy path, with camelCase JSON keys
    ✅ 401 without a usable profile_id header
    ✅ Domain errors map to 400 / 403 / 404 with an error body
    ✅ Malformed input is a 400 validation_error, not 422
    ✅ Unexpected failures become a generic 500
"""

from unittest.mock import AsyncMock, patch

import pytest

from marketplace.repositories.job_repository import JobRepository


def as_profile(profile_id) -> dict:
    return {"profile_id": str(profile_id)}


class TestContractsApi:

    @pytest.mark.asyncio
    async def test_get_own_contract(self, test_client, seed):
        response = await test_client.get("/contracts/1", headers=as_profile(seed.client))

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == 1
        assert body["clientId"] == 1
        assert body["contractorId"] == 3
        assert body["status"] == "in_progress"
        assert "createdAt" in body

    @pytest.mark.asyncio
    async def test_get_foreign_contract(self, test_client, seed):
        response = await test_client.get("/contracts/1", headers=as_profile(seed.poor_client))

        assert response.status_code == 403
        assert response.json()["error"] == "forbidden"

    @pytest.mark.asyncio
    async def test_get_missing_contract(self, test_client, seed):
        response = await test_client.get("/contracts/9999", headers=as_profile(seed.client))
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_non_integer_id(self, test_client, seed):
        response = await test_client.get("/contracts/abc", headers=as_profile(seed.client))

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_list_contracts(self, test_client, seed):
        response = await test_client.get("/contracts", headers=as_profile(seed.contractor))

        assert response.status_code == 200
        assert [c["id"] for c in response.json()] == [1, 4]

    @pytest.mark.asyncio
    async def test_list_only_terminated(self, test_client, seed):
        response = await test_client.get("/contracts", headers=as_profile(seed.idle_client))

        assert response.status_code == 404
        assert response.json()["message"] == "No active contracts found"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("headers", [{}, {"profile_id": "abc"}, {"profile_id": "0"}])
    async def test_missing_identity(self, test_client, seed, headers):
        response = await test_client.get("/contracts", headers=headers)

        assert response.status_code == 401
        assert response.json()["error"] == "unauthenticated"


class TestJobsApi:

    @pytest.mark.asyncio
    async def test_list_unpaid(self, test_client, seed):
        response = await test_client.get("/jobs/unpaid", headers=as_profile(seed.client))

        assert response.status_code == 200
        jobs = response.json()
        assert [j["id"] for j in jobs] == [1, 2]
        assert jobs[0]["price"] == 200
        assert jobs[0]["contractId"] == 1
        assert jobs[0]["paymentDate"] is None

    @pytest.mark.asyncio
    async def test_list_unpaid_none(self, test_client, seed):
        response = await test_client.get("/jobs/unpaid", headers=as_profile(seed.idle_client))
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_pay_job(self, test_client, seed, fetch_profile):
        response = await test_client.post("/jobs/1/pay", headers=as_profile(seed.client))

        assert response.status_code == 200
        assert response.json() == {"message": "Payment successful"}
        assert (await fetch_profile(seed.client)).balance == 800
        assert (await fetch_profile(seed.contractor)).balance == 700

    @pytest.mark.asyncio
    async def test_pay_twice(self, test_client, seed):
        await test_client.post("/jobs/1/pay", headers=as_profile(seed.client))
        response = await test_client.post("/jobs/1/pay", headers=as_profile(seed.client))

        assert response.status_code == 400
        assert response.json()["message"] == "Job already paid for"

    @pytest.mark.asyncio
    async def test_pay_as_contractor(self, test_client, seed):
        response = await test_client.post("/jobs/1/pay", headers=as_profile(seed.contractor))
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_pay_missing_job(self, test_client, seed):
        response = await test_client.post("/jobs/9999/pay", headers=as_profile(seed.client))
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_pay_insufficient_funds(self, test_client, seed):
        response = await test_client.post("/jobs/4/pay", headers=as_profile(seed.poor_client))

        assert response.status_code == 400
        assert response.json()["error"] == "insufficient_funds"

    @pytest.mark.asyncio
    async def test_pay_without_identity(self, test_client, seed):
        response = await test_client.post("/jobs/1/pay")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_internal_failure_is_generic_500(self, test_client, seed):
        with patch.object(
            JobRepository, "get_for_update", AsyncMock(side_effect=RuntimeError("db gone"))
        ):
            response = await test_client.post("/jobs/1/pay", headers=as_profile(seed.client))

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "server_error"
        assert "db gone" not in body["message"]
        assert "details" not in body


class TestBalancesApi:

    @pytest.mark.asyncio
    async def test_deposit(self, test_client, seed):
        response = await test_client.post(
            "/balances/deposit/2", json={"amount": 100}, headers=as_profile(seed.poor_client)
        )

        assert response.status_code == 200
        assert response.json() == {"message": "Deposit successful", "balance": 150.0}

    @pytest.mark.asyncio
    async def test_deposit_over_limit(self, test_client, seed):
        response = await test_client.post(
            "/balances/deposit/2", json={"amount": 150}, headers=as_profile(seed.poor_client)
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "limit_exceeded"
        assert "Max allowed: 100.00" in body["message"]
        assert body["details"]["max_allowed"] == 100.0

    @pytest.mark.asyncio
    async def test_deposit_for_someone_else(self, test_client, seed):
        response = await test_client.post(
            "/balances/deposit/2", json={"amount": 10}, headers=as_profile(seed.client)
        )
        assert response.status_code == 403

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [None, {}, {"amount": 0}, {"amount": -20}])
    async def test_invalid_amount(self, test_client, seed, payload):
        kwargs = {"json": payload} if payload is not None else {}
        response = await test_client.post(
            "/balances/deposit/2", headers=as_profile(seed.poor_client), **kwargs
        )

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_argument"

    @pytest.mark.asyncio
    async def test_non_numeric_amount(self, test_client, seed):
        response = await test_client.post(
            "/balances/deposit/2", json={"amount": "lots"}, headers=as_profile(seed.poor_client)
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_unknown_client(self, test_client, seed):
        response = await test_client.post(
            "/balances/deposit/9999", json={"amount": 1}, headers=as_profile(9999)
        )
        assert response.status_code == 404


class TestAdminApi:

    @pytest.mark.asyncio
    async def test_best_profession(self, test_client, seed):
        response = await test_client.get(
            "/admin/best-profession", params={"start": "2024-08-01", "end": "2024-08-15"}
        )

        assert response.status_code == 200
        assert response.json() == {"profession": "Musician", "totalEarnings": 300.0}

    @pytest.mark.asyncio
    async def test_best_profession_empty_range(self, test_client, seed):
        response = await test_client.get(
            "/admin/best-profession", params={"start": "2030-01-01", "end": "2030-01-31"}
        )
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_best_clients(self, test_client, seed):
        response = await test_client.get(
            "/admin/best-clients", params={"start": "2024-08-01", "end": "2024-08-15", "limit": 1}
        )

        assert response.status_code == 200
        assert response.json() == [{"id": 2, "fullName": "Mr Robot", "paid": 450.0}]

    @pytest.mark.asyncio
    async def test_open_ended_range(self, test_client, seed):
        response = await test_client.get(
            "/admin/best-clients", params={"start": "2024-01-01", "end": "9999-12-31"}
        )

        assert response.status_code == 200
        assert [c["id"] for c in response.json()] == [2, 1]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/admin/best-profession", "/admin/best-clients"])
    async def test_missing_dates(self, test_client, seed, path):
        response = await test_client.get(path, params={"start": "2024-08-01"})

        assert response.status_code == 400
        assert response.json()["message"] == "start and end date are required"

    @pytest.mark.asyncio
    async def test_non_integer_limit(self, test_client, seed):
        response = await test_client.get(
            "/admin/best-clients", params={"start": "2024-08-01", "end": "2024-08-15", "limit": "x"}
        )
        assert response.status_code == 400
