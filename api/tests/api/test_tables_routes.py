"""API tests for the /api/tables endpoints."""

from unittest.mock import patch

import pytest
from httpx import ASGITransport, AsyncClient

from models import TableEntity

pytestmark = pytest.mark.integration


async def _create(client: AsyncClient, **payload) -> dict:
    response = await client.post("/api/tables", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateTable:
    async def test_returns_201_with_assigned_id(self, client):
        response = await client.post(
            "/api/tables", json={"name": "Orders", "description": "All orders"}
        )

        assert response.status_code == 201
        data = response.json()
        assert isinstance(data["id"], int)
        assert data["name"] == "Orders"
        assert data["description"] == "All orders"
        assert data["created_at"] is not None

    async def test_strips_name(self, client):
        data = await _create(client, name="  Orders  ")
        assert data["name"] == "Orders"

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"name": ""},
            {"name": "x" * 256},
            {"name": "Orders", "id": 5},
            {"name": "Orders", "description": "d" * 4097},
        ],
    )
    async def test_invalid_payload_returns_422(self, client, payload):
        response = await client.post("/api/tables", json=payload)

        assert response.status_code == 422
        assert isinstance(response.json()["detail"], list)


class TestGetTable:
    async def test_returns_created_table(self, client):
        created = await _create(client, name="Orders")

        response = await client.get(f"/api/tables/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created

    async def test_missing_returns_404(self, client):
        response = await client.get("/api/tables/999")

        assert response.status_code == 404
        assert response.json() == {"detail": "Table with id 999 not found"}

    async def test_non_integer_id_returns_422(self, client):
        response = await client.get("/api/tables/abc")
        assert response.status_code == 422


    async def test_id_beyond_integer_range_returns_404(self, client):
        response = await client.get(f"/api/tables/{2**70}")

        assert response.status_code == 404
        assert response.json() == {"detail": f"Table with id {2**70} not found"}


class TestUpdateTable:
    async def test_updates_supplied_fields_only(self, client):
        created = await _create(client, name="Orders", description="old")

        response = await client.put(
            f"/api/tables/{created['id']}", json={"description": "new"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == created["id"]
        assert data["name"] == "Orders"
        assert data["description"] == "new"

    async def test_update_is_persisted(self, client):
        created = await _create(client, name="Orders")

        await client.put(f"/api/tables/{created['id']}", json={"name": "Invoices"})
        response = await client.get(f"/api/tables/{created['id']}")

        assert response.json()["name"] == "Invoices"

    async def test_null_name_returns_422(self, client):
        created = await _create(client, name="Orders")

        response = await client.put(
            f"/api/tables/{created['id']}", json={"name": None}
        )

        assert response.status_code == 422

    async def test_missing_returns_404(self, client):
        response = await client.put("/api/tables/999", json={"name": "X"})
        assert response.status_code == 404


class TestDeleteTable:
    async def test_returns_id_then_404(self, client):
        created = await _create(client, name="Orders")

        response = await client.delete(f"/api/tables/{created['id']}")
        assert response.status_code == 200
        assert response.json() == {"id": created["id"]}

        response = await client.get(f"/api/tables/{created['id']}")
        assert response.status_code == 404

    async def test_missing_returns_404(self, client):
        response = await client.delete("/api/tables/999")
        assert response.status_code == 404


    async def test_id_beyond_integer_range_returns_404(self, client):
        put = await client.put(f"/api/tables/{2**70}", json={"name": "X"})
        delete = await client.delete(f"/api/tables/{2**70}")

        assert put.status_code == 404
        assert delete.status_code == 404


class TestListTables:
    async def test_empty_store_returns_default_empty_page(self, client):
        response = await client.get("/api/tables")

        assert response.status_code == 200
        data = response.json()
        assert data["items"] == []
        assert data["page_index"] == 0
        assert data["page_size"] == 20
        assert data["total_elements"] == 0
        assert data["total_pages"] == 0

    async def test_paging_metadata(self, client):
        for i in range(5):
            await _create(client, name=f"Table {i}")

        response = await client.get("/api/tables", params={"page": 1, "size": 2})

        data = response.json()
        assert [t["name"] for t in data["items"]] == ["Table 2", "Table 3"]
        assert data["total_elements"] == 5
        assert data["total_pages"] == 3
        assert data["number_of_elements"] == 2
        assert data["first"] is False
        assert data["last"] is False
        assert data["has_next"] is True
        assert data["has_previous"] is True

    @pytest.mark.parametrize(
        "params",
        [{"size": -1}, {"size": 0}, {"page": -3}, {"page": -1, "size": -1}],
    )
    async def test_invalid_paging_falls_back_to_defaults(self, client, params):
        await _create(client, name="Orders")

        response = await client.get("/api/tables", params=params)

        assert response.status_code == 200
        data = response.json()
        assert data["page_index"] == 0
        assert data["page_size"] == 20
        assert len(data["items"]) == 1

    async def test_huge_page_index_falls_back_to_defaults(self, client):
        await _create(client, name="Orders")

        response = await client.get(
            "/api/tables", params={"page": 2**62, "size": 20}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["page_index"] == 0
        assert data["page_size"] == 20
        assert len(data["items"]) == 1

    async def test_non_integer_paging_returns_422(self, client):
        response = await client.get("/api/tables", params={"size": "ten"})
        assert response.status_code == 422


class TestTransactionRollback:
    async def test_unhandled_error_returns_500_and_rolls_back(self, app):
        async def failing_create(db, payload):
            db.add(TableEntity(name=payload.name))
            await db.flush()
            raise RuntimeError("store exploded")

        async with AsyncClient(
            transport=ASGITransport(app=app, raise_app_exceptions=False),
            base_url="http://test",
        ) as client:
            with patch(
                "routes.tables_routes.create_table", side_effect=failing_create
            ):
                response = await client.post("/api/tables", json={"name": "Orders"})

            assert response.status_code == 500
            assert "unexpected error" in response.json()["detail"]

            listing = await client.get("/api/tables")
            assert listing.json()["total_elements"] == 0


class TestResponseHeaders:
    async def test_security_and_timing_headers(self, client):
        response = await client.get("/api/tables")

        assert response.headers["x-content-type-options"] == "nosniff"
        assert response.headers["cache-control"] == "no-store"
        assert "default-src 'none'" in response.headers["content-security-policy"]
        assert "x-request-id" in response.headers
        assert float(response.headers["x-request-duration-ms"]) >= 0
