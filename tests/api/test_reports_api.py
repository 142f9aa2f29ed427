"""Tests for export download endpoints."""

import csv
import io

from httpx import AsyncClient


class TestTransactionsCsv:
    async def test_download(self, api_client: AsyncClient):
        response = await api_client.get("/api/reports/transactions.csv")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        disposition = response.headers["content-disposition"]
        assert disposition.startswith('attachment; filename="stock_report_')
        assert disposition.endswith('.csv"')

        rows = list(csv.reader(io.StringIO(response.text)))
        assert rows[0] == [
            "Date", "Type", "Item Name", "Quantity", "Unit", "Location", "Person", "Notes",
        ]
        assert [r[2] for r in rows[1:]] == ["Floor Cleaner", "Sugar", "Tissue Roll"]

    async def test_filtered(self, api_client: AsyncClient):
        response = await api_client.get(
            "/api/reports/transactions.csv", params={"type": "Receive"}
        )
        rows = list(csv.reader(io.StringIO(response.text)))
        assert len(rows) == 2
        assert rows[1][5] == "Vendor"


class TestTransactionsPdf:
    async def test_download(self, api_client: AsyncClient):
        response = await api_client.get(
            "/api/reports/transactions.pdf", params={"type": "Issue"}
        )

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.headers["content-disposition"].endswith('.pdf"')
        assert response.content.startswith(b"%PDF")


class TestInventoryCsv:
    async def test_download(self, api_client: AsyncClient):
        response = await api_client.get(
            "/api/reports/inventory.csv", params={"category": "Pantry", "sort": "name-asc"}
        )

        assert response.status_code == 200
        assert 'filename="stock_inventory_' in response.headers["content-disposition"]
        rows = list(csv.reader(io.StringIO(response.text)))
        assert [r[1] for r in rows[1:]] == ["Olive Oil", "Sugar", "Sunflower Oil"]
        assert rows[3][6] == "Low Stock"

    async def test_invalid_sort(self, api_client: AsyncClient):
        response = await api_client.get("/api/reports/inventory.csv", params={"sort": "price"})
        assert response.status_code == 400
