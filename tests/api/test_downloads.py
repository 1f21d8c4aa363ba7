"""Download route tests."""

import pytest
from httpx import AsyncClient

from app.repositories import DownloadRepository
from app.services.download import DUPLICATE_MESSAGE, LOGGED_MESSAGE

PREFIX = "/api/v1"
WINDOW = {"startDate": "2025-02-10", "endDate": "2025-02-16"}


async def log_download(client: AsyncClient, user_id: str, app_name: str = "Paint", timestamp: str | None = None):
    payload = {"userId": user_id, "appName": app_name}
    if timestamp:
        payload["timestamp"] = timestamp
    return await client.post(f"{PREFIX}/log-download", json=payload)


class TestLogDownload:
    @pytest.mark.anyio
    async def test_repeat_is_success_without_new_row(self, client: AsyncClient, session_maker):
        first = await log_download(client, "u1")
        second = await log_download(client, "u1")

        assert first.status_code == 200
        assert first.json()["success"] is True
        assert first.json()["message"] == LOGGED_MESSAGE
        assert first.json()["data"]["userId"] == "u1"

        assert second.status_code == 200
        assert second.json() == {"success": True, "message": DUPLICATE_MESSAGE}

        async with session_maker() as db:
            assert await DownloadRepository().count_for_pair(db, "u1", "Paint") == 1

    @pytest.mark.anyio
    async def test_explicit_timestamp_is_kept(self, client: AsyncClient):
        response = await log_download(client, "u1", timestamp="2025-02-14T09:30:00Z")

        assert response.json()["data"]["timestamp"].startswith("2025-02-14T09:30:00")

    @pytest.mark.anyio
    @pytest.mark.parametrize("payload", [{"userId": "u1"}, {"appName": "Paint"}, {}])
    async def test_missing_field(self, client: AsyncClient, payload):
        response = await client.post(f"{PREFIX}/log-download", json=payload)

        assert response.status_code == 400
        assert response.json()["success"] is False
        assert response.json()["message"] == "Missing userId or appName"


class TestDownloadStatistics:
    @pytest.fixture
    async def downloads(self, client: AsyncClient):
        await log_download(client, "u1", "Paint", "2025-02-14T09:00:00Z")
        await log_download(client, "u1", "Countdown", "2025-02-14T10:00:00Z")
        await log_download(client, "u2", "Paint", "2025-02-14T11:00:00Z")
        await log_download(client, "u3", "Paint", "2025-02-15T08:00:00Z")
        # Outside the window
        await log_download(client, "u4", "Paint", "2025-01-01T08:00:00Z")

    @pytest.mark.anyio
    @pytest.mark.usefixtures("downloads")
    async def test_daily_buckets(self, client: AsyncClient):
        response = await client.get(f"{PREFIX}/downloads", params={**WINDOW, "groupBy": "day"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["periodType"] == "day"
        assert data["totalUniqueUsers"] == 3
        assert data["downloads"] == [
            {"period": "2025-02-14", "uniqueUsers": 2, "totalDownloads": 3},
            {"period": "2025-02-15", "uniqueUsers": 1, "totalDownloads": 1},
        ]
        assert data["startDate"].startswith("2025-02-10T00:00:00")
        assert data["endDate"].startswith("2025-02-16T23:59:59")

    @pytest.mark.anyio
    @pytest.mark.usefixtures("downloads")
    async def test_week_labels_are_prefixed(self, client: AsyncClient):
        response = await client.get(f"{PREFIX}/downloads", params={**WINDOW, "groupBy": "week"})

        data = response.json()["data"]
        assert data["periodType"] == "week"
        assert [p["period"] for p in data["downloads"]] == ["2025-W07"]

    @pytest.mark.anyio
    @pytest.mark.usefixtures("downloads")
    async def test_app_filter_and_details(self, client: AsyncClient):
        response = await client.get(
            f"{PREFIX}/downloads",
            params={**WINDOW, "appName": "Paint", "groupBy": "total", "includeDetails": "true"},
        )

        data = response.json()["data"]
        [period] = data["downloads"]
        assert period["period"] == "total"
        assert period["uniqueUsers"] == 3
        assert [d["userId"] for d in period["details"]] == ["u1", "u2", "u3"]
        assert {d["appName"] for d in period["details"]} == {"Paint"}

    @pytest.mark.anyio
    async def test_empty_window(self, client: AsyncClient):
        response = await client.get(f"{PREFIX}/downloads", params=WINDOW)

        data = response.json()["data"]
        assert data["downloads"] == []
        assert data["totalUniqueUsers"] == 0
