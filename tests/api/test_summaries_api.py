"""API tests for daily and weekly summaries."""

from datetime import UTC, datetime

from stockledger.core.entities import MovementType


class TestDailySummary:
    async def test_totals_for_day(self, client, mock_store, make_movement):
        mock_store.all.return_value = [
            make_movement(quantity=10, date=datetime(2024, 3, 1, 0, 0, tzinfo=UTC)),
            make_movement(quantity=4, type=MovementType.EXIT),
            make_movement(quantity=99, date=datetime(2024, 3, 2, 0, 0, tzinfo=UTC)),
        ]

        response = await client.get("/api/summaries/daily", params={"day": "2024-03-01"})

        assert response.status_code == 200
        data = response.json()
        assert data["date"] == "2024-03-01"
        assert data["total_entries_quantity"] == 10
        assert data["total_exits_quantity"] == 4
        assert data["net_change"] == 6
        assert len(data["entries"]) == 1

    async def test_defaults_to_today(self, client):
        response = await client.get("/api/summaries/daily")

        assert response.status_code == 200
        assert response.json()["date"] == datetime.now(UTC).date().isoformat()


class TestWeeklySummary:
    async def test_week_is_monday_to_sunday(self, client, mock_store, make_movement):
        mock_store.all.return_value = [
            make_movement(quantity=5, date=datetime(2024, 3, 4, 9, tzinfo=UTC)),
            make_movement(
                quantity=2,
                type=MovementType.EXIT,
                date=datetime(2024, 3, 10, 23, 59, tzinfo=UTC),
            ),
            make_movement(quantity=50, date=datetime(2024, 3, 11, 0, 0, tzinfo=UTC)),
        ]

        response = await client.get("/api/summaries/weekly", params={"day": "2024-03-06"})

        data = response.json()
        assert data["week_start"] == "2024-03-04"
        assert data["week_end"] == "2024-03-10"
        assert data["net_change"] == 3
        breakdown = data["daily_breakdown"]
        assert len(breakdown) == 7
        assert breakdown[0]["entries_quantity"] == 5
        assert breakdown[6]["exits_count"] == 1
        assert all(day["net_change"] == 0 for day in breakdown[1:6])

    async def test_bad_day(self, client):
        response = await client.get("/api/summaries/weekly", params={"day": "not-a-date"})
        assert response.status_code == 422
