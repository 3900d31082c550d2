"""Tests for daily and weekly movement summaries."""

from datetime import UTC, date, datetime, time

import pytest

from stockledger.core.entities import MovementType
from stockledger.core.services.aggregator import MovementAggregator


@pytest.fixture
def aggregator(mock_store):
    return MovementAggregator(mock_store, tz=UTC)


def at(day: date, hour: int = 10, minute: int = 0) -> datetime:
    return datetime.combine(day, time(hour, minute), tzinfo=UTC)


class TestDailySummary:
    async def test_empty_store(self, aggregator):
        summary = await aggregator.daily_summary(date(2024, 3, 1))

        assert summary.entries == []
        assert summary.exits == []
        assert summary.total_entries_quantity == 0
        assert summary.total_exits_quantity == 0
        assert summary.net_change == 0

    async def test_single_entry(self, aggregator, mock_store, make_movement):
        mock_store.all.return_value = [
            make_movement(quantity=50, date=at(date(2024, 3, 1))),
        ]

        summary = await aggregator.daily_summary(date(2024, 3, 1))

        assert len(summary.entries) == 1
        assert summary.total_entries_quantity == 50

    async def test_window_covers_whole_day_only(self, aggregator, mock_store, make_movement):
        day = date(2024, 3, 1)
        inside = [
            make_movement(date=datetime.combine(day, time.min, tzinfo=UTC)),
            make_movement(date=datetime.combine(day, time.max, tzinfo=UTC)),
        ]
        outside = [
            make_movement(date=at(date(2024, 2, 29), 23, 59)),
            make_movement(date=at(date(2024, 3, 2), 0, 0)),
        ]
        mock_store.all.return_value = [*inside, *outside]

        summary = await aggregator.daily_summary(day)

        assert {m.id for m in summary.entries} == {m.id for m in inside}

    async def test_partition_is_complete_and_disjoint(self, aggregator, mock_store, make_movement):
        day = date(2024, 3, 1)
        movements = [
            make_movement(quantity=5, date=at(day, 8)),
            make_movement(quantity=3, type=MovementType.EXIT, date=at(day, 9)),
            make_movement(quantity=2, type=MovementType.EXIT, date=at(day, 17)),
        ]
        mock_store.all.return_value = movements

        summary = await aggregator.daily_summary(day)

        entry_ids = {m.id for m in summary.entries}
        exit_ids = {m.id for m in summary.exits}
        assert entry_ids.isdisjoint(exit_ids)
        assert entry_ids | exit_ids == {m.id for m in movements}
        assert summary.total_exits_quantity == 5
        assert summary.net_change == 0

    async def test_accepts_datetime(self, aggregator, mock_store, make_movement):
        mock_store.all.return_value = [make_movement(date=at(date(2024, 3, 1)))]
        summary = await aggregator.daily_summary(at(date(2024, 3, 1), 22))
        assert summary.date == date(2024, 3, 1)
        assert len(summary.entries) == 1

    async def test_repeat_calls_are_identical(self, aggregator, mock_store, make_movement):
        mock_store.all.return_value = [
            make_movement(date=at(date(2024, 3, 1), h), quantity=h) for h in range(1, 6)
        ]
        first = await aggregator.daily_summary(date(2024, 3, 1))
        second = await aggregator.daily_summary(date(2024, 3, 1))
        assert first.model_dump() == second.model_dump()


class TestWeeklySummary:
    async def test_monday_to_sunday_window(self, aggregator):
        # 2024-03-06 is a Wednesday
        summary = await aggregator.weekly_summary(date(2024, 3, 6))

        assert summary.week_start == date(2024, 3, 4)
        assert summary.week_end == date(2024, 3, 10)

    async def test_sunday_belongs_to_previous_monday(self, aggregator):
        summary = await aggregator.weekly_summary(date(2024, 3, 10))
        assert summary.week_start == date(2024, 3, 4)

    async def test_breakdown_is_zero_filled(self, aggregator):
        summary = await aggregator.weekly_summary(date(2024, 3, 6))

        assert [d.date for d in summary.daily_breakdown] == [
            date(2024, 3, day) for day in range(4, 11)
        ]
        assert all(d.entries_count == 0 and d.exits_count == 0 for d in summary.daily_breakdown)

    async def test_breakdown_sums_match_totals(self, aggregator, mock_store, make_movement):
        mock_store.all.return_value = [
            make_movement(quantity=10, date=at(date(2024, 3, 4))),
            make_movement(quantity=4, date=at(date(2024, 3, 6))),
            make_movement(quantity=3, type=MovementType.EXIT, date=at(date(2024, 3, 6), 15)),
            make_movement(quantity=6, type=MovementType.EXIT, date=at(date(2024, 3, 10), 23)),
            # previous and next week
            make_movement(quantity=99, date=at(date(2024, 3, 3), 23)),
            make_movement(quantity=99, date=at(date(2024, 3, 11), 0)),
        ]

        summary = await aggregator.weekly_summary(date(2024, 3, 6))

        assert summary.total_entries_quantity == 14
        assert summary.total_exits_quantity == 9
        assert sum(d.entries_quantity for d in summary.daily_breakdown) == 14
        assert sum(d.exits_quantity for d in summary.daily_breakdown) == 9
        wednesday = summary.daily_breakdown[2]
        assert wednesday.entries_count == 1
        assert wednesday.exits_count == 1
        assert wednesday.net_change == 1
        assert summary.net_change == 5


class TestLocalDays:
    async def test_day_boundaries_follow_configured_zone(self, mock_store, make_movement):
        from zoneinfo import ZoneInfo

        aggregator = MovementAggregator(mock_store, tz=ZoneInfo("Africa/Kinshasa"))
        # 23:30 UTC on Feb 29 is 00:30 on Mar 1 in Kinshasa (UTC+1)
        mock_store.all.return_value = [
            make_movement(date=datetime(2024, 2, 29, 23, 30, tzinfo=UTC)),
        ]

        summary = await aggregator.daily_summary(date(2024, 3, 1))

        assert len(summary.entries) == 1
