"""
Movement Aggregator.

Daily and weekly summaries, recomputed from the full log on every call.
Windows are local calendar days; weeks run Monday through Sunday.
"""

from datetime import date, datetime, timedelta, tzinfo

from stockledger.config import get_logger
from stockledger.core.entities.movement import Movement, MovementFilter
from stockledger.core.entities.summary import DailySummary, DayBreakdown, WeeklySummary
from stockledger.core.interfaces.movement_store import IMovementStore
from stockledger.core.services.calendar import day_bounds, local_date, week_bounds
from stockledger.core.services.movement_filter import filter_movements, sum_quantity

logger = get_logger(__name__)


def _partition(movements: list[Movement]) -> tuple[list[Movement], list[Movement]]:
    entries = [m for m in movements if m.is_entry]
    exits = [m for m in movements if m.is_exit]
    return entries, exits


class MovementAggregator:
    """Time-windowed summaries over the movement store."""

    def __init__(self, store: IMovementStore, tz: tzinfo | None = None) -> None:
        self._store = store
        self._tz = tz

    def _as_day(self, day: date | datetime) -> date:
        if isinstance(day, datetime):
            return local_date(day, self._tz)
        return day

    def _window(self, first: date, last: date) -> MovementFilter:
        start, _ = day_bounds(first, self._tz)
        _, end = day_bounds(last, self._tz)
        return MovementFilter(start_date=start, end_date=end)

    async def daily_summary(self, day: date | datetime) -> DailySummary:
        """Entries and exits whose date falls on ``day``."""
        day = self._as_day(day)
        movements = filter_movements(await self._store.all(), self._window(day, day))
        entries, exits = _partition(movements)

        logger.debug("daily_summary_computed", day=day.isoformat(), movements=len(movements))

        return DailySummary(
            date=day,
            entries=entries,
            exits=exits,
            total_entries_quantity=sum_quantity(entries),
            total_exits_quantity=sum_quantity(exits),
        )

    async def weekly_summary(self, day: date | datetime) -> WeeklySummary:
        """Summary of the Monday-to-Sunday week containing ``day``."""
        week_start, week_end = week_bounds(self._as_day(day))
        movements = filter_movements(
            await self._store.all(), self._window(week_start, week_end)
        )
        entries, exits = _partition(movements)

        # Zero-filled: one row per day even when nothing moved
        by_day: dict[date, list[Movement]] = {
            week_start + timedelta(days=i): [] for i in range(7)
        }
        for movement in movements:
            by_day[local_date(movement.date, self._tz)].append(movement)

        breakdown = []
        for current, day_movements in by_day.items():
            day_entries, day_exits = _partition(day_movements)
            breakdown.append(
                DayBreakdown(
                    date=current,
                    entries_count=len(day_entries),
                    exits_count=len(day_exits),
                    entries_quantity=sum_quantity(day_entries),
                    exits_quantity=sum_quantity(day_exits),
                )
            )

        logger.debug(
            "weekly_summary_computed",
            week_start=week_start.isoformat(),
            movements=len(movements),
        )

        return WeeklySummary(
            week_start=week_start,
            week_end=week_end,
            entries=entries,
            exits=exits,
            daily_breakdown=breakdown,
        )
