"""Derived, recompute-on-read aggregates over the movement log."""

import datetime

from pydantic import BaseModel, Field, computed_field

from stockledger.core.entities.movement import Movement


class DailySummary(BaseModel):
    """Entries and exits recorded on one calendar day."""

    date: datetime.date
    entries: list[Movement] = Field(default_factory=list)
    exits: list[Movement] = Field(default_factory=list)
    total_entries_quantity: int = 0
    total_exits_quantity: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def net_change(self) -> int:
        return self.total_entries_quantity - self.total_exits_quantity


class DayBreakdown(BaseModel):
    """Per-day counts inside a weekly summary."""

    date: datetime.date
    entries_count: int = 0
    exits_count: int = 0
    entries_quantity: int = 0
    exits_quantity: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def net_change(self) -> int:
        return self.entries_quantity - self.exits_quantity


class WeeklySummary(BaseModel):
    """Monday-to-Sunday window with a zero-filled 7-day breakdown."""

    week_start: datetime.date
    week_end: datetime.date
    entries: list[Movement] = Field(default_factory=list)
    exits: list[Movement] = Field(default_factory=list)
    daily_breakdown: list[DayBreakdown] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_entries_quantity(self) -> int:
        return sum(m.quantity for m in self.entries)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_exits_quantity(self) -> int:
        return sum(m.quantity for m in self.exits)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def net_change(self) -> int:
        return self.total_entries_quantity - self.total_exits_quantity
