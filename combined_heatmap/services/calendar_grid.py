from dataclasses import dataclass
from datetime import date

from combined_heatmap.services.dates import DAYS_PER_WEEK
from combined_heatmap.services.dates import days_between
from combined_heatmap.services.dates import iter_days
from combined_heatmap.services.dates import month_key
from combined_heatmap.services.dates import week_start


@dataclass(frozen=True)
class CalendarGrid:
    """Week-major, weekday-minor layout for the days `calendar_start..end`."""

    calendar_start: date
    end: date
    total_days: int
    week_columns: int

    def cell_position(self, day: date) -> tuple[int, int]:
        """Return `(week_column, weekday_row)` for a day inside the grid."""

        offset = days_between(self.calendar_start, day)
        if offset < 0 or offset >= self.total_days:
            raise ValueError(f"{day.isoformat()} is outside the calendar grid")
        return offset // DAYS_PER_WEEK, offset % DAYS_PER_WEEK

    def days(self) -> list[date]:
        return list(iter_days(self.calendar_start, self.end))


@dataclass(frozen=True)
class MonthBoundary:
    month_key: str
    week_column: int


def build_grid(start: date, end: date) -> CalendarGrid:
    """Align `start` back to the anchor weekday and size the grid up to `end`."""

    if start > end:
        raise ValueError("start must be before or equal to end")

    calendar_start = week_start(start)
    total_days = days_between(calendar_start, end) + 1
    week_columns = -(-total_days // DAYS_PER_WEEK)
    return CalendarGrid(
        calendar_start=calendar_start,
        end=end,
        total_days=total_days,
        week_columns=week_columns,
    )


def month_boundaries(grid: CalendarGrid) -> list[MonthBoundary]:
    """Find the first week column of every month visible in the grid.

    The scan covers the padded leading days too, so a month that starts
    before the series does is labelled at the grid's first column.
    """

    first_columns: dict[str, int] = {}
    for offset, day in enumerate(iter_days(grid.calendar_start, grid.end)):
        key = month_key(day)
        if key not in first_columns:
            first_columns[key] = offset // DAYS_PER_WEEK

    return [
        MonthBoundary(month_key=key, week_column=first_columns[key])
        for key in sorted(first_columns)
    ]
