from dataclasses import dataclass
from datetime import date

from combined_heatmap.services.calendar_grid import build_grid
from combined_heatmap.services.calendar_grid import month_boundaries
from combined_heatmap.services.dates import DAYS_PER_WEEK
from combined_heatmap.services.dates import WEEKDAY_NAMES
from combined_heatmap.services.dates import month_name
from combined_heatmap.services.dates import parse_day
from combined_heatmap.services.levels import contribution_level
from combined_heatmap.services.series import Summary


LABELLED_WEEKDAY_ROWS = (1, 3, 5)


@dataclass(frozen=True)
class CalendarGeometry:
    """Pixel layout of the calendar.

    The grid starts below a month-label gutter and right of a weekday-label
    gutter. `padding` separates both gutters from the first cell.
    """

    cell_size: int = 12
    cell_gap: int = 4
    padding: int = 8
    month_gutter: int = 22
    weekday_gutter: int = 36
    corner_radius: int = 2
    font_size: int = 11

    @property
    def stride(self) -> int:
        return self.cell_size + self.cell_gap

    @property
    def grid_left(self) -> int:
        return self.weekday_gutter + self.padding

    @property
    def grid_top(self) -> int:
        return self.month_gutter + self.padding

    def cell_x(self, week_column: int) -> int:
        return self.grid_left + week_column * self.stride

    def cell_y(self, weekday_row: int) -> int:
        return self.grid_top + weekday_row * self.stride

    def width(self, week_columns: int) -> int:
        return self.grid_left + week_columns * self.stride

    def height(self) -> int:
        return self.grid_top + DAYS_PER_WEEK * self.stride

    def month_label_y(self) -> int:
        return max(self.font_size + 1, self.month_gutter - 6)

    def weekday_label_x(self) -> int:
        return self.weekday_gutter - 6

    def weekday_label_y(self, weekday_row: int) -> int:
        # Baseline sits roughly at the vertical center of the row.
        return self.cell_y(weekday_row) + self.cell_size // 2 + 4


DEFAULT_GEOMETRY = CalendarGeometry()


@dataclass(frozen=True)
class GridCell:
    date: date
    week_column: int
    weekday_row: int
    count: int
    level: int
    x: int
    y: int


@dataclass(frozen=True)
class MonthLabel:
    month_key: str
    week_column: int
    text: str
    x: int
    y: int


@dataclass(frozen=True)
class WeekdayLabel:
    weekday_row: int
    text: str
    x: int
    y: int


@dataclass(frozen=True)
class RenderedCalendar:
    """Encoding-independent description of a calendar heatmap."""

    week_columns: int
    rows: int
    width: int
    height: int
    max_count: int
    cells: tuple[GridCell, ...]
    month_labels: tuple[MonthLabel, ...]
    weekday_labels: tuple[WeekdayLabel, ...]
    geometry: CalendarGeometry = DEFAULT_GEOMETRY

    @property
    def is_empty(self) -> bool:
        return not self.cells


def empty_calendar(geometry: CalendarGeometry = DEFAULT_GEOMETRY) -> RenderedCalendar:
    return RenderedCalendar(
        week_columns=0,
        rows=DAYS_PER_WEEK,
        width=0,
        height=0,
        max_count=0,
        cells=(),
        month_labels=(),
        weekday_labels=(),
        geometry=geometry,
    )


def render_calendar(
    summary: Summary, geometry: CalendarGeometry = DEFAULT_GEOMETRY
) -> RenderedCalendar:
    """Lay out a summary as a week-aligned heatmap.

    An empty summary yields an empty calendar rather than an error. Days in
    the leading partial week before `summary.start` are drawn with count 0.
    """

    if summary.start is None or summary.end is None:
        return empty_calendar(geometry)

    grid = build_grid(parse_day(summary.start), parse_day(summary.end))
    max_count = max(1, max(summary.counts.values(), default=0))

    cells: list[GridCell] = []
    for day in grid.days():
        week_column, weekday_row = grid.cell_position(day)
        count = summary.counts.get(day.isoformat(), 0)
        cells.append(
            GridCell(
                date=day,
                week_column=week_column,
                weekday_row=weekday_row,
                count=count,
                level=contribution_level(count, max_count),
                x=geometry.cell_x(week_column),
                y=geometry.cell_y(weekday_row),
            )
        )

    month_labels = tuple(
        MonthLabel(
            month_key=boundary.month_key,
            week_column=boundary.week_column,
            text=month_name(boundary.month_key),
            x=geometry.cell_x(boundary.week_column),
            y=geometry.month_label_y(),
        )
        for boundary in month_boundaries(grid)
    )
    weekday_labels = tuple(
        WeekdayLabel(
            weekday_row=row,
            text=WEEKDAY_NAMES[row],
            x=geometry.weekday_label_x(),
            y=geometry.weekday_label_y(row),
        )
        for row in LABELLED_WEEKDAY_ROWS
    )

    return RenderedCalendar(
        week_columns=grid.week_columns,
        rows=DAYS_PER_WEEK,
        width=geometry.width(grid.week_columns),
        height=geometry.height(),
        max_count=max_count,
        cells=tuple(cells),
        month_labels=month_labels,
        weekday_labels=weekday_labels,
        geometry=geometry,
    )
