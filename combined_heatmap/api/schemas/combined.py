from datetime import date

from pydantic import BaseModel
from pydantic import Field

from combined_heatmap.services.calendar_renderer import RenderedCalendar
from combined_heatmap.services.series import Summary


class SummaryResponse(BaseModel):
    """Merged contribution series with its date range and total."""

    start: date | None
    end: date | None
    total: int = Field(ge=0)
    counts: dict[str, int]

    @classmethod
    def from_summary(cls, summary: Summary) -> "SummaryResponse":
        return cls.model_validate(summary.to_payload())


class CalendarCell(BaseModel):
    """Single day cell of the calendar grid."""

    date: date
    week_column: int
    weekday_row: int
    count: int
    level: int
    x: int
    y: int


class CalendarMonthLabel(BaseModel):
    month: str
    week_column: int
    text: str
    x: int
    y: int


class CalendarWeekdayLabel(BaseModel):
    weekday_row: int
    text: str
    x: int
    y: int


class CalendarResponse(BaseModel):
    """Pixel geometry of the combined calendar heatmap."""

    users: list[str]
    week_columns: int
    rows: int
    width: int
    height: int
    max_count: int
    cells: list[CalendarCell]
    month_labels: list[CalendarMonthLabel]
    weekday_labels: list[CalendarWeekdayLabel]

    @classmethod
    def from_calendar(
        cls, users: list[str], calendar: RenderedCalendar
    ) -> "CalendarResponse":
        return cls(
            users=users,
            week_columns=calendar.week_columns,
            rows=calendar.rows,
            width=calendar.width,
            height=calendar.height,
            max_count=calendar.max_count,
            cells=[
                CalendarCell(
                    date=cell.date,
                    week_column=cell.week_column,
                    weekday_row=cell.weekday_row,
                    count=cell.count,
                    level=cell.level,
                    x=cell.x,
                    y=cell.y,
                )
                for cell in calendar.cells
            ],
            month_labels=[
                CalendarMonthLabel(
                    month=label.month_key,
                    week_column=label.week_column,
                    text=label.text,
                    x=label.x,
                    y=label.y,
                )
                for label in calendar.month_labels
            ],
            weekday_labels=[
                CalendarWeekdayLabel(
                    weekday_row=label.weekday_row,
                    text=label.text,
                    x=label.x,
                    y=label.y,
                )
                for label in calendar.weekday_labels
            ],
        )
