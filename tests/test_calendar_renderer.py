from datetime import date

from combined_heatmap.services.calendar_renderer import CalendarGeometry
from combined_heatmap.services.calendar_renderer import render_calendar
from combined_heatmap.services.levels import PALETTE
from combined_heatmap.services.series import merge_series
from combined_heatmap.services.series import summarize_series
from combined_heatmap.services.svg_encoder import EMPTY_SVG
from combined_heatmap.services.svg_encoder import encode_error_svg
from combined_heatmap.services.svg_encoder import encode_svg


def test_empty_summary_renders_empty_calendar() -> None:
    calendar = render_calendar(summarize_series(merge_series([])))

    assert calendar.is_empty
    assert calendar.week_columns == 0
    assert calendar.month_labels == ()
    assert calendar.weekday_labels == ()
    assert encode_svg(calendar, subject="nobody") == EMPTY_SVG


def test_single_day_calendar_geometry() -> None:
    calendar = render_calendar(summarize_series({"2024-03-01": 10}))

    assert calendar.week_columns == 1
    assert calendar.rows == 7
    assert calendar.max_count == 10
    assert calendar.width == 60
    assert calendar.height == 142
    assert [cell.date for cell in calendar.cells] == [
        date(2024, 2, 25),
        date(2024, 2, 26),
        date(2024, 2, 27),
        date(2024, 2, 28),
        date(2024, 2, 29),
        date(2024, 3, 1),
    ]

    last = calendar.cells[-1]
    assert (last.week_column, last.weekday_row) == (0, 5)
    assert (last.count, last.level) == (10, 4)
    assert (last.x, last.y) == (44, 110)
    assert all(cell.level == 0 for cell in calendar.cells[:-1])


def test_labels_are_positioned_outside_the_grid() -> None:
    calendar = render_calendar(summarize_series({"2024-03-01": 10}))
    geometry = calendar.geometry

    assert [(label.month_key, label.text) for label in calendar.month_labels] == [
        ("2024-02", "Feb"),
        ("2024-03", "Mar"),
    ]
    assert all(label.y < geometry.grid_top for label in calendar.month_labels)

    assert [(label.weekday_row, label.text) for label in calendar.weekday_labels] == [
        (1, "Mon"),
        (3, "Wed"),
        (5, "Fri"),
    ]
    assert [label.y for label in calendar.weekday_labels] == [56, 88, 120]
    assert all(label.x < geometry.grid_left for label in calendar.weekday_labels)


def test_month_label_sits_on_column_of_first_day() -> None:
    calendar = render_calendar(summarize_series({"2024-01-15": 1, "2024-02-10": 2}))

    february = calendar.month_labels[1]
    first_of_february = next(
        cell for cell in calendar.cells if cell.date == date(2024, 2, 1)
    )
    assert len(calendar.month_labels) == 2
    assert february.week_column == first_of_february.week_column == 2
    assert february.x == first_of_february.x


def test_geometry_is_parameterized() -> None:
    geometry = CalendarGeometry(cell_size=10, cell_gap=2)
    calendar = render_calendar(
        summarize_series({"2024-01-07": 1, "2024-01-20": 1}), geometry
    )

    assert calendar.week_columns == 2
    assert calendar.width == geometry.grid_left + 2 * 12
    assert calendar.height == geometry.grid_top + 7 * 12
    assert calendar.cells[-1].x == geometry.grid_left + 12


def test_rendering_is_reproducible() -> None:
    summary = summarize_series({"2024-01-03": 4, "2024-02-14": 1, "2024-03-30": 9})

    first = render_calendar(summary)
    second = render_calendar(summary)

    assert first == second
    assert encode_svg(first, "octocat") == encode_svg(second, "octocat")


def test_svg_contains_cells_labels_and_titles() -> None:
    calendar = render_calendar(summarize_series({"2024-03-01": 10, "2024-02-29": 1}))

    svg = encode_svg(calendar, subject="octocat and hubot")

    assert svg.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    assert 'aria-label="Combined contributions calendar for octocat and hubot"' in svg
    assert 'width="60" height="142"' in svg
    assert svg.count("<rect ") == len(calendar.cells) + 1
    assert "<title>10 contributions on 2024-03-01</title>" in svg
    assert "<title>1 contribution on 2024-02-29</title>" in svg
    assert f'fill="{PALETTE[4]}"' in svg
    assert ">Feb</text>" in svg
    assert ">Fri</text>" in svg


def test_svg_escapes_subject() -> None:
    calendar = render_calendar(summarize_series({"2024-03-01": 1}))

    svg = encode_svg(calendar, subject='<a & "b">')

    assert "<a & " not in svg
    assert "&lt;a &amp;" in svg


def test_error_svg_escapes_message() -> None:
    svg = encode_error_svg("limit <10>")

    assert "Error: limit &lt;10&gt;" in svg
    assert svg.startswith('<svg xmlns="http://www.w3.org/2000/svg"')


def test_error_svg_widens_for_long_messages() -> None:
    short = encode_error_svg("bad")
    long_message = "Too many users requested (limit 1000000)." * 3

    long = encode_error_svg(long_message)

    assert 'width="90"' in short
    assert f'width="{20 + 7 * len("Error: " + long_message)}"' in long
