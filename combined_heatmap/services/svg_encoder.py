from xml.sax.saxutils import escape
from xml.sax.saxutils import quoteattr

from combined_heatmap.services.calendar_renderer import RenderedCalendar
from combined_heatmap.services.levels import PALETTE


SVG_NAMESPACE = "http://www.w3.org/2000/svg"
LABEL_FONT = "Arial, Helvetica, sans-serif"
LABEL_COLOR = "#6a737d"
CELL_STROKE = "#e6e6e6"
ERROR_CHAR_WIDTH = 7
EMPTY_SVG = f'<svg xmlns="{SVG_NAMESPACE}"></svg>'


def _cell_title(count: int, iso_day: str) -> str:
    noun = "contribution" if count == 1 else "contributions"
    return f"{count} {noun} on {iso_day}"


def encode_svg(calendar: RenderedCalendar, subject: str) -> str:
    """Encode a rendered calendar as a standalone SVG document."""

    if calendar.is_empty:
        return EMPTY_SVG

    geometry = calendar.geometry
    width = calendar.width
    height = calendar.height
    aria_label = quoteattr(f"Combined contributions calendar for {subject}")

    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg xmlns="{SVG_NAMESPACE}" width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}" role="img" aria-label={aria_label}>',
        '  <rect width="100%" height="100%" fill="transparent"/>',
    ]

    for label in calendar.month_labels:
        lines.append(
            f'  <text x="{label.x}" y="{label.y}" font-family="{LABEL_FONT}" '
            f'font-size="{geometry.font_size}" fill="{LABEL_COLOR}">'
            f"{escape(label.text)}</text>"
        )

    for label in calendar.weekday_labels:
        lines.append(
            f'  <text x="{label.x}" y="{label.y}" text-anchor="end" '
            f'font-family="{LABEL_FONT}" font-size="{geometry.font_size}" '
            f'fill="{LABEL_COLOR}">{escape(label.text)}</text>'
        )

    radius = geometry.corner_radius
    size = geometry.cell_size
    for cell in calendar.cells:
        title = escape(_cell_title(cell.count, cell.date.isoformat()))
        lines.append(
            f'  <rect x="{cell.x}" y="{cell.y}" width="{size}" height="{size}" '
            f'rx="{radius}" ry="{radius}" fill="{PALETTE[cell.level]}" '
            f'stroke="{CELL_STROKE}" stroke-width="0.5" '
            f'data-date="{cell.date.isoformat()}" data-count="{cell.count}" '
            f'data-level="{cell.level}"><title>{title}</title></rect>'
        )

    lines.append("</svg>")
    return "\n".join(lines) + "\n"


def encode_error_svg(message: str) -> str:
    """Small SVG carrying an error message for embedded image consumers."""

    text = f"Error: {message}"
    # Wide enough for 12px Arial, whose glyphs average under 7px.
    width = 20 + ERROR_CHAR_WIDTH * len(text)
    return (
        f'<svg xmlns="{SVG_NAMESPACE}" width="{width}" height="30">'
        f'<text x="10" y="20" font-family="{LABEL_FONT}" font-size="12" '
        f'fill="red">{escape(text)}</text></svg>'
    )
