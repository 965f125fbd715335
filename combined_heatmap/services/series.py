from collections.abc import Mapping
from collections.abc import Sequence
from dataclasses import dataclass
from dataclasses import field
from functools import reduce


DailySeries = Mapping[str, int]


@dataclass(frozen=True)
class Summary:
    """Date range, grand total and flat counts of a merged series."""

    start: str | None
    end: str | None
    total: int
    counts: dict[str, int] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return self.start is None

    def to_payload(self) -> dict[str, object]:
        return {
            "start": self.start,
            "end": self.end,
            "total": self.total,
            "counts": dict(self.counts),
        }


def _add_series(accumulated: dict[str, int], series: DailySeries) -> dict[str, int]:
    combined = dict(accumulated)
    for day, count in series.items():
        combined[day] = combined.get(day, 0) + count
    return combined


def merge_series(series: Sequence[DailySeries]) -> dict[str, int]:
    """Sum several date -> count series into a new one.

    Dates missing from every input stay missing. Addition is commutative, so
    the result does not depend on the order of `series`.
    """

    return reduce(_add_series, series, {})


def summarize_series(merged: DailySeries) -> Summary:
    """Derive start, end and total from a merged series.

    ISO `YYYY-MM-DD` keys sort lexicographically in calendar order, so plain
    string ordering gives the range.
    """

    if not merged:
        return Summary(start=None, end=None, total=0, counts={})

    days = sorted(merged)
    counts = {day: merged[day] for day in days}
    return Summary(
        start=days[0],
        end=days[-1],
        total=sum(counts.values()),
        counts=counts,
    )
