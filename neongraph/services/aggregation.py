from collections.abc import Iterable
from collections.abc import Sequence
from dataclasses import dataclass
from dataclasses import field

from neongraph.schemas.contributions import ContributionWeek
from neongraph.services.colors import HslColor
from neongraph.services.colors import gradient_colors
from neongraph.services.colors import neon_colors
from neongraph.services.colors import solid_colors
from neongraph.settings import ChartStyle
from neongraph.settings import Granularity


COLOR_BUILDERS = {
    "neon": neon_colors,
    "gradient": gradient_colors,
    "solid": solid_colors,
}


@dataclass(frozen=True)
class ChartSeries:
    """Labeled values with one precomputed color per value."""

    title: str
    granularity: Granularity
    style: ChartStyle
    labels: list[str] = field(default_factory=list)
    values: list[int] = field(default_factory=list)
    colors: list[HslColor] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not len(self.labels) == len(self.values) == len(self.colors):
            raise ValueError(
                "labels, values and colors must have equal length, got "
                f"{len(self.labels)}, {len(self.values)}, {len(self.colors)}"
            )


def _bucket_counts(weeks: Iterable[ContributionWeek | Sequence[int]]) -> list[list[int]]:
    return [
        week.counts if isinstance(week, ContributionWeek) else list(week)
        for week in weeks
    ]


def weekly_totals(weeks: Iterable[ContributionWeek | Sequence[int]]) -> list[int]:
    """Sum each week bucket, keeping week order.

    Buckets of any length are summed as-is; an empty bucket sums to 0.
    """

    return [sum(counts) for counts in _bucket_counts(weeks)]


def daily_counts(weeks: Iterable[ContributionWeek | Sequence[int]]) -> list[int]:
    """Flatten week buckets into the chronological list of day counts."""

    return [count for counts in _bucket_counts(weeks) for count in counts]


def series_labels(count: int, granularity: Granularity) -> list[str]:
    if granularity == "daily":
        return [f"Day {index + 1}" for index in range(count)]
    return [f"W{index + 1}" for index in range(count)]


def build_series(
    weeks: Iterable[ContributionWeek | Sequence[int]],
    granularity: Granularity,
    style: ChartStyle,
    title: str,
) -> ChartSeries:
    """Aggregate week buckets and color every resulting value."""

    if granularity == "daily":
        values = daily_counts(weeks)
    else:
        values = weekly_totals(weeks)

    return ChartSeries(
        title=title,
        granularity=granularity,
        style=style,
        labels=series_labels(len(values), granularity),
        values=values,
        colors=COLOR_BUILDERS[style](values),
    )
