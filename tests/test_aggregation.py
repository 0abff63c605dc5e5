import pytest

from neongraph.schemas.contributions import ContributionDay
from neongraph.schemas.contributions import ContributionWeek
from neongraph.services.aggregation import ChartSeries
from neongraph.services.aggregation import build_series
from neongraph.services.aggregation import daily_counts
from neongraph.services.aggregation import series_labels
from neongraph.services.aggregation import weekly_totals
from neongraph.services.colors import CYAN
from neongraph.services.colors import NEUTRAL_GRAY


def test_weekly_totals_sums_each_bucket_in_order() -> None:
    buckets = [[1, 2, 3, 0, 0, 1, 1], [0, 0, 0, 0, 0, 0, 0]]

    assert weekly_totals(buckets) == [8, 0]


def test_weekly_totals_accepts_partial_and_empty_buckets() -> None:
    buckets = [[4, 1], [], [2, 2, 2, 2, 2, 2, 2, 2]]

    assert weekly_totals(buckets) == [5, 0, 16]


def test_weekly_totals_reads_contribution_weeks() -> None:
    weeks = [
        ContributionWeek(days=[ContributionDay(count=3), ContributionDay(count=4)]),
        ContributionWeek(days=[ContributionDay(count=0)]),
    ]

    assert weekly_totals(weeks) == [7, 0]


def test_daily_counts_flattens_in_chronological_order() -> None:
    buckets = [[1, 2, 3], [4], [], [5, 6]]

    assert daily_counts(buckets) == [1, 2, 3, 4, 5, 6]


def test_series_labels_depend_on_granularity() -> None:
    assert series_labels(3, "weekly") == ["W1", "W2", "W3"]
    assert series_labels(2, "daily") == ["Day 1", "Day 2"]
    assert series_labels(0, "weekly") == []


@pytest.mark.parametrize("style", ["neon", "gradient", "solid"])
@pytest.mark.parametrize("granularity", ["weekly", "daily"])
def test_build_series_keeps_labels_values_and_colors_aligned(
    granularity: str, style: str
) -> None:
    buckets = [[1, 2, 3, 0, 0, 1, 1], [0, 0, 0, 0, 0, 0, 0], [9, 1]]

    series = build_series(buckets, granularity=granularity, style=style, title="t")

    expected = 3 if granularity == "weekly" else 16
    assert len(series.labels) == len(series.values) == len(series.colors) == expected


def test_build_series_weekly_neon_colors_peak_at_maximum() -> None:
    series = build_series([[5, 5], [0], [2, 3]], granularity="weekly", style="neon", title="t")

    assert series.values == [10, 0, 5]
    assert series.colors[0].hue == pytest.approx(340.0)
    assert series.colors[1].hue == pytest.approx(180.0)
    assert series.colors[2].hue == pytest.approx(260.0)


def test_build_series_all_zero_counts_scale_against_one() -> None:
    series = build_series([[0, 0], [0]], granularity="weekly", style="neon", title="t")

    assert series.values == [0, 0]
    assert all(color != NEUTRAL_GRAY for color in series.colors)
    assert all(color.hue == pytest.approx(180.0) for color in series.colors)


def test_build_series_solid_style_is_cyan() -> None:
    series = build_series([[1, 2]], granularity="daily", style="solid", title="t")

    assert series.labels == ["Day 1", "Day 2"]
    assert series.colors == [CYAN, CYAN]


def test_chart_series_rejects_mismatched_lengths() -> None:
    with pytest.raises(ValueError):
        ChartSeries(
            title="t",
            granularity="weekly",
            style="neon",
            labels=["W1", "W2"],
            values=[1],
            colors=[CYAN],
        )
