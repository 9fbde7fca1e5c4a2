from __future__ import annotations

import math
from datetime import datetime

import pytest

from task_analytics.engine.timeseries import (
    PIPELINE_WEIGHTS,
    compute_cohort_revenue,
    compute_forecast,
    compute_funnel,
    compute_throughput_by_week,
    compute_velocity_by_priority,
    compute_weighted_pipeline,
)
from task_analytics.models.analytics import WeeklyThroughput


def _series(*revenues):
    return [WeeklyThroughput(week=f"w{i + 1}", revenue=r) for i, r in enumerate(revenues)]


# ---------------------------------------------------------------------------
# Funnel
# ---------------------------------------------------------------------------

def test_funnel_counts_and_conversions(make_task):
    tasks = [
        make_task("a", status="Todo"),
        make_task("b", status="Todo"),
        make_task("c", status="In Progress"),
        make_task("d", status="Done"),
        make_task("e", status="Done"),
    ]
    funnel = compute_funnel(tasks)
    assert (funnel.todo, funnel.in_progress, funnel.done) == (2, 1, 2)
    assert funnel.conversion_todo_to_in_progress == pytest.approx(3 / 5)
    assert funnel.conversion_in_progress_to_done == 2


def test_funnel_empty():
    funnel = compute_funnel([])
    assert funnel.conversion_todo_to_in_progress == 0
    assert funnel.conversion_in_progress_to_done == 0


# ---------------------------------------------------------------------------
# Velocity
# ---------------------------------------------------------------------------

def test_velocity_mean_and_upper_median(make_task):
    created = datetime(2024, 3, 1)
    tasks = [
        make_task("a", priority="High", created_at=created, completed_at=datetime(2024, 3, 2)),
        make_task("b", priority="High", created_at=created, completed_at=datetime(2024, 3, 5)),
        make_task("c", priority="High", created_at=created, completed_at=datetime(2024, 3, 11)),
        make_task("d", priority="High", created_at=created, completed_at=datetime(2024, 3, 4)),
        make_task("e", priority="Low", created_at=created, completed_at=datetime(2024, 3, 8)),
    ]
    velocity = compute_velocity_by_priority(tasks)

    # durations 1, 3, 4, 10 -> mean 4.5, element [2] of the sorted list is 4
    assert velocity["High"].avg_days == 4.5
    assert velocity["High"].median_days == 4
    assert velocity["Low"].avg_days == 7
    assert velocity["Low"].median_days == 7


def test_velocity_empty_bucket_is_zero(make_task):
    tasks = [make_task("a", priority="Medium", status="In Progress")]
    velocity = compute_velocity_by_priority(tasks)
    assert set(velocity) == {"High", "Medium", "Low"}
    for stats in velocity.values():
        assert stats.avg_days == 0
        assert stats.median_days == 0


def test_velocity_ignores_unknown_priority_and_bad_dates(make_task):
    tasks = [
        make_task("a", priority="Urgent", completed_at=datetime(2024, 3, 9)),
        make_task("b", priority="High", completed_at="garbage"),
    ]
    velocity = compute_velocity_by_priority(tasks)
    assert velocity["High"].avg_days == 0


def test_velocity_clock_skew_counts_as_zero_days(make_task):
    tasks = [make_task("a", priority="High", created_at=datetime(2024, 3, 9),
                       completed_at=datetime(2024, 3, 1))]
    assert compute_velocity_by_priority(tasks)["High"].avg_days == 0


# ---------------------------------------------------------------------------
# Weighted pipeline
# ---------------------------------------------------------------------------

def test_pipeline_weights_are_exact():
    assert PIPELINE_WEIGHTS == {"Todo": 0.1, "In Progress": 0.5, "Done": 1.0}


def test_weighted_pipeline(make_task):
    tasks = [
        make_task("a", revenue=1000, status="Todo"),
        make_task("b", revenue=1000, status="In Progress"),
        make_task("c", revenue=1000, status="Done"),
        make_task("d", revenue=1000, status="Lost"),
    ]
    assert compute_weighted_pipeline(tasks) == pytest.approx(1600)


def test_weighted_pipeline_empty():
    assert compute_weighted_pipeline([]) == 0


def test_weighted_pipeline_custom_weights(make_task):
    tasks = [make_task("a", revenue=100, status="Todo")]
    assert compute_weighted_pipeline(tasks, {"Todo": 0.25}) == 25


# ---------------------------------------------------------------------------
# Weekly throughput
# ---------------------------------------------------------------------------

def test_throughput_groups_by_completion_week(make_task):
    tasks = [
        make_task("a", revenue=100, status="Done", completed_at=datetime(2024, 3, 7)),
        make_task("b", revenue=50, status="Done", completed_at=datetime(2024, 3, 5)),
        make_task("c", revenue=70, status="Done", completed_at=datetime(2024, 2, 29)),
        make_task("d", revenue=999, status="Todo"),
    ]
    weeks = compute_throughput_by_week(tasks)

    assert [w.week for w in weeks] == ["2024-W09", "2024-W10"]
    assert (weeks[0].count, weeks[0].revenue) == (1, 70)
    assert (weeks[1].count, weeks[1].revenue) == (2, 150)


def test_throughput_orders_across_year_boundary(make_task):
    tasks = [
        make_task("a", completed_at=datetime(2025, 1, 8)),
        make_task("b", completed_at=datetime(2024, 12, 18)),
        make_task("c", completed_at=datetime(2024, 12, 31)),
    ]
    assert [w.week for w in compute_throughput_by_week(tasks)] == [
        "2024-W51", "2025-W01", "2025-W02",
    ]


# ---------------------------------------------------------------------------
# Forecast
# ---------------------------------------------------------------------------

def test_forecast_needs_two_points():
    assert compute_forecast([], 4) == []
    assert compute_forecast(_series(10), 4) == []


def test_forecast_continues_linear_trend():
    points = compute_forecast(_series(10, 20), 2)
    assert [p.revenue for p in points] == pytest.approx([30, 40])
    assert [p.week for p in points] == ["+1", "+2"]


def test_forecast_default_horizon():
    assert len(compute_forecast(_series(5, 5, 5))) == 4


def test_forecast_never_negative():
    points = compute_forecast(_series(300, 200, 100), 4)
    assert [p.revenue for p in points] == pytest.approx([0, 0, 0, 0])


def test_forecast_flat_series():
    points = compute_forecast(_series(50, 50, 50), 3)
    assert [p.revenue for p in points] == pytest.approx([50, 50, 50])


# ---------------------------------------------------------------------------
# Cohorts
# ---------------------------------------------------------------------------

def test_cohort_revenue_groups_all_tasks(make_task):
    tasks = [
        make_task("a", revenue=100, priority="High", status="Todo", created_at=datetime(2024, 3, 4)),
        make_task("b", revenue=200, priority="High", status="Done", created_at=datetime(2024, 3, 6)),
        make_task("c", revenue=50, priority="Low", status="Done", created_at=datetime(2024, 3, 6)),
        make_task("d", revenue=10, priority="High", status="Done", created_at=datetime(2024, 3, 12)),
    ]
    cohorts = {(c.week, c.priority): c.revenue for c in compute_cohort_revenue(tasks)}
    assert cohorts == {
        ("2024-W10", "High"): 300,
        ("2024-W10", "Low"): 50,
        ("2024-W11", "High"): 10,
    }


def test_cohort_revenue_empty():
    assert compute_cohort_revenue([]) == []


# ---------------------------------------------------------------------------
# Overflow and loose inputs
# ---------------------------------------------------------------------------

def test_bucket_sums_that_overflow_report_zero(make_task):
    done = datetime(2024, 3, 7)
    tasks = [
        make_task("a", revenue=1e308, priority="High", status="Done",
                  created_at=datetime(2024, 3, 4), completed_at=done),
        make_task("b", revenue=1e308, priority="High", status="Done",
                  created_at=datetime(2024, 3, 4), completed_at=done),
    ]
    weeks = compute_throughput_by_week(tasks)
    cohorts = compute_cohort_revenue(tasks)

    assert weeks[0].count == 2
    assert math.isfinite(weeks[0].revenue)
    assert math.isfinite(cohorts[0].revenue)


def test_forecast_accepts_mappings():
    series = [{"week": "w1", "revenue": 10}, {"week": "w2", "revenue": 20}]
    assert [p.revenue for p in compute_forecast(series, 2)] == pytest.approx([30, 40])
    assert compute_forecast([{"week": "w1", "revenue": 10}], 4) == []


def test_forecast_truncates_fractional_horizon():
    assert len(compute_forecast(_series(10, 20), 2.5)) == 2
    assert compute_forecast(_series(10, 20), "soon") == []


def test_forecast_never_returns_infinity():
    points = compute_forecast(_series(0, 1e308, 1e308), 3)
    assert all(math.isfinite(p.revenue) for p in points)
