"""Funnel, velocity, weekly throughput, forecast and cohort analytics."""

import math
from collections import defaultdict
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Union

from ..models.analytics import (
    CohortRevenue,
    ForecastPoint,
    FunnelCounts,
    VelocityStats,
    WeeklyThroughput,
)
from ..models.task import Priority, Status, Task, plain_value
from ..utils.datetime_utils import days_between, week_key
from .aggregates import finite_sum
from .derivation import is_finite_number

PIPELINE_WEIGHTS = {
    Status.TODO.value: 0.1,
    Status.IN_PROGRESS.value: 0.5,
    Status.DONE.value: 1.0,
}

DEFAULT_HORIZON_WEEKS = 4


def compute_funnel(tasks: Sequence[Task]) -> FunnelCounts:
    """Status counts plus Todo->In Progress and In Progress->Done ratios.

    The first ratio counts everything that has left Todo; the base is the
    number of tasks carrying one of the three known statuses.
    """
    todo = sum(1 for t in tasks if t.status == Status.TODO)
    in_progress = sum(1 for t in tasks if t.status == Status.IN_PROGRESS)
    done = sum(1 for t in tasks if t.status == Status.DONE)
    base = todo + in_progress + done

    return FunnelCounts(
        todo=todo,
        in_progress=in_progress,
        done=done,
        conversion_todo_to_in_progress=(in_progress + done) / base if base else 0.0,
        conversion_in_progress_to_done=done / in_progress if in_progress else 0.0,
    )


def _safe_week_key(value) -> Optional[str]:
    try:
        return week_key(value)
    except (TypeError, ValueError):
        return None


def compute_velocity_by_priority(tasks: Sequence[Task]) -> Dict[str, VelocityStats]:
    """Average and median days to completion for each priority.

    The median is the element at ``n // 2`` of the ascending durations, so
    even-sized buckets report the upper of the two middle values.
    """
    groups: Dict[str, List[int]] = {p.value: [] for p in Priority}

    for task in tasks:
        if not task.completed_at:
            continue
        bucket = groups.get(plain_value(task.priority))
        if bucket is None:
            continue
        try:
            bucket.append(days_between(task.created_at, task.completed_at))
        except (TypeError, ValueError):
            continue

    stats = {}
    for priority, durations in groups.items():
        if not durations:
            stats[priority] = VelocityStats(avg_days=0, median_days=0)
            continue
        ordered = sorted(durations)
        stats[priority] = VelocityStats(
            avg_days=sum(ordered) / len(ordered),
            median_days=ordered[len(ordered) // 2],
        )
    return stats


def compute_weighted_pipeline(
    tasks: Sequence[Task],
    weights: Optional[Mapping[str, float]] = None,
) -> float:
    """Expected revenue: each task's revenue times its status weight.

    Unrecognized statuses weigh 0.
    """
    weights = PIPELINE_WEIGHTS if weights is None else weights
    return finite_sum(
        t.revenue * weights.get(plain_value(t.status), 0)
        for t in tasks
        if is_finite_number(t.revenue)
    )


def compute_throughput_by_week(tasks: Sequence[Task]) -> List[WeeklyThroughput]:
    """Completed task count and revenue per ISO week of completion,
    ascending by week."""
    revenues: Dict[str, List] = defaultdict(list)

    for task in tasks:
        if not task.completed_at:
            continue
        key = _safe_week_key(task.completed_at)
        if key is None:
            continue
        revenues[key].append(task.revenue)

    return [
        WeeklyThroughput(week=key, revenue=finite_sum(revenues[key]), count=len(revenues[key]))
        for key in sorted(revenues)
    ]


def _fit_line(values: Sequence[float]) -> Tuple[float, float]:
    """Least-squares slope and intercept of values against 0..n-1."""
    n = len(values)
    sum_x = sum_y = sum_xy = sum_xx = 0.0
    for x, y in enumerate(values):
        sum_x += x
        sum_y += y
        sum_xy += x * y
        sum_xx += x * x

    denominator = n * sum_xx - sum_x * sum_x
    if denominator == 0:
        denominator = 1
    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n
    return slope, intercept


def _point_revenue(point) -> float:
    revenue = point.get('revenue') if isinstance(point, Mapping) else getattr(point, 'revenue', None)
    return float(revenue) if is_finite_number(revenue) else 0.0


def compute_forecast(
    series: Sequence[Union[WeeklyThroughput, Mapping[str, float]]],
    horizon_weeks: int = DEFAULT_HORIZON_WEEKS,
) -> List[ForecastPoint]:
    """Extend a weekly revenue series with a linear trend.

    ``series`` holds ``WeeklyThroughput`` records or ``{"week", "revenue"}``
    mappings. Needs at least two observed weeks; predictions never go below
    zero. Points are labelled by their distance from the last observed week.
    """
    try:
        horizon_weeks = int(horizon_weeks)
    except (TypeError, ValueError, OverflowError):
        return []
    if len(series) < 2 or horizon_weeks <= 0:
        return []

    values = [_point_revenue(p) for p in series]
    slope, intercept = _fit_line(values)
    n = len(values)

    forecast = []
    for step in range(1, horizon_weeks + 1):
        x = n - 1 + step
        predicted = slope * x + intercept
        if not math.isfinite(predicted):
            predicted = 0.0
        forecast.append(ForecastPoint(
            week=f"+{step}",
            revenue=max(0.0, predicted),
        ))
    return forecast


def compute_cohort_revenue(tasks: Sequence[Task]) -> List[CohortRevenue]:
    """Revenue of all tasks grouped by creation week and priority."""
    revenues: Dict[Tuple[str, str], List] = defaultdict(list)

    for task in tasks:
        key = _safe_week_key(task.created_at)
        if key is None:
            continue
        revenues[(key, plain_value(task.priority))].append(task.revenue)

    return [
        CohortRevenue(week=week, priority=priority, revenue=finite_sum(values))
        for (week, priority), values in revenues.items()
    ]
