"""Scalar summary statistics over a task collection.

Every function here is a pure reduction that returns a zero/neutral value
for an empty collection and never raises on malformed numbers.
"""

import math
from typing import Iterable, Sequence

from ..models.analytics import Metrics
from ..models.task import PerformanceGrade, Status, Task
from .derivation import compute_roi, is_finite_number

EXCELLENT_THRESHOLD = 500
GOOD_THRESHOLD = 200


def finite_sum(values: Iterable) -> float:
    """Sum of the finite numeric values; anything else counts as zero."""
    total = sum(v for v in values if is_finite_number(v))
    return float(total) if is_finite_number(total) else 0.0


def compute_total_revenue(tasks: Sequence[Task]) -> float:
    """Revenue of Done tasks only."""
    return finite_sum(t.revenue for t in tasks if t.status == Status.DONE)


def compute_total_time_taken(tasks: Sequence[Task]) -> float:
    """Time across all tasks, whatever their status."""
    return finite_sum(t.time_taken for t in tasks)


def compute_time_efficiency(tasks: Sequence[Task]) -> float:
    """Percentage of tasks that are Done."""
    if not tasks:
        return 0.0
    done = sum(1 for t in tasks if t.status == Status.DONE)
    return done / len(tasks) * 100


def compute_revenue_per_hour(tasks: Sequence[Task]) -> float:
    revenue = compute_total_revenue(tasks)
    time_taken = compute_total_time_taken(tasks)
    if time_taken <= 0:
        return 0.0
    rate = revenue / time_taken
    return rate if math.isfinite(rate) else 0.0


def compute_average_roi(tasks: Sequence[Task]) -> float:
    """Mean ROI over tasks whose ROI is defined.

    Tasks with an undefined ROI are left out of the denominator as well.
    """
    rois = [compute_roi(t.revenue, t.time_taken) for t in tasks]
    rois = [r for r in rois if r is not None]
    if not rois:
        return 0.0
    mean = sum(rois) / len(rois)
    return mean if math.isfinite(mean) else 0.0


def compute_performance_grade(
    avg_roi: float,
    excellent: float = EXCELLENT_THRESHOLD,
    good: float = GOOD_THRESHOLD,
) -> str:
    """Excellent above ``excellent``; Good from ``good`` up to and
    including ``excellent``; Needs Improvement otherwise."""
    if avg_roi > excellent:
        return PerformanceGrade.EXCELLENT.value
    if avg_roi >= good:
        return PerformanceGrade.GOOD.value
    return PerformanceGrade.NEEDS_IMPROVEMENT.value


def compute_metrics(
    tasks: Sequence[Task],
    excellent: float = EXCELLENT_THRESHOLD,
    good: float = GOOD_THRESHOLD,
) -> Metrics:
    """Full aggregate snapshot of a task collection."""
    if not tasks:
        return Metrics()

    average_roi = compute_average_roi(tasks)
    return Metrics(
        total_revenue=compute_total_revenue(tasks),
        total_time_taken=compute_total_time_taken(tasks),
        time_efficiency_pct=compute_time_efficiency(tasks),
        revenue_per_hour=compute_revenue_per_hour(tasks),
        average_roi=average_roi,
        performance_grade=compute_performance_grade(average_roi, excellent, good),
    )
