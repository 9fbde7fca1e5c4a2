"""Analytics report assembled from a task snapshot."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from ..engine import (
    compute_cohort_revenue,
    compute_forecast,
    compute_funnel,
    compute_metrics,
    compute_throughput_by_week,
    compute_velocity_by_priority,
    compute_weighted_pipeline,
    derive_all,
    sort_tasks,
)
from ..models.analytics import (
    CohortRevenue,
    ForecastPoint,
    FunnelCounts,
    Metrics,
    VelocityStats,
    WeeklyThroughput,
)
from ..models.task import DerivedTask, Task
from ..utils.datetime_utils import utc_now


@dataclass
class AnalyticsReport:
    """Every analytics view of one task snapshot."""

    run_id: str
    timestamp: datetime
    task_count: int
    metrics: Metrics
    ranked: List[DerivedTask]
    funnel: FunnelCounts
    velocity: Dict[str, VelocityStats]
    weighted_pipeline: float
    throughput: List[WeeklyThroughput]
    forecast: List[ForecastPoint]
    cohorts: List[CohortRevenue] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert report to dictionary for JSON export."""
        return {
            'run_id': self.run_id,
            'timestamp': self.timestamp.isoformat(),
            'task_count': self.task_count,
            'metrics': self.metrics.to_dict(),
            'ranked': [t.to_dict() for t in self.ranked],
            'funnel': self.funnel.to_dict(),
            'velocity': {k: v.to_dict() for k, v in self.velocity.items()},
            'weighted_pipeline': self.weighted_pipeline,
            'throughput': [w.to_dict() for w in self.throughput],
            'forecast': [p.to_dict() for p in self.forecast],
            'cohorts': [c.to_dict() for c in self.cohorts],
        }

    def to_human_readable(self) -> str:
        """Generate human-readable report."""
        m = self.metrics
        lines = [
            f"=== Analytics Run: {self.run_id} ===",
            f"Timestamp: {self.timestamp}",
            f"Tasks: {self.task_count}",
            "",
            "Metrics:",
            f"  Total revenue: {m.total_revenue:.2f}",
            f"  Total time taken: {m.total_time_taken:.2f}",
            f"  Time efficiency: {m.time_efficiency_pct:.1f}%",
            f"  Revenue per hour: {m.revenue_per_hour:.2f}",
            f"  Average ROI: {m.average_roi:.2f}",
            f"  Grade: {m.performance_grade}",
            "",
            "Top Tasks:",
        ]

        for rank, task in enumerate(self.ranked, start=1):
            roi = f"{task.roi:.2f}" if task.roi is not None else "n/a"
            lines.append(f"  {rank:>2}. {task.title} [{task.priority}, {task.status}] ROI {roi}")

        f = self.funnel
        lines.extend([
            "",
            "Funnel:",
            f"  Todo: {f.todo}  In Progress: {f.in_progress}  Done: {f.done}",
            f"  Todo -> In Progress: {f.conversion_todo_to_in_progress:.1%}",
            f"  In Progress -> Done: {f.conversion_in_progress_to_done:.2f}",
            "",
            "Velocity (days to complete):",
        ])

        for priority, stats in self.velocity.items():
            lines.append(f"  {priority}: avg {stats.avg_days:.1f}, median {stats.median_days}")

        lines.extend([
            "",
            f"Weighted pipeline: {self.weighted_pipeline:.2f}",
            "",
            "Weekly Throughput:",
        ])

        for week in self.throughput:
            lines.append(f"  {week.week}: {week.count} done, revenue {week.revenue:.2f}")

        lines.extend(["", "Forecast:"])
        if not self.forecast:
            lines.append("  Not enough history")
        for point in self.forecast:
            lines.append(f"  {point.week} week(s): revenue {point.revenue:.2f}")

        lines.extend(["", "Cohorts:"])
        for cohort in sorted(self.cohorts, key=lambda c: (c.week, c.priority)):
            lines.append(f"  {cohort.week} {cohort.priority}: {cohort.revenue:.2f}")

        lines.append("=" * 50)

        return "\n".join(lines)


def build_report(
    tasks: Sequence[Task],
    config: Optional[dict] = None,
    now: Optional[datetime] = None,
) -> AnalyticsReport:
    """Run every analytics view over one snapshot of tasks."""
    analytics_config = (config or {}).get('analytics', {})
    thresholds = analytics_config.get('grade_thresholds', {})
    horizon = analytics_config.get('forecast_horizon_weeks', 4)
    top_n = analytics_config.get('top_n', 10)

    ranked = sort_tasks(derive_all(tasks))
    if top_n is not None:
        ranked = ranked[:top_n]

    throughput = compute_throughput_by_week(tasks)

    return AnalyticsReport(
        run_id=str(uuid.uuid4())[:8],
        timestamp=now or utc_now(),
        task_count=len(tasks),
        metrics=compute_metrics(
            tasks,
            excellent=thresholds.get('excellent', 500),
            good=thresholds.get('good', 200),
        ),
        ranked=ranked,
        funnel=compute_funnel(tasks),
        velocity=compute_velocity_by_priority(tasks),
        weighted_pipeline=compute_weighted_pipeline(tasks, analytics_config.get('pipeline_weights')),
        throughput=throughput,
        forecast=compute_forecast(throughput, horizon),
        cohorts=compute_cohort_revenue(tasks),
    )
