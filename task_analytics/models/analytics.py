"""Result records produced by the analytics engine."""

from dataclasses import asdict, dataclass
from typing import Any, Dict

from .task import PerformanceGrade


@dataclass
class Metrics:
    """Aggregate snapshot of a task collection."""

    total_revenue: float = 0.0
    total_time_taken: float = 0.0
    time_efficiency_pct: float = 0.0
    revenue_per_hour: float = 0.0
    average_roi: float = 0.0
    performance_grade: str = PerformanceGrade.NEEDS_IMPROVEMENT.value

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class FunnelCounts:
    """Status counts and stage-to-stage conversion ratios."""

    todo: int
    in_progress: int
    done: int
    conversion_todo_to_in_progress: float
    conversion_in_progress_to_done: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class VelocityStats:
    """Days from creation to completion for one priority bucket."""

    avg_days: float = 0.0
    median_days: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class WeeklyThroughput:
    """Completed tasks and their revenue for one ISO week."""

    week: str
    revenue: float
    count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ForecastPoint:
    """Predicted revenue for a week after the observed series."""

    week: str
    revenue: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class CohortRevenue:
    """Revenue of tasks created in one ISO week with one priority."""

    week: str
    priority: str
    revenue: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
