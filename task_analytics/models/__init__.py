"""Task and analytics result models."""

from .analytics import (
    CohortRevenue,
    ForecastPoint,
    FunnelCounts,
    Metrics,
    VelocityStats,
    WeeklyThroughput,
)
from .task import DerivedTask, PerformanceGrade, Priority, Status, Task

__all__ = [
    'Task', 'DerivedTask', 'Priority', 'Status', 'PerformanceGrade',
    'Metrics', 'FunnelCounts', 'VelocityStats', 'WeeklyThroughput',
    'ForecastPoint', 'CohortRevenue',
]
