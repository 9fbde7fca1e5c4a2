"""Pure analytics over task collections."""

from .aggregates import (
    compute_average_roi,
    compute_metrics,
    compute_performance_grade,
    compute_revenue_per_hour,
    compute_time_efficiency,
    compute_total_revenue,
    compute_total_time_taken,
)
from .derivation import compute_priority_weight, compute_roi, derive_all, with_derived
from .ranking import filter_tasks, sort_tasks
from .timeseries import (
    compute_cohort_revenue,
    compute_forecast,
    compute_funnel,
    compute_throughput_by_week,
    compute_velocity_by_priority,
    compute_weighted_pipeline,
)

__all__ = [
    'compute_roi', 'compute_priority_weight', 'with_derived', 'derive_all',
    'sort_tasks', 'filter_tasks',
    'compute_total_revenue', 'compute_total_time_taken', 'compute_time_efficiency',
    'compute_revenue_per_hour', 'compute_average_roi', 'compute_performance_grade',
    'compute_metrics',
    'compute_funnel', 'compute_velocity_by_priority', 'compute_weighted_pipeline',
    'compute_throughput_by_week', 'compute_forecast', 'compute_cohort_revenue',
]
