"""Per-task derived values: ROI and priority weight."""

import math
from numbers import Real
from typing import Iterable, List, Optional

from ..models.task import DerivedTask, Priority, Task, plain_value

PRIORITY_WEIGHTS = {
    Priority.HIGH.value: 3,
    Priority.MEDIUM.value: 2,
    Priority.LOW.value: 1,
}


def is_finite_number(value) -> bool:
    """True for real, finite numbers; bools do not count."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def compute_roi(revenue, time_taken) -> Optional[float]:
    """Revenue per unit of time, or None when it is not well defined.

    None is returned for non-numeric or non-finite inputs and for a
    non-positive time; the result is otherwise always finite.
    """
    if not is_finite_number(revenue) or not is_finite_number(time_taken):
        return None
    if time_taken <= 0:
        return None

    try:
        roi = revenue / time_taken
    except OverflowError:
        return None
    # Overflow on huge revenue over tiny time
    if not math.isfinite(roi):
        return None
    return roi


def compute_priority_weight(priority) -> int:
    """High=3, Medium=2, anything else=1."""
    value = plain_value(priority)
    if not isinstance(value, str):
        return 1
    return PRIORITY_WEIGHTS.get(value, 1)


def with_derived(task: Task) -> DerivedTask:
    return DerivedTask(
        task=task,
        roi=compute_roi(task.revenue, task.time_taken),
        priority_weight=compute_priority_weight(task.priority),
    )


def derive_all(tasks: Iterable[Task]) -> List[DerivedTask]:
    return [with_derived(task) for task in tasks]
