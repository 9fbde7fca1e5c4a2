"""Task data models."""

from dataclasses import asdict, dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from ..utils.datetime_utils import utc_now


class Priority(str, Enum):
    """Task priority levels."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class Status(str, Enum):
    """Task workflow states."""

    TODO = "Todo"
    IN_PROGRESS = "In Progress"
    DONE = "Done"


class PerformanceGrade(str, Enum):
    """Grade assigned from the average ROI of a task collection."""

    EXCELLENT = "Excellent"
    GOOD = "Good"
    NEEDS_IMPROVEMENT = "Needs Improvement"


@dataclass
class Task:
    """A sales work item as supplied by the calling layer.

    Priority and status are kept as plain strings so unrecognized values
    reach the engine untouched; the enums above compare equal to them.
    """

    task_id: str
    title: str
    revenue: float
    time_taken: float
    priority: str = Priority.LOW.value
    status: str = Status.TODO.value
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    notes: Optional[str] = None

    def __post_init__(self):
        """Initialize default created_at if not provided."""
        if self.created_at is None:
            self.created_at = utc_now()

    def to_dict(self) -> Dict[str, Any]:
        """Convert task to dictionary for JSON export."""
        data = asdict(self)
        data['priority'] = plain_value(self.priority)
        data['status'] = plain_value(self.status)
        return data


@dataclass(frozen=True)
class DerivedTask:
    """A task plus its computed ROI and priority weight.

    Regenerable from the wrapped task at any time. Task fields are
    readable directly on the derived record (``derived.title``).
    """

    task: Task
    roi: Optional[float]
    priority_weight: int

    def __getattr__(self, name: str) -> Any:
        if name == 'task':
            raise AttributeError(name)
        return getattr(self.task, name)

    def to_dict(self) -> Dict[str, Any]:
        data = self.task.to_dict()
        data['roi'] = self.roi
        data['priority_weight'] = self.priority_weight
        return data


def plain_value(value: Any) -> Any:
    """Unwrap enum members to their raw value."""
    return value.value if isinstance(value, Enum) else value
