"""Boundary validation for task records from untrusted sources.

Decoded JSON is turned into ``Task`` objects here, before anything reaches
the analytics engine. Records that cannot be salvaged are dropped with a
warning; recoverable fields are coerced to safe defaults.
"""

import json
import logging
import math
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..models.task import Priority, Status, Task, plain_value
from ..utils.datetime_utils import parse_timestamp, utc_now

logger = logging.getLogger(__name__)

_PRIORITIES = {p.value.lower(): p.value for p in Priority}
_STATUSES = {s.value.lower(): s.value for s in Status}
_STATUSES.update({'in_progress': Status.IN_PROGRESS.value, 'inprogress': Status.IN_PROGRESS.value})


def _field(record: Mapping[str, Any], *names: str) -> Any:
    for name in names:
        if record.get(name) is not None:
            return record[name]
    return None


def _to_float(value: Any) -> Optional[float]:
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def _to_timestamp(value: Any) -> Optional[datetime]:
    if value is None or value == '':
        return None
    try:
        return parse_timestamp(value)
    except (TypeError, ValueError):
        return None


def _coerce_choice(value: Any, choices: Dict[str, str], default: str, label: str, task_id: str) -> str:
    key = str(plain_value(value)).strip().lower() if value is not None else ''
    if key in choices:
        return choices[key]
    logger.warning("Task %s: unknown %s %r, using %s", task_id, label, value, default)
    return default


def normalize_record(record: Any, now: Optional[datetime] = None) -> Optional[Task]:
    """Convert one raw record to a Task, or None if it must be rejected.

    Rejected: non-mappings, records without a title or revenue, and
    records whose time taken is missing, non-numeric or not positive.
    """
    if not isinstance(record, Mapping):
        logger.warning("Skipping non-object task record: %r", record)
        return None

    title = _field(record, 'title')
    if not title:
        logger.warning("Skipping task record without title: %r", record.get('id'))
        return None

    raw_revenue = _field(record, 'revenue')
    if raw_revenue is None:
        logger.warning("Skipping task %r: missing revenue", title)
        return None

    time_taken = _to_float(_field(record, 'timeTaken', 'time_taken'))
    if time_taken is None or time_taken <= 0:
        logger.warning("Skipping task %r: time taken must be a positive number", title)
        return None

    task_id = _field(record, 'id', 'task_id')
    task_id = str(task_id) if task_id is not None else str(uuid.uuid4())

    revenue = _to_float(raw_revenue)
    if revenue is None:
        logger.warning("Task %s: non-numeric revenue %r, using 0", task_id, raw_revenue)
        revenue = 0.0

    created_at = _to_timestamp(_field(record, 'createdAt', 'created_at'))
    if created_at is None:
        created_at = now or utc_now()

    raw_completed = _field(record, 'completedAt', 'completed_at')
    completed_at = _to_timestamp(raw_completed)
    if raw_completed is not None and completed_at is None:
        logger.warning("Task %s: unparseable completion time %r dropped", task_id, raw_completed)

    notes = _field(record, 'notes')

    return Task(
        task_id=task_id,
        title=str(title),
        revenue=revenue,
        time_taken=time_taken,
        priority=_coerce_choice(record.get('priority'), _PRIORITIES, Priority.LOW.value, 'priority', task_id),
        status=_coerce_choice(record.get('status'), _STATUSES, Status.TODO.value, 'status', task_id),
        created_at=created_at,
        completed_at=completed_at,
        notes=str(notes) if notes is not None else None,
    )


def normalize_records(records: Any, now: Optional[datetime] = None) -> List[Task]:
    """Normalize a decoded collection; anything but a list yields []."""
    if not isinstance(records, list):
        logger.warning("Expected a list of task records, got %s", type(records).__name__)
        return []

    now = now or utc_now()
    tasks = []
    for record in records:
        task = normalize_record(record, now=now)
        if task is not None:
            tasks.append(task)

    dropped = len(records) - len(tasks)
    if dropped:
        logger.info("Normalized %d task records, dropped %d", len(tasks), dropped)
    return tasks


def load_tasks(tasks_path: str, now: Optional[datetime] = None) -> List[Task]:
    """Read and normalize tasks from a JSON file.

    The file holds either a list of records or an object with a ``tasks``
    list.
    """
    path = Path(tasks_path)
    if not path.exists():
        raise FileNotFoundError(f"Tasks file not found: {tasks_path}")

    with open(path, 'r') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in tasks file {tasks_path}: {e}") from e

    if isinstance(data, dict):
        data = data.get('tasks', [])

    tasks = normalize_records(data, now=now)
    logger.debug("Loaded %d tasks from %s", len(tasks), tasks_path)
    return tasks


def task_to_record(task: Task) -> Dict[str, Any]:
    """Serialize a Task to the camelCase record shape accepted above."""
    record = {
        'id': task.task_id,
        'title': task.title,
        'revenue': task.revenue,
        'timeTaken': task.time_taken,
        'priority': plain_value(task.priority),
        'status': plain_value(task.status),
        'createdAt': task.created_at.isoformat() if task.created_at else None,
    }
    if task.completed_at:
        record['completedAt'] = task.completed_at.isoformat()
    if task.notes is not None:
        record['notes'] = task.notes
    return record


def tasks_to_records(tasks: Iterable[Task]) -> List[Dict[str, Any]]:
    return [task_to_record(t) for t in tasks]
