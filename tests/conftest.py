"""
Pytest configuration and shared fixtures.

Fixtures available to all tests:
  • make_task(...)  — build a single Task with sensible defaults
  • sample_tasks    — a small mixed-status collection
"""

from __future__ import annotations

import os
import sys
from datetime import datetime

import pytest

# Ensure the project root is on the path so package and main.py imports resolve.
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from task_analytics.models.task import Task  # noqa: E402


def _task(
    title: str = "Task",
    revenue: float = 1000.0,
    time_taken: float = 10.0,
    priority: str = "Medium",
    status: str = "Todo",
    created_at: datetime | str | None = datetime(2024, 3, 4, 9, 0),
    completed_at: datetime | str | None = None,
    task_id: str | None = None,
) -> Task:
    return Task(
        task_id=task_id or f"id-{title}",
        title=title,
        revenue=revenue,
        time_taken=time_taken,
        priority=priority,
        status=status,
        created_at=created_at,
        completed_at=completed_at,
    )


@pytest.fixture
def make_task():
    return _task


@pytest.fixture
def sample_tasks():
    return [
        _task("Acme renewal", 1000, 10, "High", "Done",
              datetime(2024, 3, 4), datetime(2024, 3, 8)),
        _task("Globex demo", 500, 10, "Low", "Done",
              datetime(2024, 3, 5), datetime(2024, 3, 15)),
        _task("Initech proposal", 2000, 5, "Medium", "In Progress",
              datetime(2024, 3, 11)),
        _task("Hooli follow up", 300, 3, "Low", "Todo",
              datetime(2024, 3, 12)),
    ]
