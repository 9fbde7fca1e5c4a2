"""Task ingestion: boundary normalization and seed data."""

from .generator import SalesTaskGenerator
from .normalizer import load_tasks, normalize_record, normalize_records, task_to_record, tasks_to_records

__all__ = [
    'SalesTaskGenerator', 'load_tasks', 'normalize_record', 'normalize_records',
    'task_to_record', 'tasks_to_records',
]
