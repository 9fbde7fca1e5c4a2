"""Utility functions."""

from .config import get_default_config, load_config, merge_config, resolve_config
from .datetime_utils import days_between, get_week_number, parse_timestamp, week_key

__all__ = [
    'load_config', 'get_default_config', 'merge_config', 'resolve_config',
    'days_between', 'get_week_number', 'parse_timestamp', 'week_key',
]
