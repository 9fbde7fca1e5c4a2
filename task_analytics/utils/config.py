"""Configuration management."""

import copy
import json
from pathlib import Path
from typing import Any, Dict

import yaml


def load_config(config_path: str) -> Dict[str, Any]:
    """Load configuration from YAML or JSON file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path, 'r') as f:
        if path.suffix.lower() in ['.yaml', '.yml']:
            data = yaml.safe_load(f)
        elif path.suffix.lower() == '.json':
            data = json.load(f)
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")
    return data


def get_default_config() -> Dict[str, Any]:
    """Get default configuration."""
    return {
        'analytics': {
            'forecast_horizon_weeks': 4,
            'top_n': 10,
            'grade_thresholds': {
                'excellent': 500,
                'good': 200,
            },
            'pipeline_weights': {
                'Todo': 0.1,
                'In Progress': 0.5,
                'Done': 1.0,
            },
        },
        'generator': {
            'task_count': 50,
            'seed': 42,
            'history_weeks': 12,
        },
    }


def merge_config(defaults: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge overrides onto a copy of defaults."""
    merged = copy.deepcopy(defaults)
    for key, value in (overrides or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def resolve_config(config_path: str = None) -> Dict[str, Any]:
    """Defaults, overlaid with the given file when it exists."""
    defaults = get_default_config()
    if config_path and Path(config_path).exists():
        return merge_config(defaults, load_config(config_path))
    return defaults
