"""
Configuration system for the target-size image compressor.
Provides the search tables (resolution ladders, quality ladders, score thresholds)
and the size range presets offered to users.
"""

import copy
from typing import Dict, Any, List, Tuple


KB = 1024
MB = 1024 * KB


# Default configuration - every ladder and threshold used by the search
DEFAULT_CONFIG = {
    # Working resolution: wider sources are scaled down to this width first
    "width_limit": 1200,

    # Output codec
    "codec": {
        "extension": ".jpg",
        "mime": "image/jpeg",
    },

    # "Under X" targets: first fit wins
    "under_target": {
        "scales": [1.0, 0.9, 0.8, 0.7, 0.6, 0.5, 0.4],
        "qualities": [0.9, 0.8, 0.7, 0.6, 0.5, 0.4, 0.3, 0.2, 0.1],
        "min_dimension": 100,
        "fallback": {
            "scale": 0.3,
            "min_dimension": 200,
            "quality": 0.1,
        },
    },

    # "min-max" targets: best score wins
    "range_fit": {
        "large_range_threshold": 500 * KB,
        "min_dimension": 300,
        "refine_below_score": 500,
        "large": {
            "scales": [1.0, 0.98, 0.95, 0.92, 0.9, 0.87, 0.85, 0.82, 0.8, 0.75, 0.7],
            "qualities": [0.98, 0.95, 0.92, 0.9, 0.87, 0.85, 0.82, 0.8, 0.77,
                          0.75, 0.72, 0.7, 0.67, 0.65, 0.6, 0.55, 0.5],
            "early_exit_score": 1200,
        },
        "small": {
            "scales": [1.0, 0.9, 0.8, 0.7, 0.6, 0.5],
            "qualities": [0.9, 0.8, 0.7, 0.6, 0.5, 0.4, 0.3, 0.2],
            "early_exit_score": 1000,
        },
        "scoring": {
            "in_range_base": 1000,
            "in_range_span": 500,
            "upper_bonus": 200,
            "upper_position": 0.7,  # Bonus applies above this range position
            "under_base": 200,
            "under_span": 100,
        },
    },

    # Quality bisection used when a large range search comes up short
    "refiner": {
        "low_quality": 0.1,
        "high_quality": 0.98,
        "max_iterations": 15,
        "min_gap": 0.02,
    },
}


# Preset values shown in the UI, in display order
RANGE_PRESETS: List[Tuple[str, str]] = [
    ("0-100", "Under 100 KB"),
    ("0-200", "Under 200 KB"),
    ("0-500", "Under 500 KB"),
    ("1024", "Under 1 MB"),
    ("20-50", "20-50 KB"),
    ("50-100", "50-100 KB"),
    ("100-200", "100-200 KB"),
    ("200-500", "200-500 KB"),
    ("500-1024", "500 KB - 1 MB"),
]

DEFAULT_PRESET = "100-200"


def get_default_config() -> Dict[str, Any]:
    """Return a copy of the default configuration."""
    return copy.deepcopy(DEFAULT_CONFIG)


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge override config into base config.

    Args:
        base: Base configuration dictionary
        override: Override values to apply

    Returns:
        Merged configuration
    """
    result = copy.deepcopy(base)

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = copy.deepcopy(value)

    return result
