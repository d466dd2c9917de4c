"""
JSON serialization helpers for fluidcalc-mcp.

This module provides utilities for safe JSON serialization, particularly
handling special float values (inf, nan) that are not valid in JSON per RFC 7159.
"""

import math
import json
from typing import Any

import numpy as np
from pydantic import BaseModel


def sanitize_for_json(obj: Any) -> Any:
    """
    Recursively sanitize an object for JSON serialization.

    Replaces inf and nan float values with None, which serializes to null.
    Handles numpy scalars/arrays and pydantic models as well.

    Args:
        obj: Any Python object to sanitize

    Returns:
        Sanitized object safe for json.dumps

    Examples:
        >>> sanitize_for_json({'value': float('inf')})
        {'value': None}
        >>> sanitize_for_json([1.0, float('nan'), 3.0])
        [1.0, None, 3.0]
    """
    if obj is None:
        return None

    if isinstance(obj, (bool, np.bool_)):
        return bool(obj)

    if isinstance(obj, (int, str)):
        return obj

    if isinstance(obj, (float, np.floating, np.integer)):
        val = float(obj)
        if math.isnan(val) or math.isinf(val):
            return None
        return int(obj) if isinstance(obj, np.integer) else val

    if isinstance(obj, np.ndarray):
        return sanitize_for_json(obj.tolist())

    if isinstance(obj, BaseModel):
        return sanitize_for_json(obj.model_dump())

    if isinstance(obj, dict):
        return {k: sanitize_for_json(v) for k, v in obj.items()}

    if isinstance(obj, (list, tuple)):
        return [sanitize_for_json(v) for v in obj]

    # Fallback: convert to string
    return str(obj)


def safe_json_dumps(obj: Any, **kwargs) -> str:
    """
    Safely serialize an object to JSON string.

    Applies sanitization before serialization to handle inf/nan values.
    Non-ASCII unit labels (m³, Pa·s) are kept as-is unless ``ensure_ascii`` is passed.

    Examples:
        >>> safe_json_dumps({'value': float('inf')})
        '{"value": null}'
    """
    kwargs.setdefault("ensure_ascii", False)
    sanitized = sanitize_for_json(obj)
    return json.dumps(sanitized, **kwargs)


def is_valid_number(value: Any) -> bool:
    """
    Check if a value is a usable result: a real number that is neither inf nor nan.

    Args:
        value: Value to check

    Returns:
        True if value is a valid, finite number
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, np.integer, np.floating)):
        return False
    return math.isfinite(float(value))
