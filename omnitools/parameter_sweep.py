"""Sweep one input of a calculation category over a range."""

import logging
from typing import Any, Dict, Optional

import numpy as np

from calculators import evaluate, get_category
from calculators.catalog import UNIT_CONVERSION
from utils.formatting import format_result_value
from utils.json_helpers import safe_json_dumps

logger = logging.getLogger("fluidcalc-mcp.parameter_sweep")


def parameter_sweep(
    category: str,
    variable: str,
    start: float,
    stop: float,
    n: int,
    inputs: Optional[Dict[str, Any]] = None,
    units: Optional[Dict[str, str]] = None,
) -> str:
    """Evaluate a category for evenly spaced values of one input.

    The other inputs stay fixed. Points where the inputs are incomplete (e.g. the swept
    value is 0) or the formula is invalid report a null value.

    Args:
        category: Category id (see calculator_catalog)
        variable: Input field to sweep
        start: Start value for sweep
        stop: Stop value for sweep
        n: Number of points in sweep
        inputs: Values of the other fields
        units: Unit labels; the swept values are in the unit chosen for ``variable``

    Returns:
        JSON string with sweep results
    """
    try:
        info = get_category(category)
        allowed = ["value"] if info.id == UNIT_CONVERSION else info.field_names
        if variable not in allowed:
            return safe_json_dumps({
                "error": f"Invalid variable '{variable}' for {info.id}. Valid variables: {', '.join(allowed)}"
            })
        if n < 1:
            return safe_json_dumps({"error": "n must be at least 1"})

        base_inputs = dict(inputs or {})
        results = []
        for value in np.linspace(start, stop, n):
            point_inputs = {**base_inputs, variable: float(value)}
            result = evaluate(info.id, point_inputs, units)
            results.append({
                variable: round(float(value), 6),
                "value": result.value if result.is_valid else None,
                "formatted_value": format_result_value(result.value, info.id) if result.is_valid else "",
            })

        return safe_json_dumps({
            "category": info.id,
            "sweep_variable": variable,
            "sweep_range": {"start": start, "stop": stop, "n": n},
            "unit": info.output_unit_for(base_inputs),
            "results": results,
            "summary": {
                "total_points": len(results),
                "successful_points": len([r for r in results if r["value"] is not None]),
                "failed_points": len([r for r in results if r["value"] is None]),
            },
        })

    except Exception as e:
        logger.error(f"Error in parameter_sweep: {e}", exc_info=True)
        return safe_json_dumps({"error": str(e)})
