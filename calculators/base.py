"""
Calculator registry and the shared evaluation pipeline.

Every category id maps to exactly one calculator. Closed-form categories register a
pure function of their SI inputs with ``@formula``; the pipeline around it handles the
presence check, the SI conversion, invalid numeric outcomes and the derivation trace.
"""

import functools
import logging
from typing import Callable, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field

from utils.input_resolver import InputResolver
from utils.json_helpers import is_valid_number

from .catalog import CalculationCategory
from .models import CalculationResult

logger = logging.getLogger("fluidcalc-mcp.calculators")

# Errors a formula can raise on nonsensical inputs (zero divisors, log of a non-positive
# number, fractional power of a negative number)
ARITHMETIC_ERRORS = (ZeroDivisionError, ValueError, OverflowError, TypeError)

Calculator = Callable[[CalculationCategory, Mapping, Mapping], CalculationResult]

_CALCULATORS: Dict[str, Calculator] = {}


class FormulaOutcome(BaseModel):
    """What a formula returns: the value plus the text around the input listing."""

    value: float
    header: List[str] = Field(default_factory=list)
    values_heading: str = "Valores em SI:"
    extra_values: List[str] = Field(default_factory=list)
    steps: List[str] = Field(default_factory=list)
    alternate_units: Dict[str, float] = Field(default_factory=dict)
    classification: Optional[str] = None


def register(category_id: str):
    """Register a calculator taking (category, inputs, units)."""
    def decorator(fn: Calculator) -> Calculator:
        if category_id in _CALCULATORS:
            raise ValueError(f"Calculator already registered for '{category_id}'")
        _CALCULATORS[category_id] = fn
        return fn
    return decorator


def formula(category_id: str):
    """Register a closed-form formula over a dict of SI inputs.

    The decorated function is returned unchanged so it can be called directly.
    """
    def decorator(fn: Callable[[Dict[str, float]], FormulaOutcome]):
        @functools.wraps(fn)
        def calculate(category, inputs, units):
            return run_formula(category, inputs, units, fn)
        register(category_id)(calculate)
        return fn
    return decorator


def get_calculator(category_id: str) -> Calculator:
    return _CALCULATORS[category_id]


def registered_categories() -> List[str]:
    return list(_CALCULATORS)


def not_ready(category: CalculationCategory, output_unit: str, missing: List[str]) -> CalculationResult:
    return CalculationResult(category_id=category.id, value=None, output_unit=output_unit,
                             missing_fields=missing)


def invalid(category: CalculationCategory, output_unit: str, value: float = float("nan"),
            si_inputs: Optional[Dict[str, float]] = None) -> CalculationResult:
    return CalculationResult(category_id=category.id, value=value, output_unit=output_unit,
                             si_inputs=si_inputs or {})


def run_formula(category: CalculationCategory, inputs: Mapping, units: Mapping,
                fn: Callable[[Dict[str, float]], FormulaOutcome]) -> CalculationResult:
    """Presence check, SI conversion, formula and derivation for one category."""
    output_unit = category.output_unit_for(inputs)
    resolver = InputResolver(category.id)
    si = resolver.resolve_all(category.input_fields, inputs, units)
    if si is None:
        return not_ready(category, output_unit, resolver.missing)

    try:
        outcome = fn(si)
    except ARITHMETIC_ERRORS as e:
        logger.debug(f"{category.id}: formula not computable for {si}: {e}")
        return invalid(category, output_unit, si_inputs=si)

    if not is_valid_number(outcome.value):
        logger.debug(f"{category.id}: formula produced {outcome.value}")
        return invalid(category, output_unit, value=outcome.value, si_inputs=si)

    derivation = [
        *outcome.header,
        "",
        outcome.values_heading,
        *resolver.results_log,
        *outcome.extra_values,
        "",
        *outcome.steps,
    ]
    return CalculationResult(
        category_id=category.id,
        value=outcome.value,
        derivation=derivation,
        output_unit=output_unit,
        classification=outcome.classification,
        alternate_units=outcome.alternate_units,
        si_inputs=resolver.si_inputs(),
    )
