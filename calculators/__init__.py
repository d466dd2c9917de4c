"""Fluid mechanics calculation engine."""

# Importing the calculator modules registers their categories
from . import bernoulli, flow, pipe_friction, pressure, pump, unit_conversion  # noqa: F401
from .catalog import (
    CalculationCategory,
    InputFieldSpec,
    UnknownCategoryError,
    get_category,
    list_categories,
    unit_conversion_options,
)
from .evaluator import evaluate
from .models import CalculationResult

__all__ = [
    "CalculationCategory",
    "CalculationResult",
    "InputFieldSpec",
    "UnknownCategoryError",
    "evaluate",
    "get_category",
    "list_categories",
    "unit_conversion_options",
]
