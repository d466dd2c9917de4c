"""Result model shared by all calculators."""

import math
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CalculationResult(BaseModel):
    """Outcome of one evaluation.

    ``value`` is None when required inputs are missing; a NaN or infinite value means the
    inputs made the formula invalid (division by zero, log of a non-positive number).
    Neither case should be displayed or recorded.
    """

    model_config = ConfigDict(frozen=True)

    category_id: str
    value: Optional[float] = None
    derivation: List[str] = Field(default_factory=list)
    output_unit: str = ""
    classification: Optional[str] = Field(None, description="Flow regime for Reynolds numbers")
    alternate_units: Dict[str, float] = Field(default_factory=dict)
    si_inputs: Dict[str, float] = Field(default_factory=dict)
    missing_fields: List[str] = Field(default_factory=list)

    @property
    def is_ready(self) -> bool:
        """All required inputs were supplied."""
        return self.value is not None

    @property
    def is_valid(self) -> bool:
        """A finite value that can be shown and recorded."""
        return self.value is not None and math.isfinite(self.value)

    @property
    def explanation(self) -> str:
        return "\n".join(self.derivation)
