"""Bernoulli equation solved for the downstream pressure."""

from typing import Dict

from utils.constants import G_GRAVITY, PA_per_KPA
from utils.formatting import to_fixed

from .base import FormulaOutcome, formula


def total_head_pressure(pressure: float, density: float, velocity: float, height: float) -> float:
    """P + ½ρv² + ρgh, constant along a streamline."""
    return pressure + 0.5 * density * velocity ** 2 + density * G_GRAVITY * height


@formula("bernoulli")
def bernoulli(si: Dict[str, float]) -> FormulaOutcome:
    rho = si["density"]
    upstream = total_head_pressure(si["pressure1"], rho, si["velocity1"], si["height1"])
    p2 = upstream - 0.5 * rho * si["velocity2"] ** 2 - rho * G_GRAVITY * si["height2"]
    return FormulaOutcome(
        value=p2,
        header=[
            "Equação de Bernoulli:",
            "P₁ + ½ρv₁² + ρgh₁ = P₂ + ½ρv₂² + ρgh₂",
        ],
        steps=[
            "Resolvendo para P₂:",
            f"P₂ = {to_fixed(p2, 2)} Pa",
            f"P₂ = {to_fixed(p2 / PA_per_KPA, 4)} kPa",
            "",
            "Esta equação representa a conservação de energia ao longo de uma linha de corrente.",
        ],
        alternate_units={"kPa": p2 / PA_per_KPA},
    )
