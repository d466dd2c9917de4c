"""
Flow rate and mean velocity calculations.

Q = v × A and its inverse v = Q / A.
"""

from typing import Dict

from utils.constants import M3S_to_LS, M3S_to_M3H, MS_to_KMH
from utils.formatting import to_fixed

from .base import FormulaOutcome, formula


@formula("flow-rate")
def flow_rate(si: Dict[str, float]) -> FormulaOutcome:
    velocity, area = si["velocity"], si["area"]
    q = velocity * area
    return FormulaOutcome(
        value=q,
        header=["Vazão (Q) = Velocidade (v) × Área da Seção Transversal (A)"],
        steps=[
            f"Q = {to_fixed(velocity, 4)} × {to_fixed(area, 6)} = {to_fixed(q, 6)} m³/s",
            f"Q = {to_fixed(q * M3S_to_M3H, 4)} m³/h",
            f"Q = {to_fixed(q * M3S_to_LS, 4)} L/s",
        ],
        alternate_units={"m³/h": q * M3S_to_M3H, "L/s": q * M3S_to_LS},
    )


@formula("velocity-flow")
def velocity_from_flow(si: Dict[str, float]) -> FormulaOutcome:
    flow, area = si["flow"], si["area"]
    v = flow / area
    return FormulaOutcome(
        value=v,
        header=["Velocidade (v) = Vazão (Q) / Área da Seção Transversal (A)"],
        steps=[
            f"v = {to_fixed(flow, 6)} / {to_fixed(area, 6)} = {to_fixed(v, 4)} m/s",
            f"v = {to_fixed(v * MS_to_KMH, 4)} km/h",
        ],
        alternate_units={"km/h": v * MS_to_KMH},
    )
