"""
Static catalog of calculation categories.

Each category lists its ordered input fields (quantity family, allowed units, default
unit), the unit of its result and the formula shown to the user. Categories are fixed
at import time; nothing here is mutated at runtime.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from utils.units import (
    DIMENSIONLESS, MEASUREMENT_TYPE_LABELS, PERCENTAGE, UNIT_FACTORS, base_unit, units_for
)

logger = logging.getLogger("fluidcalc-mcp.catalog")

UNIT_CONVERSION = "unit-conversion"
DEFAULT_MEASUREMENT_TYPE = "pressure"

VELOCITY_UNITS = ("m/s", "km/h", "ft/s", "mph")
AREA_UNITS = ("m²", "cm²", "ft²", "in²")
FORCE_UNITS = ("N", "kN", "lbf")
PRESSURE_UNITS = ("Pa", "kPa", "bar", "psi", "atm")
MASS_UNITS = ("kg", "g", "lb", "ton")
VOLUME_UNITS = ("m³", "L", "cm³", "gal (US)", "ft³")
DENSITY_UNITS = ("kg/m³", "g/cm³", "lb/ft³")
LENGTH_UNITS = ("m", "cm", "mm", "ft", "in")
VISCOSITY_UNITS = ("Pa·s", "cP (centiPoise)", "P (Poise)")
FLOW_UNITS = ("m³/s", "m³/h", "L/s", "L/min", "gal/min (US)")


class UnknownCategoryError(ValueError):
    """Raised when a category id is not in the catalog."""


class InputFieldSpec(BaseModel):
    """Immutable description of one input field of a category."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Field name, unique within the category")
    label: str = Field(..., description="Display label")
    symbol: str = Field(..., description="Label used in the derivation trace")
    family: str = Field(..., description="Quantity family, or the dimensionless/percentage sentinel")
    units: Tuple[str, ...] = Field((), description="Allowed unit labels")
    default_unit: str = Field("", description="Unit assumed when none is chosen")
    si_unit: str = Field("", description="SI unit of the converted value")
    precision: int = Field(4, description="Decimals of the SI value in the derivation")

    @model_validator(mode="after")
    def check_units(self):
        if self.family in (DIMENSIONLESS, PERCENTAGE):
            return self
        known = UNIT_FACTORS.get(self.family)
        if known is None:
            raise ValueError(f"Unknown quantity family '{self.family}' for field '{self.name}'")
        unknown = [unit for unit in self.units if unit not in known]
        if unknown:
            raise ValueError(f"Units {unknown} are not part of family '{self.family}'")
        if self.default_unit not in self.units:
            raise ValueError(f"Default unit '{self.default_unit}' not allowed for field '{self.name}'")
        return self


class FormulaInfo(BaseModel):
    """Formula metadata displayed next to a result."""

    model_config = ConfigDict(frozen=True)

    title: str
    formula: str
    description: str


class CalculationCategory(BaseModel):
    """A calculation category: its inputs, output unit and formula."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    input_fields: Tuple[InputFieldSpec, ...] = ()
    output_unit: str = ""
    formula: FormulaInfo

    @model_validator(mode="after")
    def check_field_names(self):
        names = [spec.name for spec in self.input_fields]
        if len(names) != len(set(names)):
            raise ValueError(f"Duplicate field names in category '{self.id}'")
        return self

    @property
    def field_names(self) -> List[str]:
        return [spec.name for spec in self.input_fields]

    def get_field(self, name: str) -> InputFieldSpec:
        for spec in self.input_fields:
            if spec.name == name:
                return spec
        raise KeyError(name)

    def output_unit_for(self, inputs: Optional[Mapping[str, Any]] = None) -> str:
        """Unit of the result; the unit converter reports in the chosen target unit."""
        if self.id == UNIT_CONVERSION:
            inputs = inputs or {}
            measurement_type = inputs.get("measurementType") or DEFAULT_MEASUREMENT_TYPE
            return inputs.get("toUnit") or default_conversion_units(measurement_type)[1] or ""
        return self.output_unit


def _quantity(name, label, symbol, family, units, precision, default=None):
    si_unit = base_unit(family)
    return InputFieldSpec(
        name=name, label=label, symbol=symbol, family=family, units=units,
        default_unit=default or si_unit, si_unit=si_unit, precision=precision,
    )


def _dimensionless(name, label, symbol, precision):
    return InputFieldSpec(
        name=name, label=label, symbol=symbol, family=DIMENSIONLESS,
        units=("",), default_unit="", si_unit="", precision=precision,
    )


def _velocity(name, label, symbol, precision=4):
    return _quantity(name, label, symbol, "velocity", VELOCITY_UNITS, precision)


def _area(name, label, symbol, precision=6):
    return _quantity(name, label, symbol, "area", AREA_UNITS, precision)


def _pressure(name, label, symbol, precision=2):
    return _quantity(name, label, symbol, "pressure", PRESSURE_UNITS, precision)


def _density(name="density", label="Densidade do Fluido (ρ)", symbol="Densidade (ρ)", precision=2):
    return _quantity(name, label, symbol, "density", DENSITY_UNITS, precision)


def _length(name, label, symbol, precision=4, default="m"):
    return _quantity(name, label, symbol, "length", LENGTH_UNITS, precision, default=default)


def _flow(name, label, symbol, precision=6):
    return _quantity(name, label, symbol, "flow", FLOW_UNITS, precision)


CATEGORIES: Tuple[CalculationCategory, ...] = (
    CalculationCategory(
        id="flow-rate",
        name="Vazão",
        description="Calcular vazão volumétrica ou mássica",
        input_fields=(
            _velocity("velocity", "Velocidade (v)", "v"),
            _area("area", "Área da Seção Transversal (A)", "A"),
        ),
        output_unit="m³/s",
        formula=FormulaInfo(
            title="Vazão (Q)",
            formula="Q = v × A",
            description="A vazão (Q) é o produto da velocidade do fluido (v) pela área da seção "
                        "transversal (A) do duto.",
        ),
    ),
    CalculationCategory(
        id="velocity-flow",
        name="Velocidade/Vazão",
        description="Calcular velocidade a partir da vazão",
        input_fields=(
            _flow("flow", "Vazão (Q)", "Q"),
            _area("area", "Área da Seção Transversal (A)", "A"),
        ),
        output_unit="m/s",
        formula=FormulaInfo(
            title="Velocidade (v)",
            formula="v = Q / A",
            description="A velocidade do fluido (v) é a vazão (Q) dividida pela área da seção "
                        "transversal (A) do duto.",
        ),
    ),
    CalculationCategory(
        id="pressure",
        name="Pressão",
        description="Calcular pressão em diversos cenários",
        input_fields=(
            _quantity("force", "Força (F)", "F", "force", FORCE_UNITS, 2),
            _area("area", "Área (A)", "A"),
        ),
        output_unit="Pa",
        formula=FormulaInfo(
            title="Pressão (P)",
            formula="P = F / A",
            description="A pressão (P) é a força (F) aplicada perpendicularmente a uma superfície, "
                        "dividida pela área (A) dessa superfície.",
        ),
    ),
    CalculationCategory(
        id="density",
        name="Densidade",
        description="Calcular densidade do fluido",
        input_fields=(
            _quantity("mass", "Massa (m)", "m", "mass", MASS_UNITS, 4),
            _quantity("volume", "Volume (V)", "V", "volume", VOLUME_UNITS, 6),
        ),
        output_unit="kg/m³",
        formula=FormulaInfo(
            title="Densidade (ρ)",
            formula="ρ = m / V",
            description="A densidade (ρ) de uma substância é a sua massa (m) por unidade de volume (V).",
        ),
    ),
    CalculationCategory(
        id="water-column",
        name="Coluna de Água",
        description="Converter pressão em altura de coluna de água",
        input_fields=(
            _pressure("pressure", "Pressão (P)", "P"),
        ),
        output_unit="m",
        formula=FormulaInfo(
            title="Pressão Hidrostática (P)",
            formula="P = ρ × g × h",
            description="A pressão exercida por uma coluna de fluido (P) é igual à densidade do fluido "
                        "(ρ) multiplicada pela aceleração da gravidade (g) e pela altura da coluna (h). "
                        "A calculadora resolve para h.",
        ),
    ),
    CalculationCategory(
        id="reynolds",
        name="Número de Reynolds",
        description="Determinar regime de escoamento",
        input_fields=(
            _density(symbol="ρ"),
            _velocity("velocity", "Velocidade do Escoamento (v)", "v"),
            _length("diameter", "Comprimento Característico (D)", "D"),
            _quantity("viscosity", "Viscosidade Dinâmica (μ)", "μ", "viscosity", VISCOSITY_UNITS, 6),
        ),
        output_unit="(adimensional)",
        formula=FormulaInfo(
            title="Número de Reynolds (Re)",
            formula="Re = (ρ × v × D) / μ",
            description="O Número de Reynolds é um número adimensional que ajuda a prever padrões de "
                        "escoamento. Compara as forças de inércia com as forças de viscosidade. "
                        "(ρ: densidade, v: velocidade, D: comprimento característico, μ: viscosidade "
                        "dinâmica).",
        ),
    ),
    CalculationCategory(
        id="relative-roughness",
        name="Rugosidade Relativa",
        description="Calcular rugosidade relativa da tubulação",
        input_fields=(
            _length("roughness", "Rugosidade Absoluta (ε)", "ε", precision=6, default="mm"),
            _length("diameter", "Diâmetro da Tubulação (D)", "D"),
        ),
        output_unit="(adimensional)",
        formula=FormulaInfo(
            title="Rugosidade Relativa (ε/D)",
            formula="ε/D",
            description="A rugosidade relativa é a razão entre a rugosidade absoluta da superfície "
                        "interna do tubo (ε) e o diâmetro do tubo (D).",
        ),
    ),
    CalculationCategory(
        id="friction-factor",
        name="Fator de Atrito",
        description="Calcular fator de atrito (Swamee-Jain)",
        input_fields=(
            _dimensionless("reynolds", "Número de Reynolds (Re)", "Número de Reynolds (Re)", 0),
            _dimensionless("relativeRoughness", "Rugosidade Relativa (ε/D)", "Rugosidade Relativa (ε/D)", 6),
        ),
        output_unit="(adimensional)",
        formula=FormulaInfo(
            title="Fator de Atrito (f) - Equação de Swamee-Jain",
            formula="f = 0.25 / [log₁₀(ε/3.7D + 5.74/Re^0.9)]²",
            description="A equação de Swamee-Jain é uma aproximação para o fator de atrito de "
                        "Darcy-Weisbach para escoamento turbulento em tubos. Depende da rugosidade "
                        "relativa (ε/D) e do número de Reynolds (Re).",
        ),
    ),
    CalculationCategory(
        id="head-loss",
        name="Perda de Carga",
        description="Calcular perda de carga total",
        input_fields=(
            _dimensionless("frictionFactor", "Fator de Atrito (f)", "Fator de Atrito (f)", 6),
            _length("length", "Comprimento da Tubulação (L)", "Comprimento (L)", precision=2),
            _length("diameter", "Diâmetro da Tubulação (D)", "Diâmetro (D)"),
            _velocity("velocity", "Velocidade do Escoamento (v)", "Velocidade (v)"),
            _dimensionless("kSum", "Soma dos Coeficientes de Perda Localizada (Σk)",
                           "Soma dos Coeficientes (Σk)", 2),
        ),
        output_unit="m",
        formula=FormulaInfo(
            title="Perda de Carga Total (hₜ)",
            formula="hₜ = f × (L/D) × (v²/2g) + Σk × (v²/2g)",
            description="A perda de carga total é a soma da perda de carga distribuída (primeiro termo) "
                        "e da perda de carga localizada (segundo termo). Onde f é o fator de atrito, L é "
                        "o comprimento do tubo, D é o diâmetro, v é a velocidade do fluido, g é a "
                        "aceleração da gravidade e Σk é a soma dos coeficientes de perda localizada.",
        ),
    ),
    CalculationCategory(
        id="energy-equation",
        name="Equação da Energia",
        description="Calcular carga manométrica da bomba",
        input_fields=(
            _length("z1", "Cota no Ponto 1 (z₁)", "Cota 1 (z₁)", precision=2),
            _length("z2", "Cota no Ponto 2 (z₂)", "Cota 2 (z₂)", precision=2),
            _pressure("p1", "Pressão no Ponto 1 (P₁)", "Pressão 1 (P₁)"),
            _pressure("p2", "Pressão no Ponto 2 (P₂)", "Pressão 2 (P₂)"),
            _velocity("v1", "Velocidade no Ponto 1 (v₁)", "Velocidade 1 (v₁)"),
            _velocity("v2", "Velocidade no Ponto 2 (v₂)", "Velocidade 2 (v₂)"),
            _length("headLoss", "Perda de Carga Total (hₜ)", "Perda de Carga (hₜ)"),
            _density(),
        ),
        output_unit="m",
        formula=FormulaInfo(
            title="Equação da Energia para Carga Manométrica (Hₘ)",
            formula="Hₘ = (z₂-z₁) + (P₂-P₁)/(ρg) + (v₂²-v₁²)/(2g) + hₜ",
            description="A carga manométrica da bomba é calculada pela equação da energia, considerando "
                        "a diferença de cotas (z₂-z₁), a diferença de pressões (P₂-P₁), a diferença de "
                        "energias cinéticas (v₂²-v₁²) e a perda de carga total (hₜ).",
        ),
    ),
    CalculationCategory(
        id="pump-power",
        name="Potência da Bomba",
        description="Calcular potência da bomba",
        input_fields=(
            _flow("flow", "Vazão (Q)", "Vazão (Q)"),
            _length("head", "Altura Manométrica (H)", "Altura Manométrica (H)", precision=2),
            _density(),
            InputFieldSpec(
                name="efficiency", label="Eficiência da Bomba (η)", symbol="Eficiência (η)",
                family=PERCENTAGE, units=("%",), default_unit="%", si_unit="", precision=2,
            ),
        ),
        output_unit="W",
        formula=FormulaInfo(
            title="Potência da Bomba (P)",
            formula="P = ρ × g × Q × H / η",
            description="A potência da bomba é calculada pelo produto da densidade do fluido (ρ), "
                        "aceleração da gravidade (g), vazão (Q) e altura manométrica (H), dividido pela "
                        "eficiência da bomba (η).",
        ),
    ),
    CalculationCategory(
        id="npsh",
        name="NPSH Disponível",
        description="Calcular NPSH disponível",
        input_fields=(
            _pressure("atmosphericPressure", "Pressão Atmosférica (Pₐₜₘ)", "Pressão Atmosférica (Pₐₜₘ)"),
            _pressure("vaporPressure", "Pressão de Vapor (Pᵥ)", "Pressão de Vapor (Pᵥ)"),
            _length("suctionHeight", "Altura de Sucção (hₛ)", "Altura de Sucção (hₛ)", precision=2),
            _length("headLoss", "Perda de Carga na Sucção (hₗ)", "Perda de Carga na Sucção (hₗ)"),
            _density(),
        ),
        output_unit="m",
        formula=FormulaInfo(
            title="NPSH Disponível",
            formula="NPSH = (Pₐₜₘ - Pᵥ)/(ρg) - hₛ - hₗ",
            description="O NPSH disponível é calculado pela diferença entre a pressão atmosférica (Pₐₜₘ) "
                        "e a pressão de vapor do fluido (Pᵥ), dividida pelo produto da densidade (ρ) e "
                        "aceleração da gravidade (g), menos a altura de sucção (hₛ) e a perda de carga "
                        "na linha de sucção (hₗ).",
        ),
    ),
    CalculationCategory(
        id="bernoulli",
        name="Equação de Bernoulli",
        description="Conservação de energia no escoamento",
        input_fields=(
            _pressure("pressure1", "Pressão no Ponto 1 (P₁)", "P₁"),
            _velocity("velocity1", "Velocidade no Ponto 1 (v₁)", "v₁"),
            _length("height1", "Altura no Ponto 1 (h₁)", "h₁"),
            _velocity("velocity2", "Velocidade no Ponto 2 (v₂)", "v₂"),
            _length("height2", "Altura no Ponto 2 (h₂)", "h₂"),
            _density(symbol="ρ"),
        ),
        output_unit="Pa",
        formula=FormulaInfo(
            title="Equação de Bernoulli",
            formula="P + ½ρv² + ρgh = constante",
            description="A equação de Bernoulli descreve a conservação de energia para um fluido em "
                        "movimento. A soma da pressão (P), da energia cinética (½ρv²) e da energia "
                        "potencial (ρgh) permanece constante ao longo de uma linha de corrente.",
        ),
    ),
    CalculationCategory(
        id=UNIT_CONVERSION,
        name="Conversor de Unidades",
        description="Converta unidades de medida comuns",
        input_fields=(),
        output_unit="",
        formula=FormulaInfo(
            title="Conversão de Unidades",
            formula="Valor₂ = Valor₁ × (Fator₁ / Fator₂)",
            description="A conversão é feita transformando o valor inicial para a unidade base do SI "
                        "(Sistema Internacional) e depois convertendo da unidade base para a unidade "
                        "final desejada.",
        ),
    ),
)

_BY_ID: Dict[str, CalculationCategory] = {category.id: category for category in CATEGORIES}


def list_categories() -> List[CalculationCategory]:
    """All categories in display order."""
    return list(CATEGORIES)


def get_category(category_id: str) -> CalculationCategory:
    """Look up a category by id.

    Raises:
        UnknownCategoryError: If the id is not in the catalog
    """
    try:
        return _BY_ID[category_id]
    except KeyError:
        raise UnknownCategoryError(
            f"Unknown category '{category_id}'. Valid categories: {', '.join(_BY_ID)}"
        ) from None


def default_conversion_units(measurement_type: str) -> Tuple[Optional[str], Optional[str]]:
    """Units pre-selected by the converter: the family's first and second unit."""
    available = units_for(measurement_type)
    if not available:
        return None, None
    return available[0], available[1] if len(available) > 1 else available[0]


def unit_conversion_options(measurement_type: Optional[str] = None) -> Dict[str, Any]:
    """Shape of the unit converter form: measurement types and units of the selected type."""
    selected = measurement_type or DEFAULT_MEASUREMENT_TYPE
    from_unit, to_unit = default_conversion_units(selected)
    return {
        "measurement_types": dict(MEASUREMENT_TYPE_LABELS),
        "measurement_type": selected,
        "units": units_for(selected),
        "default_from_unit": from_unit,
        "default_to_unit": to_unit,
    }
