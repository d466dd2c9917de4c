"""Tests for the calculation catalog and every category's formula."""

import math

import pytest

from calculators import UnknownCategoryError, evaluate, get_category, list_categories, unit_conversion_options
from calculators.base import registered_categories
from calculators.pipe_friction import classify_regime


class TestCatalog:
    """Category lookup and field metadata."""

    def test_categories_in_display_order(self):
        ids = [category.id for category in list_categories()]
        assert ids == [
            "flow-rate", "velocity-flow", "pressure", "density", "water-column", "reynolds",
            "relative-roughness", "friction-factor", "head-loss", "energy-equation",
            "pump-power", "npsh", "bernoulli", "unit-conversion",
        ]

    def test_every_category_has_a_calculator(self):
        assert sorted(registered_categories()) == sorted(c.id for c in list_categories())

    def test_unknown_category(self):
        with pytest.raises(UnknownCategoryError):
            get_category("viscosity")
        with pytest.raises(UnknownCategoryError):
            evaluate("viscosity", {})

    def test_field_metadata(self):
        category = get_category("reynolds")
        assert category.field_names == ["density", "velocity", "diameter", "viscosity"]
        viscosity = category.get_field("viscosity")
        assert viscosity.default_unit == "Pa·s"
        assert "cP (centiPoise)" in viscosity.units

    def test_relative_roughness_defaults_to_mm(self):
        assert get_category("relative-roughness").get_field("roughness").default_unit == "mm"

    def test_unit_conversion_options(self):
        options = unit_conversion_options()
        assert options["measurement_type"] == "pressure"
        assert options["default_from_unit"] == "Pa"
        assert options["default_to_unit"] == "kPa"
        assert options["measurement_types"]["flow"] == "Vazão"
        assert unit_conversion_options("length")["units"][:2] == ["m", "cm"]


class TestFlow:

    def test_flow_rate(self):
        result = evaluate("flow-rate", {"velocity": 2, "area": 3})
        assert result.value == 6
        assert result.output_unit == "m³/s"
        assert result.alternate_units["m³/h"] == 21600
        assert result.alternate_units["L/s"] == 6000
        assert "Q = 2.0000 × 3.000000 = 6.000000 m³/s" in result.derivation
        assert "Q = 21600.0000 m³/h" in result.derivation

    def test_flow_rate_with_units(self):
        result = evaluate("flow-rate", {"velocity": "36", "area": "100"}, {"velocity": "km/h", "area": "cm²"})
        assert result.value == pytest.approx(0.1, rel=1e-5)

    def test_velocity_from_flow(self):
        result = evaluate("velocity-flow", {"flow": 36, "area": 2}, {"flow": "m³/h"})
        assert result.value == pytest.approx(0.005)
        assert result.alternate_units["km/h"] == pytest.approx(0.018)


class TestPressure:

    def test_pressure(self):
        result = evaluate("pressure", {"force": 100, "area": 2})
        assert result.value == 50
        assert result.output_unit == "Pa"
        assert result.alternate_units["kPa"] == pytest.approx(0.05)
        assert result.derivation[0] == "Pressão (P) = Força (F) / Área (A)"

    def test_missing_force(self):
        result = evaluate("pressure", {"area": 2})
        assert result.value is None
        assert not result.is_ready
        assert result.derivation == []
        assert result.missing_fields == ["force"]

    def test_density(self):
        result = evaluate("density", {"mass": 500, "volume": 500}, {"mass": "g", "volume": "cm³"})
        assert result.value == pytest.approx(1000)
        assert result.alternate_units["g/cm³"] == pytest.approx(1)

    def test_water_column(self):
        result = evaluate("water-column", {"pressure": 9810})
        assert result.value == pytest.approx(1.0)
        assert result.alternate_units["mm"] == pytest.approx(1000)
        assert "ρ (água) = 1000 kg/m³" in result.derivation


class TestPipeFriction:

    def test_reynolds_turbulent(self):
        result = evaluate("reynolds", {"density": 1000, "velocity": 2, "diameter": 0.1, "viscosity": 0.001})
        assert result.value == pytest.approx(200000)
        assert result.classification == "Turbulento"
        assert result.output_unit == "(adimensional)"
        assert "Re = 200000" in result.derivation
        assert "Regime de Escoamento: Turbulento (Re > 4000)" in result.derivation

    def test_reynolds_viscosity_in_cp(self):
        result = evaluate(
            "reynolds",
            {"density": 1000, "velocity": 0.01, "diameter": 0.1, "viscosity": 1},
            {"viscosity": "cP (centiPoise)"},
        )
        assert result.value == pytest.approx(1000)
        assert result.classification == "Laminar"

    @pytest.mark.parametrize("re,regime", [
        (1000, "Laminar"), (2299.9, "Laminar"), (2300, "Transição"),
        (3999, "Transição"), (4000, "Turbulento"), (1e6, "Turbulento"),
    ])
    def test_classify_regime(self, re, regime):
        assert classify_regime(re) == regime

    def test_relative_roughness_default_mm(self):
        result = evaluate("relative-roughness", {"roughness": 0.045, "diameter": 0.1})
        assert result.value == pytest.approx(0.00045)

    def test_relative_roughness_explicit_unit(self):
        result = evaluate("relative-roughness", {"roughness": 0.045, "diameter": 0.1}, {"roughness": "m"})
        assert result.value == pytest.approx(0.45)

    def test_friction_factor_swamee_jain(self):
        re, ed = 100000, 0.0001
        expected = 0.25 / math.log10(ed / 3.7 + 5.74 / re ** 0.9) ** 2
        result = evaluate("friction-factor", {"reynolds": re, "relativeRoughness": ed})
        assert result.value == pytest.approx(expected)
        assert "Número de Reynolds (Re) = 100000" in result.derivation

    @pytest.mark.parametrize("re,ed", [(5000, 0.001), (100000, 0.0001), (1e6, 0.00005), (2e7, 0.01)])
    def test_friction_factor_matches_displayed_equation(self, re, ed):
        expected = 0.25 / math.log10(ed / 3.7 + 5.74 / re ** 0.9) ** 2
        result = evaluate("friction-factor", {"reynolds": re, "relativeRoughness": ed})
        assert result.value == pytest.approx(expected, rel=1e-12)

    def test_friction_factor_negative_reynolds_is_invalid(self):
        result = evaluate("friction-factor", {"reynolds": -100000, "relativeRoughness": 0.0001})
        assert result.is_ready
        assert not result.is_valid
        assert result.derivation == []

    def test_friction_factor_invalid_log(self):
        result = evaluate("friction-factor", {"reynolds": 100000, "relativeRoughness": -10})
        assert result.is_ready
        assert not result.is_valid
        assert result.derivation == []

    def test_head_loss(self):
        f, length, d, v, k = 0.02, 100, 0.1, 2, 1.5
        velocity_head = v ** 2 / (2 * 9.81)
        expected = f * length / d * velocity_head + k * velocity_head
        result = evaluate("head-loss", {"frictionFactor": f, "length": length, "diameter": d,
                                        "velocity": v, "kSum": k})
        assert result.value == pytest.approx(expected)
        assert result.output_unit == "m"


class TestPump:

    def test_energy_equation(self):
        inputs = {"z1": 2, "z2": 12, "p1": 101325, "p2": 201325, "v1": 1, "v2": 2,
                  "headLoss": 3, "density": 1000}
        expected = 100000 / (1000 * 9.81) + (4 - 1) / (2 * 9.81) + 10 + 3
        result = evaluate("energy-equation", inputs)
        assert result.value == pytest.approx(expected)

    def test_pump_power(self):
        result = evaluate("pump-power", {"flow": 0.01, "head": 20, "density": 1000, "efficiency": 80})
        assert result.value == pytest.approx(2452.5)
        assert result.output_unit == "W"
        assert result.alternate_units["kW"] == pytest.approx(2.4525)
        assert result.alternate_units["hp"] == pytest.approx(2452.5 / 745.7)
        assert "Eficiência (η) = 80% = 0.80" in result.derivation

    def test_npsh(self):
        inputs = {"atmosphericPressure": 101325, "vaporPressure": 2339, "suctionHeight": 3,
                  "headLoss": 1.5, "density": 1000}
        expected = (101325 - 2339) / (1000 * 9.81) - 3 - 1.5
        result = evaluate("npsh", inputs)
        assert result.value == pytest.approx(expected)

    def test_zero_counts_as_missing(self):
        inputs = {"z1": 0, "z2": 12, "p1": 101325, "p2": 201325, "v1": 1, "v2": 2,
                  "headLoss": 3, "density": 1000}
        result = evaluate("energy-equation", inputs)
        assert result.value is None
        assert result.missing_fields == ["z1"]


class TestBernoulli:

    def test_downstream_pressure(self):
        inputs = {"pressure1": 200000, "velocity1": 2, "height1": 5, "velocity2": 4,
                  "height2": 1, "density": 1000}
        result = evaluate("bernoulli", inputs)
        assert result.value == pytest.approx(233240)
        assert result.alternate_units["kPa"] == pytest.approx(233.24)


class TestUnitConversion:

    def test_atm_to_pa(self):
        result = evaluate("unit-conversion", {"value": 1, "measurementType": "pressure",
                                              "fromUnit": "atm", "toUnit": "Pa"})
        assert result.value == 101325
        assert result.output_unit == "Pa"
        assert result.derivation == ["Conversão de Pressão:", "", "1 atm  =  101325 Pa"]

    def test_defaults(self):
        result = evaluate("unit-conversion", {"value": 1500})
        assert result.value == pytest.approx(1.5)
        assert result.output_unit == "kPa"

    def test_unknown_unit(self):
        result = evaluate("unit-conversion", {"value": 1, "measurementType": "pressure",
                                              "fromUnit": "torr", "toUnit": "Pa"})
        assert result.value is None

    def test_unknown_measurement_type(self):
        result = evaluate("unit-conversion", {"value": 1, "measurementType": "temperature"})
        assert result.value is None

    def test_missing_value(self):
        result = evaluate("unit-conversion", {"value": "", "measurementType": "length"})
        assert result.value is None
        assert result.missing_fields == ["value"]

    def test_overflow_is_not_valid(self):
        result = evaluate("unit-conversion", {"value": 1e308, "measurementType": "pressure",
                                              "fromUnit": "atm", "toUnit": "Pa"})
        assert result.is_ready
        assert not result.is_valid
        assert result.derivation == []


class TestInvalidResults:

    def test_overflow_is_not_valid(self):
        result = evaluate("flow-rate", {"velocity": 1e308, "area": 1e308})
        assert result.is_ready
        assert not result.is_valid
        assert result.derivation == []

    def test_non_numeric_text_is_missing(self):
        result = evaluate("pressure", {"force": "abc", "area": 2})
        assert result.value is None
