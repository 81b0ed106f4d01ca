"""
Test Suite: Impact Physics
==========================
Mass, kinetic energy and TNT-equivalent yield of a spherical impactor.
"""

import logging
import math

import pytest

from impact_sim.core.errors import ErrorKind, InvalidParameterError
from impact_sim.core.model import SimulationParameters
from impact_sim.core.physics import (
    coerce_float,
    compute_energy,
    compute_mass,
    estimate_physics,
)


class TestComputeMass:
    """Sphere of density 3000 kg/m³"""

    def test_reference_impactor(self):
        """100 m body -> ~1.57e9 kg"""
        assert compute_mass(100.0) == pytest.approx(1.5708e9, rel=1e-4)

    def test_zero_diameter(self):
        assert compute_mass(0.0) == 0.0

    def test_monotonic_in_diameter(self):
        masses = [compute_mass(d) for d in range(0, 501, 10)]
        assert all(m >= 0.0 for m in masses)
        assert all(b > a for a, b in zip(masses, masses[1:]))

    def test_cubic_scaling(self):
        assert compute_mass(200.0) == pytest.approx(8.0 * compute_mass(100.0))

    @pytest.mark.parametrize("bad", [-5.0, math.nan, math.inf, "", None, "abc"])
    def test_invalid_input_coerced_to_zero(self, bad, caplog):
        with caplog.at_level(logging.WARNING, logger="impact_sim"):
            assert compute_mass(bad) == 0.0
        assert "diameter_m" in caplog.text

    @pytest.mark.parametrize("bad", [-5.0, math.nan, "abc"])
    def test_strict_mode_raises(self, bad):
        with pytest.raises(InvalidParameterError) as info:
            compute_mass(bad, strict=True)
        assert info.value.kind is ErrorKind.INVALID_PARAMETER
        assert isinstance(info.value, ValueError)


class TestComputeEnergy:
    """KE = 0.5 * m * v², v converted from km/s"""

    def test_reference_impactor(self):
        estimate = compute_energy(100.0, 20.0)
        assert estimate.mass_kg == pytest.approx(1.5708e9, rel=1e-4)
        assert estimate.energy_joules == pytest.approx(3.1416e17, rel=1e-4)
        assert estimate.energy_megatons == 75.09
        assert estimate.megatons_text == "75.09 MT"

    def test_tons_conversion(self):
        estimate = compute_energy(100.0, 20.0)
        assert estimate.energy_tons == pytest.approx(estimate.energy_joules / 4.184e9)
        assert estimate.energy_tons == pytest.approx(estimate.energy_megatons * 1e6, rel=1e-3)

    def test_megatons_rounded_to_two_decimals(self):
        estimate = compute_energy(37.0, 13.0)
        assert estimate.energy_megatons == round(estimate.energy_megatons, 2)

    def test_quadratic_in_speed(self):
        slow = compute_energy(100.0, 10.0).energy_joules
        fast = compute_energy(100.0, 20.0).energy_joules
        assert fast == pytest.approx(4.0 * slow)

    def test_monotonic_in_speed(self):
        energies = [compute_energy(100.0, v).energy_joules for v in range(0, 51)]
        assert energies[0] == 0.0
        assert all(b > a for a, b in zip(energies, energies[1:]))

    def test_deterministic(self):
        assert compute_energy(123.0, 17.0) == compute_energy(123.0, 17.0)

    def test_negative_speed_coerced(self):
        assert compute_energy(100.0, -3.0).energy_joules == 0.0

    def test_estimate_from_parameters(self):
        params = SimulationParameters(diameter_m=100.0, speed_km_s=20.0)
        assert estimate_physics(params) == compute_energy(100.0, 20.0)


class TestCoerceFloat:
    def test_passes_through_numbers(self):
        assert coerce_float("12.5", "x") == 12.5
        assert coerce_float(3, "x") == 3.0

    def test_defaults_on_garbage(self):
        assert coerce_float("", "x") == 0.0
        assert coerce_float(math.nan, "x", default=7.0) == 7.0
        assert coerce_float(True, "x") == 0.0

    def test_huge_integer_defaults(self):
        assert coerce_float(10**400, "x", default=1.0) == 1.0


class TestHugeInputs:
    """Finite but enormous inputs saturate to infinity instead of raising"""

    def test_mass_saturates(self):
        assert compute_mass(1e120) == math.inf

    def test_energy_saturates_on_speed(self):
        estimate = compute_energy(100.0, 1e160)
        assert estimate.energy_joules == math.inf
        assert estimate.energy_megatons == math.inf
        assert estimate.energy_tons == math.inf

    def test_huge_body_at_rest_has_no_energy(self):
        estimate = compute_energy(1e120, 0.0)
        assert estimate.mass_kg == math.inf
        assert estimate.energy_joules == 0.0

    def test_huge_integer_diameter_coerced(self, caplog):
        with caplog.at_level(logging.WARNING, logger="impact_sim"):
            assert compute_mass(10**400) == 0.0
        assert "diameter_m" in caplog.text
