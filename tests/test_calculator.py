"""Tests for MechanismCalculator: full result set, travel sweep, and analysis."""

import dataclasses
import math

import numpy as np
import pytest

from scissorlift import default_inputs
from scissorlift.calculator import MechanismCalculator
from scissorlift.config import MechanismConfig, RodSection
from scissorlift.geometry import MechanismInputs
from scissorlift.results import MechanismResult, CalculationFailure, GraphCurves
from scissorlift.statics import actuator_force, rod_force


@pytest.fixture
def calc():
    return MechanismCalculator()


@pytest.fixture
def reference():
    """8 kg, 200×200 mm, 50 -> 200 mm, 60° max."""
    return default_inputs()


class TestCalculateAll:
    def test_reference_design_is_safe(self, calc, reference):
        assert calc.validate(reference).is_valid
        result = calc.calculate_all(reference)
        assert isinstance(result, MechanismResult)
        assert result.ok
        assert result.is_safe
        assert result.buckling_safety_factor > 3

    def test_reference_geometry(self, calc, reference):
        result = calc.calculate_all(reference)
        L = 0.2 / (2 * np.sin(np.radians(60)))
        assert result.rod_length_mm == pytest.approx(L * 1000)
        assert result.theta_min_deg == pytest.approx(np.degrees(np.arcsin(0.05 / (2 * L))))
        assert result.theta_min_deg < result.theta_max_deg == 60
        assert result.x_max_mm == pytest.approx(2 * L * np.cos(np.radians(60)) * 1000)

    def test_reference_strength_and_torque(self, calc, reference):
        result = calc.calculate_all(reference)
        L = result.rod_length_mm / 1000
        assert result.moment_of_inertia_mm4 == pytest.approx(45.0)
        P_cr = np.pi ** 2 * 200e9 * 4.5e-11 / L ** 2
        assert result.critical_load_kn == pytest.approx(P_cr / 1000)
        assert result.buckling_safety_factor == pytest.approx(P_cr / result.rod_force_min)
        T = result.actuator_force_min * 0.002 / (2 * np.pi) + 0.2 * 0.009 / 2
        assert result.screw_torque_mnm == pytest.approx(T * 1000)

    def test_min_angle_is_critical(self, calc, reference):
        result = calc.calculate_all(reference)
        assert result.actuator_force_min > result.actuator_force_max > 0
        assert result.rod_force_min > result.rod_force_max > 0

    def test_forces_reproduced_from_min_angle(self, calc, reference):
        result = calc.calculate_all(reference)
        P = reference.load_kg * 9.81
        theta = np.radians(result.theta_min_deg)
        assert actuator_force(P, theta) == pytest.approx(result.actuator_force_min, rel=1e-9)
        assert rod_force(P, theta) == pytest.approx(result.rod_force_min, rel=1e-9)

    def test_efficiency(self, calc, reference):
        result = calc.calculate_all(reference)
        assert result.efficiency_min == pytest.approx(np.tan(np.radians(result.theta_min_deg)) / 2)
        assert result.efficiency_max == pytest.approx(np.tan(np.radians(60)) / 2)

    def test_to_dict_keys(self, calc, reference):
        d = calc.calculate_all(reference).to_dict()
        assert set(d) == {
            'L_mm', 'thetaMin_deg', 'thetaMax_deg', 'xMax_mm',
            'F_atuador_min', 'F_atuador_max', 'F_haste_min', 'F_haste_max',
            'Pcr_kN', 'FSbuckling', 'T_mNm', 'I_mm4', 'isSafe',
            'efficiency_min', 'efficiency_max',
        }
        assert d['isSafe'] is True

    @pytest.mark.parametrize("angle", [15, 30, 45, 75, 89])
    def test_min_angle_below_max_for_valid_inputs(self, calc, reference, angle):
        inputs = dataclasses.replace(reference, max_angle_deg=angle)
        result = calc.calculate_all(inputs)
        assert result.ok
        assert result.theta_min_deg < angle

    def test_tall_minimum_height_stays_finite(self, calc):
        inputs = MechanismInputs(load_kg=8, width_mm=200, depth_mm=200,
                                 vertical_travel_mm=10, min_height_mm=1000, max_angle_deg=5)
        result = calc.calculate_all(inputs)
        assert result.ok
        assert all(math.isfinite(v) for v in result.to_dict().values())


class TestDomainErrors:
    def test_unreachable_minimum_height(self, calc):
        # Negative travel makes h_min/(2L) > 1
        inputs = MechanismInputs(load_kg=8, width_mm=200, depth_mm=200,
                                 vertical_travel_mm=-60, min_height_mm=100, max_angle_deg=80)
        result = calc.calculate_all(inputs)
        assert isinstance(result, CalculationFailure)
        assert not result.ok
        assert result.kind == 'geometry'
        assert 'unreachable' in result.message
        assert result.to_dict() == {'error': result.message, 'kind': 'geometry'}

    def test_min_angle_above_max_angle(self, calc):
        inputs = MechanismInputs(load_kg=8, width_mm=200, depth_mm=200,
                                 vertical_travel_mm=-20, min_height_mm=100, max_angle_deg=30)
        result = calc.calculate_all(inputs)
        assert not result.ok
        assert result.kind == 'geometry'

    def test_zero_minimum_height_is_degenerate(self, calc, reference):
        inputs = dataclasses.replace(reference, min_height_mm=0)
        result = calc.calculate_all(inputs)
        assert not result.ok
        assert result.kind == 'angle'

    def test_negative_minimum_height(self, calc, reference):
        inputs = dataclasses.replace(reference, min_height_mm=-10, vertical_travel_mm=210)
        result = calc.calculate_all(inputs)
        assert isinstance(result, CalculationFailure)
        assert result.kind == 'geometry'
        assert 'below the base' in result.message
        assert calc.generate_graph_data(inputs) == []

    def test_zero_max_angle_is_degenerate(self, calc, reference):
        result = calc.calculate_all(dataclasses.replace(reference, max_angle_deg=0))
        assert result.kind == 'angle'

    def test_failure_is_logged(self, calc, reference, caplog):
        with caplog.at_level('WARNING', logger='scissorlift'):
            calc.calculate_all(dataclasses.replace(reference, min_height_mm=0))
        assert 'Calculation failed' in caplog.text


class TestGraphData:
    def test_sample_count_and_spacing(self, calc, reference):
        samples = calc.generate_graph_data(reference, steps=30)
        assert len(samples) == 30
        heights = np.array([s.height_mm for s in samples])
        assert heights[0] == pytest.approx(50.0)
        assert heights[-1] == pytest.approx(200.0)
        np.testing.assert_allclose(np.diff(heights), 150.0 / 29)

    def test_default_steps(self, calc, reference):
        assert len(calc.generate_graph_data(reference)) == 30

    def test_monotonic_curves(self, calc, reference):
        curves = GraphCurves.from_samples(calc.generate_graph_data(reference, steps=50))
        assert np.all(np.diff(curves.angle) > 0)
        assert np.all(np.diff(curves.actuator_force) < 0)
        assert np.all(np.diff(curves.rod_force) < 0)
        assert np.all(np.diff(curves.horizontal_distance) < 0)
        assert np.all(np.diff(curves.efficiency) > 0)

    def test_endpoints_match_result(self, calc, reference):
        result = calc.calculate_all(reference)
        samples = calc.generate_graph_data(reference, steps=10)
        assert samples[0].angle_deg == pytest.approx(result.theta_min_deg)
        assert samples[0].actuator_force_n == pytest.approx(result.actuator_force_min)
        assert samples[-1].angle_deg == pytest.approx(60.0)
        assert samples[-1].rod_force_n == pytest.approx(result.rod_force_max)
        assert samples[-1].horizontal_distance_mm == pytest.approx(result.x_max_mm)
        assert samples[0].efficiency_pct == pytest.approx(result.efficiency_min * 100)

    def test_single_step(self, calc, reference):
        samples = calc.generate_graph_data(reference, steps=1)
        assert len(samples) == 1
        assert samples[0].height_mm == pytest.approx(50.0)

    @pytest.mark.parametrize("steps", [0, -3])
    def test_no_steps(self, calc, reference, steps):
        assert calc.generate_graph_data(reference, steps=steps) == []

    def test_failure_yields_empty(self, calc, reference):
        inputs = dataclasses.replace(reference, vertical_travel_mm=-60, min_height_mm=100,
                                     max_angle_deg=80)
        assert calc.generate_graph_data(inputs) == []

    def test_sample_to_dict(self, calc, reference):
        d = calc.generate_graph_data(reference, steps=2)[0].to_dict()
        assert set(d) == {'altura', 'angulo', 'forcaAtuador', 'forcaHaste',
                          'distanciaHorizontal', 'eficiencia'}
        assert d['altura'] == pytest.approx(50.0)


class TestStateAtAngle:
    def test_min_angle_gives_min_height(self, calc, reference):
        result = calc.calculate_all(reference)
        state = calc.state_at_angle(reference, result.theta_min_deg)
        assert state.height_mm == pytest.approx(50.0)
        assert state.actuator_force_n == pytest.approx(result.actuator_force_min)

    def test_degenerate_angle(self, calc, reference):
        assert calc.state_at_angle(reference, 0.0) is None


class TestAnalyze:
    def test_valid_request(self, calc, reference):
        analysis = calc.analyze(reference, steps=12)
        assert analysis.validation.is_valid
        assert analysis.result.ok
        assert len(analysis.samples) == 12
        d = analysis.to_dict()
        assert d['inputs']['minHeight_mm'] == 50.0
        assert len(d['graph']) == 12

    def test_invalid_request_skips_calculation(self, calc, reference):
        analysis = calc.analyze(dataclasses.replace(reference, max_angle_deg=90))
        assert not analysis.validation.is_valid
        assert analysis.result is None
        assert analysis.samples == []
        assert analysis.to_dict()['results'] is None


class TestConfiguration:
    def test_thin_rod_is_unsafe(self, reference):
        config = MechanismConfig(rod=RodSection(width=0.005, thickness=0.0003))
        result = MechanismCalculator(config).calculate_all(reference)
        assert result.ok
        assert not result.is_safe

    def test_softer_material_lowers_safety_factor(self, reference):
        steel = MechanismCalculator().calculate_all(reference)
        aluminium = MechanismCalculator(MechanismConfig(elastic_modulus=69e9)).calculate_all(reference)
        assert aluminium.buckling_safety_factor == pytest.approx(
            steel.buckling_safety_factor * 69 / 200)

    def test_threshold_from_config(self, calc, reference):
        fs = calc.calculate_all(reference).buckling_safety_factor
        strict = MechanismCalculator(MechanismConfig(safety_factor_threshold=fs + 1))
        assert not strict.calculate_all(reference).is_safe

    def test_config_is_immutable(self, calc):
        with pytest.raises(dataclasses.FrozenInstanceError):
            calc.config.gravity = 10.0
