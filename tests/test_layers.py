"""
Tests for layer aggregation and slim wrap projections.
"""

import random
import pytest

from winchdrum.calculator.constants import G
from winchdrum.calculator.layers import (
    group_rows_by_layer,
    layer_maxima,
    rows_to_electric_layers,
    rows_to_hydraulic_layers,
    project_electric_wraps,
    project_hydraulic_wraps,
)


class TestGrouping:

    def test_groups_sorted(self, electric_model):
        grouped = group_rows_by_layer(electric_model.rows)
        assert list(grouped) == sorted(grouped)
        for layer_no, rows in grouped.items():
            assert all(r.layer_no == layer_no for r in rows)
            assert [r.wrap_no for r in rows] == sorted(r.wrap_no for r in rows)


class TestElectricLayers:

    def test_one_summary_per_layer(self, electric_model):
        layers = electric_model.tables.electric_layers
        assert len(layers) == len({r.layer_no for r in electric_model.rows})
        assert [l.layer_no for l in layers] == list(range(1, len(layers) + 1))

    def test_sorted_regardless_of_row_order(self, electric_model):
        rows = list(electric_model.rows)
        random.Random(42).shuffle(rows)
        drive = electric_model.drivetrain
        layers = rows_to_electric_layers(rows, 500.0, 1.2, drive)
        assert [l.layer_no for l in layers] == sorted({r.layer_no for r in rows})
        assert layers == electric_model.tables.electric_layers

    def test_geometry_from_first_and_last_wrap(self, electric_model):
        rows = electric_model.rows
        layer = electric_model.tables.electric_layers[1]
        layer_rows = [r for r in rows if r.layer_no == 2]
        assert layer.layer_dia_in == layer_rows[0].layer_dia_in
        assert layer.pre_on_drum_m == layer_rows[0].pre_spooled_len_m
        assert layer.post_on_drum_m == layer_rows[-1].spooled_len_m
        assert layer.pre_deployed_m == pytest.approx(1000.0 - layer.pre_on_drum_m, abs=5e-4)
        assert layer.post_deployed_m == pytest.approx(1000.0 - layer.post_on_drum_m, abs=5e-4)

    def test_start_values_copied_from_first_wrap(self, electric_model):
        for layer in electric_model.tables.electric_layers:
            first = next(r for r in electric_model.rows if r.layer_no == layer.layer_no)
            assert layer.motor_rpm_at_start == first.electric.motor_rpm
            assert layer.line_speed_at_start_mpm == first.electric.speed_available_mpm
            assert layer.avail_tension_at_start_kgf == first.electric.avail_tension_kgf
            assert layer.tension_required_at_start_kgf == first.tension_kgf
            assert layer.tension_theoretical_at_start_kgf == first.tension_theoretical_kgf

    def test_maxima_recomputed_from_pre_deployed(self, electric_model):
        for layer in electric_model.tables.electric_layers:
            theoretical = 500.0 + layer.pre_deployed_m * 1.2
            assert layer.max_tension_required_kgf == round(theoretical, 1)
            radius_m = layer.layer_dia_in * 0.0254 / 2
            assert layer.max_torque_nm == pytest.approx(
                layer.max_tension_required_kgf * G * radius_m, abs=0.051
            )
            assert layer.max_motor_torque_nm == pytest.approx(layer.max_torque_nm / 100, abs=0.051)

    def test_maxima_at_least_start_tension(self, electric_model):
        # Pre-wrap deployed length is the deepest point of the layer
        for layer in electric_model.tables.electric_layers:
            assert layer.max_tension_required_kgf >= layer.tension_required_at_start_kgf

    def test_layer_maxima_helper(self, electric_model):
        maxima = layer_maxima(1000.0, 31.0, 500.0, 1.2, electric_model.drivetrain)
        assert maxima["max_tension_theoretical_kgf"] == 1700.0
        assert maxima["max_tension_required_kgf"] == 1700.0
        assert maxima["max_torque_nm"] == pytest.approx(1700.0 * G * 31.0 * 0.0254 / 2, abs=0.051)


class TestHydraulicLayers:

    def test_one_summary_per_layer(self, hydraulic_model):
        layers = hydraulic_model.tables.hydraulic_layers
        assert len(layers) == len({r.layer_no for r in hydraulic_model.rows})

    def test_start_values_copied_from_first_wrap(self, hydraulic_model):
        for layer in hydraulic_model.tables.hydraulic_layers:
            first = next(r for r in hydraulic_model.rows if r.layer_no == layer.layer_no)
            assert layer.pressure_required_psi_at_start == first.hydraulic.pressure_required_psi
            assert layer.speed_available_at_start_mpm == first.hydraulic.speed_available_mpm
            assert layer.hp_used_at_start == first.hydraulic.hp_used_at_available
            assert layer.avail_tension_at_start_kgf == first.hydraulic.avail_tension_kgf

    def test_sorted_regardless_of_row_order(self, hydraulic_model):
        rows = list(reversed(hydraulic_model.rows))
        layers = rows_to_hydraulic_layers(rows, 500.0, 1.2, hydraulic_model.drivetrain)
        assert layers == hydraulic_model.tables.hydraulic_layers


class TestProjections:

    def test_electric_projection_preserves_order(self, electric_model):
        rows = list(reversed(electric_model.rows))
        projected = project_electric_wraps(rows)
        assert [p.wrap_no for p in projected] == [r.wrap_no for r in rows]

    def test_electric_projection_fields(self, electric_model):
        row = electric_model.rows[0]
        projected = electric_model.tables.electric_wraps[0]
        assert projected.tension_required_kgf == row.tension_kgf
        assert projected.line_speed_mpm == row.electric.speed_available_mpm
        assert projected.motor_rpm == row.electric.motor_rpm
        assert projected.total_cable_len_m == row.total_cable_len_m

    def test_hydraulic_projection_fields(self, hydraulic_model):
        row = hydraulic_model.rows[3]
        projected = project_hydraulic_wraps(hydraulic_model.rows)[3]
        assert projected.wrap_no == row.wrap_no
        assert projected.pressure_required_psi == row.hydraulic.pressure_required_psi
        assert projected.avail_tension_kgf == row.hydraulic.avail_tension_kgf

    def test_maxima_use_drum_torque_helper(self, electric_model):
        from winchdrum.calculator.units import drum_torque_nm

        layer = electric_model.tables.electric_layers[0]
        assert layer.max_torque_nm == round(drum_torque_nm(layer.max_tension_required_kgf, layer.layer_dia_in), 1)
