"""
Tests for output formatters.
"""

import json
import pytest

from winchdrum.calculator import compute
from winchdrum.calculator.output import to_json, to_markdown, to_summary, model_to_dict
from winchdrum.calculator.validation import validate_model
from winchdrum.io.schema import SCHEMA_VERSION


class TestToJson:

    def test_valid_json(self, electric_model):
        data = json.loads(to_json(electric_model))
        assert data["schema_version"] == SCHEMA_VERSION
        assert data["summary"]["total_layers"] == electric_model.summary.total_layers
        assert len(data["rows"]) == len(electric_model.rows)

    def test_without_rows(self, electric_model):
        data = json.loads(to_json(electric_model, include_rows=False))
        assert "rows" not in data
        assert data["tables"]["electric_layers"]

    def test_validation_included(self, electric_model):
        validation = validate_model(electric_model)
        data = json.loads(to_json(electric_model, validation))
        assert data["validation"]["valid"] is True
        assert set(data["validation"]) == {"valid", "errors", "warnings", "infos"}

    def test_unbounded_limits_are_null(self, electric_config_dict):
        electric_config_dict.update(payload_kg=0, motor_max_rpm=None)
        model = compute(electric_config_dict)
        text = to_json(model)
        assert "Infinity" not in text
        data = json.loads(text)
        assert data["drivetrain"]["electric"]["motor_max_rpm"] is None
        assert data["rows"][-1]["electric"]["motor_rpm_power"] is None

    def test_model_to_dict_is_json_safe(self, hydraulic_model):
        data = model_to_dict(hydraulic_model)
        json.dumps(data, allow_nan=False)


class TestToMarkdown:

    def test_sections(self, electric_model):
        md = to_markdown(electric_model)
        assert md.startswith("# Winch Drum Report")
        assert "## Drum & Cable" in md
        assert "## Spooling" in md
        assert "## Electric Drivetrain" in md
        assert "## Hydraulic Drivetrain" not in md

    def test_layer_rows(self, electric_model):
        md = to_markdown(electric_model)
        table_rows = [line for line in md.splitlines() if line.startswith("| 1 |")]
        assert len(table_rows) == 1

    def test_hydraulic_section(self, hydraulic_model):
        md = to_markdown(hydraulic_model)
        assert "## Hydraulic Drivetrain" in md
        assert "## Electric Drivetrain" not in md

    def test_validation_section(self, electric_config_dict):
        electric_config_dict["flange_diameter_in"] = 40.0
        model = compute(electric_config_dict)
        md = to_markdown(model, validate_model(model))
        assert "## Validation" in md
        assert "CAPACITY_EXCEEDED" in md
        assert "| Shortfall |" in md

    def test_override_shown(self, electric_config_dict):
        electric_config_dict["wraps_per_layer_override"] = 20
        md = to_markdown(compute(electric_config_dict))
        assert "20 (override; calculated 40)" in md


class TestToSummary:

    def test_summary(self, electric_model):
        text = to_summary(electric_model)
        assert "Winch Drum" in text
        assert "1000.0 m required" in text
        assert "Electric (bottom layer):" in text

    def test_hydraulic_summary(self, hydraulic_model):
        text = to_summary(hydraulic_model)
        assert "Hydraulic (bottom layer):" in text
        assert "Electric (bottom layer):" not in text

    def test_capacity_and_errors(self, electric_config_dict):
        electric_config_dict["flange_diameter_in"] = 40.0
        model = compute(electric_config_dict)
        text = to_summary(model, validate_model(model))
        assert "CAPACITY EXCEEDED" in text
        assert "ERROR CAPACITY_EXCEEDED" in text
