"""
Tests for the command-line interface.
"""

import json
import subprocess
import sys
import pytest

from winchdrum.cli.calculate import main


@pytest.fixture
def config_file(tmp_path, electric_config_dict):
    path = tmp_path / "drum.json"
    path.write_text(json.dumps(electric_config_dict))
    return path


class TestCLIEntryPoints:
    """Test that CLI entry points defined in pyproject.toml are importable."""

    def test_entry_points_importable(self):
        from winchdrum.cli.calculate import main as calc_main
        from winchdrum.cli.serve import main as serve_main
        assert callable(calc_main)
        assert callable(serve_main)

    def test_entry_point_via_subprocess(self):
        """Test entry point works when invoked as module."""
        result = subprocess.run(
            [sys.executable, "-m", "winchdrum.cli.calculate", "--help"],
            capture_output=True,
            text=True
        )
        assert result.returncode == 0
        assert "usage" in result.stdout.lower()


class TestCLIBasic:

    def test_summary(self, config_file, capsys):
        assert main([str(config_file)]) == 0
        out = capsys.readouterr().out
        assert "Winch Drum" in out
        assert "Electric (bottom layer):" in out

    def test_markdown(self, config_file, capsys):
        assert main([str(config_file), "--format", "markdown"]) == 0
        assert capsys.readouterr().out.startswith("# Winch Drum Report")

    def test_json(self, config_file, capsys):
        assert main([str(config_file), "-f", "json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["validation"]["valid"] is True
        assert "rows" in data

    def test_json_no_rows(self, config_file, capsys):
        assert main([str(config_file), "-f", "json", "--no-rows"]) == 0
        assert "rows" not in json.loads(capsys.readouterr().out)

    def test_output_file(self, config_file, tmp_path, capsys):
        output = tmp_path / "report.md"
        assert main([str(config_file), "-f", "markdown", "-o", str(output)]) == 0
        assert output.read_text().startswith("# Winch Drum Report")
        assert capsys.readouterr().out == ""

    def test_drivetrain_flags(self, tmp_path, electric_config_dict, hydraulic_config_dict, capsys):
        path = tmp_path / "both.json"
        path.write_text(json.dumps({**electric_config_dict, **hydraulic_config_dict}))
        assert main([str(path), "-f", "json", "--no-electric", "--hydraulic"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["electric_enabled"] is False
        assert data["hydraulic_enabled"] is True
        assert data["tables"]["hydraulic_layers"]


class TestCLIErrors:

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "nonexistent.json")]) == 1
        assert "Error loading configuration" in capsys.readouterr().err

    def test_invalid_json(self, tmp_path, capsys):
        invalid_file = tmp_path / "invalid.json"
        invalid_file.write_text("not valid json {")
        assert main([str(invalid_file)]) == 1
        assert "Error loading configuration" in capsys.readouterr().err

    def test_strict_capacity_exceeded(self, tmp_path, electric_config_dict, capsys):
        electric_config_dict["flange_diameter_in"] = 40.0
        path = tmp_path / "small.json"
        path.write_text(json.dumps(electric_config_dict))

        assert main([str(path)]) == 0
        capsys.readouterr()

        assert main([str(path), "--strict"]) == 1
        assert "CAPACITY_EXCEEDED" in capsys.readouterr().err

    def test_warnings_to_stderr(self, tmp_path, electric_config_dict, capsys):
        electric_config_dict["packing_factor"] = 0.5
        path = tmp_path / "loose.json"
        path.write_text(json.dumps(electric_config_dict))
        assert main([str(path)]) == 0
        assert "PACKING_FACTOR_RANGE" in capsys.readouterr().err
