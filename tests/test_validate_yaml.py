#!/usr/bin/env python3
"""Tests for validate_yaml schema validation."""

from valuation.loader import DEFAULT_REFERENCE_FILE, load_schema
from validate_yaml import main, validate_file, validate_reference_file


class TestValidateFile:
    """Tests for validate_file function."""

    def test_valid_garage_returns_no_errors(self, tmp_path):
        path = tmp_path / "valid.yaml"
        path.write_text("""
vehicles:
  - make: Subaru
    model: BRZ
    year: 2015
    mileage: 21216
""")
        assert validate_file(path, load_schema("garage")) == []

    def test_missing_required_field_returns_errors(self, tmp_path):
        path = tmp_path / "invalid.yaml"
        path.write_text("""
vehicles:
  - make: Subaru
    model: BRZ
    # year missing
""")
        errors = validate_file(path, load_schema("garage"))
        assert len(errors) >= 1
        assert any("Schema validation" in e for e in errors)
        assert any("at path" in e for e in errors)

    def test_invalid_yaml_returns_parse_error(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("""
vehicles:
  - make: Subaru
    model: [unclosed
""")
        errors = validate_file(path, load_schema("garage"))
        assert any("YAML" in e for e in errors)

    def test_nonexistent_file_returns_errors(self, tmp_path):
        errors = validate_file(tmp_path / "does_not_exist.yaml", load_schema("garage"))
        assert len(errors) == 1
        assert errors[0].startswith("Error:")

    def test_bundled_reference_is_valid(self):
        assert validate_file(DEFAULT_REFERENCE_FILE, load_schema("reference")) == []


class TestMain:
    """Tests for the validate_yaml entry point."""

    def test_all_valid(self, tmp_path, capsys):
        path = tmp_path / "garage.yaml"
        path.write_text("vehicles: []\n")
        assert main([str(path)]) == 0
        assert "OK: garage.yaml" in capsys.readouterr().out

    def test_failure_reported(self, tmp_path, capsys):
        good = tmp_path / "good.yaml"
        good.write_text("vehicles: []\n")
        bad = tmp_path / "bad.yaml"
        bad.write_text("cars: []\n")
        assert main([str(good), str(bad)]) == 1
        out = capsys.readouterr().out
        assert "FAIL: bad.yaml" in out
        assert "OK: good.yaml" in out

    def test_reference_mode(self, capsys):
        assert main(["--reference", str(DEFAULT_REFERENCE_FILE)]) == 0
        assert "OK: reference.yaml" in capsys.readouterr().out

    def test_default_garage_directory(self, capsys):
        assert main([]) == 0
        assert "OK: example.yaml" in capsys.readouterr().out


class TestReferenceRules:
    """Reference files must satisfy the loader's rules, not only the schema."""

    def test_trend_table_without_catch_all_fails(self, tmp_path, flat_reference_file):
        content = flat_reference_file.read_text().replace(
            "      - trend: decreasing\n  default:",
            "      - maxAge: 10\n        trend: decreasing\n  default:",
        )
        path = tmp_path / "no_catch_all.yaml"
        path.write_text(content)
        errors = validate_reference_file(path, load_schema("reference"))
        assert len(errors) == 1
        assert errors[0].startswith("Reference data error:")
        assert "luxury" in errors[0]

    def test_main_reports_failure(self, tmp_path, flat_reference_file, capsys):
        content = flat_reference_file.read_text().replace(
            "      - trend: decreasing\n  default:",
            "      - maxAge: 10\n        trend: decreasing\n  default:",
        )
        path = tmp_path / "bad.yaml"
        path.write_text(content)
        assert main(["--reference", str(path)]) == 1
        out = capsys.readouterr().out
        assert "FAIL: bad.yaml" in out
        assert "must end with a rule without maxAge" in out

    def test_valid_reference_passes(self, flat_reference_file):
        errors = validate_reference_file(flat_reference_file, load_schema("reference"))
        assert errors == []

    def test_reference_mode_defaults_to_bundled_file(self, capsys):
        assert main(["--reference"]) == 0
        assert "OK: reference.yaml" in capsys.readouterr().out
