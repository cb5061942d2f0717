#!/usr/bin/env python3
"""Validate garage and reference YAML files against their schemas."""
import argparse
import sys
from pathlib import Path

import yaml
from jsonschema import validate, ValidationError

from valuation.loader import (
    DEFAULT_REFERENCE_FILE,
    ReferenceDataError,
    load_reference_data,
    load_schema,
)


def validate_file(filepath: Path, schema: dict) -> list[str]:
    """Validate a single YAML file. Returns list of errors."""
    errors = []
    try:
        with open(filepath) as f:
            data = yaml.safe_load(f)
        validate(instance=data, schema=schema)
    except yaml.YAMLError as e:
        errors.append(f"YAML parse error: {e}")
    except ValidationError as e:
        errors.append(f"Schema validation error: {e.message}")
        if e.path:
            errors.append(f"  at path: {'.'.join(str(p) for p in e.path)}")
    except OSError as e:
        errors.append(f"Error: {e}")
    return errors


def validate_reference_file(filepath: Path, schema: dict) -> list[str]:
    """Validate a reference data file, including rules the schema cannot express."""
    errors = validate_file(filepath, schema)
    if errors:
        return errors
    try:
        load_reference_data(filepath)
    except ReferenceDataError as e:
        errors.append(f"Reference data error: {e}")
    return errors


def main(argv=None):
    """Validate the given files, or the garage/ files (bundled data with --reference)."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("files", nargs="*", type=Path, help="YAML files to check")
    parser.add_argument(
        "--reference",
        action="store_true",
        help="Validate reference data files instead of garage files",
    )
    args = parser.parse_args(argv)

    schema = load_schema("reference" if args.reference else "garage")
    check = validate_reference_file if args.reference else validate_file

    yaml_files = args.files
    if not yaml_files and args.reference:
        yaml_files = [DEFAULT_REFERENCE_FILE]
    elif not yaml_files:
        garage_dir = Path(__file__).parent / "garage"
        if not garage_dir.exists():
            print(f"Error: garage directory not found: {garage_dir}")
            return 1
        yaml_files = list(garage_dir.glob("*.yaml")) + list(garage_dir.glob("*.yml"))

    if not yaml_files:
        print("Warning: No YAML files found")
        return 0

    all_valid = True
    for filepath in sorted(yaml_files):
        errors = check(filepath, schema)
        if errors:
            print(f"FAIL: {filepath.name}")
            for error in errors:
                print(f"  {error}")
            all_valid = False
        else:
            print(f"OK: {filepath.name}")

    return 0 if all_valid else 1


if __name__ == "__main__":
    sys.exit(main())
