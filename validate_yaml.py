#!/usr/bin/env python3
"""Validate maintenance request YAML files against the schema."""
import sys
from pathlib import Path

import yaml
from jsonschema import validate, ValidationError


def load_schema() -> dict:
    """Load the JSON schema from schema.yaml."""
    schema_path = Path(__file__).parent / "schema.yaml"
    with open(schema_path) as f:
        return yaml.safe_load(f)


def validate_request_file(filepath: Path, schema: dict) -> list[str]:
    """Validate a single request YAML file. Returns list of errors."""
    errors = []
    try:
        with open(filepath) as f:
            data = yaml.safe_load(f)
        validate(instance=data, schema=schema)
        errors.extend(check_unique_ids(data))
        errors.extend(check_unique_plates(data))
    except yaml.YAMLError as e:
        errors.append(f"YAML parse error: {e}")
    except ValidationError as e:
        errors.append(f"Schema validation error: {e.message}")
        if e.path:
            errors.append(f"  at path: {'.'.join(str(p) for p in e.path)}")
    except OSError as e:
        errors.append(f"Error: {e}")
    return errors


def check_unique_ids(data: dict) -> list[str]:
    """Vehicle ids must be unique within a request."""
    errors = []
    seen = set()
    for vehicle in data.get("vehicles") or []:
        vehicle_id = str(vehicle["id"])
        if vehicle_id in seen:
            errors.append(f"Duplicate vehicle id: {vehicle_id}")
        seen.add(vehicle_id)
    return errors


def check_unique_plates(data: dict) -> list[str]:
    """Plate numbers must be unique (case-insensitive) within a request."""
    errors = []
    seen = set()
    for vehicle in data.get("vehicles") or []:
        plate = str(vehicle["plateNumber"]).strip().lower()
        if plate in seen:
            errors.append(f"Duplicate plate number: {vehicle['plateNumber']}")
        seen.add(plate)
    return errors


def main(argv=None):
    """Validate all request YAML files in the requests/ directory (or given paths)."""
    schema = load_schema()
    paths = [Path(p) for p in (argv if argv is not None else sys.argv[1:])]

    if not paths:
        requests_dir = Path(__file__).parent / "requests"
        if not requests_dir.exists():
            print(f"Error: requests directory not found: {requests_dir}")
            return 1
        paths = list(requests_dir.glob("*.yaml")) + list(requests_dir.glob("*.yml"))
        if not paths:
            print(f"Warning: No YAML files found in {requests_dir}")
            return 0

    all_valid = True
    for filepath in sorted(paths):
        errors = validate_request_file(filepath, schema)
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
