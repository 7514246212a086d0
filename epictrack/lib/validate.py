"""
Schema validation for epictrack.

The snapshot document is checked against its JSON Schema when it is
loaded and again before it is written, so a malformed snapshot is never
trusted and never produced.
"""

import json
from pathlib import Path
from typing import Any

import jsonschema
from jsonschema.exceptions import best_match


class ValidationError(Exception):
    """Document does not match its schema."""

    def __init__(self, schema_name: str, message: str, location: str = None):
        self.schema_name = schema_name
        self.location = location
        super().__init__(f"[{schema_name}] {message}" + (f" at {location}" if location else ""))


_validators: dict[str, jsonschema.Draft7Validator] = {}


def schemas_dir() -> Path:
    return Path(__file__).parent / "schemas"


def get_validator(schema_name: str) -> jsonschema.Draft7Validator:
    """Load and check the named schema once, then reuse its validator."""
    if schema_name not in _validators:
        schema_path = schemas_dir() / f"{schema_name}.schema.json"
        if not schema_path.exists():
            raise ValidationError(schema_name, f"Schema file not found: {schema_path}")
        schema = json.loads(schema_path.read_text())
        jsonschema.Draft7Validator.check_schema(schema)
        _validators[schema_name] = jsonschema.Draft7Validator(schema)
    return _validators[schema_name]


def validate(data: Any, schema_name: str) -> None:
    """
    Validate a decoded JSON document against the named schema.

    Only the most relevant failure is reported.

    Raises:
        ValidationError: If the document does not match
    """
    error = best_match(get_validator(schema_name).iter_errors(data))
    if error is None:
        return

    location = ".".join(str(p) for p in error.absolute_path) or "(root)"
    raise ValidationError(schema_name, error.message, location)


def validate_before_write(data: dict, schema_name: str, filepath: Path) -> None:
    """
    Validate a document that is about to be written to filepath.

    Raises:
        ValidationError: If the document does not match
    """
    try:
        validate(data, schema_name)
    except ValidationError as e:
        raise ValidationError(
            schema_name,
            f"Refusing to write invalid snapshot to {filepath}: {e}",
        ) from None
