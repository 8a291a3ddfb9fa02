"""Shared schema validation utilities.

Namespace documents and configuration files are validated with JSON Schema.
Schemas are stored as YAML files under ``agent_actions.data/schemas/`` and
loaded in a single, consistent way.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, List

from jsonschema import Draft202012Validator

from agent_actions.data import get_data_path, read_yaml


class SchemaValidationError(ValueError):
    """Raised when schema validation fails."""

    def __init__(self, message: str, errors: List[str] | None = None) -> None:
        super().__init__(message)
        self.errors = list(errors or [])


def _normalize_name(schema_name: str) -> str:
    lowered = schema_name.lower()
    if not (lowered.endswith(".yaml") or lowered.endswith(".yml")):
        return f"{schema_name}.schema.yaml"
    return schema_name


def load_schema(schema_name: str) -> Dict[str, Any]:
    """Load a bundled schema dict.

    ``"namespace"`` resolves to ``schemas/namespace.schema.yaml``; a name with
    a YAML extension is used as-is.

    Raises:
        FileNotFoundError: If schema file doesn't exist.
        ValueError: If schema is not a YAML mapping.
    """
    filename = _normalize_name(schema_name)
    path = get_data_path("schemas", filename)
    if not path.exists():
        raise FileNotFoundError(f"Schema not found: {filename} (searched {path.parent})")
    schema = read_yaml("schemas", filename)
    if not isinstance(schema, dict):
        raise ValueError(f"Schema {filename} must be a YAML mapping")
    return schema


@lru_cache(maxsize=8)
def _validator(schema_name: str) -> Draft202012Validator:
    schema = load_schema(schema_name)
    Draft202012Validator.check_schema(schema)
    return Draft202012Validator(schema)


def validate_payload_safe(payload: Any, schema_name: str) -> List[str]:
    """Validate a payload and return list of error messages (empty if valid).

    Messages are prefixed with the dotted path of the offending field.
    """
    errors: List[str] = []
    for error in sorted(_validator(schema_name).iter_errors(payload), key=lambda e: [str(p) for p in e.path]):
        if error.path:
            path_str = ".".join(str(p) for p in error.path)
            errors.append(f"{path_str}: {error.message}")
        else:
            errors.append(error.message)
    return errors


def validate_payload(payload: Any, schema_name: str) -> None:
    """Validate a payload against a bundled schema.

    Raises:
        SchemaValidationError: If validation fails.
    """
    errors = validate_payload_safe(payload, schema_name)
    if errors:
        raise SchemaValidationError(
            f"Validation failed against schema '{schema_name}': {errors[0]}",
            errors,
        )


__all__ = [
    "load_schema",
    "validate_payload",
    "validate_payload_safe",
    "SchemaValidationError",
]
