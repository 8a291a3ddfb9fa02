from __future__ import annotations

import pytest

from agent_actions.schemas import SchemaValidationError, load_schema, validate_payload, validate_payload_safe


def test_bundled_schemas_load() -> None:
    assert load_schema("namespace")["title"] == "Action namespace document"
    assert load_schema("config.schema.yaml")["type"] == "object"


def test_unknown_schema() -> None:
    with pytest.raises(FileNotFoundError):
        load_schema("does-not-exist")


def test_errors_carry_field_path() -> None:
    errors = validate_payload_safe({"namespace": "ok", "actions": {"x": {"description": 5}}}, "namespace")

    assert errors == ["actions.x.description: 5 is not of type 'string'"]


def test_validate_payload_raises_with_all_errors() -> None:
    with pytest.raises(SchemaValidationError) as exc:
        validate_payload({"actions": {"max_depth": 0, "debug": "yes"}}, "config")

    assert len(exc.value.errors) == 2


def test_builtin_actions_document_is_valid() -> None:
    from agent_actions.data import read_yaml

    assert validate_payload_safe(read_yaml("actions", "common.yaml"), "namespace") == []
