from __future__ import annotations

from agent_actions.core.models import LoadError
from agent_actions.exceptions import (
    ActionsError,
    ConfigError,
    IndexIntegrityError,
    NoSourcesError,
    ReloadInProgressError,
    SchemaError,
    SourceReadError,
)


def test_to_json_error_uses_class_name_and_context() -> None:
    err = SchemaError("namespace is required", path="a.yaml", details=["namespace: required"])

    assert err.to_json_error() == {
        "message": "namespace is required",
        "code": "SchemaError",
        "context": {"path": "a.yaml"},
    }


def test_builtin_bases_are_kept() -> None:
    assert isinstance(SourceReadError("x"), OSError)
    assert isinstance(SchemaError("x"), ValueError)
    assert isinstance(ConfigError("x"), ValueError)
    assert isinstance(ReloadInProgressError(), RuntimeError)
    assert str(ReloadInProgressError()) == "Reload already in progress"


def test_context_is_copied() -> None:
    ctx = {"a": 1}
    err = ActionsError("boom", context=ctx)
    ctx["a"] = 2

    assert err.context == {"a": 1}


def test_load_error_kinds() -> None:
    cases = [
        (SourceReadError("r", path="r.yaml"), "read_error", "r.yaml"),
        (SchemaError("s", path="s.yaml"), "schema_error", "s.yaml"),
        (IndexIntegrityError("i", full_name="a:b", path="i.yaml"), "index_error", "i.yaml"),
        (NoSourcesError("n"), "fatal", ""),
        (ConfigError("c", context={"path": "c.yaml"}), "error", "c.yaml"),
    ]
    for exc, kind, path in cases:
        err = LoadError.from_exception(exc)
        assert (err.kind, err.path, err.message) == (kind, path, str(exc))


def test_load_error_to_dict_omits_empty_details() -> None:
    assert LoadError("read_error", "a.yaml", "boom").to_dict() == {
        "kind": "read_error",
        "path": "a.yaml",
        "message": "boom",
    }
