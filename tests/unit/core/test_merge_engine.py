from __future__ import annotations

import pytest
from helpers.catalog import make_doc

from agent_actions.core.merge import merge
from agent_actions.core.models import ActionDef, SelectorDef, SourceDocument


def test_later_document_replaces_whole_action() -> None:
    a = make_doc(
        "common",
        {"login": {"description": "Default login", "parameters": [{"name": "username"}]}},
        rank=1,
    )
    b = make_doc("common", {"login": {"description": "Custom login"}}, rank=2)

    login = merge([a, b])["common"].actions["login"]

    assert login.description == "Custom login"
    # No field-level overlay: parameters from the lower rank are gone.
    assert login.parameters == ()
    assert login.source_path == b.source_path


def test_non_colliding_keys_are_additive() -> None:
    a = make_doc("common", {"x": "X"}, rank=1)
    b = make_doc("common", {"y": "Y"}, rank=2)

    actions = merge([a, b])["common"].actions

    assert set(actions) == {"x", "y"}
    assert actions["x"].description == "X"
    assert actions["x"].source_path == a.source_path
    assert actions["y"].source_path == b.source_path


def test_scenario_custom_login_overrides_default() -> None:
    source1 = make_doc("common", {"login": "Default login"}, rank=1, source_path="builtin/common.yaml")
    source2 = make_doc(
        "common",
        {"login": "Custom login", "logout": "Logout"},
        rank=2,
        source_path="project/common.yaml",
    )

    merged = merge([source1, source2])

    common = merged["common"]
    assert {k: a.description for k, a in common.actions.items()} == {
        "login": "Custom login",
        "logout": "Logout",
    }
    assert sum(len(ns.actions) for ns in merged.values()) == 2


def test_input_order_is_trusted_not_rank() -> None:
    high = make_doc("common", {"login": "High"}, rank=9)
    low = make_doc("common", {"login": "Low"}, rank=1)

    assert merge([high, low])["common"].actions["login"].description == "Low"


def test_namespace_persists_when_later_documents_skip_it() -> None:
    a = make_doc("forms", {"submit": "Submit"}, rank=1)
    b = make_doc("common", {"login": "Login"}, rank=2)

    merged = merge([a, b])

    assert list(merged) == ["forms", "common"]
    assert "submit" in merged["forms"].actions


def test_empty_actions_still_create_namespace() -> None:
    merged = merge([make_doc("empty", {}, rank=1)])

    assert "empty" in merged
    assert dict(merged["empty"].actions) == {}


def test_selectors_follow_last_wins() -> None:
    a = make_doc("common", selectors={"submit": "#old", "cancel": "#cancel"}, rank=1)
    b = make_doc("common", selectors={"submit": "#new"}, rank=2)

    selectors = merge([a, b])["common"].selectors

    assert selectors["submit"].value == "#new"
    assert selectors["submit"].source_path == b.source_path
    assert selectors["cancel"].value == "#cancel"


def test_namespace_metadata_takes_latest_non_empty_value() -> None:
    a = make_doc("common", rank=1, version="1.0.0", description="Built-in")
    b = make_doc("common", rank=2, version="1.1.0")

    ns = merge([a, b])["common"]

    assert ns.version == "1.1.0"
    assert ns.description == "Built-in"
    assert ns.source_paths == (a.source_path, b.source_path)
    assert ns.source_path == b.source_path


def test_component_keys_are_opaque() -> None:
    merged = merge([make_doc("common", {"dialog:close": "Close dialog"}, rank=1)])

    action = merged["common"].actions["dialog:close"]
    assert action.full_name == "common:dialog:close"
    assert action.name == "dialog:close"


def test_no_documents_yield_no_namespaces() -> None:
    assert merge([]) == {}


def test_merged_namespaces_are_read_only() -> None:
    ns = merge([make_doc("common", {"login": "Login"}, rank=1)])["common"]

    with pytest.raises(TypeError):
        ns.actions["other"] = ns.actions["login"]  # type: ignore[index]


def test_records_are_named_by_their_mapping_key() -> None:
    doc = SourceDocument(
        "ns",
        {"a": ActionDef("b", "Stored under a"), "c": ActionDef("b", "Stored under c")},
        {"submit": SelectorDef("button", "#submit")},
        source_path="ns.yaml",
    )

    namespace = merge([doc])["ns"]

    assert [(k, a.name, a.full_name) for k, a in namespace.actions.items()] == [
        ("a", "a", "ns:a"),
        ("c", "c", "ns:c"),
    ]
    assert namespace.selectors["submit"].name == "submit"
