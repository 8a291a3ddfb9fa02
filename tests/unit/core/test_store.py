from __future__ import annotations

import threading
from typing import List

import pytest
from helpers.catalog import make_doc, write_namespace

from agent_actions.core.models import ActionDef, LoadError, SourceDocument
from agent_actions.core.store import ActionRegistry, create_and_load_registry, create_registry
from agent_actions.exceptions import ReloadInProgressError
from agent_actions.loader import LoaderConfig, LoadResult


class ScriptedLoader:
    """Loader stand-in that returns a queued document set per call."""

    def __init__(self, *batches: List[SourceDocument]) -> None:
        self.batches = list(batches)
        self.calls = 0

    def __call__(self, config: LoaderConfig) -> LoadResult:
        docs = self.batches[min(self.calls, len(self.batches) - 1)]
        self.calls += 1
        return LoadResult(documents=list(docs))


def test_registry_is_empty_before_load() -> None:
    registry = ActionRegistry(loader=ScriptedLoader([]))

    assert registry.get_all_actions() == []
    assert registry.get_stats().action_count == 0


def test_load_publishes_merged_catalog() -> None:
    loader = ScriptedLoader(
        [
            make_doc("common", {"login": "Default login"}, rank=1),
            make_doc("common", {"login": "Custom login", "logout": "Logout"}, rank=2),
        ]
    )
    registry = ActionRegistry(loader=loader)

    result = registry.load()

    assert result.success
    assert result.stats.action_count == 2
    assert registry.get_action("common:login").description == "Custom login"
    assert registry.has_action("common:logout")


def test_reload_drops_keys_absent_from_new_sources() -> None:
    loader = ScriptedLoader(
        [make_doc("common", {"login": "Login", "logout": "Logout"}, rank=1)],
        [make_doc("common", {"login": "Login"}, rank=1)],
    )
    registry = ActionRegistry(loader=loader)
    registry.load()

    registry.reload()

    assert not registry.has_action("common:logout")
    assert registry.get_stats().action_count == 1


def test_errors_from_loader_and_index_are_combined() -> None:
    def loader(config: LoaderConfig) -> LoadResult:
        return LoadResult(
            documents=[make_doc(" ", {"x": "X"}, rank=1), make_doc("common", {"login": "Login"}, rank=2)],
            errors=[LoadError(kind="schema_error", path="bad.yaml", message="namespace is required")],
        )

    result = ActionRegistry(loader=loader).load()

    assert [e.kind for e in result.errors] == ["schema_error", "index_error"]
    assert result.stats.action_count == 1
    assert not result.success


def test_failed_reload_keeps_previous_snapshot() -> None:
    calls = {"n": 0}

    def loader(config: LoaderConfig) -> LoadResult:
        calls["n"] += 1
        if calls["n"] > 1:
            raise RuntimeError("disk vanished")
        return LoadResult(documents=[make_doc("common", {"login": "Login"}, rank=1)])

    registry = ActionRegistry(loader=loader)
    registry.load()
    before = registry.snapshot

    with pytest.raises(RuntimeError):
        registry.reload()

    assert registry.snapshot is before
    assert registry.has_action("common:login")


def test_query_view_is_pinned_to_one_snapshot() -> None:
    loader = ScriptedLoader(
        [make_doc("common", {"login": "Login"}, rank=1)],
        [make_doc("forms", {"submit": "Submit"}, rank=1)],
    )
    registry = ActionRegistry(loader=loader)
    registry.load()
    view = registry.query()

    registry.reload()

    assert view.has_action("common:login")
    assert not registry.has_action("common:login")
    assert registry.has_action("forms:submit")


def test_non_blocking_reload_during_reload_is_rejected() -> None:
    started = threading.Event()
    release = threading.Event()

    def slow_loader(config: LoaderConfig) -> LoadResult:
        started.set()
        assert release.wait(5)
        return LoadResult(documents=[make_doc("common", {"login": "Login"}, rank=1)])

    registry = ActionRegistry(loader=slow_loader)
    worker = threading.Thread(target=registry.reload)
    worker.start()
    try:
        assert started.wait(5)
        with pytest.raises(ReloadInProgressError):
            registry.reload(blocking=False)
    finally:
        release.set()
        worker.join(5)

    assert registry.has_action("common:login")


def test_readers_see_old_or_new_snapshot_only() -> None:
    old_docs = [make_doc("common", {"a": "A", "b": "B"}, rank=1)]
    new_docs = [make_doc("common", {f"n{i}": str(i) for i in range(50)}, rank=1)]
    in_reload = threading.Event()
    release = threading.Event()
    calls = {"n": 0}

    def loader(config: LoaderConfig) -> LoadResult:
        calls["n"] += 1
        if calls["n"] == 1:
            return LoadResult(documents=list(old_docs))
        in_reload.set()
        assert release.wait(5)
        return LoadResult(documents=list(new_docs))

    registry = ActionRegistry(loader=loader)
    registry.load()

    seen = set()
    stop = threading.Event()

    def reader() -> None:
        while not stop.is_set():
            seen.add(registry.get_stats().action_count)
            seen.add(len(registry.get_all_actions()))

    readers = [threading.Thread(target=reader) for _ in range(4)]
    for t in readers:
        t.start()
    writer = threading.Thread(target=registry.reload)
    writer.start()
    assert in_reload.wait(5)
    release.set()
    writer.join(5)
    stop.set()
    for t in readers:
        t.join(5)

    assert seen <= {2, 50}
    assert registry.get_stats().action_count == 50


def test_concurrent_blocking_reloads_are_serialised() -> None:
    active = {"now": 0, "max": 0}
    lock = threading.Lock()

    def loader(config: LoaderConfig) -> LoadResult:
        with lock:
            active["now"] += 1
            active["max"] = max(active["max"], active["now"])
        threading.Event().wait(0.01)
        with lock:
            active["now"] -= 1
        return LoadResult(documents=[make_doc("common", {"login": "Login"}, rank=1)])

    registry = ActionRegistry(loader=loader)
    threads = [threading.Thread(target=registry.reload) for _ in range(5)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(5)

    assert active["max"] == 1


def test_register_documents_overrides_current_catalog() -> None:
    registry = ActionRegistry(loader=ScriptedLoader([make_doc("common", {"login": "Login"}, rank=1)]))
    registry.load()

    result = registry.register_documents([make_doc("common", {"login": "Patched", "extra": "Extra"}, rank=2)])

    assert result.stats.action_count == 2
    assert registry.get_action("common:login").description == "Patched"


def test_register_documents_does_not_duplicate_index_errors() -> None:
    registry = ActionRegistry(loader=ScriptedLoader([make_doc(" ", {"x": "X"}, rank=1)]))
    registry.load()

    result = registry.register_documents([make_doc("forms", {"fill": "Fill"}, rank=2)])

    assert [e.kind for e in result.errors] == ["index_error"]


def test_registered_document_is_indexed_by_mapping_key() -> None:
    registry = ActionRegistry(loader=ScriptedLoader([]))
    registry.load()

    registry.register_documents([SourceDocument("ns", {"a": ActionDef("b", "Described")}, source_path="mem.yaml")])

    assert list(registry.get_namespace("ns").actions) == ["a"]
    assert registry.has_action("ns:a")
    assert not registry.has_action("ns:b")
    assert registry.get_action("ns:a").description == "Described"


def test_loads_real_files_through_default_loader(tmp_path) -> None:
    write_namespace(tmp_path / "actions", "shop", {"checkout": {"description": "Pay for the cart"}})
    config = LoaderConfig(paths=[str(tmp_path / "actions")], use_default_paths=False)

    registry, result = create_and_load_registry(config)

    assert result.errors == ()
    assert registry.get_action("shop:checkout").source_path.endswith("shop.yaml")
    assert [r.action.full_name for r in registry.search("cart")] == ["shop:checkout"]


def test_builtin_actions_are_loaded_by_default(project) -> None:
    registry = create_registry(LoaderConfig(base_path=str(project)))
    registry.load()

    assert registry.has_namespace("common")
    assert registry.has_action("common:login")
