"""Tests for restaurant visibility settings."""

import json

from lunch.services.visibility import HIDDEN_KEY, VisibilitySettings
from lunch.storage import MemoryBlobStore


def test_everything_visible_by_default(visibility: VisibilitySettings) -> None:
    assert visibility.is_visible("kvarnen")
    assert visibility.hidden_ids == frozenset()


def test_set_hidden(visibility: VisibilitySettings) -> None:
    visibility.set_hidden("kvarnen", True)
    assert not visibility.is_visible("kvarnen")

    visibility.set_hidden("kvarnen", False)
    assert visibility.is_visible("kvarnen")


def test_toggle(visibility: VisibilitySettings) -> None:
    visibility.toggle("kvarnen")
    assert not visibility.is_visible("kvarnen")

    visibility.toggle("kvarnen")
    assert visibility.is_visible("kvarnen")


def test_show_all_and_hide_all(visibility: VisibilitySettings) -> None:
    ids = ["kvarnen", "bistro-bryggan", "caf--test"]

    visibility.hide_all(ids)
    assert visibility.visible_count(ids) == 0

    visibility.show_all()
    assert visibility.visible_count(ids) == 3


def test_persists_as_json_list(store: MemoryBlobStore) -> None:
    settings = VisibilitySettings(store)
    settings.hide_all(["b", "a"])

    assert json.loads(store.get(HIDDEN_KEY)) == ["a", "b"]
    reloaded = VisibilitySettings(store)
    assert reloaded.hidden_ids == frozenset({"a", "b"})


def test_ignores_corrupt_settings(store: MemoryBlobStore) -> None:
    store.set(HIDDEN_KEY, "{broken")
    assert VisibilitySettings(store).hidden_ids == frozenset()

    store.set(HIDDEN_KEY, json.dumps({"a": 1}))
    assert VisibilitySettings(store).hidden_ids == frozenset()
