"""Tests for the appliance store."""

import json

from app.models.appliance import Appliance
from app.services.appliance_store import (
    DEFAULT_APPLIANCES,
    STORAGE_KEY,
    ApplianceStore,
    categories,
    default_appliances,
    merge_defaults,
    owned_names,
)
from app.services.storage import InMemoryStore


class BrokenStore:
    def get(self, key):
        raise OSError("storage unavailable")

    def set(self, key, value):
        raise OSError("storage unavailable")


def _dump(appliances) -> str:
    return json.dumps([a.model_dump() for a in appliances])


def test_load_without_backend_returns_defaults():
    store = ApplianceStore()
    assert store.load() == DEFAULT_APPLIANCES


def test_load_empty_store_returns_defaults():
    store = ApplianceStore(InMemoryStore())
    assert [a.id for a in store.load()] == [a.id for a in DEFAULT_APPLIANCES]


def test_load_corrupt_json_falls_back_to_defaults():
    store = ApplianceStore(InMemoryStore({STORAGE_KEY: "{not json"}))
    assert store.load() == DEFAULT_APPLIANCES


def test_load_wrong_shape_falls_back_to_defaults():
    store = ApplianceStore(InMemoryStore({STORAGE_KEY: json.dumps({"oven": True})}))
    assert store.load() == DEFAULT_APPLIANCES


def test_load_deeply_nested_value_falls_back_to_defaults():
    store = ApplianceStore(InMemoryStore({STORAGE_KEY: "[" * 100000}))
    assert store.load() == DEFAULT_APPLIANCES


def test_load_read_error_falls_back_to_defaults():
    assert ApplianceStore(BrokenStore()).load() == DEFAULT_APPLIANCES


def test_load_keeps_user_edits_to_default_ids():
    stored = default_appliances()
    stored[0] = stored[0].model_copy(update={"owned": False, "name": "My Gas Range"})
    store = ApplianceStore(InMemoryStore({STORAGE_KEY: _dump(stored)}))

    loaded = store.load()

    assert loaded[0].name == "My Gas Range"
    assert loaded[0].owned is False
    assert len(loaded) == len(DEFAULT_APPLIANCES)


def test_load_twice_is_idempotent():
    backend = InMemoryStore()
    store = ApplianceStore(backend)
    store.load()
    store.toggle("oven")
    store.save()

    assert ApplianceStore(backend).load() == ApplianceStore(backend).load()


def test_new_default_is_appended_without_touching_existing_flags():
    old_defaults = [
        Appliance(id="oven", name="Oven", category="Cooking Surfaces", owned=True),
        Appliance(id="wok", name="Wok", category="Specialty", owned=False),
    ]
    stored = [
        Appliance(id="oven", name="Oven", category="Cooking Surfaces", owned=False),
        Appliance(id="wok", name="Wok", category="Specialty", owned=True),
    ]
    new_defaults = old_defaults + [Appliance(id="air-fryer", name="Air Fryer", category="Small Appliances")]
    store = ApplianceStore(InMemoryStore({STORAGE_KEY: _dump(stored)}), defaults=new_defaults)

    loaded = store.load()

    assert [a.id for a in loaded] == ["oven", "wok", "air-fryer"]
    assert [a.owned for a in loaded] == [False, True, False]


def test_merge_defaults_does_not_duplicate_ids():
    merged = merge_defaults(default_appliances())
    ids = [a.id for a in merged]
    assert len(ids) == len(set(ids))


def test_save_then_load_round_trip_keeps_custom_entries():
    backend = InMemoryStore()
    store = ApplianceStore(backend)
    store.load()
    custom = store.add("Ninja Foodi", "Small Appliances")
    store.save()

    reloaded = ApplianceStore(backend).load()

    assert custom in reloaded
    assert reloaded[len(DEFAULT_APPLIANCES)].id == custom.id


def test_save_without_backend_is_noop():
    store = ApplianceStore()
    store.load()
    store.save()  # must not raise
    assert store.appliances == DEFAULT_APPLIANCES


def test_save_overwrites_whole_collection():
    backend = InMemoryStore()
    store = ApplianceStore(backend)
    store.save([Appliance(id="oven", name="Oven", category="Cooking Surfaces", owned=True)])

    assert json.loads(backend.get(STORAGE_KEY)) == [
        {"id": "oven", "name": "Oven", "category": "Cooking Surfaces", "owned": True}
    ]


def test_toggle_flips_one_record():
    store = ApplianceStore()
    store.load()
    before = {a.id: a.owned for a in store.appliances}

    store.toggle("wok")

    after = {a.id: a.owned for a in store.appliances}
    assert after["wok"] is not before["wok"]
    assert {k: v for k, v in after.items() if k != "wok"} == {k: v for k, v in before.items() if k != "wok"}


def test_toggle_unknown_id_is_noop():
    store = ApplianceStore()
    store.load()
    store.toggle("does-not-exist")
    assert store.appliances == DEFAULT_APPLIANCES


def test_add_rejects_blank_name():
    store = ApplianceStore()
    store.load()
    assert store.add("   ", "Other") is None
    assert len(store.appliances) == len(DEFAULT_APPLIANCES)


def test_add_creates_owned_custom_record():
    store = ApplianceStore()
    store.load()

    first = store.add("  George Foreman Grill ", "")
    second = store.add("George Foreman Grill")

    assert first.name == "George Foreman Grill"
    assert first.category == "Other"
    assert first.owned is True
    assert first.is_custom
    assert first.id != second.id
    assert "George Foreman Grill" in store.owned_names()


def test_remove_deletes_record():
    store = ApplianceStore()
    store.load()
    custom = store.add("Smoker")

    store.remove(custom.id)
    store.remove("oven")

    ids = [a.id for a in store.appliances]
    assert custom.id not in ids
    assert "oven" not in ids


def test_owned_names_preserves_order():
    appliances = [
        Appliance(id="b", name="B", category="x", owned=True),
        Appliance(id="a", name="A", category="x", owned=False),
        Appliance(id="c", name="C", category="y", owned=True),
    ]
    assert owned_names(appliances) == ["B", "C"]


def test_categories_in_first_seen_order():
    assert categories(DEFAULT_APPLIANCES) == [
        "Cooking Surfaces",
        "Small Appliances",
        "Prep Tools",
        "Specialty",
    ]
