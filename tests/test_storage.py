import json

from snake_roguelite.constants import PROGRESSION_KEY
from snake_roguelite.progression import default_progression
from snake_roguelite.storage import JsonFileStore, MemoryStore, load_progression, save_progression


class BrokenStore:
    def load(self, key):
        raise OSError("disk on fire")

    def save(self, key, blob):
        raise OSError("disk on fire")


def test_empty_store_loads_defaults():
    assert load_progression(MemoryStore()) == default_progression()


def test_memory_store_keeps_progression(progression):
    store = MemoryStore()
    progression.gems = 3
    progression.stats.deaths = 2
    assert save_progression(store, progression)
    assert save_progression(store, progression)
    assert store.saves == 2
    assert load_progression(store) == progression


def test_garbage_blob_loads_defaults():
    store = MemoryStore({PROGRESSION_KEY: "{not json"})
    assert load_progression(store) == default_progression()


def test_non_object_blob_loads_defaults():
    store = MemoryStore({PROGRESSION_KEY: "[1, 2, 3]"})
    assert load_progression(store) == default_progression()


def test_broken_store_is_tolerated(progression):
    assert load_progression(BrokenStore()) == default_progression()
    assert not save_progression(BrokenStore(), progression)


def test_json_file_store(tmp_path, progression):
    path = tmp_path / "save.json"
    store = JsonFileStore(str(path))
    assert store.load(PROGRESSION_KEY) is None

    progression.gems = 9
    save_progression(store, progression)
    store.save("other", "kept")

    data = json.loads(path.read_text())
    assert set(data) == {PROGRESSION_KEY, "other"}
    assert load_progression(JsonFileStore(str(path))).gems == 9


def test_corrupt_save_file_loads_defaults(tmp_path, progression):
    path = tmp_path / "save.json"
    path.write_text("\x00garbage")
    store = JsonFileStore(str(path))
    assert load_progression(store) == default_progression()
    assert save_progression(store, progression)
    assert load_progression(store) == progression


def test_overflowing_numbers_in_blob_load_defaults():
    store = MemoryStore({PROGRESSION_KEY: '{"gems": 3, "stats": {"deaths": 1e400}, '
                                          '"permanent_upgrades": {"dash_power": 1e999}}'})
    prog = load_progression(store)
    assert prog.gems == 3
    assert prog.stats.deaths == 0
    assert prog.permanent_upgrades.dash_power == 0
