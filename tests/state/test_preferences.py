# SPDX-License-Identifier: Apache-2.0
import json

from thermomap.state.persistence import JsonFileStore, MemoryStore


def test_memory_store():
    store = MemoryStore({"year": 1900})
    assert store.get("year") == 1900
    assert store.get("mode", "absolute") == "absolute"
    store.set("mode", "relative")
    assert store.snapshot() == {"year": 1900, "mode": "relative"}
    store.clear()
    assert store.snapshot() == {}


def test_json_store_round_trip(tmp_path):
    path = tmp_path / "nested" / "state.json"
    store = JsonFileStore(path)
    assert store.get("year") is None
    store.set("year", 1900)
    store.set("mode", "relative")
    assert json.loads(path.read_text(encoding="utf-8")) == {"mode": "relative", "year": 1900}
    assert JsonFileStore(path).get("year") == 1900


def test_json_store_ignores_corrupt_file(tmp_path):
    path = tmp_path / "state.json"
    path.write_text("{not json", encoding="utf-8")
    store = JsonFileStore(path)
    assert store.snapshot() == {}
    store.set("year", 2014)
    assert store.snapshot() == {"year": 2014}


def test_json_store_ignores_non_object(tmp_path):
    path = tmp_path / "state.json"
    path.write_text("[1, 2]", encoding="utf-8")
    assert JsonFileStore(path).get("year", 1850) == 1850


def test_json_store_clear(tmp_path):
    store = JsonFileStore(tmp_path / "state.json")
    store.set("year", 1900)
    store.clear()
    assert not store.path.exists()
    store.clear()


def test_json_store_expands_home(tmp_path):
    store = JsonFileStore("~/.thermomap/state.json")
    store.set("mode", "absolute")
    assert (tmp_path / "home" / ".thermomap" / "state.json").exists()
