"""Tests for the calculation history, blob stores and change notification."""

import json
import re

import pytest

from calculators import evaluate
from history import (
    HistoryBroadcast,
    HistoryStore,
    JsonFileBlobStore,
    MemoryBlobStore,
    add_calculation,
    history_updated,
)
from utils.constants import HISTORY_KEY


def _add(store, n=1):
    return [store.add(calculator="Vazão", result=float(i), formula="Q = v × A") for i in range(n)]


class TestHistoryStore:
    """Bounded log behavior."""

    def test_starts_empty(self, blob_store):
        assert len(HistoryStore(blob_store)) == 0

    def test_newest_first(self, blob_store):
        store = HistoryStore(blob_store)
        first, second = _add(store, 2)
        assert store.entries == [second, first]

    def test_ids_strictly_increasing(self, blob_store):
        store = HistoryStore(blob_store)
        entries = _add(store, 50)
        ids = [entry.id for entry in entries]
        assert all(later > earlier for earlier, later in zip(ids, ids[1:]))

    def test_bounded_to_25(self, blob_store):
        store = HistoryStore(blob_store)
        added = _add(store, 26)
        assert len(store) == 25
        assert store.entries[0] == added[-1]
        assert added[0] not in store.entries
        assert [e.result for e in store] == [float(i) for i in range(25, 0, -1)]

    def test_remove(self, blob_store):
        store = HistoryStore(blob_store)
        first, second = _add(store, 2)
        assert store.remove(first.id) is True
        assert store.entries == [second]
        assert store.get(first.id) is None

    def test_remove_unknown_id_is_noop(self, blob_store):
        store = HistoryStore(blob_store)
        _add(store, 3)
        before = store.entries
        assert store.remove(12345) is False
        assert store.entries == before

    def test_clear(self, blob_store):
        store = HistoryStore(blob_store)
        _add(store, 5)
        store.clear()
        assert len(store) == 0
        assert HistoryStore(blob_store).entries == []

    def test_timestamp_format(self, blob_store):
        entry = _add(HistoryStore(blob_store))[0]
        assert re.fullmatch(r"\d{2}/\d{2}/\d{4}, \d{2}:\d{2}:\d{2}", entry.timestamp)

    def test_survives_reload(self, blob_store):
        store = HistoryStore(blob_store)
        _add(store, 4)
        reloaded = HistoryStore(blob_store)
        assert reloaded.entries == store.entries

    def test_ids_keep_increasing_after_reload(self, blob_store):
        store = HistoryStore(blob_store)
        last = _add(store, 3)[-1]
        entry = _add(HistoryStore(blob_store))[0]
        assert entry.id > last.id

    @pytest.mark.parametrize("blob", ["", "not json", "{}", '[{"id": "x"}]', "null"])
    def test_corrupt_blob_loads_empty(self, blob):
        store = HistoryStore(MemoryBlobStore({HISTORY_KEY: blob}))
        assert store.entries == []

    def test_persisted_as_json_list(self, blob_store):
        store = HistoryStore(blob_store)
        _add(store, 2)
        data = json.loads(blob_store.read_blob(HISTORY_KEY))
        assert [item["id"] for item in data] == [entry.id for entry in store.entries]

    @pytest.mark.parametrize("bad", [float("inf"), float("-inf"), float("nan")])
    def test_non_finite_result_rejected(self, blob_store, bad):
        store = HistoryStore(blob_store)
        kept = _add(store)[0]
        with pytest.raises(ValueError):
            store.add(calculator="Vazão", result=bad)
        assert store.entries == [kept]
        assert HistoryStore(blob_store).entries == [kept]


class TestAddResult:
    """Recording calculation results."""

    def test_records_valid_result(self, blob_store):
        store = HistoryStore(blob_store)
        inputs = {"velocity": 2, "area": 3}
        entry = store.add_result(evaluate("flow-rate", inputs), inputs, {"area": "m²"})
        assert entry.calculator == "Vazão"
        assert entry.category_id == "flow-rate"
        assert entry.result == 6
        assert entry.formatted_result == "6"
        assert entry.result_unit == "m³/s"
        assert entry.formula == "Q = v × A"
        assert entry.values == {"velocity": "2 m/s", "area": "3 m²"}
        assert entry.explanation[0].startswith("Vazão (Q)")

    def test_missing_input_not_recorded(self, blob_store):
        store = HistoryStore(blob_store)
        inputs = {"area": 2}
        assert store.add_result(evaluate("pressure", inputs), inputs) is None
        assert len(store) == 0

    def test_invalid_result_not_recorded(self, blob_store):
        store = HistoryStore(blob_store)
        inputs = {"velocity": 1e308, "area": 1e308}
        assert store.add_result(evaluate("flow-rate", inputs), inputs) is None
        assert len(store) == 0

    def test_unit_conversion_values(self, blob_store):
        store = HistoryStore(blob_store)
        inputs = {"value": 1, "measurementType": "pressure", "fromUnit": "atm", "toUnit": "Pa"}
        entry = store.add_result(evaluate("unit-conversion", inputs), inputs)
        assert entry.result_unit == "Pa"
        assert entry.values["fromUnit"] == "atm"


class TestBroadcast:
    """Change notification between history observers."""

    def test_follower_reloads(self, blob_store):
        channel = HistoryBroadcast()
        writer = HistoryStore(blob_store, channel=channel)
        reader = HistoryStore(blob_store)
        reader.follow(channel)
        _add(writer, 2)
        assert reader.entries == writer.entries

    def test_unsubscribe(self, blob_store):
        channel = HistoryBroadcast()
        writer = HistoryStore(blob_store, channel=channel)
        reader = HistoryStore(blob_store)
        unsubscribe = reader.follow(channel)
        unsubscribe()
        _add(writer)
        assert len(reader) == 0
        assert len(channel) == 0

    def test_failing_subscriber_does_not_stop_others(self):
        channel = HistoryBroadcast()
        calls = []

        def broken():
            raise RuntimeError("boom")

        channel.subscribe(broken)
        channel.subscribe(lambda: calls.append(1))
        channel.publish()
        assert calls == [1]

    def test_reload_is_idempotent(self, blob_store):
        store = HistoryStore(blob_store)
        _add(store, 3)
        before = store.entries
        store.reload()
        store.reload()
        assert store.entries == before

    def test_global_add_notifies_observers(self, default_store, blob_store):
        observer = HistoryStore(blob_store)
        unsubscribe = observer.follow(history_updated)
        try:
            inputs = {"force": 100, "area": 2}
            entry = add_calculation(evaluate("pressure", inputs), inputs)
            assert entry is not None
            assert default_store.entries == [entry]
            assert observer.entries == [entry]
        finally:
            unsubscribe()

    def test_global_add_skips_missing_inputs(self, default_store):
        assert add_calculation(evaluate("pressure", {"area": 2}), {"area": 2}) is None
        assert len(default_store) == 0


class TestJsonFileBlobStore:
    """File-backed blob persistence."""

    def test_round_trip(self, tmp_path):
        path = tmp_path / "nested" / "history.json"
        store = HistoryStore(JsonFileBlobStore(path))
        _add(store, 3)
        assert path.exists()
        assert HistoryStore(JsonFileBlobStore(path)).entries == store.entries

    def test_missing_file(self, tmp_path):
        assert JsonFileBlobStore(tmp_path / "none.json").read_blob(HISTORY_KEY) is None

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "history.json"
        path.write_text("{broken", encoding="utf-8")
        blobs = JsonFileBlobStore(path)
        assert blobs.read_blob(HISTORY_KEY) is None
        assert HistoryStore(blobs).entries == []

    def test_keeps_other_keys(self, tmp_path):
        blobs = JsonFileBlobStore(tmp_path / "blobs.json")
        blobs.write_blob("a", "1")
        blobs.write_blob("b", "2")
        blobs.clear_blob("a")
        assert blobs.read_blob("a") is None
        assert blobs.read_blob("b") == "2"
