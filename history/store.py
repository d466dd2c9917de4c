"""
Bounded calculation history with write-through persistence.

The log is ordered newest first and never holds more than ``max_entries`` entries.
Every mutation rewrites the whole serialized log into the blob store. A missing,
empty or corrupt blob loads as an empty log.
"""

import logging
import time
from datetime import datetime
from typing import Any, Dict, Iterator, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from calculators.catalog import UNIT_CONVERSION, get_category
from calculators.models import CalculationResult
from utils.constants import HISTORY_KEY, HISTORY_TIMESTAMP_FORMAT, MAX_HISTORY
from utils.formatting import format_number, format_result_value
from utils.input_resolver import parse_raw_value
from utils.json_helpers import is_valid_number

from .blob_store import BlobStore, MemoryBlobStore
from .broadcast import HistoryBroadcast, history_updated

logger = logging.getLogger("fluidcalc-mcp.history")


class HistoryEntry(BaseModel):
    """One recorded calculation."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Creation time in ms, strictly increasing")
    category_id: str = ""
    calculator: str = Field(..., description="Display name of the category")
    result: float = Field(..., allow_inf_nan=False, description="Finite result value")
    formatted_result: str = ""
    result_unit: str = ""
    formula: str = ""
    values: Dict[str, str] = Field(default_factory=dict, description="Inputs as entered, with units")
    explanation: List[str] = Field(default_factory=list)
    timestamp: str = Field(..., description="Local creation time, dd/mm/yyyy, hh:mm:ss")


_LOG_ADAPTER = TypeAdapter(List[HistoryEntry])


def _now_ms() -> int:
    return int(time.time() * 1000)


def entered_values(result: CalculationResult, inputs: Mapping[str, Any],
                   units: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """The inputs of a result as the user entered them ("2 m/s")."""
    units = units or {}
    if result.category_id == UNIT_CONVERSION:
        return {key: str(value) for key, value in inputs.items() if value not in (None, "")}
    values = {}
    for spec in get_category(result.category_id).input_fields:
        raw = parse_raw_value(inputs.get(spec.name))
        if raw is None:
            continue
        unit = units.get(spec.name) or spec.default_unit
        values[spec.name] = f"{format_number(raw)} {unit}".strip()
    return values


class HistoryStore:
    """
    Newest-first log of recorded calculations backed by a ``BlobStore``.

    When ``channel`` is given, every mutation is announced on it.
    """

    def __init__(self, blob_store: Optional[BlobStore] = None, key: str = HISTORY_KEY,
                 max_entries: int = MAX_HISTORY, channel: Optional[HistoryBroadcast] = None):
        self.blob_store = blob_store if blob_store is not None else MemoryBlobStore()
        self.key = key
        self.max_entries = max_entries
        self.channel = channel
        self._entries: List[HistoryEntry] = []
        self._last_id = 0
        self.load()

    def load(self) -> List[HistoryEntry]:
        """Read the persisted log, falling back to an empty log."""
        blob = self.blob_store.read_blob(self.key)
        entries: List[HistoryEntry] = []
        if blob:
            try:
                entries = _LOG_ADAPTER.validate_json(blob)
            except ValidationError as e:
                logger.warning(f"Discarding unreadable history under '{self.key}': {e.error_count()} errors")
                entries = []
        self._entries = entries[:self.max_entries]
        if self._entries:
            self._last_id = max(self._last_id, max(entry.id for entry in self._entries))
        return self.entries

    def reload(self) -> None:
        """Re-pull the persisted log; safe to call any number of times."""
        self.load()

    def follow(self, channel: HistoryBroadcast):
        """Reload whenever ``channel`` publishes. Returns the unsubscribe function."""
        return channel.subscribe(self.reload)

    def _next_id(self) -> int:
        self._last_id = max(_now_ms(), self._last_id + 1)
        return self._last_id

    def _persist(self) -> None:
        self.blob_store.write_blob(self.key, _LOG_ADAPTER.dump_json(self._entries).decode("utf-8"))
        if self.channel is not None:
            self.channel.publish()

    def add(self, calculator: str, result: float, formula: str = "",
            values: Optional[Mapping[str, str]] = None, category_id: str = "",
            formatted_result: str = "", result_unit: str = "",
            explanation: Optional[List[str]] = None) -> HistoryEntry:
        """Prepend a new entry, evicting the oldest beyond ``max_entries``.

        Raises:
            ValueError: If ``result`` is not a finite number
        """
        if not is_valid_number(result):
            raise ValueError(f"Cannot record non-finite result {result!r} for {calculator}")
        entry = HistoryEntry(
            id=self._next_id(),
            category_id=category_id,
            calculator=calculator,
            result=result,
            formatted_result=formatted_result,
            result_unit=result_unit,
            formula=formula,
            values=dict(values or {}),
            explanation=list(explanation or []),
            timestamp=datetime.now().strftime(HISTORY_TIMESTAMP_FORMAT),
        )
        self._entries = [entry, *self._entries][:self.max_entries]
        self._persist()
        logger.info(f"Recorded {calculator} = {formatted_result or result} {result_unit}")
        return entry

    def add_result(self, result: CalculationResult, inputs: Optional[Mapping[str, Any]] = None,
                   units: Optional[Mapping[str, str]] = None) -> Optional[HistoryEntry]:
        """Record a calculation result. Incomplete or invalid results are not recorded."""
        if not result.is_valid:
            logger.debug(f"Not recording {result.category_id}: no valid result")
            return None
        category = get_category(result.category_id)
        return self.add(
            calculator=category.name,
            result=result.value,
            formula=category.formula.formula,
            values=entered_values(result, inputs or {}, units),
            category_id=category.id,
            formatted_result=format_result_value(result.value, category.id),
            result_unit=result.output_unit,
            explanation=result.derivation,
        )

    def remove(self, entry_id: int) -> bool:
        """Drop one entry. Returns False (and changes nothing) when the id is unknown."""
        remaining = [entry for entry in self._entries if entry.id != entry_id]
        if len(remaining) == len(self._entries):
            return False
        self._entries = remaining
        self._persist()
        return True

    def clear(self) -> None:
        self._entries = []
        self._persist()

    @property
    def entries(self) -> List[HistoryEntry]:
        return list(self._entries)

    def get(self, entry_id: int) -> Optional[HistoryEntry]:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(list(self._entries))


_default_store: Optional[HistoryStore] = None


def get_default_store() -> HistoryStore:
    """The process-wide store, created in memory on first use."""
    global _default_store
    if _default_store is None:
        _default_store = HistoryStore()
    return _default_store


def configure_default_store(store_or_blob: Any) -> HistoryStore:
    """Install the process-wide store, from a ``HistoryStore`` or a ``BlobStore``."""
    global _default_store
    if isinstance(store_or_blob, HistoryStore):
        _default_store = store_or_blob
    else:
        _default_store = HistoryStore(store_or_blob)
    return _default_store


def add_calculation(result: CalculationResult, inputs: Optional[Mapping[str, Any]] = None,
                    units: Optional[Mapping[str, str]] = None) -> Optional[HistoryEntry]:
    """
    Globally reachable append entry point.

    Records into the default store and tells ``history_updated`` subscribers to re-read
    the persisted log.
    """
    entry = get_default_store().add_result(result, inputs, units)
    if entry is not None:
        history_updated.publish()
    return entry
