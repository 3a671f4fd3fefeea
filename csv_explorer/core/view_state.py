from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Sequence

from csv_explorer.core.exceptions import PersistenceReadError
from csv_explorer.services.storage import StorageBackend

logger = logging.getLogger(__name__)

COLUMN_STATE_KEY = "columnState"
COLUMN_WIDTHS_KEY = "columnWidths"
QUERY_STATE_KEY = "queryState"

DEFAULT_COLUMN_WIDTH = 100


@dataclass(frozen=True)
class ColumnLayout:
    """
    Persisted per-column layout.

    - widths: column *position* -> pixel width. Widths are positional, so a
      layout saved for one CSV shape misapplies to a differently-shaped CSV.
    - order: column keys in display order. Keys missing from the current
      dataset are ignored, not purged.
    """
    widths: Dict[int, float] = field(default_factory=dict)
    order: List[str] = field(default_factory=list)

    def width_for(self, index: int, default: float = DEFAULT_COLUMN_WIDTH) -> float:
        return self.widths.get(index, default)

    def with_width(self, index: int, width: float) -> ColumnLayout:
        widths = dict(self.widths)
        widths[index] = width
        return replace(self, widths=widths)

    def with_order(self, order: Sequence[str]) -> ColumnLayout:
        return replace(self, order=list(order))

    def ordered_columns(self, columns: Sequence[str]) -> List[str]:
        """
        Apply the saved order to the dataset's columns: known keys first in
        saved order, then any remaining columns in dataset order.
        """
        present = set(columns)
        seen: set[str] = set()
        ordered: List[str] = []
        for key in self.order:
            if key in present and key not in seen:
                ordered.append(key)
                seen.add(key)
        ordered.extend(c for c in columns if c not in seen)
        return ordered


# -----------------------------------------------------------------------------
# Encode / decode
# -----------------------------------------------------------------------------
def encode_order(order: Sequence[str]) -> str:
    return json.dumps([{"colId": key} for key in order])


def decode_order(raw: str) -> List[str]:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise PersistenceReadError(f"{COLUMN_STATE_KEY} is not valid JSON") from e

    if not isinstance(data, list):
        raise PersistenceReadError(f"{COLUMN_STATE_KEY} must be a list, got {type(data).__name__}")

    order: List[str] = []
    for entry in data:
        # Accept both {"colId": ...} objects and bare strings
        if isinstance(entry, dict) and isinstance(entry.get("colId"), str):
            order.append(entry["colId"])
        elif isinstance(entry, str):
            order.append(entry)
        else:
            raise PersistenceReadError(f"Unrecognised {COLUMN_STATE_KEY} entry: {entry!r}")
    return order


def encode_widths(widths: Dict[int, float]) -> str:
    return json.dumps({str(index): width for index, width in sorted(widths.items())})


def decode_widths(raw: str) -> Dict[int, float]:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise PersistenceReadError(f"{COLUMN_WIDTHS_KEY} is not valid JSON") from e

    if not isinstance(data, dict):
        raise PersistenceReadError(f"{COLUMN_WIDTHS_KEY} must be an object, got {type(data).__name__}")

    widths: Dict[int, float] = {}
    for key, value in data.items():
        try:
            index = int(key)
        except ValueError as e:
            raise PersistenceReadError(f"{COLUMN_WIDTHS_KEY} key {key!r} is not a column index") from e
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise PersistenceReadError(f"{COLUMN_WIDTHS_KEY}[{key}] is not a number: {value!r}")
        if not math.isfinite(value) or value <= 0:
            raise PersistenceReadError(f"{COLUMN_WIDTHS_KEY}[{key}] is not a usable width: {value!r}")
        widths[index] = value
    return widths


# -----------------------------------------------------------------------------
# Store
# -----------------------------------------------------------------------------
class ViewStateStore:
    """
    Reads and writes ColumnLayout (and, optionally, query state) through a StorageBackend.

    Reads never fail the caller: a missing or corrupt key falls back to its
    default and the problem is only logged.
    """

    def __init__(self, storage: StorageBackend):
        self.storage = storage

    def _read(self, key: str, decode, default):
        try:
            raw = self.storage.get(key)
            if raw is None:
                return default
            return decode(raw)
        except (PersistenceReadError, OSError, UnicodeDecodeError) as e:
            logger.warning(
                "Discarding unreadable view state",
                extra={"key": key, "error": str(e)},
            )
            return default

    def load(self) -> ColumnLayout:
        order = self._read(COLUMN_STATE_KEY, decode_order, [])
        widths = self._read(COLUMN_WIDTHS_KEY, decode_widths, {})
        return ColumnLayout(widths=widths, order=order)

    def save(self, layout: ColumnLayout) -> None:
        self.storage.set(COLUMN_STATE_KEY, encode_order(layout.order))
        self.storage.set(COLUMN_WIDTHS_KEY, encode_widths(layout.widths))
        logger.debug(
            "Column layout saved",
            extra={"n_widths": len(layout.widths), "n_ordered": len(layout.order)},
        )

    # -------------------------------------------------------------------------
    # Optional query-state persistence (filters, search, sort)
    # -------------------------------------------------------------------------
    def save_query_state(self, data: Dict[str, Any]) -> None:
        self.storage.set(QUERY_STATE_KEY, json.dumps(data))

    def load_query_state(self) -> Optional[Dict[str, Any]]:
        def decode(raw: str) -> Dict[str, Any]:
            try:
                data = json.loads(raw)
            except json.JSONDecodeError as e:
                raise PersistenceReadError(f"{QUERY_STATE_KEY} is not valid JSON") from e
            if not isinstance(data, dict):
                raise PersistenceReadError(f"{QUERY_STATE_KEY} must be an object")
            return data

        return self._read(QUERY_STATE_KEY, decode, None)
