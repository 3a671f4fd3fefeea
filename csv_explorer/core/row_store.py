from __future__ import annotations

import logging
from typing import Iterator, List, Optional

from csv_explorer.core.dataset_loader import Row, parse_csv
from csv_explorer.core.exceptions import ParseError

logger = logging.getLogger(__name__)


class RowStore:
    """
    Holds the full loaded dataset.

    - The column set is fixed for the lifetime of a load (CSV header order).
    - Rows are only mutated through ``set_cell``; changes are visible to the
      next pipeline evaluation. There is no versioning or undo.
    - A failed load leaves the store empty; partially parsed rows are never kept.
    """

    def __init__(self, rows: Optional[List[Row]] = None, columns: Optional[List[str]] = None) -> None:
        self._rows: List[Row] = list(rows or [])
        if columns is not None:
            self._columns: List[str] = list(columns)
        elif self._rows:
            self._columns = list(self._rows[0].keys())
        else:
            self._columns = []

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------
    def load(self, raw_text: str) -> List[Row]:
        """
        Replace the dataset with the rows parsed from raw_text.

        :raises ParseError: the store is cleared and the error propagates.
        """
        try:
            columns, rows = parse_csv(raw_text)
        except ParseError:
            self.clear()
            raise

        self._columns = columns
        self._rows = rows
        logger.debug("Row store loaded", extra={"n_rows": len(rows)})
        return self._rows

    def clear(self) -> None:
        self._rows = []
        self._columns = []

    # -------------------------------------------------------------------------
    # Access
    # -------------------------------------------------------------------------
    @property
    def rows(self) -> List[Row]:
        return self._rows

    @property
    def columns(self) -> List[str]:
        return list(self._columns)

    def row(self, row_index: int) -> Row:
        self._check_index(row_index)
        return self._rows[row_index]

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self._rows)

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------
    def set_cell(self, row_index: int, column: str, value: str) -> None:
        """
        Overwrite one cell in place. No validation of the value.

        Indices come from the store itself, so an out-of-range index or an
        unknown column is a programming error.

        Raises:
            IndexError: if row_index is outside [0, len)
            KeyError: if column is not part of the dataset
        """
        self._check_index(row_index)
        if column not in self._columns:
            raise KeyError(f"Unknown column '{column}'")
        self._rows[row_index][column] = "" if value is None else str(value)

    def _check_index(self, row_index: int) -> None:
        # negative indices would silently wrap on a list
        if not 0 <= row_index < len(self._rows):
            raise IndexError(f"Row index {row_index} out of range for {len(self._rows)} rows")
