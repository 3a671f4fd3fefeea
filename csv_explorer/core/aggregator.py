from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence

from csv_explorer.core.dataset_loader import Row

NO_DATA_KEY = "No data"


@dataclass(frozen=True)
class GroupCount:
    key: str
    count: int


def aggregate(filtered_rows: Sequence[Row], group_column: str) -> List[GroupCount]:
    """
    Count rows per distinct value of group_column.

    - Keys are exact strings (no case folding); a missing cell counts as "".
    - Groups come out in first-appearance order, not sorted.
    - An empty input yields a single ("No data", 0) entry so the chart always
      has a series to draw.
    """
    counts: Dict[str, int] = {}
    for row in filtered_rows:
        value = row.get(group_column)
        key = "" if value is None else str(value)
        counts[key] = counts.get(key, 0) + 1

    if not counts:
        return [GroupCount(key=NO_DATA_KEY, count=0)]

    return [GroupCount(key=k, count=c) for k, c in counts.items()]
