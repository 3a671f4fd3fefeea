from __future__ import annotations

import io
import logging
import warnings
from pathlib import Path
from typing import Dict, List, Tuple

import httpx
import pandas as pd

from csv_explorer.core.exceptions import FetchError, ParseError

logger = logging.getLogger(__name__)

Row = Dict[str, str]

DEFAULT_FETCH_TIMEOUT = 10.0


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def fetch_text(source: str | Path, timeout: float = DEFAULT_FETCH_TIMEOUT) -> str:
    """
    Fetch the raw CSV text from a local path or an http(s) URL.

    :raises FetchError: if the source is unreachable or returns a non-2xx status.
    """
    source_str = str(source)

    if _is_url(source_str):
        try:
            response = httpx.get(source_str, timeout=timeout, follow_redirects=True)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(
                "Dataset fetch failed",
                extra={"source": source_str, "error": str(e)},
            )
            raise FetchError(f"Could not fetch dataset from {source_str}: {e}") from e
        return response.text

    path = Path(source_str)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error(
            "Dataset read failed",
            extra={"source": source_str, "error": str(e)},
        )
        raise FetchError(f"Could not read dataset at {path}: {e}") from e


def parse_csv(raw_text: str) -> Tuple[List[str], List[Row]]:
    """
    Parse header-row CSV into (columns, rows).

    Every cell is kept as a string; short rows are padded with "".
    Empty input is an empty dataset, not an error.

    :raises ParseError: on malformed CSV (e.g. a row with more fields than the header).
    """
    if not raw_text.strip():
        return [], []

    try:
        with warnings.catch_warnings():
            # index_col=False truncates extra fields with only a warning
            warnings.simplefilter("error", pd.errors.ParserWarning)
            df = pd.read_csv(
                io.StringIO(raw_text),
                dtype=str,
                keep_default_na=False,
                index_col=False,
                skip_blank_lines=True,
                on_bad_lines="error",
            )
    except (pd.errors.ParserError, pd.errors.ParserWarning, pd.errors.EmptyDataError, ValueError) as e:
        raise ParseError(f"Malformed CSV: {e}") from e

    df = df.fillna("").astype(str)
    columns = [str(c) for c in df.columns]
    rows: List[Row] = [
        {col: value for col, value in zip(columns, record)}
        for record in df.itertuples(index=False, name=None)
    ]
    return columns, rows


def load_dataset(source: str | Path, timeout: float = DEFAULT_FETCH_TIMEOUT) -> Tuple[List[str], List[Row]]:
    """
    One fetch-and-parse cycle. Failures propagate as FetchError / ParseError.
    """
    raw_text = fetch_text(source, timeout=timeout)
    columns, rows = parse_csv(raw_text)

    logger.info(
        "Dataset loaded",
        extra={"source": str(source), "n_rows": len(rows), "n_columns": len(columns)},
    )
    return columns, rows
