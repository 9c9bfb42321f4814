from __future__ import annotations

import csv
import logging
from typing import Any

import pandas as pd

from ..search.errors import DataFileContentInvalid, DataFileNotFound
from .config import DEFAULT_INGESTION_CONFIG, IngestionConfig

logger = logging.getLogger(__name__)

_INFINITIES = [float("inf"), float("-inf")]


def _coerce_integer(series: pd.Series) -> pd.Series:
    numeric = pd.to_numeric(series, errors="coerce").replace(_INFINITIES, float("nan"))
    # Fractional values are truncated, like an integer parse of the raw text.
    return numeric.fillna(0).astype("int64")


def _coerce_float(series: pd.Series) -> pd.Series:
    numeric = pd.to_numeric(series, errors="coerce").replace(_INFINITIES, float("nan"))
    return numeric.fillna(0.0).astype("float64")


def _coerce_date(series: pd.Series) -> pd.Series:
    parsed = pd.to_datetime(series, errors="coerce", format="ISO8601")
    return pd.Series(
        [None if pd.isna(value) else value.date() for value in parsed],
        index=series.index,
        dtype=object,
    )


def load_records(config: IngestionConfig = DEFAULT_INGESTION_CONFIG) -> list[dict[str, Any]]:
    """
    Load the delimited dataset into typed record dicts.

    Steps:
    - Read every cell as text, without NA inference.
    - Coerce integer, float and date columns; malformed numbers become 0.
    - Sort by the configured column so equal scores keep a stable order.
    """
    path = config.data_path
    if not path.is_file():
        raise DataFileNotFound(f"data file not found: {path}")

    try:
        df = pd.read_csv(
            path,
            sep=config.delimiter,
            dtype=str,
            keep_default_na=False,
            quoting=csv.QUOTE_NONE,
        )
    except pd.errors.EmptyDataError as exc:
        raise DataFileContentInvalid(f"data file has no header: {path}") from exc

    df = df.fillna("")
    for column in config.integer_columns:
        if column in df.columns:
            df[column] = _coerce_integer(df[column])
    for column in config.float_columns:
        if column in df.columns:
            df[column] = _coerce_float(df[column])
    for column in config.date_columns:
        if column in df.columns:
            df[column] = _coerce_date(df[column])

    if config.sort_by and config.sort_by in df.columns:
        df = df.sort_values(config.sort_by, kind="stable")

    records = df.to_dict(orient="records")
    logger.info("Loaded %d records from %s", len(records), path)
    return records


if __name__ == "__main__":
    loaded = load_records()
    print(f"Loaded {len(loaded)} records from {DEFAULT_INGESTION_CONFIG.data_path}")
