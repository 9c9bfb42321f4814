from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@dataclass(frozen=True)
class IngestionConfig:
    """
    Configuration for loading the cities dataset.
    """

    data_path: Path = _DATA_DIR / "cities_canada-usa.tsv"
    delimiter: str = "\t"
    integer_columns: tuple[str, ...] = (
        "id",
        "admin1",
        "admin2",
        "admin3",
        "admin4",
        "population",
        "dem",
    )
    float_columns: tuple[str, ...] = ("lat", "long")
    date_columns: tuple[str, ...] = ("modified_at",)
    sort_by: str | None = "name"


DEFAULT_INGESTION_CONFIG = IngestionConfig()
