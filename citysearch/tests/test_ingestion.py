from datetime import date
from pathlib import Path

import pytest

from citysearch.data_ingestion.config import IngestionConfig
from citysearch.data_ingestion.ingest import load_records
from citysearch.search.errors import DataFileContentInvalid, DataFileNotFound

HEADER = "id\tname\tlat\tlong\tadmin1\tpopulation\tmodified_at\n"


def _write(tmp_path: Path, content: str) -> IngestionConfig:
    path = tmp_path / "cities.tsv"
    path.write_text(content, encoding="utf-8")
    return IngestionConfig(data_path=path)


def test_load_records_coerces_typed_columns(tmp_path: Path):
    cfg = _write(
        tmp_path,
        HEADER
        + "6058560\tLondon\t42.98339\t-81.23304\t08\t346765\t2008-04-05\n"
        + "4361766\tLondontowne\t38.93345\t-76.54941\tMD\t\t2011-05-14\n",
    )

    records = load_records(config=cfg)

    london = next(r for r in records if r["name"] == "London")
    assert london["id"] == 6058560
    assert london["lat"] == pytest.approx(42.98339)
    assert london["long"] == pytest.approx(-81.23304)
    assert london["admin1"] == 8
    assert london["population"] == 346765
    assert london["modified_at"] == date(2008, 4, 5)

    londontowne = next(r for r in records if r["name"] == "Londontowne")
    assert londontowne["admin1"] == 0
    assert londontowne["population"] == 0


def test_malformed_values_fall_back_to_defaults(tmp_path: Path):
    cfg = _write(tmp_path, HEADER + "abc\tNowhere\tnorth\t\t1.7\tmany\tlast week\n")

    [record] = load_records(config=cfg)

    assert record["id"] == 0
    assert record["lat"] == 0.0
    assert record["long"] == 0.0
    assert record["admin1"] == 1
    assert record["population"] == 0
    assert record["modified_at"] is None


def test_records_are_sorted_by_name(tmp_path: Path):
    cfg = _write(
        tmp_path,
        HEADER
        + "3\tToronto\t43.7\t-79.4\t08\t1\t2008-04-05\n"
        + "1\tLondon\t42.9\t-81.2\t08\t1\t2008-04-05\n"
        + "2\tMontreal\t45.5\t-73.5\t10\t1\t2008-04-05\n",
    )

    assert [r["name"] for r in load_records(config=cfg)] == ["London", "Montreal", "Toronto"]


def test_text_columns_stay_text(tmp_path: Path):
    cfg = _write(tmp_path, "id\tname\tcc2\n1\tNA\t\n")

    [record] = load_records(config=cfg)

    assert record["name"] == "NA"
    assert record["cc2"] == ""


def test_header_only_file_has_no_records(tmp_path: Path):
    assert load_records(config=_write(tmp_path, HEADER)) == []


def test_empty_file_is_rejected(tmp_path: Path):
    with pytest.raises(DataFileContentInvalid):
        load_records(config=_write(tmp_path, ""))


def test_missing_file_is_rejected(tmp_path: Path):
    cfg = IngestionConfig(data_path=tmp_path / "missing.tsv")
    with pytest.raises(DataFileNotFound):
        load_records(config=cfg)
    with pytest.raises(FileNotFoundError):
        load_records(config=cfg)


def test_bundled_dataset_loads():
    records = load_records()

    assert len(records) == 17
    assert len({r["id"] for r in records}) == 17
    assert all(isinstance(r["lat"], float) for r in records)
    names = [r["name"] for r in records]
    assert names == sorted(names)
