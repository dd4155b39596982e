import json
from pathlib import Path

import pytest

from packages.apm_tools.dataset import load_store, read_records
from packages.apm_tools.errors import LoadFailure


def test_load_store_from_file(data_file: Path) -> None:
    store = load_store(data_file)
    assert store.is_ready
    assert len(store) == 4
    assert store.get_by_key("APM1002").name == "Customer Portal"


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(LoadFailure, match="not found"):
        read_records(tmp_path / "absent.json")


@pytest.mark.parametrize(
    "content",
    ["{not json", json.dumps({"apm_application_code": "A1"}), json.dumps(["A1", "A2"])],
)
def test_malformed_dataset(tmp_path: Path, content: str) -> None:
    path = tmp_path / "bad.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(LoadFailure):
        read_records(path)


def test_duplicate_codes_in_file(tmp_path: Path) -> None:
    path = tmp_path / "dupes.json"
    rows = [{"apm_application_code": "A1"}, {"apm_application_code": "A1"}]
    path.write_text(json.dumps(rows), encoding="utf-8")
    with pytest.raises(LoadFailure, match="Duplicate"):
        load_store(path)


def test_dataset_with_invalid_utf8(tmp_path: Path) -> None:
    path = tmp_path / "latin1.json"
    path.write_bytes(b'[{"apm_application_code": "A\xff"}]')
    with pytest.raises(LoadFailure, match="UTF-8"):
        read_records(path)
