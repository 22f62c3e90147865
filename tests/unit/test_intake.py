from __future__ import annotations

from pathlib import Path

import pytest

from order_ingest.parsing.template import SAMPLE_CSV, TEMPLATE_FILE_NAME, write_template
from order_ingest.parsing.reader import parse_text
from order_ingest.services.intake import (
    NOT_TEXT_MESSAGE,
    UNSUPPORTED_FILE_MESSAGE,
    UnsupportedFileError,
    decode_upload,
    is_supported_name,
    read_upload,
)
from order_ingest.validation.geofence import validate_dataset


@pytest.mark.parametrize("name,ok", [
    ("orders.csv", True),
    ("ORDERS.CSV", True),
    ("orders.xlsx", False),
    ("orders.csv.txt", False),
    ("orders", False),
])
def test_is_supported_name(name, ok):
    assert is_supported_name(name) is ok


def test_decode_upload_rejects_non_csv():
    with pytest.raises(UnsupportedFileError) as e:
        decode_upload("orders.xlsx", b"latitude")
    assert str(e.value) == UNSUPPORTED_FILE_MESSAGE


def test_decode_upload_strips_bom():
    text = decode_upload("o.csv", "\ufefflatitude,longitude,subtotal\n".encode("utf-8"))
    assert text.startswith("latitude")


def test_decode_upload_rejects_binary():
    with pytest.raises(UnsupportedFileError) as e:
        decode_upload("o.csv", b"\xff\xfe\x00\x81")
    assert str(e.value) == NOT_TEXT_MESSAGE


def test_read_upload_missing_file(temp_workdir: Path):
    with pytest.raises(UnsupportedFileError):
        read_upload(temp_workdir / "data" / "nope.csv")


def test_write_template_and_all_rows_valid(temp_workdir: Path):
    path = write_template(temp_workdir / "data")
    assert path.name == TEMPLATE_FILE_NAME
    assert path.read_text(encoding="utf-8") == SAMPLE_CSV
    ds = validate_dataset(parse_text(SAMPLE_CSV).to_dataset(), show_progress=False)
    assert len(ds) == 3
    assert ds.valid_count == 3
