import io
from datetime import datetime

import pytest

from blf_decode import BlfFile, HeaderError, read_file_header

from blf_samples import file_header, sample_file


def test_canonical_header_fields_and_timestamps():
    header = read_file_header(io.BytesIO(file_header(144)))

    assert header.stats_size == 144
    assert header.api_version == 4070100
    assert header.application_id == 5
    assert header.application_version == (1, 2, 3)
    assert header.file_size == 420
    assert header.is_valid()
    assert not header.is_compressed()
    assert header.measurement_start_time() == datetime(2024, 4, 26, 18, 52, 20, 500000)
    assert header.last_object_datetime() == datetime(2024, 4, 26, 18, 53, 1)


def test_short_header_has_no_timestamps():
    header = read_file_header(io.BytesIO(file_header(40)))
    assert header.is_valid()
    assert header.measurement_start is None
    assert header.measurement_start_time() is None


def test_compressed_flag():
    header = read_file_header(io.BytesIO(file_header(144, file_size=100, uncompressed_size=400)))
    assert header.is_compressed()


def test_truncated_header_raises():
    with pytest.raises(HeaderError):
        read_file_header(io.BytesIO(file_header(144)[:60]))


def test_empty_input_is_invalid():
    with pytest.warns(UserWarning, match="Invalid BLF file"):
        blf = BlfFile.from_reader(io.BytesIO(b""))
    assert not blf.is_valid()
    assert list(blf) == []


def test_wrong_file_magic_is_invalid():
    data = bytearray(sample_file())
    data[0:4] = b"GGOL"
    with pytest.warns(UserWarning, match="bad file magic"):
        blf = BlfFile.from_reader(io.BytesIO(bytes(data)))
    assert not blf.is_valid()
    assert list(blf) == []


def test_stats_size_below_minimum_is_invalid():
    blf = BlfFile.from_reader(io.BytesIO(file_header(16)))
    assert not blf.is_valid()
    assert list(blf) == []
