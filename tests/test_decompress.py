import zlib

import pytest

from blf_core.records import LogContainer
from blf_decode import CorruptContainer, DecompressionOverflow, UnknownMethod, decompress


def _container(data, method, uncompressed_size):
    return LogContainer(method, uncompressed_size, len(data), data)


def test_stored_is_identity():
    assert decompress(_container(b"LOBJ raw bytes", 0, 14)) == b"LOBJ raw bytes"


def test_zlib_inflates():
    inner = b"LOBJ" * 1000
    assert decompress(_container(zlib.compress(inner), 2, len(inner))) == inner


def test_output_capped_by_declared_size():
    bomb = zlib.compress(b"\x00" * 1_000_000)
    with pytest.raises(DecompressionOverflow):
        decompress(_container(bomb, 2, 100))


def test_declared_size_above_limit():
    inner = b"x" * 64
    with pytest.raises(DecompressionOverflow):
        decompress(_container(zlib.compress(inner), 2, 1 << 30), max_size=1 << 20)


def test_unknown_method():
    with pytest.raises(UnknownMethod) as exc:
        decompress(_container(b"abc", 1, 3))
    assert exc.value.method == 1


def test_corrupt_zlib_stream():
    with pytest.raises(CorruptContainer):
        decompress(_container(b"not zlib at all", 2, 100))


def test_truncated_zlib_stream():
    data = zlib.compress(bytes(range(256)) * 8)
    with pytest.raises(CorruptContainer):
        decompress(_container(data[: len(data) // 2], 2, 2048))
