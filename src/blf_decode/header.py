from __future__ import annotations

from typing import BinaryIO

from blf_core.protocol import (
    CANONICAL_STATS_SIZE,
    FILE_HEADER_EXT_FMT,
    FILE_HEADER_FMT,
    FILE_HEADER_LEN,
    MAGIC_FILE,
)
from blf_core.records import FileHeader

from .errors import HeaderError


def read_file_header(stream: BinaryIO) -> FileHeader:
    """Read the `LOGG` statistics block from the current stream position."""
    raw = stream.read(FILE_HEADER_LEN)
    if len(raw) < FILE_HEADER_LEN:
        raise HeaderError(f"truncated file header ({len(raw)} of {FILE_HEADER_LEN} bytes)")

    (magic, stats_size, api_version, app_id, v_major, v_minor, v_build,
     file_size, uncompressed_size, object_count, object_read) = FILE_HEADER_FMT.unpack(raw)

    if magic != MAGIC_FILE:
        raise HeaderError(f"bad file magic {magic!r}")

    measurement_start = last_object_time = None
    if stats_size == CANONICAL_STATS_SIZE:
        ext = stream.read(FILE_HEADER_EXT_FMT.size)
        if len(ext) < FILE_HEADER_EXT_FMT.size:
            raise HeaderError("truncated file header timestamps")
        words = FILE_HEADER_EXT_FMT.unpack(ext)
        measurement_start = tuple(words[0:8])
        last_object_time = tuple(words[8:16])

    return FileHeader(
        stats_size=stats_size,
        api_version=api_version,
        application_id=app_id,
        application_version=(v_major, v_minor, v_build),
        file_size=file_size,
        uncompressed_size=uncompressed_size,
        object_count=object_count,
        object_read=object_read,
        measurement_start=measurement_start,
        last_object_time=last_object_time,
    )
