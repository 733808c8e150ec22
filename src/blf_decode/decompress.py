from __future__ import annotations

import zlib

from blf_core.protocol import COMPRESSION_NONE, COMPRESSION_ZLIB, DEFAULT_MAX_CONTAINER_SIZE
from blf_core.records import LogContainer

from .errors import CorruptContainer, DecompressionOverflow, UnknownMethod


def decompress(container: LogContainer, *, max_size: int = DEFAULT_MAX_CONTAINER_SIZE) -> bytes:
    """Produce the logical bytes of a log container.

    The declared uncompressed size is a hard output cap: inflating never
    allocates more than one byte past it.
    """
    method = container.compression_method
    if method == COMPRESSION_NONE:
        return container.compressed_data
    if method != COMPRESSION_ZLIB:
        raise UnknownMethod(method)

    cap = container.uncompressed_size
    # Zip bomb protection
    if cap > max_size:
        raise DecompressionOverflow(f"declared size {cap} exceeds limit {max_size}")

    inflater = zlib.decompressobj()
    try:
        data = inflater.decompress(container.compressed_data, cap + 1)
    except zlib.error as e:
        raise CorruptContainer(str(e)) from e

    if len(data) > cap:
        raise DecompressionOverflow(f"output exceeds declared size {cap}")
    if not inflater.eof:
        raise CorruptContainer("zlib stream truncated")
    return data
