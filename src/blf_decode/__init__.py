"""BLF Decode - Streaming record decoder for BLF bus-trace files."""
from .decompress import decompress
from .engine import BlfFile, ContainerIterator, RecordStream, decode_file
from .errors import (
    BadMagic,
    BlfError,
    CorruptContainer,
    DecompressError,
    DecompressionOverflow,
    FrameEof,
    FrameError,
    HeaderError,
    Malformed,
    UnknownMethod,
)
from .framer import read_framed, read_record
from .header import read_file_header

__all__ = [
    "BadMagic",
    "BlfError",
    "BlfFile",
    "ContainerIterator",
    "CorruptContainer",
    "DecompressError",
    "DecompressionOverflow",
    "FrameEof",
    "FrameError",
    "HeaderError",
    "Malformed",
    "RecordStream",
    "UnknownMethod",
    "decode_file",
    "decompress",
    "read_file_header",
    "read_framed",
    "read_record",
]
