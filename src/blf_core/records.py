"""BLF records - immutable results of decoding a file header or one framed object."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Union

from blf_core.protocol import MIN_STATS_SIZE, OBJ_HEADER_LEN


def _systemtime(st: tuple[int, ...] | None) -> datetime | None:
    # SYSTEMTIME: year, month, day-of-week, day, hour, minute, second, milliseconds
    if not st:
        return None
    try:
        return datetime(st[0], st[1], st[3], st[4], st[5], st[6], st[7] * 1000)
    except ValueError:
        return None


@dataclass(frozen=True)
class FileHeader:
    """The `LOGG` statistics block at the start of every file."""

    stats_size: int
    api_version: int
    application_id: int
    application_version: tuple[int, int, int]
    file_size: int
    uncompressed_size: int
    object_count: int
    object_read: int
    measurement_start: tuple[int, ...] | None = None
    last_object_time: tuple[int, ...] | None = None

    @classmethod
    def empty(cls) -> "FileHeader":
        """Placeholder for a file whose header could not be read. Never valid."""
        return cls(0, 0, 0, (0, 0, 0), 0, 0, 0, 0)

    def is_valid(self) -> bool:
        return self.stats_size >= MIN_STATS_SIZE

    def is_compressed(self) -> bool:
        return self.file_size != self.uncompressed_size

    def measurement_start_time(self) -> datetime | None:
        return _systemtime(self.measurement_start)

    def last_object_datetime(self) -> datetime | None:
        return _systemtime(self.last_object_time)


@dataclass(frozen=True)
class ObjectHeader:
    """Nested header shared by the structured payloads."""

    flags: int
    client_index: int
    version: int
    timestamp_ns: int


@dataclass(frozen=True)
class LogContainer:
    compression_method: int
    uncompressed_size: int
    compressed_size: int
    compressed_data: bytes


@dataclass(frozen=True)
class CanMessage:
    header: ObjectHeader
    channel: int
    flags: int
    dlc: int
    id: int
    data: bytes
    frame_length_ns: int
    bit_count: int


@dataclass(frozen=True)
class AppText:
    header: ObjectHeader
    source: int
    text: bytes

    def to_string(self) -> str:
        """Lossy UTF-8 rendering; a single trailing NUL terminator is dropped."""
        raw = self.text[:-1] if self.text.endswith(b"\x00") else self.text
        return raw.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class PaddedOpaque:
    object_type: int
    size: int


@dataclass(frozen=True)
class Opaque:
    object_type: int
    size: int


Payload = Union[LogContainer, CanMessage, AppText, PaddedOpaque, Opaque]


@dataclass(frozen=True)
class ObjectRecord:
    """One `LOBJ` framed object and its decoded payload."""

    header_size: int
    header_version: int
    object_size: int
    object_type: int
    payload: Payload
    # Bytes the payload decoder consumed, alignment padding excluded.
    payload_size: int

    @property
    def consumed_size(self) -> int:
        return OBJ_HEADER_LEN + self.payload_size

    @property
    def is_container(self) -> bool:
        return isinstance(self.payload, LogContainer)


def record_to_row(record: ObjectRecord) -> dict:
    """Flatten a record into JSON/parquet friendly columns."""
    row = {
        "object_type": record.object_type,
        "object_size": record.object_size,
        "kind": type(record.payload).__name__,
        "timestamp_ns": None,
        "channel": None,
        "can_id": None,
        "dlc": None,
        "data": None,
        "text": None,
    }
    payload = record.payload
    if isinstance(payload, CanMessage):
        row.update(
            timestamp_ns=payload.header.timestamp_ns,
            channel=payload.channel,
            can_id=payload.id,
            dlc=payload.dlc,
            data=payload.data.hex(),
        )
    elif isinstance(payload, AppText):
        row.update(timestamp_ns=payload.header.timestamp_ns, text=payload.to_string())
    return row
