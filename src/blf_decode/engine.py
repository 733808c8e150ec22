"""Record stream engine.

Flattens top-level log containers into one ordered stream of payload records:

- Containers are decompressed on demand and never surfaced to the caller.
- The unconsumed tail of one container is prepended to the next one, so an
  object split across a container boundary decodes as a single record.
- A bad object magic skips exactly one byte and retries (resync).
- Every other failure ends the stream; the cause is kept in `last_error`.
"""
from __future__ import annotations

import io
from pathlib import Path
from typing import BinaryIO, Callable
from warnings import warn

from blf_core.protocol import DEFAULT_MAX_CONTAINER_SIZE
from blf_core.records import FileHeader, LogContainer, ObjectRecord

from .decompress import decompress
from .errors import BadMagic, BlfError, DecompressError, FrameEof, HeaderError, Malformed
from .framer import read_framed, read_record
from .header import read_file_header


class ContainerIterator:
    """Objects inside one decompressed container buffer.

    A type 10 object met here is skipped by size like any opaque record.
    Running out of bytes mid-object is not an error: the tail is handed back
    through `remaining_data()`.
    """

    def __init__(self, data: bytes, on_skip: Callable[[BadMagic, str], None], label: str = ""):
        self.cursor = io.BytesIO(data)
        self.on_skip = on_skip
        self.label = label
        self.error: Malformed | None = None
        # Padding the last record still needs from the start of the next buffer.
        self.owed_padding = 0

    def __iter__(self) -> "ContainerIterator":
        return self

    def __next__(self) -> ObjectRecord:
        while True:
            try:
                record, self.owed_padding = read_framed(self.cursor, expand_containers=False)
                return record
            except BadMagic as e:
                self.on_skip(e, self.label)
                self.cursor.seek(1, io.SEEK_CUR)
            except FrameEof:
                raise StopIteration
            except Malformed as e:
                self.error = e
                raise StopIteration

    def remaining_data(self) -> bytes:
        pos = self.cursor.tell()
        with self.cursor.getbuffer() as view:
            return bytes(view[pos:])


class RecordStream:
    """One-shot, forward-only iterator over the payload records of a BLF file."""

    def __init__(
        self,
        blf: "BlfFile",
        *,
        valid: bool = True,
        max_container_size: int = DEFAULT_MAX_CONTAINER_SIZE,
    ):
        self._blf = blf
        self.max_container_size = max_container_size
        self._container: ContainerIterator | None = None
        self._continuation = b""
        self._owed_padding = 0
        self._valid = valid
        self._done = not valid
        self._resyncing = False
        self.last_error: BlfError | None = None
        self.scan_stats = {
            "records": 0,
            "containers": 0,
            "skipped": 0,
            "resyncs": 0,
            "trailing_bytes": 0,
        }

    def __iter__(self) -> "RecordStream":
        return self

    def __next__(self) -> ObjectRecord:
        while not self._done:
            if self._container is not None:
                record = next(self._container, None)
                if record is not None:
                    return self._emit(record)
                self._close_container()
                continue

            record = self._read_top_level()
            if record is None:
                break
            if record.is_container:
                self._open_container(record.payload)
                continue
            return self._emit(record)
        raise StopIteration

    def blf(self) -> "BlfFile":
        """Hand back the file and its reader, e.g. for diagnostics. Not for resuming."""
        return self._blf

    def get_scan_stats(self) -> dict:
        return dict(self.scan_stats)

    @property
    def finished_cleanly(self) -> bool:
        return self._valid and self._done and self.last_error is None

    def _emit(self, record: ObjectRecord) -> ObjectRecord:
        self._resyncing = False
        self.scan_stats["records"] += 1
        return record

    def _skip(self, error: BadMagic, where: str) -> None:
        self.scan_stats["skipped"] += 1
        if not self._resyncing:
            self._resyncing = True
            self.scan_stats["resyncs"] += 1
            warn(f"Corrupt object magic {error.found!r} at offset {error.position}{where}. Resyncing.")

    def _stop(self, error: BlfError) -> None:
        self.last_error = error
        self._done = True
        self._container = None
        warn(f"Stopping record stream after {self.scan_stats['records']} records: {error}")

    def _read_top_level(self) -> ObjectRecord | None:
        reader = self._blf.reader
        while True:
            try:
                return read_record(reader)
            except BadMagic as e:
                self._skip(e, "")
                reader.seek(1, io.SEEK_CUR)
            except FrameEof:
                self._done = True
                if self._continuation:
                    self.scan_stats["trailing_bytes"] = len(self._continuation)
                    warn(f"Discarding {len(self._continuation)} trailing container bytes at end of file")
                    self._continuation = b""
                return None
            except Malformed as e:
                self._stop(e)
                return None

    def _open_container(self, container: LogContainer) -> None:
        try:
            data = decompress(container, max_size=self.max_container_size)
        except DecompressError as e:
            self._stop(e)
            return

        self.scan_stats["containers"] += 1
        buffer = self._continuation + data if self._continuation else data
        self._continuation = b""
        if self._owed_padding:
            dropped = min(self._owed_padding, len(buffer))
            buffer = buffer[dropped:]
            self._owed_padding -= dropped
        label = f" in container #{self.scan_stats['containers']}"
        self._container = ContainerIterator(buffer, self._skip, label)

    def _close_container(self) -> None:
        container = self._container
        self._container = None
        if container.error is not None:
            self._stop(container.error)
            return
        self._continuation = container.remaining_data()
        self._owed_padding += container.owed_padding


class BlfFile:
    """A BLF file: its statistics header plus the reader positioned behind it."""

    def __init__(
        self,
        reader: BinaryIO,
        file_stats: FileHeader,
        *,
        origin: int = 0,
        header_error: HeaderError | None = None,
    ):
        self.reader = reader
        self.file_stats = file_stats
        self.origin = origin
        self.header_error = header_error
        self._consumed = False

    @classmethod
    def from_reader(cls, reader: BinaryIO) -> "BlfFile":
        """Read the file header; an unreadable header gives an invalid file, never an exception."""
        origin = reader.tell()
        try:
            stats = read_file_header(reader)
        except HeaderError as e:
            warn(f"Invalid BLF file: {e}")
            return cls(reader, FileHeader.empty(), origin=origin, header_error=e)
        return cls(reader, stats, origin=origin)

    def is_valid(self) -> bool:
        return self.header_error is None and self.file_stats.is_valid()

    def is_compressed(self) -> bool:
        return self.file_stats.is_compressed()

    def records(self, *, max_container_size: int = DEFAULT_MAX_CONTAINER_SIZE) -> RecordStream:
        """Start the one-shot record stream; this consumes the reader."""
        if self._consumed:
            raise RuntimeError("BlfFile records can only be iterated once")
        self._consumed = True

        valid = self.is_valid()
        if valid:
            try:
                self.reader.seek(self.origin + self.file_stats.stats_size)
            except (OSError, ValueError):
                valid = False
        return RecordStream(self, valid=valid, max_container_size=max_container_size)

    def __iter__(self) -> RecordStream:
        return self.records()


def decode_file(path, *, max_container_size: int = DEFAULT_MAX_CONTAINER_SIZE) -> list[ObjectRecord]:
    """Convenience wrapper returning a list of records from a file path."""
    with open(Path(path), "rb") as stream:
        blf = BlfFile.from_reader(stream)
        return list(blf.records(max_container_size=max_container_size))
