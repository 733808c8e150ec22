"""Object framer: reads one `LOBJ` record and dispatches its payload by type code."""
from __future__ import annotations

from typing import BinaryIO, Callable

from blf_core.protocol import (
    APP_TEXT_FMT,
    CAN_HEAD_FMT,
    CAN_TAIL_FMT,
    CONTAINER_FMT,
    MAGIC_OBJECT,
    OBJ_HEADER_FMT,
    OBJ_HEADER_LEN,
    OBJ_SUBHEADER_FMT,
    PADDED_TYPES,
    READ_CHUNK_SIZE,
    TYPE_APP_TEXT,
    TYPE_CAN_MESSAGE2,
    TYPE_LOG_CONTAINER,
)
from blf_core.records import (
    AppText,
    CanMessage,
    LogContainer,
    ObjectHeader,
    ObjectRecord,
    Opaque,
    PaddedOpaque,
    Payload,
)

from .cursor import BudgetCursor
from .errors import BadMagic, FrameEof, FrameError, Malformed

# A decoder consumes its whole cursor and returns (payload, trailing padding bytes).
Decoder = Callable[[BudgetCursor], tuple[Payload, int]]


def read_exact(stream: BinaryIO, n: int) -> bytes:
    """Read up to n bytes in bounded chunks; a short result means the source ran dry."""
    parts: list[bytes] = []
    left = n
    while left > 0:
        chunk = stream.read(min(left, READ_CHUNK_SIZE))
        if not chunk:
            break
        parts.append(chunk)
        left -= len(chunk)
    return b"".join(parts)


def _decode_container(cur: BudgetCursor) -> tuple[Payload, int]:
    method, _, uncompressed_size, _ = cur.unpack(CONTAINER_FMT)
    compressed_size = cur.remaining
    data = cur.take(compressed_size)
    cur.finish()
    # Only the tail is aligned: compressed_size = 1 gives 1 padding byte, not 3.
    return LogContainer(method, uncompressed_size, compressed_size, data), compressed_size % 4


def _decode_can_message(cur: BudgetCursor) -> tuple[Payload, int]:
    header = ObjectHeader(*cur.unpack(OBJ_SUBHEADER_FMT))
    channel, flags, dlc, can_id = cur.unpack(CAN_HEAD_FMT)
    data = cur.take(cur.remaining - CAN_TAIL_FMT.size)
    frame_length_ns, bit_count, _, _ = cur.unpack(CAN_TAIL_FMT)
    cur.finish()
    msg = CanMessage(
        header=header,
        channel=channel,
        flags=flags,
        dlc=dlc,
        id=can_id,
        data=data,
        frame_length_ns=frame_length_ns,
        bit_count=bit_count,
    )
    return msg, 0


def _decode_app_text(cur: BudgetCursor) -> tuple[Payload, int]:
    header = ObjectHeader(*cur.unpack(OBJ_SUBHEADER_FMT))
    source, _, text_length, _ = cur.unpack(APP_TEXT_FMT)
    text = cur.take(text_length)
    # Slack between the text and the budget is discarded.
    cur.skip(cur.remaining)
    cur.finish()
    return AppText(header=header, source=source, text=text), cur.budget % 4


def _require_payload(cur: BudgetCursor) -> None:
    if cur.budget == 0:
        raise Malformed(f"type {cur.object_type} declares an empty payload")


def _decode_padded(cur: BudgetCursor) -> tuple[Payload, int]:
    _require_payload(cur)
    cur.skip(cur.budget)
    cur.finish()
    return PaddedOpaque(cur.object_type, cur.budget), cur.budget % 4


def _decode_opaque(cur: BudgetCursor) -> tuple[Payload, int]:
    _require_payload(cur)
    cur.skip(cur.budget)
    cur.finish()
    return Opaque(cur.object_type, cur.budget), 0


DECODERS: dict[int, Decoder] = {
    TYPE_LOG_CONTAINER: _decode_container,
    TYPE_CAN_MESSAGE2: _decode_can_message,
    TYPE_APP_TEXT: _decode_app_text,
}
DECODERS.update({t: _decode_padded for t in PADDED_TYPES})


def select_decoder(object_type: int, expand_containers: bool = True) -> Decoder:
    if object_type == TYPE_LOG_CONTAINER and not expand_containers:
        return _decode_opaque
    return DECODERS.get(object_type, _decode_opaque)


def _read_record(stream: BinaryIO, start: int, expand_containers: bool) -> tuple[ObjectRecord, int]:
    magic = stream.read(len(MAGIC_OBJECT))
    if len(magic) < len(MAGIC_OBJECT):
        raise FrameEof(start)
    if magic != MAGIC_OBJECT:
        raise BadMagic(start, magic)

    rest = stream.read(OBJ_HEADER_LEN - len(MAGIC_OBJECT))
    if len(rest) < OBJ_HEADER_LEN - len(MAGIC_OBJECT):
        raise FrameEof(start)
    _, header_size, header_version, object_size, object_type = OBJ_HEADER_FMT.unpack(magic + rest)

    remaining = object_size - OBJ_HEADER_LEN
    if remaining < 0:
        raise Malformed(f"object size {object_size} below header length at offset {start}")

    raw = read_exact(stream, remaining)
    if len(raw) < remaining:
        raise FrameEof(start)

    decoder = select_decoder(object_type, expand_containers)
    payload, padding = decoder(BudgetCursor(raw, object_type))
    # Padding past the end of the source is not an error; the shortfall is reported.
    owed = padding - len(stream.read(padding)) if padding else 0

    record = ObjectRecord(
        header_size=header_size,
        header_version=header_version,
        object_size=object_size,
        object_type=object_type,
        payload=payload,
        payload_size=remaining,
    )
    return record, owed


def read_framed(stream: BinaryIO, *, expand_containers: bool = True) -> tuple[ObjectRecord, int]:
    """Read one framed object at the current position.

    Returns the record and the number of alignment padding bytes the source
    ran out before providing. On any FrameError the stream is rewound to where
    the record started, so the caller decides whether to resync or stop.
    """
    start = stream.tell()
    try:
        return _read_record(stream, start, expand_containers)
    except FrameError:
        stream.seek(start)
        raise


def read_record(stream: BinaryIO, *, expand_containers: bool = True) -> ObjectRecord:
    """Read one framed object; padding missing at the end of the source is ignored."""
    return read_framed(stream, expand_containers=expand_containers)[0]
