import io

import pytest

from blf_core.protocol import OBJ_HEADER_FMT, MAGIC_OBJECT
from blf_core.records import AppText, CanMessage, LogContainer, ObjectHeader, Opaque, PaddedOpaque
from blf_decode import BadMagic, FrameEof, Malformed, read_framed, read_record

from blf_samples import app_text, can_message, container, obj, opaque, padded_opaque


def test_can_message_fields():
    raw = can_message(0x123, b"\xde\xad\xbe\xef", channel=2, timestamp_ns=42)
    stream = io.BytesIO(raw)
    record = read_record(stream)

    msg = record.payload
    assert isinstance(msg, CanMessage)
    assert (msg.channel, msg.id, msg.dlc, msg.data) == (2, 0x123, 4, b"\xde\xad\xbe\xef")
    assert msg.header.timestamp_ns == 42
    assert msg.frame_length_ns == 230_000
    assert msg.bit_count == 111
    assert record.header_size == 32
    assert record.consumed_size == record.object_size == len(raw)
    assert stream.tell() == len(raw)


def test_app_text_consumes_tail_padding():
    stream = io.BytesIO(app_text(b"engine start\x00x") + can_message(0x1))
    record = read_record(stream)

    assert isinstance(record.payload, AppText)
    assert record.payload.text == b"engine start\x00x"
    assert record.payload.source == 2
    # Next object starts right after the padding.
    assert read_record(stream).payload.id == 0x1


def test_app_text_drops_one_nul_terminator():
    text = AppText(header=ObjectHeader(0, 0, 0, 0), source=0, text=b"ok\x00")
    assert text.to_string() == "ok"
    assert AppText(header=ObjectHeader(0, 0, 0, 0), source=0, text=b"\xffok").to_string() == "\ufffdok"


def test_padded_opaque_uses_tail_only_alignment():
    stream = io.BytesIO(padded_opaque(72, 5) + can_message(0x7))
    record = read_record(stream)

    assert record.payload == PaddedOpaque(72, 5)
    assert stream.tell() == 16 + 5 + 1
    assert read_record(stream).payload.id == 0x7


def test_unknown_type_is_skipped_by_size():
    stream = io.BytesIO(opaque(4242, 6) + can_message(0x8))
    record = read_record(stream)

    assert record.payload == Opaque(4242, 6)
    assert record.object_size == 22
    assert read_record(stream).payload.id == 0x8


def test_container_padding_and_derived_size():
    raw = container(b"abcde", method=0)
    stream = io.BytesIO(raw)
    record = read_record(stream)

    assert isinstance(record.payload, LogContainer)
    assert record.is_container
    assert record.payload.compressed_size == 5
    assert record.payload.compressed_data == b"abcde"
    assert stream.tell() == len(raw) == 16 + 16 + 5 + 1


def test_container_is_opaque_when_not_expanded():
    record = read_record(io.BytesIO(container(b"abcd", method=0)), expand_containers=False)
    assert record.payload == Opaque(10, 20)


def test_bad_magic_rewinds():
    stream = io.BytesIO(b"\x00" + can_message(0x1))
    with pytest.raises(BadMagic) as exc:
        read_record(stream)
    assert exc.value.position == 0
    assert stream.tell() == 0


def test_truncated_payload_is_eof_and_rewinds():
    raw = can_message(0x1)
    stream = io.BytesIO(b"pad" + raw[:-3])
    stream.seek(3)
    with pytest.raises(FrameEof):
        read_record(stream)
    assert stream.tell() == 3


def test_truncated_header_is_eof():
    with pytest.raises(FrameEof):
        read_record(io.BytesIO(MAGIC_OBJECT + b"\x10\x00"))


def test_object_size_below_header_is_malformed():
    raw = OBJ_HEADER_FMT.pack(MAGIC_OBJECT, 16, 1, 8, 86)
    with pytest.raises(Malformed):
        read_record(io.BytesIO(raw))


def test_can_message_budget_too_small_is_malformed():
    with pytest.raises(Malformed):
        read_record(io.BytesIO(obj(86, b"\x00" * 20)))


def test_app_text_length_beyond_budget_is_malformed():
    raw = bytearray(app_text(b"abcd"))
    # text_length field sits after magic header (16), subheader (16), source and reserved (8)
    raw[40:44] = (200).to_bytes(4, "little")
    with pytest.raises(Malformed):
        read_record(io.BytesIO(bytes(raw)))


def test_empty_opaque_payload_is_malformed():
    with pytest.raises(Malformed):
        read_record(io.BytesIO(obj(4242, b"")))


def test_missing_padding_is_reported():
    stream = io.BytesIO(padded_opaque(72, 5)[:21])
    record, owed = read_framed(stream)

    assert record.payload == PaddedOpaque(72, 5)
    assert owed == 1
    assert read_framed(io.BytesIO(padded_opaque(72, 5)))[1] == 0
