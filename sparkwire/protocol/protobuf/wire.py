"""Minimal protobuf wire helpers for Sparkplug B payload messages.

Fields follow proto2 presence rules: ``None`` means "not set" and is never
written, while zero, ``False`` and empty values are written when set.
"""

from __future__ import annotations

import struct
from typing import Iterable

WIRE_VARINT = 0
WIRE_FIXED64 = 1
WIRE_LEN = 2
WIRE_FIXED32 = 5

_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF


def _encode_varint(value: int) -> bytes:
    if value < 0:
        raise ValueError("varint cannot encode negative values")
    out = bytearray()
    while value >= 0x80:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    out.append(value)
    return bytes(out)


def _decode_varint(data: bytes, offset: int) -> tuple[int, int]:
    result = 0
    shift = 0
    while True:
        if offset >= len(data):
            raise ValueError("unexpected EOF while decoding varint")
        byte = data[offset]
        offset += 1
        result |= (byte & 0x7F) << shift
        if not (byte & 0x80):
            return result, offset
        shift += 7
        if shift >= 70:
            raise ValueError("varint too long")


def _key(field_number: int, wire_type: int) -> bytes:
    return _encode_varint((field_number << 3) | wire_type)


def _encode_len_delimited(field_number: int, payload: bytes | None) -> bytes:
    if payload is None:
        return b""
    return _key(field_number, WIRE_LEN) + _encode_varint(len(payload)) + payload


def _encode_string(field_number: int, value: str | None) -> bytes:
    if value is None:
        return b""
    return _encode_len_delimited(field_number, value.encode("utf-8"))


def _encode_bytes(field_number: int, value: bytes | None) -> bytes:
    if value is None:
        return b""
    return _encode_len_delimited(field_number, bytes(value))


def _encode_uint32(field_number: int, value: int | None) -> bytes:
    if value is None:
        return b""
    return _key(field_number, WIRE_VARINT) + _encode_varint(value & _MASK32)


def _encode_uint64(field_number: int, value: int | None) -> bytes:
    if value is None:
        return b""
    return _key(field_number, WIRE_VARINT) + _encode_varint(value & _MASK64)


def _encode_bool(field_number: int, value: bool | None) -> bytes:
    if value is None:
        return b""
    return _key(field_number, WIRE_VARINT) + (b"\x01" if value else b"\x00")


def _encode_float(field_number: int, value: float | None) -> bytes:
    if value is None:
        return b""
    return _key(field_number, WIRE_FIXED32) + struct.pack("<f", value)


def _encode_double(field_number: int, value: float | None) -> bytes:
    if value is None:
        return b""
    return _key(field_number, WIRE_FIXED64) + struct.pack("<d", value)


def _encode_message(field_number: int, message: object | None) -> bytes:
    if message is None:
        return b""
    return _encode_len_delimited(field_number, message.SerializeToString())  # type: ignore[attr-defined]


def _iter_fields(data: bytes) -> Iterable[tuple[int, int, bytes | int]]:
    offset = 0
    while offset < len(data):
        key, offset = _decode_varint(data, offset)
        field_number = key >> 3
        wire_type = key & 0x07
        if wire_type == WIRE_VARINT:
            value, offset = _decode_varint(data, offset)
            yield field_number, wire_type, value
            continue
        if wire_type == WIRE_FIXED64:
            if offset + 8 > len(data):
                raise ValueError("unexpected EOF in fixed64 field")
            value = data[offset : offset + 8]
            offset += 8
            yield field_number, wire_type, value
            continue
        if wire_type == WIRE_LEN:
            size, offset = _decode_varint(data, offset)
            end = offset + size
            if end > len(data):
                raise ValueError("unexpected EOF in len-delimited field")
            value = data[offset:end]
            offset = end
            yield field_number, wire_type, value
            continue
        if wire_type == WIRE_FIXED32:
            if offset + 4 > len(data):
                raise ValueError("unexpected EOF in fixed32 field")
            value = data[offset : offset + 4]
            offset += 4
            yield field_number, wire_type, value
            continue
        raise ValueError(f"unsupported wire type: {wire_type}")


def _decode_float(value: bytes | int) -> float:
    return struct.unpack("<f", bytes(value))[0]  # type: ignore[arg-type]


def _decode_double(value: bytes | int) -> float:
    return struct.unpack("<d", bytes(value))[0]  # type: ignore[arg-type]


def _decode_string(value: bytes | int) -> str:
    return bytes(value).decode("utf-8")  # type: ignore[arg-type]


def _decode_packed_varints(value: bytes) -> list[int]:
    out: list[int] = []
    offset = 0
    while offset < len(value):
        item, offset = _decode_varint(value, offset)
        out.append(item)
    return out
