"""Framing of float readings exchanged between controller boards.

A frame is a message-type byte, a length byte and a little-endian
IEEE-754 single-precision value.
"""

from __future__ import annotations

import struct

TEMPERATURE_MESSAGE = 0x02
TDS_MESSAGE = 0x03
MESSAGE_LENGTH = 8

_HEADER = struct.Struct("<BB")
_FLOAT = struct.Struct("<f")
_MIN_FRAME = _HEADER.size + _FLOAT.size


class MessageError(ValueError):
    """Raised for frames that cannot be built or understood."""


def encode_float_message(message_type: int, value: float) -> bytes:
    """Build the frame carrying ``value`` under ``message_type``."""
    if not 0 <= message_type <= 0xFF:
        raise MessageError(f"message type out of range: {message_type}")
    try:
        body = _FLOAT.pack(value)
    except (OverflowError, struct.error) as exc:
        raise MessageError(f"value does not fit a float32: {value}") from exc
    return _HEADER.pack(message_type, MESSAGE_LENGTH) + body


def decode_float_message(data: bytes) -> tuple[int, float]:
    """Parse a frame into ``(message_type, value)``; trailing bytes are ignored."""
    raw = bytes(data)
    if len(raw) < _MIN_FRAME:
        raise MessageError(
            f"frame needs at least {_MIN_FRAME} bytes, got {len(raw)}"
        )
    message_type, length = _HEADER.unpack_from(raw)
    if length != MESSAGE_LENGTH:
        raise MessageError(f"unexpected message length byte: {length}")
    (value,) = _FLOAT.unpack_from(raw, _HEADER.size)
    return message_type, value