"""Length delimiters and padding helpers for share data."""

from __future__ import annotations

MAX_VARINT_LEN64 = 10
_MAX_UINT64 = (1 << 64) - 1


def _encode_uvarint(value: int) -> bytes:
    if not 0 <= value <= _MAX_UINT64:
        raise ValueError(f"value {value} does not fit in an unsigned 64-bit integer")
    out = bytearray()
    while value >= 0x80:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    out.append(value)
    return bytes(out)


def _read_uvarint(buf: bytes) -> int:
    value = 0
    shift = 0
    for i, b in enumerate(buf[:MAX_VARINT_LEN64]):
        if b < 0x80:
            if i == MAX_VARINT_LEN64 - 1 and b > 1:
                raise ValueError("varint overflows a 64-bit integer")
            return value | (b << shift)
        value |= (b & 0x7F) << shift
        shift += 7
    raise ValueError("varint overflows a 64-bit integer")


def delim_len(size: int) -> int:
    """Return the number of bytes of the varint delimiter for a unit of ``size``."""
    return len(_encode_uvarint(size))


def zero_pad_if_necessary(share: bytes, width: int) -> tuple[bytes, int]:
    """Pad ``share`` with trailing zeros up to ``width``; return it and the padding added."""
    missing = width - len(share)
    if missing <= 0:
        return bytes(share), 0
    return bytes(share) + bytes(missing), missing


def parse_delimiter(data: bytes) -> tuple[bytes, int]:
    """Split a varint length delimiter off ``data``; return the rest and the length."""
    if not data:
        return bytes(data), 0
    delimiter, _ = zero_pad_if_necessary(data[:MAX_VARINT_LEN64], MAX_VARINT_LEN64)
    unit_len = _read_uvarint(delimiter)
    return bytes(data[delim_len(unit_len):]), unit_len


def marshal_delimited_tx(tx: bytes) -> bytes:
    """Prefix a transaction with its length encoded as a varint."""
    return _encode_uvarint(len(tx)) + bytes(tx)