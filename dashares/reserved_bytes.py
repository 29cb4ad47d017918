"""Reserved bytes of a compact share: the index of the first unit starting in it."""

from dashares import appconsts


def new_reserved_bytes(byte_index: int) -> bytes:
    """Encode a byte index as big-endian reserved bytes."""
    if byte_index >= appconsts.SHARE_SIZE:
        raise ValueError(
            f"byte index {byte_index} must be less than share size {appconsts.SHARE_SIZE}"
        )
    if byte_index < 0:
        raise ValueError(f"byte index {byte_index} must not be negative")
    return byte_index.to_bytes(appconsts.COMPACT_SHARE_RESERVED_BYTES, "big")


def parse_reserved_bytes(reserved: bytes) -> int:
    """Decode reserved bytes into a byte index."""
    if len(reserved) != appconsts.COMPACT_SHARE_RESERVED_BYTES:
        raise ValueError(
            f"reserved bytes must be of length {appconsts.COMPACT_SHARE_RESERVED_BYTES}"
        )
    byte_index = int.from_bytes(reserved, "big")
    if byte_index >= appconsts.SHARE_SIZE:
        raise ValueError(f"byteIndex must be less than share size {appconsts.SHARE_SIZE}")
    return byte_index