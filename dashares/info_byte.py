"""The share info byte: a 7-bit version and a sequence start flag."""

from __future__ import annotations

from dashares import appconsts


class InfoByte(int):
    """Info byte whose upper 7 bits are the version and lowest bit the start flag."""

    def version(self) -> int:
        """Return the share version encoded in this byte."""
        return int(self) >> 1

    def is_sequence_start(self) -> bool:
        """Return whether this marks the first share of a sequence."""
        return int(self) % 2 == 1


def new_info_byte(version: int, is_sequence_start: bool) -> InfoByte:
    """Build an info byte, raising ValueError for an out-of-range version."""
    if version < 0 or version > appconsts.MAX_SHARE_VERSION:
        raise ValueError(
            f"version {version} must be less than or equal to {appconsts.MAX_SHARE_VERSION}"
        )
    prefix = version << 1
    return InfoByte(prefix + 1 if is_sequence_start else prefix)


def parse_info_byte(b: int) -> InfoByte:
    """Parse a raw byte value into an info byte."""
    if not 0 <= b <= 0xFF:
        raise ValueError(f"info byte {b} is not a byte value")
    return new_info_byte(b >> 1, b % 2 == 1)