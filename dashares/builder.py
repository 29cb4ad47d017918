"""Incremental construction of a single share."""

from __future__ import annotations

from dashares import appconsts
from dashares.info_byte import new_info_byte
from dashares.namespace import NAMESPACE_SIZE, Namespace
from dashares.reserved_bytes import new_reserved_bytes, parse_reserved_bytes
from dashares.share import Share, ShareError, new_share
from dashares.utils import zero_pad_if_necessary

_INFO_BYTE_INDEX = NAMESPACE_SIZE
_SEQUENCE_LEN_INDEX = NAMESPACE_SIZE + appconsts.SHARE_INFO_BYTES


def _is_compact_namespace(namespace: Namespace | None) -> bool:
    return namespace is not None and (namespace.is_tx() or namespace.is_pay_for_blob())


class Builder:
    """Builds one share; call :meth:`init` before adding data."""

    def __init__(
        self,
        namespace: Namespace | None = None,
        share_version: int = appconsts.SHARE_VERSION_ZERO,
        is_first_share: bool = False,
    ) -> None:
        self.namespace = namespace
        self.share_version = share_version
        self.is_first_share = is_first_share
        self.is_compact_share = _is_compact_namespace(namespace)
        self._raw = bytearray()

    def init(self) -> Builder:
        """Write the share prefix and placeholders; return the builder."""
        info = new_info_byte(self.share_version, self.is_first_share)
        raw = bytearray(self.namespace.to_bytes() if self.namespace is not None else b"")
        raw.append(info)
        if self.is_first_share:
            raw += bytes(appconsts.SEQUENCE_LEN_BYTES)
        if self.is_compact_share:
            raw += bytes(appconsts.COMPACT_SHARE_RESERVED_BYTES)
        self._raw = raw
        return self

    def available_bytes(self) -> int:
        """Return how many more bytes fit in the share."""
        return appconsts.SHARE_SIZE - len(self._raw)

    def import_raw_share(self, raw_bytes: bytes) -> Builder:
        """Replace the share contents with ``raw_bytes``; return the builder."""
        self._raw = bytearray(raw_bytes)
        return self

    def add_data(self, raw_data: bytes) -> bytes | None:
        """Append as much of ``raw_data`` as fits; return the leftover or None."""
        pending_left = appconsts.SHARE_SIZE - len(self._raw)
        if len(raw_data) <= pending_left:
            self._raw += raw_data
            return None
        self._raw += raw_data[:pending_left]
        return bytes(raw_data[pending_left:])

    def build(self) -> Share:
        """Return the finished share; raises ShareError if it is not full size."""
        return new_share(bytes(self._raw))

    def is_empty_share(self) -> bool:
        """Return whether no data has been written past the prefix."""
        expected = NAMESPACE_SIZE + appconsts.SHARE_INFO_BYTES
        if self.is_compact_share:
            expected += appconsts.COMPACT_SHARE_RESERVED_BYTES
        if self.is_first_share:
            expected += appconsts.SEQUENCE_LEN_BYTES
        return len(self._raw) == expected

    def zero_pad_if_necessary(self) -> int:
        """Pad the share with zeros to full size; return the padding added."""
        padded, padding = zero_pad_if_necessary(bytes(self._raw), appconsts.SHARE_SIZE)
        self._raw = bytearray(padded)
        return padding

    def _index_of_reserved_bytes(self) -> int:
        if self.is_first_share:
            return _SEQUENCE_LEN_INDEX + appconsts.SEQUENCE_LEN_BYTES
        return _SEQUENCE_LEN_INDEX

    def _is_empty_reserved_bytes(self) -> bool:
        start = self._index_of_reserved_bytes()
        end = start + appconsts.COMPACT_SHARE_RESERVED_BYTES
        return parse_reserved_bytes(bytes(self._raw[start:end])) == 0

    def maybe_write_reserved_bytes(self) -> None:
        """Record the index of the next unit unless the reserved bytes are already set."""
        if not self.is_compact_share:
            raise ShareError("this is not a compact share")
        if not self._is_empty_reserved_bytes():
            return
        reserved = new_reserved_bytes(len(self._raw))
        start = self._index_of_reserved_bytes()
        self._raw[start : start + appconsts.COMPACT_SHARE_RESERVED_BYTES] = reserved

    def write_sequence_len(self, sequence_len: int) -> None:
        """Write the sequence length into the first share."""
        if not self.is_first_share:
            raise ShareError("not the first share")
        encoded = sequence_len.to_bytes(appconsts.SEQUENCE_LEN_BYTES, "big")
        end = _SEQUENCE_LEN_INDEX + appconsts.SEQUENCE_LEN_BYTES
        if len(self._raw) < end:
            raise ShareError("share is too short to hold a sequence length")
        self._raw[_SEQUENCE_LEN_INDEX:end] = encoded

    def flip_sequence_start(self) -> None:
        """Toggle the sequence start flag in the info byte."""
        self._raw[_INFO_BYTE_INDEX] ^= 0x01


def new_empty_builder() -> Builder:
    """Return a builder with no namespace, meant for importing a raw share."""
    return Builder()