"""Shares: fixed-size chunks of namespaced block data.

Every share starts with a universal prefix: a one-byte namespace version, a
32-byte namespace ID and an info byte holding the share version and a
sequence start flag. The first share of a sequence then carries a 4-byte
big-endian sequence length. Compact shares, used for transactions and
pay-for-blob transactions, also carry 4 reserved bytes. These hold the index
of the first unit that starts in the share. Sparse shares hold blob data
directly after the prefix.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from dashares import appconsts
from dashares.info_byte import InfoByte, parse_info_byte
from dashares.namespace import NAMESPACE_SIZE, Namespace, from_bytes

_INFO_BYTE_END = NAMESPACE_SIZE + appconsts.SHARE_INFO_BYTES
_SEQUENCE_LEN_END = _INFO_BYTE_END + appconsts.SEQUENCE_LEN_BYTES


class ShareError(ValueError):
    """Raised for malformed shares or invalid share operations."""


def _validate_size(data: bytes) -> None:
    if len(data) != appconsts.SHARE_SIZE:
        raise ShareError(
            f"share data must be {appconsts.SHARE_SIZE} bytes, got {len(data)}"
        )


@dataclass(frozen=True)
class Share:
    """Raw share data, including the namespace."""

    data: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", bytes(self.data))

    def namespace(self) -> Namespace:
        """Return the namespace this share belongs to."""
        if len(self.data) < NAMESPACE_SIZE:
            raise ShareError(
                f"share of {len(self.data)} bytes is too short to contain a namespace"
            )
        return from_bytes(self.data[:NAMESPACE_SIZE])

    def info_byte(self) -> InfoByte:
        """Return the info byte that follows the namespace."""
        if len(self.data) < _INFO_BYTE_END:
            raise ShareError(
                f"share of {len(self.data)} bytes is too short to contain an info byte"
            )
        return parse_info_byte(self.data[NAMESPACE_SIZE])

    def validate(self) -> None:
        """Raise ShareError unless the share has exactly the share size."""
        _validate_size(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def version(self) -> int:
        """Return the share version."""
        return self.info_byte().version()

    def does_support_versions(self, supported_share_versions: Iterable[int]) -> None:
        """Raise ShareError if the share version is not among those given."""
        supported = list(supported_share_versions)
        version = self.version()
        if version not in supported:
            raise ShareError(
                f"unsupported share version {version} is not present in the list "
                f"of supported share versions {supported}"
            )

    def is_sequence_start(self) -> bool:
        """Return whether this is the first share of a sequence."""
        return self.info_byte().is_sequence_start()

    def is_compact_share(self) -> bool:
        """Return whether this share belongs to a compact namespace."""
        ns = self.namespace()
        return ns.is_tx() or ns.is_pay_for_blob()

    def sequence_len(self) -> int:
        """Return the sequence length, or 0 for a continuation share."""
        if not self.is_sequence_start():
            return 0
        if len(self.data) < _SEQUENCE_LEN_END:
            raise ShareError(
                f"share with length {len(self.data)} is too short to contain a sequence length"
            )
        return int.from_bytes(self.data[_INFO_BYTE_END:_SEQUENCE_LEN_END], "big")

    def is_padding(self) -> bool:
        """Return whether this share is namespace, tail or reserved padding."""
        is_namespace_padding = self.is_sequence_start() and self.sequence_len() == 0
        ns = self.namespace()
        return is_namespace_padding or ns.is_tail_padding() or ns.is_reserved_padding()

    def to_bytes(self) -> bytes:
        """Return the raw bytes of the share."""
        return self.data

    def raw_data(self) -> bytes:
        """Return the share's payload without prefix, sequence length or reserved bytes."""
        start = self._raw_data_start_index()
        if len(self.data) < start:
            raise ShareError(
                f"share of {len(self.data)} bytes is too short to contain raw data"
            )
        return self.data[start:]

    def _raw_data_start_index(self) -> int:
        index = _INFO_BYTE_END
        if self.is_sequence_start():
            index += appconsts.SEQUENCE_LEN_BYTES
        if self.is_compact_share():
            index += appconsts.COMPACT_SHARE_RESERVED_BYTES
        return index


def new_share(data: bytes) -> Share:
    """Return a share from ``data``, which must be exactly one share long."""
    _validate_size(data)
    return Share(bytes(data))


def to_bytes_list(shares: Iterable[Share]) -> list[bytes]:
    """Return the raw bytes of each share."""
    return [share.data for share in shares]


def from_bytes_list(raw_shares: Iterable[bytes]) -> list[Share]:
    """Return validated shares from raw byte strings."""
    return [new_share(raw) for raw in raw_shares]