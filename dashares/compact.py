"""Splitting units into compact shares and parsing them back out."""

from __future__ import annotations

import hashlib
from collections.abc import Iterable
from dataclasses import dataclass

from dashares import appconsts
from dashares.builder import Builder
from dashares.namespace import Namespace
from dashares.share import Share, ShareError
from dashares.utils import marshal_delimited_tx, parse_delimiter


@dataclass(frozen=True)
class ShareRange:
    """Indices of the first and last share a unit occupies."""

    start: int
    end: int


def tx_key(tx: bytes) -> bytes:
    """Return the key identifying a transaction: the SHA-256 digest of it."""
    return hashlib.sha256(bytes(tx)).digest()


class CompactShareSplitter:
    """Writes delimited units compactly across a growing list of shares."""

    def __init__(
        self,
        namespace: Namespace,
        share_version: int = appconsts.SHARE_VERSION_ZERO,
    ) -> None:
        self.namespace = namespace
        self.share_version = share_version
        self._shares: list[Share] = []
        self._builder = Builder(namespace, share_version, True).init()
        self._done = False
        self._share_ranges: dict[bytes, ShareRange] = {}

    def write_tx(self, tx: bytes) -> None:
        """Add the delimited form of ``tx`` and record the shares it occupies."""
        raw_data = marshal_delimited_tx(tx)
        start_share = len(self._shares)
        self.write(raw_data)
        end_share = self.count() - 1
        self._share_ranges[tx_key(tx)] = ShareRange(start_share, end_share)

    def write(self, raw_data: bytes) -> None:
        """Add already delimited data to the shares."""
        if self._done:
            if not self._builder.is_empty_share():
                self._shares.pop()
            self._done = False

        self._builder.maybe_write_reserved_bytes()

        data: bytes | None = bytes(raw_data)
        while True:
            leftover = self._builder.add_data(data)
            if leftover is None:
                break
            self._stack_pending()
            data = leftover

        if self._builder.available_bytes() == 0:
            self._stack_pending()

    def _stack_pending(self) -> None:
        self._shares.append(self._builder.build())
        self._builder = Builder(self.namespace, self.share_version, False).init()

    def export(
        self, share_range_offset: int = 0
    ) -> tuple[list[Share], dict[bytes, ShareRange]]:
        """Finalize and return the shares and each transaction's offset share range."""
        share_ranges: dict[bytes, ShareRange] = {}
        if self._is_empty():
            return [], share_ranges

        for key, rng in self._share_ranges.items():
            share_ranges[key] = ShareRange(
                rng.start + share_range_offset, rng.end + share_range_offset
            )

        if self._done:
            return list(self._shares), share_ranges

        bytes_of_padding = 0
        if not self._builder.is_empty_share():
            bytes_of_padding = self._builder.zero_pad_if_necessary()
            self._stack_pending()

        self._write_sequence_len(self._sequence_len(bytes_of_padding))
        self._done = True
        return list(self._shares), share_ranges

    def _write_sequence_len(self, sequence_len: int) -> None:
        if self._is_empty():
            return
        builder = Builder(self.namespace, self.share_version, True).init()
        builder.import_raw_share(self._shares[0].to_bytes())
        builder.write_sequence_len(sequence_len)
        self._shares[0] = builder.build()

    def _sequence_len(self, bytes_of_padding: int) -> int:
        if not self._shares:
            return 0
        continuation_count = len(self._shares) - 1
        return (
            appconsts.FIRST_COMPACT_SHARE_CONTENT_SIZE
            + continuation_count * appconsts.CONTINUATION_COMPACT_SHARE_CONTENT_SIZE
            - bytes_of_padding
        )

    def _is_empty(self) -> bool:
        return not self._shares and self._builder.is_empty_share()

    def count(self) -> int:
        """Return the number of shares an export would produce."""
        if not self._builder.is_empty_share() and not self._done:
            return len(self._shares) + 1
        return len(self._shares)


def parse_compact_shares(
    shares: list[Share], supported_share_versions: Iterable[int]
) -> list[bytes]:
    """Return the units stored in a sequence of compact shares."""
    if not shares:
        return []
    if not shares[0].is_sequence_start():
        raise ShareError("first share is not the start of a sequence")

    supported = list(supported_share_versions)
    for share in shares:
        share.does_support_versions(supported)

    raw_data = b"".join(share.raw_data() for share in shares)
    return _parse_raw_data(raw_data)


def _parse_raw_data(raw_data: bytes) -> list[bytes]:
    units: list[bytes] = []
    while True:
        rest, unit_len = parse_delimiter(raw_data)
        if unit_len == 0:
            return units
        if unit_len > len(rest):
            raise ShareError(
                f"unit length {unit_len} exceeds the {len(rest)} bytes of remaining data"
            )
        units.append(rest[:unit_len])
        raw_data = rest[unit_len:]