"""Share sequences and share count calculations."""

from __future__ import annotations

from dataclasses import dataclass, field

from dashares import appconsts
from dashares.namespace import Namespace
from dashares.share import Share, ShareError


@dataclass
class ShareSequence:
    """Contiguous shares of one namespace and one blob (or reserved namespace)."""

    namespace: Namespace
    shares: list[Share] = field(default_factory=list)

    def raw_data(self) -> bytes:
        """Return the sequence payload with any trailing padding removed."""
        data = b"".join(share.raw_data() for share in self.shares)
        return data[: self.sequence_len()]

    def sequence_len(self) -> int:
        """Return the sequence length stored in the first share."""
        if not self.shares:
            raise ShareError("invalid sequence length because share sequence has no shares")
        return self.shares[0].sequence_len()


def _shares_needed(sequence_len: int, first_size: int, continuation_size: int) -> int:
    if sequence_len < 0:
        raise ValueError(f"sequence length {sequence_len} must not be negative")
    if sequence_len == 0:
        return 0
    if sequence_len <= first_size:
        return 1
    remaining = sequence_len - first_size
    return 1 + -(-remaining // continuation_size)


def compact_shares_needed(sequence_len: int) -> int:
    """Return the number of compact shares needed for ``sequence_len`` bytes."""
    return _shares_needed(
        sequence_len,
        appconsts.FIRST_COMPACT_SHARE_CONTENT_SIZE,
        appconsts.CONTINUATION_COMPACT_SHARE_CONTENT_SIZE,
    )


def sparse_shares_needed(sequence_len: int) -> int:
    """Return the number of sparse shares needed for ``sequence_len`` bytes."""
    return _shares_needed(
        sequence_len,
        appconsts.FIRST_SPARSE_SHARE_CONTENT_SIZE,
        appconsts.CONTINUATION_SPARSE_SHARE_CONTENT_SIZE,
    )