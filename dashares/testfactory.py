"""Random transaction generators for exercising share splitting."""

from __future__ import annotations

import random


def generate_randomly_sized_txs(count: int, max_size: int) -> list[bytes]:
    """Return ``count`` random transactions of sizes in [1, max_size)."""
    return [
        generate_random_txs(1, random.randrange(max_size) or 1)[0]
        for _ in range(count)
    ]


def generate_random_txs(count: int, size: int) -> list[bytes]:
    """Return ``count`` random transactions of exactly ``size`` bytes."""
    return [random.randbytes(size) for _ in range(count)]