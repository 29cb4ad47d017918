"""Namespaces: a version byte followed by a 32-byte ID."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dashares import appconsts

NAMESPACE_VERSION_SIZE = appconsts.NAMESPACE_VERSION_SIZE
NAMESPACE_ID_SIZE = appconsts.NAMESPACE_ID_SIZE
NAMESPACE_SIZE = appconsts.NAMESPACE_SIZE
NAMESPACE_VERSION_ZERO = 0
NAMESPACE_VERSION_MAX = 0xFF
NAMESPACE_VERSION_ZERO_PREFIX_SIZE = 22
NAMESPACE_VERSION_ZERO_ID_SIZE = NAMESPACE_ID_SIZE - NAMESPACE_VERSION_ZERO_PREFIX_SIZE
NAMESPACE_VERSION_ZERO_PREFIX = bytes(NAMESPACE_VERSION_ZERO_PREFIX_SIZE)


class NamespaceError(ValueError):
    """Raised for an invalid or unsupported namespace."""


@dataclass(frozen=True)
class Namespace:
    """A namespace version and its ID."""

    version: int
    id: bytes

    def to_bytes(self) -> bytes:
        """Return the version byte followed by the ID."""
        return bytes([self.version]) + bytes(self.id)

    def validate_blob_namespace(self) -> None:
        """Raise NamespaceError if this namespace may not hold blobs."""
        raw = list(self.to_bytes())
        if self.is_reserved():
            raise NamespaceError(
                f"invalid blob namespace: {raw} cannot use a reserved namespace ID, "
                f"want > {list(MAX_RESERVED_NAMESPACE.to_bytes())}"
            )
        if self.is_parity_shares():
            raise NamespaceError(
                f"invalid blob namespace: {raw} cannot use parity shares namespace ID"
            )
        if self.is_tail_padding():
            raise NamespaceError(
                f"invalid blob namespace: {raw} cannot use tail padding namespace ID"
            )

    def is_reserved(self) -> bool:
        return self.to_bytes() <= MAX_RESERVED_NAMESPACE.to_bytes()

    def is_parity_shares(self) -> bool:
        return self.to_bytes() == PARITY_SHARES_NAMESPACE.to_bytes()

    def is_tail_padding(self) -> bool:
        return self.to_bytes() == TAIL_PADDING_NAMESPACE.to_bytes()

    def is_reserved_padding(self) -> bool:
        return self.to_bytes() == RESERVED_PADDING_NAMESPACE.to_bytes()

    def is_tx(self) -> bool:
        return self.to_bytes() == TX_NAMESPACE.to_bytes()

    def is_pay_for_blob(self) -> bool:
        return self.to_bytes() == PAY_FOR_BLOB_NAMESPACE.to_bytes()


def _validate_version(version: int) -> None:
    if version not in (NAMESPACE_VERSION_ZERO, NAMESPACE_VERSION_MAX):
        raise NamespaceError(f"unsupported namespace version {version}")


def _validate_id(version: int, namespace_id: bytes) -> None:
    if len(namespace_id) != NAMESPACE_ID_SIZE:
        raise NamespaceError(
            f"unsupported namespace id length: id {list(namespace_id)} must be "
            f"{NAMESPACE_ID_SIZE} bytes but it was {len(namespace_id)} bytes"
        )
    if version == NAMESPACE_VERSION_ZERO and not namespace_id.startswith(
        NAMESPACE_VERSION_ZERO_PREFIX
    ):
        raise NamespaceError(
            f"unsupported namespace id with version {version}. ID {list(namespace_id)} "
            f"must start with {NAMESPACE_VERSION_ZERO_PREFIX_SIZE} leading zeros"
        )


def new_namespace(version: int, id: bytes) -> Namespace:
    """Return a validated namespace with the given version and ID."""
    namespace_id = bytes(id)
    _validate_version(version)
    _validate_id(version, namespace_id)
    return Namespace(version=version, id=namespace_id)


def new_v0(id: bytes) -> Namespace:
    """Return a version-zero namespace from the user-specified part of its ID."""
    if len(id) != NAMESPACE_VERSION_ZERO_ID_SIZE:
        raise NamespaceError(
            f"invalid namespace id length: {len(id)} must be {NAMESPACE_VERSION_ZERO_ID_SIZE}"
        )
    return new_namespace(NAMESPACE_VERSION_ZERO, NAMESPACE_VERSION_ZERO_PREFIX + bytes(id))


def from_bytes(data: bytes) -> Namespace:
    """Parse a namespace from its serialized form."""
    if len(data) != NAMESPACE_SIZE:
        raise NamespaceError(
            f"invalid namespace length: {len(data)} must be {NAMESPACE_SIZE}"
        )
    return new_namespace(data[0], bytes(data[1:]))


def random_blob_namespace_id() -> bytes:
    """Return random bytes for the user-specified part of a v0 ID."""
    return os.urandom(NAMESPACE_VERSION_ZERO_ID_SIZE)


def random_blob_namespace() -> Namespace:
    """Return a random namespace that is valid for blobs."""
    while True:
        namespace = new_v0(random_blob_namespace_id())
        try:
            namespace.validate_blob_namespace()
        except NamespaceError:
            continue
        return namespace


def random_blob_namespaces(count: int) -> list[Namespace]:
    """Return ``count`` random blob namespaces."""
    return [random_blob_namespace() for _ in range(count)]


def random_namespace() -> Namespace:
    """Return a random version-zero namespace."""
    while True:
        try:
            return new_namespace(NAMESPACE_VERSION_ZERO, random_version_zero_id())
        except NamespaceError:
            continue


def random_version_zero_id() -> bytes:
    """Return a random full 32-byte ID with the version-zero prefix."""
    return NAMESPACE_VERSION_ZERO_PREFIX + os.urandom(NAMESPACE_VERSION_ZERO_ID_SIZE)


TX_NAMESPACE = new_v0(bytes([0, 0, 0, 0, 0, 0, 0, 0, 0, 1]))
INTERMEDIATE_STATE_ROOTS_NAMESPACE = new_v0(bytes([0, 0, 0, 0, 0, 0, 0, 0, 0, 2]))
PAY_FOR_BLOB_NAMESPACE = new_v0(bytes([0, 0, 0, 0, 0, 0, 0, 0, 0, 4]))
RESERVED_PADDING_NAMESPACE = new_v0(bytes([0, 0, 0, 0, 0, 0, 0, 0, 0, 255]))
MAX_RESERVED_NAMESPACE = new_v0(bytes([0, 0, 0, 0, 0, 0, 0, 0, 0, 255]))
TAIL_PADDING_NAMESPACE = Namespace(
    version=NAMESPACE_VERSION_MAX,
    id=b"\xff" * (NAMESPACE_ID_SIZE - 1) + b"\xfe",
)
PARITY_SHARES_NAMESPACE = Namespace(
    version=NAMESPACE_VERSION_MAX,
    id=b"\xff" * NAMESPACE_ID_SIZE,
)