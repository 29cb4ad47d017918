"""Protocol constants for the share format and data square."""

from datetime import timedelta

NAMESPACE_VERSION_SIZE = 1
"""Size of a namespace version in bytes."""

NAMESPACE_ID_SIZE = 32
"""Size of a namespace ID in bytes."""

NAMESPACE_SIZE = NAMESPACE_VERSION_SIZE + NAMESPACE_ID_SIZE
"""Size of a namespace (version + ID) in bytes."""

SHARE_SIZE = 512
"""Size of a share in bytes."""

SHARE_INFO_BYTES = 1
"""Bytes reserved for the info byte (share version and sequence start flag)."""

SEQUENCE_LEN_BYTES = 4
"""Bytes reserved for the sequence length in the first share of a sequence."""

SHARE_VERSION_ZERO = 0
"""The first share version format."""

DEFAULT_SHARE_VERSION = SHARE_VERSION_ZERO
"""The share version to use when unsure."""

COMPACT_SHARE_RESERVED_BYTES = 4
"""Bytes reserved for the location of the first unit in a compact share."""

FIRST_COMPACT_SHARE_CONTENT_SIZE = (
    SHARE_SIZE
    - NAMESPACE_SIZE
    - SHARE_INFO_BYTES
    - SEQUENCE_LEN_BYTES
    - COMPACT_SHARE_RESERVED_BYTES
)
"""Bytes usable for data in the first compact share of a sequence."""

CONTINUATION_COMPACT_SHARE_CONTENT_SIZE = (
    SHARE_SIZE - NAMESPACE_SIZE - SHARE_INFO_BYTES - COMPACT_SHARE_RESERVED_BYTES
)
"""Bytes usable for data in a continuation compact share."""

FIRST_SPARSE_SHARE_CONTENT_SIZE = (
    SHARE_SIZE - NAMESPACE_SIZE - SHARE_INFO_BYTES - SEQUENCE_LEN_BYTES
)
"""Bytes usable for data in the first sparse share of a sequence."""

CONTINUATION_SPARSE_SHARE_CONTENT_SIZE = SHARE_SIZE - NAMESPACE_SIZE - SHARE_INFO_BYTES
"""Bytes usable for data in a continuation sparse share."""

DEFAULT_MAX_SQUARE_SIZE = 128
"""Maximum width of the unextended data square."""

MAX_SHARE_COUNT = DEFAULT_MAX_SQUARE_SIZE * DEFAULT_MAX_SQUARE_SIZE
"""Maximum number of shares in the unextended data square."""

DEFAULT_MIN_SQUARE_SIZE = 1
"""Smallest width of the unextended data square."""

MIN_SHARE_COUNT = DEFAULT_MIN_SQUARE_SIZE * DEFAULT_MIN_SQUARE_SIZE
"""Minimum number of shares in the unextended data square."""

MAX_SHARE_VERSION = 127
"""Maximum value a share version can take."""

DEFAULT_GAS_PER_BLOB_BYTE = 8
"""Default gas cost deducted per byte of blob."""

TRANSACTIONS_PER_BLOCK_LIMIT = 5090
"""Maximum number of transactions a block producer includes in a block."""

SUPPORTED_SHARE_VERSIONS = (SHARE_VERSION_ZERO,)
"""Share versions this implementation understands."""

TIMEOUT_PROPOSE = timedelta(seconds=10)
TIMEOUT_COMMIT = timedelta(seconds=10)