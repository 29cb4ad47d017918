import pytest

from dashares import appconsts
from dashares.compact import (
    CompactShareSplitter,
    ShareRange,
    parse_compact_shares,
    tx_key,
)
from dashares.info_byte import new_info_byte
from dashares.namespace import TX_NAMESPACE
from dashares.share import Share, ShareError, new_share, to_bytes_list
from dashares.testfactory import generate_random_txs, generate_randomly_sized_txs
from dashares.utils import delim_len, zero_pad_if_necessary


def raw_tx_size(desired_size):
    return desired_size - delim_len(desired_size)


def generate_tx(num_shares):
    if num_shares == 0:
        return b""
    if num_shares == 1:
        return b"\x01" * raw_tx_size(appconsts.FIRST_COMPACT_SHARE_CONTENT_SIZE)
    return b"\x02" * raw_tx_size(
        appconsts.FIRST_COMPACT_SHARE_CONTENT_SIZE
        + (num_shares - 1) * appconsts.CONTINUATION_COMPACT_SHARE_CONTENT_SIZE
    )


def split_txs(txs):
    css = CompactShareSplitter(TX_NAMESPACE, appconsts.SHARE_VERSION_ZERO)
    for tx in txs:
        css.write_tx(tx)
    shares, _ = css.export(0)
    return shares


def fill_share(data, filler):
    return Share(data + bytes([filler]) * (appconsts.SHARE_SIZE - len(data)))


def test_tx_key_is_sha256():
    assert tx_key(b"").hex() == (
        "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
    )


def test_compact_share_splitter_round_trip():
    txs = generate_random_txs(33, 200)
    shares = split_txs(txs)
    parsed = parse_compact_shares(shares, appconsts.SUPPORTED_SHARE_VERSIONS)
    assert parsed == txs


EXACT_TX_SHARE_SIZE = appconsts.FIRST_COMPACT_SHARE_CONTENT_SIZE - 1

PROCESS_CASES = [
    (appconsts.CONTINUATION_COMPACT_SHARE_CONTENT_SIZE // 8, 1),
    (appconsts.CONTINUATION_COMPACT_SHARE_CONTENT_SIZE // 8, 10),
    (appconsts.CONTINUATION_COMPACT_SHARE_CONTENT_SIZE * 4, 1),
    (appconsts.CONTINUATION_COMPACT_SHARE_CONTENT_SIZE * 4, 10),
    (EXACT_TX_SHARE_SIZE, 1),
    (EXACT_TX_SHARE_SIZE, 100),
]


@pytest.mark.parametrize("tx_size,tx_count", PROCESS_CASES)
def test_process_compact_shares_identically_sized(tx_size, tx_count):
    txs = generate_random_txs(tx_count, tx_size)
    parsed = parse_compact_shares(split_txs(txs), appconsts.SUPPORTED_SHARE_VERSIONS)
    assert parsed == txs


@pytest.mark.parametrize("tx_size,tx_count", PROCESS_CASES)
def test_process_compact_shares_randomly_sized(tx_size, tx_count):
    txs = generate_randomly_sized_txs(tx_count, tx_size)
    parsed = parse_compact_shares(split_txs(txs), appconsts.SUPPORTED_SHARE_VERSIONS)
    assert parsed == txs


def test_compact_share_contains_info_byte():
    txs = generate_random_txs(1, appconsts.CONTINUATION_COMPACT_SHARE_CONTENT_SIZE // 4)
    shares = split_txs(txs)
    assert len(shares) == 1
    info = shares[0].to_bytes()[appconsts.NAMESPACE_SIZE]
    assert info == new_info_byte(appconsts.SHARE_VERSION_ZERO, True)


def test_contiguous_compact_share_contains_info_byte():
    txs = generate_random_txs(1, appconsts.CONTINUATION_COMPACT_SHARE_CONTENT_SIZE * 4)
    shares = split_txs(txs)
    assert len(shares) > 1
    info = shares[1].to_bytes()[appconsts.NAMESPACE_SIZE]
    assert info == new_info_byte(appconsts.SHARE_VERSION_ZERO, False)


def test_parse_compact_shares_first_share_not_start():
    txs = generate_random_txs(2, appconsts.CONTINUATION_COMPACT_SHARE_CONTENT_SIZE * 4)
    shares = split_txs(txs)
    with pytest.raises(ShareError):
        parse_compact_shares(shares[1:], appconsts.SUPPORTED_SHARE_VERSIONS)


def test_parse_compact_shares_unsupported_version():
    txs = generate_random_txs(2, appconsts.CONTINUATION_COMPACT_SHARE_CONTENT_SIZE * 4)
    raw = bytearray(to_bytes_list(split_txs(txs))[0])
    raw[appconsts.NAMESPACE_SIZE] = new_info_byte(5, True)
    share = new_share(bytes(raw))
    with pytest.raises(ShareError):
        parse_compact_shares([share], appconsts.SUPPORTED_SHARE_VERSIONS)


def test_parse_compact_shares_unit_longer_than_data():
    raw = TX_NAMESPACE.to_bytes() + bytes([1, 0, 0, 0, 5, 0, 0, 0, 42]) + bytes([0xE8, 0x07])
    share = new_share(zero_pad_if_necessary(raw, appconsts.SHARE_SIZE)[0])
    with pytest.raises(ShareError):
        parse_compact_shares([share], appconsts.SUPPORTED_SHARE_VERSIONS)


def test_parse_compact_shares_empty():
    assert parse_compact_shares([], appconsts.SUPPORTED_SHARE_VERSIONS) == []


@pytest.mark.parametrize(
    "txs,want",
    [
        ([], 0),
        ([b"\x00"], 1),
        ([b"\x01" * 100], 1),
        ([b"\x01" * raw_tx_size(appconsts.FIRST_COMPACT_SHARE_CONTENT_SIZE + 1)], 2),
        ([generate_tx(1)], 1),
        ([generate_tx(2)], 2),
        ([generate_tx(20)], 20),
    ],
)
def test_count(txs, want):
    css = CompactShareSplitter(TX_NAMESPACE, appconsts.SHARE_VERSION_ZERO)
    for tx in txs:
        css.write_tx(tx)
    assert css.count() == want


_ONE_SHARE = Share(
    zero_pad_if_necessary(
        TX_NAMESPACE.to_bytes() + bytes([0x1, 0, 0, 0, 0x1, 0, 0, 0, 0x2A, 0xF]),
        appconsts.SHARE_SIZE,
    )[0]
)
_FIRST_SHARE = fill_share(
    TX_NAMESPACE.to_bytes() + bytes([0x1, 0, 0, 0x2, 0x0, 0, 0, 0, 0x2A]), 0xF
)
_CONTINUATION_SHARE = Share(
    zero_pad_if_necessary(
        TX_NAMESPACE.to_bytes()
        + bytes([0x0, 0, 0, 0, 0])
        + b"\x0f"
        * (
            appconsts.NAMESPACE_SIZE
            + appconsts.SHARE_INFO_BYTES
            + appconsts.SEQUENCE_LEN_BYTES
            + appconsts.COMPACT_SHARE_RESERVED_BYTES
        ),
        appconsts.SHARE_SIZE,
    )[0]
)


@pytest.mark.parametrize(
    "write_bytes,want",
    [
        ([], []),
        ([b"\x0f"], [_ONE_SHARE]),
        ([b"\x0f" * 512], [_FIRST_SHARE, _CONTINUATION_SHARE]),
    ],
    ids=["empty", "one share", "two shares"],
)
def test_export_write(write_bytes, want):
    css = CompactShareSplitter(TX_NAMESPACE, appconsts.SHARE_VERSION_ZERO)
    for data in write_bytes:
        css.write(data)
    got, _ = css.export(0)
    assert got == want
    again, _ = css.export(0)
    assert again == got
    assert len(got) == css.count()


@pytest.mark.parametrize(
    "txs,want_len",
    [
        ([generate_tx(1)], 1),
        ([generate_tx(2)], 2),
        ([generate_tx(3)], 3),
        (
            [
                b"\x0f" * raw_tx_size(appconsts.FIRST_COMPACT_SHARE_CONTENT_SIZE),
                b"\x0f" * raw_tx_size(appconsts.CONTINUATION_COMPACT_SHARE_CONTENT_SIZE),
            ],
            2,
        ),
        (
            [
                b"\x0f" * raw_tx_size(appconsts.FIRST_COMPACT_SHARE_CONTENT_SIZE),
                b"\x0f" * raw_tx_size(appconsts.CONTINUATION_COMPACT_SHARE_CONTENT_SIZE),
                b"\x0f" * raw_tx_size(appconsts.CONTINUATION_COMPACT_SHARE_CONTENT_SIZE),
            ],
            3,
        ),
        (
            [
                b"\x0f" * raw_tx_size(appconsts.FIRST_COMPACT_SHARE_CONTENT_SIZE),
                b"\x0f" * raw_tx_size(appconsts.CONTINUATION_COMPACT_SHARE_CONTENT_SIZE),
                b"\x0f" * raw_tx_size(appconsts.CONTINUATION_COMPACT_SHARE_CONTENT_SIZE),
                b"\x0f",
            ],
            4,
        ),
    ],
)
def test_write_and_export_idempotence(txs, want_len):
    css = CompactShareSplitter(TX_NAMESPACE, appconsts.SHARE_VERSION_ZERO)
    for tx in txs:
        css.write_tx(tx)
    assert css.count() == want_len
    shares, _ = css.export(0)
    assert len(shares) == want_len


TX_ONE = b"\x01"
TX_TWO = b"\x02" * 600
TX_THREE = b"\x03" * 1000
EXACTLY_ONE = b"\x04" * raw_tx_size(appconsts.FIRST_COMPACT_SHARE_CONTENT_SIZE)
EXACTLY_TWO = b"\x05" * raw_tx_size(
    appconsts.FIRST_COMPACT_SHARE_CONTENT_SIZE
    + appconsts.CONTINUATION_COMPACT_SHARE_CONTENT_SIZE
)


@pytest.mark.parametrize(
    "txs,want,offset",
    [
        ([], {}, 0),
        ([TX_ONE], {TX_ONE: (0, 0)}, 0),
        ([TX_TWO], {TX_TWO: (0, 1)}, 0),
        ([TX_THREE], {TX_THREE: (0, 2)}, 0),
        (
            [TX_ONE, TX_TWO, TX_THREE],
            {TX_ONE: (0, 0), TX_TWO: (0, 1), TX_THREE: (1, 3)},
            0,
        ),
        ([EXACTLY_ONE], {EXACTLY_ONE: (0, 0)}, 0),
        ([EXACTLY_TWO], {EXACTLY_TWO: (0, 1)}, 0),
        ([EXACTLY_TWO, EXACTLY_ONE], {EXACTLY_TWO: (0, 1), EXACTLY_ONE: (2, 2)}, 0),
        ([EXACTLY_ONE, EXACTLY_TWO], {EXACTLY_ONE: (0, 0), EXACTLY_TWO: (1, 2)}, 0),
        (
            [EXACTLY_ONE, EXACTLY_TWO],
            {EXACTLY_ONE: (10, 10), EXACTLY_TWO: (11, 12)},
            10,
        ),
    ],
)
def test_export_share_ranges(txs, want, offset):
    css = CompactShareSplitter(TX_NAMESPACE, appconsts.SHARE_VERSION_ZERO)
    for tx in txs:
        css.write_tx(tx)
    _, got = css.export(offset)
    expected = {tx_key(tx): ShareRange(start, end) for tx, (start, end) in want.items()}
    assert got == expected


def test_write_after_export():
    a = b"\x0f" * raw_tx_size(appconsts.FIRST_COMPACT_SHARE_CONTENT_SIZE)
    b = b"\x0f" * raw_tx_size(appconsts.CONTINUATION_COMPACT_SHARE_CONTENT_SIZE * 2)
    c = b"\x0f" * raw_tx_size(appconsts.CONTINUATION_COMPACT_SHARE_CONTENT_SIZE)
    d = b"\x0f"

    css = CompactShareSplitter(TX_NAMESPACE, appconsts.SHARE_VERSION_ZERO)
    shares, _ = css.export(0)
    assert len(shares) == 0

    css.write_tx(a)
    shares, _ = css.export(0)
    assert len(shares) == 1

    css.write_tx(b)
    shares, _ = css.export(0)
    assert len(shares) == 3

    css.write_tx(c)
    shares, _ = css.export(0)
    assert len(shares) == 4

    css.write_tx(d)
    shares, _ = css.export(0)
    assert len(shares) == 5

    shares, _ = css.export(0)
    assert len(shares) == 5


def test_exported_sequence_len_matches_written_data():
    css = CompactShareSplitter(TX_NAMESPACE, appconsts.SHARE_VERSION_ZERO)
    css.write(b"\x0f" * 512)
    shares, _ = css.export(0)
    assert shares[0].sequence_len() == 512
    assert shares[1].sequence_len() == 0