# dashares

Split transactions into fixed-size 512-byte *shares* and read them back.
Each share carries a namespace, an info byte (share version and a
sequence-start flag) and, for the first share of a sequence, the sequence
length. Compact shares also carry four reserved bytes holding the index of
the first unit that starts in the share.

The package has no dependencies beyond the Python standard library and
supports Python 3.10 and later.

## Install

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Namespaces

```python
from dashares.namespace import new_v0, from_bytes, random_blob_namespace

ns = new_v0(bytes([1] * 10))       # version 0, 22 leading zero bytes + 10-byte id
raw = ns.to_bytes()                 # 33 bytes: version + 32-byte id
assert from_bytes(raw) == ns

blob_ns = random_blob_namespace()   # never a reserved, parity or tail-padding namespace
blob_ns.validate_blob_namespace()
```

Only versions 0 and 255 are accepted. Invalid versions, id lengths or
prefixes raise `NamespaceError`. The module also defines the reserved
namespaces: `TX_NAMESPACE`, `INTERMEDIATE_STATE_ROOTS_NAMESPACE`,
`PAY_FOR_BLOB_NAMESPACE`, `RESERVED_PADDING_NAMESPACE`,
`MAX_RESERVED_NAMESPACE`, `TAIL_PADDING_NAMESPACE` and
`PARITY_SHARES_NAMESPACE`.

## Compact shares

Transactions are written into compact shares, each prefixed with a varint
length delimiter:

```python
from dashares.compact import CompactShareSplitter, parse_compact_shares, tx_key
from dashares.namespace import TX_NAMESPACE
from dashares.appconsts import SHARE_VERSION_ZERO, SUPPORTED_SHARE_VERSIONS

splitter = CompactShareSplitter(TX_NAMESPACE, SHARE_VERSION_ZERO)
for tx in (b"first tx", b"second tx"):
    splitter.write_tx(tx)

shares, ranges = splitter.export(0)
assert splitter.count() == len(shares)
assert parse_compact_shares(shares, SUPPORTED_SHARE_VERSIONS) == [b"first tx", b"second tx"]
print(ranges[tx_key(b"first tx")])  # ShareRange(start=0, end=0)
```

`tx_key` is the SHA-256 digest of a transaction. The offset passed to
`export` is added to every share range. `export` may be called again after
more writes; it returns the updated shares each time. `parse_compact_shares`
raises `ShareError` if the first share does not start a sequence or a share
has a version not in the supported list.

## Lower-level pieces

- `dashares.share.Share`: a single share. It gives access to its namespace,
  info byte, version, sequence length and raw data; `new_share` checks that
  the data is exactly 512 bytes. `to_bytes_list` and `from_bytes_list`
  convert lists of shares.
- `dashares.builder.Builder`: builds one share incrementally; call `init()`
  before adding data. `new_empty_builder()` returns a builder meant for
  `import_raw_share`.
- `dashares.sequence.ShareSequence`, `compact_shares_needed` and
  `sparse_shares_needed`: work with whole sequences.
- `dashares.info_byte` and `dashares.reserved_bytes`: encode and parse the
  header fields.
- `dashares.utils`: varint delimiters (`marshal_delimited_tx`,
  `parse_delimiter`, `delim_len`) and `zero_pad_if_necessary`.
- `dashares.appconsts`: share sizes and other protocol constants.
- `dashares.logger.Logger`: a protocol for loggers with `debug`, `info` and
  `error` methods.
- `dashares.testfactory`: generates random transactions for tests.

## What it does not do

There is no splitter for sparse (blob) shares and no layout of a full data
square: shares for blobs can be read with `Share` and `ShareSequence` and
built one at a time with `Builder`, but not split automatically. The package
has no command-line interface, network code or storage.