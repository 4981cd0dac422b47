"""
Deterministic identifiers for graph elements.

Ids look like `page:3fa2c19b0e`: a readable kind prefix followed by a
fixed-width hash of the semantic key. There is no counter and no
dependence on input order, so rebuilding from the same entries yields the
same ids and deep links stay valid across rebuilds.

With a 10 hex digit (40 bit) hash the chance of any collision among n keys
of one kind is about n**2 / 2**41, i.e. ~5e-5 for 10,000 pages.
"""

import hashlib

HASH_HEX_DIGITS = 10

# Readable prefixes; unknown kinds fall back to their own value.
KIND_PREFIXES = {
    "site": "site",
    "section": "section",
    "path_segment": "path",
    "page": "page",
    "image": "img",
    "category": "cat",
    "date": "date",
    "asset_host": "host",
    "type": "type",
}


def short_hash(value: str, digits: int = HASH_HEX_DIGITS) -> str:
    """Fixed-width hex digest of a string."""
    digest = hashlib.blake2b(value.encode("utf-8"), digest_size=8).hexdigest()
    return digest[:digits]


def kind_prefix(kind: str) -> str:
    return KIND_PREFIXES.get(str(kind), str(kind))


def assign_id(kind: str, key: str) -> str:
    """
    Map (kind, key) to a stable short identifier.

    The kind participates in the hash as well as the prefix, so the same
    key under two kinds never shares a digest.
    """
    kind = str(kind)
    return f"{kind_prefix(kind)}:{short_hash(kind + chr(0) + key)}"


def edge_id(kind: str, source: str, target: str) -> str:
    """Identifier for the edge (kind, source, target)."""
    kind = str(kind)
    return f"e:{kind}:{short_hash(chr(0).join((kind, source, target)))}"
