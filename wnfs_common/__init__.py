"""In-memory block stores, BLAKE3 CIDs, lazy links, DAG-CBOR encoding, node metadata and block snapshots."""

__version__ = "0.1.0"

__all__ = [
    "blockstore",
    "cid",
    "encoding",
    "errors",
    "link",
    "metadata",
    "pathnodes",
    "snapshot",
    "utils",
]