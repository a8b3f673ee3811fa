"""DRR Scan - chunked $R blob scanning."""
from .scanner import ChunkScanner, base_docid, find_docids, scan_records
from .sources import BlobSource, BytesBlob, FileBlob, RTable

__all__ = [
    "ChunkScanner",
    "scan_records",
    "find_docids",
    "base_docid",
    "BlobSource",
    "BytesBlob",
    "FileBlob",
    "RTable",
]
