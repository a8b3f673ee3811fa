from __future__ import annotations

import hashlib
from typing import Iterable, Iterator

from drr_core.errors import DrrError, MalformedRecord, SourceReadFailure
from drr_core.protocol import DEFAULT_CHUNK_SIZE, DOCIDS_PER_ROW, RAW_ROWID_LEN
from drr_core.rowid import decode

from .sources import BlobSource


def base_docid(row_no: int) -> int:
    """First docid stored in $R row ``row_no``."""
    return DOCIDS_PER_ROW * row_no + 1


class ChunkScanner:
    """Walks a blob in bounded chunks and decodes every packed rowid.

    - Chunks never split a record: chunk_size and start_offset must be
      multiples of the 14-byte record width.
    - Ordinals start at base_ordinal and increase by one per record.
    - records() is a one-shot generator.
    """

    def __init__(
        self,
        source: BlobSource,
        base_ordinal: int = 0,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        start_offset: int = 0,
    ):
        if chunk_size <= 0 or chunk_size % RAW_ROWID_LEN:
            raise ValueError(f"chunk_size must be a positive multiple of {RAW_ROWID_LEN}, got {chunk_size}")
        if start_offset < 0 or start_offset % RAW_ROWID_LEN:
            raise ValueError(f"start_offset must be a non-negative multiple of {RAW_ROWID_LEN}, got {start_offset}")

        self.source = source
        self.base_ordinal = base_ordinal
        self.chunk_size = chunk_size
        self.start_offset = start_offset
        self._started = False
        self._digest = hashlib.sha256()
        self.scan_stats = {
            "chunks": 0,
            "records": 0,
            "bytes": 0,
        }

    def _read(self, offset: int, want: int) -> bytes:
        try:
            chunk = self.source.read_chunk(offset, want)
        except DrrError:
            raise
        except Exception as e:
            raise SourceReadFailure(f"read at offset {offset} failed: {e}") from e

        chunk = bytes(chunk)
        if not chunk:
            raise SourceReadFailure(f"blob truncated at offset {offset}")
        # want never reaches past the end, so anything else is a torn read.
        if len(chunk) != want:
            raise SourceReadFailure(f"read at offset {offset} returned {len(chunk)} bytes, asked for {want}")
        return chunk

    def records(self) -> Iterator[tuple[int, str]]:
        if self._started:
            raise RuntimeError("scan already consumed; create a new ChunkScanner")
        self._started = True
        return self._walk()

    def _walk(self) -> Iterator[tuple[int, str]]:
        try:
            total = self.source.length()
        except DrrError:
            raise
        except Exception as e:
            raise SourceReadFailure(f"blob length unavailable: {e}") from e

        ordinal = self.base_ordinal
        offset = self.start_offset

        while offset < total:
            chunk = self._read(offset, min(self.chunk_size, total - offset))
            self.scan_stats["chunks"] += 1
            self.scan_stats["bytes"] += len(chunk)
            self._digest.update(chunk)

            pos = 0
            while pos < len(chunk):
                rec = chunk[pos:pos + RAW_ROWID_LEN]
                if len(rec) < RAW_ROWID_LEN:
                    raise MalformedRecord(
                        f"{len(rec)} trailing byte(s) at offset {offset + pos}, record width is {RAW_ROWID_LEN}"
                    )
                yield ordinal, decode(rec)
                self.scan_stats["records"] += 1
                ordinal += 1
                pos += RAW_ROWID_LEN

            # Advance by what was read, not by chunk_size.
            offset += len(chunk)

    def get_scan_stats(self) -> dict:
        stats = dict(self.scan_stats)
        stats["content_hash"] = self._digest.hexdigest()
        return stats


def scan_records(
    source: BlobSource,
    base_ordinal: int = 0,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    start_offset: int = 0,
) -> Iterator[tuple[int, str]]:
    """Yield (ordinal, rowid) pairs from ``source`` in blob order."""
    return ChunkScanner(source, base_ordinal, chunk_size, start_offset).records()


def find_docids(rows: Iterable[tuple[int, BlobSource]], rowid: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> list[int]:
    """Return every docid whose $R entry holds ``rowid``."""
    hits: list[int] = []
    for row_no, source in rows:
        for docid, rid in scan_records(source, base_docid(row_no), chunk_size):
            if rid == rowid:
                hits.append(docid)
    return hits
