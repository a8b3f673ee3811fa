"""Blob sources the scanner can walk.

All sources expose the same two calls: ``length()`` and
``read_chunk(offset, max_length)``. Offsets are 0-based byte offsets.
"""
from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Iterator, Protocol
from warnings import warn

import pyarrow.parquet as pq

from drr_core.errors import SourceReadFailure


class BlobSource(Protocol):
    def length(self) -> int: ...

    def read_chunk(self, offset: int, max_length: int) -> bytes: ...


class BytesBlob:
    """In-memory blob."""

    def __init__(self, data: bytes):
        self.data = bytes(data)

    def length(self) -> int:
        return len(self.data)

    def read_chunk(self, offset: int, max_length: int) -> bytes:
        return self.data[offset:offset + max_length]


class FileBlob:
    """Raw binary file on disk, e.g. a BLOB spooled out of the database."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._f: BinaryIO | None = None

    def _handle(self) -> BinaryIO:
        if self._f is None:
            try:
                self._f = open(self.path, "rb")
            except OSError as e:
                raise SourceReadFailure(f"{self.path}: {e.strerror}") from e
        return self._f

    def length(self) -> int:
        try:
            return self.path.stat().st_size
        except OSError as e:
            raise SourceReadFailure(f"{self.path}: {e.strerror}") from e

    def read_chunk(self, offset: int, max_length: int) -> bytes:
        f = self._handle()
        try:
            f.seek(offset)
            return f.read(max_length)
        except OSError as e:
            raise SourceReadFailure(f"{self.path} at offset {offset}: {e.strerror}") from e

    def close(self) -> None:
        if self._f is not None:
            self._f.close()
            self._f = None

    def __enter__(self) -> FileBlob:
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class RTable:
    """Parquet export of a $R table: one ``row_no`` and one ``data`` blob per row."""

    COLUMNS = ("row_no", "data")

    def __init__(self, path: Path):
        self.path = Path(path)
        try:
            table = pq.read_table(self.path)
        except (OSError, ValueError) as e:
            raise SourceReadFailure(f"{self.path}: {e}") from e

        missing = [c for c in self.COLUMNS if c not in table.column_names]
        if missing:
            raise SourceReadFailure(f"{self.path}: missing column(s) {', '.join(missing)}")

        self._rows: dict[int, bytes] = {}
        for row_no, data in zip(table.column("row_no").to_pylist(), table.column("data").to_pylist()):
            if row_no is None:
                raise SourceReadFailure(f"{self.path}: null row_no")
            row_no = int(row_no)
            if row_no in self._rows:
                raise SourceReadFailure(f"{self.path}: duplicate row_no {row_no}")
            if data is None:
                warn(f"Null data in $R row {row_no}. Treating as empty.")
                data = b""
            self._rows[row_no] = bytes(data)

    def row_numbers(self) -> list[int]:
        return sorted(self._rows)

    def last_row_no(self) -> int | None:
        return max(self._rows) if self._rows else None

    def row(self, row_no: int) -> BytesBlob:
        if row_no not in self._rows:
            raise SourceReadFailure(f"no $R row {row_no} in {self.path}")
        return BytesBlob(self._rows[row_no])

    def rows(self) -> Iterator[tuple[int, BytesBlob]]:
        for row_no in self.row_numbers():
            yield row_no, BytesBlob(self._rows[row_no])
