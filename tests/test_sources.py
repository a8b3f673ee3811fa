import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq
import pytest

from drr_core.errors import SourceReadFailure
from drr_core.rowid import encode
from drr_scan.export import write_dump_parquet
from drr_scan.scanner import scan_records
from drr_scan.sources import FileBlob, RTable


def write_r_table(path, rows):
    table = pa.table(
        {
            "row_no": pa.array([r for r, _ in rows], type=pa.int64()),
            "data": pa.array([d for _, d in rows], type=pa.binary()),
        }
    )
    pq.write_table(table, path)
    return path


def test_file_blob_reads_chunks(tmp_path):
    p = tmp_path / "blob.bin"
    p.write_bytes(bytes(range(50)))
    with FileBlob(p) as blob:
        assert blob.length() == 50
        assert blob.read_chunk(0, 10) == bytes(range(10))
        assert blob.read_chunk(45, 10) == bytes(range(45, 50))
    assert blob._f is None


def test_file_blob_missing_file(tmp_path):
    blob = FileBlob(tmp_path / "nope.bin")
    with pytest.raises(SourceReadFailure):
        blob.length()
    with pytest.raises(SourceReadFailure):
        blob.read_chunk(0, 14)


def test_file_blob_scan(tmp_path):
    rids = ["AAAR3sAAEAAAACXAAA", "AAAR3sAAEAAAACXAAB", "AAAR3sAAEAAAACYAAA"]
    p = tmp_path / "blob.bin"
    p.write_bytes(b"".join(encode(r) for r in rids))
    with FileBlob(p) as blob:
        out = list(scan_records(blob, base_ordinal=1, chunk_size=28))
    assert out == [(1, rids[0]), (2, rids[1]), (3, rids[2])]


def test_r_table_rows(tmp_path):
    p = write_r_table(tmp_path / "r.parquet", [(2, b"\x02" * 14), (0, b"\x00" * 28), (1, b"")])
    table = RTable(p)
    assert table.row_numbers() == [0, 1, 2]
    assert table.last_row_no() == 2
    assert table.row(0).length() == 28
    assert [n for n, _ in table.rows()] == [0, 1, 2]
    with pytest.raises(SourceReadFailure, match=r"no \$R row 9"):
        table.row(9)


def test_r_table_null_data_warns(tmp_path):
    p = write_r_table(tmp_path / "r.parquet", [(0, None)])
    with pytest.warns(UserWarning, match="Null data"):
        table = RTable(p)
    assert table.row(0).length() == 0


def test_r_table_missing_column(tmp_path):
    p = tmp_path / "bad.parquet"
    pq.write_table(pa.table({"row_no": pa.array([0], type=pa.int64())}), p)
    with pytest.raises(SourceReadFailure, match="data"):
        RTable(p)


def test_r_table_not_parquet(tmp_path):
    p = tmp_path / "junk.parquet"
    p.write_bytes(b"not a parquet file")
    with pytest.raises(SourceReadFailure):
        RTable(p)


def test_write_dump_parquet(tmp_path):
    out = tmp_path / "out" / "dump.parquet"
    n = write_dump_parquet([(1, "AAAR3sAAEAAAACXAAA"), (2, "AAAR3sAAEAAAACXAAB")], out)
    assert n == 2
    df = pd.read_parquet(out)
    assert list(df.columns) == ["docid", "rowid"]
    assert df["docid"].tolist() == [1, 2]
    assert str(pq.read_schema(out).field("docid").type) == "int64"


def test_write_dump_parquet_empty(tmp_path):
    out = tmp_path / "dump.parquet"
    assert write_dump_parquet([], out) == 0
    assert not out.exists()


def test_r_table_null_row_no(tmp_path):
    p = write_r_table(tmp_path / "r.parquet", [(None, b"\x00" * 14)])
    with pytest.raises(SourceReadFailure, match="null row_no"):
        RTable(p)


def test_r_table_duplicate_row_no(tmp_path):
    p = write_r_table(tmp_path / "r.parquet", [(0, b"\x00" * 14), (0, b"\x01" * 14)])
    with pytest.raises(SourceReadFailure, match="duplicate row_no 0"):
        RTable(p)
