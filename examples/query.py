"""Look up a docid or rowid in a dump written by `drr dump --parquet`."""
from __future__ import annotations

import sys
from pathlib import Path

import duckdb


def main() -> None:
    if len(sys.argv) < 3:
        print("Usage: python query.py <dump.parquet> <docid|rowid>")
        print("Example: python query.py dump.parquet 35001")
        sys.exit(1)

    dump = Path(sys.argv[1])
    key = sys.argv[2]

    con = duckdb.connect(":memory:")
    con.execute(f"CREATE VIEW dump AS SELECT * FROM '{dump}'")

    if key.isdigit():
        sql = "SELECT docid, rowid FROM dump WHERE docid = ?"
        params = [int(key)]
    else:
        sql = "SELECT docid, rowid FROM dump WHERE rowid = ? ORDER BY docid"
        params = [key]

    print(f"--- $R lookup: {key} ---\n")

    df = con.execute(sql, params).fetchdf()
    if df.empty:
        print("No matching entry.")
    else:
        for _, row in df.iterrows():
            print(f"d:{row['docid']} r:{row['rowid']}")


if __name__ == "__main__":
    main()
