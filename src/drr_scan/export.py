from __future__ import annotations

from pathlib import Path
from typing import Iterable

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

DUMP_SCHEMA = pa.schema(
    [
        ("docid", pa.int64()),
        ("rowid", pa.string()),
    ]
)


def write_dump_parquet(pairs: Iterable[tuple[int, str]], out_path: Path) -> int:
    """Write (docid, rowid) pairs to ``out_path``. Returns the row count."""
    df = pd.DataFrame(list(pairs), columns=["docid", "rowid"])
    if df.empty:
        return 0

    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    table = pa.Table.from_pandas(df, schema=DUMP_SCHEMA, preserve_index=False)
    pq.write_table(table, out_path)
    return len(df)
