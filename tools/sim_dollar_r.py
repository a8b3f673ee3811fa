"""Generate a synthetic $R table export for demos and tests.

Rows hold DOCIDS_PER_ROW packed rowids each; the last row holds the rest.
A truth file (docid -> rowid, one JSON object per line) is written beside
the parquet so dumps can be checked end to end.
"""
import json
import random
import sys
from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq

from drr_core.protocol import ALPHABET, DOCIDS_PER_ROW, ROWID_LEN
from drr_core.rowid import encode


def random_rowid(rng: random.Random) -> str:
    return "".join(rng.choice(ALPHABET) for _ in range(ROWID_LEN))


def generate_table(out_dir, docs: int, per_row: int = DOCIDS_PER_ROW, seed: int = 0) -> Path:
    rng = random.Random(seed)
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)

    row_nos: list[int] = []
    blobs: list[bytes] = []
    truth: list[dict] = []

    docid = 1
    row_no = 0
    remaining = docs
    while remaining > 0:
        n = min(per_row, remaining)
        buf = bytearray()
        for _ in range(n):
            rid = random_rowid(rng)
            buf += encode(rid)
            truth.append({"docid": docid, "rowid": rid, "row_no": row_no})
            docid += 1
        row_nos.append(row_no)
        blobs.append(bytes(buf))
        remaining -= n
        row_no += 1
        # Docids of the next row restart at per_row boundaries.
        docid = per_row * row_no + 1

    table = pa.table(
        {
            "row_no": pa.array(row_nos, type=pa.int64()),
            "data": pa.array(blobs, type=pa.binary()),
        }
    )
    pq.write_table(table, out / "dr_r.parquet")

    with open(out / "truth.jsonl", "w", encoding="utf-8") as f:
        for rec in truth:
            f.write(json.dumps(rec, sort_keys=True, separators=(",", ":")) + "\n")

    print(f"GENERATED: {out / 'dr_r.parquet'} ({len(row_nos)} rows, {docs} docids)")
    return out


if __name__ == "__main__":
    # Usage:
    #   python tools/sim_dollar_r.py OUT_DIR DOCS [--per-row N] [--seed N]
    args = [a for a in sys.argv[1:] if a]

    def pop_int(arg_list: list[str], flag: str, default: int) -> tuple[int, list[str]]:
        """Remove an integer option from an argv-style list."""
        if flag not in arg_list:
            return default, arg_list
        i = arg_list.index(flag)
        if i + 1 >= len(arg_list):
            raise SystemExit(f"{flag} requires a value")
        return int(arg_list[i + 1]), arg_list[:i] + arg_list[i + 2:]

    per_row, args = pop_int(args, "--per-row", DOCIDS_PER_ROW)
    seed, args = pop_int(args, "--seed", 0)

    out = args[0] if len(args) > 0 else "dollar_r_demo"
    docs = int(args[1]) if len(args) > 1 else 100
    generate_table(out, docs, per_row=per_row, seed=seed)
