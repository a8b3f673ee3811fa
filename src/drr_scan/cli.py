"""DRR Scan - dump and query $R rowid blobs."""
from __future__ import annotations

from pathlib import Path
from typing import Iterator

import click

from drr_core.protocol import DEFAULT_CHUNK_SIZE
from drr_core.rowid import decode_hex, encode, encode_hex
from drr_scan.export import write_dump_parquet
from drr_scan.scanner import ChunkScanner, base_docid, find_docids
from drr_scan.sources import FileBlob, RTable


def _fatal(e: Exception) -> None:
    # Fail closed, with a single-line reason.
    click.echo(f"FATAL: {e}")
    raise SystemExit(1)


def _row_scans(
    source: Path,
    row_no: int | None,
    all_rows: bool,
    chunk_size: int,
) -> Iterator[ChunkScanner]:
    table = RTable(source)
    if all_rows:
        numbers = table.row_numbers()
    elif row_no is not None:
        numbers = [row_no]
    else:
        last = table.last_row_no()
        numbers = [] if last is None else [last]

    for n in numbers:
        yield ChunkScanner(table.row(n), base_docid(n), chunk_size)


def dump_source(
    source: Path,
    raw: bool = False,
    row_no: int | None = None,
    all_rows: bool = False,
    base: int = 1,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    parquet: Path | None = None,
) -> dict:
    """Print ``d:<docid> r:<rowid>`` for every record and return scan totals."""
    totals = {"rows": 0, "records": 0, "bytes": 0}
    collected: list[tuple[int, str]] = []

    if raw:
        blob = FileBlob(source)
        scans: Iterator[ChunkScanner] = iter([ChunkScanner(blob, base, chunk_size)])
    else:
        blob = None
        scans = _row_scans(source, row_no, all_rows, chunk_size)

    try:
        for scanner in scans:
            for docid, rowid in scanner.records():
                click.echo(f"d:{docid} r:{rowid}")
                if parquet is not None:
                    collected.append((docid, rowid))
            stats = scanner.get_scan_stats()
            totals["rows"] += 1
            totals["records"] += stats["records"]
            totals["bytes"] += stats["bytes"]
    finally:
        if blob is not None:
            blob.close()

    if parquet is not None:
        totals["parquet_rows"] = write_dump_parquet(collected, parquet)
    return totals


@click.group()
def main() -> None:
    """Inspect rowids stored in Oracle Text $R tables."""


@main.command("decode")
@click.argument("hex_record")
def decode_cmd(hex_record: str) -> None:
    """Decode a 28-character hex record into its rowid."""
    try:
        click.echo(decode_hex(hex_record.strip()))
    except Exception as e:
        _fatal(e)


@main.command("encode")
@click.argument("rowid")
def encode_cmd(rowid: str) -> None:
    """Encode an 18-character rowid into its hex record."""
    try:
        click.echo(encode_hex(rowid))
    except Exception as e:
        _fatal(e)


@main.command("dump")
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--raw", is_flag=True, help="SOURCE is a raw blob file, not a $R parquet export")
@click.option("--row-no", type=int, default=None, help="$R row to dump (default: last row)")
@click.option("--all-rows", is_flag=True, help="Dump every $R row in row_no order")
@click.option("--base-docid", type=int, default=1, show_default=True, help="First docid for --raw blobs")
@click.option(
    "--chunk-size",
    type=int,
    default=DEFAULT_CHUNK_SIZE,
    show_default=True,
    envvar="DRR_CHUNK_SIZE",
    help="Bytes per blob read; must be a multiple of 14",
)
@click.option("--parquet", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Also write docid/rowid pairs to this parquet file")
def dump_cmd(
    source: Path,
    raw: bool,
    row_no: int | None,
    all_rows: bool,
    base_docid: int,
    chunk_size: int,
    parquet: Path | None,
) -> None:
    """Print every docid/rowid pair stored in SOURCE."""
    if raw and (row_no is not None or all_rows):
        raise click.UsageError("--row-no and --all-rows apply to $R parquet exports only")
    if row_no is not None and all_rows:
        raise click.UsageError("--row-no and --all-rows are mutually exclusive")

    try:
        totals = dump_source(source, raw, row_no, all_rows, base_docid, chunk_size, parquet)
    except Exception as e:
        _fatal(e)

    click.echo(f"PASS: {totals['records']} records from {totals['rows']} row(s), {totals['bytes']} bytes", err=True)


@main.command("locate")
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("rowid")
@click.option("--raw", is_flag=True, help="SOURCE is a raw blob file, not a $R parquet export")
@click.option("--base-docid", type=int, default=1, show_default=True, help="First docid for --raw blobs")
@click.option("--chunk-size", type=int, default=DEFAULT_CHUNK_SIZE, show_default=True, envvar="DRR_CHUNK_SIZE")
def locate_cmd(source: Path, rowid: str, raw: bool, base_docid: int, chunk_size: int) -> None:
    """Print the docid(s) that map to ROWID."""
    try:
        encode(rowid)
        if raw:
            with FileBlob(source) as blob:
                hits = [
                    docid
                    for docid, rid in ChunkScanner(blob, base_docid, chunk_size).records()
                    if rid == rowid
                ]
        else:
            hits = find_docids(RTable(source).rows(), rowid, chunk_size)
    except Exception as e:
        _fatal(e)

    if not hits:
        click.echo(f"NOT FOUND: {rowid}", err=True)
        raise SystemExit(1)
    for docid in hits:
        click.echo(str(docid))


if __name__ == "__main__":
    main()
