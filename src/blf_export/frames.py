from __future__ import annotations

from pathlib import Path
from typing import Iterable

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

from blf_core.records import ObjectRecord, record_to_row
from blf_decode.engine import BlfFile

RECORDS_SCHEMA = pa.schema(
    [
        ("seq", pa.int64()),
        ("object_type", pa.int32()),
        ("object_size", pa.int64()),
        ("kind", pa.string()),
        ("timestamp_ns", pa.int64()),
        ("channel", pa.int32()),
        ("can_id", pa.int64()),
        ("dlc", pa.int32()),
        ("data", pa.string()),
        ("text", pa.string()),
    ]
)


def records_to_frame(records: Iterable[ObjectRecord]) -> pd.DataFrame:
    """Flatten decoded records into one row each, in stream order."""
    rows: list[dict] = []
    for seq, record in enumerate(records):
        row = record_to_row(record)
        row["seq"] = seq
        rows.append(row)
    # object dtype keeps nanosecond timestamps as exact ints next to nulls
    return pd.DataFrame(rows, columns=RECORDS_SCHEMA.names, dtype=object)


def export_records(blf: BlfFile, out_path: Path) -> dict:
    """Write out_path/records.parquet for a BLF file. Returns the stream's scan stats."""
    stream = blf.records()
    df = records_to_frame(stream)

    out_path = Path(out_path)
    out_path.mkdir(parents=True, exist_ok=True)

    table = pa.Table.from_pandas(df, schema=RECORDS_SCHEMA, preserve_index=False)
    pq.write_table(table, out_path / "records.parquet")

    stats = stream.get_scan_stats()
    stats["last_error"] = str(stream.last_error) if stream.last_error else None
    return stats
