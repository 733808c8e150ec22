"""Query exported records - list the frames seen for one CAN id."""
from __future__ import annotations

import sys
from pathlib import Path

import duckdb


def main() -> None:
    if len(sys.argv) < 3:
        print("Usage: python query.py <export_dir> <can_id>")
        print("Example: python query.py out/ 0x123")
        sys.exit(1)

    export_dir = Path(sys.argv[1])
    can_id = int(sys.argv[2], 0)

    con = duckdb.connect(":memory:")
    con.execute(f"CREATE VIEW records AS SELECT * FROM '{export_dir}/records.parquet'")

    sql = """
    SELECT
        seq,
        timestamp_ns,
        channel,
        dlc,
        data
    FROM records
    WHERE kind = 'CanMessage'
      AND can_id = ?
    ORDER BY seq
    """

    print(f"--- CAN id 0x{can_id:X} ---\n")

    df = con.execute(sql, [can_id]).fetchdf()
    if df.empty:
        print("No frames found.")
    else:
        for _, row in df.iterrows():
            print(f"#{row['seq']} t={row['timestamp_ns']}ns ch={row['channel']} dlc={row['dlc']} data={row['data']}")


if __name__ == "__main__":
    main()
