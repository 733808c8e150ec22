"""BLF Export - Decode a BLF file into parquet."""
from __future__ import annotations

from pathlib import Path

import click

from blf_decode.engine import BlfFile
from blf_export.frames import export_records


def export_file(path: Path, out_path: Path) -> dict:
    """Decode one BLF file into out_path/records.parquet."""
    print(f"Decoding BLF: {path}")

    with open(path, "rb") as f:
        blf = BlfFile.from_reader(f)
        if not blf.is_valid():
            raise ValueError(f"{path} is not a valid BLF file")
        stats = export_records(blf, out_path)

    print(f"PASS: Records written to {out_path / 'records.parquet'}")
    print(f"  Records: {stats['records']}")
    print(f"  Containers: {stats['containers']}")
    print(f"  Skipped bytes: {stats['skipped']}")
    if stats["last_error"]:
        print(f"  Stopped early: {stats['last_error']}")
    return stats


@click.command()
@click.argument("blf", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("out", type=click.Path(path_type=Path))
def main(blf: Path, out: Path) -> None:
    """Decode a BLF file into parquet."""
    try:
        export_file(blf, out)
    except Exception as e:
        # Fail closed, with a single-line reason.
        print(f"FATAL: {e}")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
