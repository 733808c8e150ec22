import dataclasses
import json
from pathlib import Path

import click

from blf_core.records import record_to_row
from .engine import BlfFile

CANONICAL_JSON_KW = {"sort_keys": True, "separators": (",", ":"), "ensure_ascii": False}


def _echo_json(obj) -> None:
    click.echo(json.dumps(obj, **CANONICAL_JSON_KW))


def _fail(reason: str) -> None:
    click.echo(f"FATAL: {reason}")
    raise SystemExit(1)


def _header_info(blf: BlfFile) -> dict:
    header = dataclasses.asdict(blf.file_stats)
    start = blf.file_stats.measurement_start_time()
    last = blf.file_stats.last_object_datetime()
    header["measurement_start"] = start.isoformat() if start else None
    header["last_object_time"] = last.isoformat() if last else None
    return header


@click.group()
def main():
    pass


@main.command("info")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def info_cmd(path: Path):
    with path.open("rb") as f:
        blf = BlfFile.from_reader(f)
        if not blf.is_valid():
            _fail(f"{path} is not a valid BLF file")
        info = {
            "compressed": blf.is_compressed(),
            "header": _header_info(blf),
        }
        stream = blf.records()
        kinds: dict[str, int] = {}
        for record in stream:
            kind = type(record.payload).__name__
            kinds[kind] = kinds.get(kind, 0) + 1

    info["kinds"] = kinds
    info["scan_stats"] = stream.get_scan_stats()
    info["last_error"] = str(stream.last_error) if stream.last_error else None
    _echo_json(info)


@main.command("dump")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--limit", type=int, default=0, help="print at most N records")
def dump_cmd(path: Path, limit: int):
    remaining = limit if limit else None
    with path.open("rb") as f:
        blf = BlfFile.from_reader(f)
        if not blf.is_valid():
            _fail(f"{path} is not a valid BLF file")
        for record in blf.records():
            _echo_json(record_to_row(record))
            if remaining is not None:
                remaining -= 1
                if remaining <= 0:
                    break


if __name__ == "__main__":
    main()
