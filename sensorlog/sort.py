"""Sort a sensor log by time and split it into one file per sensor."""

from __future__ import annotations

import sys
from collections.abc import Iterable, Iterator, Sequence
from os import PathLike
from pathlib import Path

from .records import RecordParseError, SensorRecord, parse_record

MAX_SENSORS = 100
_CHUNK = 255


def _lines(handle: Iterable[str]) -> Iterator[str]:
    for line in handle:
        while line:
            chunk, line = line[:_CHUNK], line[_CHUNK:]
            yield chunk.split("\n", 1)[0]


def _read(path: str | PathLike[str]) -> tuple[list[SensorRecord], list[str]]:
    records: list[SensorRecord] = []
    rejected: list[str] = []
    with open(path, encoding="utf-8", errors="replace", newline="\n") as handle:
        for line in _lines(handle):
            try:
                records.append(parse_record(line))
            except RecordParseError:
                rejected.append(line)
    return records, rejected


def read_records(path: str | PathLike[str]) -> list[SensorRecord]:
    """Read every line of a log that parses as a record."""
    return _read(path)[0]


def sort_records(records: Iterable[SensorRecord]) -> list[SensorRecord]:
    """Return the records ordered by timestamp, keeping ties in their order."""
    return sorted(records, key=lambda record: record.timestamp)


def sensor_names(records: Iterable[SensorRecord]) -> list[str]:
    """Distinct sensor names in order of first appearance, at most 100."""
    return list(dict.fromkeys(record.name for record in records))[:MAX_SENSORS]


def write_records(path: str | PathLike[str], records: Iterable[SensorRecord]) -> None:
    """Write records to a file, one per line, replacing its contents."""
    with open(path, "w", encoding="utf-8", newline="\n") as handle:
        handle.writelines(f"{record.format()}\n" for record in records)


def _sort_file(
    path: str | PathLike[str], out_dir: str | PathLike[str] | None
) -> tuple[list[Path], list[str]]:
    records, rejected = _read(path)
    ordered = sort_records(records)
    write_records(path, ordered)
    target = Path(out_dir) if out_dir is not None else Path.cwd()
    written = []
    for name in sensor_names(records):
        sensor_path = target / f"{name}.txt"
        write_records(sensor_path, (r for r in ordered if r.name == name))
        written.append(sensor_path)
    return written, rejected


def sort_file(
    path: str | PathLike[str], out_dir: str | PathLike[str] | None = None
) -> list[Path]:
    """Sort a log in place and write each sensor's records to '<name>.txt'.

    Per-sensor files go to out_dir, or the current directory when it is None.
    Returns the paths of the per-sensor files.
    """
    return _sort_file(path, out_dir)[0]


def main(argv: Sequence[str] | None = None) -> int:
    """Sort the log named on the command line."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print("Argumentos insuficientes", end="")
        return 1
    try:
        _, rejected = _sort_file(args[0], None)
    except OSError:
        print("Erro ao abrir o arquivo")
        return 1
    for line in rejected:
        print(f"Erro ao processar linha: {line}")
    print("Arquivo ordenado com sucesso!", end="")
    return 0