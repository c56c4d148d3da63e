"""Find, in each sensor log, the reading closest to a given moment."""

from __future__ import annotations

import sys
import time
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from os import PathLike

from .records import (
    InvalidDateTimeError,
    RecordParseError,
    SensorRecord,
    ValueType,
    parse_date_time,
    parse_record,
    to_timestamp,
    validate_datetime,
)

_CHUNK = 255
_USAGE = (
    "Argumentos insuficientes\n"
    "Esperado: search dd/mm/yyyy hh:mm:ss arquivo.txt arquivo2.txt..."
)


@dataclass(frozen=True)
class Match:
    """The reading nearest to a target time and how far from it it lies."""

    record: SensorRecord
    difference: int


def _lines(handle: Iterable[str]) -> Iterator[str]:
    """Yield lines in pieces of at most 255 characters, without the newline."""
    for line in handle:
        while line:
            chunk, line = line[:_CHUNK], line[_CHUNK:]
            yield chunk.split("\n", 1)[0]


def _load(path: str | PathLike[str]) -> tuple[list[SensorRecord], list[str]]:
    records: list[SensorRecord] = []
    rejected: list[str] = []
    with open(path, encoding="utf-8", errors="replace", newline="\n") as handle:
        for line in _lines(handle):
            try:
                record = parse_record(line)
            except RecordParseError:
                rejected.append(line)
                continue
            if record.timestamp == 0:
                rejected.append(line)
                continue
            records.append(record)
    return records, rejected


def load_records(path: str | PathLike[str]) -> list[SensorRecord]:
    """Read the valid records of a log file; lines with timestamp 0 are dropped."""
    return _load(path)[0]


def find_closest(records: Sequence[SensorRecord], target: int) -> Match:
    """Binary-search records sorted by timestamp for the one nearest to target."""
    if not records:
        raise ValueError("no records to search")
    left, right = 0, len(records) - 1
    closest = 0
    best = abs(records[0].timestamp - target)
    while left <= right:
        mid = (left + right) // 2
        current = records[mid].timestamp
        diff = abs(current - target)
        if diff < best:
            best, closest = diff, mid
        if current == target:
            closest = mid
            break
        if current < target:
            left = mid + 1
        else:
            right = mid - 1
    return Match(records[closest], best)


def _value_text(record: SensorRecord) -> str:
    if record.type is ValueType.BOOLEAN:
        return "true" if record.value else "false"
    if record.type is ValueType.DOUBLE:
        return f"{record.value:.2f}"
    return str(record.value)


def format_match(match: Match, path: str | PathLike[str]) -> str:
    """Describe a match found in the given file."""
    record = match.record
    t = time.localtime(record.timestamp)
    when = (
        f"{t.tm_mday:02d}/{t.tm_mon:02d}/{t.tm_year:04d} "
        f"{t.tm_hour:02d}:{t.tm_min:02d}:{t.tm_sec:02d}"
    )
    return (
        f"\nSensor encontrado em: {when}\n"
        f"Nome: {record.name}\n"
        f"Tipo: {record.type.name}\n"
        f"Valor: {_value_text(record)}\n"
        f"No arquivo: {path}\n"
        f"Diferenca: {match.difference} segundos\n\n----------\n"
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Search each file given after the date and time for the closest reading."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 3:
        print(_USAGE, end="")
        return 1
    try:
        fields = parse_date_time(args[0], args[1])
    except ValueError:
        print("Erro na entrada de dados")
        return 1
    try:
        validate_datetime(*fields)
        target = to_timestamp(*fields)
    except InvalidDateTimeError as exc:
        print(exc)
        return 1

    for path in args[2:]:
        try:
            records, rejected = _load(path)
        except OSError:
            print(f"Erro ao abrir arquivo: {path}")
            continue
        for line in rejected:
            print(f"Erro ao processar linha: {line}")
        if not records:
            print("Nenhum registro válido encontrado no arquivo")
            continue
        print(format_match(find_closest(records, target), path), end="")
    return 0