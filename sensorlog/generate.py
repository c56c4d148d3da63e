"""Generate random sensor logs for testing."""

from __future__ import annotations

import random
import re
import sys
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

from .records import (
    InvalidDateTimeError,
    SensorRecord,
    ValueType,
    parse_date_time,
    random_timestamp,
    to_timestamp,
    validate_datetime,
)

CHARSET = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789@&$?"
STRING_LENGTH = 15
RECORDS_PER_SENSOR = 2000
OUTPUT_FILE = "sensores.txt"

_SPEC = re.compile(r"([^-]{1,15})-\s*([+-]?\d+)")


@dataclass(frozen=True)
class SensorSpec:
    """A sensor to generate: its name and the numeric code of its value type."""

    name: str
    type: int


def parse_sensor_spec(text: str) -> SensorSpec:
    """Parse '<name>-<type>' where the name has 1 to 15 characters."""
    match = _SPEC.match(text)
    if match is None:
        raise ValueError(f"Falha ao registrar os sensores: {text!r}")
    return SensorSpec(match.group(1), int(match.group(2)))


def _random_value(kind: ValueType, rng: random.Random) -> int | bool | float | str:
    if kind is ValueType.INTEGER:
        return rng.randrange(99999)
    if kind is ValueType.BOOLEAN:
        return rng.randrange(2) == 1
    if kind is ValueType.DOUBLE:
        return rng.random() * 99999
    return "".join(rng.choice(CHARSET) for _ in range(STRING_LENGTH))


def generate_records(
    specs: Iterable[SensorSpec],
    start: int,
    end: int,
    count: int = RECORDS_PER_SENSOR,
    rng: random.Random | None = None,
) -> Iterator[SensorRecord]:
    """Yield count random records per sensor with timestamps between start and end."""
    rng = rng if rng is not None else random.Random()
    for spec in specs:
        try:
            kind = ValueType(spec.type)
        except ValueError:
            raise ValueError("Erro ao cadastrar sensor: tipo invalido") from None
        for _ in range(count):
            stamp = random_timestamp(start, end, rng)
            yield SensorRecord(stamp, spec.name, kind, _random_value(kind, rng))


def main(argv: Sequence[str] | None = None) -> int:
    """Append random records for the given sensors to sensores.txt."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 5:
        print("Erro: Argumentos insuficientes", end="")
        print(
            "Esperado: DD/MM/AAAA 00:00:00 DD/MM/AAAA 00:00:00 "
            "sensor1-tipo sensor2-tipo sensor[...]-tipo...",
            end="",
        )
        return 0
    try:
        start_fields = parse_date_time(args[0], args[1])
        end_fields = parse_date_time(args[2], args[3])
    except ValueError:
        print("Erro na entrada de dados", end="")
        return 1
    try:
        validate_datetime(*start_fields)
        validate_datetime(*end_fields)
    except InvalidDateTimeError as exc:
        print(exc)
        return 1
    print("Datas Cadastrados com sucesso")

    try:
        specs = [parse_sensor_spec(text) for text in args[4:]]
    except ValueError:
        print("Falha ao registrar os sensores", end="")
        return 1
    try:
        start = to_timestamp(*start_fields)
        end = to_timestamp(*end_fields)
    except InvalidDateTimeError as exc:
        print(exc)
        return 1

    try:
        with open(OUTPUT_FILE, "a", encoding="utf-8", newline="\n") as handle:
            for record in generate_records(specs, start, end):
                handle.write(f"{record.format()}\n")
    except OSError:
        print(f"Erro ao abrir ou criar o arquivo {OUTPUT_FILE}")
        return 1
    except ValueError as exc:
        print(exc, end="")
        return 0
    print("\nfinalizando", end="")
    return 0