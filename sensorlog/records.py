"""Sensor records: parsing, formatting, date validation and timestamps."""

from __future__ import annotations

import enum
import math
import random
import re
import time
from dataclasses import dataclass
from os import PathLike

_LINE_LIMIT = 255
_NAME_LIMIT = 15
_STRING_LIMIT = 15

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

_FLOAT_PREFIX = re.compile(
    r"[ \t\n\v\f\r]*[+-]?(?:"
    r"0[xX](?:[0-9a-fA-F]+(?:\.[0-9a-fA-F]*)?|\.[0-9a-fA-F]+)(?:[pP][+-]?\d+)?"
    r"|(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?"
    r"|[iI][nN][fF](?:[iI][nN][iI][tT][yY])?"
    r"|[nN][aA][nN](?:\([0-9A-Za-z_]*\))?"
    r")"
)
_INT_PREFIX = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")
_DATE = re.compile(r"\s*([+-]?\d+)/\s*([+-]?\d+)/\s*([+-]?\d+)")
_TIME = re.compile(r"\s*([+-]?\d+):\s*([+-]?\d+):\s*([+-]?\d+)")


class ValueType(enum.IntEnum):
    """Kind of value a sensor reports."""

    INTEGER = 0
    BOOLEAN = 1
    DOUBLE = 2
    STRING = 3


class InvalidDateTimeError(ValueError):
    """A date or time is out of range or cannot be converted."""


class RecordParseError(ValueError):
    """A line does not hold a sensor record."""


@dataclass(frozen=True)
class SensorRecord:
    """One reading: when, which sensor, and what it reported."""

    timestamp: int
    name: str
    type: ValueType
    value: int | bool | float | str

    def format(self) -> str:
        """Render the record as a line of the log format, without newline."""
        if self.type is ValueType.BOOLEAN:
            shown = "true" if self.value else "false"
        elif self.type is ValueType.DOUBLE:
            shown = f"{self.value:.2f}"
        else:
            shown = str(self.value)
        return f"{self.timestamp} {self.name} {shown}"


def _strtod(text: str) -> tuple[float, int]:
    """Parse the longest numeric prefix; return its value and where it ends."""
    match = _FLOAT_PREFIX.match(text)
    if match is None:
        return 0.0, 0
    literal = match.group().strip()
    unsigned = literal.lstrip("+-")
    if unsigned[:2].lower() == "0x":
        value = float.fromhex(literal)
    elif unsigned[:3].lower() == "nan":
        value = math.nan
    else:
        value = float(literal)
    return value, match.end()


def _atoi(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def detect_type(text: str) -> ValueType:
    """Decide which kind of value a textual reading holds."""
    if text in ("true", "false"):
        return ValueType.BOOLEAN
    _, end = _strtod(text)
    rest = text[end:]
    if rest == "" or rest.startswith("\n"):
        return ValueType.DOUBLE if "." in text else ValueType.INTEGER
    return ValueType.STRING


def parse_record(line: str) -> SensorRecord:
    """Parse a line of the form '<timestamp> <name> <value>'."""
    rest = line[:_LINE_LIMIT].lstrip(" ")
    if not rest:
        raise RecordParseError(f"missing timestamp: {line!r}")
    stamp_text, sep, rest = rest.partition(" ")
    rest = rest.lstrip(" ")
    if not sep or not rest:
        raise RecordParseError(f"missing sensor name: {line!r}")
    name_text, sep, value_text = rest.partition(" ")
    if not sep or not value_text:
        raise RecordParseError(f"missing value: {line!r}")

    kind = detect_type(value_text)
    value: int | bool | float | str
    if kind is ValueType.BOOLEAN:
        value = value_text == "true"
    elif kind is ValueType.INTEGER:
        value = _atoi(value_text)
    elif kind is ValueType.DOUBLE:
        value = _strtod(value_text)[0]
    else:
        value = value_text[:_STRING_LIMIT]
    return SensorRecord(_atoi(stamp_text), name_text[:_NAME_LIMIT], kind, value)


def _is_leap(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def validate_datetime(
    day: int, month: int, year: int, hour: int, minute: int, second: int
) -> None:
    """Raise InvalidDateTimeError unless the fields form a valid date and time."""
    if year > 9999:
        raise InvalidDateTimeError("Ano invalido.")
    if not 1 <= month <= 12:
        raise InvalidDateTimeError("Mes invalido.")
    if not 1 <= day <= 31:
        raise InvalidDateTimeError("Dia invalido.")
    if not 0 <= hour <= 23:
        raise InvalidDateTimeError("Hora invalida.")
    if not 0 <= minute <= 59:
        raise InvalidDateTimeError("Minuto invalido.")
    if not 0 <= second <= 59:
        raise InvalidDateTimeError("Segundo invalido.")
    limit = _DAYS_IN_MONTH[month - 1]
    if month == 2 and _is_leap(year):
        limit = 29
    if day > limit:
        raise InvalidDateTimeError("Dia invalido para o mes especificado.")


def parse_date_time(date_text: str, time_text: str) -> tuple[int, int, int, int, int, int]:
    """Read 'dd/mm/yyyy' and 'hh:mm:ss' into (day, month, year, hour, minute, second)."""
    date_match = _DATE.match(date_text)
    time_match = _TIME.match(time_text)
    if date_match is None or time_match is None:
        raise ValueError("Erro na entrada de dados")
    day, month, year = (int(g) for g in date_match.groups())
    hour, minute, second = (int(g) for g in time_match.groups())
    return day, month, year, hour, minute, second


def to_timestamp(
    day: int, month: int, year: int, hour: int, minute: int, second: int
) -> int:
    """Convert a validated local date and time to a Unix timestamp."""
    validate_datetime(day, month, year, hour, minute, second)
    try:
        return int(time.mktime((year, month, day, hour, minute, second, 0, 0, -1)))
    except (OverflowError, ValueError) as exc:
        raise InvalidDateTimeError("Data inválida. Tente novamente.") from exc


def random_timestamp(start: int, end: int, rng: random.Random | None = None) -> int:
    """Pick a timestamp between the start and end timestamps, both inclusive."""
    rng = rng if rng is not None else random.Random()
    return start + int(rng.random() * (end - start))


def count_lines(path: str | PathLike[str]) -> int:
    """Count the lines of a file as read in chunks of at most 255 characters."""
    with open(path, encoding="utf-8", errors="replace", newline="\n") as handle:
        return sum(math.ceil(len(line) / _LINE_LIMIT) for line in handle)