# sensorlog

Tools for plain-text sensor logs. They generate sample data, sort a log by
time, split a log into one file per sensor, and find the reading closest to a
given moment.

## Log format

Each line holds one reading:

```
<unix timestamp> <sensor name> <value>
```

The value's type is inferred from its text:

| Text                          | Type    |
|-------------------------------|---------|
| `true` / `false`              | BOOLEAN |
| a number without a `.`        | INTEGER |
| a number with a `.`           | DOUBLE  |
| anything else                 | STRING  |

Doubles are written with two decimal places. Sensor names and string values
are cut to 15 characters. A line is read in pieces of at most 255 characters.

## Installation

```
pip install .
```

## Commands

The commands print their messages in Portuguese, for example
`Erro na entrada de dados` when a date or time cannot be read.

### Generate sample data

```
sensorlog-generate DD/MM/YYYY HH:MM:SS DD/MM/YYYY HH:MM:SS name-type [name-type ...]
```

The first date and time start the range and the second pair ends it. Both are
checked before use. Each `name-type` pair names a sensor (1 to 15 characters,
no `-`) and its value type: `0` integer, `1` boolean, `2` double, `3` string.
For every sensor, 2000 readings with random timestamps inside the range are
appended to `sensores.txt` in the current directory. Integers lie in
0–99998, doubles in 0–99999, and strings are 15 random characters drawn from
letters, digits and `@&$?`.

```
sensorlog-generate 01/01/2024 00:00:00 31/01/2024 23:59:59 temp-2 door-1 count-0 tag-3
```

### Sort and split a log

```
sensorlog-sort sensores.txt
```

The command rewrites the file with its readings in ascending timestamp order.
Readings with equal timestamps keep their order. It then writes one file per
sensor, `<name>.txt`, in the current directory. Each holds that sensor's
readings in the same order. At most 100 distinct sensors are split out, taken
in order of first appearance. Lines that do not parse are reported and left
out.

### Find the closest reading

```
sensorlog-search DD/MM/YYYY HH:MM:SS file.txt [file2.txt ...]
```

The date and time are taken as local time. For each file, the command reports
the reading closest to that moment: its date, sensor name, type, value, and
the difference in seconds. The search is binary, so files must be sorted by
timestamp; run `sensorlog-sort` first. Lines that do not parse, or whose
timestamp is 0, are reported and skipped. A file that cannot be opened is
reported and the next one is searched.

```
sensorlog-search 15/01/2024 12:00:00 temp.txt door.txt
```

Dates are checked before use. The month must be 1–12 and the day must exist
in that month, with leap years counted. Hours must be 0–23, minutes and
seconds 0–59, and the year at most 9999.

## Library use

```python
from sensorlog.records import parse_record, to_timestamp
from sensorlog.search import find_closest, format_match, load_records

records = load_records("temp.txt")
target = to_timestamp(15, 1, 2024, 12, 0, 0)
match = find_closest(records, target)
print(match.record.name, match.difference)
print(format_match(match, "temp.txt"))
```

### `sensorlog.records`

- `ValueType`: `INTEGER`, `BOOLEAN`, `DOUBLE`, `STRING`.
- `SensorRecord(timestamp, name, type, value)`: a frozen dataclass.
  `format()` renders it as a log line without the newline.
- `detect_type(text)` returns the `ValueType` of a textual value.
- `parse_record(line)` returns a `SensorRecord`. It raises
  `RecordParseError` when the timestamp, name or value is missing.
- `validate_datetime(day, month, year, hour, minute, second)` raises
  `InvalidDateTimeError` for out-of-range fields.
- `parse_date_time(date_text, time_text)` reads `dd/mm/yyyy` and `hh:mm:ss`
  into a tuple of six integers. It raises `ValueError` when it cannot.
- `to_timestamp(...)` converts a local date and time to a Unix timestamp.
- `random_timestamp(start, end, rng=None)` returns a timestamp between
  `start` and `end`.
- `count_lines(path)` counts a file's lines as read in 255-character pieces.

### `sensorlog.search`

- `load_records(path)` returns the valid records of a file.
- `find_closest(records, target)` returns a `Match(record, difference)`. It
  raises `ValueError` for an empty sequence.
- `format_match(match, path)` returns the text the command prints.
- `main(argv=None)` runs the command.

### `sensorlog.sort`

- `read_records(path)` returns every parsable record.
- `sort_records(records)` orders records by timestamp; the sort is stable.
- `sensor_names(records)` returns up to 100 distinct names in order of first
  appearance.
- `write_records(path, records)` writes records, one per line, replacing the
  file's contents.
- `sort_file(path, out_dir=None)` sorts the file in place. It writes
  per-sensor files to `out_dir`, or to the current directory, and returns
  their paths.
- `main(argv=None)` runs the command.

### `sensorlog.generate`

- `SensorSpec(name, type)` and `parse_sensor_spec(text)` handle `name-type`
  arguments.
- `generate_records(specs, start, end, count=2000, rng=None)` yields random
  records. It raises `ValueError` for a type code outside 0–3.
- `main(argv=None)` runs the command.

## Limitations

- The search command assumes its input files are already sorted. It does not
  sort them itself.
- The generator's output file (`sensores.txt`) and record count (2000 per
  sensor) are fixed on the command line. Use `generate_records` to choose
  them.

## Tests

```
pip install .[test]
pytest
```