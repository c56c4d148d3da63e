import random

import pytest

from sensorlog.generate import (
    CHARSET,
    OUTPUT_FILE,
    RECORDS_PER_SENSOR,
    STRING_LENGTH,
    SensorSpec,
    generate_records,
    main,
    parse_sensor_spec,
)
from sensorlog.records import ValueType, parse_record, to_timestamp

SPECS = [
    SensorSpec("i", 0),
    SensorSpec("b", 1),
    SensorSpec("d", 2),
    SensorSpec("s", 3),
]


def test_parse_sensor_spec():
    assert parse_sensor_spec("temp-0") == SensorSpec("temp", 0)
    assert parse_sensor_spec("a-3") == SensorSpec("a", 3)


@pytest.mark.parametrize("text", ["temp", "-1", "abcdefghijklmnopq-1", "temp-x"])
def test_parse_sensor_spec_invalid(text):
    with pytest.raises(ValueError):
        parse_sensor_spec(text)


def test_generate_records_ranges():
    records = list(generate_records(SPECS, 1000, 2000, 25, random.Random(7)))
    assert len(records) == 100
    assert all(1000 <= r.timestamp <= 2000 for r in records)
    by_name = {name: [r for r in records if r.name == name] for name in "ibds"}
    assert all(len(group) == 25 for group in by_name.values())
    assert all(isinstance(r.value, int) and 0 <= r.value < 99999 for r in by_name["i"])
    assert all(isinstance(r.value, bool) for r in by_name["b"])
    assert all(0 <= r.value <= 99999 for r in by_name["d"])
    for r in by_name["s"]:
        assert len(r.value) == STRING_LENGTH
        assert set(r.value) <= set(CHARSET)
    assert [r.type for r in records[::25]] == list(ValueType)


def test_generate_records_deterministic():
    first = list(generate_records(SPECS, 0, 500, 10, random.Random(3)))
    second = list(generate_records(SPECS, 0, 500, 10, random.Random(3)))
    assert first == second


def test_generate_records_invalid_type():
    with pytest.raises(ValueError):
        list(generate_records([SensorSpec("x", 7)], 0, 10, 5, random.Random(1)))


def test_generated_records_parse_back():
    specs = SPECS[:3]
    for record in generate_records(specs, 1000, 2000, 20, random.Random(5)):
        parsed = parse_record(record.format())
        assert parsed.type is record.type
        assert parsed.name == record.name
        assert parsed.timestamp == record.timestamp


def test_main_writes_and_appends(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    args = ["01/01/2024", "00:00:00", "02/01/2024", "00:00:00", "temp-0", "flag-1"]
    assert main(args) == 0
    assert "finalizando" in capsys.readouterr().out
    lines = (tmp_path / OUTPUT_FILE).read_text().splitlines()
    assert len(lines) == 2 * RECORDS_PER_SENSOR
    records = [parse_record(line) for line in lines]
    assert {r.name for r in records} == {"temp", "flag"}
    low = to_timestamp(1, 1, 2024, 0, 0, 0)
    high = to_timestamp(2, 1, 2024, 0, 0, 0)
    assert all(low <= r.timestamp <= high for r in records)
    assert main(args) == 0
    assert len((tmp_path / OUTPUT_FILE).read_text().splitlines()) == 4 * RECORDS_PER_SENSOR


def test_main_too_few_arguments(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["01/01/2024", "00:00:00"]) == 0
    assert "Argumentos insuficientes" in capsys.readouterr().out
    assert not (tmp_path / OUTPUT_FILE).exists()


def test_main_invalid_day(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["31/02/2024", "00:00:00", "01/03/2024", "00:00:00", "t-0"]) == 1
    assert "Dia invalido para o mes especificado." in capsys.readouterr().out


def test_main_bad_spec(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["01/01/2024", "00:00:00", "02/01/2024", "00:00:00", "nodash"]) == 1
    assert "Falha ao registrar os sensores" in capsys.readouterr().out


def test_main_bad_type(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["01/01/2024", "00:00:00", "02/01/2024", "00:00:00", "x-9"]) == 0
    assert "Erro ao cadastrar sensor: tipo invalido" in capsys.readouterr().out