import json
from pathlib import Path

import pytest

SCHEMA_HEADER = (
    "table,column,column_type,type,default_value,"
    "is_index,is_nullable,is_option,is_primary_key,is_vec"
)


def schema_row(table, column, type, column_type, default="", flags="false,false,false,false,false"):
    return f"{table},{column},{column_type},{type},{default},{flags}"


def write_lines(path: Path, lines) -> Path:
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def write_schema(tmp_path):
    def _write(rows, name="db_schema.csv"):
        return write_lines(tmp_path / name, [SCHEMA_HEADER, *rows])

    return _write


@pytest.fixture
def write_mapping(tmp_path):
    def _write(pairs, name="event_mapping.csv", header="event,table"):
        return write_lines(tmp_path / name, [header, *[f"{e},{t}" for e, t in pairs]])

    return _write


@pytest.fixture
def write_events(tmp_path):
    def _write(documents, dirname="events"):
        d = tmp_path / dirname
        d.mkdir(exist_ok=True)
        for filename, events in documents.items():
            (d / filename).write_text(json.dumps(events), encoding="utf-8")
        return d

    return _write


@pytest.fixture
def deposit_sources(write_schema, write_events, write_mapping):
    """Schema t1 {id, amount}, one Deposit event with an amount field, mapped to t1."""
    schema = write_schema(
        [
            schema_row("t1", "id", "move_type", "address"),
            schema_row("t1", "amount", "move_type", "u64"),
        ]
    )
    events = write_events(
        {
            "pkg.event.json": [
                {
                    "package_name": "pkg",
                    "module_address": "0x1",
                    "module_name": "mod",
                    "name": "Deposit",
                    "fields": {"amount": "u64"},
                }
            ]
        }
    )
    mapping = write_mapping([("pkg::mod::Deposit", "t1")])
    return schema, events, mapping
