import pytest
import yaml

from indexforge.errors import ParseError, SourceIOError
from indexforge.events import load_event_definitions_from_dir
from indexforge.mapping import load_event_table_mappings_from_csv
from indexforge.processor import (
    ColumnTarget,
    EventMapping,
    config_to_dict,
    dumps_processor_config,
    generate_processor_config,
    load_processor_config_yaml,
    loads_processor_config,
    save_processor_config_yaml,
)
from indexforge.schema import load_db_schema_from_csv

from conftest import schema_row


@pytest.fixture
def generated(deposit_sources, write_schema):
    _, events_dir, mapping_path = deposit_sources
    schema_path = write_schema(
        [
            schema_row("t1", "id", "move_type", "address", "0x1"),
            schema_row("t1", "amount", "move_type", "u64", "42"),
            schema_row("t1", "active", "move_type", "bool", "yes"),
            schema_row("t1", "seq", "event_metadata", "sequence_number"),
            schema_row("t1", "version", "transaction_metadata", "version"),
        ],
        name="rich_schema.csv",
    )
    return generate_processor_config(
        "testnet",
        7,
        load_event_definitions_from_dir(events_dir),
        load_db_schema_from_csv(schema_path),
        load_event_table_mappings_from_csv(mapping_path),
    ).config


def test_round_trip_is_lossless(generated):
    assert loads_processor_config(dumps_processor_config(generated)) == generated


def test_round_trip_through_a_file(tmp_path, generated):
    path = tmp_path / "out" / "processor_config.yaml"
    save_processor_config_yaml(path, generated)

    assert load_processor_config_yaml(path) == generated


def test_hand_edited_fields_round_trip(generated):
    generated.common_config.starting_version_override = 99
    generated.custom_config.payload = {"note": "manual", "limit": 3}
    generated.custom_config.events["0x1::mod::Manual"] = EventMapping(
        constant_values=[1, "x", True],
        event_fields={"$.who": [ColumnTarget("t1", "id")]},
    )

    text = dumps_processor_config(generated)
    assert loads_processor_config(text) == generated
    assert "starting_version_override: 99" in text


def test_document_layout(generated):
    text = dumps_processor_config(generated)
    data = yaml.safe_load(text)

    assert list(data) == ["spec_identifier", "common_config", "custom_config"]
    assert list(data["custom_config"]) == [
        "db_schema",
        "events",
        "transaction_metadata",
        "payload",
        "event_metadata",
    ]
    assert data["spec_identifier"] == {
        "spec_creator": "shepherd@aptoslabs.com",
        "spec_name": "remapping-processor",
        "spec_version": "0.0.10",
    }
    assert data["common_config"] == {"network": "testnet", "starting_version": 7}
    assert "payload: {}" in text
    assert list(data["custom_config"]["db_schema"]["t1"]) == sorted(
        ["id", "amount", "active", "seq", "version"]
    )

    event = data["custom_config"]["events"]["0x1::mod::Deposit"]
    assert event["constant_values"] == []
    assert event["event_fields"] == {"$.amount": [{"column": "amount", "table": "t1"}]}
    assert event["event_metadata"]["sequence_number"] == [{"column": "seq", "table": "t1"}]
    assert event["event_metadata"]["event_index"] == []


def test_default_values_keep_their_types(generated):
    db_schema = yaml.safe_load(dumps_processor_config(generated))["custom_config"]["db_schema"]

    assert db_schema["t1"]["amount"]["default_value"] == 42
    assert db_schema["t1"]["active"]["default_value"] == "true"
    assert db_schema["t1"]["id"]["default_value"] == "0x1"
    assert "default_value" not in db_schema["t1"]["seq"]
    assert db_schema["t1"]["seq"]["column_type"] == {
        "column_type": "sequence_number",
        "type": "event_metadata",
    }


def test_omitted_optional_sections_load_as_empty(generated):
    data = config_to_dict(generated)
    for key in ("db_schema", "events", "transaction_metadata", "payload", "event_metadata"):
        del data["custom_config"][key]

    cfg = loads_processor_config(yaml.safe_dump(data))

    assert cfg.custom_config.db_schema == {}
    assert cfg.custom_config.events == {}
    assert cfg.custom_config.payload == {}
    assert cfg.common_config.starting_version_override is None


@pytest.mark.parametrize(
    "text",
    [
        "spec_identifier: [unclosed",
        "- just\n- a list\n",
        "spec_identifier: {}\ncommon_config: {}\ncustom_config: {}\n",
    ],
)
def test_malformed_documents_are_parse_errors(text):
    with pytest.raises(ParseError):
        loads_processor_config(text)


def test_bad_field_types_are_parse_errors(generated):
    data = config_to_dict(generated)
    data["common_config"]["starting_version"] = "seven"
    with pytest.raises(ParseError, match="starting_version"):
        loads_processor_config(yaml.safe_dump(data))

    data = config_to_dict(generated)
    data["custom_config"]["db_schema"]["t1"]["amount"]["column_type"]["type"] = "mystery"
    with pytest.raises(ParseError, match="mystery"):
        loads_processor_config(yaml.safe_dump(data))


def test_missing_config_file_is_an_io_error(tmp_path):
    with pytest.raises(SourceIOError):
        load_processor_config_yaml(tmp_path / "missing.yaml")
