import pytest

from conftest import schema_row, write_lines
from indexforge.errors import ParseError, SourceIOError
from indexforge.processor.config import CustomConfig
from indexforge.schema import (
    ColumnSpec,
    ColumnTypeSpec,
    TypeCategory,
    load_db_schema_from_csv,
    load_db_schema_into_custom,
    parse_bool_cell,
)


def test_load_schema_builds_table_column_catalogue(write_schema):
    path = write_schema(
        [
            schema_row("transfers", "amount", "move_type", "u64", "0", "true,false,no,y,0"),
            schema_row("transfers", "version", "transaction_metadata", "version"),
            schema_row("accounts", "owner", "move_type", "address"),
        ]
    )
    catalogue = load_db_schema_from_csv(path)

    assert list(catalogue) == ["accounts", "transfers"]
    assert list(catalogue["transfers"]) == ["amount", "version"]

    amount = catalogue["transfers"]["amount"]
    assert amount == ColumnSpec(
        column_type=ColumnTypeSpec(TypeCategory.MOVE_TYPE, "u64"),
        default_value=0,
        is_index=True,
        is_nullable=False,
        is_option=False,
        is_primary_key=True,
        is_vec=False,
    )
    assert catalogue["transfers"]["version"].column_type.type == TypeCategory.TRANSACTION_METADATA
    assert catalogue["accounts"]["owner"].default_value is None


def test_later_row_for_same_column_wins(write_schema):
    path = write_schema(
        [
            schema_row("t1", "amount", "move_type", "u64", "1"),
            schema_row("t1", "amount", "move_type", "u128", "", "false,true,false,false,false"),
        ]
    )
    catalogue = load_db_schema_from_csv(path)

    spec = catalogue["t1"]["amount"]
    assert spec.column_type.column_type == "u128"
    assert spec.default_value is None
    assert spec.is_nullable is True


@pytest.mark.parametrize("cell", ["true", "T", "1", "Yes", "y", " TRUE "])
def test_truthy_cells(cell):
    assert parse_bool_cell(cell) is True


@pytest.mark.parametrize("cell", ["false", "0", "no", "", "maybe"])
def test_falsy_cells(cell):
    assert parse_bool_cell(cell) is False


@pytest.mark.parametrize(
    "type_, column_type, cell, expected",
    [
        ("move_type", "u64", "42", 42),
        ("move_type", "u8", "+7", 7),
        ("move_type", "u64", "abc", "abc"),
        ("move_type", "u64", "-1", "-1"),
        ("move_type", "u64", "18446744073709551616", "18446744073709551616"),
        ("move_type", "u128", "5", "5"),
        ("move_type", "bool", "yes", "true"),
        ("move_type", "bool", "nope", "false"),
        ("move_type", "address", "0x1", "0x1"),
        ("move_type", "0x1::string::String", "hello", "hello"),
        ("transaction_metadata", "version", "7", 7),
        ("transaction_metadata", "timestamp", "now", "now"),
        ("event_metadata", "sequence_number", "5", 5),
        ("event_metadata", "event_type", "5", "5"),
        ("move_type", "u64", "   ", None),
        ("move_type", "u64", None, None),
    ],
)
def test_default_value_coercion(type_, column_type, cell, expected):
    spec = ColumnTypeSpec.parse(type_, column_type)
    value = spec.coerce_default(cell)
    assert value == expected
    assert type(value) is type(expected)


def test_default_value_cell_is_coerced_at_load(write_schema):
    path = write_schema(
        [
            schema_row("t1", "flag", "move_type", "bool", "Y"),
            schema_row("t1", "count", "move_type", "u32", " 12 "),
            schema_row("t1", "note", "move_type", "0x1::string::String", "   "),
        ]
    )
    catalogue = load_db_schema_from_csv(path)

    assert catalogue["t1"]["flag"].default_value == "true"
    assert catalogue["t1"]["count"].default_value == 12
    assert catalogue["t1"]["note"].default_value is None


def test_cells_are_trimmed(write_schema):
    path = write_schema([" t1 , amount , u64 , move_type ,, yes ,no,no,no,no"])
    catalogue = load_db_schema_from_csv(path)

    assert catalogue["t1"]["amount"].column_type == ColumnTypeSpec(TypeCategory.MOVE_TYPE, "u64")
    assert catalogue["t1"]["amount"].is_index is True


def test_unknown_type_category_is_a_parse_error(write_schema):
    path = write_schema(
        [
            schema_row("t1", "amount", "move_type", "u64"),
            schema_row("t1", "mystery", "custom_type", "u64"),
        ]
    )
    with pytest.raises(ParseError) as excinfo:
        load_db_schema_from_csv(path)

    assert excinfo.value.row == 2
    assert excinfo.value.path == path
    assert "custom_type" in str(excinfo.value)


def test_unknown_metadata_subtype_is_a_parse_error(write_schema):
    path = write_schema([schema_row("t1", "height", "transaction_metadata", "gas_used")])
    with pytest.raises(ParseError, match="gas_used"):
        load_db_schema_from_csv(path)


@pytest.mark.parametrize(
    "column_type", ["u256", "vector<u8>", "0x1::string::String", "0x1::option::Option<u64>"]
)
def test_move_type_accepts_any_move_type(column_type):
    spec = ColumnTypeSpec.parse("move_type", column_type)
    assert spec == ColumnTypeSpec(TypeCategory.MOVE_TYPE, column_type)


@pytest.mark.parametrize(
    "type_", ["move_type", "transaction_metadata", "event_metadata"]
)
def test_blank_subtype_is_rejected(type_):
    with pytest.raises(ValueError, match="is required"):
        ColumnTypeSpec.parse(type_, "  ")


def test_missing_header_column_is_a_parse_error(tmp_path):
    path = write_lines(
        tmp_path / "schema.csv",
        ["table,column,column_type,type", "t1,amount,u64,move_type"],
    )
    with pytest.raises(ParseError, match="is_index"):
        load_db_schema_from_csv(path)


def test_row_with_extra_fields_is_a_parse_error(write_schema):
    path = write_schema(
        [
            schema_row("t1", "amount", "move_type", "u64"),
            schema_row("t1", "id", "move_type", "address") + ",surplus",
        ]
    )
    with pytest.raises(ParseError):
        load_db_schema_from_csv(path)


@pytest.mark.parametrize(
    "short_row",
    [
        "t1,id,address,move_type",
        "t1,id,address,move_type,,true,false,false,false",
    ],
)
def test_row_with_missing_fields_is_a_parse_error(write_schema, short_row):
    path = write_schema([schema_row("t1", "amount", "move_type", "u64"), short_row])

    with pytest.raises(ParseError, match="expected 10 fields") as excinfo:
        load_db_schema_from_csv(path)

    assert excinfo.value.row == 2


def test_row_with_empty_trailing_cells_is_accepted(write_schema):
    path = write_schema(["t1,id,address,move_type,,,,,,"])

    spec = load_db_schema_from_csv(path)["t1"]["id"]

    assert spec.default_value is None
    assert spec.is_vec is False


def test_missing_file_is_an_io_error(tmp_path):
    path = tmp_path / "nope.csv"
    with pytest.raises(SourceIOError) as excinfo:
        load_db_schema_from_csv(path)

    assert isinstance(excinfo.value, OSError)
    assert excinfo.value.path == path


def test_empty_and_header_only_files_give_empty_catalogue(tmp_path, write_schema):
    empty = tmp_path / "empty.csv"
    empty.write_text("", encoding="utf-8")

    assert load_db_schema_from_csv(empty) == {}
    assert load_db_schema_from_csv(write_schema([])) == {}


def test_load_db_schema_into_custom_replaces_catalogue(write_schema):
    custom = CustomConfig(db_schema={"old": {}})
    load_db_schema_into_custom(custom, write_schema([schema_row("t1", "amount", "move_type", "u64")]))

    assert list(custom.db_schema) == ["t1"]
