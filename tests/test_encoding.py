import json

import pytest

from jq_web_tool.encoding import EncodingMode, encode, extract_rows, render_cell
from jq_web_tool.errors import ConversionFailed, NotTabular, RESHAPE_HINT

VALUES = [
    None,
    True,
    0,
    -12.5,
    "text with \"quotes\" and ünïcode",
    [],
    {},
    [1, "a", None, [2, 3]],
    {"b": 1, "a": {"nested": [True, False]}},
]


@pytest.mark.parametrize("mode", [EncodingMode.PRETTY_JSON, EncodingMode.COMPACT_JSON])
def test_json_modes_round_trip(mode):
    for value in VALUES:
        assert json.loads(encode(value, mode)) == value


def test_pretty_json_uses_two_space_indent():
    assert encode({"a": [1]}, EncodingMode.PRETTY_JSON) == '{\n  "a": [\n    1\n  ]\n}'


def test_compact_json_has_no_whitespace():
    assert encode({"a": [1, 2], "b": "x y"}, EncodingMode.COMPACT_JSON) == '{"a":[1,2],"b":"x y"}'


def test_compact_json_keeps_key_order():
    assert encode({"z": 1, "a": 2}, EncodingMode.COMPACT_JSON) == '{"z":1,"a":2}'


@pytest.mark.parametrize("mode", [EncodingMode.CSV, EncodingMode.TSV])
def test_empty_array_is_empty_text(mode):
    assert encode([], mode) == ""


def test_array_of_arrays_csv():
    assert encode([[1, "a"], [2, "b"]], EncodingMode.CSV) == "1,a\n2,b"


def test_array_of_arrays_tsv():
    assert encode([[1, "a"], [2, "b"]], EncodingMode.TSV) == "1\ta\n2\tb"


def test_array_of_objects_uses_insertion_order():
    value = [{"id": 1, "name": "Alice"}, {"id": 2, "name": "Bob"}]
    assert encode(value, EncodingMode.CSV) == "1,Alice\n2,Bob"

    value = [{"name": "Alice", "id": 1}]
    assert encode(value, EncodingMode.CSV) == "Alice,1"


def test_flat_array_is_a_single_row():
    assert encode([1, "two", None, True], EncodingMode.CSV) == "1,two,,true"
    assert encode([1, "two", None, False], EncodingMode.TSV) == "1\ttwo\t\tfalse"


def test_csv_quotes_delimiter_quote_and_newline():
    assert encode(["a,b"], EncodingMode.CSV) == '"a,b"'
    assert encode([['say "hi"', "x"]], EncodingMode.CSV) == '"say ""hi""",x'
    assert encode([["line1\nline2", "x"]], EncodingMode.CSV) == '"line1\nline2",x'


def test_tsv_escapes_tabs_and_newlines():
    assert encode([["a\tb", "c\nd", "back\\slash"]], EncodingMode.TSV) == "a\\tb\tc\\nd\tback\\\\slash"


def test_tsv_leaves_commas_and_quotes_alone():
    assert encode([['a,"b"', 1]], EncodingMode.TSV) == 'a,"b"\t1'


def test_not_tabular_for_object():
    with pytest.raises(NotTabular) as excinfo:
        encode({"a": 1}, EncodingMode.CSV)
    assert RESHAPE_HINT in str(excinfo.value)
    assert excinfo.value.type_name == "object"


@pytest.mark.parametrize("value", [None, "text", 3, True])
def test_not_tabular_for_scalars(value):
    with pytest.raises(NotTabular):
        encode(value, EncodingMode.TSV)


def test_mismatched_row_shapes_fail_conversion():
    with pytest.raises(ConversionFailed) as excinfo:
        encode([[1, 2], {"a": 1}], EncodingMode.CSV)
    assert "element 1" in str(excinfo.value)
    assert RESHAPE_HINT in str(excinfo.value)

    with pytest.raises(ConversionFailed):
        encode([{"a": 1}, 5], EncodingMode.TSV)


def test_encode_does_not_mutate_input():
    value = [{"id": 1, "tags": ["x"]}, {"id": 2, "tags": []}]
    snapshot = json.dumps(value)
    for mode in EncodingMode:
        encode(value, mode)
    assert json.dumps(value) == snapshot


def test_render_cell():
    assert render_cell(None) == ""
    assert render_cell(True) == "true"
    assert render_cell(False) == "false"
    assert render_cell(42) == "42"
    assert render_cell(1.5) == "1.5"
    assert render_cell("plain") == "plain"
    assert render_cell({"a": [1, 2]}) == '{"a":[1,2]}'


def test_nested_cells_are_compact_json():
    assert encode([[1, [2, 3]]], EncodingMode.TSV) == "1\t[2,3]"


def test_extract_rows_shapes():
    assert extract_rows([]) == []
    assert extract_rows([[1], [2, 3]]) == [[1], [2, 3]]
    assert extract_rows([{"a": 1, "b": 2}]) == [[1, 2]]
    assert extract_rows([1, 2]) == [[1, 2]]


def test_mode_labels():
    assert EncodingMode.from_label("CSV") is EncodingMode.CSV
    assert EncodingMode.from_label("compact-json") is EncodingMode.COMPACT_JSON
    assert EncodingMode.TSV.file_extension == ".tsv"
    assert EncodingMode.PRETTY_JSON.file_extension == ".json"
    with pytest.raises(ValueError):
        EncodingMode.from_label("XML")


def test_csv_null_in_single_column_is_an_empty_line():
    assert encode([[1], [None], [2]], EncodingMode.CSV) == "1\n\n2"
    assert encode([{"a": "x"}, {"a": None}], EncodingMode.CSV) == "x\n"
    assert encode([[None, None]], EncodingMode.CSV) == ","
