from __future__ import annotations

import csv
import io
import json
from enum import Enum
from typing import Any, List

from .errors import ConversionFailed, NotTabular


class EncodingMode(str, Enum):
    PRETTY_JSON = "pretty-json"
    COMPACT_JSON = "compact-json"
    CSV = "csv"
    TSV = "tsv"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def file_extension(self) -> str:
        if self.is_tabular:
            return f".{self.value}"
        return ".json"

    @property
    def is_tabular(self) -> bool:
        return self in (EncodingMode.CSV, EncodingMode.TSV)

    @classmethod
    def from_label(cls, label: str) -> "EncodingMode":
        """Accept either a display label ("Compact JSON") or a value ("compact-json")."""
        for mode, mode_label in _LABELS.items():
            if label in (mode_label, mode.value):
                return mode
        raise ValueError(f"Unknown output format: {label!r}")


_LABELS = {
    EncodingMode.PRETTY_JSON: "Pretty JSON",
    EncodingMode.COMPACT_JSON: "Compact JSON",
    EncodingMode.CSV: "CSV",
    EncodingMode.TSV: "TSV",
}

MODE_LABELS = [mode.label for mode in EncodingMode]

_TSV_ESCAPES = str.maketrans({"\\": "\\\\", "\t": "\\t", "\n": "\\n", "\r": "\\r"})


def to_pretty_json(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


def to_compact_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def extract_rows(value: List[Any]) -> List[List[Any]]:
    """Split a top-level list into rows.

    The first element decides the shape for every element:
    - list   -> each element's items are the cells
    - dict   -> each element's values, in insertion order
    - scalar -> the whole list is one row
    """
    if not value:
        return []

    first = value[0]
    if isinstance(first, list):
        rows = []
        for idx, item in enumerate(value):
            if not isinstance(item, list):
                raise TypeError(f"element {idx} is {json_type_name(item)}, expected array like element 0")
            rows.append(list(item))
        return rows

    if isinstance(first, dict):
        rows = []
        for idx, item in enumerate(value):
            if not isinstance(item, dict):
                raise TypeError(f"element {idx} is {json_type_name(item)}, expected object like element 0")
            rows.append(list(item.values()))
        return rows

    return [list(value)]


def render_cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return json.dumps(value)
    # Nested containers end up as compact JSON inside the cell.
    return to_compact_json(value)


def _rows_to_csv(rows: List[List[Any]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, delimiter=",", quotechar='"', quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    for row in rows:
        cells = [render_cell(cell) for cell in row]
        if cells == [""]:
            # csv writes a lone empty field as "", a null cell stays empty
            buffer.write("\n")
        else:
            writer.writerow(cells)
    return buffer.getvalue()[:-1] if rows else ""


def _rows_to_tsv(rows: List[List[Any]]) -> str:
    return "\n".join("\t".join(render_cell(cell).translate(_TSV_ESCAPES) for cell in row) for row in rows)


def to_delimited(value: Any, mode: EncodingMode) -> str:
    if not isinstance(value, list):
        raise NotTabular(json_type_name(value))
    if not value:
        return ""

    try:
        rows = extract_rows(value)
        if mode is EncodingMode.TSV:
            return _rows_to_tsv(rows)
        return _rows_to_csv(rows)
    except Exception as exc:
        raise ConversionFailed(str(exc)) from exc


def encode(value: Any, mode: EncodingMode) -> str:
    """Render a decoded JSON value as text in the requested mode.

    Raises NotTabular or ConversionFailed for CSV/TSV when the value has no
    tabular shape. The value is only read, never modified.
    """
    if mode is EncodingMode.PRETTY_JSON:
        return to_pretty_json(value)
    if mode is EncodingMode.COMPACT_JSON:
        return to_compact_json(value)
    return to_delimited(value, mode)


def json_type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__
