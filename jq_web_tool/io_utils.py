from __future__ import annotations

import json
from typing import Any, List, Tuple

from .errors import JSONParseError, QueryEvaluationError


def read_json_text(file_obj) -> str:
    """Read the text of an uploaded file, a file-like object or a path."""
    if file_obj is None:
        raise ValueError("No file uploaded.")

    if hasattr(file_obj, 'read'):
        if hasattr(file_obj, 'seek'):
            file_obj.seek(0)
        content = file_obj.read()
        if isinstance(content, bytes):
            content = content.decode('utf-8')
        return content

    path = file_obj.name if hasattr(file_obj, 'name') else file_obj
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def loads_strict(text: str) -> Any:
    """json.loads that refuses NaN, Infinity and -Infinity."""
    return json.loads(text, parse_constant=_reject_constant)


def parse_input_json(text: str) -> Any:
    """Parse user-supplied JSON text, reporting the decoder message unchanged."""
    try:
        return loads_strict(text)
    except ValueError as e:
        raise JSONParseError(str(e)) from e


def split_engine_output(text: str) -> List[Tuple[int, str]]:
    """Number the non-blank lines of jq's compact output, one result per line.

    Only "\\n" ends a line: jq prints U+2028, U+2029 and U+0085 unescaped
    inside strings.
    """
    return [(line_num, line) for line_num, line in enumerate(text.split("\n"), 1) if line.strip()]


def parse_engine_output(text: str) -> Any:
    """Parse jq output into a single value.

    A whole-string parse wins; otherwise every non-blank line is one result and
    the results are wrapped into a list. No output at all gives None.
    """
    if not text.strip():
        return None

    try:
        return loads_strict(text)
    except ValueError:
        pass

    values = []
    for line_num, line in split_engine_output(text):
        try:
            values.append(loads_strict(line))
        except ValueError as e:
            raise QueryEvaluationError(f"Unreadable engine output on line {line_num}: {e}") from e
    return values


def raw_text_from_output(text: str) -> str:
    """Turn jq's compact output into its raw (-r) form: string results lose their quotes."""
    lines = []
    for line_num, line in split_engine_output(text):
        try:
            result = loads_strict(line)
        except ValueError as e:
            raise QueryEvaluationError(f"Unreadable engine output on line {line_num}: {e}") from e
        lines.append(result if isinstance(result, str) else line)
    return "\n".join(lines)
