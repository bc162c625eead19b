from __future__ import annotations

import logging
import os
import tempfile
from typing import Any, Dict, List, Optional

import gradio as gr

from .config import ToolConfig
from .encoding import EncodingMode, extract_rows, render_cell
from .engine import QueryEngine, load_engine
from .errors import EngineUnavailable, FormatError, JqWebToolError, JSONParseError
from .io_utils import read_json_text
from .query import QueryOptions, QueryResult, execute_query, render_result
from .samples import sample_json

logger = logging.getLogger(__name__)

PREVIEW_ROW_LIMIT = 100


def describe_error(exc: JqWebToolError) -> str:
    if isinstance(exc, JSONParseError):
        return f"Invalid input JSON: {exc}"
    return f"Error: {exc}"


def initialize_engine(config: ToolConfig):
    """Load the jq engine once per page load and enable the execute button."""
    try:
        engine = load_engine(config)
    except EngineUnavailable as exc:
        return None, describe_error(exc), gr.update(value="jq unavailable", interactive=False)
    return engine, f"Ready: {engine.name}", gr.update(value="▶ Run", interactive=True)


def load_uploaded_file(file_obj):
    if file_obj is None:
        return gr.update(), ""

    try:
        text = read_json_text(file_obj)
    except (OSError, UnicodeDecodeError, ValueError) as e:
        return gr.update(), f"Error reading file: {str(e)}"
    return text, ""


def load_sample(key: str) -> str:
    return sample_json(key)


def apply_template(query: str) -> str:
    return query


def build_table_preview(result: Optional[QueryResult], mode: EncodingMode) -> Optional[Dict[str, List[Any]]]:
    """Rows for the preview grid, or None when the result has no table form."""
    if result is None or not mode.is_tabular:
        return None
    value = result.value
    if not isinstance(value, list) or not value:
        return None

    try:
        rows = extract_rows(value)[:PREVIEW_ROW_LIMIT]
    except TypeError:
        return None

    width = max(len(row) for row in rows)
    if width == 0:
        return None
    if isinstance(value[0], dict):
        headers = [str(k) for k in value[0].keys()]
        headers += [str(i + 1) for i in range(len(headers), width)]
    else:
        headers = [str(i + 1) for i in range(width)]

    data = [[render_cell(cell) for cell in row] + [""] * (width - len(row)) for row in rows]
    return {"headers": headers, "data": data}


def _render(engine: Optional[QueryEngine], result: Optional[QueryResult], mode: EncodingMode):
    if result is None:
        return "", "", None
    try:
        text = render_result(engine, result, mode)
    except FormatError as exc:
        return "", describe_error(exc), None
    return text, "", build_table_preview(result, mode)


def run_query_handler(engine, json_text, query, mode_label, raw, slurp):
    """Execute the query; returns (output, error, result, table preview)."""
    mode = EncodingMode.from_label(mode_label)
    options = QueryOptions(raw=bool(raw), slurp=bool(slurp))

    try:
        result = execute_query(engine, json_text or "", query or "", options)
    except JqWebToolError as exc:
        logger.warning("Query %r failed: %s", query, exc)
        return "", describe_error(exc), None, None

    output, error, table = _render(engine, result, mode)
    return output, error, result, table


def run_quick_action(query, engine, json_text, mode_label, raw, slurp):
    output, error, result, table = run_query_handler(engine, json_text, query, mode_label, raw, slurp)
    return query, output, error, result, table


def reformat_handler(engine, result, mode_label):
    """Re-render the stored result in another mode without running jq again."""
    output, error, table = _render(engine, result, EncodingMode.from_label(mode_label))
    return output, error, table


def export_output_handler(engine, result, mode_label, file_name):
    if result is None:
        return None, "Run a query first."

    mode = EncodingMode.from_label(mode_label)
    try:
        text = render_result(engine, result, mode)
    except FormatError as exc:
        return None, describe_error(exc)

    if not file_name or not file_name.strip():
        file_name = "output"
    file_name = os.path.basename(file_name.strip())

    ext = mode.file_extension
    if not file_name.lower().endswith(ext):
        file_name += ext

    path = os.path.join(tempfile.gettempdir(), file_name)
    try:
        with open(path, 'w', encoding='utf-8', newline='') as f:
            f.write(text)
    except OSError as e:
        return None, f"Error during export: {str(e)}"

    logger.info("Exported %d characters to %s", len(text), path)
    return path, f"Export successful! Saved to {path}"
