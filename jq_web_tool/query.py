from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from .encoding import EncodingMode, encode
from .engine import QueryEngine
from .errors import EngineUnavailable, QueryEvaluationError
from .io_utils import parse_input_json

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueryOptions:
    raw: bool = False
    slurp: bool = False


@dataclass(frozen=True)
class QueryResult:
    expression: str
    value: Any
    raw_text: Optional[str] = None


def execute_query(
    engine: Optional[QueryEngine],
    json_text: str,
    expression: str,
    options: QueryOptions = QueryOptions(),
) -> QueryResult:
    """Parse the input, run the expression through jq and keep the result.

    Raises EngineUnavailable, JSONParseError or QueryEvaluationError.
    """
    if engine is None:
        raise EngineUnavailable()

    input_data = parse_input_json(json_text)
    if not expression or not expression.strip():
        raise QueryEvaluationError("The query is empty.")

    if options.slurp:
        input_data = [input_data]

    logger.info("Running query %r (raw=%s, slurp=%s)", expression, options.raw, options.slurp)
    raw_text = None
    if options.raw:
        value, raw_text = engine.evaluate_with_raw_text(input_data, expression)
    else:
        value = engine.evaluate_to_value(input_data, expression)

    return QueryResult(expression=expression, value=value, raw_text=raw_text)


def render_result(engine: Optional[QueryEngine], result: QueryResult, mode: EncodingMode) -> str:
    """Encode a stored result in `mode`. The engine is never called here."""
    if engine is None:
        raise EngineUnavailable()
    if result.raw_text is not None and not mode.is_tabular:
        return result.raw_text
    return encode(result.value, mode)
