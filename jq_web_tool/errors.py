from __future__ import annotations

RESHAPE_HINT = (
    "Reshape the result into an array of arrays, "
    "e.g. `map([.id, .name])` or `[.[] | [.key, .value]]`."
)


class JqWebToolError(Exception):
    """Base class for errors surfaced to the user."""


class JSONParseError(JqWebToolError, ValueError):
    """The input text is not valid JSON. The message is the decoder's, verbatim."""


class QueryEvaluationError(JqWebToolError):
    """The jq engine rejected the expression or failed while running it."""


class FormatError(JqWebToolError):
    pass


class NotTabular(FormatError):
    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(f"Cannot encode a value of type {type_name} as a table. {RESHAPE_HINT}")


class ConversionFailed(FormatError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Table conversion failed: {reason}. {RESHAPE_HINT}")


class EngineUnavailable(FormatError):
    def __init__(self, reason: str = "the jq engine is not loaded"):
        self.reason = reason
        super().__init__(f"jq engine unavailable: {reason}")
