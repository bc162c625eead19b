"""Pytest configuration and shared fixtures."""

import json

import pytest

from jq_web_tool.encoding import to_compact_json
from jq_web_tool.engine import QueryEngine
from jq_web_tool.errors import QueryEvaluationError


class FakeEngine(QueryEngine):
    """Stands in for jq: each known expression maps to a function returning a list of results."""

    name = "fake jq"

    def __init__(self, programs):
        self.programs = programs
        self.calls = []

    def check_available(self):
        pass

    def run(self, json_text, expression, raw=False):
        self.calls.append((expression, raw))
        if expression not in self.programs:
            raise QueryEvaluationError(f"jq: error: {expression}/0 is not defined")
        results = self.programs[expression](json.loads(json_text))
        return "\n".join(
            r if raw and isinstance(r, str) else to_compact_json(r)
            for r in results
        )


@pytest.fixture
def fake_engine():
    return FakeEngine({
        ".": lambda data: [data],
        ".[]": lambda data: list(data),
        ".[].name": lambda data: [item["name"] for item in data],
        "map([.id, .name])": lambda data: [[[item["id"], item["name"]] for item in data]],
        "empty": lambda data: [],
    })
