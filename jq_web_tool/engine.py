"""Bindings to the external jq engine.

The application never interprets jq itself. A QueryEngine hands the input text
and the expression to jq and gives back either a parsed value or the raw text
jq printed. Two bindings exist:

- JqBindingEngine: the `jq` package from PyPI (libjq compiled into an extension)
- JqCommandEngine: the `jq` program, run once per query

load_engine() performs the one-time load and raises EngineUnavailable when the
selected binding cannot be used.
"""
from __future__ import annotations

import importlib
import json
import logging
import shutil
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Tuple

from .config import ToolConfig
from .encoding import to_compact_json
from .errors import EngineUnavailable, QueryEvaluationError
from .io_utils import parse_engine_output, raw_text_from_output

logger = logging.getLogger(__name__)


class QueryEngine(ABC):
    name = "jq"

    @abstractmethod
    def check_available(self) -> None:
        """Raise EngineUnavailable if the engine cannot run queries."""

    @abstractmethod
    def run(self, json_text: str, expression: str, raw: bool = False) -> str:
        """Run `expression` over `json_text`; return jq's output, one result per line."""

    def evaluate_to_value(self, value: Any, expression: str) -> Any:
        """Evaluate and parse the output. Several results come back as a list."""
        output = self.run(json.dumps(value), expression)
        return parse_engine_output(output)

    def evaluate_to_raw_text(self, json_text: str, expression: str) -> str:
        """Evaluate with jq's raw output: strings unquoted, other values compact."""
        return self.run(json_text, expression, raw=True)

    def evaluate_with_raw_text(self, value: Any, expression: str) -> Tuple[Any, str]:
        """Run jq once and return both the parsed value and the raw (-r) text."""
        output = self.run(json.dumps(value), expression)
        return parse_engine_output(output), raw_text_from_output(output)


@dataclass
class JqBindingEngine(QueryEngine):
    name = "jq (python binding)"

    def _module(self):
        try:
            return importlib.import_module("jq")
        except ImportError as exc:
            raise EngineUnavailable(f"the jq package cannot be imported ({exc})") from exc

    def check_available(self) -> None:
        self._module()

    def run(self, json_text: str, expression: str, raw: bool = False) -> str:
        jq = self._module()
        try:
            program = jq.compile(expression).input_text(json_text)
            if not raw:
                return program.text()
            return "\n".join(
                result if isinstance(result, str) else to_compact_json(result)
                for result in program.all()
            )
        except ValueError as exc:
            raise QueryEvaluationError(str(exc)) from exc


@dataclass
class JqCommandEngine(QueryEngine):
    jq_path: str = "jq"
    timeout: float = 10.0

    name = "jq (command)"

    def check_available(self) -> None:
        if shutil.which(self.jq_path) is None:
            raise EngineUnavailable(f"jq program not found: {self.jq_path}")

    def run(self, json_text: str, expression: str, raw: bool = False) -> str:
        args = [self.jq_path, "-c"]
        if raw:
            args.append("-r")
        args.append(expression)

        try:
            proc = subprocess.run(
                args,
                input=json_text,
                capture_output=True,
                text=True,
                encoding="utf-8",
                timeout=self.timeout,
            )
        except FileNotFoundError as exc:
            raise EngineUnavailable(f"jq program not found: {self.jq_path}") from exc
        except subprocess.TimeoutExpired as exc:
            raise QueryEvaluationError(f"jq did not finish within {self.timeout:g} seconds") from exc

        if proc.returncode != 0:
            message = proc.stderr.strip() or f"jq exited with status {proc.returncode}"
            raise QueryEvaluationError(message)

        output = proc.stdout
        if output.endswith("\n"):
            output = output[:-1]
        return output


def create_engine(config: ToolConfig) -> QueryEngine:
    if config.engine == "command":
        return JqCommandEngine(jq_path=config.jq_path, timeout=config.command_timeout)
    return JqBindingEngine()


def load_engine(config: ToolConfig) -> QueryEngine:
    """Create the configured engine and verify it can run."""
    engine = create_engine(config)
    try:
        engine.check_available()
    except EngineUnavailable as exc:
        logger.warning("jq engine failed to load: %s", exc.reason)
        raise
    logger.info("Loaded %s", engine.name)
    return engine
