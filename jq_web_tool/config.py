from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .encoding import EncodingMode

ENV_PREFIX = "JQ_WEB_TOOL_"
ENGINE_KINDS = ("binding", "command")


@dataclass(frozen=True)
class ToolConfig:
    engine: str = "binding"
    jq_path: str = "jq"
    command_timeout: float = 10.0
    default_mode: EncodingMode = EncodingMode.PRETTY_JSON
    log_level: str = "INFO"
    server_name: Optional[str] = None
    server_port: Optional[int] = None


def _env(environ: Mapping[str, str], name: str) -> Optional[str]:
    value = environ.get(ENV_PREFIX + name)
    if value is None or not value.strip():
        return None
    return value.strip()


def load_config(environ: Optional[Mapping[str, str]] = None) -> ToolConfig:
    """Build a ToolConfig from JQ_WEB_TOOL_* environment variables."""
    if environ is None:
        environ = os.environ

    defaults = ToolConfig()
    engine = _env(environ, "ENGINE") or defaults.engine
    if engine not in ENGINE_KINDS:
        raise ValueError(f"{ENV_PREFIX}ENGINE must be one of {', '.join(ENGINE_KINDS)}, got {engine!r}")

    timeout_text = _env(environ, "TIMEOUT")
    try:
        timeout = float(timeout_text) if timeout_text else defaults.command_timeout
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}TIMEOUT must be a number of seconds, got {timeout_text!r}")
    if timeout <= 0:
        raise ValueError(f"{ENV_PREFIX}TIMEOUT must be positive, got {timeout_text!r}")

    mode_text = _env(environ, "DEFAULT_MODE")
    try:
        mode = EncodingMode.from_label(mode_text) if mode_text else defaults.default_mode
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}DEFAULT_MODE must be one of {', '.join(m.value for m in EncodingMode)}, got {mode_text!r}")

    port_text = _env(environ, "SERVER_PORT")
    try:
        port = int(port_text) if port_text else None
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}SERVER_PORT must be an integer, got {port_text!r}")

    return ToolConfig(
        engine=engine,
        jq_path=_env(environ, "JQ_PATH") or defaults.jq_path,
        command_timeout=timeout,
        default_mode=mode,
        log_level=(_env(environ, "LOG_LEVEL") or defaults.log_level).upper(),
        server_name=_env(environ, "SERVER_NAME"),
        server_port=port,
    )
