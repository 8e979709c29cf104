"""
Centralized configuration for the Prompt Orchestrator.

Options come from the host (a plain mapping), an optional YAML file and
environment variables, in that order of increasing priority. Everything is
resolved once into frozen dataclasses; nothing in the engine mutates them.

Usage:
    from prompt_orchestrator.config import load_config
    cfg = load_config()
    print(cfg.complexity_threshold)   # 8
    print(cfg.high_risk_tools)        # ("bash", "exec", ...)
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

logger = logging.getLogger(__name__)

DEFAULT_COMPLEXITY_THRESHOLD = 8
DEFAULT_MAX_PROMPT_CHARS = 1800
DEFAULT_MAX_MEMORY_CHARS = 600
DEFAULT_REQUIRE_CONFIRMATION = True
DEFAULT_HIGH_RISK_TOOLS = ("bash", "exec", "write", "edit", "delete", "patch", "rm")
DEFAULT_SPAWN_TOOL = "sessions_spawn"
DEFAULT_MAX_SESSIONS = 10_000

DEFAULT_IMPROVER_HOURS = 24
DEFAULT_ALLOWED_WRITE_PATHS = (
    "extensions/prompt-orchestrator/**",
    "heartbeat.md",
    ".learnings/**",
)

ENV_PREFIX = "PROMPT_ORCHESTRATOR_"
CONFIG_PATH_ENV = f"{ENV_PREFIX}CONFIG"

# camelCase option names used by the host plugin API → snake_case fields
_ALIASES = {
    "complexityThreshold": "complexity_threshold",
    "maxPromptChars": "max_prompt_chars",
    "maxMemoryChars": "max_memory_chars",
    "requireConfirmationForMutations": "require_confirmation",
    "require_confirmation_for_mutations": "require_confirmation",
    "highRiskTools": "high_risk_tools",
    "spawnTool": "spawn_tool",
    "maxSessions": "max_sessions",
    "simpleDelegateAgentId": "simple_delegate_agent_id",
    "orchestratorAgentId": "orchestrator_agent_id",
    "runEveryHours": "run_every_hours",
    "allowedWritePaths": "allowed_write_paths",
}


class ImproverMode(StrEnum):
    ADVISORY = "advisory"
    GATED_APPLY = "gated_apply"


DEFAULT_IMPROVER_MODE = ImproverMode.ADVISORY


@dataclass(frozen=True)
class ImproverConfig:
    """Cadence and write scope of the periodic prompt-improver advisory."""

    run_every_hours: int = DEFAULT_IMPROVER_HOURS
    mode: ImproverMode = DEFAULT_IMPROVER_MODE
    allowed_write_paths: tuple[str, ...] = DEFAULT_ALLOWED_WRITE_PATHS


@dataclass(frozen=True)
class OrchestratorConfig:
    """Top-level orchestrator configuration."""

    # Routing
    complexity_threshold: int = DEFAULT_COMPLEXITY_THRESHOLD

    # Envelope budgets
    max_prompt_chars: int = DEFAULT_MAX_PROMPT_CHARS
    max_memory_chars: int = DEFAULT_MAX_MEMORY_CHARS

    # Tool gating
    require_confirmation: bool = DEFAULT_REQUIRE_CONFIRMATION
    high_risk_tools: tuple[str, ...] = DEFAULT_HIGH_RISK_TOOLS
    spawn_tool: str = DEFAULT_SPAWN_TOOL

    # Session store capacity
    max_sessions: int = DEFAULT_MAX_SESSIONS

    # Delegate agents announced in the envelope (empty = not announced)
    simple_delegate_agent_id: str = ""
    orchestrator_agent_id: str = ""

    improver: ImproverConfig = field(default_factory=ImproverConfig)


def _normalize_keys(raw: Mapping[str, Any]) -> dict[str, Any]:
    return {_ALIASES.get(key, key): value for key, value in raw.items()}


def _int_option(raw: Mapping[str, Any], key: str, default: int, minimum: int = 0) -> int:
    value = raw.get(key)
    if value is None:
        return default
    # bool is an int subclass; "true" is not a threshold
    if isinstance(value, bool):
        logger.warning("Invalid %s=%r, using default %d", key, value, default)
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        logger.warning("Invalid %s=%r, using default %d", key, value, default)
        return default
    if number < minimum:
        logger.warning("%s=%d below minimum %d, using default %d", key, number, minimum, default)
        return default
    return number


def _bool_option(raw: Mapping[str, Any], key: str, default: bool) -> bool:
    value = raw.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("0", "false", "no", "off"):
            return False
    logger.warning("Invalid %s=%r, using default %s", key, value, default)
    return default


def _str_list_option(
    raw: Mapping[str, Any], key: str, default: tuple[str, ...]
) -> tuple[str, ...]:
    value = raw.get(key)
    if value is None:
        return default
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, list | tuple):
        logger.warning("Invalid %s=%r (expected a list), using default", key, value)
        return default
    items = tuple(str(item).strip() for item in value if str(item).strip())
    return items


def _str_option(raw: Mapping[str, Any], key: str, default: str) -> str:
    value = raw.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        logger.warning("Invalid %s=%r (expected a string), using default", key, value)
        return default
    return value.strip()


def _improver_from_mapping(raw: Any) -> ImproverConfig:
    if raw is None:
        return ImproverConfig()
    if not isinstance(raw, Mapping):
        logger.warning("Invalid improver section %r, using defaults", raw)
        return ImproverConfig()

    options = _normalize_keys(raw)
    mode_str = options.get("mode", DEFAULT_IMPROVER_MODE.value)
    try:
        mode = ImproverMode(mode_str)
    except ValueError:
        logger.warning("Unknown improver mode %r, using %s", mode_str, DEFAULT_IMPROVER_MODE)
        mode = DEFAULT_IMPROVER_MODE

    return ImproverConfig(
        run_every_hours=_int_option(options, "run_every_hours", DEFAULT_IMPROVER_HOURS),
        mode=mode,
        allowed_write_paths=_str_list_option(
            options, "allowed_write_paths", DEFAULT_ALLOWED_WRITE_PATHS
        ),
    )


def config_from_mapping(raw: Mapping[str, Any] | None) -> OrchestratorConfig:
    """Resolve a host-supplied option mapping into an OrchestratorConfig.

    Missing options take their defaults. Values of the wrong type are logged
    and replaced by the default rather than failing startup.
    """
    options = _normalize_keys(raw or {})

    return OrchestratorConfig(
        complexity_threshold=_int_option(
            options, "complexity_threshold", DEFAULT_COMPLEXITY_THRESHOLD
        ),
        max_prompt_chars=_int_option(options, "max_prompt_chars", DEFAULT_MAX_PROMPT_CHARS),
        max_memory_chars=_int_option(options, "max_memory_chars", DEFAULT_MAX_MEMORY_CHARS),
        require_confirmation=_bool_option(
            options, "require_confirmation", DEFAULT_REQUIRE_CONFIRMATION
        ),
        high_risk_tools=_str_list_option(options, "high_risk_tools", DEFAULT_HIGH_RISK_TOOLS),
        spawn_tool=_str_option(options, "spawn_tool", DEFAULT_SPAWN_TOOL) or DEFAULT_SPAWN_TOOL,
        max_sessions=_int_option(options, "max_sessions", DEFAULT_MAX_SESSIONS, minimum=1),
        simple_delegate_agent_id=_str_option(options, "simple_delegate_agent_id", ""),
        orchestrator_agent_id=_str_option(options, "orchestrator_agent_id", ""),
        improver=_improver_from_mapping(options.get("improver")),
    )


def load_config_file(path: Path) -> dict[str, Any] | None:
    """Load a YAML option file. Returns None if it is missing or malformed."""
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.error("Failed to load config %s: %s", path, e)
        return None
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.error("Config %s must be a mapping, got %s", path, type(data).__name__)
        return None
    return data


def _env_overrides() -> dict[str, Any]:
    """Collect PROMPT_ORCHESTRATOR_* overrides from the environment."""
    overrides: dict[str, Any] = {}
    for key in (
        "complexity_threshold",
        "max_prompt_chars",
        "max_memory_chars",
        "require_confirmation",
        "high_risk_tools",
        "spawn_tool",
        "max_sessions",
    ):
        value = os.environ.get(f"{ENV_PREFIX}{key.upper()}")
        if value is not None and value != "":
            overrides[key] = value
    return overrides


def load_config(
    path: Path | str | None = None,
    options: Mapping[str, Any] | None = None,
) -> OrchestratorConfig:
    """Resolve the configuration from options, YAML file and environment.

    ``path`` defaults to $PROMPT_ORCHESTRATOR_CONFIG when set. Environment
    variables override file values, which override ``options``.
    """
    merged: dict[str, Any] = _normalize_keys(options or {})

    if path is None and os.environ.get(CONFIG_PATH_ENV):
        path = os.environ[CONFIG_PATH_ENV]

    if path is not None:
        file_options = load_config_file(Path(path))
        if file_options:
            merged.update(_normalize_keys(file_options))

    merged.update(_env_overrides())
    config = config_from_mapping(merged)
    logger.debug(
        "Resolved config: threshold=%d confirmation=%s risk_tools=%s",
        config.complexity_threshold,
        config.require_confirmation,
        ",".join(config.high_risk_tools),
    )
    return config
