"""
Guardrails — confirmation and delegation gating for tool calls.

A tool is high-risk when its lower-cased name contains any configured risk
token (substring match, so "exec_command" and "bash_v2" are caught too).
High-risk calls are then checked in order:
1. orchestrator_delegate sessions may only use the spawn tool
2. confirmation disabled, or params.confirmed is True → allowed
3. anything else → blocked until confirmed or delegated

Unrelated tools always pass.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from prompt_orchestrator.config import OrchestratorConfig
from prompt_orchestrator.engine.models import ExecutionMode

logger = logging.getLogger(__name__)

REASON_PREFIX = "prompt-orchestrator"


@dataclass(frozen=True)
class GuardrailResult:
    """Result of a guardrail check."""

    allowed: bool = True
    action: str = "allowed"  # allowed, blocked
    reason: str = ""
    guardrail_name: str = ""


ALLOWED = GuardrailResult()


def is_high_risk_tool(tool_name: str, risk_tokens: Iterable[str]) -> bool:
    """True if any non-empty risk token occurs in the tool name (case-insensitive)."""
    normalized = tool_name.lower()
    return any(token and token.lower() in normalized for token in risk_tokens)


def check_tool_call(
    tool_name: str,
    params: Mapping[str, Any] | None,
    session_mode: ExecutionMode | None,
    config: OrchestratorConfig,
) -> GuardrailResult:
    """Decide whether a tool call may run. First matching rule wins."""
    if not is_high_risk_tool(tool_name, config.high_risk_tools):
        return ALLOWED

    if (
        session_mode == ExecutionMode.ORCHESTRATOR_DELEGATE
        and tool_name.lower() != config.spawn_tool.lower()
    ):
        logger.info("Blocked %s: orchestrator_delegate session must delegate", tool_name)
        return GuardrailResult(
            allowed=False,
            action="blocked",
            reason=(
                f"{REASON_PREFIX}: high-risk action blocked in orchestrator_delegate mode; "
                f"delegate execution via {config.spawn_tool}"
            ),
            guardrail_name="orchestrator_delegation",
        )

    confirmed = (params or {}).get("confirmed") is True
    if not config.require_confirmation or confirmed:
        logger.debug("Allowed high-risk tool %s (confirmed=%s)", tool_name, confirmed)
        return ALLOWED

    logger.info("Blocked %s: missing params.confirmed=true", tool_name)
    return GuardrailResult(
        allowed=False,
        action="blocked",
        reason=(
            f"{REASON_PREFIX}: mutating/high-risk tool call requires "
            "params.confirmed=true or delegation"
        ),
        guardrail_name="require_confirmation",
    )
