"""
Context Envelope — bounded structured block prepended to the agent's prompt.

The envelope restates the request intent, fixed success criteria and hard
constraints, the routing reasons, the tool-confirmation policy and the
execution mode. Free-text parts are whitespace-normalized and clipped so the
block stays within max_prompt_chars.
"""

from __future__ import annotations

import logging
import re

from prompt_orchestrator.config import OrchestratorConfig
from prompt_orchestrator.engine.models import ExecutionMode, RoutingDecision

logger = logging.getLogger(__name__)

ELLIPSIS = "…"

# Share of max_prompt_chars given to the restated intent
INTENT_BUDGET_RATIO = 0.65

ENVELOPE_OPEN = "[prompt_orchestrator]"
ENVELOPE_CLOSE = "[/prompt_orchestrator]"

SUCCESS_CRITERIA = "execute safely, minimize prompt bloat, keep outputs concise"
HARD_CONSTRAINTS = "follow repo policies; avoid risky mutations without confirmation"
MEMORY_PLACEHOLDER = (
    "No SlimRAG memory retrieved yet. Plugin execution started with bounded context only."
)

TOOL_POLICY_CONFIRM = "mutating/risky tools require params.confirmed=true"
TOOL_POLICY_OPEN = "risky tools allowed by plugin config"

_WHITESPACE = re.compile(r"\s+")


def clean_text(text: str) -> str:
    """Collapse whitespace runs to single spaces and trim the ends."""
    return _WHITESPACE.sub(" ", text).strip()


def clip(text: str, max_chars: int) -> str:
    """Truncate to max_chars, replacing the last kept character with an ellipsis."""
    if len(text) <= max_chars:
        return text
    return f"{text[:max(0, max_chars - 1)]}{ELLIPSIS}"


def tool_policy_statement(config: OrchestratorConfig) -> str:
    if not config.require_confirmation:
        return TOOL_POLICY_OPEN
    return TOOL_POLICY_CONFIRM


def delegate_agent_for(mode: ExecutionMode, config: OrchestratorConfig) -> str:
    """Configured delegate agent for a mode, or "" when none applies."""
    if mode == ExecutionMode.SIMPLE_DELEGATE:
        return config.simple_delegate_agent_id
    if mode == ExecutionMode.ORCHESTRATOR_DELEGATE:
        return config.orchestrator_agent_id
    return ""


def risk_flags_text(reasons: tuple[str, ...], keep: int | None = None) -> str:
    """Join the first ``keep`` reason tags; an ellipsis marks dropped tags."""
    if not reasons:
        return "none"
    if keep is None or keep >= len(reasons):
        return ",".join(reasons)
    kept = reasons[: max(0, keep)]
    return ",".join([*kept, ELLIPSIS])


def render_envelope(
    prompt: str,
    decision: RoutingDecision,
    config: OrchestratorConfig,
) -> str:
    """Render the envelope for a classified request.

    The whole block is kept within max_prompt_chars: trailing reason tags are
    dropped first, then the intent is clipped further. The fixed lines are
    never cut, so a budget smaller than the envelope with an empty intent and
    no tags cannot be met; that minimal envelope is returned instead.
    """
    budget = config.max_prompt_chars
    intent_budget = int(budget * INTENT_BUDGET_RATIO)
    intent = clip(clean_text(prompt or ""), intent_budget)
    memory = clip(MEMORY_PLACEHOLDER, config.max_memory_chars)
    delegate = delegate_agent_for(decision.mode, config)

    def assemble(intent_text: str, keep: int) -> str:
        lines = [
            ENVELOPE_OPEN,
            f"task_intent: {intent_text}",
            f"success_criteria: {SUCCESS_CRITERIA}",
            f"hard_constraints: {HARD_CONSTRAINTS}",
            f"risk_flags: {risk_flags_text(decision.reasons, keep)}",
            f"tool_policy: {tool_policy_statement(config)}",
            f"retrieved_memory: {memory}",
            f"execution_mode: {decision.mode}",
        ]
        if delegate:
            lines.append(f"delegate_agent: {delegate}")
        lines.append(ENVELOPE_CLOSE)
        return "\n".join(lines)

    keep = len(decision.reasons)
    envelope = assemble(intent, keep)
    while len(envelope) > budget and keep > 0:
        keep -= 1
        envelope = assemble(intent, keep)

    overflow = len(envelope) - budget
    if overflow > 0 and intent:
        target = len(intent) - overflow
        intent = clip(intent, target) if target > 0 else ""
        envelope = assemble(intent, keep)

    if len(envelope) > budget:
        logger.warning(
            "Envelope fixed lines exceed max_prompt_chars=%d (%d chars)", budget, len(envelope)
        )
    logger.debug("Rendered envelope: %d chars, mode=%s", len(envelope), decision.mode)
    return envelope
