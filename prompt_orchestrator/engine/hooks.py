"""
Event Hooks — host-facing entry points of the orchestrator.

The host runtime delivers three kinds of events, each handled to completion
before the next one is dispatched:

- RequestStartEvent → classify, remember the mode, return the envelope
- ToolCallEvent → gate the call against the session's mode
- MessagePersistEvent → clip text blocks before they are stored
"""

from __future__ import annotations

import logging
from typing import Any

from prompt_orchestrator.config import OrchestratorConfig
from prompt_orchestrator.engine.context import render_envelope
from prompt_orchestrator.engine.guardrails import GuardrailResult, check_tool_call
from prompt_orchestrator.engine.models import (
    EnvelopeResult,
    MessagePersistEvent,
    OrchestratorEvent,
    RequestStartEvent,
    ToolCallEvent,
)
from prompt_orchestrator.engine.redaction import redact_message
from prompt_orchestrator.engine.router import classify_execution_mode
from prompt_orchestrator.engine.session import SessionModeStore

logger = logging.getLogger(__name__)


class PromptOrchestrator:
    """Owns the session mode store and routes host events to their handler."""

    def __init__(
        self,
        config: OrchestratorConfig,
        store: SessionModeStore | None = None,
    ) -> None:
        self.config = config
        self.sessions = store if store is not None else SessionModeStore(config.max_sessions)

    def on_request_start(self, event: RequestStartEvent) -> EnvelopeResult:
        decision = classify_execution_mode(event.prompt or "", self.config)
        self.sessions.record(event.session_id, decision.mode)
        logger.info(
            "Request start: session=%s mode=%s score=%d",
            event.session_id or "-",
            decision.mode,
            decision.complexity_score,
        )
        return EnvelopeResult(
            prepend_context=render_envelope(event.prompt, decision, self.config)
        )

    def on_tool_call(self, event: ToolCallEvent) -> GuardrailResult | None:
        """Return None to allow the call, or the blocking GuardrailResult."""
        mode = self.sessions.lookup(event.session_id)
        result = check_tool_call(event.tool_name, event.params, mode, self.config)
        if result.allowed:
            return None
        return result

    def on_message_persist(self, event: MessagePersistEvent) -> dict[str, Any] | None:
        """Return the redacted message, or None when nothing applies.

        None means "no change": the host persists its original message object.
        """
        return redact_message(event.message)

    def dispatch(
        self, event: OrchestratorEvent
    ) -> EnvelopeResult | GuardrailResult | dict[str, Any] | None:
        """Route an event to its handler."""
        match event:
            case RequestStartEvent():
                return self.on_request_start(event)
            case ToolCallEvent():
                return self.on_tool_call(event)
            case MessagePersistEvent():
                return self.on_message_persist(event)
            case _:
                raise TypeError(f"Unsupported event type: {type(event).__name__}")
