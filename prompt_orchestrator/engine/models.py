"""
Data models for the orchestrator engine.

All models are plain dataclasses — no ORM, no Pydantic. Matches the
frozen-dataclass pattern in prompt_orchestrator.config.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class ExecutionMode(StrEnum):
    DIRECT = "direct"
    SIMPLE_DELEGATE = "simple_delegate"
    ORCHESTRATOR_DELEGATE = "orchestrator_delegate"


@dataclass(frozen=True)
class RoutingDecision:
    """Classification of a single request. Never mutated after creation."""

    mode: ExecutionMode
    complexity_score: int
    reasons: tuple[str, ...] = ()


@dataclass(frozen=True)
class RequestStartEvent:
    """A request is about to start an agent run."""

    prompt: str
    session_id: str | None = None
    messages: tuple[Any, ...] = ()


@dataclass(frozen=True)
class ToolCallEvent:
    """The agent is about to invoke a tool."""

    tool_name: str
    params: Mapping[str, Any] = field(default_factory=dict)
    session_id: str | None = None


@dataclass(frozen=True)
class MessagePersistEvent:
    """A tool-result message is about to be written to the transcript."""

    message: Mapping[str, Any]


OrchestratorEvent = RequestStartEvent | ToolCallEvent | MessagePersistEvent


@dataclass(frozen=True)
class EnvelopeResult:
    """Context block the host prepends to the agent's prompt."""

    prepend_context: str
