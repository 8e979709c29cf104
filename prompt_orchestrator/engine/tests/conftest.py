"""
Test fixtures for the orchestrator engine.

- Default and tuned configs
- A fresh orchestrator (own session store) per test
"""

from __future__ import annotations

import pytest

from prompt_orchestrator.config import OrchestratorConfig
from prompt_orchestrator.engine.hooks import PromptOrchestrator


@pytest.fixture
def default_config() -> OrchestratorConfig:
    return OrchestratorConfig()


@pytest.fixture
def low_threshold_config() -> OrchestratorConfig:
    """Threshold 3 with only "exec" treated as risky."""
    return OrchestratorConfig(
        complexity_threshold=3,
        require_confirmation=True,
        high_risk_tools=("exec",),
    )


@pytest.fixture
def orchestrator(low_threshold_config) -> PromptOrchestrator:
    return PromptOrchestrator(low_threshold_config)


@pytest.fixture
def complex_prompt() -> str:
    return (
        "Refactor auth flow across src/a.ts src/b.ts src/c.ts, "
        "then deploy and add rollback plan for production"
    )
