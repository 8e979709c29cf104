"""
Root-level shared test fixtures.

Inherited by the engine suite and the repo-level tests.
"""

from __future__ import annotations

import pytest


@pytest.fixture
def clean_env(monkeypatch):
    """Remove orchestrator env vars that leak between tests."""
    for key in [
        "PROMPT_ORCHESTRATOR_CONFIG",
        "PROMPT_ORCHESTRATOR_COMPLEXITY_THRESHOLD",
        "PROMPT_ORCHESTRATOR_MAX_PROMPT_CHARS",
        "PROMPT_ORCHESTRATOR_MAX_MEMORY_CHARS",
        "PROMPT_ORCHESTRATOR_REQUIRE_CONFIRMATION",
        "PROMPT_ORCHESTRATOR_HIGH_RISK_TOOLS",
        "PROMPT_ORCHESTRATOR_SPAWN_TOOL",
        "PROMPT_ORCHESTRATOR_MAX_SESSIONS",
    ]:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def config_file(tmp_path):
    """Write a YAML config file and return its path."""
    path = tmp_path / "prompt-orchestrator.yaml"
    path.write_text(
        """complexity_threshold: 3
max_prompt_chars: 1000
require_confirmation_for_mutations: true
high_risk_tools:
  - exec
  - shell
orchestrator_agent_id: planner
improver:
  run_every_hours: 12
  mode: gated_apply
  allowed_write_paths: [prompts/**]
"""
    )
    return path
