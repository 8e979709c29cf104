"""Tests for tool-call gating."""

from __future__ import annotations

from prompt_orchestrator.config import DEFAULT_HIGH_RISK_TOOLS, OrchestratorConfig
from prompt_orchestrator.engine.guardrails import check_tool_call, is_high_risk_tool
from prompt_orchestrator.engine.models import ExecutionMode

CONFIRM = OrchestratorConfig(high_risk_tools=("exec",), require_confirmation=True)
NO_CONFIRM = OrchestratorConfig(high_risk_tools=("exec",), require_confirmation=False)


class TestIsHighRiskTool:
    def test_exact_match(self):
        assert is_high_risk_tool("exec", ["exec"])

    def test_substring_match(self):
        assert is_high_risk_tool("shell_exec_v2", ["exec"])

    def test_case_insensitive(self):
        assert is_high_risk_tool("Bash", ["BASH"])

    def test_no_match(self):
        assert not is_high_risk_tool("read_file", ["exec", "bash"])

    def test_empty_tokens_ignored(self):
        assert not is_high_risk_tool("read_file", ["", "exec"])

    def test_default_tokens_are_broad(self):
        # "rm" also catches "confirm" or "format": intentional broad match
        assert is_high_risk_tool("format_code", DEFAULT_HIGH_RISK_TOOLS)
        assert is_high_risk_tool("apply_patch", DEFAULT_HIGH_RISK_TOOLS)
        assert not is_high_risk_tool("search", DEFAULT_HIGH_RISK_TOOLS)


class TestCheckToolCall:
    def test_safe_tool_allowed(self):
        result = check_tool_call("read_file", {}, ExecutionMode.ORCHESTRATOR_DELEGATE, CONFIRM)
        assert result.allowed
        assert result.action == "allowed"

    def test_unconfirmed_blocked(self):
        result = check_tool_call("exec", {"cmd": "rm -rf /tmp/x"}, None, CONFIRM)
        assert not result.allowed
        assert result.action == "blocked"
        assert result.guardrail_name == "require_confirmation"
        assert "params.confirmed=true" in result.reason

    def test_confirmed_allowed(self):
        result = check_tool_call("exec", {"confirmed": True}, None, CONFIRM)
        assert result.allowed

    def test_truthy_non_bool_not_confirmation(self):
        for value in ("true", 1, "yes"):
            result = check_tool_call("exec", {"confirmed": value}, None, CONFIRM)
            assert not result.allowed

    def test_none_params(self):
        result = check_tool_call("exec", None, None, CONFIRM)
        assert not result.allowed

    def test_confirmation_disabled(self):
        result = check_tool_call("exec", {}, ExecutionMode.DIRECT, NO_CONFIRM)
        assert result.allowed

    def test_orchestrator_mode_blocks_even_when_confirmed(self):
        result = check_tool_call(
            "exec", {"confirmed": True}, ExecutionMode.ORCHESTRATOR_DELEGATE, CONFIRM
        )
        assert not result.allowed
        assert result.guardrail_name == "orchestrator_delegation"
        assert "sessions_spawn" in result.reason

    def test_orchestrator_mode_blocks_when_confirmation_disabled(self):
        result = check_tool_call("exec", {}, ExecutionMode.ORCHESTRATOR_DELEGATE, NO_CONFIRM)
        assert not result.allowed

    def test_spawn_tool_exempt_from_orchestrator_rule(self):
        config = OrchestratorConfig(high_risk_tools=("spawn",), require_confirmation=False)
        result = check_tool_call(
            "Sessions_Spawn", {}, ExecutionMode.ORCHESTRATOR_DELEGATE, config
        )
        assert result.allowed

    def test_spawn_tool_still_needs_confirmation(self):
        config = OrchestratorConfig(high_risk_tools=("spawn",), require_confirmation=True)
        result = check_tool_call(
            "sessions_spawn", {}, ExecutionMode.ORCHESTRATOR_DELEGATE, config
        )
        assert result.guardrail_name == "require_confirmation"

    def test_custom_spawn_tool(self):
        config = OrchestratorConfig(high_risk_tools=("exec",), spawn_tool="delegate_exec")
        result = check_tool_call(
            "delegate_exec", {"confirmed": True}, ExecutionMode.ORCHESTRATOR_DELEGATE, config
        )
        assert result.allowed
        blocked = check_tool_call("exec", {}, ExecutionMode.ORCHESTRATOR_DELEGATE, config)
        assert "delegate_exec" in blocked.reason

    def test_simple_delegate_uses_confirmation_rule(self):
        result = check_tool_call("exec", {}, ExecutionMode.SIMPLE_DELEGATE, CONFIRM)
        assert result.guardrail_name == "require_confirmation"
        assert check_tool_call(
            "exec", {"confirmed": True}, ExecutionMode.SIMPLE_DELEGATE, CONFIRM
        ).allowed

    def test_empty_risk_list_allows_everything(self):
        config = OrchestratorConfig(high_risk_tools=())
        assert check_tool_call("bash", {}, ExecutionMode.ORCHESTRATOR_DELEGATE, config).allowed
