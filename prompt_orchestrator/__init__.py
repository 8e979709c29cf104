"""Prompt Orchestrator — complexity routing and tool gating for agent runtimes."""

__version__ = "0.1.0"
