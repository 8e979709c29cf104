"""
Complexity Router — scores a request and picks an execution mode.

The score is a deterministic, explainable heuristic: every signal adds a
fixed number of points and a reason tag. Signals (in detection order):
1. File mentions (3+ paths with a known extension)
2. Sequencing cues (3+ of first/then/after/finally/next)
3. Domain-risk keywords (one point per distinct keyword)
4. Raw request length
"""

from __future__ import annotations

import logging
import re

from prompt_orchestrator.config import DEFAULT_COMPLEXITY_THRESHOLD, OrchestratorConfig
from prompt_orchestrator.engine.models import ExecutionMode, RoutingDecision

logger = logging.getLogger(__name__)

FILE_MENTION_PATTERN = re.compile(r"\b[a-z0-9_/-]+\.(ts|tsx|js|json|md|yml|yaml)\b", re.ASCII)
STEP_CUE_PATTERN = re.compile(r"\b(first|then|after|finally|next)\b", re.ASCII)

COMPLEXITY_KEYWORDS = (
    "refactor",
    "migration",
    "orchestrator",
    "rollback",
    "security",
    "release",
    "deploy",
    "multi-step",
    "complex",
    "dangerous",
    "production",
)

# Signal weights
FILE_MENTION_MIN = 3
FILE_MENTION_POINTS = 3
STEP_CUE_MIN = 3
STEP_CUE_POINTS = 2
KEYWORD_POINTS = 1
LONG_REQUEST_CHARS = 900
LONG_REQUEST_POINTS = 2

# Points above the threshold that escalate simple_delegate → orchestrator_delegate
ORCHESTRATOR_MARGIN = 4


def score_complexity(prompt: str) -> RoutingDecision:
    """Score a request. The returned mode is always DIRECT; see classify_mode."""
    normalized = prompt.lower()
    reasons: list[str] = []
    score = 0

    file_mentions = sum(1 for _ in FILE_MENTION_PATTERN.finditer(normalized))
    if file_mentions >= FILE_MENTION_MIN:
        score += FILE_MENTION_POINTS
        reasons.append("multi-file scope")

    step_cues = sum(1 for _ in STEP_CUE_PATTERN.finditer(normalized))
    if step_cues >= STEP_CUE_MIN:
        score += STEP_CUE_POINTS
        reasons.append("multi-step sequencing")

    for keyword in COMPLEXITY_KEYWORDS:
        if keyword in normalized:
            score += KEYWORD_POINTS
            reasons.append(f"keyword:{keyword}")

    if len(prompt) > LONG_REQUEST_CHARS:
        score += LONG_REQUEST_POINTS
        reasons.append("long request")

    return RoutingDecision(
        mode=ExecutionMode.DIRECT,
        complexity_score=score,
        reasons=tuple(reasons),
    )


def classify_mode(score: int, threshold: int = DEFAULT_COMPLEXITY_THRESHOLD) -> ExecutionMode:
    """Map a complexity score onto an execution mode."""
    if score >= threshold + ORCHESTRATOR_MARGIN:
        return ExecutionMode.ORCHESTRATOR_DELEGATE
    if score >= threshold:
        return ExecutionMode.SIMPLE_DELEGATE
    return ExecutionMode.DIRECT


def classify_execution_mode(prompt: str, config: OrchestratorConfig) -> RoutingDecision:
    """Score a request and classify it against the configured threshold."""
    baseline = score_complexity(prompt)
    mode = classify_mode(baseline.complexity_score, config.complexity_threshold)
    logger.debug(
        "Classified request: score=%d threshold=%d mode=%s reasons=%s",
        baseline.complexity_score,
        config.complexity_threshold,
        mode,
        ",".join(baseline.reasons) or "none",
    )
    return RoutingDecision(
        mode=mode,
        complexity_score=baseline.complexity_score,
        reasons=baseline.reasons,
    )
