"""
Output Redaction — clips text blocks of tool results before they are persisted.

Only list-shaped content is rewritten, and only blocks of the form
{"type": "text", "text": <str>}. Everything else is passed through by
reference. The input message is never modified; a new message is returned.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from prompt_orchestrator.engine.context import clean_text, clip

logger = logging.getLogger(__name__)

PERSISTED_TEXT_MAX_CHARS = 600


def redact_block(block: Any) -> Any:
    """Return a clipped copy of a text block, or the block itself otherwise."""
    if not isinstance(block, Mapping):
        return block
    if block.get("type") != "text" or not isinstance(block.get("text"), str):
        return block
    return {**block, "text": clip(clean_text(block["text"]), PERSISTED_TEXT_MAX_CHARS)}


def redact_message(message: Mapping[str, Any]) -> dict[str, Any] | None:
    """Clip the text blocks of a persisted message.

    Returns None (no change) when the content is not a list of blocks; the
    caller then keeps the original message object as-is.
    """
    content = message.get("content")
    if not isinstance(content, list | tuple):
        return None

    next_content = [redact_block(block) for block in content]
    clipped = sum(1 for old, new in zip(content, next_content, strict=True) if old is not new)
    if clipped:
        logger.debug("Redacted %d text block(s) before persist", clipped)
    return {**message, "content": next_content}
