"""Tests for output redaction before persist."""

from __future__ import annotations

from prompt_orchestrator.engine.context import ELLIPSIS
from prompt_orchestrator.engine.redaction import (
    PERSISTED_TEXT_MAX_CHARS,
    redact_block,
    redact_message,
)


class TestRedactBlock:
    def test_non_mapping_passes_through(self):
        for block in (None, "raw", 42, ["text"]):
            assert redact_block(block) is block

    def test_non_text_block_passes_through(self):
        block = {"type": "image", "data": "..."}
        assert redact_block(block) is block

    def test_malformed_text_passes_through(self):
        block = {"type": "text", "text": 123}
        assert redact_block(block) is block

    def test_text_normalized_and_copied(self):
        block = {"type": "text", "text": "a   b\n\nc", "id": "blk-1"}
        result = redact_block(block)
        assert result == {"type": "text", "text": "a b c", "id": "blk-1"}
        assert result is not block
        assert block["text"] == "a   b\n\nc"


class TestRedactMessage:
    def test_non_list_content_is_noop(self):
        assert redact_message({"role": "tool", "content": "plain string"}) is None
        assert redact_message({"role": "tool"}) is None

    def test_long_text_clipped(self):
        message = {"role": "tool", "content": [{"type": "text", "text": "z" * 2000}]}
        result = redact_message(message)
        text = result["content"][0]["text"]
        assert len(text) == PERSISTED_TEXT_MAX_CHARS
        assert text == "z" * (PERSISTED_TEXT_MAX_CHARS - 1) + ELLIPSIS

    def test_short_text_kept(self):
        message = {"content": [{"type": "text", "text": "ok"}]}
        assert redact_message(message)["content"][0]["text"] == "ok"

    def test_other_blocks_untouched(self):
        image = {"type": "image", "source": {"data": "x" * 5000}}
        message = {"role": "tool", "content": [image, "raw", {"type": "text", "text": "hi"}]}
        result = redact_message(message)
        assert result["content"][0] is image
        assert result["content"][1] == "raw"
        assert result["role"] == "tool"

    def test_original_not_mutated(self):
        content = [{"type": "text", "text": "y" * 700}]
        message = {"role": "tool", "content": content, "tool_call_id": "c1"}
        result = redact_message(message)
        assert result is not message
        assert result["content"] is not content
        assert message["content"][0]["text"] == "y" * 700
        assert result["tool_call_id"] == "c1"

    def test_tuple_content(self):
        result = redact_message({"content": ({"type": "text", "text": " a "},)})
        assert result["content"] == [{"type": "text", "text": "a"}]

    def test_empty_list(self):
        assert redact_message({"content": []}) == {"content": []}
