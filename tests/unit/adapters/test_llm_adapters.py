"""Tests for the Gemini and Claude adapters against mocked SDK clients."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from jira_triage.adapters.llm.claude_adapter import ClaudeAdapter
from jira_triage.adapters.llm.gemini_adapter import GeminiAdapter
from jira_triage.domain.exceptions import BackendUnavailableError

# ─── Gemini ─────────────────────────────────────────────────────────


def _gemini_client(text):
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(return_value=SimpleNamespace(text=text))
    return client


@pytest.mark.asyncio
async def test_gemini_returns_text():
    client = _gemini_client('{"scores": {}}')
    adapter = GeminiAdapter("key", "gemini-2.0-flash", client=client)

    text = await adapter.generate("prompt", temperature=0.1, max_tokens=50)

    assert text == '{"scores": {}}'
    kwargs = client.aio.models.generate_content.call_args.kwargs
    assert kwargs["model"] == "gemini-2.0-flash"
    assert kwargs["contents"] == "prompt"
    assert kwargs["config"].temperature == 0.1
    assert kwargs["config"].max_output_tokens == 50


@pytest.mark.asyncio
@pytest.mark.parametrize("text", [None, "", "   "])
async def test_gemini_empty_reply_raises(text):
    adapter = GeminiAdapter("key", "gemini-2.0-flash", client=_gemini_client(text))
    with pytest.raises(BackendUnavailableError):
        await adapter.generate("prompt", temperature=0.1, max_tokens=50)


@pytest.mark.asyncio
async def test_gemini_propagates_sdk_errors():
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(side_effect=RuntimeError("429"))
    adapter = GeminiAdapter("key", "gemini-2.0-flash", client=client)
    with pytest.raises(RuntimeError):
        await adapter.generate("prompt", temperature=0.3, max_tokens=2000)


def test_gemini_requires_key():
    with pytest.raises(ValueError):
        GeminiAdapter("", "gemini-2.0-flash", client=MagicMock())


# ─── Claude ─────────────────────────────────────────────────────────


def _claude_client(*blocks):
    client = MagicMock()
    client.messages.create = AsyncMock(return_value=SimpleNamespace(content=list(blocks)))
    return client


@pytest.mark.asyncio
async def test_claude_joins_text_blocks():
    client = _claude_client(
        SimpleNamespace(type="text", text="Data "),
        SimpleNamespace(type="tool_use", id="x"),
        SimpleNamespace(type="text", text="Import"),
    )
    adapter = ClaudeAdapter("key", "claude-3-5-sonnet-20241022", client=client)

    text = await adapter.generate("prompt", temperature=0.3, max_tokens=2000)

    assert text == "Data Import"
    kwargs = client.messages.create.call_args.kwargs
    assert kwargs["model"] == "claude-3-5-sonnet-20241022"
    assert kwargs["max_tokens"] == 2000
    assert kwargs["temperature"] == 0.3
    assert kwargs["messages"] == [{"role": "user", "content": "prompt"}]


@pytest.mark.asyncio
async def test_claude_empty_reply_raises():
    adapter = ClaudeAdapter("key", "claude-3-5-sonnet-20241022", client=_claude_client())
    with pytest.raises(BackendUnavailableError):
        await adapter.generate("prompt", temperature=0.3, max_tokens=2000)


def test_claude_requires_key():
    with pytest.raises(ValueError):
        ClaudeAdapter("", "claude-3-5-sonnet-20241022", client=MagicMock())


def test_labels():
    assert GeminiAdapter.label == "Gemini Flash 2.0"
    assert ClaudeAdapter.label == "Claude Sonnet"
