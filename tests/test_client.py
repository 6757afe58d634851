"""Tests for the shared Gemini client pool and generation helpers."""

from __future__ import annotations

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pydantic import ValidationError

from artisan_studio_mcp.client import GeminiClient
from artisan_studio_mcp.models.marketing import CampaignOverview


@pytest.fixture()
def fake_genai():
    """Swap the pooled client for a MagicMock with an async generate_content."""
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock()
    client.aio.aclose = AsyncMock()
    with patch.object(GeminiClient, "get", return_value=client):
        yield client


def _response(*parts, text=None):
    return SimpleNamespace(
        candidates=[SimpleNamespace(content=SimpleNamespace(parts=list(parts)))],
        text=text,
    )


class TestGet:
    def test_missing_key_raises(self, clean_config, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
        with pytest.raises(ValueError, match="No Gemini API key"):
            GeminiClient.get()

    def test_one_client_per_key(self, clean_config, monkeypatch):
        monkeypatch.setattr(GeminiClient, "_clients", {})
        with patch("artisan_studio_mcp.client.genai.Client") as ctor:
            first = GeminiClient.get("key-a")
            assert GeminiClient.get("key-a") is first
            GeminiClient.get("key-b")
        assert ctor.call_count == 2


class TestGenerate:
    async def test_joins_text_parts_and_skips_thoughts(self, clean_config, fake_genai):
        fake_genai.aio.models.generate_content.return_value = _response(
            SimpleNamespace(text="thinking...", thought=True),
            SimpleNamespace(text="Shubh", thought=False),
            SimpleNamespace(text="Deepavali", thought=False),
        )

        text = await GeminiClient.generate("caption please", temperature=0.2, system_instruction="sys")

        assert text == "Shubh\nDeepavali"
        kwargs = fake_genai.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-2.5-flash"
        assert kwargs["config"].temperature == 0.2
        assert kwargs["config"].system_instruction == "sys"

    async def test_uses_config_defaults(self, clean_config, fake_genai, monkeypatch):
        monkeypatch.setenv("GEMINI_TEXT_MODEL", "text-from-env")
        fake_genai.aio.models.generate_content.return_value = _response(SimpleNamespace(text="ok", thought=False))

        await GeminiClient.generate("hi")

        kwargs = fake_genai.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "text-from-env"
        assert kwargs["config"].temperature == 0.7

    async def test_structured_output_validates(self, clean_config, fake_genai):
        payload = {"caption": "Glow this Diwali", "hashtags": ["#Diwali"]}
        fake_genai.aio.models.generate_content.return_value = _response(
            SimpleNamespace(text=json.dumps(payload), thought=False),
        )

        overview = await GeminiClient.generate_structured("overview", schema=CampaignOverview)

        assert overview == CampaignOverview(**payload)
        config = fake_genai.aio.models.generate_content.call_args.kwargs["config"]
        assert config.response_mime_type == "application/json"

    async def test_structured_output_rejects_mismatch(self, clean_config, fake_genai):
        fake_genai.aio.models.generate_content.return_value = _response(
            SimpleNamespace(text='{"hashtags": []}', thought=False),
        )
        with pytest.raises(ValidationError):
            await GeminiClient.generate_structured("overview", schema=CampaignOverview)


class TestCloseAll:
    async def test_closes_and_clears(self, monkeypatch):
        good, bad = MagicMock(), MagicMock()
        good.aio.aclose = AsyncMock()
        bad.aio.aclose = AsyncMock(side_effect=RuntimeError("already closed"))
        monkeypatch.setattr(GeminiClient, "_clients", {"a": good, "b": bad})

        assert await GeminiClient.close_all() == 2
        good.close.assert_called_once()
        bad.close.assert_called_once()
        assert GeminiClient._clients == {}
