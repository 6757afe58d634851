"""Tests for infrastructure tools."""

from __future__ import annotations

import pytest

import artisan_studio_mcp.config as cfg_mod
import artisan_studio_mcp.tools.infra as infra_mod
from tests.conftest import unwrap_tool

infra_configure = unwrap_tool(infra_mod.infra_configure)


@pytest.fixture(autouse=True)
def _clean_config(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "test")
    monkeypatch.setenv("INFRA_MUTATIONS_ENABLED", "true")
    monkeypatch.delenv("INFRA_ADMIN_TOKEN", raising=False)
    cfg_mod._config = None
    yield
    cfg_mod._config = None


class TestInfraTools:
    async def test_infra_configure_updates_runtime_config(self):
        out = await infra_configure(text_model="gemini-test", temperature=0.4, video_poll_max_attempts=10)
        cfg = out["current_config"]
        assert cfg["text_model"] == "gemini-test"
        assert cfg["default_temperature"] == 0.4
        assert cfg["video_poll_max_attempts"] == 10
        assert "gemini_api_key" not in cfg

    async def test_infra_configure_redacts_secret_fields(self, monkeypatch):
        monkeypatch.setenv("INFRA_ADMIN_TOKEN", "infra-secret")
        cfg_mod._config = None

        cfg = (await infra_configure())["current_config"]

        assert "gemini_api_key" not in cfg
        assert "infra_admin_token" not in cfg

    async def test_preset_sets_all_models(self):
        out = await infra_configure(preset="quality")
        cfg = out["current_config"]
        assert cfg["text_model"] == "gemini-2.5-pro"
        assert cfg["video_model"] == "veo-3.1-generate-preview"
        assert out["active_preset"] == "quality"

    async def test_preset_with_model_override(self):
        out = await infra_configure(preset="quality", video_model="veo-custom")
        assert out["current_config"]["video_model"] == "veo-custom"
        assert out["current_config"]["text_model"] == "gemini-2.5-pro"
        assert out["active_preset"] is None

    async def test_invalid_preset_returns_error(self):
        out = await infra_configure(preset="turbo")
        assert out["category"] == "INPUT_INVALID"
        assert "Unknown preset" in out["error"]

    async def test_invalid_poll_interval_returns_error(self):
        out = await infra_configure(video_poll_interval=-1)
        assert out["category"] == "INPUT_INVALID"
        assert cfg_mod.get_config().video_poll_interval == 5.0

    async def test_response_includes_presets(self):
        out = await infra_configure()
        assert set(out["available_presets"]) == {"quality", "fast"}
        assert out["active_preset"] == "fast"

    async def test_infra_configure_blocks_mutation_when_disabled(self, monkeypatch):
        monkeypatch.setenv("INFRA_MUTATIONS_ENABLED", "false")
        cfg_mod._config = None

        out = await infra_configure(text_model="gemini-test")

        assert out["category"] == "PERMISSION_DENIED"
        assert out["retryable"] is False

    async def test_infra_configure_allows_read_only_when_disabled(self, monkeypatch):
        monkeypatch.setenv("INFRA_MUTATIONS_ENABLED", "false")
        cfg_mod._config = None

        out = await infra_configure()

        assert "current_config" in out
        assert out["active_preset"] == "fast"

    async def test_infra_configure_requires_token_when_configured(self, monkeypatch):
        monkeypatch.setenv("INFRA_ADMIN_TOKEN", "top-secret")
        cfg_mod._config = None

        denied = await infra_configure(text_model="gemini-test")
        assert denied["category"] == "PERMISSION_DENIED"

        allowed = await infra_configure(text_model="gemini-test", auth_token="top-secret")
        assert allowed["current_config"]["text_model"] == "gemini-test"
