"""Tests for the optional MLflow tracing integration."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

import artisan_studio_mcp.tracing as mod
from artisan_studio_mcp.config import _resolve_tracing_enabled


def _make_config(**overrides):
    """Build a mock ServerConfig with tracing-enabled defaults."""
    defaults = {
        "tracing_enabled": True,
        "mlflow_tracking_uri": "http://127.0.0.1:5001",
        "mlflow_experiment_name": "artisan-studio-mcp",
    }
    defaults.update(overrides)
    cfg = MagicMock()
    for k, v in defaults.items():
        setattr(cfg, k, v)
    return cfg


@pytest.fixture()
def fake_mlflow(monkeypatch):
    """Install a MagicMock in place of the mlflow module and mark it importable."""
    mock_mlflow = MagicMock()
    monkeypatch.setattr(mod, "_HAS_MLFLOW", True)
    monkeypatch.setattr(mod, "mlflow", mock_mlflow, raising=False)
    return mock_mlflow


class TestIsEnabled:
    def test_true_when_installed_and_enabled(self, fake_mlflow):
        with patch("artisan_studio_mcp.config.get_config", return_value=_make_config()):
            assert mod.is_enabled() is True

    def test_false_when_not_installed(self, monkeypatch):
        monkeypatch.setattr(mod, "_HAS_MLFLOW", False)
        assert mod.is_enabled() is False

    def test_false_when_config_disabled(self, fake_mlflow):
        cfg = _make_config(tracing_enabled=False)
        with patch("artisan_studio_mcp.config.get_config", return_value=cfg):
            assert mod.is_enabled() is False


class TestTraceDecorator:
    def test_identity_when_disabled(self, monkeypatch):
        monkeypatch.setattr(mod, "_HAS_MLFLOW", False)

        async def tool():
            return 1

        assert mod.trace(name="enhance_image", span_type="TOOL")(tool) is tool

    def test_wraps_with_mlflow_when_enabled(self, fake_mlflow):
        with patch("artisan_studio_mcp.config.get_config", return_value=_make_config()):
            mod.trace(name="enhance_image", span_type="TOOL")
        fake_mlflow.trace.assert_called_once_with(
            None, name="enhance_image", span_type="TOOL", attributes=None,
        )


class TestSetup:
    def test_calls_autolog(self, fake_mlflow):
        """GIVEN tracing enabled THEN calls set_tracking_uri, set_experiment, autolog."""
        with patch("artisan_studio_mcp.config.get_config", return_value=_make_config()):
            mod.setup()

        fake_mlflow.set_tracking_uri.assert_called_once_with("http://127.0.0.1:5001")
        fake_mlflow.set_experiment.assert_called_once_with("artisan-studio-mcp")
        fake_mlflow.gemini.autolog.assert_called_once()

    def test_noop_when_disabled(self, fake_mlflow, monkeypatch):
        monkeypatch.setattr(mod, "_HAS_MLFLOW", False)
        mod.setup()
        fake_mlflow.set_tracking_uri.assert_not_called()

    def test_setup_swallows_exceptions(self, fake_mlflow):
        """GIVEN set_experiment raises THEN setup logs a warning and does not propagate."""
        fake_mlflow.set_experiment.side_effect = Exception("connection refused")
        with patch("artisan_studio_mcp.config.get_config", return_value=_make_config()):
            mod.setup()
        fake_mlflow.gemini.autolog.assert_not_called()


class TestShutdown:
    def test_flushes(self, fake_mlflow):
        with patch("artisan_studio_mcp.config.get_config", return_value=_make_config()):
            mod.shutdown()
        fake_mlflow.flush_trace_async_logging.assert_called_once()

    def test_noop_when_disabled(self, fake_mlflow, monkeypatch):
        monkeypatch.setattr(mod, "_HAS_MLFLOW", False)
        mod.shutdown()
        fake_mlflow.flush_trace_async_logging.assert_not_called()


class TestResolveTracingEnabled:
    @pytest.mark.parametrize(("flag", "uri", "expected"), [
        ("", "http://127.0.0.1:5001", True),
        ("", "", False),
        ("false", "http://127.0.0.1:5001", False),
        ("False", "http://127.0.0.1:5001", False),
        ("true", "http://127.0.0.1:5001", True),
        ("true", "", False),
    ])
    def test_resolution(self, flag, uri, expected):
        assert _resolve_tracing_enabled(flag, uri) is expected
