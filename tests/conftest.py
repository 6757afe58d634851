"""Shared test fixtures for artisan-studio-mcp."""

from __future__ import annotations

import base64
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from artisan_studio_mcp.errors import GenerationError
from artisan_studio_mcp.media import MediaPayload
from artisan_studio_mcp.pipeline import OperationStatus

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-png-body"
PNG_DATA_URI = "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode("ascii")
WAV_BYTES = b"RIFF\x00\x00\x00\x00WAVEfmt fake"
WAV_DATA_URI = "data:audio/wav;base64," + base64.b64encode(WAV_BYTES).decode("ascii")


def unwrap_tool(tool: Any) -> Any:
    """Extract the raw coroutine from a FastMCP FunctionTool, if wrapped.

    FastMCP 2.x wraps @server.tool functions in FunctionTool (not callable).
    FastMCP 3.x preserves the original function. This helper works with both.
    """
    return getattr(tool, "fn", tool)


class FakeClient:
    """Immediate client scripted per prompt.

    ``script`` maps a prompt to a list of results consumed in order; an
    exception instance is raised instead of returned. Unscripted prompts
    return ``f"payload:{prompt}"``.
    """

    def __init__(self, script: dict[str, list[Any]] | None = None) -> None:
        self.script = {k: list(v) for k, v in (script or {}).items()}
        self.calls: list[tuple[str, Any]] = []

    async def generate_immediate(self, prompt: str, media: Any) -> Any:
        self.calls.append((prompt, media))
        queue = self.script.get(prompt)
        result = queue.pop(0) if queue else f"payload:{prompt}"
        if isinstance(result, BaseException):
            raise result
        return result


class FakeImageClient(FakeClient):
    """FakeClient whose unscripted prompts return a PNG ``MediaPayload``."""

    async def generate_immediate(self, prompt: str, media: Any) -> Any:
        result = await super().generate_immediate(prompt, media)
        if isinstance(result, str):
            return MediaPayload(data=result.encode(), mime_type="image/png")
        return result


class FakeAsyncClient:
    """Submit-then-poll client: returns ``statuses`` in order from check_status."""

    def __init__(self, statuses: list[OperationStatus | Exception], handle: str = "operations/op-1") -> None:
        self.statuses = list(statuses)
        self.handle = handle
        self.submitted: list[tuple[str, Any]] = []
        self.checks: list[str] = []

    async def generate_async(self, prompt: str, media: Any) -> str:
        self.submitted.append((prompt, media))
        return self.handle

    async def check_status(self, operation_handle: str) -> OperationStatus:
        self.checks.append(operation_handle)
        status = self.statuses.pop(0)
        if isinstance(status, Exception):
            raise status
        return status


def gen_error(message: str = "provider failed") -> GenerationError:
    return GenerationError(message)


@pytest.fixture(autouse=True, scope="session")
def _unwrap_fastmcp_tools():
    """Patch tool modules so FunctionTool objects become directly callable.

    FastMCP 2.x wraps @server.tool in FunctionTool (not callable); 3.x
    preserves the function. This fixture unwraps at the module level so
    tests can ``await tool_func(...)`` regardless of FastMCP version.
    """
    import importlib
    import pkgutil

    import artisan_studio_mcp.tools as tools_pkg

    modules = []
    for info in pkgutil.walk_packages(tools_pkg.__path__, tools_pkg.__name__ + "."):
        try:
            modules.append(importlib.import_module(info.name))
        except Exception:
            pass

    for mod in modules:
        for name in list(vars(mod)):
            obj = getattr(mod, name, None)
            if obj is not None and hasattr(obj, "fn") and not callable(obj):
                setattr(mod, name, obj.fn)


@pytest.fixture(autouse=True)
def _set_dummy_api_key(monkeypatch):
    """Ensure tests never hit real Gemini API."""
    monkeypatch.setenv("GEMINI_API_KEY", "test-key-not-real")


@pytest.fixture(autouse=True)
def _disable_tracing(monkeypatch):
    """Disable MLflow tracing in all tests to avoid real tracking-server calls."""
    monkeypatch.setenv("GEMINI_TRACING_ENABLED", "false")


@pytest.fixture(autouse=True)
def _isolate_dotenv(tmp_path, monkeypatch):
    """Prevent tests from loading the user's real ~/.config/artisan-studio-mcp/.env."""
    monkeypatch.setattr(
        "artisan_studio_mcp.dotenv.DEFAULT_ENV_PATH",
        tmp_path / "nonexistent.env",
    )


@pytest.fixture()
def clean_config():
    """Reset the config singleton between tests."""
    import artisan_studio_mcp.config as cfg_mod

    cfg_mod._config = None
    yield
    cfg_mod._config = None


@pytest.fixture()
def mock_gemini_client():
    """Patch GeminiClient.get(), .generate(), and .generate_structured() for unit tests."""
    with (
        patch("artisan_studio_mcp.client.GeminiClient.get") as mock_get,
        patch(
            "artisan_studio_mcp.client.GeminiClient.generate", new_callable=AsyncMock
        ) as mock_gen,
        patch(
            "artisan_studio_mcp.client.GeminiClient.generate_structured",
            new_callable=AsyncMock,
        ) as mock_structured,
    ):
        client = MagicMock()
        mock_get.return_value = client
        yield {
            "get": mock_get,
            "generate": mock_gen,
            "generate_structured": mock_structured,
            "client": client,
        }
