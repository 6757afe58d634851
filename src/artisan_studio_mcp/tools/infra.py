"""Infrastructure tools — 1 tool on a FastMCP sub-server."""

from __future__ import annotations

from typing import Annotated

from fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import Field

from ..config import MODEL_PRESETS, get_config, update_config
from ..errors import make_tool_error
from ..tracing import trace
from ..types import ModelPreset

infra_server = FastMCP("infra")
_SENSITIVE_CONFIG_FIELDS = {
    "gemini_api_key",
    "infra_admin_token",
}
_PRESET_FIELDS = ("text_model", "image_model", "video_model")


def _redacted_config() -> dict:
    """Return runtime config with secret-bearing fields removed."""
    return get_config().model_dump(exclude=_SENSITIVE_CONFIG_FIELDS)


def _enforce_mutation_policy(auth_token: str | None) -> None:
    """Gate config changes behind explicit policy + optional token."""
    cfg = get_config()
    if not cfg.infra_mutations_enabled:
        raise PermissionError(
            "Infra mutations are disabled by policy. "
            "Set INFRA_MUTATIONS_ENABLED=true to enable mutating infra tools."
        )
    if cfg.infra_admin_token and auth_token != cfg.infra_admin_token:
        raise PermissionError(
            "Invalid or missing infra auth token for mutating operation."
        )


@infra_server.tool(
    annotations=ToolAnnotations(
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    )
)
@trace(name="infra_configure", span_type="TOOL")
async def infra_configure(
    preset: Annotated[ModelPreset | None, Field(
        description='Named model preset: "quality" (2.5 Pro, Veo 3.1) or "fast" (2.5 Flash, Veo 3.1 Fast)',
    )] = None,
    text_model: Annotated[str | None, Field(description="Gemini text model override")] = None,
    image_model: Annotated[str | None, Field(description="Gemini image model override")] = None,
    video_model: Annotated[str | None, Field(description="Veo model override")] = None,
    temperature: Annotated[float | None, Field(ge=0.0, le=2.0, description="Default sampling temperature")] = None,
    video_poll_interval: Annotated[float | None, Field(gt=0, description="Seconds between video status checks")] = None,
    video_poll_max_attempts: Annotated[int | None, Field(ge=1, description="Video status checks before timeout")] = None,
    auth_token: Annotated[str | None, Field(
        description="Optional infra auth token (required when INFRA_ADMIN_TOKEN is configured)",
    )] = None,
) -> dict:
    """Read or reconfigure the server at runtime — models, temperature, video polling.

    Called with no arguments it only reports the current config. Changes
    take effect immediately for all subsequent tool calls.

    Args:
        preset: Named model preset — sets text, image and video models together.
        text_model: Text model (takes precedence over the preset).
        image_model: Image model (takes precedence over the preset).
        video_model: Video model (takes precedence over the preset).
        temperature: Default sampling temperature (0.0–2.0).
        video_poll_interval: Seconds between video status checks.
        video_poll_max_attempts: Status checks before a video times out.

    Returns:
        Dict with current_config, active_preset, and available_presets.
    """
    try:
        overrides: dict[str, object] = {}

        if preset is not None:
            if preset not in MODEL_PRESETS:
                valid = ", ".join(sorted(MODEL_PRESETS))
                raise ValueError(f"Unknown preset '{preset}'. Available: {valid}")
            for field in _PRESET_FIELDS:
                overrides[field] = MODEL_PRESETS[preset][field]

        # Explicit models override the preset
        for field, value in (("text_model", text_model), ("image_model", image_model), ("video_model", video_model)):
            if value is not None:
                overrides[field] = value
        if temperature is not None:
            overrides["default_temperature"] = temperature
        if video_poll_interval is not None:
            overrides["video_poll_interval"] = video_poll_interval
        if video_poll_max_attempts is not None:
            overrides["video_poll_max_attempts"] = video_poll_max_attempts

        if overrides:
            _enforce_mutation_policy(auth_token)
            cfg = update_config(**overrides)
        else:
            cfg = get_config()

        active = None
        for name, p in MODEL_PRESETS.items():
            if all(getattr(cfg, f) == p[f] for f in _PRESET_FIELDS):
                active = name
                break

        return {
            "current_config": _redacted_config(),
            "active_preset": active,
            "available_presets": {k: v["label"] for k, v in MODEL_PRESETS.items()},
        }
    except Exception as exc:
        return make_tool_error(exc)
