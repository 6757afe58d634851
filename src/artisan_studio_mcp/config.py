"""Server configuration via environment variables."""

from __future__ import annotations

import os

from pydantic import BaseModel, Field, field_validator

MODEL_PRESETS: dict[str, dict[str, str]] = {
    "quality": {
        "text_model": "gemini-2.5-pro",
        "image_model": "gemini-2.5-flash-image",
        "video_model": "veo-3.1-generate-preview",
        "label": "Best output — 2.5 Pro copy, Veo 3.1 full video (slowest, lowest quotas)",
    },
    "fast": {
        "text_model": "gemini-2.5-flash",
        "image_model": "gemini-2.5-flash-image",
        "video_model": "veo-3.1-fast-generate-preview",
        "label": "Default — 2.5 Flash copy, Veo 3.1 Fast video",
    },
}

DEFAULT_MAX_MEDIA_BYTES = 7 * 1024 * 1024  # Gemini inline request ceiling


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes")


def _resolve_tracing_enabled(flag_value: str, tracking_uri: str) -> bool:
    """Tracing is on when a tracking URI is set, unless explicitly disabled."""
    if flag_value.lower() == "false":
        return False
    return bool(tracking_uri)


class ServerConfig(BaseModel):
    """Runtime configuration resolved from environment."""

    gemini_api_key: str = Field(default="")
    text_model: str = Field(default="gemini-2.5-flash")
    vision_model: str = Field(default="gemini-2.5-flash")
    image_model: str = Field(default="gemini-2.5-flash-image")
    video_model: str = Field(default="veo-3.1-fast-generate-preview")
    default_temperature: float = Field(default=0.7)
    max_media_bytes: int = Field(default=DEFAULT_MAX_MEDIA_BYTES)
    video_poll_interval: float = Field(default=5.0)
    video_poll_max_attempts: int = Field(default=120)
    retry_max_attempts: int = Field(default=3)
    retry_base_delay: float = Field(default=1.0)
    retry_max_delay: float = Field(default=60.0)
    local_file_access_root: str = Field(default="")
    infra_mutations_enabled: bool = Field(default=False)
    infra_admin_token: str = Field(default="")
    tracing_enabled: bool = Field(default=False)
    mlflow_tracking_uri: str = Field(default="")
    mlflow_experiment_name: str = Field(default="artisan-studio-mcp")

    @field_validator("max_media_bytes", "video_poll_max_attempts", "retry_max_attempts")
    @classmethod
    def validate_positive_ints(cls, value: int) -> int:
        if value < 1:
            raise ValueError("Configuration values must be >= 1")
        return value

    @field_validator("video_poll_interval", "retry_base_delay", "retry_max_delay")
    @classmethod
    def validate_positive_delays(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("Delay values must be > 0")
        return value

    @field_validator("default_temperature")
    @classmethod
    def validate_temperature(cls, value: float) -> float:
        if not 0.0 <= value <= 2.0:
            raise ValueError("default_temperature must be between 0.0 and 2.0")
        return value

    @classmethod
    def from_env(cls) -> ServerConfig:
        """Build config from environment variables."""
        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY", "") or os.getenv("GOOGLE_API_KEY", ""),
            text_model=os.getenv("GEMINI_TEXT_MODEL", "gemini-2.5-flash"),
            vision_model=os.getenv("GEMINI_VISION_MODEL", "gemini-2.5-flash"),
            image_model=os.getenv("GEMINI_IMAGE_MODEL", "gemini-2.5-flash-image"),
            video_model=os.getenv("VEO_MODEL", "veo-3.1-fast-generate-preview"),
            default_temperature=float(os.getenv("GEMINI_TEMPERATURE", "0.7")),
            max_media_bytes=int(os.getenv("MAX_MEDIA_BYTES", str(DEFAULT_MAX_MEDIA_BYTES))),
            video_poll_interval=float(os.getenv("VIDEO_POLL_INTERVAL", "5.0")),
            video_poll_max_attempts=int(os.getenv("VIDEO_POLL_MAX_ATTEMPTS", "120")),
            retry_max_attempts=int(os.getenv("GEMINI_RETRY_MAX_ATTEMPTS", "3")),
            retry_base_delay=float(os.getenv("GEMINI_RETRY_BASE_DELAY", "1.0")),
            retry_max_delay=float(os.getenv("GEMINI_RETRY_MAX_DELAY", "60.0")),
            local_file_access_root=os.getenv("LOCAL_FILE_ACCESS_ROOT", ""),
            infra_mutations_enabled=_env_flag("INFRA_MUTATIONS_ENABLED"),
            infra_admin_token=os.getenv("INFRA_ADMIN_TOKEN", ""),
            tracing_enabled=_resolve_tracing_enabled(
                os.getenv("GEMINI_TRACING_ENABLED", ""),
                os.getenv("MLFLOW_TRACKING_URI", ""),
            ),
            mlflow_tracking_uri=os.getenv("MLFLOW_TRACKING_URI", ""),
            mlflow_experiment_name=os.getenv("MLFLOW_EXPERIMENT_NAME", "artisan-studio-mcp"),
        )


_config: ServerConfig | None = None


def get_config() -> ServerConfig:
    """Return the global config singleton, creating it on first access.

    Loads ``~/.config/artisan-studio-mcp/.env`` before reading env vars.
    Process environment always takes precedence over the config file.
    """
    global _config
    if _config is None:
        import logging

        from .dotenv import load_dotenv

        injected = load_dotenv()
        if injected:
            logging.getLogger(__name__).info(
                "Loaded %d var(s) from config file: %s",
                len(injected),
                ", ".join(sorted(injected)),
            )
        _config = ServerConfig.from_env()
    return _config


def update_config(**overrides: object) -> ServerConfig:
    """Patch the live config (used by the ``infra_configure`` tool)."""
    global _config
    data = get_config().model_dump()
    data.update({k: v for k, v in overrides.items() if v is not None})
    _config = ServerConfig(**data)
    return _config
