"""Shared google-genai client pool and text generation helpers."""

from __future__ import annotations

import logging
import os
from typing import Any, TypeVar

from google import genai
from google.genai import types
from pydantic import BaseModel

from .config import get_config
from .retry import with_retry

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class GeminiClient:
    """Process-wide Gemini client pool (one client per API key)."""

    _clients: dict[str, genai.Client] = {}

    @classmethod
    def get(cls, api_key: str | None = None) -> genai.Client:
        """Return (or create) the shared client for *api_key*."""
        key = api_key or get_config().gemini_api_key or os.getenv("GEMINI_API_KEY", "")
        if not key:
            raise ValueError("No Gemini API key — set GEMINI_API_KEY or pass api_key explicitly")
        if key not in cls._clients:
            cls._clients[key] = genai.Client(api_key=key)
            logger.info("Created Gemini client (key …%s)", key[-4:])
        return cls._clients[key]

    @classmethod
    async def generate(
        cls,
        contents: Any,
        *,
        model: str | None = None,
        temperature: float | None = None,
        system_instruction: str | None = None,
        response_schema: dict | None = None,
        **kwargs: Any,
    ) -> str:
        """Generate text with Gemini, optionally constrained to a JSON schema.

        Args:
            contents: Prompt contents (text or multimodal parts).
            model: Override model ID (defaults to config's text_model).
            temperature: Override temperature (defaults to config's default).
            system_instruction: System-level instruction for the model.
            response_schema: JSON schema dict to constrain output format.
            **kwargs: Forwarded to the underlying generate_content call.

        Returns:
            The concatenated text parts of the first candidate.
        """
        cfg = get_config()
        config = types.GenerateContentConfig(
            temperature=temperature if temperature is not None else cfg.default_temperature,
        )
        if system_instruction:
            config.system_instruction = system_instruction
        if response_schema:
            config.response_mime_type = "application/json"
            config.response_json_schema = response_schema

        client = cls.get()
        response = await with_retry(
            lambda: client.aio.models.generate_content(
                model=model or cfg.text_model,
                contents=contents,
                config=config,
                **kwargs,
            )
        )

        parts = response.candidates[0].content.parts if response.candidates and response.candidates[0].content else []
        text_parts = [p.text for p in parts or [] if p.text and not getattr(p, "thought", False)]
        return "\n".join(text_parts) if text_parts else (response.text or "")

    @classmethod
    async def generate_structured(
        cls,
        contents: Any,
        *,
        schema: type[M],
        model: str | None = None,
        temperature: float | None = None,
        system_instruction: str | None = None,
        **kwargs: Any,
    ) -> M:
        """Generate JSON for *schema* and validate it into a model instance.

        Raises:
            pydantic.ValidationError: If the response does not match the schema.
        """
        raw = await cls.generate(
            contents,
            model=model,
            temperature=temperature,
            system_instruction=system_instruction,
            response_schema=schema.model_json_schema(),
            **kwargs,
        )
        return schema.model_validate_json(raw)

    @classmethod
    async def close_all(cls) -> int:
        """Shut down all shared clients. Returns count closed."""
        count = 0
        for client in list(cls._clients.values()):
            try:
                await client.aio.aclose()
            except Exception:
                logger.debug("Async client close failed", exc_info=True)
            try:
                client.close()
            except Exception:
                logger.debug("Sync client close failed", exc_info=True)
            count += 1
        cls._clients.clear()
        logger.info("Closed %d Gemini client(s)", count)
        return count
