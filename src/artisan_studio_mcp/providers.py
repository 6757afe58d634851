"""Generation clients over google-genai: image, text, and Veo video.

Every provider failure (SDK exception, malformed payload, safety block) is
surfaced as ``GenerationError`` so the orchestrator can apply its fallback.
"""

from __future__ import annotations

import logging
from typing import Any

from google import genai
from google.genai import types

from .client import GeminiClient
from .errors import GenerationError
from .media import MediaPayload
from .pipeline.contracts import OperationStatus
from .retry import with_retry

logger = logging.getLogger(__name__)

_BLOCKING_FINISH_REASONS = {"SAFETY", "PROHIBITED_CONTENT", "IMAGE_SAFETY", "BLOCKLIST", "SPII"}


def _enum_name(value: Any) -> str:
    return str(getattr(value, "name", value) or "")


def _raise_if_blocked(response: Any) -> None:
    """Raise when the prompt or the first candidate was stopped on safety grounds."""
    feedback = getattr(response, "prompt_feedback", None)
    block_reason = getattr(feedback, "block_reason", None)
    if block_reason:
        raise GenerationError(f"Prompt blocked by safety filter: {_enum_name(block_reason)}", cause=feedback)
    for cand in getattr(response, "candidates", None) or []:
        reason = _enum_name(getattr(cand, "finish_reason", None))
        if reason in _BLOCKING_FINISH_REASONS:
            raise GenerationError(f"Generation blocked by safety filter: {reason}", cause=reason)


def _extract_images(response: Any) -> list[MediaPayload]:
    out: list[MediaPayload] = []
    for cand in getattr(response, "candidates", None) or []:
        content = getattr(cand, "content", None)
        for part in getattr(content, "parts", None) or []:
            inline = getattr(part, "inline_data", None)
            if not inline or not getattr(inline, "data", None):
                continue
            mime = getattr(inline, "mime_type", None) or "image/png"
            if not mime.startswith("image/"):
                continue
            out.append(MediaPayload(data=inline.data, mime_type=mime))
    return out


def _media_contents(prompt: str, media: MediaPayload | None) -> list[Any]:
    contents: list[Any] = []
    if media is not None:
        contents.append(media.to_part())
    contents.append(types.Part(text=prompt))
    return contents


class GeminiImageProvider:
    """Image-to-image generation with a Gemini image model."""

    name = "gemini-image"

    def __init__(self, client: genai.Client, *, model: str) -> None:
        self._client = client
        self.model = model

    async def generate_immediate(self, prompt: str, media: MediaPayload | None) -> MediaPayload:
        try:
            response = await with_retry(
                lambda: self._client.aio.models.generate_content(
                    model=self.model,
                    contents=_media_contents(prompt, media),
                    config=types.GenerateContentConfig(response_modalities=["TEXT", "IMAGE"]),
                )
            )
        except Exception as exc:
            raise GenerationError(f"Image generation call failed: {exc}", cause=exc) from exc

        _raise_if_blocked(response)
        images = _extract_images(response)
        if not images:
            raise GenerationError(f"Model {self.model} returned no image", cause=getattr(response, "text", None))
        return images[0]


class GeminiTextProvider:
    """Free-form text generation, optionally grounded on an image."""

    name = "gemini-text"

    def __init__(
        self,
        *,
        model: str | None = None,
        temperature: float | None = None,
        system_instruction: str | None = None,
    ) -> None:
        self.model = model
        self.temperature = temperature
        self.system_instruction = system_instruction

    async def generate_immediate(self, prompt: str, media: MediaPayload | None) -> str:
        contents = _media_contents(prompt, media) if media is not None else prompt
        try:
            text = await GeminiClient.generate(
                contents,
                model=self.model,
                temperature=self.temperature,
                system_instruction=self.system_instruction,
            )
        except Exception as exc:
            raise GenerationError(f"Text generation call failed: {exc}", cause=exc) from exc
        if not text or not text.strip():
            raise GenerationError("Model returned empty text")
        return text.strip()


class VeoVideoProvider:
    """Veo text/image-to-video; submission returns an operation name to poll."""

    name = "veo"

    def __init__(
        self,
        client: genai.Client,
        *,
        model: str,
        aspect_ratio: str = "9:16",
        duration_seconds: int = 8,
    ) -> None:
        self._client = client
        self.model = model
        self.aspect_ratio = aspect_ratio
        self.duration_seconds = duration_seconds

    async def generate_async(self, prompt: str, media: MediaPayload | None) -> str:
        image = None
        if media is not None and media.data:
            image = types.Image(image_bytes=media.data, mime_type=media.mime_type)
        try:
            operation = await with_retry(
                lambda: self._client.aio.models.generate_videos(
                    model=self.model,
                    prompt=prompt,
                    image=image,
                    config=types.GenerateVideosConfig(
                        aspect_ratio=self.aspect_ratio,
                        duration_seconds=self.duration_seconds,
                        number_of_videos=1,
                    ),
                )
            )
        except Exception as exc:
            raise GenerationError(f"Video submission failed: {exc}", cause=exc) from exc
        if not getattr(operation, "name", None):
            raise GenerationError("Video submission returned no operation name")
        return operation.name

    async def check_status(self, operation_handle: str) -> OperationStatus:
        try:
            operation = await with_retry(
                lambda: self._client.aio.operations.get(
                    types.GenerateVideosOperation(name=operation_handle)
                )
            )
        except Exception as exc:
            raise GenerationError(f"Status check for {operation_handle} failed: {exc}", cause=exc) from exc

        if not operation.done:
            return OperationStatus(done=False)
        if operation.error:
            return OperationStatus(done=True, error=operation.error)
        return _video_status(operation.response)


def _video_status(response: Any) -> OperationStatus:
    """Turn a finished Veo response into a payload, or an error when filtered."""
    if response is None:
        return OperationStatus(done=True)

    for generated in getattr(response, "generated_videos", None) or []:
        video = getattr(generated, "video", None)
        if video is None:
            continue
        data = getattr(video, "video_bytes", None) or b""
        uri = getattr(video, "uri", None)
        if data or uri:
            mime = getattr(video, "mime_type", None) or "video/mp4"
            return OperationStatus(done=True, response=MediaPayload(data=data, mime_type=mime, uri=uri))

    reasons = getattr(response, "rai_media_filtered_reasons", None)
    if reasons:
        return OperationStatus(done=True, error={"message": "; ".join(reasons), "filtered": True})
    return OperationStatus(done=True)
