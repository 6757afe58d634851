"""Tests for the google-genai backed generation clients."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from artisan_studio_mcp.errors import GenerationError
from artisan_studio_mcp.media import MediaPayload
from artisan_studio_mcp.providers import GeminiImageProvider, GeminiTextProvider, VeoVideoProvider
from tests.conftest import PNG_BYTES

SOURCE = MediaPayload(data=PNG_BYTES, mime_type="image/png")


def _image_response(*parts, finish_reason="STOP", block_reason=None):
    return SimpleNamespace(
        prompt_feedback=SimpleNamespace(block_reason=block_reason),
        candidates=[
            SimpleNamespace(finish_reason=finish_reason, content=SimpleNamespace(parts=list(parts))),
        ],
        text=None,
    )


def _inline(data: bytes, mime: str):
    return SimpleNamespace(inline_data=SimpleNamespace(data=data, mime_type=mime), text=None)


def _genai_client():
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock()
    client.aio.models.generate_videos = AsyncMock()
    client.aio.operations.get = AsyncMock()
    return client


class TestGeminiImageProvider:
    async def test_returns_first_inline_image(self, clean_config):
        client = _genai_client()
        client.aio.models.generate_content.return_value = _image_response(
            SimpleNamespace(inline_data=None, text="here you go"),
            _inline(b"out-png", "image/png"),
        )
        provider = GeminiImageProvider(client, model="img-model")

        result = await provider.generate_immediate("enhance", SOURCE)

        assert result == MediaPayload(data=b"out-png", mime_type="image/png")
        kwargs = client.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "img-model"
        assert kwargs["contents"][-1].text == "enhance"
        assert kwargs["config"].response_modalities == ["TEXT", "IMAGE"]

    async def test_text_only_response_is_generation_error(self, clean_config):
        client = _genai_client()
        client.aio.models.generate_content.return_value = _image_response(
            SimpleNamespace(inline_data=None, text="I cannot edit images"),
        )
        with pytest.raises(GenerationError, match="returned no image"):
            await GeminiImageProvider(client, model="img-model").generate_immediate("p", SOURCE)

    async def test_safety_block(self, clean_config):
        client = _genai_client()
        client.aio.models.generate_content.return_value = _image_response(finish_reason="IMAGE_SAFETY")
        with pytest.raises(GenerationError, match="blocked by safety filter: IMAGE_SAFETY"):
            await GeminiImageProvider(client, model="img-model").generate_immediate("p", SOURCE)

    async def test_prompt_block(self, clean_config):
        client = _genai_client()
        client.aio.models.generate_content.return_value = _image_response(block_reason="PROHIBITED_CONTENT")
        with pytest.raises(GenerationError, match="Prompt blocked"):
            await GeminiImageProvider(client, model="img-model").generate_immediate("p", SOURCE)

    async def test_sdk_exception_is_wrapped(self, clean_config):
        client = _genai_client()
        boom = RuntimeError("400 INVALID_ARGUMENT")
        client.aio.models.generate_content.side_effect = boom
        with pytest.raises(GenerationError, match="Image generation call failed") as exc_info:
            await GeminiImageProvider(client, model="img-model").generate_immediate("p", SOURCE)
        assert exc_info.value.cause is boom


class TestGeminiTextProvider:
    async def test_strips_text_and_passes_settings(self, mock_gemini_client):
        mock_gemini_client["generate"].return_value = "  Happy Diwali!  "
        provider = GeminiTextProvider(model="text-model", temperature=0.85, system_instruction="sys")

        assert await provider.generate_immediate("write", None) == "Happy Diwali!"
        args, kwargs = mock_gemini_client["generate"].call_args
        assert args[0] == "write"
        assert kwargs == {"model": "text-model", "temperature": 0.85, "system_instruction": "sys"}

    async def test_media_goes_first_in_contents(self, mock_gemini_client):
        mock_gemini_client["generate"].return_value = "ok"
        await GeminiTextProvider().generate_immediate("describe", SOURCE)
        contents = mock_gemini_client["generate"].call_args.args[0]
        assert contents[0].inline_data.data == PNG_BYTES
        assert contents[1].text == "describe"

    async def test_empty_text_is_generation_error(self, mock_gemini_client):
        mock_gemini_client["generate"].return_value = "   "
        with pytest.raises(GenerationError, match="empty text"):
            await GeminiTextProvider().generate_immediate("write", None)

    async def test_client_error_is_wrapped(self, mock_gemini_client):
        mock_gemini_client["generate"].side_effect = RuntimeError("down")
        with pytest.raises(GenerationError, match="Text generation call failed: down"):
            await GeminiTextProvider().generate_immediate("write", None)


class TestVeoVideoProvider:
    async def test_submit_returns_operation_name(self, clean_config):
        client = _genai_client()
        client.aio.models.generate_videos.return_value = SimpleNamespace(name="operations/veo-1")
        provider = VeoVideoProvider(client, model="veo", aspect_ratio="16:9", duration_seconds=6)

        handle = await provider.generate_async("festive video", SOURCE)

        assert handle == "operations/veo-1"
        kwargs = client.aio.models.generate_videos.call_args.kwargs
        assert kwargs["image"].image_bytes == PNG_BYTES
        assert kwargs["config"].aspect_ratio == "16:9"
        assert kwargs["config"].duration_seconds == 6
        assert kwargs["config"].number_of_videos == 1

    async def test_submit_without_media_sends_no_image(self, clean_config):
        client = _genai_client()
        client.aio.models.generate_videos.return_value = SimpleNamespace(name="operations/veo-2")
        await VeoVideoProvider(client, model="veo").generate_async("prompt only", None)
        assert client.aio.models.generate_videos.call_args.kwargs["image"] is None

    async def test_submit_without_name_fails(self, clean_config):
        client = _genai_client()
        client.aio.models.generate_videos.return_value = SimpleNamespace(name=None)
        with pytest.raises(GenerationError, match="no operation name"):
            await VeoVideoProvider(client, model="veo").generate_async("p", None)

    async def test_status_pending(self, clean_config):
        client = _genai_client()
        client.aio.operations.get.return_value = SimpleNamespace(done=False, error=None, response=None)
        status = await VeoVideoProvider(client, model="veo").check_status("operations/veo-1")
        assert status.done is False
        assert client.aio.operations.get.call_args.args[0].name == "operations/veo-1"

    async def test_status_done_with_video(self, clean_config):
        client = _genai_client()
        video = SimpleNamespace(video_bytes=None, uri="https://example.com/v.mp4", mime_type=None)
        client.aio.operations.get.return_value = SimpleNamespace(
            done=True, error=None,
            response=SimpleNamespace(generated_videos=[SimpleNamespace(video=video)]),
        )
        status = await VeoVideoProvider(client, model="veo").check_status("operations/veo-1")
        assert status.done is True
        assert status.response.url == "https://example.com/v.mp4"
        assert status.response.mime_type == "video/mp4"

    async def test_status_operation_error(self, clean_config):
        client = _genai_client()
        client.aio.operations.get.return_value = SimpleNamespace(
            done=True, error={"code": 8, "message": "quota"}, response=None,
        )
        status = await VeoVideoProvider(client, model="veo").check_status("operations/veo-1")
        assert status.error == {"code": 8, "message": "quota"}

    async def test_status_rai_filtered(self, clean_config):
        client = _genai_client()
        client.aio.operations.get.return_value = SimpleNamespace(
            done=True, error=None,
            response=SimpleNamespace(generated_videos=[], rai_media_filtered_reasons=["child safety"]),
        )
        status = await VeoVideoProvider(client, model="veo").check_status("operations/veo-1")
        assert status.error == {"message": "child safety", "filtered": True}

    async def test_status_done_but_empty(self, clean_config):
        client = _genai_client()
        client.aio.operations.get.return_value = SimpleNamespace(done=True, error=None, response=None)
        status = await VeoVideoProvider(client, model="veo").check_status("operations/veo-1")
        assert status.done is True
        assert status.response is None and status.error is None

    async def test_status_check_error_is_wrapped(self, clean_config):
        client = _genai_client()
        client.aio.operations.get.side_effect = RuntimeError("404 not found")
        with pytest.raises(GenerationError, match="Status check for operations/veo-1 failed"):
            await VeoVideoProvider(client, model="veo").check_status("operations/veo-1")
