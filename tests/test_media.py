"""Tests for media loading: data URIs, local files, MIME checks and size limits."""

from __future__ import annotations

import base64

import pytest

from artisan_studio_mcp.config import update_config
from artisan_studio_mcp.media import MediaPayload, load_media, parse_data_uri, read_media_file
from tests.conftest import PNG_BYTES, PNG_DATA_URI, WAV_DATA_URI


class TestParseDataUri:
    def test_image_data_uri(self):
        media = parse_data_uri(PNG_DATA_URI, "image")
        assert media.data == PNG_BYTES
        assert media.mime_type == "image/png"

    def test_bare_base64_gets_default_mime(self):
        media = parse_data_uri(base64.b64encode(b"jpegish").decode(), "image")
        assert media.mime_type == "image/jpeg"
        assert parse_data_uri(base64.b64encode(b"pcm").decode(), "audio").mime_type == "audio/wav"

    def test_wrong_kind_rejected(self):
        with pytest.raises(ValueError, match="Expected image data, got MIME type 'audio/wav'"):
            parse_data_uri(WAV_DATA_URI, "image")

    def test_malformed_data_uri(self):
        with pytest.raises(ValueError, match="Malformed data URI"):
            parse_data_uri("data:image/png,notbase64", "image")

    def test_invalid_base64(self):
        with pytest.raises(ValueError, match="Invalid base64 image data"):
            parse_data_uri("data:image/png;base64,@@@", "image")

    def test_empty_payload(self):
        with pytest.raises(ValueError, match="Empty image data"):
            parse_data_uri("data:image/png;base64,", "image")


class TestReadMediaFile:
    def test_reads_supported_file(self, clean_config, tmp_path):
        path = tmp_path / "pot.PNG"
        path.write_bytes(PNG_BYTES)
        media = read_media_file(str(path), "image")
        assert media == MediaPayload(data=PNG_BYTES, mime_type="image/png")

    def test_missing_file(self, clean_config, tmp_path):
        with pytest.raises(FileNotFoundError, match="Media file not found"):
            read_media_file(str(tmp_path / "nope.png"), "image")

    def test_unsupported_extension(self, clean_config, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("hello")
        with pytest.raises(ValueError, match="Unsupported audio extension"):
            read_media_file(str(path), "audio")

    def test_outside_access_root(self, clean_config, tmp_path, monkeypatch):
        root = tmp_path / "allowed"
        root.mkdir()
        outside = tmp_path / "pot.png"
        outside.write_bytes(PNG_BYTES)
        monkeypatch.setenv("LOCAL_FILE_ACCESS_ROOT", str(root))
        with pytest.raises(PermissionError, match="outside LOCAL_FILE_ACCESS_ROOT"):
            read_media_file(str(outside), "image")


class TestLoadMedia:
    def test_requires_one_source(self, clean_config):
        with pytest.raises(ValueError, match="Missing required field: image_data_uri or image_path"):
            load_media(data_uri=None, file_path=None, kind="image", field_name="image")

    def test_rejects_both_sources(self, clean_config):
        with pytest.raises(ValueError, match="not both"):
            load_media(data_uri=PNG_DATA_URI, file_path="/tmp/x.png", kind="image", field_name="image")

    def test_enforces_size_limit(self, clean_config):
        update_config(max_media_bytes=4)
        with pytest.raises(ValueError, match="exceeds the 4 byte limit"):
            load_media(data_uri=PNG_DATA_URI, file_path=None, kind="image", field_name="image")

    def test_voice_note_field_name(self, clean_config):
        media = load_media(data_uri=WAV_DATA_URI, file_path=None, kind="audio", field_name="voice_note")
        assert media.mime_type == "audio/wav"


class TestMediaPayload:
    def test_url_prefers_inline_bytes(self):
        assert MediaPayload(data=PNG_BYTES, mime_type="image/png").url == PNG_DATA_URI

    def test_url_falls_back_to_hosted_uri(self):
        media = MediaPayload(data=b"", mime_type="video/mp4", uri="gs://bucket/clip.mp4")
        assert media.url == "gs://bucket/clip.mp4"
        assert media.to_part().file_data.file_uri == "gs://bucket/clip.mp4"
