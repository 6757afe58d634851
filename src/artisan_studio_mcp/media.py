"""Media payloads — data-URI and local-file loading, MIME checks, size limits."""

from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass
from typing import Literal

from google.genai import types

from .config import get_config
from .local_path_policy import enforce_local_access_root, resolve_path

MediaKind = Literal["image", "audio"]

SUPPORTED_IMAGE_TYPES: dict[str, str] = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".webp": "image/webp",
}

SUPPORTED_AUDIO_TYPES: dict[str, str] = {
    ".wav": "audio/wav",
    ".mp3": "audio/mpeg",
    ".ogg": "audio/ogg",
    ".flac": "audio/flac",
    ".webm": "audio/webm",
    ".m4a": "audio/mp4",
    ".aac": "audio/aac",
}

_DEFAULT_MIME: dict[str, str] = {"image": "image/jpeg", "audio": "audio/wav"}
_DATA_URI_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)(?:;[\w-]+=[\w.-]+)*;base64,(?P<data>.*)$", re.DOTALL)


@dataclass(frozen=True)
class MediaPayload:
    """Bytes plus MIME type, or a provider-hosted URI when no bytes were returned."""

    data: bytes
    mime_type: str
    uri: str | None = None

    def to_part(self) -> types.Part:
        if self.data:
            return types.Part.from_bytes(data=self.data, mime_type=self.mime_type)
        return types.Part(file_data=types.FileData(file_uri=self.uri, mime_type=self.mime_type))

    def to_data_uri(self) -> str:
        return f"data:{self.mime_type};base64,{base64.b64encode(self.data).decode('ascii')}"

    @property
    def url(self) -> str:
        """Data URI for inline bytes, otherwise the hosted URI."""
        if self.data:
            return self.to_data_uri()
        return self.uri or ""


def parse_data_uri(value: str, kind: MediaKind) -> MediaPayload:
    """Decode ``data:<mime>;base64,<data>``; bare base64 gets the kind's default MIME.

    Raises:
        ValueError: On malformed base64 or a MIME type of the wrong kind.
    """
    value = value.strip()
    match = _DATA_URI_RE.match(value)
    if match:
        mime, encoded = match.group("mime").lower(), match.group("data")
    elif value.startswith("data:"):
        raise ValueError("Malformed data URI — expected 'data:<mimetype>;base64,<data>'")
    else:
        mime, encoded = _DEFAULT_MIME[kind], value

    if not mime.startswith(f"{kind}/"):
        raise ValueError(f"Expected {kind} data, got MIME type '{mime}'")
    try:
        data = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValueError(f"Invalid base64 {kind} data: {exc}") from exc
    if not data:
        raise ValueError(f"Empty {kind} data")
    return MediaPayload(data=data, mime_type=mime)


def read_media_file(file_path: str, kind: MediaKind) -> MediaPayload:
    """Read a local image or audio file within the access root.

    Raises:
        FileNotFoundError: If the path does not exist.
        PermissionError: If the path is outside ``LOCAL_FILE_ACCESS_ROOT``.
        ValueError: If the extension is not a supported media type.
    """
    p = enforce_local_access_root(resolve_path(file_path))
    if not p.is_file():
        raise FileNotFoundError(f"Media file not found: {file_path}")
    table = SUPPORTED_IMAGE_TYPES if kind == "image" else SUPPORTED_AUDIO_TYPES
    mime = table.get(p.suffix.lower())
    if not mime:
        allowed = ", ".join(sorted(table))
        raise ValueError(f"Unsupported {kind} extension '{p.suffix}'. Supported: {allowed}")
    return MediaPayload(data=p.read_bytes(), mime_type=mime)


def load_media(
    *,
    data_uri: str | None,
    file_path: str | None,
    kind: MediaKind,
    field_name: str,
) -> MediaPayload:
    """Load media from exactly one of a data URI or a local path, enforcing the size limit.

    Args:
        data_uri: ``data:`` URI or bare base64.
        file_path: Local file path.
        kind: ``"image"`` or ``"audio"``.
        field_name: Parameter stem used in error messages (e.g. ``image``).

    Raises:
        ValueError: Neither or both sources given, bad data, or over the limit.
    """
    if data_uri and file_path:
        raise ValueError(f"Provide either {field_name}_data_uri or {field_name}_path, not both")
    if not data_uri and not file_path:
        raise ValueError(f"Missing required field: {field_name}_data_uri or {field_name}_path")

    media = parse_data_uri(data_uri, kind) if data_uri else read_media_file(file_path, kind)  # type: ignore[arg-type]

    limit = get_config().max_media_bytes
    if len(media.data) > limit:
        raise ValueError(
            f"{kind.capitalize()} size {len(media.data)} bytes exceeds the {limit} byte limit"
        )
    return media
