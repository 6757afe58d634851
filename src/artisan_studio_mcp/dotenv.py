"""Load API keys from a per-user ``.env`` file.

MCP hosts often launch the server with a bare environment, so keys kept in
``~/.config/artisan-studio-mcp/.env`` are injected when the process has no
usable value of its own.
"""

from __future__ import annotations

import os
from pathlib import Path

DEFAULT_ENV_PATH = Path.home() / ".config" / "artisan-studio-mcp" / ".env"


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
        return value[1:-1]
    return value


def _needs_value(key: str, current: str | None) -> bool:
    """True when *current* is missing, blank, or the literal ``${KEY}`` placeholder."""
    if current is None:
        return True
    current = _strip_quotes(current.strip()).strip()
    return current in ("", f"${key}", f"${{{key}}}")


def parse_dotenv(path: Path) -> dict[str, str]:
    """Parse ``KEY=VALUE`` lines, ignoring comments, blanks and ``export`` prefixes."""
    if not path.is_file():
        return {}

    entries: dict[str, str] = {}
    for raw in path.read_text().splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        line = line.removeprefix("export ").lstrip()
        key, _, value = line.partition("=")
        key = key.strip()
        if key:
            entries[key] = _strip_quotes(value.strip())
    return entries


def load_dotenv(path: Path | None = None) -> dict[str, str]:
    """Copy entries from *path* into ``os.environ`` where the process has none.

    Returns:
        The entries that were injected.
    """
    injected: dict[str, str] = {}
    for key, value in parse_dotenv(path or DEFAULT_ENV_PATH).items():
        if _needs_value(key, os.environ.get(key)):
            os.environ[key] = value
            injected[key] = value
    return injected
