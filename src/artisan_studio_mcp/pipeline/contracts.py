"""Interfaces between the orchestrator and its collaborators."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, NamedTuple, Protocol

from .models import GenerationRequest


class PromptPair(NamedTuple):
    primary: str
    fallback: str | None = None


# Must be pure: (request, variation name) -> prompts for that variation.
PromptBuilder = Callable[[GenerationRequest, str], PromptPair]


@dataclass(frozen=True)
class OperationStatus:
    """One status reading of a long-running provider operation."""

    done: bool
    response: Any = None
    error: Any = None


class ImmediateGenerationClient(Protocol):
    """Provider call that returns its payload directly.

    Raises ``GenerationError`` on any non-success response, malformed
    payload, or content-safety rejection.
    """

    async def generate_immediate(self, prompt: str, media: Any) -> Any: ...


class AsyncGenerationClient(Protocol):
    """Provider call that returns an operation handle to be polled."""

    async def generate_async(self, prompt: str, media: Any) -> str: ...

    async def check_status(self, operation_handle: str) -> OperationStatus: ...
