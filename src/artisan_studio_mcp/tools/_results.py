"""Serialise pipeline outcomes into tool response items."""

from __future__ import annotations

from collections.abc import Callable

from ..media import MediaPayload
from ..models.marketing import ImageVariation
from ..pipeline import GenerationResult, TaskOutcome


def error_text(outcome: TaskOutcome) -> str:
    return str(outcome.error) if outcome.error is not None else ""


def image_items(
    result: GenerationResult,
    describe: Callable[[TaskOutcome], str] | None = None,
) -> list[ImageVariation]:
    """One ``ImageVariation`` per outcome, in request order.

    Failed outcomes carry their error and an empty ``url``; the source
    image is never substituted.
    """
    items = []
    for outcome in result.outcomes:
        payload: MediaPayload | None = outcome.payload if outcome.succeeded else None
        items.append(
            ImageVariation(
                variation=outcome.name,
                status=outcome.status.value,
                url=payload.url if payload is not None else "",
                description=describe(outcome) if describe and outcome.succeeded else "",
                error=error_text(outcome),
            )
        )
    return items
