"""Fan-out / fan-in over independent generation tasks with per-task fallback."""

from __future__ import annotations

import asyncio
import logging

from ..errors import AllTasksFailedError, GenerationError
from .contracts import ImmediateGenerationClient, PromptBuilder
from .models import (
    GenerationRequest,
    GenerationResult,
    GenerationTask,
    OverallStatus,
    TaskOutcome,
    TaskStatus,
)

logger = logging.getLogger(__name__)


class GenerationOrchestrator:
    """Run every variation of a request concurrently and collect the outcomes.

    The client and prompt builder are injected so one orchestrator class
    serves every use case (image variations, platform posts, video).

    Args:
        client: Provider used for both primary and fallback calls.
        prompt_builder: Pure ``(request, variation) -> PromptPair`` function.
    """

    def __init__(self, client: ImmediateGenerationClient, prompt_builder: PromptBuilder) -> None:
        self._client = client
        self._prompt_builder = prompt_builder

    def build_tasks(self, request: GenerationRequest) -> list[GenerationTask]:
        tasks = []
        for name in request.variations:
            prompts = self._prompt_builder(request, name)
            tasks.append(GenerationTask(name, prompts.primary, prompts.fallback))
        return tasks

    async def run(self, request: GenerationRequest) -> GenerationResult:
        """Settle every task and return the sealed result.

        Raises:
            AllTasksFailedError: If no task succeeded, with every task's error.
        """
        tasks = self.build_tasks(request)
        result = GenerationResult(request.variations)
        logger.info("Generation run started: %d variation(s) %s", len(tasks), list(request.variations))

        outcomes = await self._settle(tasks, request.media)
        for outcome in outcomes:
            result.record(outcome)
        result.seal()

        status = result.overall_status
        logger.info("Generation run finished: %s", status.value)
        if status == OverallStatus.ALL_FAILED:
            raise AllTasksFailedError(result.errors)
        return result

    async def _settle(self, tasks: list[GenerationTask], media: object) -> list[TaskOutcome]:
        """Await every task; if one raises, cancel and reap the rest before re-raising."""
        running = [asyncio.ensure_future(self._run_task(t, media)) for t in tasks]
        try:
            return await asyncio.gather(*running)
        except BaseException:
            for fut in running:
                if not fut.done():
                    fut.cancel()
            await asyncio.gather(*running, return_exceptions=True)
            raise

    async def _run_task(self, task: GenerationTask, media: object) -> TaskOutcome:
        task.status = TaskStatus.RUNNING
        try:
            payload = await self._client.generate_immediate(task.primary_prompt, media)
        except GenerationError as exc:
            if task.fallback_prompt is None:
                logger.warning("Variation %r failed: %s", task.name, exc)
                task.status = TaskStatus.FAILED
                return TaskOutcome(task.name, task.status, error=exc)
            logger.warning("Variation %r failed, trying fallback prompt: %s", task.name, exc)
        else:
            task.status = TaskStatus.SUCCEEDED
            return TaskOutcome(task.name, task.status, payload=payload)

        try:
            payload = await self._client.generate_immediate(task.fallback_prompt, media)
        except GenerationError as exc:
            logger.warning("Variation %r fallback failed: %s", task.name, exc)
            task.status = TaskStatus.FAILED
            return TaskOutcome(task.name, task.status, error=exc)

        task.status = TaskStatus.FALLBACK_SUCCEEDED
        return TaskOutcome(task.name, task.status, payload=payload)
