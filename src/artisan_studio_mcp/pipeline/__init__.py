"""Generation pipeline — concurrent variations with fallback, plus long-running polling.

Public API:
    GenerationOrchestrator — run a GenerationRequest to a GenerationResult.
    poll_operation / LongRunningTaskClient — resolve provider operations by polling.
"""

from .contracts import (
    AsyncGenerationClient,
    ImmediateGenerationClient,
    OperationStatus,
    PromptBuilder,
    PromptPair,
)
from .models import (
    GenerationRequest,
    GenerationResult,
    GenerationTask,
    LongRunningOperation,
    OverallStatus,
    TaskOutcome,
    TaskStatus,
)
from .orchestrator import GenerationOrchestrator
from .poller import LongRunningTaskClient, poll_operation

__all__ = [
    "AsyncGenerationClient",
    "GenerationOrchestrator",
    "GenerationRequest",
    "GenerationResult",
    "GenerationTask",
    "ImmediateGenerationClient",
    "LongRunningOperation",
    "LongRunningTaskClient",
    "OperationStatus",
    "OverallStatus",
    "PromptBuilder",
    "PromptPair",
    "TaskOutcome",
    "TaskStatus",
    "poll_operation",
]
