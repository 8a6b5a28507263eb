"""Prompt submission flow shared by the CLI commands."""

from __future__ import annotations

import logging

from glm_assistant.core.errors import AssistantError, EmptyPromptError
from glm_assistant.core.history import GenerationHistory, GenerationResult
from glm_assistant.core.llm import GenerationClient

_LOGGER = logging.getLogger(__name__)


class PromptSession:
    """Validates prompts, calls the generation client and records results."""

    def __init__(self, client: GenerationClient, history: GenerationHistory | None = None) -> None:
        self.client = client
        self.history = history if history is not None else GenerationHistory()

    async def submit(self, prompt: str) -> GenerationResult:
        if not prompt.strip():
            raise EmptyPromptError("Please enter a prompt")

        try:
            response = await self.client.generate_response(prompt)
        except AssistantError as exc:
            _LOGGER.warning("Generation failed (%s): %s", exc.kind.value, exc)
            raise

        _LOGGER.debug("Generated response of %s characters", len(response))
        return self.history.record(prompt, response)
