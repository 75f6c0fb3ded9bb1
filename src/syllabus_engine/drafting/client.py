"""
OpenAI drafting client - production implementation of DraftingClient.

DEPENDENCY INJECTION:
---------------------
The constructor accepts an optional OpenAI client and model, so tests can
pass a MagicMock in place of the SDK client and assert on the request
without network calls.

Every request runs in JSON-object mode: the collaborator must answer with a
single JSON object, which drafting.parsing then validates per task.
"""

from __future__ import annotations

import logging

from openai import OpenAI, OpenAIError

from syllabus_engine.config import EngineConfig, get_config
from syllabus_engine.core.errors import ExternalServiceError
from syllabus_engine.observability import (
    GEN_AI_COMPLETION,
    GEN_AI_PROMPT,
    GEN_AI_USAGE_INPUT_TOKENS,
    GEN_AI_USAGE_OUTPUT_TOKENS,
    drafting_call_attributes,
    get_tracer,
    get_tracing_config,
)

logger = logging.getLogger(__name__)


class OpenAIDraftingClient:
    """Drafting client backed by OpenAI chat completions."""

    def __init__(
        self,
        client: OpenAI | None = None,
        model: str | None = None,
        config: EngineConfig | None = None,
        task: str = "drafting",
    ):
        self._config = config or get_config()
        self._client = client or OpenAI(
            api_key=self._config.openai_api_key,
            timeout=self._config.request_timeout_s,
        )
        self._model = model or self._config.drafting_model
        self._task = task

    @property
    def model(self) -> str:
        return self._model

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        """
        Send one system + user request and return the raw reply text.

        Raises:
            ExternalServiceError: Transport/API failure or an empty reply
        """
        tracer = get_tracer()
        capture = get_tracing_config().capture_content

        with tracer.start_span(
            "drafting.complete",
            attributes=drafting_call_attributes(self._task, self._model),
        ) as span:
            if capture:
                span.set_attribute(GEN_AI_PROMPT, user_prompt)

            try:
                response = self._client.chat.completions.create(
                    model=self._model,
                    messages=[
                        {"role": "system", "content": system_prompt},
                        {"role": "user", "content": user_prompt},
                    ],
                    response_format={"type": "json_object"},
                    temperature=self._config.temperature,
                )
            except OpenAIError as e:
                span.record_error(e)
                logger.error(f"Drafting request failed ({self._model}): {e}")
                raise ExternalServiceError(f"Drafting request failed: {e}") from e

            usage = getattr(response, "usage", None)
            if usage is not None:
                span.set_attribute(GEN_AI_USAGE_INPUT_TOKENS, usage.prompt_tokens)
                span.set_attribute(GEN_AI_USAGE_OUTPUT_TOKENS, usage.completion_tokens)

            content = response.choices[0].message.content if response.choices else None
            if not content or not content.strip():
                span.record_error("empty reply")
                raise ExternalServiceError("Drafting service returned an empty reply")

            if capture:
                span.set_attribute(GEN_AI_COMPLETION, content)

        logger.debug(f"Drafting reply received: {len(content)} chars from {self._model}")
        return content
