"""Completion client boundary used by the match scorer.

The scorer only needs "send a system and a user prompt, get JSON text back",
so that is the whole interface. ``OpenAICompletionClient`` implements it on
top of the OpenAI chat completions API; tests substitute a fake.
"""

from typing import Protocol

import openai

from pathfinder.logging import get_logger

from .exceptions import CompletionError, ScorerConfigurationError

logger = get_logger(__name__, component="matching")


class CompletionClient(Protocol):
    """Anything that can turn a prompt pair into a JSON object string."""

    def complete_json(self, system_prompt: str, user_prompt: str) -> str:
        """Return the raw JSON text of the completion.

        Raises:
            CompletionError: If the call fails or the response is empty
        """
        ...


class OpenAICompletionClient:
    """Chat completion client requesting JSON-object responses."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        temperature: float = 0.7,
        timeout_seconds: float = 15.0,
        max_retries: int = 0,
    ):
        """
        Initialize the client.

        Args:
            api_key: OpenAI API key
            model: Chat completion model name
            temperature: Sampling temperature
            timeout_seconds: Per-call timeout
            max_retries: Retries performed by the SDK on transient errors

        Raises:
            ScorerConfigurationError: If api_key is missing
        """
        if not api_key or not api_key.strip():
            raise ScorerConfigurationError(
                "OPENAI_API_KEY is required to score job matches"
            )

        self.model = model
        self.temperature = temperature
        self.timeout_seconds = timeout_seconds
        self._client = openai.OpenAI(
            api_key=api_key.strip(),
            timeout=timeout_seconds,
            max_retries=max_retries,
        )

    def complete_json(self, system_prompt: str, user_prompt: str) -> str:
        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=self.temperature,
                response_format={"type": "json_object"},
            )
        except openai.APITimeoutError as e:
            raise CompletionError(
                f"Completion timed out after {self.timeout_seconds} seconds"
            ) from e
        except openai.APIError as e:
            raise CompletionError(f"Completion API error: {type(e).__name__}") from e

        if not response.choices:
            raise CompletionError("Completion returned no choices")

        content = response.choices[0].message.content
        if not content:
            raise CompletionError("Completion returned empty content")

        logger.debug(
            "Completion received",
            extra={
                "event": "completion.received",
                "model": self.model,
                "content_length": len(content),
            },
        )
        return content
