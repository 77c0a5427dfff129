"""LLM adapters for column mapping and slide generation.

Provides a base interface, an OpenAI-compatible adapter and a deterministic
mock for testing.
"""

import json
import os
from abc import ABC, abstractmethod
from typing import Optional, Sequence


class BaseLLMAdapter(ABC):
    """Abstract base for all LLM adapters."""

    @abstractmethod
    def generate(self, prompt: str) -> str:
        """Send a prompt to the LLM and return the raw response text.

        Args:
            prompt: The fully formatted prompt string.

        Returns:
            Raw string response from the model (expected to be JSON).
        """


class OpenAILLMAdapter(BaseLLMAdapter):
    """Adapter for OpenAI-compatible chat completion APIs.

    Requests JSON-object output at temperature 0. The client timeout bounds
    every call, so a stuck request fails instead of hanging the upload.
    """

    def __init__(
        self,
        model: str = "gpt-4o",
        max_tokens: int = 2048,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_seconds: float = 60.0,
    ) -> None:
        """Initialise the OpenAI adapter.

        Args:
            model: Model identifier.
            max_tokens: Maximum tokens in the completion.
            api_key: API key. Falls back to LLM_API_KEY / OPENAI_API_KEY.
            base_url: Optional base URL for OpenAI-compatible endpoints.
            timeout_seconds: Per-request timeout.
        """
        from openai import OpenAI

        resolved_key = api_key or os.environ.get("LLM_API_KEY") or os.environ.get("OPENAI_API_KEY", "")
        client_kwargs: dict = {"api_key": resolved_key, "timeout": timeout_seconds, "max_retries": 0}
        if base_url:
            client_kwargs["base_url"] = base_url

        self._client = OpenAI(**client_kwargs)
        self._model = model
        self._max_tokens = max_tokens

    def generate(self, prompt: str) -> str:
        """Call the chat completion API and return the message content."""
        response = self._client.chat.completions.create(
            model=self._model,
            messages=[{"role": "user", "content": prompt}],
            temperature=0,
            top_p=1,
            max_tokens=self._max_tokens,
            stream=False,
            response_format={"type": "json_object"},
        )
        return response.choices[0].message.content or ""


# ---------------------------------------------------------------------------
# Fixed mock responses used for local testing.
# ---------------------------------------------------------------------------
_MOCK_SLIDES = {
    "slides": [
        {
            "slideTitle": "Sales Overview",
            "content": [{"type": "title", "title": "Monthly Sales Review"}],
        },
        {
            "slideTitle": "Key Metrics",
            "content": [{"type": "kpi", "title": "Revenue", "text": "Revenue summary for the period."}],
        },
        {
            "slideTitle": "Top Items",
            "content": [{"type": "chart", "chartType": "TopItemsChart"}],
        },
        {
            "slideTitle": "Summary",
            "content": [{"type": "summary", "text": "Mock summary for testing purposes."}],
        },
    ]
}

_MOCK_RESPONSE_JSON = json.dumps(_MOCK_SLIDES, indent=2)


class MockLLMAdapter(BaseLLMAdapter):
    """Deterministic adapter for local runs and CI where no LLM API is available.

    Returns the queued ``responses`` in order (the last one repeats), or a
    fixed slide deck when none are given. Records every prompt it receives.
    """

    def __init__(self, responses: Optional[Sequence[str]] = None) -> None:
        self._responses = list(responses or [_MOCK_RESPONSE_JSON])
        self.prompts: list = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if len(self._responses) > 1:
            return self._responses.pop(0)
        return self._responses[0]


def build_adapter(settings) -> BaseLLMAdapter:
    """Build the adapter named by ``settings.adapter`` ("openai" or "mock")."""
    if settings.adapter == "mock":
        return MockLLMAdapter()
    return OpenAILLMAdapter(
        model=settings.model,
        max_tokens=settings.max_tokens,
        api_key=settings.api_key,
        base_url=settings.base_url,
        timeout_seconds=settings.timeout_seconds,
    )
