"""Completion client wrapper around litellm.

The resolver only needs "prompt text in, reply text out"; LlmClient
provides that for any model litellm supports.
"""

import logging
from typing import Protocol

from litellm import acompletion, completion

from api_intent_agent.errors import CompletionError, MissingCredentialError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-sonnet-4-20250514"
DEFAULT_MAX_TOKENS = 1000
DEFAULT_TIMEOUT = 30.0


class CompletionClient(Protocol):
    """Anything that can turn one user prompt into reply text."""

    def complete(self, prompt: str) -> str: ...

    async def acomplete(self, prompt: str) -> str: ...


class LlmClient:
    """Sends a single user-role message via litellm and returns the reply text."""

    def __init__(
        self,
        api_key: str | None,
        model: str | None = None,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        if not api_key:
            raise MissingCredentialError("An API key for the completion service is required")
        self.api_key = api_key
        self.model = model or DEFAULT_MODEL
        self.max_tokens = max_tokens
        self.timeout = timeout

    def _request(self, prompt: str) -> dict:
        return {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "messages": [{"role": "user", "content": prompt}],
            "api_key": self.api_key,
            "timeout": self.timeout,
        }

    def complete(self, prompt: str) -> str:
        """Blocking completion call; bounded by ``timeout`` seconds."""
        logger.debug("Requesting completion from %s", self.model)
        try:
            response = completion(**self._request(prompt))
        except Exception as e:
            raise CompletionError(f"Failed to query completion model: {e}") from e
        return _reply_text(response)

    async def acomplete(self, prompt: str) -> str:
        """Awaitable completion call; task cancellation propagates unchanged."""
        logger.debug("Requesting async completion from %s", self.model)
        try:
            response = await acompletion(**self._request(prompt))
        except Exception as e:
            raise CompletionError(f"Failed to query completion model: {e}") from e
        return _reply_text(response)


def _reply_text(response) -> str:
    try:
        content = response.choices[0].message.content
    except (AttributeError, IndexError) as e:
        raise CompletionError(f"Malformed completion response: {e}") from e
    if not content:
        raise CompletionError("Completion response contained no text")
    return content
