"""Intent resolver: shortlist endpoints, ask the model, decode its answer."""

import json
import logging
import re
from collections.abc import Iterator
from pathlib import Path

from pydantic import ValidationError

from api_intent_agent.config import Settings, get_settings
from api_intent_agent.errors import (
    CompletionError,
    InvalidInputError,
    ResponseDecodeError,
)
from api_intent_agent.llm import CompletionClient, LlmClient
from api_intent_agent.parser.openapi import SchemaIndex, load_index
from .models import AnalyzedInput, IntentMatch
from .prompt import build_prompt
from .selector import CandidateSelector

logger = logging.getLogger(__name__)

_FENCED_JSON = re.compile(r"```(?:json)?\s*\n(.*?)```", re.DOTALL)


def decode_intent(text: str) -> IntentMatch:
    """Decode the model reply into an IntentMatch or raise ResponseDecodeError.

    The whole reply is tried as JSON first, then a ```json fenced block,
    then the outermost {...} span inside surrounding prose.
    """
    data = None
    first_error = None
    for candidate in _json_candidates(text):
        try:
            data = json.loads(candidate)
            break
        except ValueError as e:
            first_error = first_error or e
    else:
        raise ResponseDecodeError(
            f"Model reply is not valid JSON: {first_error}", raw_text=text
        ) from first_error

    if not isinstance(data, dict):
        raise ResponseDecodeError("Model reply is not a JSON object", raw_text=text)

    try:
        return IntentMatch.model_validate(data)
    except ValidationError as e:
        raise ResponseDecodeError(f"Model reply does not match IntentMatch: {e}", raw_text=text) from e


def _json_candidates(text: str) -> Iterator[str]:
    stripped = text.strip()
    yield stripped
    match = _FENCED_JSON.search(stripped)
    if match:
        yield match.group(1).strip()
    start, end = stripped.find("{"), stripped.rfind("}")
    if start != -1 and end > start:
        yield stripped[start:end + 1]


class IntentResolver:
    """Maps free-text requests onto endpoints of one API description.

    Holds no per-call state; infer_intent may be called concurrently.
    """

    def __init__(
        self,
        index: SchemaIndex,
        client: CompletionClient,
        selector: CandidateSelector | None = None,
    ):
        self.index = index
        self.client = client
        self.selector = selector or CandidateSelector()

    @classmethod
    def from_schema_file(
        cls,
        schema_file: Path,
        api_key: str | None = None,
        settings: Settings | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
        timeout: float | None = None,
    ) -> "IntentResolver":
        """Build a resolver from a schema file and the configured completion service.

        Explicit arguments win over settings. Raises SchemaLoadError for a
        missing or malformed file and MissingCredentialError without a key.
        """
        settings = settings or get_settings()
        index = load_index(schema_file)
        if api_key is None and settings.api_key is not None:
            api_key = settings.api_key.get_secret_value()
        client = LlmClient(
            api_key=api_key,
            model=model or settings.model,
            max_tokens=max_tokens or settings.max_tokens,
            timeout=timeout or settings.timeout,
        )
        selector = CandidateSelector(
            stop_words=settings.stop_words,
            min_keyword_length=settings.min_keyword_length,
            strip_punctuation=settings.strip_punctuation,
        )
        return cls(index, client, selector)

    def analyze(self, user_text: str) -> AnalyzedInput:
        return self.selector.select(user_text, self.index)

    def render_prompt(self, user_text: str) -> str:
        return build_prompt(user_text, self.analyze(user_text))

    def infer_intent(self, user_text: str) -> IntentMatch:
        """Resolve one request to an IntentMatch. One completion call per invocation."""
        prompt = self._prepare(user_text)
        try:
            reply = self.client.complete(prompt)
        except CompletionError:
            raise
        except Exception as e:
            raise CompletionError(f"Failed to query completion model: {e}") from e
        return decode_intent(reply)

    async def ainfer_intent(self, user_text: str) -> IntentMatch:
        """Async infer_intent; cancelling the awaiting task cancels the model call."""
        prompt = self._prepare(user_text)
        try:
            reply = await self.client.acomplete(prompt)
        except CompletionError:
            raise
        except Exception as e:
            raise CompletionError(f"Failed to query completion model: {e}") from e
        return decode_intent(reply)

    def _prepare(self, user_text: str) -> str:
        if not user_text or not user_text.strip():
            raise InvalidInputError("User input is required")
        analyzed = self.analyze(user_text)
        logger.info("Resolving intent over %d candidate endpoints", len(analyzed.candidates))
        return build_prompt(user_text, analyzed)
