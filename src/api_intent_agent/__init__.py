"""Resolve free-text requests to endpoints of an OpenAPI-described HTTP API."""

from api_intent_agent.errors import (
    CompletionError,
    IntentError,
    InvalidInputError,
    MissingCredentialError,
    ResponseDecodeError,
    SchemaLoadError,
)
from api_intent_agent.intent.models import AnalyzedInput, IntentMatch
from api_intent_agent.intent.resolver import IntentResolver

__all__ = [
    "AnalyzedInput",
    "CompletionError",
    "IntentError",
    "IntentMatch",
    "IntentResolver",
    "InvalidInputError",
    "MissingCredentialError",
    "ResponseDecodeError",
    "SchemaLoadError",
]
