"""Keyword shortlisting of endpoints for a user query."""

import logging
import string
from collections.abc import Iterable

from api_intent_agent.errors import InvalidInputError
from api_intent_agent.parser.base import EndpointRecord
from .models import AnalyzedInput

logger = logging.getLogger(__name__)

# Shortlists are sensitive to this set.
DEFAULT_STOP_WORDS = frozenset({
    "what", "how", "the", "and", "for",
    "with", "that", "this", "from", "into", "have", "does",
    "want", "need", "please", "would", "could", "should",
    "about", "which", "where", "when", "there", "their", "some", "your",
})

DEFAULT_MIN_KEYWORD_LENGTH = 4


def extract_keywords(
    text: str,
    stop_words: Iterable[str] = DEFAULT_STOP_WORDS,
    min_length: int = DEFAULT_MIN_KEYWORD_LENGTH,
    strip_punctuation: bool = False,
) -> frozenset[str]:
    """Lower-case, split on whitespace, drop short and stop words.

    Keywords are whole tokens unless strip_punctuation is set, which trims
    surrounding punctuation first (so "password?" becomes "password").
    """
    stop_words = {w.lower() for w in stop_words}
    keywords = set()
    for token in text.lower().split():
        if strip_punctuation:
            token = token.strip(string.punctuation)
        if len(token) >= min_length and token not in stop_words:
            keywords.add(token)
    return frozenset(keywords)


def select_candidates(
    keywords: Iterable[str], endpoints: Iterable[EndpointRecord]
) -> tuple[EndpointRecord, ...]:
    """Endpoints whose path or description contains any keyword as a substring."""
    keywords = list(keywords)
    matched = []
    for endpoint in endpoints:
        description = endpoint.description.lower()
        path = endpoint.path.lower()
        if any(k in description or k in path for k in keywords):
            matched.append(endpoint)
    return tuple(matched)


class CandidateSelector:
    """Turns free text into an AnalyzedInput against a SchemaIndex."""

    def __init__(
        self,
        stop_words: Iterable[str] = DEFAULT_STOP_WORDS,
        min_keyword_length: int = DEFAULT_MIN_KEYWORD_LENGTH,
        strip_punctuation: bool = False,
    ):
        self.stop_words = frozenset(w.lower() for w in stop_words)
        self.min_keyword_length = min_keyword_length
        self.strip_punctuation = strip_punctuation

    def select(self, user_text: str, endpoints: Iterable[EndpointRecord]) -> AnalyzedInput:
        if not user_text or not user_text.strip():
            raise InvalidInputError("User input is required")

        keywords = extract_keywords(
            user_text, self.stop_words, self.min_keyword_length, self.strip_punctuation
        )
        candidates = select_candidates(keywords, endpoints)
        logger.debug(
            "Keywords %s shortlisted %d endpoints", sorted(keywords), len(candidates)
        )
        return AnalyzedInput(keywords=keywords, candidates=candidates)
