"""Runtime settings, read from API_INTENT_* environment variables or .env."""

from functools import lru_cache

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from api_intent_agent.intent.selector import DEFAULT_MIN_KEYWORD_LENGTH, DEFAULT_STOP_WORDS
from api_intent_agent.llm import DEFAULT_MAX_TOKENS, DEFAULT_MODEL, DEFAULT_TIMEOUT


class Settings(BaseSettings):
    model: str = DEFAULT_MODEL
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, gt=0)
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)

    api_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("API_INTENT_API_KEY", "ANTHROPIC_API_KEY"),
    )

    # JSON list in the environment, e.g. API_INTENT_STOP_WORDS='["what", "how"]'
    stop_words: frozenset[str] = DEFAULT_STOP_WORDS
    min_keyword_length: int = Field(default=DEFAULT_MIN_KEYWORD_LENGTH, ge=1)
    strip_punctuation: bool = False

    model_config = SettingsConfigDict(
        env_prefix="API_INTENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
