"""Per-query values produced by the intent pipeline."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from api_intent_agent.parser.base import EndpointRecord


class AnalyzedInput(BaseModel):
    """Keywords pulled from one user query and the endpoints they shortlisted."""

    model_config = ConfigDict(frozen=True)

    keywords: frozenset[str]
    candidates: tuple[EndpointRecord, ...]  # schema order


class IntentMatch(BaseModel):
    """The endpoint the model picked for a query, with its reasoning."""

    endpoint: str
    method: str
    confidence: float = Field(ge=0.0, le=1.0)
    explanation: str

    @field_validator("method")
    @classmethod
    def _upper_method(cls, value: str) -> str:
        return value.upper()
