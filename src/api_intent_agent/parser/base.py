"""Data model for endpoints read from an OpenAPI document."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class EndpointRecord(BaseModel):
    """A single (path, method) operation with its raw metadata.

    parameters, request_body and responses are kept exactly as they
    appear in the document; no OpenAPI validation is applied.
    """

    model_config = ConfigDict(frozen=True)

    path: str  # /password/reset
    method: str  # GET / POST / PUT / DELETE / PATCH, always upper-case
    description: str = ""
    parameters: Any = ()  # tuple when the document holds a list
    request_body: Any = None
    responses: Any = None

    @property
    def key(self) -> tuple[str, str]:
        return (self.path, self.method)
