"""OpenAPI document loader and endpoint index.

Reads an OpenAPI 3.x document (YAML or JSON) and flattens its
``paths`` section into EndpointRecord entries, one per operation.
"""

import json
import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from api_intent_agent.errors import SchemaLoadError
from .base import EndpointRecord

logger = logging.getLogger(__name__)


def load_document(file_path: Path) -> Any:
    """Read and parse a YAML or JSON API description from disk."""
    file_path = Path(file_path)
    if not file_path.is_file():
        raise SchemaLoadError(f"Schema file not found: {file_path}")

    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SchemaLoadError(f"Cannot read schema file {file_path}: {e}") from e

    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as yaml_error:
        # Some JSON (e.g. tab-indented) is not valid YAML
        try:
            return json.loads(text)
        except ValueError:
            raise SchemaLoadError(
                f"Cannot parse schema file {file_path}: {yaml_error}"
            ) from yaml_error


def build_endpoints(document: Any) -> list[EndpointRecord]:
    """Flatten ``paths`` into EndpointRecord entries in document order.

    Every non-null operation becomes a record. Operation contents are not
    validated: parameters, requestBody and responses pass through as-is.
    """
    if not isinstance(document, Mapping):
        raise SchemaLoadError("Schema document must be a mapping")
    paths = document.get("paths")
    if not isinstance(paths, Mapping):
        raise SchemaLoadError("Schema document has no 'paths' mapping")

    endpoints = []
    for path, path_item in paths.items():
        if not isinstance(path_item, Mapping):
            raise SchemaLoadError(f"Path item for {path!r} must be a mapping")

        for method, operation in path_item.items():
            if operation is None:
                continue
            endpoints.append(_build_record(str(path), str(method), operation))

    return endpoints


def _build_record(path: str, method: str, operation: Any) -> EndpointRecord:
    fields = {}
    if isinstance(operation, Mapping):
        fields = {
            "description": _as_text(operation.get("description") or ""),
            "parameters": _as_sequence(operation.get("parameters") or []),
            "request_body": operation.get("requestBody"),
            "responses": operation.get("responses"),
        }
    try:
        return EndpointRecord(path=path, method=method.upper(), **fields)
    except ValidationError as e:
        raise SchemaLoadError(f"Malformed operation {method.upper()} {path}: {e}") from e


def _as_text(description: Any) -> Any:
    # YAML turns unquoted dates and numbers into non-string scalars
    if isinstance(description, (Mapping, list)):
        return description
    return str(description)


def _as_sequence(params: Any) -> Any:
    if isinstance(params, list):
        return tuple(params)
    return params


class SchemaIndex:
    """Read-only, ordered collection of the endpoints in one API description."""

    def __init__(self, endpoints: list[EndpointRecord]):
        self._endpoints = tuple(endpoints)

    @classmethod
    def from_document(cls, document: Any) -> "SchemaIndex":
        return cls(build_endpoints(document))

    @property
    def endpoints(self) -> tuple[EndpointRecord, ...]:
        return self._endpoints

    def lookup(self, path: str, method: str) -> EndpointRecord | None:
        """Find the record for a (path, method) pair, if indexed."""
        key = (path, method.upper())
        for endpoint in self._endpoints:
            if endpoint.key == key:
                return endpoint
        return None

    def __iter__(self) -> Iterator[EndpointRecord]:
        return iter(self._endpoints)

    def __len__(self) -> int:
        return len(self._endpoints)


def load_index(file_path: Path) -> SchemaIndex:
    """Load an API description file and build its SchemaIndex."""
    index = SchemaIndex.from_document(load_document(file_path))
    logger.info("Indexed %d endpoints from %s", len(index), file_path)
    return index
