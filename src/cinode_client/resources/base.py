"""Shared payload parsing for endpoint wrappers."""

from __future__ import annotations

from typing import Any, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from cinode_core.exceptions import MalformedPayloadError

T = TypeVar("T", bound=BaseModel)

logger = structlog.get_logger()


def parse_items(model: type[T], data: Any, resource: str) -> list[T]:
    """Validate a JSON list into models, skipping malformed items.

    Raises MalformedPayloadError when data is not a list at all.
    """
    if not isinstance(data, list):
        msg = f"Expected a list of {resource}, got {type(data).__name__}"
        raise MalformedPayloadError(msg)

    items: list[T] = []
    for raw in data:
        try:
            items.append(model.model_validate(raw))
        except ValidationError as e:
            logger.warning("payload_item_skipped", resource=resource, error=str(e))
    return items


def parse_item(model: type[T], data: Any, resource: str) -> T:
    """Validate a JSON object into a model."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        msg = f"Malformed {resource} payload: {e}"
        raise MalformedPayloadError(msg) from e
