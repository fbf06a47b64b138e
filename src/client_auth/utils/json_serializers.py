"""Shared JSON serialization helpers for log records and request bodies."""

import dataclasses
import json
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel


def json_serializer(obj: Any) -> Any:
    """
    ``default=`` hook for json.dumps.

    - pydantic models → their JSON-mode dump
    - dataclasses → dict
    - datetime/date → ISO 8601 string
    - Decimal → string (keeps precision on the wire)
    - Path → string
    - Enums → value
    - sets → sorted list
    - Everything else → string (fallback)
    """
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if isinstance(obj, Decimal):
        return str(obj)
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (set, frozenset)):
        return sorted(obj, key=str)
    return str(obj)


def encode_json_body(entity: Any) -> bytes:
    """
    Serialize a request entity to the exact bytes that are signed and sent.

    bytes pass through, str is UTF-8 encoded, anything else is rendered as
    indented JSON.

    Raises:
        TypeError, ValueError: If the entity cannot be serialized (e.g. a
            circular reference)
    """
    if isinstance(entity, bytes):
        return entity
    if isinstance(entity, str):
        return entity.encode("utf-8")
    return json.dumps(entity, default=json_serializer, indent=2, ensure_ascii=False).encode("utf-8")


__all__ = ["json_serializer", "encode_json_body"]
