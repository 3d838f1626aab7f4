"""
Write payload helpers shared by the entity services.

Dependencies: pydantic
System role: Field-set to store-row conversion
"""

from datetime import datetime
from typing import Any, Mapping

from pydantic import BaseModel


def to_store_values(fields: BaseModel | Mapping[str, Any]) -> dict[str, Any]:
    """
    Convert a validated field set or a plain mapping into JSON-ready column values.

    Args:
        fields: Pydantic field set or mapping of column values

    Returns:
        dict: Column values with timestamps as ISO-8601 strings
    """
    if isinstance(fields, BaseModel):
        return fields.model_dump(mode="json")
    return {
        key: value.isoformat() if isinstance(value, datetime) else value
        for key, value in fields.items()
    }
