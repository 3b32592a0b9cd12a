"""
Serialization of domain objects into element attribute text.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

import dataclasses
import json
from typing import Any

from pydantic import BaseModel


def to_attributes_json(obj: Any) -> str:
    """
    Serialize an object to the JSON text stored as element attributes.

    Supports objects with ``to_attributes_json()``, pydantic models,
    dataclasses, mappings and other JSON-serializable values. Non-ASCII
    text is kept as is.

    Args:
        obj: Domain object

    Returns:
        JSON text

    Raises:
        TypeError: If the object cannot be serialized
    """
    custom = getattr(obj, "to_attributes_json", None)
    if callable(custom):
        return custom()
    if isinstance(obj, BaseModel):
        return obj.model_dump_json()
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        obj = dataclasses.asdict(obj)
    return json.dumps(obj, ensure_ascii=False)
