"""
Attribute API for the vector set client.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from __future__ import annotations

import json
from typing import Any, Optional

from ..exceptions import DecodeError
from . import command_encoder as enc
from . import reply_decoder as dec


class _ClientAPIAttributesMixin:
    """Mixin with element attribute operations."""

    def set_attributes(self, key: str, element: str, attributes: Optional[str]) -> int:
        """Set (or with None/"" clear) the attribute text of an element.

        Returns:
            1 if attributes were set, 0 if the element does not exist
        """
        frame = enc.encode_set_attributes(key, element, attributes)
        return dec.decode_integer(self._execute(frame), enc.VSETATTR, key)

    def get_attributes(self, key: str, element: str) -> Optional[str]:
        """Return the attribute text of an element, or None when absent."""
        frame = enc.encode_get_attributes(key, element)
        return dec.decode_optional_string(self._execute(frame), enc.VGETATTR, key)

    def get_attributes_json(self, key: str, element: str) -> Optional[Any]:
        """Return the attributes parsed as JSON, or None when absent.

        Raises:
            DecodeError: If the stored attributes are not valid JSON
        """
        text = self.get_attributes(key, element)
        if text is None:
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise DecodeError(
                f"VGETATTR: attributes are not JSON: {e}",
                command=enc.VGETATTR,
                key=key,
                reply=text,
            ) from e
