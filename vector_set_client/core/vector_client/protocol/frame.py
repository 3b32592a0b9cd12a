"""
Command frame sent to the vector set service.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

CHARSET = "utf-8"


def to_token(value: object) -> bytes:
    """Serialize one argument into its wire token.

    bytes pass through unchanged, integers use their decimal form and
    floats their shortest round-trip form (``repr``), never locale formatting.
    """
    if isinstance(value, bytes):
        return value
    if isinstance(value, bool):
        raise TypeError("Boolean arguments are flags, not tokens")
    if isinstance(value, int):
        return str(value).encode(CHARSET)
    if isinstance(value, float):
        return repr(value).encode(CHARSET)
    if isinstance(value, str):
        return value.encode(CHARSET)
    raise TypeError(f"Unsupported argument type: {type(value).__name__}")


@dataclass(frozen=True)
class CommandFrame:
    """Immutable command name plus ordered argument tokens."""

    command: str
    args: Tuple[bytes, ...]
    key: str = ""

    def tokens(self) -> Tuple[bytes, ...]:
        """Return the full frame: command name followed by arguments."""
        return (self.command.encode(CHARSET),) + self.args

    def text_args(self) -> List[str]:
        """Return arguments decoded as text (for logging and tests)."""
        return [a.decode(CHARSET, errors="replace") for a in self.args]

    def __len__(self) -> int:
        return len(self.args)


class FrameBuilder:
    """Collects tokens for a single frame in order."""

    def __init__(self, command: str, key: str):
        self.command = command
        self.key = key
        self._args: List[bytes] = [to_token(key)]

    def add(self, *values: object) -> "FrameBuilder":
        """Append positional tokens."""
        for value in values:
            self._args.append(to_token(value))
        return self

    def flag(self, name: str, enabled: bool) -> "FrameBuilder":
        """Append a bare flag token only when enabled."""
        if enabled:
            self._args.append(to_token(name))
        return self

    def option(self, name: str, value: object) -> "FrameBuilder":
        """Append a named modifier followed by its value."""
        self._args.append(to_token(name))
        self._args.append(to_token(value))
        return self

    def build(self) -> CommandFrame:
        """Freeze the collected tokens into a frame."""
        return CommandFrame(command=self.command, args=tuple(self._args), key=self.key)
