"""Exceptions raised by the lex-sequence engine."""

from __future__ import annotations

from typing import Any


class LexSequenceError(ValueError):
    """Base class for all lex-sequence validation failures."""


class InvalidBase(LexSequenceError):
    """The base is not an even integer >= 4."""

    def __init__(self, base: Any) -> None:
        self.base = base
        super().__init__(f"lex-sequence base must be an even integer >= 4: {base!r}")


class InvalidIndex(LexSequenceError):
    """A sequence index is negative or not an exact integer."""

    def __init__(self, index: Any) -> None:
        self.index = index
        super().__init__(f"Not a nonnegative integer index: {index!r}")


class NotAMember(LexSequenceError):
    """A value is not a member of the sequence for the given base."""

    def __init__(self, value: Any, base: int) -> None:
        self.value = value
        self.base = base
        super().__init__(f"Not a lex-sequence member (base {base}): {value!r}")
