"""Configuration and state models for lexseq.

All models are Pydantic BaseModel classes so they round-trip through JSON
and YAML without custom serializers.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from lexseq.core.codec import check_alphabet, default_alphabet
from lexseq.core.sequence import LexSequence, validate_base

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class SequenceConfig(BaseModel):
    """How sequence members are rendered as ID strings."""

    base: int = 52
    alphabet: str | None = None
    separator: str = "-"

    @field_validator("base", mode="before")
    @classmethod
    def _check_base(cls, value: Any) -> int:
        return validate_base(value)

    @model_validator(mode="after")
    def _check_symbols(self) -> SequenceConfig:
        if self.alphabet is not None:
            check_alphabet(self.alphabet, self.base)
        symbols = self.symbols
        if not self.separator:
            raise ValueError("separator must not be empty")
        if any(c in symbols for c in self.separator):
            raise ValueError(f"separator {self.separator!r} overlaps the alphabet")
        return self

    @property
    def symbols(self) -> str:
        """The alphabet actually used for encoding."""
        return self.alphabet if self.alphabet is not None else default_alphabet(self.base)

    def make_sequence(self) -> LexSequence:
        return LexSequence(self.base)


# ---------------------------------------------------------------------------
# ID state
# ---------------------------------------------------------------------------


class IdState(BaseModel):
    """Persistent counters for the ID generator.

    ``next_seq`` maps an ID prefix to the sequence index of the next ID to
    issue for it.
    """

    next_seq: dict[str, int] = Field(default_factory=dict)
