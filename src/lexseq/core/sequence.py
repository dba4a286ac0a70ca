"""Lexicographically ordered, slowly growing integer sequences.

The sequence enumerates nonnegative integers whose representations in a
fixed even ``base`` (>= 4) have three properties:

1. They are enumerated in lexicographic order, and also in numeric order.
2. No representation is a prefix of another.
3. The n-th member has O(log n) base digits.

Members are grouped into digit-length tiers.  With examples in base 10:

- Start at 0 and enumerate (base/2)^1 numbers: 0, 1, ..., 4.
- Add 1, multiply by base, enumerate (base/2)^2 numbers: 50, 51, ..., 74.
- Add 1, multiply by base, enumerate (base/2)^3 numbers: 750, ..., 874.
- Repeat indefinitely, enumerating (base/2)^d d-digit numbers per tier.

Reading each member as a fraction after a decimal point, tier d consumes
2^(-d) of the unit interval, so a tier never overflows into the next digit
length.  The unused tail of every tier is what keeps the encoding
prefix-free.  The scheme is closely related to Elias gamma coding.

A binary sequence with the same properties is obtained by writing the
base-4 sequence in binary digits.
"""

from __future__ import annotations

import numbers
from typing import Any

from lexseq.core.errors import InvalidBase, InvalidIndex, NotAMember


def _is_exact_int(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def validate_base(base: Any) -> int:
    """Return *base* as an ``int``, raising :class:`InvalidBase` if unusable."""
    if not _is_exact_int(base):
        raise InvalidBase(base)
    base = int(base)
    if base % 2 != 0 or base < 4:
        raise InvalidBase(base)
    return base


class LexSequence:
    """The lex sequence for one fixed base.

    Instances are immutable and hold no other state, so a single engine can
    be shared freely between threads.

    Example::

        >>> seq = LexSequence(10)
        >>> [seq.sequence(i) for i in (0, 4, 5, 30)]
        [0, 4, 50, 750]
        >>> seq.sequence_inv(819)
        99
    """

    __slots__ = ("_base", "_half")

    def __init__(self, base: int) -> None:
        base = validate_base(base)
        object.__setattr__(self, "_base", base)
        object.__setattr__(self, "_half", base // 2)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base={self._base})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LexSequence):
            return NotImplemented
        return self._base == other._base

    def __hash__(self) -> int:
        return hash((LexSequence, self._base))

    @property
    def base(self) -> int:
        return self._base

    # -- Tier arithmetic -----------------------------------------------------

    def _digit_length(self, value: int) -> int:
        """Length of *value* in base digits (0 has length 1)."""
        length = 1
        while value >= self._base:
            value //= self._base
            length += 1
        return length

    def _tier_size(self, d: int) -> int:
        return self._half**d

    def _first_of_length(self, d: int) -> int:
        """First member with *d* digits: base^d - base * (base/2)^(d-1)."""
        return self._base**d - self._base * self._half ** (d - 1)

    def _last_of_length(self, d: int) -> int:
        """Last member with *d* digits: base^d - (base/2)^d - 1."""
        return self._base**d - self._half**d - 1

    # -- Public API ----------------------------------------------------------

    def successor(self, value: int) -> int:
        """Return the member following *value*.

        *value* must itself be a member; this is not checked.  Calling this
        repeatedly starting at 0 yields the sequence in order.
        """
        if value == self._last_of_length(self._digit_length(value)):
            # Start the next tier: value -> (value + 1) * base.
            return (value + 1) * self._base
        return value + 1

    def sequence(self, index: int) -> int:
        """Return the member at position *index* (0-based)."""
        if not _is_exact_int(index) or index < 0:
            raise InvalidIndex(index)

        # Subtract whole tiers until the remainder fits in tier d.
        remaining = int(index)
        d = 1
        while remaining >= self._tier_size(d):
            remaining -= self._tier_size(d)
            d += 1
        return self._first_of_length(d) + remaining

    def sequence_inv_safe(self, value: Any) -> int:
        """Return the index of *value*, or -1 if it is not a member.

        Never raises, so this doubles as a membership test.
        """
        if not _is_exact_int(value) or value < 0:
            return -1
        value = int(value)

        d = self._digit_length(value)
        # Position within the d-digit tier; valid positions are [0, (base/2)^d).
        index = value - self._first_of_length(d)
        if index < 0 or index >= self._tier_size(d):
            return -1
        for shorter in range(1, d):
            index += self._tier_size(shorter)
        return index

    def sequence_inv(self, value: Any) -> int:
        """Return the index of *value*.

        Raises:
            NotAMember: If *value* is not a member.  Use
                :meth:`sequence_inv_safe` to test membership without
                handling exceptions.
        """
        index = self.sequence_inv_safe(value)
        if index == -1:
            raise NotAMember(value, self._base)
        return index

    def is_member(self, value: Any) -> bool:
        return self.sequence_inv_safe(value) != -1


def lex_sequence(base: int) -> LexSequence:
    """Return a validated :class:`LexSequence` for *base*."""
    return LexSequence(base)
