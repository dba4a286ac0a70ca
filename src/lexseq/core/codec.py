"""Positional digit encoding for rendering sequence members as text.

Every alphabet here lists its symbols in ascending code-point order, so
comparing encoded strings with ``<`` matches comparing digit sequences.
That is what lets the lexicographic guarantees of the lex sequence carry
over to the rendered strings.
"""

from __future__ import annotations

from typing import Any

# 0-9, A-Z, a-z: ASCII order equals digit order.
DIGITS62 = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"

# Base 52 using letters only, uppercase first.
BASE52_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"


def default_alphabet(base: int) -> str:
    """Return the built-in alphabet for *base*.

    Base 52 uses the letters-only alphabet; other bases up to 62 use a
    prefix of ``DIGITS62``.
    """
    if base == len(BASE52_ALPHABET):
        return BASE52_ALPHABET
    if 2 <= base <= len(DIGITS62):
        return DIGITS62[:base]
    raise ValueError(f"No built-in alphabet for base {base}; pass one explicitly")


def check_alphabet(alphabet: str, base: int) -> str:
    """Validate that *alphabet* has *base* strictly increasing symbols."""
    if len(alphabet) != base:
        raise ValueError(f"Alphabet must have {base} symbols, got {len(alphabet)}")
    if any(a >= b for a, b in zip(alphabet, alphabet[1:])):
        raise ValueError(f"Alphabet symbols must be distinct and in code-point order: {alphabet!r}")
    return alphabet


def to_digits(value: int, base: int) -> list[int]:
    """Return the base-*base* digits of *value*, most significant first."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"Not a nonnegative integer: {value!r}")
    if base < 2:
        raise ValueError(f"Base must be at least 2, got {base}")
    if value == 0:
        return [0]
    digits: list[int] = []
    while value > 0:
        value, digit = divmod(value, base)
        digits.append(digit)
    digits.reverse()
    return digits


def encode(value: int, base: int, alphabet: str | None = None) -> str:
    """Encode a nonnegative integer as a string of *alphabet* symbols."""
    symbols = default_alphabet(base) if alphabet is None else check_alphabet(alphabet, base)
    return "".join(symbols[d] for d in to_digits(value, base))


def decode(text: str, base: int, alphabet: str | None = None) -> int:
    """Decode a string produced by :func:`encode` back to an integer."""
    symbols = default_alphabet(base) if alphabet is None else check_alphabet(alphabet, base)
    # No member renders as "", so it is an error rather than 0.
    if not text:
        raise ValueError("Cannot decode an empty string")
    lookup = {c: i for i, c in enumerate(symbols)}
    value = 0
    for char in text:
        digit = lookup.get(char)
        if digit is None:
            raise ValueError(f"Not a base-{base} string: {text!r}")
        value = value * base + digit
    return value


def stringify_base52(value: Any) -> str:
    """Base-52 encoding using letters, with digits ordered by code point."""
    return encode(value, len(BASE52_ALPHABET), BASE52_ALPHABET)


def parse_base52(text: str) -> int:
    return decode(text, len(BASE52_ALPHABET), BASE52_ALPHABET)
