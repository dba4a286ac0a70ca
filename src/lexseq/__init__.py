"""Lexicographically ordered, prefix-free, slowly growing integer sequences."""

from lexseq.core.codec import decode, encode, parse_base52, stringify_base52
from lexseq.core.errors import InvalidBase, InvalidIndex, LexSequenceError, NotAMember
from lexseq.core.sequence import LexSequence, lex_sequence, validate_base

__all__ = [
    "InvalidBase",
    "InvalidIndex",
    "LexSequence",
    "LexSequenceError",
    "NotAMember",
    "decode",
    "encode",
    "lex_sequence",
    "parse_base52",
    "stringify_base52",
    "validate_base",
]
