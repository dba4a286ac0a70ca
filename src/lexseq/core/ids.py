"""Deterministic, sortable, type-prefixed ID generator.

IDs are formatted as "<prefix><separator><member>" where member is the
prefix's next lex-sequence member rendered in the configured alphabet.
Unlike zero-padded counters, the IDs for one prefix sort in issue order at
any length and none is a prefix of another.  Counters live in
IdState.next_seq so they can be persisted between runs.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from lexseq.core.codec import decode, encode
from lexseq.core.errors import NotAMember
from lexseq.core.models import IdState, SequenceConfig
from lexseq.core.sequence import LexSequence
from lexseq.metrics import IDS_ISSUED, MEMBERSHIP_REJECTIONS

logger = logging.getLogger(__name__)


def iter_values(engine: LexSequence, start: int = 0) -> Iterator[int]:
    """Yield members from ``engine.sequence(start)`` onward.

    Only the first member is computed by index; the rest are stepped with
    ``successor``.
    """
    value = engine.sequence(start)
    while True:
        yield value
        value = engine.successor(value)


def encoded_index(engine: LexSequence, text: str, alphabet: str) -> int:
    """Return the index of the member rendered as *text*, or -1.

    Only the canonical rendering counts: leading zero symbols decode to a
    member but are never produced by :func:`~lexseq.core.codec.encode`, and
    would make the rendering of member 0 a prefix of them.

    Raises:
        ValueError: If *text* is empty or uses symbols outside *alphabet*.
    """
    value = decode(text, engine.base, alphabet)
    if encode(value, engine.base, alphabet) != text:
        return -1
    return engine.sequence_inv_safe(value)


class IdGenerator:
    """Generates sortable IDs backed by IdState counters."""

    def __init__(self, state: IdState, config: SequenceConfig | None = None) -> None:
        self._state = state
        self._config = config if config is not None else SequenceConfig()
        self._engine = self._config.make_sequence()

    @property
    def config(self) -> SequenceConfig:
        return self._config

    def format_id(self, prefix: str, index: int) -> str:
        """Render the ID at sequence position *index* for *prefix*."""
        member = self._engine.sequence(index)
        body = encode(member, self._config.base, self._config.symbols)
        return f"{prefix}{self._config.separator}{body}"

    def peek(self, prefix: str) -> str:
        """Return the ID :meth:`next_id` would issue, without advancing."""
        return self.format_id(prefix, self._state.next_seq.get(prefix, 0))

    def next_id(self, prefix: str) -> str:
        """Generate the next ID for the given type prefix.

        Example (base 52): next_id("task") -> "task-A", "task-B", ...
        """
        current = self._state.next_seq.get(prefix, 0)
        id_ = self.format_id(prefix, current)
        self._state.next_seq[prefix] = current + 1
        IDS_ISSUED.labels(prefix=prefix).inc()
        logger.debug("Issued %s (index %d)", id_, current)
        return id_

    def parse_id(self, id_: str) -> tuple[str, int]:
        """Split an ID into its prefix and sequence index.

        Raises:
            ValueError: If *id_* has no separator or its body uses symbols
                outside the alphabet.
            NotAMember: If the body decodes to a non-member.
        """
        prefix, sep, body = id_.rpartition(self._config.separator)
        if not sep:
            raise ValueError(f"ID has no {self._config.separator!r} separator: {id_!r}")

        index = encoded_index(self._engine, body, self._config.symbols)
        if index == -1:
            MEMBERSHIP_REJECTIONS.inc()
            logger.warning("Rejected ID %r: body is not a sequence member", id_)
            raise NotAMember(body, self._config.base)
        return prefix, index
