"""Tests for the sortable ID generator."""

import itertools

import pytest

from lexseq.core.codec import BASE52_ALPHABET
from lexseq.core.errors import NotAMember
from lexseq.core.ids import IdGenerator, encoded_index, iter_values
from lexseq.core.models import IdState, SequenceConfig
from lexseq.core.sequence import LexSequence


class TestNextId:
    def test_sequential_with_prefix(self):
        state = IdState()
        gen = IdGenerator(state)
        assert gen.next_id("task") == "task-A"
        assert gen.next_id("task") == "task-B"
        assert gen.next_id("task") == "task-C"

    def test_tier_rollover(self):
        state = IdState(next_seq={"task": 25})
        gen = IdGenerator(state)
        assert gen.next_id("task") == "task-Z"
        assert gen.next_id("task") == "task-aA"

    def test_independent_prefixes(self):
        state = IdState()
        gen = IdGenerator(state)
        assert gen.next_id("task") == "task-A"
        assert gen.next_id("cand") == "cand-A"
        assert gen.next_id("task") == "task-B"
        assert gen.next_id("cand") == "cand-B"

    def test_sorted_without_padding(self):
        state = IdState()
        gen = IdGenerator(state, SequenceConfig(base=10))
        ids = [gen.next_id("v") for _ in range(200)]
        assert ids[:6] == ["v-0", "v-1", "v-2", "v-3", "v-4", "v-50"]
        assert ids == sorted(ids)
        for a, b in zip(ids, ids[1:]):
            assert not b.startswith(a)

    def test_state_is_mutated(self):
        state = IdState()
        gen = IdGenerator(state)
        gen.next_id("task")
        gen.next_id("task")
        assert state.next_seq["task"] == 2

    def test_custom_separator(self):
        gen = IdGenerator(IdState(), SequenceConfig(separator="/"))
        assert gen.next_id("task") == "task/A"


class TestPeek:
    def test_does_not_advance(self):
        state = IdState()
        gen = IdGenerator(state)
        assert gen.peek("task") == "task-A"
        assert gen.peek("task") == "task-A"
        assert state.next_seq == {}
        assert gen.next_id("task") == "task-A"
        assert gen.peek("task") == "task-B"


class TestParseId:
    def test_round_trip(self):
        gen = IdGenerator(IdState())
        ids = [gen.next_id("task") for _ in range(100)]
        for index, id_ in enumerate(ids):
            assert gen.parse_id(id_) == ("task", index)

    def test_prefix_containing_separator(self):
        gen = IdGenerator(IdState())
        assert gen.parse_id("a-b-C") == ("a-b", 2)

    def test_missing_separator(self):
        gen = IdGenerator(IdState())
        with pytest.raises(ValueError, match="no '-' separator"):
            gen.parse_id("taskA")

    def test_bad_symbol(self):
        gen = IdGenerator(IdState())
        with pytest.raises(ValueError, match="Not a base-52 string"):
            gen.parse_id("task-A1")

    def test_non_member(self):
        gen = IdGenerator(IdState())
        # "a" is 26, in the unused tail of the first tier.
        with pytest.raises(NotAMember):
            gen.parse_id("task-a")

    def test_leading_zero_rejected(self):
        gen = IdGenerator(IdState())
        # "AB" decodes to 1, a member, but is never issued.
        with pytest.raises(NotAMember):
            gen.parse_id("task-AB")


class TestIterValues:
    def test_from_zero(self):
        engine = LexSequence(10)
        assert list(itertools.islice(iter_values(engine), 7)) == [0, 1, 2, 3, 4, 50, 51]

    def test_from_start(self):
        engine = LexSequence(10)
        values = list(itertools.islice(iter_values(engine, 28), 4))
        assert values == [73, 74, 750, 751]

    def test_matches_sequence(self):
        engine = LexSequence(16)
        values = list(itertools.islice(iter_values(engine, 100), 500))
        assert values == [engine.sequence(i) for i in range(100, 600)]


class TestEncodedIndex:
    def test_canonical(self):
        engine = LexSequence(52)
        assert encoded_index(engine, "A", BASE52_ALPHABET) == 0
        assert encoded_index(engine, "aA", BASE52_ALPHABET) == 26

    def test_leading_zero_is_not_a_member(self):
        engine = LexSequence(52)
        assert encoded_index(engine, "AB", BASE52_ALPHABET) == -1
        assert encoded_index(engine, "AaA", BASE52_ALPHABET) == -1

    def test_tail_value_is_not_a_member(self):
        assert encoded_index(LexSequence(10), "5", "0123456789") == -1

    def test_bad_symbol_raises(self):
        with pytest.raises(ValueError, match="Not a base-10 string"):
            encoded_index(LexSequence(10), "5x", "0123456789")
