"""
Tests for the per-chat estimation sequence override.
"""
import pytest

from constants import DEFAULT_SEQ
from core.chat_config_store import get_sequence, set_sequence, validate_sequence
from core.exceptions import InvalidSequence


def test_default_sequence_when_no_override(db):
    assert get_sequence(db, 100) == (DEFAULT_SEQ, True)


def test_override_is_per_chat_and_replaceable(db):
    set_sequence(db, 100, ["1", "2", "3"])
    db.commit()
    set_sequence(db, 100, [" S ", "M", "L"])
    db.commit()

    assert get_sequence(db, 100) == (["S", "M", "L"], False)
    assert get_sequence(db, 200) == (DEFAULT_SEQ, True)


@pytest.mark.parametrize("sequence", [
    [],
    ["1", ""],
    ["1", "1"],
    ["1,2"],
    ["restart"],
    ["finish", "1"],
    ["123456789"],
])
def test_invalid_sequences_are_rejected(sequence):
    with pytest.raises(InvalidSequence):
        validate_sequence(sequence)
