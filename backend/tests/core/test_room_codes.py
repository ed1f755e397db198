"""Room Codes — alphabet, drawing and normalization."""

import random

from roomlink.core.room_codes import (
    CODE_ALPHABET, CODE_LENGTH, draw_code, is_well_formed_code, normalize_code,
)


def test_alphabet_has_32_unambiguous_symbols():
    assert len(CODE_ALPHABET) == 32
    assert len(set(CODE_ALPHABET)) == 32
    for confusable in "0O1I":
        assert confusable not in CODE_ALPHABET


def test_alphabet_is_uppercase():
    assert CODE_ALPHABET == CODE_ALPHABET.upper()


def test_drawn_codes_use_only_the_alphabet():
    for _ in range(200):
        code = draw_code()
        assert len(code) == CODE_LENGTH
        assert is_well_formed_code(code)


def test_draw_code_uses_injected_choice():
    rng = random.Random(7)
    first = draw_code(rng.choice)
    rng = random.Random(7)
    assert draw_code(rng.choice) == first


def test_normalize_strips_and_uppercases():
    assert normalize_code("  ab23cd ") == "AB23CD"


def test_normalize_is_idempotent():
    assert normalize_code(normalize_code("xy9zkq")) == "XY9ZKQ"


def test_normalize_blank_and_none_yield_empty():
    assert normalize_code("   ") == ""
    assert normalize_code(None) == ""


def test_well_formed_rejects_wrong_length_and_confusables():
    assert not is_well_formed_code("ABC")
    assert not is_well_formed_code("ABCDEFG")
    assert not is_well_formed_code("AB0CDE")
    assert not is_well_formed_code("ab23cd")
