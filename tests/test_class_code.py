import os, sys
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

import random
import re
import pytest

import class_code
from alphabet import ALPHABET, CODE_LENGTH
from class_code import ClassCode
from pattern_trie import EmptyPatternError, UnsatisfiableError

ALPHA_NUM = list("ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789")
ALPHA_NUM_WITHOUT_A = ALPHA_NUM[1:]
ALPHA_NUM_WITHOUT_ABC = ALPHA_NUM[3:]
CODE_RE = re.compile(f"^[{ALPHABET}]{{{CODE_LENGTH}}}$")


@pytest.fixture
def fixed_random(monkeypatch):
    """Make random.random() return 0.5 unless a test changes it."""
    value = {"r": 0.5}
    monkeypatch.setattr(class_code.random, "random", lambda: value["r"])
    return value


def is_gapped_subsequence(word, code):
    """True if the letters of ``word`` appear in order somewhere in ``code``."""
    it = iter(code)
    return all(ch in it for ch in word)


def test_generates_6_char_code_from_alphabet(fixed_random):
    code_gen = ClassCode([])
    assert len(code_gen.get_code()) == 6
    assert CODE_RE.match(code_gen.get_code())


def test_fixed_random_picks_middle_symbol(fixed_random):
    code_gen = ClassCode([])
    mid = ALPHABET[int(0.5 * len(ALPHABET))]
    assert code_gen.get_code() == mid * CODE_LENGTH


def test_different_random_values_give_different_codes(fixed_random):
    code_gen = ClassCode([])
    code = code_gen.get_code()
    fixed_random["r"] = 0
    new = code_gen.new_code()
    assert new != code
    assert new == "AAAAAA"
    assert code_gen.get_code() == new


def test_get_code_does_not_change_code():
    code_gen = ClassCode([])
    assert code_gen.get_code() == code_gen.get_code()


def test_generate_is_new_code(fixed_random):
    code_gen = ClassCode([])
    fixed_random["r"] = 0
    assert code_gen.generate() == "AAAAAA"
    assert code_gen.get_code() == "AAAAAA"


def test_fails_with_forbidden_empty_string():
    with pytest.raises(EmptyPatternError, match="Cannot add the empty string to the list of forbidden words"):
        ClassCode([""])


def test_fails_with_no_valid_words():
    with pytest.raises(UnsatisfiableError, match="The set of forbidden words does not allow any valid codes"):
        ClassCode(ALPHA_NUM)


def test_interprets_forbidden_words_as_case_insensitive():
    with pytest.raises(UnsatisfiableError):
        ClassCode(ALPHA_NUM_WITHOUT_A + ["a"])


def test_will_not_generate_codes_with_ambiguous_chars():
    with pytest.raises(UnsatisfiableError):
        ClassCode([ch for ch in ALPHA_NUM if ch not in "IL10O"])


def test_finds_code_with_a_single_valid_char(fixed_random):
    code_gen = ClassCode(ALPHA_NUM_WITHOUT_A)
    assert code_gen.get_code() == "AAAAAA"


def test_ignores_invalid_forbidden_words(fixed_random):
    code_gen = ClassCode(ALPHA_NUM_WITHOUT_A + ["AAAAAAA", "A!"])
    assert code_gen.get_code() == "AAAAAA"


def test_invalid_words_have_no_effect(fixed_random):
    words = ["CAT", "DOG", "XY"]
    plain = ClassCode(words)
    noisy = ClassCode(words + ["TOOLONGWORD", "HELLO", "A-B", "W0RD"])
    assert plain.get_code() == noisy.get_code()
    assert plain.trie.shape() == noisy.trie.shape()


def test_combines_multiple_forbidden_words_to_find_a_single_answer(fixed_random):
    code_gen = ClassCode(ALPHA_NUM_WITHOUT_ABC + ["AA", "BA", "BBBBB", "CB", "CC"])
    assert code_gen.get_code() == "ABBBBC"
    # The first pick is B, a dead end that gets learned along the way
    assert code_gen.learned_patterns
    assert not any("ABBBBC".startswith(p) for p in code_gen.learned_patterns)


@pytest.mark.parametrize("seed", range(10))
def test_single_answer_with_real_randomness(seed):
    random.seed(seed)
    code_gen = ClassCode(ALPHA_NUM_WITHOUT_ABC + ["AA", "BA", "BBBBB", "CB", "CC"])
    assert code_gen.get_code() == "ABBBBC"
    for _ in range(3):
        assert code_gen.new_code() == "ABBBBC"


def test_learned_prefixes_are_never_generated_again(fixed_random):
    code_gen = ClassCode(ALPHA_NUM_WITHOUT_ABC + ["AA", "BA", "BBBBB", "CB", "CC"])
    learned = list(code_gen.learned_patterns)
    for r in (0, 0.3, 0.5, 0.9):
        fixed_random["r"] = r
        code = code_gen.new_code()
        assert not any(code.startswith(p) for p in learned)


def test_no_forbidden_words_never_learns():
    code_gen = ClassCode([])
    for _ in range(200):
        assert CODE_RE.match(code_gen.new_code())
    assert code_gen.learned_patterns == []


def test_all_symbol_pairs_forbidden_is_unsatisfiable():
    # Root is not a dead end on its own, so this surfaces while generating
    pairs = [a + b for a in ALPHABET for b in ALPHABET]
    with pytest.raises(UnsatisfiableError):
        ClassCode(pairs)


@pytest.mark.parametrize("seed", range(25))
def test_forbidden_words_never_appear_in_order(seed):
    random.seed(seed)
    words = ["CAT", "DOG", "AB", "Z", "22", "XYZW"]
    code_gen = ClassCode(words)
    for _ in range(20):
        code = code_gen.new_code()
        assert CODE_RE.match(code)
        for w in words:
            assert not is_gapped_subsequence(w, code), (w, code)


@pytest.mark.parametrize("seed", range(5))
def test_learning_proves_unsatisfiable(seed):
    random.seed(seed)
    # Only A, B, C left and none may repeat, so no 6 symbol code exists
    words = [ch for ch in ALPHABET if ch not in "ABC"] + ["AA", "BB", "CC"]
    with pytest.raises(UnsatisfiableError):
        ClassCode(words)
