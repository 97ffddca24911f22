import pytest

from simcheck.utils.text_utils import exact_similarity, normalize_text, split_lines, token_jaccard, tokenize


def test_normalize_collapses_whitespace_and_lowercases():
    assert normalize_text("  Hello \t  World\n\nAgain ") == "hello world again"


def test_normalize_empty():
    assert normalize_text("") == ""
    assert normalize_text("   \n ") == ""


def test_tokenize_drops_short_tokens_and_punctuation():
    assert tokenize("Hi, the cat-dog!! a1b x") == ["the", "cat", "dog", "a1b"]


def test_tokenize_empty_string():
    assert tokenize("") == []


def test_split_lines_keeps_empty_lines():
    assert split_lines("a\n\nb\n") == ["a", "", "b", ""]
    assert split_lines("") == [""]


def test_exact_similarity_identical_after_normalizing():
    assert exact_similarity("Return  X", "return x") == 1.0


def test_exact_similarity_containment_ratio():
    assert exact_similarity("hello", "hello world") == pytest.approx(5 / 11)


def test_exact_similarity_unrelated_or_empty():
    assert exact_similarity("alpha", "beta") == 0.0
    assert exact_similarity("", "beta") == 0.0


def test_token_jaccard():
    assert token_jaccard(["aaa", "bbb"], ["bbb", "ccc"]) == pytest.approx(1 / 3)
    assert token_jaccard([], []) == 0.0
