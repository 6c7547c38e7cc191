import pytest

from storefront.recommendations.similarity import similarity


def test_identical_strings_score_one():
    for s in ["cotton", "t-shirt", "summer 25", "x"]:
        assert similarity(s, s) == 1.0


def test_empty_strings_score_one():
    assert similarity("", "") == 1.0


def test_disjoint_strings_score_zero():
    assert similarity("abc", "xyz") == 0.0


def test_empty_against_non_empty_scores_zero():
    assert similarity("", "abc") == 0.0


def test_case_is_ignored():
    assert similarity("Cotton", "cOTTON") == 1.0


def test_one_typo_in_six_letters():
    # one deletion over the longer length of 6
    assert similarity("coton", "cotton") == pytest.approx(1 - 1 / 6)


def test_classic_kitten_sitting():
    assert similarity("kitten", "sitting") == pytest.approx(1 - 3 / 7)
