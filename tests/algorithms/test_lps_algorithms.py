"""Behaviour shared by every longest palindromic substring solver."""

from __future__ import annotations

import logging
import random
from typing import List

import pytest

from lps_analyzer.algorithms import (
    CenterExpansionLPS,
    LinearManacherLPS,
    LPSAlgorithm,
    NaiveLPS,
    PalindromeSpan,
    TabulatedLPS,
    TwoPassManacherLPS,
    build_algorithms,
    canonicalize,
    is_palindrome,
    normalize,
    palindrome_radii,
)
from lps_analyzer.errors import ConfigurationError, InternalConsistencyError

ALGORITHMS: List[LPSAlgorithm] = [
    NaiveLPS(),
    CenterExpansionLPS(),
    TabulatedLPS(),
    TabulatedLPS(table_limit=1),
    LinearManacherLPS(),
    TwoPassManacherLPS(),
]
IDS = ["naive", "center_expansion", "tabulation", "tabulation_rolling", "linear", "two_pass"]


def _brute_force_length(canonical: str) -> int:
    best = 0
    for i in range(len(canonical)):
        for j in range(i, len(canonical)):
            if j - i + 1 > best and is_palindrome(canonical[i : j + 1]):
                best = j - i + 1
    return best


@pytest.fixture(params=ALGORITHMS, ids=IDS)
def algorithm(request: pytest.FixtureRequest) -> LPSAlgorithm:
    return request.param


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("babad", "bab"),
        ("cbbd", "bb"),
        ("forgeeksskeegfor", "geeksskeeg"),
        ("abacdfgdcaba", "aba"),
        ("racecar", "racecar"),
        ("abcd", "a"),
        ("a", "a"),
        ("aaaa", "aaaa"),
        ("", ""),
        ("?!", ""),
        ("A man a plan a canal Panama", "A man a plan a canal Panama"),
        ("xx Madam, I'm Adam! yy", "Madam, I'm Adam"),
        ("  Z  ", "Z"),
    ],
)
def test_examples(algorithm: LPSAlgorithm, raw: str, expected: str) -> None:
    assert algorithm(raw) == expected


def test_result_is_palindrome_under_canonicalisation(algorithm: LPSAlgorithm) -> None:
    rng = random.Random(7)
    for _ in range(40):
        raw = "".join(rng.choices("aAbB c,", k=rng.randint(0, 30)))
        canonical = canonicalize(algorithm(raw))
        assert canonical == canonical[::-1]


def test_algorithms_agree_with_brute_force_length(algorithm: LPSAlgorithm) -> None:
    rng = random.Random(2024)
    for _ in range(60):
        text = "".join(rng.choices("ab", k=rng.randint(1, 25)))
        normalized = normalize(text)
        assert algorithm.find_span(normalized.canonical).length == _brute_force_length(text)


def test_all_identical_characters_return_full_string(algorithm: LPSAlgorithm) -> None:
    raw = "a" * 257
    assert algorithm(raw) == raw


def test_ties_keep_the_earliest_span(algorithm: LPSAlgorithm) -> None:
    assert algorithm.find_span("abcbxyzyx") == PalindromeSpan(4, 8)
    assert algorithm.find_span("abaxcdc") == PalindromeSpan(0, 2)
    assert algorithm.find_span("xy") == PalindromeSpan(0, 0)


def test_complexity_labels_are_reported(algorithm: LPSAlgorithm) -> None:
    description = algorithm.describe()
    assert description["name"] in {"naive", "dp", "manacher"}
    assert description["time_complexity"].startswith("O(")
    assert description["space_complexity"].startswith("O(")


def test_invalid_span_fails_loudly() -> None:
    class BrokenLPS(NaiveLPS):
        def find_span(self, canonical: str) -> PalindromeSpan:
            return PalindromeSpan(0, len(canonical) - 1)

    with pytest.raises(InternalConsistencyError):
        BrokenLPS()("abc")


def test_palindrome_radii() -> None:
    odd, even = palindrome_radii("abaaba")
    assert list(odd) == [1, 2, 1, 1, 2, 1]
    assert list(even) == [0, 0, 0, 3, 0, 0]


def test_tabulation_switches_to_rolling_row(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="lps_analyzer.algorithms.dynamic_programming")
    assert TabulatedLPS(table_limit=4)("xabbay") == "abba"
    assert any("rolling row" in record.getMessage() for record in caplog.records)


def test_rolling_row_matches_the_full_table() -> None:
    rng = random.Random(11)
    full, rolling = TabulatedLPS(), TabulatedLPS(table_limit=1)
    for _ in range(80):
        canonical = "".join(rng.choice("abc") for _ in range(rng.randint(1, 40)))
        assert rolling.find_span(canonical) == full.find_span(canonical)


@pytest.mark.slow
def test_rolling_row_handles_twenty_thousand_characters() -> None:
    canonical = "a" * 20_000
    assert TabulatedLPS().find_span(canonical) == PalindromeSpan(0, 19_999)


def test_base_class_requires_find_span() -> None:
    with pytest.raises(TypeError):
        LPSAlgorithm()

    class Incomplete(LPSAlgorithm):
        name = "incomplete"

    with pytest.raises(TypeError):
        Incomplete()


def test_tabulation_rejects_invalid_limit() -> None:
    with pytest.raises(ValueError):
        TabulatedLPS(table_limit=0)


def test_build_algorithms_selects_variants() -> None:
    default = build_algorithms()
    assert list(default) == ["naive", "dp", "manacher"]
    assert isinstance(default["dp"], CenterExpansionLPS)
    assert isinstance(default["manacher"], LinearManacherLPS)

    custom = build_algorithms("tabulation", "two_pass", tabulation_table_limit=10)
    assert isinstance(custom["dp"], TabulatedLPS)
    assert custom["dp"].table_limit == 10
    assert isinstance(custom["manacher"], TwoPassManacherLPS)


@pytest.mark.parametrize("dp_variant,manacher_variant", [("table", "linear"), ("tabulation", "fast")])
def test_build_algorithms_rejects_unknown_variants(dp_variant: str, manacher_variant: str) -> None:
    with pytest.raises(ConfigurationError):
        build_algorithms(dp_variant, manacher_variant)
