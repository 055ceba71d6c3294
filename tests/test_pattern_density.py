"""Unit tests for the coverage-based pattern density."""

import random

import pytest

from profile_pattern_density import InvalidPatternError, pattern_density


@pytest.mark.parametrize(
    "sequence, pattern, expected",
    [
        ("ACGTTTTTTT", "CG", 0.20),
        ("CGCG", "CG", 1.00),
        ("CGACG", "CG", 0.80),
        ("AAAAAAAAAC", "A", 0.90),
        ("TTTTTTTTTT", "CG", 0.00),
        ("ACGT", "ACGT", 1.00),
    ],
)
def test_density_basic(sequence, pattern, expected):
    assert pattern_density(sequence, pattern) == expected


def test_overlapping_matches_cover_union_of_positions():
    # Matches at offsets 0 and 1 cover all three bases
    assert pattern_density("AAA", "AA") == 1.00
    # Three overlapping matches still cover only four distinct bases
    assert pattern_density("AAAATTTTTT", "AA") == 0.40


@pytest.mark.parametrize(
    "sequence, pattern, expected",
    [
        ("CGA", "CG", 0.66),  # 2/3, rounding would give 0.67
        ("CGAAAAA", "CG", 0.28),  # 2/7, rounding would give 0.29
        ("C" * 199 + "A", "C", 0.99),  # 0.995
    ],
)
def test_ratio_is_truncated_not_rounded(sequence, pattern, expected):
    assert pattern_density(sequence, pattern) == expected


@pytest.mark.parametrize("sequence", ["", "C", "cg", "CGC"])
def test_sequence_shorter_than_pattern_is_zero(sequence):
    assert pattern_density(sequence, "CGCG") == 0.0


@pytest.mark.parametrize("sequence", ["A", "ACGT", "cgcgcg"])
def test_empty_pattern_fails(sequence):
    with pytest.raises(InvalidPatternError):
        pattern_density(sequence, "")


def test_invalid_pattern_error_is_value_error():
    assert issubclass(InvalidPatternError, ValueError)


@pytest.mark.parametrize(
    "sequence, pattern",
    [("acgtCGcg", "Cg"), ("ttTTaa", "TA"), ("GGGgggCCC", "gc")],
)
def test_case_insensitive(sequence, pattern):
    expected = pattern_density(sequence, pattern)
    assert pattern_density(sequence.upper(), pattern.lower()) == expected
    assert pattern_density(sequence.lower(), pattern.upper()) == expected


def test_density_bounds_on_random_sequences():
    rng = random.Random(0)
    for _ in range(200):
        seq = "".join(rng.choice("ACGTacgtN") for _ in range(rng.randint(0, 60)))
        pat = "".join(rng.choice("ACGT") for _ in range(rng.randint(1, 4)))
        ratio = pattern_density(seq, pat)
        assert 0.0 <= ratio <= 1.0
        if len(seq) < len(pat):
            assert ratio == 0.0
