"""Tests for the probabilistic filter + Lucas-Lehmer pipeline."""

import gmpy2
import pytest

from mersenne_hunt.candidate import mersenne_number
from mersenne_hunt.exponents import Assignment, primes_in
from mersenne_hunt.primality import (
    Verdict,
    _mod_mersenne,
    check_candidate,
    lucas_lehmer,
    lucas_lehmer_residue,
    probable_prime,
)


class TestLucasLehmer:
    def test_known_exponents(self, known_exponents):
        for p in known_exponents:
            assert lucas_lehmer(p), p

    @pytest.mark.parametrize("p", [11, 23, 29, 37, 41, 43, 47, 53, 59, 67, 71, 73, 79, 83, 97, 101, 103, 109, 113])
    def test_composite_mersenne_numbers(self, p):
        assert not lucas_lehmer(p)

    def test_residue_is_deterministic(self):
        first = lucas_lehmer_residue(29)
        for _ in range(3):
            assert lucas_lehmer_residue(29) == first
        assert first != 0

    def test_residue_matches_plain_modulo(self):
        """Folded reduction gives the same residue as the % operator."""
        p = 23
        m = (1 << p) - 1
        s = 4
        for _ in range(p - 2):
            s = (s * s - 2) % m
        assert lucas_lehmer_residue(p) == s

    def test_residue_accepts_prebuilt_candidate(self):
        assert lucas_lehmer_residue(31, mersenne_number(31)) == 0

    @pytest.mark.parametrize("p", [0, 1, 2])
    def test_residue_rejects_degenerate_exponents(self, p):
        with pytest.raises(ValueError):
            lucas_lehmer_residue(p)

    def test_two_is_prime_by_convention(self):
        assert lucas_lehmer(2)


class TestModMersenne:
    @pytest.mark.parametrize("x", [0, 1, 126, 127, 128, 254, 127 * 127, 126 * 126 - 2, 10 ** 9])
    def test_against_modulo(self, x):
        assert _mod_mersenne(gmpy2.mpz(x), 7, gmpy2.mpz(127)) == x % 127

    def test_negative_input(self):
        assert _mod_mersenne(gmpy2.mpz(-2), 7, gmpy2.mpz(127)) == 125


class TestPipeline:
    def test_known_exponents_are_prime(self, known_exponents):
        for p in known_exponents:
            assert check_candidate(p) is Verdict.PRIME, p

    def test_other_prime_exponents_up_to_127_are_not(self, known_exponents):
        for p in primes_in(Assignment(2, 128)):
            if p not in known_exponents:
                assert check_candidate(p) is not Verdict.PRIME, p

    @pytest.mark.parametrize("p", [0, 1])
    def test_tiny_exponents_are_composite(self, p):
        assert check_candidate(p) is Verdict.COMPOSITE

    def test_composite_exponent_is_filtered(self):
        # 2^4 - 1 = 15
        assert check_candidate(4) is Verdict.COMPOSITE

    def test_filter_false_positive_is_caught(self, monkeypatch):
        monkeypatch.setattr("mersenne_hunt.primality.probable_prime", lambda m, rounds=1: True)
        assert check_candidate(11) is Verdict.FILTER_FALSE_POSITIVE

    def test_filter_rejection_skips_lucas_lehmer(self, monkeypatch):
        def boom(p, m=None):
            raise AssertionError("Lucas-Lehmer should not run")

        monkeypatch.setattr("mersenne_hunt.primality.lucas_lehmer", boom)
        assert check_candidate(11) is Verdict.COMPOSITE

    def test_probable_prime(self):
        assert probable_prime(mersenne_number(31))
        assert not probable_prime(mersenne_number(11))
