import enum

import gmpy2

from .candidate import mersenne_number
from .config import FILTER_ROUNDS


# -------------------------------------------------
# LUCAS-LEHMER TEST
# -------------------------------------------------

def _mod_mersenne(x, p, m):
    """x mod 2^p - 1 by folding the high bits onto the low ones."""
    if x < 0:
        x += m
    while x > m:
        x = (x & m) + (x >> p)
    return 0 if x == m else x


def lucas_lehmer_residue(p, m=None):
    if p <= 2:
        raise ValueError(f"Lucas-Lehmer needs p > 2, got {p}")
    if m is None:
        m = mersenne_number(p)
    s = gmpy2.mpz(4)
    for _ in range(p - 2):
        s = _mod_mersenne(s * s - 2, p, m)
    return s


def lucas_lehmer(p, m=None):
    if p == 2:
        return True
    return lucas_lehmer_residue(p, m) == 0


# -------------------------------------------------
# PIPELINE
# -------------------------------------------------

class Verdict(enum.Enum):
    COMPOSITE = "composite"
    FILTER_FALSE_POSITIVE = "filter-false-positive"
    PRIME = "prime"


def probable_prime(m, rounds=FILTER_ROUNDS):
    return bool(gmpy2.is_prime(m, rounds))


def check_candidate(p, m=None, rounds=FILTER_ROUNDS):
    """Cheap filter first, Lucas-Lehmer only for the survivors."""
    if p < 2:
        return Verdict.COMPOSITE
    if p == 2:
        return Verdict.PRIME
    if m is None:
        m = mersenne_number(p)
    if not probable_prime(m, rounds):
        return Verdict.COMPOSITE
    if not lucas_lehmer(p, m):
        return Verdict.FILTER_FALSE_POSITIVE
    return Verdict.PRIME
