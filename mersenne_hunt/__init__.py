"""Multi-threaded Mersenne prime search."""

from .arbiter import Arbiter, SearchAborted
from .candidate import CandidateAccumulator, mersenne_number
from .config import SearchConfig
from .exponents import Assignment, ExponentCursor, RangeAllocator, primes_in
from .primality import Verdict, check_candidate, lucas_lehmer, lucas_lehmer_residue
from .worker import Discovery, Worker

__version__ = "2.0.0"

__all__ = [
    "Arbiter",
    "Assignment",
    "CandidateAccumulator",
    "Discovery",
    "ExponentCursor",
    "RangeAllocator",
    "SearchAborted",
    "SearchConfig",
    "Verdict",
    "Worker",
    "check_candidate",
    "lucas_lehmer",
    "lucas_lehmer_residue",
    "mersenne_number",
    "primes_in",
]
