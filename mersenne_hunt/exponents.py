"""
Where exponents come from.

Two ways to hand out work, with the same coverage guarantee:

* ExponentCursor: one shared cursor, every worker draws one prime at a time.
* RangeAllocator: a shared boundary, each draw reserves a block of magnitudes
  [start, end) that a single worker walks on its own.

Both only ever move forward, so nothing is skipped and nothing is tested twice.
"""

import threading
from dataclasses import dataclass

import gmpy2


def first_exponent(start):
    """Smallest prime >= start (2 for anything below 2)."""
    if start <= 2:
        return 2
    # next_prime is strictly greater than its argument
    return int(gmpy2.next_prime(start - 1))


def next_exponent(p):
    return int(gmpy2.next_prime(p))


@dataclass(frozen=True)
class Assignment:
    start: int  # inclusive
    end: int    # exclusive

    def __contains__(self, p):
        return self.start <= p < self.end

    def __str__(self):
        return f"[{self.start}, {self.end})"


def primes_in(assignment):
    p = first_exponent(assignment.start)
    while p < assignment.end:
        yield p
        p = next_exponent(p)


class ExponentCursor:
    """Global cursor shared by every worker."""

    def __init__(self, start):
        self._next = first_exponent(start)
        self._lock = threading.Lock()

    def next(self):
        with self._lock:
            p = self._next
            self._next = next_exponent(p)
        return p

    def peek(self):
        with self._lock:
            return self._next


class RangeAllocator:
    """Running boundary that carves the exponent line into fixed-size blocks."""

    def __init__(self, start, size):
        if size < 1:
            raise ValueError(f"range size must be positive, got {size}")
        self.size = size
        self._boundary = start
        self._lock = threading.Lock()

    def allocate(self):
        with self._lock:
            assignment = Assignment(self._boundary, self._boundary + self.size)
            self._boundary = assignment.end
        return assignment

    def peek(self):
        with self._lock:
            return self._boundary
