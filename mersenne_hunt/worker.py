import queue
import threading
from dataclasses import dataclass

import gmpy2

from .candidate import CandidateAccumulator
from .config import FILTER_ROUNDS
from .exponents import primes_in
from .primality import Verdict, check_candidate
from .stats import WorkerStats

IDLE = "idle"
RUNNING = "running"
EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class Discovery:
    worker_id: int
    exponent: int
    digits: str = None  # None when the decimal form could not be produced


class Worker:
    """
    One search thread's worth of state.

    The accumulator, stats and loop state belong to this worker alone; the
    only things it shares are the exponent source it draws from and the
    queues it writes to.
    """

    def __init__(self, worker_id, reporter, completions=None, discoveries=None,
                 rounds=FILTER_ROUNDS, stop_event=None):
        self.worker_id = worker_id
        self.reporter = reporter
        self.completions = completions
        self.discoveries = discoveries if discoveries is not None else queue.Queue()
        self.rounds = rounds
        self.stop_event = stop_event or threading.Event()
        self.accumulator = CandidateAccumulator()
        self.stats = WorkerStats(worker_id)
        self.state = IDLE
        self.assignment = None

    def test_exponent(self, p):
        self.reporter.testing(self.worker_id, p)
        self.stats.begin(p)

        m = self.accumulator.advance(p)
        verdict = check_candidate(p, m, self.rounds)

        self.stats.finish(verdict is Verdict.PRIME)
        if verdict is Verdict.PRIME:
            self._report(p, m)
        return verdict

    def _report(self, p, m):
        try:
            digits = gmpy2.digits(m)
        except (MemoryError, ValueError) as e:
            self.reporter.warning(
                f"worker {self.worker_id} could not format the Mersenne prime "
                f"at exponent {p}: {e!r}"
            )
            digits = None
        else:
            self.reporter.found(self.worker_id, p, digits)
        self.discoveries.put(Discovery(self.worker_id, p, digits))

    # -------------------------------------------------
    # RANGED VARIANT
    # -------------------------------------------------

    def run_range(self, assignment):
        """Test every exponent in the assignment, then signal completion."""
        self.assignment = assignment
        self.state = RUNNING
        self.accumulator.reset()
        try:
            for p in primes_in(assignment):
                if self.stop_event.is_set():
                    return
                self.test_exponent(p)
        except Exception as e:
            # the arbiter only hears about completions, so this slot goes quiet
            self.reporter.warning(
                f"Unexpected termination of worker {self.worker_id} "
                f"in {assignment}: {e!r}"
            )
            return

        self.state = EXHAUSTED
        self.reporter.exhausted(self.worker_id)
        if self.completions is not None:
            self.completions.put(self.worker_id)

    # -------------------------------------------------
    # SHARED CURSOR VARIANT
    # -------------------------------------------------

    def run_forever(self, cursor):
        """Draw from the shared cursor until told to stop. Never exhausts."""
        self.assignment = None
        self.state = RUNNING
        self.accumulator.reset()
        try:
            while not self.stop_event.is_set():
                self.test_exponent(cursor.next())
        except Exception as e:
            self.reporter.warning(
                f"Unexpected termination of worker {self.worker_id}: {e!r}"
            )
