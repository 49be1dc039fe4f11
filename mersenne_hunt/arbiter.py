"""
The arbiter owns the worker pool.

Ranged mode: every worker gets a block of exponents; when it runs out it
puts its id on the completion queue and the arbiter hands it the next block.
Cursor mode: every worker draws from one shared cursor forever; there is
nothing to reassign, so the arbiter only watches for threads that die.

run() only comes back when the search cannot go on (SearchAborted) or when
someone set the stop event (None).
"""

import queue
import threading
from dataclasses import dataclass

from .config import SearchConfig
from .errors import AllocationError, WorkerStartError
from .exponents import ExponentCursor, RangeAllocator
from .messages import Reporter
from .worker import Worker


@dataclass(frozen=True)
class SearchAborted:
    reason: str


class Arbiter:
    def __init__(self, config=None, reporter=None, discoveries=None,
                 thread_factory=threading.Thread, stop_event=None):
        self.config = config or SearchConfig()
        self.reporter = reporter or Reporter()
        self.discoveries = discoveries if discoveries is not None else queue.Queue()
        self.thread_factory = thread_factory
        self.stop_event = stop_event or threading.Event()
        self.completions = queue.Queue()
        self.workers = {}
        self.threads = {}

    # -------------------------------------------------
    # POOL HELPERS
    # -------------------------------------------------

    def _build_pool(self):
        try:
            self.workers = {
                i: Worker(
                    i,
                    self.reporter,
                    completions=self.completions,
                    discoveries=self.discoveries,
                    rounds=self.config.rounds,
                    stop_event=self.stop_event,
                )
                for i in range(self.config.threads)
            }
        except MemoryError as e:
            raise AllocationError(f"allocation failed for {self.config.threads} workers") from e

    def _spawn(self, worker, target, *args):
        try:
            thread = self.thread_factory(
                target=target, args=args, name=f"worker-{worker.worker_id}", daemon=True
            )
            thread.start()
        except RuntimeError as e:
            raise WorkerStartError(worker.worker_id, e) from e
        self.threads[worker.worker_id] = thread

    def _drop(self, error):
        self.reporter.warning(f"{error}; continuing with {len(self.workers) - 1} workers")
        self.workers.pop(error.worker_id, None)
        self.threads.pop(error.worker_id, None)

    def _abort(self, reason):
        self.reporter.fatal(reason)
        return SearchAborted(reason)

    def stats(self):
        return [w.stats for w in self.workers.values()]

    # -------------------------------------------------
    # MAIN LOOP
    # -------------------------------------------------

    def run(self):
        try:
            self._build_pool()
        except AllocationError as e:
            return self._abort(str(e))

        if self.config.mode == "cursor":
            return self._run_cursor()
        return self._run_ranged()

    def _run_ranged(self):
        allocator = RangeAllocator(self.config.start, self.config.range_size)
        backlog = []  # ranges whose worker never started
        ready = list(self.workers.values())

        while True:
            for worker in ready:
                if self.stop_event.is_set():
                    return None
                assignment = backlog.pop() if backlog else allocator.allocate()
                try:
                    self._spawn(worker, worker.run_range, assignment)
                except WorkerStartError as e:
                    backlog.append(assignment)
                    self._drop(e)

            if not self.workers:
                return self._abort("thread creation failed for every worker")

            ready = self._wait_for_completions()
            if ready is None:
                return None

    def _wait_for_completions(self):
        """Block until at least one worker is done; None once stopped."""
        while True:
            if self.stop_event.is_set():
                return None
            try:
                worker_id = self.completions.get(timeout=self.config.poll_interval)
            except queue.Empty:
                continue
            done = [worker_id]
            while True:
                try:
                    done.append(self.completions.get_nowait())
                except queue.Empty:
                    break
            return [self.workers[i] for i in done if i in self.workers]

    def _run_cursor(self):
        cursor = ExponentCursor(self.config.start)
        for worker in list(self.workers.values()):
            try:
                self._spawn(worker, worker.run_forever, cursor)
            except WorkerStartError as e:
                self._drop(e)

        if not self.workers:
            return self._abort("thread creation failed for every worker")

        live = dict(self.threads)
        while live:
            for worker_id, thread in list(live.items()):
                thread.join(timeout=self.config.poll_interval / len(live))
                if thread.is_alive():
                    continue
                del live[worker_id]
                if not self.stop_event.is_set():
                    self.reporter.warning(f"Unexpected termination of worker {worker_id}!")
            if self.stop_event.is_set():
                return None

        # no respawn path with a shared cursor
        return self._abort("every worker terminated; the search cannot continue")

    def shutdown(self, timeout=None):
        self.stop_event.set()
        for thread in list(self.threads.values()):
            thread.join(timeout)
