class MersenneHuntError(Exception):
    pass


class AllocationError(MersenneHuntError):
    """The worker table could not be built; the search cannot start."""


class WorkerStartError(MersenneHuntError):
    """A worker thread could not be started."""

    def __init__(self, worker_id, cause):
        super().__init__(f"thread creation failed for worker {worker_id}: {cause}")
        self.worker_id = worker_id
        self.cause = cause
