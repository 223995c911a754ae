"""Sharing data between threads: strided sums and a job counter."""

from __future__ import annotations

import threading
import time
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from itertools import islice


def offset_sums(numbers: Sequence[int], stride: int = 8) -> list[int]:
    """Sum every stride-th value for each offset, one thread per offset.

    The threads share the sequence without copying it; the result is indexed by offset.
    """
    if stride < 1:
        raise ValueError(f"stride must be at least 1, got {stride}")

    def sum_from(offset: int) -> int:
        total = sum(islice(numbers, offset, None, stride))
        print(f"Sum of offset {offset} is {total}")
        return total

    with ThreadPoolExecutor(max_workers=stride) as pool:
        return list(pool.map(sum_from, range(stride)))


class JobStatus:
    """A count of completed jobs that threads may update safely."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._jobs_completed = 0

    @property
    def jobs_completed(self) -> int:
        with self._lock:
            return self._jobs_completed

    def complete_job(self) -> int:
        """Record one more completed job and return the new count."""
        with self._lock:
            self._jobs_completed += 1
            return self._jobs_completed


def watch_jobs(total: int = 10, job_delay: float = 0.25, poll_delay: float = 0.5) -> int:
    """Complete jobs on a worker thread while waiting for all of them.

    Prints a waiting line on each poll and returns how many were printed.
    """
    if total < 0:
        raise ValueError(f"total must not be negative, got {total}")
    status = JobStatus()

    def work() -> None:
        for _ in range(total):
            time.sleep(job_delay)
            status.complete_job()

    worker = threading.Thread(target=work, daemon=True)
    worker.start()
    waits = 0
    while status.jobs_completed < total:
        print("waiting... ")
        waits += 1
        time.sleep(poll_delay)
    worker.join()
    return waits