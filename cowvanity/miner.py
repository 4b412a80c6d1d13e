"""
General `CREATE2` vanity address miner.

A deployment is anything implementing `Deployment`: it knows its current
creation address, can re-randomise its salt-affecting parameter in place and
can report the parameters that produced the current address.

IMPORTANT: `_search_worker` must stay a top-level function. On macOS/Windows
multiprocessing uses 'spawn', which pickles the target by qualified name.
"""

import multiprocessing
import os
import queue
import random
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

from .create2 import Create2
from .encoding import ADDRESS_SIZE

DEFAULT_BATCH_SIZE = 256
JOIN_TIMEOUT = 5.0
POLL_INTERVAL = 0.5


class Deployment(ABC):
    """A contract deployment whose address can be mined."""

    @abstractmethod
    def creation_address(self) -> bytes:
        """Returns the creation address for the current deployment."""

    @abstractmethod
    def update(self, rng: random.Random) -> None:
        """Updates the deployment in-place given some randomness."""

    @abstractmethod
    def parameters(self) -> Any:
        """Returns the parameters that produce the current creation address."""

    @abstractmethod
    def with_parameters(self, parameters: Any) -> "Deployment":
        """Returns a new deployment producing the address for `parameters`."""

    @abstractmethod
    def clone(self) -> "Deployment":
        """Returns a fully independent copy of this deployment."""

    @property
    @abstractmethod
    def create2(self) -> Create2:
        """The `CREATE2` parameters backing `creation_address`."""


@dataclass
class SearchStats:
    workers: int = 0
    attempts: int = 0
    elapsed: float = 0.0

    @property
    def rate(self) -> float:
        return self.attempts / self.elapsed if self.elapsed > 0 else 0.0


def matches_prefix(address: bytes, prefix: bytes) -> bool:
    return address[:len(prefix)] == prefix


def _search_worker(deployment, prefix, result_queue, stop_event, counter, batch_size):
    """Worker process: mutate and re-hash until a match or until told to stop."""
    rng = random.Random(os.urandom(32))
    local_count = 0

    while not stop_event.is_set():
        for _ in range(batch_size):
            local_count += 1
            if matches_prefix(deployment.creation_address(), prefix):
                result_queue.put(deployment.parameters())
                stop_event.set()
                with counter.get_lock():
                    counter.value += local_count
                return
            deployment.update(rng)

        with counter.get_lock():
            counter.value += local_count
        local_count = 0


def _wait_for_result(result_queue, processes):
    while any(p.is_alive() for p in processes):
        try:
            return result_queue.get(timeout=POLL_INTERVAL)
        except queue.Empty:
            pass
    # workers flush their queue feeders before exiting
    try:
        return result_queue.get(timeout=POLL_INTERVAL)
    except queue.Empty:
        raise RuntimeError("all search workers exited without a result")


def search_address(
    deployment: Deployment,
    prefix: bytes,
    workers: Optional[int] = None,
    batch_size: int = DEFAULT_BATCH_SIZE,
    stats: Optional[SearchStats] = None,
) -> Any:
    """
    Search for deployment parameters whose creation address starts with `prefix`.

    One worker process is started per CPU (or `workers`), each with its own
    clone of `deployment` and its own entropy-seeded generator. Blocks until
    the first worker reports a match, then stops and joins all workers and
    returns the winning parameters. Which worker wins is not deterministic.
    There is no "not found" outcome: an unreachable prefix runs forever.
    """
    prefix = bytes(prefix)
    if len(prefix) > ADDRESS_SIZE:
        raise ValueError(f"prefix longer than {ADDRESS_SIZE} bytes can never match")
    if workers is None:
        workers = os.cpu_count() or 1
    if workers < 1 or batch_size < 1:
        raise ValueError("workers and batch_size must be positive")

    result_queue = multiprocessing.Queue()
    stop_event = multiprocessing.Event()
    counter = multiprocessing.Value("Q", 0)

    processes = [
        multiprocessing.Process(
            target=_search_worker,
            args=(deployment.clone(), prefix, result_queue, stop_event, counter, batch_size),
            daemon=True,
        )
        for _ in range(workers)
    ]

    start = time.monotonic()
    for p in processes:
        p.start()
    try:
        result = _wait_for_result(result_queue, processes)
    finally:
        stop_event.set()
        for p in processes:
            p.join(JOIN_TIMEOUT)
            if p.is_alive():
                p.terminate()
                p.join()
        result_queue.close()

    if stats is not None:
        stats.workers = workers
        stats.attempts = counter.value
        stats.elapsed = time.monotonic() - start
    return result
