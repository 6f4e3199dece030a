"""SIM implementation - synthetic multi-thread workload for the viewer."""

import random
import threading
import time
from typing import Protocol

from flamespan import IProfiler, get_profiler
from flamespan.logging_config import get_logger

logger = get_logger(__name__)


class ISim(Protocol):
    """Generate span data. Hardcoded request-handling scenario."""

    def start(self) -> None:
        """Start worker threads."""
        ...

    def stop(self) -> None:
        """Stop worker threads and wait for them to retire."""
        ...


class Sim:
    """Runs a few worker threads that record nested spans and then retire."""

    def __init__(
        self,
        profiler: IProfiler | None = None,
        workers: int = 3,
        requests_per_worker: int = 5,
        max_sleep: float = 0.01,
    ):
        self._profiler = profiler or get_profiler()
        self._workers = workers
        self._requests_per_worker = requests_per_worker
        self._max_sleep = max_sleep
        self._running = threading.Event()
        self._threads: list[threading.Thread] = []

    @property
    def running(self) -> bool:
        return self._running.is_set()

    def start(self) -> None:
        """Start worker threads."""
        if self._running.is_set():
            return

        self._running.set()
        self._threads = [
            threading.Thread(
                target=self._run_worker,
                name=f"sim-worker-{i}",
                daemon=True,
            )
            for i in range(self._workers)
        ]
        for thread in self._threads:
            thread.start()
        logger.info("SIM started with %d workers", self._workers)

    def stop(self) -> None:
        """Stop worker threads and wait for them to retire."""
        self._running.clear()
        for thread in self._threads:
            thread.join()
        self._threads = []
        logger.info("SIM stopped")

    def join(self) -> None:
        """Wait for workers to finish their requests without stopping them early."""
        for thread in self._threads:
            thread.join()
        self._threads = []
        self._running.clear()

    def _pause(self) -> None:
        time.sleep(random.uniform(0, self._max_sleep))

    def _run_worker(self) -> None:
        profiler = self._profiler
        try:
            for i in range(self._requests_per_worker):
                if not self._running.is_set():
                    break
                profiler.span_of("handle request", self._handle_request, profiler, i)
        except Exception as e:
            logger.error("SIM worker error: %s", e)
        finally:
            profiler.commit_thread()

    def _handle_request(self, profiler: IProfiler, request_no: int) -> None:
        with profiler.start_guard("parse"):
            self._pause()

        with profiler.start_guard("query"):
            # Repeated identical leaves fold into one node
            for _ in range(3):
                profiler.start("fetch row")
                self._pause()
                profiler.end_collapse("fetch row")
            profiler.note("rows fetched", f"request {request_no}")

        profiler.start("render")
        self._pause()
        profiler.end("render")
