"""Queue polling loop with backoff, dormancy and cooperative cancellation."""

import threading
from dataclasses import dataclass
from typing import Callable, Sequence

from loguru import logger

from torrent_processor.config.context import ProcessConfig
from torrent_processor.config.settings import BACKOFF_DELAYS
from torrent_processor.exceptions import (
    EntryFailedError,
    EntryParseError,
    ProcessingError,
    RetriesExceededError,
)
from torrent_processor.models.entry import Entry
from torrent_processor.pipeline.processor import CategoryProcessor
from torrent_processor.work.work_queue import WorkQueue


@dataclass
class RunStats:
    """Statistics of one orchestrator run."""

    processed: int = 0
    retries: int = 0
    polls: int = 0
    slept: float = 0.0
    stopped_by: str = ""


def backoff_delay(attempt: int, delays: Sequence[float] = BACKOFF_DELAYS) -> float:
    """
    Delay before the next attempt after `attempt` consecutive failures.

    Args:
        attempt: Failures already retried (0 for the first failure).
        delays: Increasing delays; the last one repeats.

    Returns:
        Delay in seconds.
    """
    return delays[min(attempt, len(delays) - 1)]


class QueueOrchestrator:
    """
    Drives the work queue through the category processor.

    One entry at a time. The only suspension points are the backoff
    wait after a parse failure and the dormant wait on an empty queue;
    both end early when the cancel event is set.
    """

    def __init__(
        self,
        queue: WorkQueue,
        processor: CategoryProcessor,
        config: ProcessConfig,
        cancel_event: threading.Event,
        delays: Sequence[float] = BACKOFF_DELAYS,
    ):
        """
        Initialize the orchestrator.

        Args:
            queue: Work queue to poll.
            processor: Processor applied to each entry.
            config: Run configuration (dormancy, retries, limit, dry-run).
            cancel_event: Cancellation signal observed at every wait.
            delays: Backoff schedule in seconds.
        """
        self.queue = queue
        self.processor = processor
        self.config = config
        self.cancel_event = cancel_event
        self.delays = delays
        self.stats = RunStats()

        self._done_handler: Callable[[Entry], None] = queue.remove
        if config.dry_run:
            self._done_handler = queue.ignore

    def _sleep(self, seconds: float) -> bool:
        """Wait unless cancelled. Returns True if cancelled."""
        cancelled = self.cancel_event.wait(seconds)
        if not cancelled:
            self.stats.slept += seconds
        return cancelled

    def _stop(self, reason: str) -> RunStats:
        self.stats.stopped_by = reason
        logger.info(f"Stopping ({reason}) after {self.stats.processed} entries")
        return self.stats

    def run(self) -> RunStats:
        """
        Process entries until cancelled or the limit is reached.

        Returns:
            RunStats of the run.

        Raises:
            RetriesExceededError: If parse failures outlast max_retries.
            EntryFailedError: If an entry fails to process; the entry is
                ignored until restart and its job file kept.
            WorkQueueError: If the queue cannot be read, a job is
                poisoned, or a finished job cannot be removed.
        """
        max_retries = self.config.max_retries
        remaining = self.config.limit
        retries = 0

        while True:
            if self.cancel_event.is_set():
                return self._stop("cancelled")

            self.stats.polls += 1
            try:
                entry = self.queue.next()
            except EntryParseError as e:
                if max_retries >= 0 and retries >= max_retries:
                    raise RetriesExceededError(max_retries) from e

                delay = backoff_delay(retries, self.delays)
                retries += 1
                self.stats.retries += 1
                logger.warning(
                    f"Failed to get next work entry (attempt {retries}, max {max_retries}, "
                    f"retrying in {delay}s): {e}"
                )
                if self._sleep(delay):
                    return self._stop("cancelled")
                continue

            retries = 0

            if entry is None:
                logger.debug(f"Queue empty, sleeping {self.config.dormant_period}s")
                if self._sleep(self.config.dormant_period):
                    return self._stop("cancelled")
                continue

            try:
                self.processor.process(entry)
            except (ProcessingError, OSError, ValueError) as e:
                self.queue.ignore(entry)
                raise EntryFailedError(entry) from e

            self._done_handler(entry)
            self.stats.processed += 1
            logger.success(f"Success: {entry.hash} ({entry.name!r})")

            if remaining > 0:
                remaining -= 1
                if remaining == 0:
                    logger.debug("Limit reached")
                    return self._stop("limit")
