"""Processing pipeline: category dispatch and the queue driver."""

from torrent_processor.pipeline.processor import CategoryProcessor
from torrent_processor.pipeline.orchestrator import (
    QueueOrchestrator,
    RunStats,
    backoff_delay,
)

__all__ = [
    "CategoryProcessor",
    "QueueOrchestrator",
    "RunStats",
    "backoff_delay",
]
