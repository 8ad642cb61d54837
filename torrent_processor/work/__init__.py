"""Persistent queue of pending jobs."""

from torrent_processor.work.work_queue import WorkQueue

__all__ = ["WorkQueue"]
