"""Data models for queued torrents."""

from torrent_processor.models.category import Category
from torrent_processor.models.entry import Entry

__all__ = ["Category", "Entry"]
