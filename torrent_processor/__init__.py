"""
Torrent Processor - post-download library organizer.

Queues completed torrents as JSON job files and organizes them by:
- Copying single movies with their subtitles into the movie library
- Copying single episodes and season packs into per-show directories
- Renaming files with a "Show S01E02" style for TV content
"""

__version__ = "0.1.0"
