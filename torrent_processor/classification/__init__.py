"""Filename heuristics for TV content."""

from torrent_processor.classification.tv_names import (
    TvInfo,
    clean_show_name,
    parse_tv_season,
    parse_tv_episode,
)

__all__ = [
    "TvInfo",
    "clean_show_name",
    "parse_tv_season",
    "parse_tv_episode",
]
