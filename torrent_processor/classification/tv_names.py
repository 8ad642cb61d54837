"""Show, season and episode extraction from torrent and file names."""

import re
from dataclasses import dataclass

from torrent_processor.exceptions import TvNameError

SEASON_PATTERN = re.compile(r"^(.*?)S(\d+)", re.IGNORECASE)
EPISODE_PATTERN = re.compile(r"^(.*?)S(\d+)\.?E(\d+)", re.IGNORECASE)

# Separators release groups use between words
_WORD_SEPARATORS = re.compile(r"[._]+")
_EDGE_CHARACTERS = " .-_"


@dataclass
class TvInfo:
    """Show name with season and episode numbers."""

    name: str
    season: int
    episode: int = 0

    def to_episode_name(self, ext: str) -> str:
        """
        Build the library filename for an episode.

        Args:
            ext: File extension including dot.

        Returns:
            Filename like "Show S01E02.mkv".
        """
        return f"{self.name} S{self.season:02d}E{self.episode:02d}{ext}"


def clean_show_name(raw: str) -> str:
    """
    Turn a release-style prefix into a show name.

    Examples:
        >>> clean_show_name("The.Office.US.")
        'The Office US'
        >>> clean_show_name("Show - ")
        'Show'
    """
    name = _WORD_SEPARATORS.sub(" ", raw)
    name = " ".join(name.split())
    return name.strip(_EDGE_CHARACTERS)


def _show_name(raw: str, source: str) -> str:
    name = clean_show_name(raw)
    if not name:
        raise TvNameError(f"failed to extract TV show name from name {source}")
    return name


def parse_tv_season(name: str) -> TvInfo:
    """
    Extract show name and season from a season pack name.

    Args:
        name: Torrent name like "Show.S01.1080p".

    Returns:
        TvInfo with episode left at 0.

    Raises:
        TvNameError: If no season marker is found.
    """
    match = SEASON_PATTERN.match(name)
    if match is None:
        raise TvNameError(f"failed to extract TV name/season from name {name}")

    return TvInfo(name=_show_name(match.group(1), name), season=int(match.group(2)))


def parse_tv_episode(name: str) -> TvInfo:
    """
    Extract show name, season and episode from an episode name.

    Args:
        name: Torrent or file name like "Show.S01E02.Title.mkv".

    Returns:
        TvInfo with all fields set.

    Raises:
        TvNameError: If no season/episode marker is found.
    """
    match = EPISODE_PATTERN.match(name)
    if match is None:
        raise TvNameError(f"failed to extract TV name/season/episode from name {name}")

    return TvInfo(
        name=_show_name(match.group(1), name),
        season=int(match.group(2)),
        episode=int(match.group(3)),
    )
