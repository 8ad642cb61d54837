"""Library directory resolution."""

from pathlib import Path
from typing import Optional

from loguru import logger

from torrent_processor.exceptions import ProcessingError


def find_matching_folder(root_folder: Path, name: str) -> Optional[Path]:
    """
    Find a sub-directory whose name matches, ignoring case.

    Args:
        root_folder: Directory to search in (not recursive).
        name: Directory name to match.

    Returns:
        The first match in sorted order, or None.

    Raises:
        ProcessingError: If the root folder cannot be listed.
    """
    name_lower = name.lower()
    try:
        candidates = sorted(root_folder.iterdir())
    except OSError as e:
        raise ProcessingError(f"failed to read dir {root_folder}: {e}") from e

    for item in candidates:
        if item.is_dir() and item.name.lower() == name_lower:
            return item
    return None


def resolve_show_directory(tv_root: Path, show_name: str, dry_run: bool = False) -> Path:
    """
    Return the show's directory, creating it if needed.

    An existing directory with different casing is reused so shows do
    not get split by casing drift between releases.

    Args:
        tv_root: Library root for TV shows.
        show_name: Parsed show name.
        dry_run: If True, do not create the directory.

    Returns:
        Path of the show directory.

    Raises:
        ProcessingError: If the root cannot be read or the directory created.
    """
    existing = find_matching_folder(tv_root, show_name)
    if existing is not None:
        return existing

    destination = tv_root / show_name
    logger.info(f"Creating TV show directory {destination}")

    if dry_run:
        logger.info(f"SIMULATION - Create directory: {destination}")
        return destination

    try:
        destination.mkdir()
    except (OSError, ValueError) as e:
        raise ProcessingError(f"failed to create dir {destination}: {e}") from e

    return destination
