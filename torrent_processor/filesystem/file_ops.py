"""File grouping and copying for library organization."""

import os
import shutil
from pathlib import Path
from typing import Callable, Dict, List, Mapping

from loguru import logger

from torrent_processor.config.settings import PARTIAL_COPY_SUFFIX, SUBTITLE_EXTENSIONS
from torrent_processor.exceptions import CopyError, DestinationExistsError, ProcessingError

FilePredicate = Callable[[Path], bool]


def is_subtitle(path: Path) -> bool:
    """Check if a file is a subtitle by its extension."""
    return path.suffix.lower() in SUBTITLE_EXTENSIONS


def is_not_subtitle(path: Path) -> bool:
    """Check if a file is anything but a subtitle."""
    return not is_subtitle(path)


def partition_files(path: Path, groups: Mapping[str, FilePredicate]) -> Dict[str, List[Path]]:
    """
    Sort the files under a path into named groups.

    Each file goes to the first group whose predicate accepts it, so
    groups never share a file. Files no group accepts are left out.

    Args:
        path: Directory to walk recursively, or a single file.
        groups: Ordered mapping of group name to predicate.

    Returns:
        Mapping of every group name to its files, in sorted path order.

    Raises:
        ProcessingError: If the directory cannot be walked.
    """
    result: Dict[str, List[Path]] = {name: [] for name in groups}

    if path.is_dir():
        try:
            files = sorted(p for p in path.rglob("*") if p.is_file())
        except OSError as e:
            raise ProcessingError(f"failed to walk dir {path}: {e}") from e
    else:
        files = [path]

    for file in files:
        for name, predicate in groups.items():
            if predicate(file):
                result[name].append(file)
                break

    return result


def copy_file(source: Path, destination: Path, dry_run: bool = False) -> None:
    """
    Copy a file without ever replacing existing content.

    Data is written next to the destination under a temporary name and
    hard-linked into place once complete, so the destination is absent
    or whole. Linking fails on any existing entry, dangling symlinks
    and files created after the first check included.

    Args:
        source: File to copy.
        destination: Full destination path.
        dry_run: If True, only check the destination and log.

    Raises:
        DestinationExistsError: If the destination already exists.
        CopyError: If reading, writing or linking fails, or a path is
            invalid (e.g. contains a NUL byte).
    """
    logger.info(f"Copying from {source} to {destination}")

    if destination.exists() or destination.is_symlink():
        raise DestinationExistsError(destination)

    if dry_run:
        logger.info(f"SIMULATION - Copy: {source.name} -> {destination}")
        return

    partial = destination.with_name(destination.name + PARTIAL_COPY_SUFFIX)
    try:
        shutil.copyfile(source, partial)
        os.link(partial, destination)
    except FileExistsError:
        _discard(partial)
        raise DestinationExistsError(destination) from None
    except (OSError, ValueError) as e:
        _discard(partial)
        raise CopyError(f"failed to copy file from {source} to {destination}: {e}") from e

    _discard(partial)

    logger.debug(f"File copied: {destination}")


def _discard(partial: Path) -> None:
    """Remove a partial copy, if one was written."""
    try:
        partial.unlink(missing_ok=True)
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to remove partial copy {partial}: {e}")
