"""Filesystem operations for library organization."""

from torrent_processor.filesystem.file_ops import (
    copy_file,
    is_subtitle,
    is_not_subtitle,
    partition_files,
)
from torrent_processor.filesystem.paths import (
    find_matching_folder,
    resolve_show_directory,
)

__all__ = [
    "copy_file",
    "is_subtitle",
    "is_not_subtitle",
    "partition_files",
    "find_matching_folder",
    "resolve_show_directory",
]
