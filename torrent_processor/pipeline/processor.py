"""Category dispatch: organizes one entry into the library."""

from pathlib import Path
from typing import Callable, Dict, Set

from loguru import logger
from tqdm import tqdm

from torrent_processor.classification.tv_names import TvInfo, parse_tv_episode, parse_tv_season
from torrent_processor.config.context import ProcessConfig
from torrent_processor.config.settings import SEASON_EPISODE_EXTENSION, SUBTITLE_LANGUAGE
from torrent_processor.exceptions import ProcessingError
from torrent_processor.filesystem.file_ops import (
    copy_file,
    is_not_subtitle,
    is_subtitle,
    partition_files,
)
from torrent_processor.filesystem.paths import resolve_show_directory
from torrent_processor.models.category import Category
from torrent_processor.models.entry import Entry


class CategoryProcessor:
    """
    Copies an entry's content into the library according to its category.

    Holds no state between calls; retries are the caller's business.
    """

    def __init__(self, config: ProcessConfig):
        """
        Initialize the processor.

        Args:
            config: Run configuration (output roots and dry-run flag).
        """
        self.config = config
        self._handlers: Dict[Category, Callable[[Entry], None]] = {
            Category.MovieSingle: self.copy_movie_single,
            Category.TvSingle: self.copy_tv_single,
            Category.TvSeason: self.copy_tv_season,
            Category.Ignore: self.skip,
        }
        missing = set(Category) - set(self._handlers)
        if missing:
            raise RuntimeError(f"categories without a handler: {missing}")

    @property
    def dry_run(self) -> bool:
        return self.config.dry_run

    def process(self, entry: Entry) -> None:
        """
        Organize one entry.

        Args:
            entry: Entry to organize.

        Raises:
            ProcessingError: On invalid entries, ambiguous content,
                destination collisions or filesystem failures.
        """
        logger.info(
            f"Processing {entry.hash} ({entry.name!r}, {entry.category}, "
            f"{entry.number_of_files} files){' [SIMULATION]' if self.dry_run else ''}"
        )

        if entry.number_of_files <= 0:
            raise ProcessingError("no files")

        # Path("") is the working directory
        if not entry.content_path or not Path(entry.content_path).exists():
            raise ProcessingError(f"content path doesn't exist: {entry.content_path}")

        handler = self._handlers.get(entry.category)
        if handler is None:
            raise ProcessingError(f"unhandled category {entry.category}")
        handler(entry)

    def skip(self, entry: Entry) -> None:
        """Ignore category: nothing to copy."""
        logger.info(f"Category {entry.category}, nothing to do for {entry.name!r}")

    def copy_movie_single(self, entry: Entry) -> None:
        """Copy one movie and its subtitles into the movie library."""
        content = Path(entry.content_path)
        files = partition_files(content, {"subtitles": is_subtitle, "videos": is_not_subtitle})
        videos = files["videos"]

        if not videos:
            raise ProcessingError(f"no video files found in {content}")
        if len(videos) > 1:
            names = [v.name for v in videos]
            raise ProcessingError(f"found {len(videos)} video files but can only handle one: {names}")

        output = self.config.movie_output_path
        video = videos[0]
        try:
            copy_file(video, output / f"{entry.name}{video.suffix}", self.dry_run)
        except ProcessingError as e:
            raise ProcessingError(f"failed to copy video: {e}") from e

        # Only the first subtitle of each extension, assumed english
        seen: Set[str] = set()
        for subtitle in files["subtitles"]:
            ext = subtitle.suffix.lower()
            if ext in seen:
                logger.warning(
                    f"Subtitle skipped because one was already processed for {ext}: {subtitle}"
                )
                continue
            seen.add(ext)

            destination = output / f"{entry.name}.{SUBTITLE_LANGUAGE}{ext}"
            try:
                copy_file(subtitle, destination, self.dry_run)
            except ProcessingError as e:
                raise ProcessingError(f"failed to copy subtitle: {e}") from e

    def copy_tv_single(self, entry: Entry) -> None:
        """Copy a single episode into its show directory."""
        if entry.number_of_files > 1:
            raise ProcessingError(f"more than one file, entry has {entry.number_of_files}")

        info = parse_tv_episode(entry.name)
        source = self._single_file(Path(entry.content_path))
        show_dir = self._show_directory(info)

        try:
            copy_file(source, show_dir / info.to_episode_name(source.suffix), self.dry_run)
        except ProcessingError as e:
            raise ProcessingError(f"failed to copy: {e}") from e

    def copy_tv_season(self, entry: Entry) -> None:
        """Copy every episode of a season pack into its show directory."""
        if entry.number_of_files < 2:
            raise ProcessingError(f"need at least 2 files, entry has {entry.number_of_files}")

        season = parse_tv_season(entry.name)
        show_dir = self._show_directory(season)

        content = Path(entry.content_path)
        try:
            episodes = sorted(
                p for p in content.iterdir()
                if p.is_file() and p.suffix.lower() == SEASON_EPISODE_EXTENSION
            )
        except OSError as e:
            raise ProcessingError(f"failed to read dir {content}: {e}") from e

        if not episodes:
            logger.warning(f"No {SEASON_EPISODE_EXTENSION} files found in {content}")

        for source in tqdm(episodes, desc=f"{season.name} S{season.season:02d}", unit="episode"):
            parsed = parse_tv_episode(source.name)
            info = TvInfo(name=season.name, season=season.season, episode=parsed.episode)
            try:
                copy_file(source, show_dir / info.to_episode_name(source.suffix), self.dry_run)
            except ProcessingError as e:
                raise ProcessingError(f"failed to copy: {e}") from e

    def _show_directory(self, info: TvInfo) -> Path:
        try:
            return resolve_show_directory(self.config.tv_output_path, info.name, self.dry_run)
        except ProcessingError as e:
            raise ProcessingError(f"failed to create TV dir: {e}") from e

    def _single_file(self, content: Path) -> Path:
        """Resolve the one file of a single-file torrent."""
        if not content.is_dir():
            return content

        files = partition_files(content, {"files": lambda p: True})["files"]
        if len(files) != 1:
            raise ProcessingError(f"expected exactly one file in {content}, found {len(files)}")
        return files[0]
