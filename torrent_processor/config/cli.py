"""Command-line interface argument parsing."""

import argparse
from typing import List, Optional

from torrent_processor.config.settings import DEFAULT_LIMIT
from torrent_processor.models.category import Category
from torrent_processor.models.entry import Entry


def category_type(value: str) -> Category:
    """Argparse type converting a category name, case-insensitively."""
    try:
        return Category.from_name(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def create_parser() -> argparse.ArgumentParser:
    """
    Create the argument parser for the CLI.

    Returns:
        Configured ArgumentParser with `add` and `process` sub-commands.
    """
    parser = argparse.ArgumentParser(
        prog='torrent_processor',
        description="""
        Queues completed torrents and organizes their files into a
        movie and TV library.
        """
    )

    parser.add_argument(
        '--config',
        default='',
        help="path to the config file, or a config name searched as NAME.json"
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help="enable debug logging on the console"
    )

    parser.add_argument(
        '--log-file',
        default=None,
        help="log file path (default: torrent-processor-COMMAND.log)"
    )

    subparsers = parser.add_subparsers(dest='command', metavar='COMMAND')
    subparsers.required = True

    category_names = ", ".join(category.name for category in Category)

    add_parser = subparsers.add_parser(
        'add',
        help='add a torrent to be processed',
        description='Add a completed torrent to the work to be processed.'
    )
    add_parser.add_argument('--name', required=True, help='torrent name')
    add_parser.add_argument(
        '--category',
        required=True,
        type=category_type,
        help=f'category of the torrent: {category_names}'
    )
    add_parser.add_argument(
        '--content-path',
        required=True,
        help='path to the content, same as root path for multi-file torrents'
    )
    add_parser.add_argument('--save-path', required=True, help='path to the saved torrent directory')
    add_parser.add_argument('--num-files', required=True, type=int, help='number of files to process')
    add_parser.add_argument('--size', required=True, type=int, help='torrent size in bytes')
    add_parser.add_argument('--tracker', required=True, help='tracker used for this torrent')
    add_parser.add_argument('--hash', required=True, help='info hash')
    add_parser.add_argument('--output-path', required=True, help='root directory to output files')
    add_parser.add_argument(
        '--work-path',
        default=None,
        help='work directory (default: work_path from the config file)'
    )

    process_parser = subparsers.add_parser(
        'process',
        help='process queued torrents',
        description='Process completed torrents from the work.'
    )
    process_parser.add_argument(
        '--limit',
        type=int,
        default=DEFAULT_LIMIT,
        help='limit the number of entries processed before exiting'
    )
    process_parser.add_argument(
        '--dry-run',
        action='store_true',
        help="don't move files or entries, just log what would be done"
    )

    return parser


def parse_arguments(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        args: List of argument strings (None for sys.argv).

    Returns:
        Parsed Namespace object.
    """
    parser = create_parser()
    return parser.parse_args(args)


def args_to_entry(namespace: argparse.Namespace) -> Entry:
    """
    Build the Entry described by the `add` arguments.

    Args:
        namespace: Parsed `add` arguments.

    Returns:
        Entry instance.
    """
    return Entry(
        output_path=namespace.output_path,
        name=namespace.name,
        category=namespace.category,
        content_path=namespace.content_path,
        number_of_files=namespace.num_files,
        size=namespace.size,
        tracker=namespace.tracker,
        hash=namespace.hash,
        save_path=namespace.save_path,
    )
