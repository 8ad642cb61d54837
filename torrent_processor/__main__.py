"""Entry point for the torrent_processor package.

Run with: python -m torrent_processor {add,process} ...
"""

import signal
import sys
import threading
from pathlib import Path
from typing import List, Optional

from loguru import logger

from torrent_processor.config import ConfigurationManager, ProcessConfig
from torrent_processor.config.cli import args_to_entry, parse_arguments
from torrent_processor.config.settings import LOG_FILE_TEMPLATE, LOG_RETENTION, LOG_ROTATION
from torrent_processor.exceptions import TorrentProcessorError
from torrent_processor.pipeline import CategoryProcessor, QueueOrchestrator
from torrent_processor.ui import ConsoleUI
from torrent_processor.work import WorkQueue


def setup_logging(command: str, debug: bool = False, log_file: Optional[str] = None) -> None:
    """
    Configure loguru logging.

    Args:
        command: Sub-command name, bound to every record and used in
            the default log file name.
        debug: If True, enable debug-level logging on the console.
        log_file: Log file path (default: torrent-processor-COMMAND.log).
    """
    logger.remove()
    logger.configure(extra={"cmd": command})
    logger.add(
        sys.stderr,
        level="DEBUG" if debug else "INFO",
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {extra[cmd]} | {message}",
    )
    logger.add(
        log_file or LOG_FILE_TEMPLATE.format(command=command),
        rotation=LOG_ROTATION,
        retention=LOG_RETENTION,
        level="DEBUG",
        serialize=True,
    )


def describe_error(error: BaseException) -> str:
    """Join an exception's message with the messages of its causes."""
    messages = []
    current: Optional[BaseException] = error
    while current is not None:
        text = str(current)
        if text and text not in messages:
            messages.append(text)
        current = current.__cause__
    return ": ".join(messages)


def install_signal_handlers(cancel_event: threading.Event) -> None:
    """Set the cancel event on SIGINT and SIGTERM."""
    def handle(signum, frame):
        logger.info(f"Received {signal.Signals(signum).name}, stopping")
        cancel_event.set()

    signal.signal(signal.SIGINT, handle)
    signal.signal(signal.SIGTERM, handle)


def run_add(namespace, manager: ConfigurationManager) -> None:
    """Queue the torrent described on the command line."""
    if namespace.work_path:
        work_path = Path(namespace.work_path)
    else:
        work_path = manager.load(namespace.config or None).work_path

    entry = args_to_entry(namespace)
    queue = WorkQueue(work_path)
    try:
        queue.add(entry)
    except ValueError as e:
        raise TorrentProcessorError(f"failed to add entry {entry.hash!r}: {e}") from e


def run_process(namespace, manager: ConfigurationManager, console: ConsoleUI) -> None:
    """Process queued torrents until interrupted or the limit is reached."""
    app_config = manager.load(namespace.config or None)
    config = ProcessConfig(app=app_config, dry_run=namespace.dry_run, limit=namespace.limit)

    if config.dry_run:
        console.print_warning(
            "SIMULATION MODE\n\n"
            "• No library files will be written\n"
            "• Job files stay in the work directory"
        )
    console.display_configuration(config)

    cancel_event = threading.Event()
    install_signal_handlers(cancel_event)

    orchestrator = QueueOrchestrator(
        WorkQueue(config.work_path),
        CategoryProcessor(config),
        config,
        cancel_event,
    )
    try:
        stats = orchestrator.run()
    finally:
        console.display_summary(orchestrator.stats)

    console.print_success(f"Processed {stats.processed} entries")


def main(args: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code (0 for success, 1 for errors).
    """
    namespace = parse_arguments(args)
    setup_logging(namespace.command, namespace.debug, namespace.log_file)

    console = ConsoleUI()
    manager = ConfigurationManager()

    try:
        if namespace.command == "add":
            run_add(namespace, manager)
        else:
            run_process(namespace, manager, console)
    except TorrentProcessorError as e:
        message = describe_error(e)
        logger.error(f"Failed to execute: {message}")
        console.print_error(message)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
