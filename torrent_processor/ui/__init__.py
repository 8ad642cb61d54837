"""User interface components."""

from torrent_processor.ui.console import ConsoleUI

__all__ = ["ConsoleUI"]
