"""Media categories driving how an entry is organized."""

from enum import Enum


class Category(Enum):
    """
    Closed set of torrent categories.

    Values are the integers stored in job files.
    """

    MovieSingle = 0
    TvSingle = 1
    TvSeason = 2
    Ignore = 3

    @classmethod
    def from_name(cls, name: str) -> "Category":
        """
        Look up a category by name, ignoring case.

        Raises:
            ValueError: If no category has that name.
        """
        for category in cls:
            if category.name.lower() == name.strip().lower():
                return category
        names = ", ".join(category.name for category in cls)
        raise ValueError(f"invalid category '{name}', expected one of: {names}")

    def __str__(self) -> str:
        return self.name
