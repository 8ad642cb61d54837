"""Job descriptor data model for the torrent_processor package."""

from dataclasses import dataclass
from typing import Any, Dict

from torrent_processor.config.settings import JOB_FILE_SUFFIX
from torrent_processor.models.category import Category

# Entry attribute -> key used in job files
WIRE_KEYS: Dict[str, str] = {
    "output_path": "OutputPath",
    "name": "Name",
    "category": "Category",
    "content_path": "ContentPath",
    "number_of_files": "NumberOfFiles",
    "size": "Size",
    "tracker": "Tracker",
    "hash": "Hash",
    "save_path": "SavePath",
}

_STRING_FIELDS = ("output_path", "name", "content_path", "tracker", "hash", "save_path")
_INT_FIELDS = ("number_of_files", "size")


@dataclass
class Entry:
    """
    A completed torrent waiting to be organized.

    The hash is the job's identity: an entry is stored in the work
    directory as `<hash>.json`.
    """

    output_path: str = ''
    name: str = ''
    category: Category = Category.MovieSingle
    content_path: str = ''
    number_of_files: int = 0
    size: int = 0
    tracker: str = ''
    hash: str = ''
    save_path: str = ''

    @property
    def job_filename(self) -> str:
        """Filename this entry must be stored under."""
        return f"{self.hash}{JOB_FILE_SUFFIX}"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the job file representation."""
        data: Dict[str, Any] = {}
        for attribute, key in WIRE_KEYS.items():
            value = getattr(self, attribute)
            data[key] = value.value if isinstance(value, Category) else value
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "Entry":
        """
        Deserialize a job file object.

        Missing keys keep their defaults. Keys are matched ignoring case.

        Raises:
            ValueError: If the data is not an object or a value has the wrong type.
        """
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")

        lowered = {str(key).lower(): value for key, value in data.items()}
        values: Dict[str, Any] = {}

        for attribute in _STRING_FIELDS:
            key = WIRE_KEYS[attribute].lower()
            if key in lowered:
                value = lowered[key]
                if not isinstance(value, str):
                    raise ValueError(f"{WIRE_KEYS[attribute]} must be a string, got {value!r}")
                values[attribute] = value

        for attribute in _INT_FIELDS:
            key = WIRE_KEYS[attribute].lower()
            if key in lowered:
                value = lowered[key]
                if isinstance(value, bool) or not isinstance(value, int):
                    raise ValueError(f"{WIRE_KEYS[attribute]} must be an integer, got {value!r}")
                values[attribute] = value

        if "category" in lowered:
            values["category"] = _decode_category(lowered["category"])

        return cls(**values)


def _decode_category(value: Any) -> Category:
    """Accept either the stored integer or a category name."""
    if isinstance(value, bool):
        raise ValueError(f"invalid category {value!r}")
    if isinstance(value, int):
        try:
            return Category(value)
        except ValueError:
            raise ValueError(f"unknown category value {value}") from None
    if isinstance(value, str):
        return Category.from_name(value)
    raise ValueError(f"invalid category {value!r}")
