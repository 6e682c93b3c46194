"""Data model for the Day One import format."""

import dataclasses
import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

JOURNAL_VERSION = "1.0"


def format_timestamp(value: datetime.datetime) -> str:
    utc = value.astimezone(datetime.timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%SZ")


@dataclasses.dataclass
class Photo:
    md5: str
    type: str
    identifier: str
    creation_date: datetime.datetime
    width: Optional[int] = None
    height: Optional[int] = None

    @property
    def placeholder(self) -> str:
        return f"![](dayone-moment://{self.identifier})"

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "md5": self.md5,
            "type": self.type,
            "identifier": self.identifier,
            "creationDate": format_timestamp(self.creation_date),
        }
        if self.width is not None and self.height is not None:
            data["width"] = self.width
            data["height"] = self.height
        return data


@dataclasses.dataclass
class CopyInstruction:
    """Where a source media file lands inside the output archive."""

    source: Path
    destination: str


@dataclasses.dataclass
class Entry:
    identifier: str
    creation_date: datetime.datetime
    modified_date: datetime.datetime
    text: str
    time_zone: str = "UTC"
    starred: bool = False
    photos: List[Photo] = dataclasses.field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.text and not self.photos

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "uuid": self.identifier,
            "creationDate": format_timestamp(self.creation_date),
            "modifiedDate": format_timestamp(self.modified_date),
            "text": self.text,
            "starred": self.starred,
            "timeZone": self.time_zone,
        }
        if self.photos:
            data["photos"] = [photo.to_dict() for photo in self.photos]
        return data


@dataclasses.dataclass
class ParsedEntry:
    entry: Entry
    media: Dict[Path, str] = dataclasses.field(default_factory=dict)


@dataclasses.dataclass
class Journal:
    entries: List[Entry] = dataclasses.field(default_factory=list)
    metadata: Dict[str, str] = dataclasses.field(
        default_factory=lambda: {"version": JOURNAL_VERSION}
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metadata": dict(self.metadata),
            "entries": [entry.to_dict() for entry in self.entries],
        }
