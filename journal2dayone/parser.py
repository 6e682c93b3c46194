"""Apple Journal entry HTML -> Day One entry.

Each exported entry is one HTML document shaped roughly like::

    <div class="pageContainer">
      <div class="pageHeader">Wednesday, May 14, 2025</div>
      <div class="title"><span class="s2">Morning Walk</span></div>
      <div class="assetGrid">
        <div class="gridItem assetType_photo">
          <img class="asset_image" src="../Resources/IMG.png">
        </div>
      </div>
      <p class="p1"><span class="s1"><div class="bodyText">...</div></span></p>
    </div>

The export nests ``div.bodyText`` inconsistently: sometimes it is the block
itself, sometimes the block's parent, sometimes buried inside it. Text
blocks are therefore matched against each of those shapes in turn instead
of assuming one.
"""

import datetime
import logging
from pathlib import Path
from typing import List, Optional

from bs4 import BeautifulSoup, Tag
from dateutil.parser import ParserError
from dateutil.parser import parse as parse_date

from .errors import DateParseError, EmptyEntryError, MediaError, MissingDateError
from .identifiers import IdentifierFactory, new_identifier
from .markup import MarkupTransformer
from .media import MediaResolver
from .models import Entry, ParsedEntry

logger = logging.getLogger(__name__)

DATE_LAYOUTS = (
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
)

# The export has no time of day; pin every entry to noon UTC.
CANONICAL_HOUR = 12

# Two defaults that disagree on every field, used to tell which fields
# dateutil actually found in the text.
_PROBE_DEFAULTS = (datetime.datetime(1901, 1, 1), datetime.datetime(1902, 2, 2))


def _canonical(value: datetime.datetime) -> datetime.datetime:
    return datetime.datetime(
        value.year, value.month, value.day, CANONICAL_HOUR, tzinfo=datetime.timezone.utc
    )


def _parse_lenient(text: str) -> Optional[datetime.datetime]:
    try:
        first, second = (parse_date(text, default=d) for d in _PROBE_DEFAULTS)
    except (ParserError, OverflowError, ValueError):
        return None
    if first != second:
        return None
    return first


def parse_header_date(header: str) -> datetime.datetime:
    """Parse "Wednesday, May 14, 2025" into 2025-05-14 12:00 UTC."""
    text = header.strip()
    _, sep, rest = text.partition(",")
    if sep:
        text = rest.strip()
    text = " ".join(text.split())

    for layout in DATE_LAYOUTS:
        try:
            return _canonical(datetime.datetime.strptime(text, layout))
        except ValueError:
            continue

    parsed = _parse_lenient(text)
    if parsed is None:
        raise DateParseError(f"could not parse date '{header.strip()}'")
    return _canonical(parsed)


def extract_date(soup: BeautifulSoup) -> datetime.datetime:
    header = soup.select_one("div.pageHeader")
    date_str = header.get_text(" ", strip=True) if header else ""
    if not date_str:
        raise MissingDateError("no date found in pageHeader")
    return parse_header_date(date_str)


def title_from_filename(document: Path) -> Optional[str]:
    prefix, sep, rest = document.stem.partition("_")
    if not sep or "-" not in prefix:
        return None
    title = " ".join(rest.replace("_", " ").split())
    return title or None


def extract_title(soup: BeautifulSoup, document: Path) -> Optional[str]:
    span = soup.select_one("div.title span.s2")
    if span is not None:
        title = span.get_text(" ", strip=True)
        if title:
            return title
    return title_from_filename(document)


def _is_body_text(tag: Optional[Tag]) -> bool:
    return (
        isinstance(tag, Tag)
        and tag.name == "div"
        and "bodyText" in (tag.get("class") or [])
    )


def _outermost(tags: List[Tag]) -> List[Tag]:
    found = set(map(id, tags))
    return [
        tag
        for tag in tags
        if not any(id(parent) in found for parent in tag.parents)
    ]


def find_text_blocks(block: Tag) -> List[Tag]:
    if block.name == "p" or _is_body_text(block):
        return [block]
    if _is_body_text(block.parent):
        return [block]
    nested = block.select("div.bodyText")
    if nested:
        return _outermost(nested)
    return _outermost(block.find_all("p"))


class EntryParser:
    def __init__(
        self,
        transformer: MarkupTransformer,
        resolver: MediaResolver,
        new_id: IdentifierFactory = new_identifier,
        time_zone: str = "UTC",
    ) -> None:
        self.transformer = transformer
        self.resolver = resolver
        self.time_zone = time_zone
        self._new_id = new_id

    def parse_file(self, document: Path) -> ParsedEntry:
        with document.open("r", encoding="utf-8", errors="replace") as f:
            soup = BeautifulSoup(f.read(), "lxml")
        return self.parse(soup, document)

    def parse(self, soup: BeautifulSoup, document: Path) -> ParsedEntry:
        document = document.absolute()
        created = extract_date(soup)
        title = extract_title(soup, document)

        entry = Entry(
            identifier=self._new_id(),
            creation_date=created,
            modified_date=created,
            text="",
            time_zone=self.time_zone,
        )
        parsed = ParsedEntry(entry)
        body: List[str] = []

        container = soup.select_one("div.pageContainer") or soup.body or soup
        for block in container.find_all(recursive=False):
            classes = block.get("class") or []
            if block.name == "div" and ("pageHeader" in classes or "title" in classes):
                continue
            if block.name == "div" and "assetGrid" in classes:
                self._add_assets(block, document, parsed, body)
                continue
            for text_block in find_text_blocks(block):
                markdown = self.transformer.convert(str(text_block))
                if markdown:
                    body.append(markdown + "\n\n")

        text = "".join(body).rstrip()
        if title:
            text = f"# {title}\n\n{text}".rstrip()
        entry.text = text

        if entry.is_empty:
            raise EmptyEntryError(f"{document.name} has no text and no photos")
        return parsed

    def _add_assets(
        self, grid: Tag, document: Path, parsed: ParsedEntry, body: List[str]
    ) -> None:
        for item in grid.select("div.gridItem"):
            if "assetType_photo" not in (item.get("class") or []):
                kind = next(
                    (c for c in item.get("class") or [] if c.startswith("assetType_")),
                    "unknown",
                )
                logger.warning("Skipping unsupported asset '%s' in %s", kind, document)
                continue
            for img in item.select("img.asset_image"):
                try:
                    resolved = self.resolver.resolve(
                        img.get("src"), document.parent, parsed.entry.creation_date
                    )
                except MediaError as e:
                    logger.warning("Skipping image in %s: %s", document, e)
                    continue
                parsed.entry.photos.append(resolved.photo)
                parsed.media[resolved.copy.source] = resolved.copy.destination
                body.append(resolved.photo.placeholder + "\n\n")
