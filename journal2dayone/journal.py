"""Collect parsed entries into a single Day One journal."""

import dataclasses
import json
import logging
from pathlib import Path
from typing import Dict, Iterable

from .errors import EntryError
from .models import Journal, ParsedEntry
from .parser import EntryParser

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class ConversionSummary:
    converted: int = 0
    skipped: int = 0
    photos: int = 0

    def __str__(self) -> str:
        return (
            f"{self.converted} entries converted, {self.skipped} skipped, "
            f"{self.photos} photos"
        )


class JournalAggregator:
    def __init__(self) -> None:
        self.journal = Journal()
        self.media: Dict[Path, str] = {}
        self.summary = ConversionSummary()

    def add(self, parsed: ParsedEntry) -> bool:
        entry = parsed.entry
        if entry.is_empty:
            logger.warning("Skipping entry %s: no text and no photos", entry.identifier)
            self.summary.skipped += 1
            return False
        self.journal.entries.append(entry)
        for source, destination in parsed.media.items():
            previous = self.media.get(source)
            if previous is not None and previous != destination:
                logger.warning(
                    "%s is used by several entries; %s replaces %s in the archive",
                    source,
                    destination,
                    previous,
                )
            self.media[source] = destination
        self.summary.converted += 1
        self.summary.photos += len(entry.photos)
        return True

    def skip(self, document: Path, error: Exception) -> None:
        logger.warning("Entry %s skipped: %s", document, error)
        self.summary.skipped += 1

    def to_json(self) -> str:
        return json.dumps(self.journal.to_dict(), indent=2, ensure_ascii=False)


def convert_documents(
    documents: Iterable[Path], parser: EntryParser, aggregator: JournalAggregator
) -> ConversionSummary:
    for document in documents:
        logger.info("Processing entry: %s", document)
        try:
            parsed = parser.parse_file(document)
        except (EntryError, OSError) as e:
            aggregator.skip(document, e)
            continue
        except Exception as e:
            logger.exception("Unexpected error while parsing %s", document)
            aggregator.skip(document, e)
            continue
        aggregator.add(parsed)

    if not aggregator.journal.entries:
        logger.warning("No journal entries were converted. Output will be empty.")
    return aggregator.summary
