"""Reading Apple Journal exports and writing Day One import archives."""

import logging
import zipfile
from pathlib import Path
from typing import Dict, List, Tuple

from .errors import ArchiveError, MissingEntriesError, UnsafeArchiveError
from .journal import JournalAggregator

logger = logging.getLogger(__name__)

JOURNAL_FILENAME = "Journal.json"
ENTRY_SUFFIXES = {".html", ".htm"}


def extract_archive(archive_path: Path, destination: Path) -> None:
    destination = destination.resolve()
    destination.mkdir(parents=True, exist_ok=True)
    try:
        with zipfile.ZipFile(archive_path) as archive:
            for member in archive.infolist():
                target = (destination / member.filename).resolve()
                if destination not in target.parents and target != destination:
                    raise UnsafeArchiveError(f"{member.filename}: illegal file path")
            archive.extractall(destination)
    except zipfile.BadZipFile as e:
        raise ArchiveError(f"{archive_path} is not a valid zip archive: {e}") from e
    except OSError as e:
        raise ArchiveError(f"could not extract {archive_path}: {e}") from e


def locate_export_roots(root: Path) -> Tuple[Path, Path]:
    """Return the ``Entries`` and ``Resources`` folders of an extracted export.

    Exports are often zipped with a single enclosing folder; when that
    folder holds ``Entries`` it becomes the export root.
    """
    base = root
    children = list(root.iterdir()) if root.is_dir() else []
    if len(children) == 1 and children[0].is_dir():
        if (children[0] / "Entries").is_dir():
            base = children[0]
            logger.info("Detected root folder '%s' in export.", base.name)
        else:
            logger.info(
                "Root folder '%s' has no Entries folder; using the top level.",
                children[0].name,
            )

    entries = base / "Entries"
    resources = base / "Resources"
    if not entries.is_dir():
        raise MissingEntriesError(
            f"Entries folder not found at {entries}. "
            "Expected <Export>/Entries/ or Entries/ at the archive root."
        )
    if not resources.is_dir():
        logger.warning("Resources folder not found at %s. Photos may be missing.", resources)
    return entries, resources


def find_entry_documents(entries: Path) -> List[Path]:
    return sorted(
        path
        for path in entries.rglob("*")
        if path.is_file() and path.suffix.lower() in ENTRY_SUFFIXES
    )


def write_dayone_archive(output_path: Path, aggregator: JournalAggregator) -> int:
    """Write ``Journal.json`` and every photo; return the number of photos copied."""
    copied = 0
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(output_path, "w", zipfile.ZIP_DEFLATED) as archive:
            archive.writestr(JOURNAL_FILENAME, aggregator.to_json())
            copied = _copy_media(archive, aggregator.media)
    except OSError as e:
        raise ArchiveError(f"could not create {output_path}: {e}") from e
    return copied


def _copy_media(archive: zipfile.ZipFile, media: Dict[Path, str]) -> int:
    copied = 0
    for source, destination in media.items():
        try:
            archive.write(source, destination)
        except OSError as e:
            logger.warning("Skipping media file %s: %s", source, e)
            continue
        logger.debug("Copied %s to %s in zip.", source, destination)
        copied += 1
    return copied
