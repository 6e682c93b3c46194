"""Resolve image references found inside an entry's asset grid."""

import dataclasses
import datetime
import logging
from pathlib import Path
from typing import Optional, Tuple
from urllib.parse import unquote

from PIL import Image

from .errors import (
    MediaNotFoundError,
    MediaReadError,
    MissingSourceError,
    UnsupportedMediaError,
)
from .identifiers import ContentHasher, IdentifierFactory, md5_for_path, new_identifier
from .models import CopyInstruction, Photo

logger = logging.getLogger(__name__)

SUPPORTED_IMAGE_TYPES = {"png", "jpg", "jpeg", "gif"}
PHOTOS_DIR = "photos"


@dataclasses.dataclass
class ResolvedPhoto:
    photo: Photo
    copy: CopyInstruction


def read_dimensions(image_path: Path) -> Optional[Tuple[int, int]]:
    try:
        with Image.open(image_path) as img:
            return img.size
    except (OSError, Image.DecompressionBombError) as e:
        logger.debug("Could not read dimensions of '%s': %s", image_path, e)
        return None


class MediaResolver:
    """Turns an ``img`` source attribute into a Photo and a copy instruction.

    Sources are written relative to the entry document (``../Resources/x.png``)
    and are resolved against the document's directory, not the resources
    folder.
    """

    def __init__(
        self,
        new_id: IdentifierFactory = new_identifier,
        hasher: ContentHasher = md5_for_path,
    ) -> None:
        self._new_id = new_id
        self._hasher = hasher

    def resolve(
        self, src: Optional[str], document_dir: Path, created: datetime.datetime
    ) -> ResolvedPhoto:
        if not src or not src.strip():
            raise MissingSourceError("image has no source attribute")

        image_path = (document_dir / unquote(src.strip())).resolve(strict=False)
        image_type = image_path.suffix.lower().lstrip(".")
        if image_type not in SUPPORTED_IMAGE_TYPES:
            raise UnsupportedMediaError(
                f"unsupported media type '{image_type or image_path.name}'"
            )
        if not image_path.is_file():
            raise MediaNotFoundError(f"image file not found: {image_path}")

        try:
            md5 = self._hasher(image_path)
        except OSError as e:
            raise MediaReadError(f"cannot read {image_path}: {e}") from e

        identifier = self._new_id()
        photo = Photo(
            md5=md5,
            type=image_type,
            identifier=identifier,
            creation_date=created,
        )
        dimensions = read_dimensions(image_path)
        if dimensions:
            photo.width, photo.height = dimensions

        destination = f"{PHOTOS_DIR}/{identifier}.{image_type}"
        return ResolvedPhoto(photo, CopyInstruction(image_path, destination))
