"""Identifier minting and content fingerprints.

Both are plain callables so the parser and resolver can be handed
deterministic replacements.
"""

import hashlib
import uuid
from pathlib import Path
from typing import Callable

IdentifierFactory = Callable[[], str]
ContentHasher = Callable[[Path], str]

_CHUNK_SIZE = 1 << 20


def new_identifier() -> str:
    return uuid.uuid4().hex.upper()


def md5_for_path(path: Path) -> str:
    digest = hashlib.md5()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()
