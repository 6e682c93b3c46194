"""Shared fixtures: deterministic identifiers and Apple Journal export trees."""

import itertools
import struct
import zipfile
import zlib
from pathlib import Path
from typing import Callable, Iterable, Optional

import pytest
from PIL import Image

from journal2dayone.markup import MarkupTransformer
from journal2dayone.media import MediaResolver
from journal2dayone.parser import EntryParser


def entry_html(
    header: Optional[str] = "Wednesday, May 14, 2025",
    title: Optional[str] = None,
    paragraphs: Iterable[str] = (),
    images: Iterable[str] = (),
    extra: str = "",
) -> str:
    parts = ['<html><head><meta charset="utf-8"></head><body>']
    parts.append('<div class="pageContainer">')
    if header is not None:
        parts.append(f'<div class="pageHeader">{header}</div>')
    if title is not None:
        parts.append(f'<div class="title"><span class="s2">{title}</span></div>')
    images = list(images)
    if images:
        parts.append('<div class="assetGrid">')
        for src in images:
            parts.append(
                '<div class="gridItem assetType_photo">'
                f'<img class="asset_image" src="{src}"></div>'
            )
        parts.append("</div>")
    paragraphs = list(paragraphs)
    if paragraphs:
        parts.append('<div class="bodyText">')
        for text in paragraphs:
            parts.append(f'<p class="p1"><span class="s1">{text}</span></p>')
        parts.append("</div>")
    parts.append(extra)
    parts.append("</div></body></html>")
    return "\n".join(parts)


def write_png(path: Path, size=(4, 3)) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", size, "white").save(path, format="PNG")
    return path


def _png_chunk(kind: bytes, data: bytes) -> bytes:
    crc = zlib.crc32(kind + data) & 0xFFFFFFFF
    return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", crc)


def write_oversized_png(path: Path, size=(20000, 20000)) -> Path:
    """A PNG header claiming far more pixels than Pillow agrees to open."""
    path.parent.mkdir(parents=True, exist_ok=True)
    header = struct.pack(">IIBBBBB", size[0], size[1], 8, 2, 0, 0, 0)
    path.write_bytes(
        b"\x89PNG\r\n\x1a\n" + _png_chunk(b"IHDR", header) + _png_chunk(b"IDAT", b"")
    )
    return path


def zip_tree(root: Path, archive_path: Path) -> Path:
    with zipfile.ZipFile(archive_path, "w") as archive:
        for path in sorted(root.rglob("*")):
            archive.write(path, path.relative_to(root.parent).as_posix())
    return archive_path


def fake_md5(path: Path) -> str:
    return f"md5-{path.name}"


@pytest.fixture()
def new_id() -> Callable[[], str]:
    counter = itertools.count(1)
    return lambda: f"ID{next(counter):04d}"


@pytest.fixture()
def resolver(new_id) -> MediaResolver:
    return MediaResolver(new_id=new_id, hasher=fake_md5)


@pytest.fixture()
def parser(new_id, resolver) -> EntryParser:
    return EntryParser(
        transformer=MarkupTransformer(),
        resolver=resolver,
        new_id=new_id,
        time_zone="Europe/Warsaw",
    )


@pytest.fixture()
def export_dir(tmp_path: Path) -> Path:
    """An empty export: ``AppleJournalEntries/{Entries,Resources}``."""
    root = tmp_path / "AppleJournalEntries"
    (root / "Entries").mkdir(parents=True)
    (root / "Resources").mkdir()
    return root


@pytest.fixture()
def write_entry(export_dir: Path) -> Callable[..., Path]:
    def _write(name: str, html: str) -> Path:
        path = export_dir / "Entries" / name
        path.write_text(html, encoding="utf-8")
        return path

    return _write
