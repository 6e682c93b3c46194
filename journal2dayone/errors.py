"""Exceptions raised while converting an Apple Journal export.

Fatal errors (``ArchiveError``, ``MissingEntriesError``, ``InputPathError``)
abort the run. ``EntryError`` and ``MediaError`` are recoverable: the entry or
the single image is skipped and the run continues.
"""


class ConversionError(Exception):
    pass


class InputPathError(ConversionError):
    pass


class ArchiveError(ConversionError):
    pass


class UnsafeArchiveError(ArchiveError):
    pass


class MissingEntriesError(ConversionError):
    pass


class EntryError(ConversionError):
    pass


class MissingDateError(EntryError):
    pass


class DateParseError(EntryError):
    pass


class EmptyEntryError(EntryError):
    pass


class MediaError(ConversionError):
    pass


class MissingSourceError(MediaError):
    pass


class UnsupportedMediaError(MediaError):
    pass


class MediaNotFoundError(MediaError):
    pass


class MediaReadError(MediaError):
    pass
