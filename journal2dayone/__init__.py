"""Convert Apple Journal HTML exports into Day One import archives."""

__version__ = "0.1.0"
