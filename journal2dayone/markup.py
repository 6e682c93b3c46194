"""HTML fragment to Markdown conversion."""

import logging
import re

from markdownify import ATX, MarkdownConverter

logger = logging.getLogger(__name__)

_EXCESS_BLANK_LINES = re.compile(r"\n(?:[ \t]*\n){2,}")


class MarkupTransformer:
    """Converts Apple Journal rich text into Day One flavoured Markdown.

    Styling-only wrappers (``span.s1`` and friends) carry no Markdown
    meaning and fall away. Asterisks and underscores in text are left
    unescaped, so feeding already plain text back in returns it unchanged
    apart from surrounding whitespace.
    """

    def __init__(self) -> None:
        self._converter = MarkdownConverter(
            heading_style=ATX,
            bullets="-",
            strip=["img"],
            escape_asterisks=False,
            escape_underscores=False,
            escape_misc=False,
        )

    def convert(self, fragment: str) -> str:
        if not fragment or not fragment.strip():
            return ""
        try:
            markdown = self._converter.convert(fragment)
        except Exception as e:
            logger.warning("Markdown conversion failed for fragment: %s", e)
            return ""
        return _EXCESS_BLANK_LINES.sub("\n\n", markdown).strip()
