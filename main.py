#!/usr/bin/env python3
"""Apple Journal export -> Day One import converter.

Reads the ZIP (or extracted folder) produced by Apple Journal's export,
turns every entry under `Entries/` into a Day One entry with Markdown text,
and writes a Day One import ZIP holding `Journal.json` plus the entry photos
renamed to `photos/<identifier>.<ext>`.

Usage:
    python3 main.py <input> <output.zip> [--tz America/New_York]

Notes:
 - Only png, jpg, jpeg and gif photos are carried over; videos and other
   attachments are reported and skipped.
 - The export has no time of day, so entries are stamped at noon UTC.

"""

import sys

from journal2dayone.cli import main

if __name__ == "__main__":
    sys.exit(main())
