"""Find the daily note for a calendar date."""

import logging
import re
from datetime import date

from ..models import Document
from ..vault.index import CorpusIndex

logger = logging.getLogger(__name__)

# Folders commonly used for daily notes, checked after the named conventions
DAILY_NOTE_FOLDERS = ["daily notes", "dailies", "journals", "diary"]

MONTHS = ["january", "february", "march", "april", "may", "june", "july",
          "august", "september", "october", "november", "december"]

# Date embedded in a note name, for each naming convention above: (pattern, group order)
NOTE_NAME_DATES = [
    (re.compile(r"(?<!\d)(\d{4})-(\d{2})-(\d{2})(?!\d)"), "ymd"),
    (re.compile(r"(?<!\d)(\d{2})-(\d{2})-(\d{4})(?!\d)"), "mdy"),
    (re.compile(r"(?<!\d)(\d{4})(\d{2})(\d{2})(?!\d)"), "ymd"),
    (re.compile(r"(?<!\d)(\d{2})(\d{2})(\d{4})(?!\d)"), "mdy"),
    (re.compile(rf"\b({'|'.join(MONTHS)})\s+(\d{{1,2}}),\s*(\d{{4}})\b", re.I), "Mdy"),
]


def note_name_date(name: str) -> date | None:
    """The date a note is named after, in any of the daily-note conventions."""
    for pattern, order in NOTE_NAME_DATES:
        for m in pattern.finditer(name):
            parts = dict(zip(order, m.groups()))
            month = MONTHS.index(parts["M"].lower()) + 1 if "M" in parts else int(parts["m"])
            try:
                return date(int(parts["y"]), month, int(parts["d"]))
            except ValueError:
                continue
    return None


def daily_note_candidates(day: date) -> list[str]:
    """Note names that could hold the daily note for a date, in lookup order.

    1. YYYY-MM-DD
    2. MM-DD-YYYY
    3. daily/YYYY-MM-DD
    4. journal/YYYY-MM-DD
    5. YYYYMMDD
    6. MMDDYYYY
    7. month D, YYYY
    8. YYYY-MM-DD inside each of DAILY_NOTE_FOLDERS
    """
    iso = f"{day.year:04d}-{day.month:02d}-{day.day:02d}"
    candidates = [
        iso,
        f"{day.month:02d}-{day.day:02d}-{day.year:04d}",
        f"daily/{iso}",
        f"journal/{iso}",
        f"{day.year:04d}{day.month:02d}{day.day:02d}",
        f"{day.month:02d}{day.day:02d}{day.year:04d}",
        f"{MONTHS[day.month - 1]} {day.day}, {day.year}",
    ]
    candidates.extend(f"{folder}/{iso}" for folder in DAILY_NOTE_FOLDERS)
    return candidates


def find_daily_note(day: date, index: CorpusIndex) -> Document | None:
    """Return the first note matching a candidate name, or None.

    Only exact (case-insensitive) names count. No match is a normal outcome.
    """
    for candidate in daily_note_candidates(day):
        doc = index.get(candidate)
        if doc is not None:
            logger.debug(f"Daily note for {day.isoformat()}: {doc.path} (matched '{candidate}')")
            return doc

    logger.debug(f"No daily note found for {day.isoformat()}")
    return None
