"""Resolve temporal expressions in a question to a calendar date.

Four pattern classes are tried in a fixed order and the first one that
matches decides the result:

1. yesterday ("what happened yesterday", "yesterday's notes")
2. today ("what am I working on today")
3. an explicit date after a trigger phrase ("what happened on 3/14/24")
4. a day of the week ("last monday", "this friday", "on tuesday")

There is no scoring. If an explicit date is recognized but doesn't form a
valid calendar date, the result is None; lower classes are not consulted.
"""

import logging
import re
from datetime import date, timedelta

logger = logging.getLogger(__name__)

YESTERDAY_PATTERNS = [
    re.compile(r"what\s+(?:did|happened|occurred|took\s+place)\s+yesterday", re.I),
    re.compile(r"yesterday['’]?s\s+(?:events|activities|notes|happenings)", re.I),
    re.compile(r"tell\s+me\s+about\s+yesterday", re.I),
    re.compile(r"what\s+was\s+i\s+(?:doing|working\s+on)\s+yesterday", re.I),
    re.compile(r"what\s+did\s+i\s+do\s+yesterday", re.I),
]

TODAY_PATTERNS = [
    re.compile(r"what\s+(?:did|happened|occurred|took\s+place)\s+today", re.I),
    re.compile(r"today['’]?s\s+(?:events|activities|notes|happenings)", re.I),
    re.compile(r"tell\s+me\s+about\s+today", re.I),
    re.compile(r"what\s+(?:am|was)\s+i\s+(?:doing|working\s+on)\s+today", re.I),
]

SPECIFIC_DATE_PATTERN = re.compile(
    r"(?:what\s+(?:did|happened|occurred|took\s+place)\s+on"
    r"|what\s+did\s+i\s+do\s+on"
    r"|tell\s+me\s+about"
    r"|what\s+was\s+i\s+(?:doing|working\s+on)\s+on)"
    r"\s+(\d{1,4}[/-]\d{1,2}(?:[/-]\d{1,4})?)\b",
    re.I,
)

DAY_OF_WEEK_PATTERN = re.compile(
    r"\b(?:(last|this|on)\s+)?(sunday|monday|tuesday|wednesday|thursday|friday|saturday)\b",
    re.I,
)

# Sunday=0 .. Saturday=6
DAYS = ["sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday"]

_ISO_DATE = re.compile(r"(\d{4})-(\d{2})-(\d{2})")
_SLASH_DATE = re.compile(r"(\d{1,2})/(\d{1,2})(?:/(\d{2}|\d{4}))?")
_DASH_DATE = re.compile(r"(\d{1,2})-(\d{1,2})(?:-(\d{2}|\d{4}))?")


def resolve_temporal(text: str, today: date | None = None) -> date | None:
    """Return the date a question refers to, or None."""
    today = today or date.today()

    if any(p.search(text) for p in YESTERDAY_PATTERNS):
        logger.debug("Matched yesterday pattern")
        return today - timedelta(days=1)

    if any(p.search(text) for p in TODAY_PATTERNS):
        logger.debug("Matched today pattern")
        return today

    match = SPECIFIC_DATE_PATTERN.search(text)
    if match:
        parsed = parse_date_string(match.group(1), today=today)
        if parsed is None:
            logger.debug(f"Ignoring unparseable date literal: {match.group(1)!r}")
        return parsed

    match = DAY_OF_WEEK_PATTERN.search(text)
    if match:
        prefix = (match.group(1) or "last").lower()
        return date_for_day_of_week(match.group(2), prefix, today=today)

    return None


def parse_date_string(date_str: str, today: date | None = None) -> date | None:
    """Parse YYYY-MM-DD, M/D[/YY|/YYYY] or M-D[-YY|-YYYY].

    Two-digit years mean 20yy. A missing year means the current year.
    Returns None for anything that isn't a real calendar date.
    """
    date_str = date_str.strip()

    if m := _ISO_DATE.fullmatch(date_str):
        year, month, day = (int(g) for g in m.groups())
    elif m := (_SLASH_DATE.fullmatch(date_str) or _DASH_DATE.fullmatch(date_str)):
        month, day = int(m.group(1)), int(m.group(2))
        year_str = m.group(3)
        if year_str is None:
            year = (today or date.today()).year
        elif len(year_str) == 2:
            year = 2000 + int(year_str)
        else:
            year = int(year_str)
    else:
        return None

    try:
        return date(year, month, day)
    except ValueError:
        return None


def date_for_day_of_week(day_name: str, prefix: str = "last", today: date | None = None) -> date:
    """Date of the named weekday relative to today.

    "this" looks forward and may return today; "last" and "on" look back
    and never return today.
    """
    today = today or date.today()
    target_day = DAYS.index(day_name.lower())
    today_day = (today.weekday() + 1) % 7

    diff = target_day - today_day
    if prefix == "this":
        if diff < 0:
            diff += 7
    elif diff >= 0:
        diff -= 7

    return today + timedelta(days=diff)
