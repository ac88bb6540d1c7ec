"""Convert recipe time expressions into whole minutes."""

import re

# P must be followed by a digit, directly or after T
_ISO_RE = re.compile(
    r"P(?=T?\d)(?:(\d+)D)?(?:T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+(?:\.\d+)?)S)?)?"
)
_HOURS_RE = re.compile(r"(\d+(?:\.\d+)?)\s*(?:hours?|hrs?|h)(?![a-z])", re.IGNORECASE)
_MINUTES_RE = re.compile(r"(\d+)\s*(?:minutes?|mins?|m)(?![a-z])", re.IGNORECASE)
_NUMBER_RE = re.compile(r"\d+")


def _iso_minutes(text: str) -> int | None:
    for match in _ISO_RE.finditer(text):
        if not any(match.groups()):
            continue
        days, hours, minutes, seconds = match.groups()
        total = int(days or 0) * 24 * 60 + int(hours or 0) * 60 + int(minutes or 0)
        return total + int(float(seconds or 0)) // 60
    return None


def parse_minutes(text: str | None) -> int:
    """Parse a duration like ``PT1H30M``, ``1 hr 20 min`` or ``bake for 20``.

    Tries, in order: an ISO 8601 duration, freeform hour/minute amounts
    (summed), then the first bare integer. Returns 0 when nothing matches.
    Seconds in an ISO duration are rounded down, so ``PT30S`` is 0.
    """
    if not text or not text.strip():
        return 0

    iso = _iso_minutes(text)
    if iso is not None:
        return iso

    total = 0
    hours = _HOURS_RE.search(text)
    if hours:
        total += round(float(hours.group(1)) * 60)
    minutes = _MINUTES_RE.search(text)
    if minutes:
        total += int(minutes.group(1))
    if total > 0:
        return total

    number = _NUMBER_RE.search(text)
    if number:
        return int(number.group())
    return 0
