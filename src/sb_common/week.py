"""Weekend identifiers: one settlement run per NFL week, keyed "<year>-week-<n>"."""

import re

from src.sb_common.errors import InvalidWeekendIdError

MAX_WEEK = 22  # 18 regular-season weeks + 4 playoff rounds

_WEEKEND_ID_RE = re.compile(r"^(\d{4})-week-(\d{1,2})$")


def parse_weekend_id(weekend_id: str) -> tuple[int, int]:
    """'2025-week-3' -> (2025, 3). Raises InvalidWeekendIdError."""
    match = _WEEKEND_ID_RE.match(weekend_id.strip()) if weekend_id else None
    if match is None:
        raise InvalidWeekendIdError(weekend_id)
    season, week = int(match.group(1)), int(match.group(2))
    if not (1 <= week <= MAX_WEEK):
        raise InvalidWeekendIdError(weekend_id)
    return season, week


def format_weekend_id(season: int, week: int) -> str:
    if not (1 <= week <= MAX_WEEK):
        raise InvalidWeekendIdError(f"{season}-week-{week}")
    return f"{season}-week-{week}"


def validate_weekend_id(weekend_id: str) -> str:
    """Return the canonical form of a weekend id (strips whitespace, drops leading zeros)."""
    season, week = parse_weekend_id(weekend_id)
    return format_weekend_id(season, week)
