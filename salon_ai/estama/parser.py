# Pull therapist photos and today's shifts out of the Estama pages.
# Both pages are read as text; only the patterns below are relied on.

import re
from typing import List

from .types import EstamaShift, TherapistPhoto
from salon_ai.log import get_logger

logger = get_logger("estama.parser")

PHOTO_RE = re.compile(r"!\[([^\]]+)\]\((https://img\.estama\.jp/shop_data/[^)]+)\)")
NAME_RE = re.compile(r"####\s+([^\n(]+)")
TIME_RE = re.compile(r"(\d{2}:\d{2})")

DEFAULT_END = "26:00"


def parse_cast_photos(html: str) -> List[TherapistPhoto]:
    """Every `![NAME](https://img.estama.jp/shop_data/...)` on the cast page; names upper-cased."""
    photos = []
    for m in PHOTO_RE.finditer(html):
        name = m.group(1).strip()
        if name:
            photos.append(TherapistPhoto(name=name.upper(), photo_url=m.group(2)))
    return photos


def parse_schedule(html: str, today: str) -> List[EstamaShift]:
    """
    Pair the i-th `#### name` heading with the i-th pair of HH:MM times.
    Every shift is dated `today`; a missing end time falls back to 26:00.
    """
    names = [m.group(1).strip() for m in NAME_RE.finditer(html)]
    times = TIME_RE.findall(html)
    logger.info("Found %d names and %d times on schedule page", len(names), len(times))

    shifts = []
    for i, name in enumerate(names):
        if i * 2 >= len(times):
            break
        end = times[i * 2 + 1] if i * 2 + 1 < len(times) else DEFAULT_END
        shifts.append(
            EstamaShift(
                cast_name=name,
                date=today,
                start_time=times[i * 2],
                end_time=end,
            )
        )
    return shifts
