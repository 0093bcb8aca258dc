# Estama -> local store sync.
#   sync_website_photos: cast photos matched to casts by name (case-insensitive)
#   sync_schedule:       today's shifts replace every stored shift from today on

from __future__ import annotations
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, Optional

from .client import EstamaClient
from .parser import parse_cast_photos, parse_schedule
from .types import PhotoSyncReport, ShiftRow
from salon_ai.log import get_logger

if TYPE_CHECKING:
    from salon_ai.store import SalonStore

logger = get_logger("estama.sync")


def utc_today() -> str:
    return datetime.now(timezone.utc).date().isoformat()


def sync_website_photos(client: EstamaClient, store: SalonStore) -> PhotoSyncReport:
    """Set `casts.photo` for every therapist on the cast page that exists locally."""
    photos = parse_cast_photos(client.fetch_cast_page())
    logger.info("Found %d therapists on website", len(photos))

    report = PhotoSyncReport()
    for therapist in photos:
        try:
            cast = store.find_cast_by_name_nocase(therapist.name)
            if cast is None:
                logger.info("No matching cast found for %s", therapist.name)
                report.errors.append({"name": therapist.name, "error": "Cast not found in database"})
                continue
            store.update_cast_photo(cast["id"], therapist.photo_url)
        except Exception as e:
            logger.exception("Error processing %s", therapist.name)
            report.errors.append({"name": therapist.name, "error": str(e) or "Unknown error"})
            continue
        logger.info("Updated photo for %s", therapist.name)
        report.synced.append({"name": therapist.name, "action": "updated", "photoUrl": therapist.photo_url})

    return report


def sync_schedule(client: EstamaClient, store: SalonStore, today: Optional[str] = None) -> Dict[str, Any]:
    """Replace shifts dated today or later with the ones on the schedule page."""
    today = today or utc_today()
    shifts = parse_schedule(client.fetch_schedule_page(), today)
    logger.info("Parsed shifts: %d", len(shifts))

    cast_ids = store.cast_ids_by_name()
    rows = [
        ShiftRow(
            cast_id=cast_ids[s.cast_name],
            shift_date=s.date,
            start_time=s.start_time,
            end_time=s.end_time,
            status=s.status,
        )
        for s in shifts
        if s.cast_name in cast_ids
    ]
    logger.info("Shifts to insert: %d", len(rows))

    store.replace_shifts_from(today, rows)
    return {
        "success": True,
        "shiftsProcessed": len(rows),
        "message": "Schedule synced successfully",
    }
