# Makes the folder importable as a package.
# Exports the Estama page client and the sync entry points.

from .client import EstamaClient, EstamaError
from .parser import parse_cast_photos, parse_schedule
from .sync import sync_schedule, sync_website_photos
from .types import EstamaShift, PhotoSyncReport, ShiftRow, TherapistPhoto

__all__ = [
    "EstamaClient",
    "EstamaError",
    "EstamaShift",
    "PhotoSyncReport",
    "ShiftRow",
    "TherapistPhoto",
    "parse_cast_photos",
    "parse_schedule",
    "sync_schedule",
    "sync_website_photos",
]
