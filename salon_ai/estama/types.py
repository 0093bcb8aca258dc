# Records scraped from the Estama shop pages.

from __future__ import annotations
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List

SYSTEM_USER_ID = "00000000-0000-0000-0000-000000000000"


@dataclass
class TherapistPhoto:
    name: str
    photo_url: str


@dataclass
class EstamaShift:
    cast_name: str
    date: str
    start_time: str
    end_time: str
    status: str = "scheduled"


@dataclass
class ShiftRow:
    """A shift ready for the store, already resolved to a cast id."""
    cast_id: int
    shift_date: str
    start_time: str
    end_time: str
    status: str
    created_by: str = SYSTEM_USER_ID

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class PhotoSyncReport:
    synced: List[Dict[str, Any]] = field(default_factory=list)
    errors: List[Dict[str, Any]] = field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "success": True,
            "synced": len(self.synced),
            "errors": len(self.errors),
            "details": {
                "syncResults": self.synced,
                "errors": self.errors,
            },
        }
