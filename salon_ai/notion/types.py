# Records produced by the Notion sync and persisted by the store.

from __future__ import annotations
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class CastRecord:
    """One therapist row, as read from the Notion cast database."""
    name: str
    room: Optional[str] = None
    type: str = "インルーム"
    status: str = "未着手"
    profile: str = ""
    execution_date_start: Optional[str] = None
    execution_date_end: Optional[str] = None
    hp_notice: Optional[str] = None
    upload_check: Optional[str] = None
    photos: List[str] = field(default_factory=list)
    x_account: Optional[str] = None

    @property
    def photo(self) -> Optional[str]:
        """First photo, kept for older screens that show a single image."""
        return self.photos[0] if self.photos else None

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["photo"] = self.photo
        return d


@dataclass
class NotionPageRecord:
    notion_page_id: str
    title: str
    slug: str
    content: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SyncReport:
    synced: List[Dict[str, Any]] = field(default_factory=list)
    errors: List[Dict[str, Any]] = field(default_factory=list)
    skipped: int = 0

    def to_payload(self) -> Dict[str, Any]:
        return {
            "success": True,
            "synced": len(self.synced),
            "errors": len(self.errors),
            "details": {
                "syncedCasts": self.synced,
                "errors": self.errors,
            },
        }
