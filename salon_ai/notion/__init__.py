# Makes the folder importable as a package.
# Exports the Notion client and the sync entry points.

from .client import NotionAPIError, NotionClient
from .sync import sync_casts, sync_page
from .types import CastRecord, NotionPageRecord, SyncReport

__all__ = [
    "NotionAPIError",
    "NotionClient",
    "sync_casts",
    "sync_page",
    "CastRecord",
    "NotionPageRecord",
    "SyncReport",
]
