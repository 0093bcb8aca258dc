# Notion -> local store sync.
#   sync_casts: every row of the cast database, upserted by name
#   sync_page:  one page (title + blocks), upserted by Notion page id

from __future__ import annotations
from typing import TYPE_CHECKING, Any, Dict, Optional

from .client import NotionClient
from .mapping import blocks_to_content, extract_title, page_to_cast
from .types import NotionPageRecord, SyncReport
from salon_ai.log import get_logger

if TYPE_CHECKING:
    from salon_ai.store import SalonStore

logger = get_logger("notion.sync")


def sync_casts(
    client: NotionClient,
    store: SalonStore,
    database_id: str,
    aliases: Optional[Dict[str, Any]] = None,
) -> SyncReport:
    """
    Pull the cast database and upsert each row.
    A failing row is recorded in the report and never stops the batch.
    """
    logger.info("Fetching data from Notion database...")
    data = client.query_database(database_id)
    pages = data.get("results", [])
    logger.info("Found %d pages in Notion", len(pages))

    report = SyncReport()
    for page in pages:
        page_id = page.get("id")
        try:
            cast = page_to_cast(page, aliases)
            if cast is None:
                logger.warning("Skipping page %s: no name found", page_id)
                report.skipped += 1
                continue
            try:
                row = store.upsert_cast(cast)
            except Exception as e:
                logger.error("Error syncing %s: %s", cast.name, e)
                report.errors.append({"name": cast.name, "error": str(e)})
                continue
            logger.info("Successfully synced: %s", cast.name)
            report.synced.append(row)
        except Exception as e:
            logger.exception("Error processing page %s", page_id)
            report.errors.append({"page": page_id, "error": str(e)})

    return report


def sync_page(
    client: NotionClient,
    store: SalonStore,
    page_id: str,
    slug: str,
    aliases: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Fetch one page with its top-level blocks and store it under `slug`."""
    if not page_id or not slug:
        raise ValueError("pageId and slug are required")

    logger.info("Fetching Notion page: %s", page_id)
    page = client.get_page(page_id)
    blocks = client.get_block_children(page_id)

    record = NotionPageRecord(
        notion_page_id=page_id,
        title=extract_title(page, aliases),
        slug=slug,
        content=blocks_to_content(blocks.get("results", [])),
    )
    row = store.upsert_notion_page(record)
    logger.info("Successfully synced page: %s", record.title)
    return row
