# Convert raw Notion API objects into CastRecord / page content.
# Property names come from properties.yaml in this folder.

from __future__ import annotations

import os
from functools import lru_cache
from typing import Any, Callable, Dict, List, Optional

import yaml

from .types import CastRecord

MAX_PHOTOS = 5
PROPERTIES_PATH = os.path.join(os.path.dirname(__file__), "properties.yaml")


@lru_cache(maxsize=4)
def load_aliases(path: str = PROPERTIES_PATH) -> Dict[str, Any]:
    if not os.path.exists(path):
        raise FileNotFoundError(f"Notion property map not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


# -------------------------
# Property readers
# -------------------------
def _plain_text(items: Optional[List[Dict[str, Any]]]) -> Optional[str]:
    if items:
        return items[0].get("plain_text")
    return None


def _title(prop: Dict[str, Any]) -> Optional[str]:
    return _plain_text(prop.get("title"))


def _rich_text(prop: Dict[str, Any]) -> Optional[str]:
    return _plain_text(prop.get("rich_text"))


def _select(prop: Dict[str, Any]) -> Optional[str]:
    sel = prop.get("select")
    return sel.get("name") if sel else None


def _url(prop: Dict[str, Any]) -> Optional[str]:
    return prop.get("url")


def _date(prop: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    return prop.get("date")


def _files(prop: Dict[str, Any]) -> Optional[List[Dict[str, Any]]]:
    return prop.get("files")


def _file_url(f: Dict[str, Any]) -> Optional[str]:
    if f.get("type") == "external":
        return (f.get("external") or {}).get("url")
    return (f.get("file") or {}).get("url")


def _first(props: Dict[str, Any], names: List[str], read: Callable[[Dict[str, Any]], Any]) -> Any:
    """Value of the first alias that yields something non-empty."""
    for name in names:
        prop = props.get(name)
        if not prop:
            continue
        value = read(prop)
        if value:
            return value
    return None


# -------------------------
# Public API
# -------------------------
def page_to_cast(page: Dict[str, Any], aliases: Optional[Dict[str, Any]] = None) -> Optional[CastRecord]:
    """Map a database row to a CastRecord; None when the row has no name."""
    aliases = aliases or load_aliases()
    defaults = aliases.get("defaults", {})
    props = page.get("properties") or {}

    name = _first(props, aliases["name"], _title)
    if not name:
        return None

    date = _first(props, aliases["execution_date"], _date) or {}
    files = _first(props, aliases["photos"], _files) or []
    photos = [u for u in (_file_url(f) for f in files[:MAX_PHOTOS]) if u]

    return CastRecord(
        name=name,
        room=_first(props, aliases["room"], _select),
        type=_first(props, aliases["type"], _select) or defaults.get("type", "インルーム"),
        status=_first(props, aliases["status"], _select) or defaults.get("status", "未着手"),
        profile=_first(props, aliases["profile"], _rich_text) or "",
        execution_date_start=date.get("start") or None,
        execution_date_end=date.get("end") or None,
        hp_notice=_first(props, aliases["hp_notice"], _select),
        upload_check=_first(props, aliases["upload_check"], _select),
        photos=photos,
        x_account=_first(props, aliases["x_account"], _url),
    )


def extract_title(page: Dict[str, Any], aliases: Optional[Dict[str, Any]] = None) -> str:
    aliases = aliases or load_aliases()
    props = page.get("properties") or {}
    for name in aliases.get("title", []):
        prop = props.get(name)
        if prop:
            # first property present decides, even if its title is empty
            return _title(prop) or "Untitled"
    return "Untitled"


def _joined(items: Optional[List[Dict[str, Any]]]) -> str:
    return "".join(t.get("plain_text", "") for t in (items or []))


def extract_block_content(block: Dict[str, Any]) -> Any:
    """
    Reduce a Notion block to what the site renders:
    - text-like blocks -> {text, richText}
    - image/video/file/bookmark -> url (+ caption/name)
    - anything else -> the raw type payload
    """
    btype = block.get("type")
    payload = block.get(btype) if btype else None
    if payload is None:
        return None

    if "rich_text" in payload:
        return {
            "text": _joined(payload["rich_text"]),
            "richText": payload["rich_text"],
        }

    hosted = (payload.get("file") or {}).get("url")
    external = (payload.get("external") or {}).get("url")

    if btype == "image":
        return {"url": hosted or external, "caption": _joined(payload.get("caption"))}
    if btype == "video":
        return {"url": external or hosted}
    if btype == "file":
        return {"url": hosted or external, "name": _joined(payload.get("caption"))}
    if btype == "bookmark":
        return {"url": payload.get("url")}
    return payload


def blocks_to_content(blocks: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "blocks": [
            {"type": b.get("type"), "id": b.get("id"), "content": extract_block_content(b)}
            for b in blocks
        ]
    }
