# ===============================================
# tests/test_notion.py
# Notion mapping, client error handling, the SQLite store,
# and the sync endpoints with a stubbed Notion client.
# ===============================================

import pytest

from salon_ai.app import app, get_notion
from salon_ai.notion import CastRecord, NotionAPIError, NotionClient, sync_casts, sync_page
from salon_ai.notion.mapping import blocks_to_content, extract_block_content, extract_title, page_to_cast
from salon_ai.store import SalonStore

from conftest import FakePost, FakeResponse


def _title(text):
    return {"title": [{"plain_text": text}]}


def _select(name):
    return {"select": {"name": name}}


JA_PAGE = {
    "id": "page-1",
    "properties": {
        "名前": _title("AOI"),
        "ルーム": _select("Room A"),
        "type": _select("出張"),
        "ステータス": _select("完了"),
        "プロフィール": {"rich_text": [{"plain_text": "笑顔が素敵"}]},
        "実行日": {"date": {"start": "2026-10-01", "end": "2026-10-03"}},
        "HPのノティック": _select("済"),
        "エスタジフトチェック": _select("OK"),
        "Xアカウント": {"url": "https://x.com/aoi"},
        "写真5枚": {
            "files": [
                {"type": "external", "external": {"url": f"https://img.example/{i}.jpg"}}
                for i in range(4)
            ]
            + [
                {"type": "file", "file": {"url": "https://s3.example/4.jpg"}},
                {"type": "file", "file": {"url": "https://s3.example/5.jpg"}},
            ]
        },
    },
}

EN_PAGE = {
    "id": "page-2",
    "properties": {
        "Name": _title("MIO"),
        "Status": _select("Draft"),
    },
}


# -------------------------
# Mapping
# -------------------------
def test_page_to_cast_japanese_properties():
    cast = page_to_cast(JA_PAGE)
    assert cast.name == "AOI"
    assert cast.room == "Room A"
    assert cast.type == "出張"
    assert cast.status == "完了"
    assert cast.profile == "笑顔が素敵"
    assert cast.execution_date_start == "2026-10-01"
    assert cast.execution_date_end == "2026-10-03"
    assert cast.hp_notice == "済"
    assert cast.upload_check == "OK"
    assert cast.x_account == "https://x.com/aoi"
    assert len(cast.photos) == 5
    assert cast.photos[-1] == "https://s3.example/4.jpg"
    assert cast.photo == "https://img.example/0.jpg"


def test_page_to_cast_english_properties_and_defaults():
    cast = page_to_cast(EN_PAGE)
    assert cast.name == "MIO"
    assert cast.status == "Draft"
    assert cast.type == "インルーム"
    assert cast.profile == ""
    assert cast.room is None
    assert cast.photos == []
    assert cast.photo is None


def test_page_without_name_is_skipped():
    assert page_to_cast({"id": "x", "properties": {"Name": {"title": []}}}) is None


def test_extract_title():
    assert extract_title({"properties": {"title": _title("料金表")}}) == "料金表"
    assert extract_title({"properties": {"名前": _title("アクセス")}}) == "アクセス"
    assert extract_title({"properties": {"title": {"title": []}}}) == "Untitled"
    assert extract_title({}) == "Untitled"


def test_extract_block_content_by_type():
    para = {"type": "paragraph", "paragraph": {"rich_text": [{"plain_text": "営業"}, {"plain_text": "時間"}]}}
    assert extract_block_content(para)["text"] == "営業時間"

    image = {"type": "image", "image": {"external": {"url": "https://i"}, "caption": [{"plain_text": "店内"}]}}
    assert extract_block_content(image) == {"url": "https://i", "caption": "店内"}

    video = {"type": "video", "video": {"external": {"url": "https://v"}}}
    assert extract_block_content(video) == {"url": "https://v"}

    f = {"type": "file", "file": {"file": {"url": "https://f"}, "caption": []}}
    assert extract_block_content(f) == {"url": "https://f", "name": ""}

    bookmark = {"type": "bookmark", "bookmark": {"url": "https://b"}}
    assert extract_block_content(bookmark) == {"url": "https://b"}

    divider = {"type": "divider", "divider": {"color": "default"}}
    assert extract_block_content(divider) == {"color": "default"}

    assert extract_block_content({"type": "divider"}) is None


def test_blocks_to_content():
    blocks = [{"id": "b1", "type": "bookmark", "bookmark": {"url": "https://b"}}]
    assert blocks_to_content(blocks) == {"blocks": [{"type": "bookmark", "id": "b1", "content": {"url": "https://b"}}]}


def test_empty_payload_block_keeps_its_content():
    blocks = [{"id": "d1", "type": "divider", "divider": {}}]
    assert blocks_to_content(blocks) == {"blocks": [{"type": "divider", "id": "d1", "content": {}}]}


# -------------------------
# Client
# -------------------------
def test_client_query_database_request():
    post = FakePost(FakeResponse(json_body={"results": []}))
    client = NotionClient(api_key="ntn", http_post=post)
    assert client.query_database("db-1") == {"results": []}
    call = post.calls[0]
    assert call["url"].endswith("/databases/db-1/query")
    assert call["headers"]["Notion-Version"] == "2022-06-28"
    assert call["json"] == {"page_size": 100}


def test_client_raises_on_error_status():
    get = FakePost(FakeResponse(status_code=404, text="not found"))
    client = NotionClient(api_key="ntn", http_get=get)
    with pytest.raises(NotionAPIError) as exc:
        client.get_page("missing")
    assert exc.value.status_code == 404
    assert str(exc.value) == "Notion API error: 404"


# -------------------------
# Store
# -------------------------
def test_store_upsert_cast_is_idempotent_by_name(tmp_path):
    store = SalonStore(str(tmp_path / "db" / "salon.db"))
    first = store.upsert_cast(CastRecord(name="AOI", photos=["https://a"]))
    second = store.upsert_cast(CastRecord(name="AOI", status="完了", photos=["https://b", "https://c"]))
    assert first["id"] == second["id"]
    assert second["status"] == "完了"
    assert second["photos"] == ["https://b", "https://c"]
    assert second["photo"] == "https://b"
    assert len(store.list_casts()) == 1
    store.close()


# -------------------------
# Sync
# -------------------------
class StubNotion:
    def __init__(self, pages=None, page=None, blocks=None, error=None):
        self.pages = pages or []
        self.page = page or {}
        self.blocks = blocks or []
        self.error = error

    def query_database(self, database_id, page_size=100):
        if self.error:
            raise self.error
        return {"results": self.pages}

    def get_page(self, page_id):
        if self.error:
            raise self.error
        return self.page

    def get_block_children(self, block_id):
        return {"results": self.blocks}


def test_sync_casts_collects_and_skips(tmp_path):
    store = SalonStore(str(tmp_path / "salon.db"))
    nameless = {"id": "page-3", "properties": {}}
    broken = {"id": "page-4", "properties": {"Name": "not-a-dict"}}
    report = sync_casts(StubNotion(pages=[JA_PAGE, EN_PAGE, nameless, broken]), store, "db-1")

    assert [row["name"] for row in report.synced] == ["AOI", "MIO"]
    assert report.skipped == 1
    assert report.errors == [{"page": "page-4", "error": "'str' object has no attribute 'get'"}]
    payload = report.to_payload()
    assert payload["success"] is True
    assert payload["synced"] == 2
    assert payload["errors"] == 1
    store.close()


def test_sync_page_requires_ids(tmp_path):
    with pytest.raises(ValueError):
        sync_page(StubNotion(), SalonStore(str(tmp_path / "s.db")), "", "about")


def test_sync_notion_endpoint(make_client):
    client = make_client(FakePost(), NOTION_API_KEY="ntn", NOTION_DATABASE_ID="db-1")
    app.dependency_overrides[get_notion] = lambda: StubNotion(pages=[JA_PAGE])
    r = client.post("/sync-notion")
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["synced"] == 1
    assert body["details"]["syncedCasts"][0]["name"] == "AOI"


def test_sync_notion_endpoint_not_configured(make_client):
    client = make_client(FakePost(), NOTION_API_KEY=None, NOTION_DATABASE_ID=None)
    r = client.post("/sync-notion")
    assert r.status_code == 500
    assert r.json() == {"success": False, "error": "Notion API key or Database ID not configured"}


def test_sync_notion_endpoint_upstream_error(make_client):
    client = make_client(FakePost(), NOTION_API_KEY="ntn", NOTION_DATABASE_ID="db-1")
    app.dependency_overrides[get_notion] = lambda: StubNotion(error=NotionAPIError(401, "unauthorized"))
    r = client.post("/sync-notion")
    assert r.status_code == 500
    assert r.json() == {"success": False, "error": "Notion API error: 401"}


def test_sync_notion_page_endpoint(make_client):
    client = make_client(FakePost(), NOTION_API_KEY="ntn")
    stub = StubNotion(
        page={"properties": {"title": _title("アクセス")}},
        blocks=[{"id": "b1", "type": "paragraph", "paragraph": {"rich_text": [{"plain_text": "駅徒歩3分"}]}}],
    )
    app.dependency_overrides[get_notion] = lambda: stub
    r = client.post("/sync-notion-page", json={"pageId": "p-1", "slug": "access"})
    assert r.status_code == 200
    page = r.json()["page"]
    assert page["notion_page_id"] == "p-1"
    assert page["title"] == "アクセス"
    assert page["slug"] == "access"
    assert page["content"]["blocks"][0]["content"]["text"] == "駅徒歩3分"


def test_sync_notion_page_endpoint_requires_fields(make_client):
    client = make_client(FakePost(), NOTION_API_KEY="ntn")
    r = client.post("/sync-notion-page", json={"pageId": "p-1"})
    assert r.status_code == 500
    assert r.json() == {"success": False, "error": "pageId and slug are required"}
