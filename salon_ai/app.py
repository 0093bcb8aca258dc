# ============================================================
# Salon AI FastAPI App
# ------------------------------------------------------------
# Wires the dashboard's server-side endpoints:
#   - AI content generation (chat, cast copy, reservation SMS)
#   - Notion sync (cast database, single pages)
#   - Estama sync (cast photos, shift schedule)
#   - Health checks
# ============================================================

from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse, Response, StreamingResponse
from starlette.concurrency import run_in_threadpool

# --- Local imports ---
from salon_ai.settings import Settings, get_settings
from salon_ai.log import get_logger
from salon_ai.generate import ContentGenerator, ErrorKind, ErrorResult, GatewayClient
from salon_ai.estama import EstamaClient, sync_schedule, sync_website_photos
from salon_ai.notion import NotionClient, sync_casts, sync_page
from salon_ai.store import SalonStore

logger = get_logger("app")

# ------------------------------------------------------------
# 🌐 CORS / error mapping
# ------------------------------------------------------------
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

STREAM_HEADERS = {
    **CORS_HEADERS,
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.CONFIGURATION: 500,
    ErrorKind.RATE_LIMITED: 429,
    ErrorKind.QUOTA_EXCEEDED: 402,
    ErrorKind.UPSTREAM: 500,
    ErrorKind.UNKNOWN: 500,
}


def cors_json(payload: Dict[str, Any], status_code: int = 200) -> JSONResponse:
    return JSONResponse(payload, status_code=status_code, headers=CORS_HEADERS)


def error_response(err: ErrorResult) -> JSONResponse:
    return cors_json({"error": err.message}, status_code=STATUS_BY_KIND[err.kind])


# ------------------------------------------------------------
# 🔧 Dependencies
# ------------------------------------------------------------
def get_gateway(cfg: Settings = Depends(get_settings)) -> GatewayClient:
    return GatewayClient(
        api_key=cfg.AI_GATEWAY_API_KEY,
        url=cfg.AI_GATEWAY_URL,
        model=cfg.AI_MODEL,
        timeout=cfg.AI_TIMEOUT_SECONDS,
    )


def get_generator(client: GatewayClient = Depends(get_gateway)) -> ContentGenerator:
    return ContentGenerator(client=client)


def get_notion(cfg: Settings = Depends(get_settings)) -> Optional[NotionClient]:
    if not cfg.NOTION_API_KEY:
        return None
    return NotionClient(api_key=cfg.NOTION_API_KEY, version=cfg.NOTION_VERSION)


def get_estama(cfg: Settings = Depends(get_settings)) -> EstamaClient:
    return EstamaClient(shop_url=cfg.ESTAMA_SHOP_URL)


def get_store(cfg: Settings = Depends(get_settings)) -> SalonStore:
    return SalonStore(db_path=cfg.DB_PATH)


# ------------------------------------------------------------
# 🚀 FastAPI init
# ------------------------------------------------------------
app = FastAPI(title="Salon AI API", version="0.3")


@app.options("/{path:path}")
def preflight(path: str):
    return Response(headers=CORS_HEADERS)


# ------------------------------------------------------------
# 💬 AI generation routes
# ------------------------------------------------------------
@app.post("/customer-chat")
async def customer_chat(request: Request, gen: ContentGenerator = Depends(get_generator)):
    try:
        body = await request.json()
        result = await run_in_threadpool(gen.chat, body)
        if isinstance(result, ErrorResult):
            return error_response(result)
        return StreamingResponse(result.chunks, media_type="text/event-stream", headers=STREAM_HEADERS)
    except Exception as e:
        logger.exception("Error in customer-chat")
        return cors_json({"error": str(e) or "Unknown error"}, status_code=500)


@app.post("/generate-cast-content")
async def generate_cast_content(request: Request, gen: ContentGenerator = Depends(get_generator)):
    try:
        body = await request.json()
        result = await run_in_threadpool(gen.cast_content, body)
        if isinstance(result, ErrorResult):
            return error_response(result)
        return cors_json({"content": result.text})
    except Exception as e:
        logger.exception("Error in generate-cast-content")
        return cors_json({"error": str(e) or "Unknown error"}, status_code=500)


@app.post("/generate-sms-message")
async def generate_sms_message(request: Request, gen: ContentGenerator = Depends(get_generator)):
    try:
        body = await request.json()
        result = await run_in_threadpool(gen.sms_message, body)
        if isinstance(result, ErrorResult):
            return error_response(result)
        return cors_json({"message": result.text})
    except Exception as e:
        logger.exception("Error in generate-sms-message")
        return cors_json({"error": str(e) or "Unknown error"}, status_code=500)


# ------------------------------------------------------------
# 🔄 Notion sync routes
# ------------------------------------------------------------
@app.post("/sync-notion")
def sync_notion(
    cfg: Settings = Depends(get_settings),
    notion: Optional[NotionClient] = Depends(get_notion),
    store: SalonStore = Depends(get_store),
):
    try:
        if notion is None or not cfg.NOTION_DATABASE_ID:
            raise RuntimeError("Notion API key or Database ID not configured")
        report = sync_casts(notion, store, cfg.NOTION_DATABASE_ID)
        return cors_json(report.to_payload())
    except Exception as e:
        logger.exception("Sync error")
        return cors_json({"success": False, "error": str(e)}, status_code=500)
    finally:
        store.close()


@app.post("/sync-notion-page")
async def sync_notion_page(
    request: Request,
    notion: Optional[NotionClient] = Depends(get_notion),
    store: SalonStore = Depends(get_store),
):
    try:
        body = await request.json()
        page_id = body.get("pageId") if isinstance(body, dict) else None
        slug = body.get("slug") if isinstance(body, dict) else None
        if not page_id or not slug:
            raise ValueError("pageId and slug are required")
        if notion is None:
            raise RuntimeError("Notion API key not configured")
        page = await run_in_threadpool(sync_page, notion, store, page_id, slug)
        return cors_json({"success": True, "page": page})
    except Exception as e:
        logger.exception("Sync error")
        return cors_json({"success": False, "error": str(e)}, status_code=500)
    finally:
        store.close()


# ------------------------------------------------------------
# 🗓️ Estama sync routes
# ------------------------------------------------------------
@app.post("/sync-website-photos")
def sync_photos(
    estama: EstamaClient = Depends(get_estama),
    store: SalonStore = Depends(get_store),
):
    try:
        report = sync_website_photos(estama, store)
        return cors_json(report.to_payload())
    except Exception as e:
        logger.exception("Sync error")
        return cors_json({"success": False, "error": str(e) or "Unknown error"}, status_code=500)
    finally:
        store.close()


@app.post("/sync-estama-schedule")
def sync_estama_schedule(
    estama: EstamaClient = Depends(get_estama),
    store: SalonStore = Depends(get_store),
):
    try:
        return cors_json(sync_schedule(estama, store))
    except Exception as e:
        logger.exception("Error in sync-estama-schedule")
        return cors_json({"success": False, "error": str(e) or "Unknown error"}, status_code=500)
    finally:
        store.close()


# ------------------------------------------------------------
# 🧭 Health checks
# ------------------------------------------------------------
@app.get("/healthz")
def healthz(cfg: Settings = Depends(get_settings)):
    return {
        "ok": True,
        "env": cfg.ENV,
        "debug": cfg.DEBUG,
        "app": cfg.app_name,
        "ai_configured": bool(cfg.AI_GATEWAY_API_KEY),
        "notion_configured": bool(cfg.NOTION_API_KEY and cfg.NOTION_DATABASE_ID),
    }


@app.get("/health")
def health(cfg: Settings = Depends(get_settings)):
    return {"status": "ok", "env": cfg.ENV}


@app.get("/")
def hello():
    return {"message": "Salon AI service running."}
