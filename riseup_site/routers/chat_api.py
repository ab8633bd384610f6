"""Admin JSON API — assistant chat, drafts, rollback and inline edits."""

import asyncio
import logging

import anthropic
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from riseup_site import config
from riseup_site.services.auth import AdminUser, require_admin_api
from riseup_site.services.chat import AssistantUnavailable, get_chat_history, run_assistant
from riseup_site.services.drafts import (
    DraftError,
    DraftExpired,
    DraftNotFound,
    VersionNotFound,
    cancel_draft,
    list_drafts,
    publish_draft,
    rollback_to_version,
    save_inline_image,
    save_inline_text,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/api")


def _not_configured() -> JSONResponse:
    return JSONResponse({
        "error": "AI service not configured",
        "message": "Please set the ANTHROPIC_API_KEY environment variable to enable AI chat.",
    }, status_code=503)


def _workflow_error(e: DraftError) -> JSONResponse:
    if isinstance(e, (DraftNotFound, VersionNotFound)):
        status = 404
    elif isinstance(e, DraftExpired):
        status = 410
    else:
        status = 400
    return JSONResponse({"success": False, "error": str(e)}, status_code=status)


async def _json_body(request: Request) -> dict:
    try:
        body = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid JSON body")
    if not isinstance(body, dict):
        raise HTTPException(status_code=400, detail="Expected a JSON object")
    return body


# ---------------------------------------------------------------------------
# Chat
# ---------------------------------------------------------------------------

@router.post("/chat")
async def chat(request: Request, admin: AdminUser = Depends(require_admin_api)):
    if not config.ANTHROPIC_API_KEY:
        return _not_configured()

    body = await _json_body(request)
    messages = body.get("messages")
    if not isinstance(messages, list):
        raise HTTPException(status_code=400, detail="messages must be a list")

    try:
        # Anthropic client is sync; keep it off the event loop
        result = await asyncio.to_thread(run_assistant, messages, admin.id)
    except AssistantUnavailable:
        return _not_configured()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except anthropic.APIError as e:
        logger.error("Anthropic API error for %s: %s", admin.email, e)
        return JSONResponse({"error": "AI service error", "message": str(e)}, status_code=502)

    return result


@router.get("/chat/history")
async def chat_history(
    limit: int = Query(50, ge=1, le=200),
    admin: AdminUser = Depends(require_admin_api),
):
    return {"messages": get_chat_history(admin.id, limit=limit)}


# ---------------------------------------------------------------------------
# Drafts + versions
# ---------------------------------------------------------------------------

@router.get("/drafts")
async def drafts(admin: AdminUser = Depends(require_admin_api)):
    return {"drafts": list_drafts()}


@router.post("/drafts/{draft_id}/publish")
async def publish(draft_id: str, admin: AdminUser = Depends(require_admin_api)):
    try:
        result = publish_draft(draft_id, admin.id)
    except DraftError as e:
        return _workflow_error(e)
    return {"success": True, "version_id": result["version"].get("id")}


@router.post("/drafts/{draft_id}/cancel")
async def cancel(draft_id: str, admin: AdminUser = Depends(require_admin_api)):
    try:
        cancel_draft(draft_id, admin.id)
    except DraftError as e:
        return _workflow_error(e)
    return {"success": True}


@router.post("/versions/{version_id}/rollback")
async def rollback(version_id: str, admin: AdminUser = Depends(require_admin_api)):
    try:
        result = rollback_to_version(version_id, admin.id)
    except DraftError as e:
        return _workflow_error(e)
    return {"success": True, "saved_version_id": result["saved"].get("id")}


# ---------------------------------------------------------------------------
# Inline edits
# ---------------------------------------------------------------------------

@router.post("/content/text")
async def inline_text(request: Request, admin: AdminUser = Depends(require_admin_api)):
    body = await _json_body(request)
    try:
        save_inline_text(
            body.get("contentKey", ""),
            body.get("text"),
            page=body.get("page"),
            section=body.get("section"),
            user_id=admin.id,
        )
    except DraftError as e:
        return _workflow_error(e)
    return {"success": True}


@router.post("/content/image")
async def inline_image(request: Request, admin: AdminUser = Depends(require_admin_api)):
    body = await _json_body(request)
    try:
        save_inline_image(
            body.get("contentKey", ""),
            body.get("url", ""),
            alt=body.get("alt", ""),
            page=body.get("page"),
            section=body.get("section"),
            user_id=admin.id,
        )
    except DraftError as e:
        return _workflow_error(e)
    return {"success": True}
