"""Admin routes — login, dashboard, preview, publish/cancel, history, rollback."""

import logging
import urllib.parse

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates

from riseup_site.config import COOKIE_SECURE, SESSION_COOKIE_NAME, WEB_TEMPLATES_DIR
from riseup_site import supabase_client as db
from riseup_site.services.auth import AdminUser, current_admin, require_admin_page
from riseup_site.services.drafts import (
    DraftError,
    cancel_draft,
    get_live_draft,
    list_drafts,
    publish_draft,
    rollback_to_version,
)
from riseup_site.services.history import describe_value, history_summary, list_versions
from riseup_site.services.preview import describe_draft

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin")
templates = Jinja2Templates(directory=str(WEB_TEMPLATES_DIR))
templates.env.globals["describe_value"] = describe_value

DASHBOARD_PATH = "/admin/dashboard"
HISTORY_PATH = "/admin/dashboard/history"


def _redirect(path: str, **params) -> RedirectResponse:
    query = urllib.parse.urlencode({k: v for k, v in params.items() if v})
    return RedirectResponse(f"{path}?{query}" if query else path, status_code=303)


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------

@router.get("")
async def admin_root():
    return RedirectResponse(DASHBOARD_PATH, status_code=303)


@router.get("/login")
async def login_page(request: Request):
    if current_admin(request):
        return RedirectResponse(DASHBOARD_PATH, status_code=303)
    return templates.TemplateResponse(request, "admin/login.html", {"error": ""})


@router.post("/login")
async def login(
    request: Request,
    email: str = Form(...),
    password: str = Form(...),
):
    session = db.sign_in(email.strip(), password)
    if session is None:
        return templates.TemplateResponse(
            request, "admin/login.html",
            {"error": "Invalid email or password.", "email": email},
            status_code=401,
        )

    db.log_action("admin_login", "user", email.strip())
    response = RedirectResponse(DASHBOARD_PATH, status_code=303)
    response.set_cookie(
        SESSION_COOKIE_NAME,
        session.access_token,
        max_age=session.expires_in or 3600,
        httponly=True,
        secure=COOKIE_SECURE,
        samesite="lax",
    )
    return response


@router.post("/logout")
async def logout():
    response = RedirectResponse("/admin/login", status_code=303)
    response.delete_cookie(SESSION_COOKIE_NAME)
    return response


# ---------------------------------------------------------------------------
# Dashboard + preview
# ---------------------------------------------------------------------------

@router.get("/dashboard")
async def dashboard(
    request: Request,
    published: str = Query(""),
    cancelled: str = Query(""),
    error: str = Query(""),
    admin: AdminUser = Depends(require_admin_page),
):
    drafts = [{**d, "summary": describe_draft(d)} for d in list_drafts()]
    return templates.TemplateResponse(request, "admin/dashboard.html", {
        "active_page": "dashboard",
        "admin": admin,
        "drafts": drafts,
        "audit_log": db.get_audit_log(limit=20),
        "published": published == "true",
        "cancelled": cancelled == "true",
        "error": error,
    })


@router.get("/dashboard/preview")
async def preview(
    request: Request,
    draft: str = Query(""),
    admin: AdminUser = Depends(require_admin_page),
):
    if not draft:
        return RedirectResponse(DASHBOARD_PATH, status_code=303)
    try:
        row = get_live_draft(draft)
    except DraftError as e:
        return _redirect(DASHBOARD_PATH, error=str(e))

    return templates.TemplateResponse(request, "admin/preview.html", {
        "active_page": "preview",
        "admin": admin,
        "draft": row,
        "summary": describe_draft(row),
    })


@router.post("/drafts/{draft_id}/publish")
async def publish(draft_id: str, admin: AdminUser = Depends(require_admin_page)):
    try:
        publish_draft(draft_id, admin.id)
    except DraftError as e:
        logger.info("Publish rejected for %s: %s", draft_id, e)
        return _redirect(DASHBOARD_PATH, error=str(e))
    return _redirect(DASHBOARD_PATH, published="true")


@router.post("/drafts/{draft_id}/cancel")
async def cancel(draft_id: str, admin: AdminUser = Depends(require_admin_page)):
    try:
        cancel_draft(draft_id, admin.id)
    except DraftError as e:
        logger.info("Cancel rejected for %s: %s", draft_id, e)
        return _redirect(DASHBOARD_PATH, error=str(e))
    return _redirect(DASHBOARD_PATH, cancelled="true")


# ---------------------------------------------------------------------------
# History + rollback
# ---------------------------------------------------------------------------

@router.get("/dashboard/history")
async def history(
    request: Request,
    restored: str = Query(""),
    error: str = Query(""),
    admin: AdminUser = Depends(require_admin_page),
):
    versions = list_versions()
    return templates.TemplateResponse(request, "admin/history.html", {
        "active_page": "history",
        "admin": admin,
        "versions": versions,
        "summary": history_summary(versions),
        "restored": restored == "true",
        "error": error,
    })


@router.post("/versions/{version_id}/rollback")
async def rollback(version_id: str, admin: AdminUser = Depends(require_admin_page)):
    try:
        rollback_to_version(version_id, admin.id)
    except DraftError as e:
        logger.info("Rollback rejected for %s: %s", version_id, e)
        return _redirect(HISTORY_PATH, error=str(e))
    return _redirect(HISTORY_PATH, restored="true")
