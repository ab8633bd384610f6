"""Public pages — home, sponsorship, donation."""

import asyncio
import logging

from fastapi import APIRouter, Form, Query, Request
from fastapi.templating import Jinja2Templates

from riseup_site.config import WEB_TEMPLATES_DIR
from riseup_site import supabase_client as db
from riseup_site.services.auth import current_admin
from riseup_site.services.content import (
    get_all_image_content,
    get_all_text_content,
    get_announcement_bar,
)
from riseup_site.services.drafts import DraftError, get_live_draft
from riseup_site.services.preview import overlay_draft
from riseup_site.services.sponsor_interest import submit_sponsor_interest

logger = logging.getLogger(__name__)

router = APIRouter()
templates = Jinja2Templates(directory=str(WEB_TEMPLATES_DIR))


def _page_context(request: Request, active_page: str, preview: str) -> dict:
    text = get_all_text_content()
    hidden = set(db.get_hidden_sections())
    announcement = get_announcement_bar()
    preview_draft = None

    # Draft overlays are for signed-in admins only
    if preview and current_admin(request):
        try:
            preview_draft = get_live_draft(preview)
        except DraftError as e:
            logger.info("Ignoring preview %s: %s", preview, e)
        else:
            text, hidden, announcement = overlay_draft(preview_draft, text, hidden, announcement)

    return {
        "active_page": active_page,
        "text": text,
        "images": get_all_image_content(),
        "hidden": hidden,
        "announcement": announcement,
        "preview_draft": preview_draft,
    }


@router.get("/")
async def home(request: Request, preview: str = Query("")):
    return templates.TemplateResponse(request, "home.html", _page_context(request, "home", preview))


@router.get("/become-a-sponsor")
async def become_a_sponsor(request: Request, preview: str = Query("")):
    return templates.TemplateResponse(
        request, "sponsor.html", _page_context(request, "sponsor", preview),
    )


@router.get("/ways-to-give")
async def ways_to_give(request: Request, preview: str = Query("")):
    return templates.TemplateResponse(
        request, "give.html", _page_context(request, "give", preview),
    )


@router.post("/become-a-sponsor")
async def sponsor_interest(
    request: Request,
    name: str = Form(""),
    email: str = Form(""),
    phone: str = Form(""),
    company_name: str = Form(""),
    recaptcha_token: str = Form(""),
):
    form = {
        "name": name,
        "email": email,
        "phone": phone,
        "company_name": company_name,
        "recaptcha_token": recaptcha_token,
    }
    # Resend and reCAPTCHA calls are blocking
    result = await asyncio.to_thread(submit_sponsor_interest, form)

    context = _page_context(request, "sponsor", "")
    context["interest"] = result
    return templates.TemplateResponse(
        request, "sponsor.html", context,
        status_code=200 if result["success"] else 400,
    )
