"""Draft previews — change summaries and overlaying a draft onto a page."""

from riseup_site.content import page_url_for_key
from riseup_site.services.content import get_content
from riseup_site.services.drafts import current_value


def describe_draft(draft: dict) -> dict:
    """Summary for the preview page: what changes, from what, to what."""
    draft_type = draft["draft_type"]
    content_key = draft["content_key"]
    content = draft.get("content") or {}
    current = ""
    new = ""

    if draft_type == "text":
        current = get_content(content_key)
        new = content.get("text", "")
        description = f'Text change for "{content_key}"'
    elif draft_type == "announcement":
        before = current_value("announcement", content_key)
        current = before.get("text", "")
        if content.get("action") == "remove":
            description = "Remove announcement bar"
        else:
            new = content.get("text", "")
            description = f'Announcement: "{new}"'
    elif draft_type == "visibility":
        visible = bool(content.get("visible"))
        current = "Visible" if current_value("visibility", content_key)["visible"] else "Hidden"
        new = "Visible" if visible else "Hidden"
        description = f'{"Show" if visible else "Hide"} section "{content_key}"'
    else:
        description = f"{draft_type} change for {content_key}"

    page_url = page_url_for_key(content_key)
    return {
        "draft_type": draft_type,
        "content_key": content_key,
        "current_value": current,
        "new_value": new,
        "description": description,
        "page_url": page_url,
        "page_preview_url": f"{page_url}?preview={draft['id']}",
        "expires_at": draft.get("expires_at"),
    }


def overlay_draft(draft: dict, text: dict, hidden: set, announcement: dict | None):
    """Apply a draft to already-loaded page data without touching the database.

    Returns the (text, hidden, announcement) to render.
    """
    content = draft.get("content") or {}
    key = draft["content_key"]
    draft_type = draft["draft_type"]

    if draft_type == "text":
        text = {**text, key: content.get("text", "")}
    elif draft_type == "visibility":
        hidden = set(hidden)
        if content.get("visible"):
            hidden.discard(key)
        else:
            hidden.add(key)
    elif draft_type == "announcement":
        if content.get("action") == "remove":
            announcement = None
        else:
            announcement = {
                "text": content.get("text", ""),
                "link_url": content.get("linkUrl"),
                "link_text": content.get("linkText"),
                "is_active": True,
            }
    return text, hidden, announcement
