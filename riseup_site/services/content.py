"""Content queries — published text, images, visibility and the announcement bar.

Every public page reads through these functions. Missing rows fall back to the
built-in catalog so a fresh database still renders a complete site.
"""

from riseup_site import supabase_client as db
from riseup_site.content import (
    IMAGE_CONTENT,
    TEXT_CONTENT,
    default_image,
    default_text,
)


def extract_text(content) -> str:
    """Text out of a stored content value (dict with "text", or a bare string)."""
    if isinstance(content, dict):
        text = content.get("text")
        return text if isinstance(text, str) else ""
    if isinstance(content, str):
        return content
    return ""


def get_content(content_key: str) -> str:
    """Published text for a key, else the default, else ""."""
    row = db.get_site_content(content_key)
    if row:
        text = extract_text(row.get("content"))
        if text:
            return text
    return default_text(content_key)


def get_image_content(content_key: str) -> dict:
    """Published image for a key, else the default image."""
    default = default_image(content_key) or {"url": "", "alt": ""}
    row = db.get_site_content(content_key)
    content = (row or {}).get("content") or {}
    if isinstance(content, dict) and content.get("url"):
        image = {"url": content["url"], "alt": content.get("alt") or default["alt"]}
        if content.get("position"):
            image["position"] = content["position"]
        return image
    return default


def get_page_content(page: str) -> dict[str, str]:
    """All text for a page keyed by content_key, defaults filled in."""
    content = {}
    for row in db.get_site_content_for_page(page):
        content[row["content_key"]] = extract_text(row.get("content"))

    for key, entry in TEXT_CONTENT.items():
        if entry["page"] == page and not content.get(key):
            content[key] = entry["default"]
    return content


def get_all_text_content() -> dict[str, str]:
    """Every catalog text key with its live value, in a single query."""
    published = {
        row["content_key"]: extract_text(row.get("content"))
        for row in db.select("site_content", columns="content_key, content")
    }
    return {key: published.get(key) or entry["default"] for key, entry in TEXT_CONTENT.items()}


def get_all_image_content() -> dict[str, dict]:
    """Every catalog image key with its live value."""
    return {key: get_image_content(key) for key in IMAGE_CONTENT}


def get_section_visibility(section_key: str) -> bool:
    """Whether a section is visible. Sections default to visible."""
    row = db.get_visibility(section_key)
    if row is None or row.get("is_visible") is None:
        return True
    return bool(row["is_visible"])


def get_announcement_bar() -> dict | None:
    """The newest active announcement, or None."""
    row = db.get_active_announcement()
    if not row:
        return None
    return {
        "id": row.get("id"),
        "text": row.get("text", ""),
        "link_url": row.get("link_url"),
        "link_text": row.get("link_text"),
        "is_active": True,
    }


def get_all_editable_content() -> list[dict]:
    """Every editable text key with description and current value."""
    items = []
    for key, entry in TEXT_CONTENT.items():
        items.append({
            "content_key": key,
            "description": entry["description"],
            "current_value": get_content(key),
            "page": entry["page"],
            "section": entry["section"],
        })
    return items
