"""Content catalog — loads text, image and section definitions."""

from riseup_site.content.images import IMAGE_CONTENT
from riseup_site.content.sections import SECTIONS
from riseup_site.content.text import TEXT_CONTENT

ANNOUNCEMENT_KEY = "announcement_bar"

TEXT_CONTENT_KEYS: list[str] = list(TEXT_CONTENT)

# Public page url per page name used in the catalog
PAGE_URLS: dict[str, str] = {
    "Homepage": "/",
    "Become a Sponsor": "/become-a-sponsor",
    "Ways to Give": "/ways-to-give",
}


def default_text(content_key: str) -> str:
    """Built-in text for a key, or "" for unknown keys."""
    entry = TEXT_CONTENT.get(content_key)
    return entry["default"] if entry else ""


def default_image(content_key: str) -> dict | None:
    """Built-in image for a key, or None for unknown keys."""
    entry = IMAGE_CONTENT.get(content_key)
    return dict(entry["default"]) if entry else None


def page_url_for_key(content_key: str) -> str:
    """Public page a content, section or announcement key shows up on."""
    if content_key in SECTIONS:
        return SECTIONS[content_key]["page_url"]
    entry = TEXT_CONTENT.get(content_key) or IMAGE_CONTENT.get(content_key)
    if entry:
        return PAGE_URLS.get(entry["page"], "/")
    if content_key.startswith("sponsor."):
        return "/become-a-sponsor"
    if content_key.startswith("give."):
        return "/ways-to-give"
    return "/"
