"""Draft lifecycle — create, publish, cancel, rollback, expiry.

A content key is either Published (the live stores are authoritative) or
Drafted (exactly one pending row in content_drafts). Publish and Rollback both
snapshot the value they are about to overwrite into content_versions first, so
every change to the live site can be undone.
"""

import logging
from datetime import datetime, timedelta, timezone

from postgrest.exceptions import APIError

from riseup_site import supabase_client as db
from riseup_site.config import DRAFT_TTL_HOURS
from riseup_site.content import (
    ANNOUNCEMENT_KEY,
    IMAGE_CONTENT,
    TEXT_CONTENT,
    default_image,
    default_text,
)
from riseup_site.services.content import extract_text

logger = logging.getLogger(__name__)

DRAFT_TYPES = ("text", "announcement", "visibility")
ANNOUNCEMENT_ACTIONS = ("add", "update", "remove")

# Stores a versioned value can be written back to
CONTENT_TYPES = ("text", "image", "announcement", "visibility")


class DraftError(Exception):
    """Base class for rejected workflow operations. Nothing was changed."""


class DraftNotFound(DraftError):
    pass


class DraftExpired(DraftError):
    pass


class VersionNotFound(DraftError):
    pass


class InvalidDraft(DraftError):
    pass


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _parse_ts(value) -> datetime | None:
    if isinstance(value, datetime):
        ts = value
    elif isinstance(value, str) and value:
        try:
            ts = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


def is_expired(draft: dict, now: datetime | None = None) -> bool:
    """True once now >= expires_at. A draft without a readable expiry is expired."""
    expires_at = _parse_ts(draft.get("expires_at"))
    if expires_at is None:
        return True
    return (now or _now()) >= expires_at


def _audit(action: str, entity_type: str, entity_id: str, details: str = "") -> None:
    """Write an audit log entry. The change it records is already committed."""
    try:
        db.log_action(action, entity_type, entity_id, details)
    except Exception:
        logger.exception("Failed to write audit log entry %s for %s", action, entity_id)


def _validate_content(content_key: str, draft_type: str, content: dict) -> None:
    if not content_key:
        raise InvalidDraft("content_key is required")
    if draft_type not in DRAFT_TYPES:
        raise InvalidDraft(f"Unknown draft type: {draft_type}")
    if not isinstance(content, dict):
        raise InvalidDraft("Draft content must be an object")

    if draft_type == "text":
        text = content.get("text")
        if not isinstance(text, str) or not text.strip():
            raise InvalidDraft("Text drafts need non-empty text")
    elif draft_type == "announcement":
        if content_key != ANNOUNCEMENT_KEY:
            raise InvalidDraft(f"Announcement drafts must target {ANNOUNCEMENT_KEY}")
        action = content.get("action")
        if action not in ANNOUNCEMENT_ACTIONS:
            raise InvalidDraft(f"Unknown announcement action: {action}")
        if action != "remove" and not content.get("text"):
            raise InvalidDraft("Announcement text is required for add/update")
    elif draft_type == "visibility":
        if not isinstance(content.get("visible"), bool):
            raise InvalidDraft("Visibility drafts need a boolean 'visible'")


# ---------------------------------------------------------------------------
# Drafts
# ---------------------------------------------------------------------------

def create_draft(
    content_key: str,
    draft_type: str,
    content: dict,
    created_by: str | None = None,
) -> dict:
    """Stage a change. Replaces any draft already pending for the same key."""
    _validate_content(content_key, draft_type, content)

    replaced = db.delete_drafts_for_key(content_key)
    if replaced:
        logger.info("Replaced %d pending draft(s) for %s", len(replaced), content_key)

    now = _now()
    draft = db.insert_draft({
        "content_key": content_key,
        "draft_type": draft_type,
        "content": content,
        "created_by": created_by or None,
        "created_at": now.isoformat(),
        "expires_at": (now + timedelta(hours=DRAFT_TTL_HOURS)).isoformat(),
    })

    _audit("draft_created", "draft", str(draft.get("id", "")),
           f"{draft_type} draft for {content_key}")
    return draft


def get_live_draft(draft_id: str) -> dict:
    """Return a draft that can still be published or cancelled."""
    try:
        draft = db.get_draft(draft_id) if draft_id else None
    except APIError as e:
        # Malformed ids (not a uuid) are rejected by PostgREST
        logger.info("Draft lookup failed for %s: %s", draft_id, e)
        draft = None
    if not draft:
        raise DraftNotFound(f"Draft {draft_id} not found")
    if is_expired(draft):
        raise DraftExpired(f"Draft {draft_id} expired at {draft.get('expires_at')}")
    return draft


def list_drafts(limit: int = 100) -> list[dict]:
    """Pending, unexpired drafts, newest first."""
    now = _now()
    return [d for d in db.get_drafts(limit=limit) if not is_expired(d, now)]


def purge_expired_drafts() -> int:
    """Delete expired drafts. Returns how many were removed."""
    removed = db.delete_expired_drafts(_now().isoformat())
    if removed:
        logger.info("Purged %d expired draft(s)", len(removed))
    return len(removed)


# ---------------------------------------------------------------------------
# Live values
# ---------------------------------------------------------------------------

def current_value(content_type: str, content_key: str) -> dict:
    """The effective live value of a key, in the same shape a draft stores."""
    if content_type == "text":
        row = db.get_site_content(content_key)
        text = extract_text((row or {}).get("content"))
        return {"text": text or default_text(content_key)}

    if content_type == "image":
        row = db.get_site_content(content_key)
        content = (row or {}).get("content")
        if isinstance(content, dict) and content.get("url"):
            return dict(content)
        return default_image(content_key) or {"url": "", "alt": ""}

    if content_type == "announcement":
        active = db.get_active_announcement()
        if not active:
            return {"action": "remove"}
        value = {"action": "update", "text": active.get("text", "")}
        if active.get("link_url"):
            value["linkUrl"] = active["link_url"]
        if active.get("link_text"):
            value["linkText"] = active["link_text"]
        return value

    if content_type == "visibility":
        row = db.get_visibility(content_key)
        visible = True if row is None or row.get("is_visible") is None else bool(row["is_visible"])
        return {"visible": visible}

    raise InvalidDraft(f"Unknown content type: {content_type}")


def apply_value(content_type: str, content_key: str, content: dict,
                page: str | None = None, section: str | None = None) -> None:
    """Write a value into the live store for its content type."""
    if content_type in ("text", "image"):
        meta = TEXT_CONTENT.get(content_key) or IMAGE_CONTENT.get(content_key) or {}
        db.upsert_site_content({
            "content_key": content_key,
            "content_type": content_type,
            "content": content,
            "page": page or meta.get("page"),
            "section": section or meta.get("section"),
        })
    elif content_type == "announcement":
        db.deactivate_announcements()
        if content.get("action") != "remove":
            db.insert_announcement(content.get("text", ""), content.get("linkUrl"),
                                   content.get("linkText"))
    elif content_type == "visibility":
        db.set_visibility(content_key, bool(content.get("visible", True)))
    else:
        raise InvalidDraft(f"Unknown content type: {content_type}")


def _snapshot_and_apply(content_type: str, content_key: str, content: dict,
                        user_id: str | None, description: str,
                        page: str | None = None, section: str | None = None) -> dict:
    previous = current_value(content_type, content_key)
    version = db.insert_version(content_key, content_type, previous,
                                changed_by=user_id, description=description)
    try:
        apply_value(content_type, content_key, content, page=page, section=section)
    except Exception:
        # The change never landed, so its snapshot must not stay in history
        logger.error("Applying %s to %s failed, dropping version %s",
                     content_type, content_key, version.get("id"))
        if version.get("id") is not None:
            db.delete_version(version["id"])
        raise
    return version


# ---------------------------------------------------------------------------
# Lifecycle actions
# ---------------------------------------------------------------------------

def publish_draft(draft_id: str, user_id: str | None = None) -> dict:
    """Apply a draft to the live site, record the old value, delete the draft."""
    draft = get_live_draft(draft_id)
    content_key = draft["content_key"]
    draft_type = draft["draft_type"]

    version = _snapshot_and_apply(
        draft_type, content_key, draft.get("content") or {}, user_id,
        f"Before publishing {draft_type} draft",
    )
    db.delete_draft(draft_id)

    _audit("draft_published", "draft", str(draft_id),
           f"Published {draft_type} change to {content_key}")
    logger.info("Published draft %s (%s %s)", draft_id, draft_type, content_key)
    return {"draft": draft, "version": version}


def cancel_draft(draft_id: str, user_id: str | None = None) -> dict:
    """Discard a draft without touching live content."""
    draft = get_live_draft(draft_id)
    db.delete_draft(draft_id)

    _audit("draft_cancelled", "draft", str(draft_id),
           f"Cancelled {draft['draft_type']} change to {draft['content_key']}"
           + (f" by {user_id}" if user_id else ""))
    return draft


def rollback_to_version(version_id: str, user_id: str | None = None) -> dict:
    """Restore a version's value. The overwritten value becomes a new version."""
    try:
        version = db.get_version(version_id) if version_id else None
    except APIError as e:
        logger.info("Version lookup failed for %s: %s", version_id, e)
        version = None
    if not version:
        raise VersionNotFound(f"Version {version_id} not found")

    content_type = version.get("content_type") or "text"
    if content_type not in CONTENT_TYPES:
        raise InvalidDraft(f"Unknown content type: {content_type}")
    content_key = version["content_key"]

    saved = _snapshot_and_apply(
        content_type, content_key, version.get("content") or {}, user_id,
        f"Before rollback to version {version_id}",
    )

    _audit("version_restored", "version", str(version_id),
           f"Restored {content_key} to version from {version.get('changed_at', '')}")
    logger.info("Rolled back %s to version %s", content_key, version_id)
    return {"version": version, "saved": saved}


# ---------------------------------------------------------------------------
# Inline edits (admin edit mode, no draft step)
# ---------------------------------------------------------------------------

def save_inline_text(content_key: str, text: str, page: str | None = None,
                     section: str | None = None, user_id: str | None = None) -> dict:
    """Publish text directly. Still versioned."""
    if not content_key:
        raise InvalidDraft("content_key is required")
    if not isinstance(text, str):
        raise InvalidDraft("text must be a string")

    version = _snapshot_and_apply("text", content_key, {"text": text}, user_id,
                                  "Before inline text edit", page=page, section=section)
    _audit("inline_text_saved", "content", content_key, text[:100])
    return version


def save_inline_image(content_key: str, url: str, alt: str = "", page: str | None = None,
                      section: str | None = None, user_id: str | None = None) -> dict:
    """Publish an image directly. Still versioned."""
    if not content_key:
        raise InvalidDraft("content_key is required")
    if not url:
        raise InvalidDraft("Image url is required")

    version = _snapshot_and_apply("image", content_key, {"url": url, "alt": alt or ""},
                                  user_id, "Before inline image edit", page=page, section=section)
    _audit("inline_image_saved", "content", content_key, url)
    return version
