"""Supabase connection and query helpers for the site content tables."""

import logging
import threading
from datetime import datetime, timezone

from supabase import Client, create_client

from riseup_site.config import SUPABASE_ANON_KEY, SUPABASE_SERVICE_KEY, SUPABASE_URL

logger = logging.getLogger(__name__)

_client: Client | None = None
_client_lock = threading.Lock()


def get_client() -> Client:
    """Return the Supabase client singleton (thread-safe)."""
    global _client
    if _client is None:
        with _client_lock:
            if _client is None:
                if not SUPABASE_URL or not SUPABASE_SERVICE_KEY:
                    raise RuntimeError("SUPABASE_URL and SUPABASE_SERVICE_KEY must be set")
                _client = create_client(SUPABASE_URL, SUPABASE_SERVICE_KEY)
    return _client


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# ---------------------------------------------------------------------------
# Generic helpers
# ---------------------------------------------------------------------------

def _table(name: str):
    """Return a table query builder."""
    return get_client().table(name)


def insert(table: str, data: dict) -> dict:
    """Insert a row and return it."""
    result = _table(table).insert(data).execute()
    return result.data[0] if result.data else {}


def upsert(table: str, data: dict, on_conflict: str = "") -> dict:
    """Upsert a row and return it."""
    if on_conflict:
        q = _table(table).upsert(data, on_conflict=on_conflict)
    else:
        q = _table(table).upsert(data)
    result = q.execute()
    return result.data[0] if result.data else {}


def update(table: str, data: dict, match: dict) -> list[dict]:
    """Update rows matching conditions and return them."""
    q = _table(table).update(data)
    for k, v in match.items():
        q = q.eq(k, v)
    result = q.execute()
    return result.data or []


def delete(table: str, match: dict) -> list:
    """Delete rows matching conditions."""
    q = _table(table).delete()
    for k, v in match.items():
        q = q.eq(k, v)
    result = q.execute()
    return result.data or []


def select(table: str, columns: str = "*", match: dict | None = None,
           order: str | None = None, order_desc: bool = False,
           limit: int | None = None) -> list[dict]:
    """Select rows with optional filtering, ordering, and limit."""
    q = _table(table).select(columns)
    if match:
        for k, v in match.items():
            q = q.eq(k, v)
    if order:
        q = q.order(order, desc=order_desc)
    if limit:
        q = q.limit(limit)
    result = q.execute()
    return result.data or []


def select_one(table: str, columns: str = "*", match: dict | None = None,
               order: str | None = None, order_desc: bool = False) -> dict | None:
    """Select a single row."""
    rows = select(table, columns, match, order=order, order_desc=order_desc, limit=1)
    return rows[0] if rows else None


# ---------------------------------------------------------------------------
# Site content
# ---------------------------------------------------------------------------

def get_site_content(content_key: str) -> dict | None:
    """Get the published content row for a key."""
    return select_one("site_content", match={"content_key": content_key})


def get_site_content_for_page(page: str) -> list[dict]:
    """Get all published content rows tagged with a page."""
    return select("site_content", columns="content_key, content", match={"page": page})


def upsert_site_content(data: dict) -> dict:
    """Upsert a content row by content_key."""
    data["updated_at"] = _now()
    return upsert("site_content", data, on_conflict="content_key")


# ---------------------------------------------------------------------------
# Drafts
# ---------------------------------------------------------------------------

def insert_draft(data: dict) -> dict:
    """Insert a pending content draft."""
    return insert("content_drafts", data)


def get_draft(draft_id: str) -> dict | None:
    """Get a draft by ID."""
    return select_one("content_drafts", match={"id": draft_id})


def get_drafts(content_key: str | None = None, limit: int = 100) -> list[dict]:
    """Get drafts, newest first, optionally for a single key."""
    match = {"content_key": content_key} if content_key else None
    return select("content_drafts", match=match, order="created_at", order_desc=True, limit=limit)


def delete_draft(draft_id: str) -> list:
    """Delete a draft by ID."""
    return delete("content_drafts", {"id": draft_id})


def delete_drafts_for_key(content_key: str) -> list:
    """Delete every draft targeting a content key."""
    return delete("content_drafts", {"content_key": content_key})


def delete_expired_drafts(now: str) -> list:
    """Delete drafts whose expires_at is at or before now."""
    result = _table("content_drafts").delete().lte("expires_at", now).execute()
    return result.data or []


# ---------------------------------------------------------------------------
# Version history
# ---------------------------------------------------------------------------

def insert_version(content_key: str, content_type: str, content: dict,
                   changed_by: str | None = None, description: str = "") -> dict:
    """Append a version history entry."""
    return insert("content_versions", {
        "content_key": content_key,
        "content_type": content_type,
        "content": content,
        "changed_by": changed_by,
        "changed_at": _now(),
        "change_description": description,
    })


def get_version(version_id: str) -> dict | None:
    """Get a version history entry by ID."""
    return select_one("content_versions", match={"id": version_id})


def get_versions(content_key: str | None = None, limit: int = 100) -> list[dict]:
    """Get version history, newest first."""
    match = {"content_key": content_key} if content_key else None
    return select("content_versions", match=match, order="changed_at", order_desc=True, limit=limit)


def delete_version(version_id: str) -> list:
    """Delete a version entry. Only used to undo a snapshot whose change failed."""
    return delete("content_versions", {"id": version_id})


# ---------------------------------------------------------------------------
# Announcement bar
# ---------------------------------------------------------------------------

def get_active_announcement() -> dict | None:
    """Get the newest active announcement row."""
    return select_one("announcement_bar", match={"is_active": True},
                      order="created_at", order_desc=True)


def deactivate_announcements() -> list[dict]:
    """Mark every active announcement inactive."""
    return update("announcement_bar", {"is_active": False, "updated_at": _now()},
                  {"is_active": True})


def insert_announcement(text: str, link_url: str | None = None,
                        link_text: str | None = None) -> dict:
    """Insert a new active announcement."""
    now = _now()
    return insert("announcement_bar", {
        "text": text,
        "link_url": link_url or None,
        "link_text": link_text or None,
        "is_active": True,
        "created_at": now,
        "updated_at": now,
    })


# ---------------------------------------------------------------------------
# Section visibility
# ---------------------------------------------------------------------------

def get_visibility(section_key: str) -> dict | None:
    """Get the visibility row for a section."""
    return select_one("section_visibility", match={"section_key": section_key})


def set_visibility(section_key: str, is_visible: bool) -> dict:
    """Upsert section visibility by section_key."""
    return upsert("section_visibility", {
        "section_key": section_key,
        "is_visible": is_visible,
        "updated_at": _now(),
    }, on_conflict="section_key")


def get_hidden_sections() -> list[str]:
    """Return the keys of every hidden section."""
    rows = select("section_visibility", columns="section_key, is_visible",
                  match={"is_visible": False})
    return [r["section_key"] for r in rows]


# ---------------------------------------------------------------------------
# Chat messages
# ---------------------------------------------------------------------------

def insert_chat_message(user_id: str, role: str, content: str,
                        tool_calls: list | None = None) -> dict:
    """Save a chat message to history."""
    return insert("chat_messages", {
        "user_id": user_id,
        "role": role,
        "content": content,
        "tool_calls": tool_calls or None,
        "created_at": _now(),
    })


def get_chat_messages(user_id: str, limit: int = 50) -> list[dict]:
    """Get chat history for a user, oldest first."""
    return select("chat_messages", match={"user_id": user_id},
                  order="created_at", limit=limit)


# ---------------------------------------------------------------------------
# Audit Log
# ---------------------------------------------------------------------------

def log_action(action: str, entity_type: str = "", entity_id: str = "", details: str = "") -> dict:
    """Log an admin action."""
    return insert("audit_log", {
        "action": action,
        "entity_type": entity_type,
        "entity_id": entity_id,
        "details": details,
        "created_at": _now(),
    })


def get_audit_log(limit: int = 50) -> list[dict]:
    """Get recent audit log entries."""
    return select("audit_log", order="created_at", order_desc=True, limit=limit)


# ---------------------------------------------------------------------------
# Auth (hosted by Supabase)
# ---------------------------------------------------------------------------

def get_user_for_token(access_token: str):
    """Resolve an access token to a Supabase user, or None if invalid."""
    try:
        response = get_client().auth.get_user(access_token)
    except Exception as e:
        logger.info("Rejected access token: %s", e)
        return None
    return response.user if response else None


def sign_in(email: str, password: str):
    """Password sign-in. Returns the Supabase session, or None on failure.

    Uses a short-lived client so the service client's auth header is never
    replaced by the user's session.
    """
    if not SUPABASE_URL:
        raise RuntimeError("SUPABASE_URL must be set")
    auth_client = create_client(SUPABASE_URL, SUPABASE_ANON_KEY or SUPABASE_SERVICE_KEY)
    try:
        response = auth_client.auth.sign_in_with_password({"email": email, "password": password})
    except Exception as e:
        logger.info("Sign-in failed for %s: %s", email, e)
        return None
    return response.session
