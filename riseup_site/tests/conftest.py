"""Shared fixtures for RiseUp site tests.

Provides:
- fake_db: patches supabase_client with an in-memory fake
- client: sync TestClient wired to the FastAPI app
- admin_headers: a bearer token the patched auth accepts
- sample data factories for drafts, versions and content rows
"""

import os
import uuid
from collections import defaultdict
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from unittest.mock import patch, MagicMock

import pytest

# Set env vars before any riseup_site imports
os.environ.setdefault("SUPABASE_URL", "https://fake.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "fake-key")
os.environ.setdefault("ANTHROPIC_API_KEY", "")
os.environ.setdefault("COOKIE_SECURE", "false")
os.environ.setdefault("RESEND_API_KEY", "")
os.environ.setdefault("RECAPTCHA_SECRET_KEY", "")

ADMIN_TOKEN = "valid-admin-token"
ADMIN_ID = "admin-user-1"
ADMIN_EMAIL = "coach@riseup.test"


# ---------------------------------------------------------------------------
# In-memory fake Supabase
# ---------------------------------------------------------------------------

class FakeQueryResult:
    def __init__(self, data=None, count=None):
        self.data = data or []
        self.count = count


class FakeQueryBuilder:
    """Mimics the supabase-py query builder chain."""

    def __init__(self, store, table_name):
        self._store = store
        self._table = table_name
        self._filters = []
        self._order_col = None
        self._order_desc = False
        self._limit_val = None
        self._columns = "*"
        self._count_mode = None
        self._upsert_data = None
        self._upsert_conflict = None
        self._update_data = None
        self._delete_mode = False
        self._insert_data = None

    def select(self, columns="*", count=None):
        self._columns = columns
        self._count_mode = count
        return self

    def insert(self, data):
        self._insert_data = data
        return self

    def upsert(self, data, on_conflict=None):
        self._upsert_data = data
        self._upsert_conflict = on_conflict
        return self

    def update(self, data):
        self._update_data = data
        return self

    def delete(self):
        self._delete_mode = True
        return self

    def eq(self, col, val):
        self._filters.append(("eq", col, val))
        return self

    def lte(self, col, val):
        self._filters.append(("lte", col, val))
        return self

    def order(self, col, desc=False):
        self._order_col = col
        self._order_desc = desc
        return self

    def limit(self, n):
        self._limit_val = n
        return self

    def _match(self, row):
        for op, col, val in self._filters:
            row_val = row.get(col)
            if op == "eq" and row_val != val:
                return False
            if op == "lte" and (row_val is None or str(row_val) > str(val)):
                return False
        return True

    def execute(self):
        table = self._store[self._table]

        if self._insert_data is not None:
            row = dict(self._insert_data)
            if "id" not in row:
                row["id"] = str(uuid.uuid4())
            table.append(row)
            return FakeQueryResult(data=[row])

        if self._upsert_data is not None:
            row = dict(self._upsert_data)
            if self._upsert_conflict:
                conflict_cols = [c.strip() for c in self._upsert_conflict.split(",")]
                for existing in table:
                    if all(existing.get(c) == row.get(c) for c in conflict_cols):
                        existing.update(row)
                        return FakeQueryResult(data=[existing])
            if "id" not in row:
                row["id"] = str(uuid.uuid4())
            table.append(row)
            return FakeQueryResult(data=[row])

        if self._update_data is not None:
            updated = []
            for row in table:
                if self._match(row):
                    row.update(self._update_data)
                    updated.append(row)
            return FakeQueryResult(data=updated)

        if self._delete_mode:
            remaining = [r for r in table if not self._match(r)]
            removed = [r for r in table if self._match(r)]
            table.clear()
            table.extend(remaining)
            return FakeQueryResult(data=removed)

        # SELECT
        rows = [r for r in table if self._match(r)]

        if self._order_col:
            rows.sort(
                key=lambda r: r.get(self._order_col) or "",
                reverse=self._order_desc,
            )

        total = len(rows)
        if self._limit_val is not None:
            rows = rows[:self._limit_val]

        return FakeQueryResult(
            data=rows,
            count=total if self._count_mode else None,
        )


class FakeDB:
    """In-memory store keyed by table name."""

    def __init__(self):
        self.store = defaultdict(list)

    def table(self, name):
        return FakeQueryBuilder(self.store, name)

    def clear(self):
        self.store.clear()


def _fake_user_for_token(token):
    if token == ADMIN_TOKEN:
        return SimpleNamespace(id=ADMIN_ID, email=ADMIN_EMAIL)
    return None


@pytest.fixture
def fake_db():
    """Provides a clean in-memory DB and patches supabase_client._table."""
    db = FakeDB()

    def fake_table(name):
        return FakeQueryBuilder(db.store, name)

    with patch("riseup_site.supabase_client._table", side_effect=fake_table):
        with patch("riseup_site.supabase_client.get_client", return_value=MagicMock()):
            with patch("riseup_site.supabase_client.get_user_for_token",
                       side_effect=_fake_user_for_token):
                yield db


@pytest.fixture
def client(fake_db):
    """Sync test client for the FastAPI app with mocked DB, no scheduler."""
    from contextlib import asynccontextmanager

    from fastapi.testclient import TestClient

    from riseup_site.app import create_app

    @asynccontextmanager
    async def noop_lifespan(app):
        yield

    app = create_app()
    app.router.lifespan_context = noop_lifespan

    with TestClient(app) as c:
        yield c


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}


@pytest.fixture
def ai_key():
    """Pretend an Anthropic key is configured."""
    with patch("riseup_site.config.ANTHROPIC_API_KEY", "sk-ant-test"):
        yield


# ---------------------------------------------------------------------------
# Data factories
# ---------------------------------------------------------------------------

def _ts(delta: timedelta = timedelta()) -> str:
    return (datetime.now(timezone.utc) + delta).isoformat()


def make_draft(**overrides):
    defaults = {
        "id": str(uuid.uuid4()),
        "content_key": "hero.headline",
        "draft_type": "text",
        "content": {"text": "Registration Now Open"},
        "created_by": ADMIN_ID,
        "created_at": _ts(),
        "expires_at": _ts(timedelta(hours=24)),
    }
    defaults.update(overrides)
    return defaults


def make_expired_draft(**overrides):
    overrides.setdefault("created_at", _ts(timedelta(hours=-30)))
    overrides.setdefault("expires_at", _ts(timedelta(hours=-6)))
    return make_draft(**overrides)


def make_content(**overrides):
    defaults = {
        "id": str(uuid.uuid4()),
        "content_key": "hero.headline",
        "content_type": "text",
        "content": {"text": "Fall Season Starts Soon"},
        "page": "Homepage",
        "section": "Hero",
        "updated_at": _ts(),
    }
    defaults.update(overrides)
    return defaults


def make_version(**overrides):
    defaults = {
        "id": str(uuid.uuid4()),
        "content_key": "hero.headline",
        "content_type": "text",
        "content": {"text": "Spring Signups Open"},
        "changed_by": ADMIN_ID,
        "changed_at": _ts(timedelta(days=-1)),
        "change_description": "Before publishing text draft",
    }
    defaults.update(overrides)
    return defaults


def make_announcement(**overrides):
    defaults = {
        "id": str(uuid.uuid4()),
        "text": "Summer camp registration is open",
        "link_url": "/camp",
        "link_text": "Register now",
        "is_active": True,
        "created_at": _ts(),
        "updated_at": _ts(),
    }
    defaults.update(overrides)
    return defaults
