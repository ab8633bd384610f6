"""Tests for the admin pages — login, dashboard, preview, publish/cancel, rollback."""

from types import SimpleNamespace
from unittest.mock import patch

from riseup_site.tests.conftest import (
    ADMIN_TOKEN,
    make_content,
    make_draft,
    make_expired_draft,
    make_version,
)


class TestAuth:
    def test_dashboard_redirects_to_login(self, client):
        resp = client.get("/admin/dashboard", follow_redirects=False)
        assert resp.status_code == 303
        assert resp.headers["location"] == "/admin/login"

    def test_bad_token_redirects_to_login(self, client):
        resp = client.get("/admin/dashboard", headers={"Authorization": "Bearer nope"},
                          follow_redirects=False)
        assert resp.status_code == 303

    def test_cookie_session(self, client):
        client.cookies.set("riseup-access-token", ADMIN_TOKEN)
        resp = client.get("/admin/dashboard")
        assert resp.status_code == 200
        assert "coach@riseup.test" in resp.text

    def test_login_page(self, client):
        resp = client.get("/admin/login")
        assert resp.status_code == 200
        assert "<form" in resp.text

    def test_login_sets_cookie(self, client, fake_db):
        session = SimpleNamespace(access_token=ADMIN_TOKEN, expires_in=3600)
        with patch("riseup_site.supabase_client.sign_in", return_value=session):
            resp = client.post("/admin/login",
                               data={"email": "coach@riseup.test", "password": "pw"},
                               follow_redirects=False)
        assert resp.status_code == 303
        assert resp.headers["location"] == "/admin/dashboard"
        assert "riseup-access-token" in resp.headers["set-cookie"]
        assert any(log["action"] == "admin_login" for log in fake_db.store["audit_log"])

    def test_login_failure(self, client):
        with patch("riseup_site.supabase_client.sign_in", return_value=None):
            resp = client.post("/admin/login", data={"email": "x@y.z", "password": "bad"})
        assert resp.status_code == 401
        assert "Invalid email or password." in resp.text

    def test_logout_clears_cookie(self, client):
        resp = client.post("/admin/logout", follow_redirects=False)
        assert resp.status_code == 303
        assert resp.headers["location"] == "/admin/login"

    def test_publish_requires_login(self, client, fake_db):
        draft = make_draft()
        fake_db.store["content_drafts"].append(draft)

        resp = client.post(f"/admin/drafts/{draft['id']}/publish", follow_redirects=False)
        assert resp.headers["location"] == "/admin/login"
        assert len(fake_db.store["content_drafts"]) == 1


class TestDashboard:
    def test_lists_live_drafts_only(self, client, fake_db, admin_headers):
        fake_db.store["content_drafts"].extend([
            make_draft(content={"text": "Visible Draft"}),
            make_expired_draft(content_key="hero.subtitle", content={"text": "Stale Draft"}),
        ])
        resp = client.get("/admin/dashboard", headers=admin_headers)
        assert resp.status_code == 200
        assert "hero.headline" in resp.text
        assert "hero.subtitle" not in resp.text

    def test_empty_dashboard(self, client, admin_headers):
        resp = client.get("/admin/dashboard", headers=admin_headers)
        assert "No pending drafts." in resp.text

    def test_published_banner(self, client, admin_headers):
        resp = client.get("/admin/dashboard?published=true", headers=admin_headers)
        assert "Changes published." in resp.text


class TestPreview:
    def test_shows_current_and_new_value(self, client, fake_db, admin_headers):
        fake_db.store["site_content"].append(make_content(content={"text": "Spring Ball"}))
        draft = make_draft(content={"text": "Fall Ball"})
        fake_db.store["content_drafts"].append(draft)

        resp = client.get(f"/admin/dashboard/preview?draft={draft['id']}", headers=admin_headers)
        assert resp.status_code == 200
        assert "Spring Ball" in resp.text
        assert "Fall Ball" in resp.text
        assert f"/?preview={draft['id']}" in resp.text

    def test_expired_draft_redirects_with_error(self, client, fake_db, admin_headers):
        draft = make_expired_draft()
        fake_db.store["content_drafts"].append(draft)

        resp = client.get(f"/admin/dashboard/preview?draft={draft['id']}", headers=admin_headers,
                          follow_redirects=False)
        assert resp.status_code == 303
        assert resp.headers["location"].startswith("/admin/dashboard?error=")

    def test_missing_draft_param(self, client, admin_headers):
        resp = client.get("/admin/dashboard/preview", headers=admin_headers, follow_redirects=False)
        assert resp.headers["location"] == "/admin/dashboard"


class TestPublishCancel:
    def test_publish(self, client, fake_db, admin_headers):
        draft = make_draft(content={"text": "Fall Ball"})
        fake_db.store["content_drafts"].append(draft)

        resp = client.post(f"/admin/drafts/{draft['id']}/publish", headers=admin_headers,
                           follow_redirects=False)
        assert resp.status_code == 303
        assert resp.headers["location"] == "/admin/dashboard?published=true"
        assert fake_db.store["site_content"][0]["content"] == {"text": "Fall Ball"}
        assert fake_db.store["content_versions"][0]["changed_by"] == "admin-user-1"

    def test_publish_expired_is_rejected(self, client, fake_db, admin_headers):
        draft = make_expired_draft()
        fake_db.store["content_drafts"].append(draft)

        resp = client.post(f"/admin/drafts/{draft['id']}/publish", headers=admin_headers,
                           follow_redirects=False)
        assert "error=" in resp.headers["location"]
        assert fake_db.store["site_content"] == []

    def test_cancel(self, client, fake_db, admin_headers):
        draft = make_draft()
        fake_db.store["content_drafts"].append(draft)

        resp = client.post(f"/admin/drafts/{draft['id']}/cancel", headers=admin_headers,
                           follow_redirects=False)
        assert resp.headers["location"] == "/admin/dashboard?cancelled=true"
        assert fake_db.store["content_drafts"] == []
        assert fake_db.store["site_content"] == []


class TestHistory:
    def test_lists_versions(self, client, fake_db, admin_headers):
        fake_db.store["content_versions"].append(make_version(content={"text": "Spring Signups"}))
        resp = client.get("/admin/dashboard/history", headers=admin_headers)
        assert resp.status_code == 200
        assert "Spring Signups" in resp.text
        assert "Total Versions" in resp.text

    def test_rollback(self, client, fake_db, admin_headers):
        fake_db.store["site_content"].append(make_content(content={"text": "Current"}))
        version = make_version(content={"text": "Older"})
        fake_db.store["content_versions"].append(version)

        resp = client.post(f"/admin/versions/{version['id']}/rollback", headers=admin_headers,
                           follow_redirects=False)
        assert resp.headers["location"] == "/admin/dashboard/history?restored=true"
        assert fake_db.store["site_content"][0]["content"] == {"text": "Older"}
        assert len(fake_db.store["content_versions"]) == 2

    def test_rollback_missing_version(self, client, fake_db, admin_headers):
        resp = client.post("/admin/versions/missing/rollback", headers=admin_headers,
                           follow_redirects=False)
        assert resp.headers["location"].startswith("/admin/dashboard/history?error=")

    def test_restored_banner(self, client, admin_headers):
        resp = client.get("/admin/dashboard/history?restored=true", headers=admin_headers)
        assert "Content restored successfully!" in resp.text


class TestMalformedIds:
    def test_rollback_malformed_version_id_redirects_with_error(self, client, fake_db, admin_headers):
        from postgrest.exceptions import APIError

        error = APIError({"code": "22P02", "message": "invalid input syntax for type bigint",
                          "details": None, "hint": None})
        with patch("riseup_site.supabase_client.get_version", side_effect=error):
            resp = client.post("/admin/versions/abc/rollback", headers=admin_headers,
                               follow_redirects=False)
        assert resp.status_code == 303
        assert resp.headers["location"].startswith("/admin/dashboard/history?error=")
        assert fake_db.store["content_versions"] == []

    def test_publish_malformed_draft_id_redirects_with_error(self, client, fake_db, admin_headers):
        from postgrest.exceptions import APIError

        error = APIError({"code": "22P02", "message": "invalid input syntax for type uuid",
                          "details": None, "hint": None})
        with patch("riseup_site.supabase_client.get_draft", side_effect=error):
            resp = client.post("/admin/drafts/abc/publish", headers=admin_headers,
                               follow_redirects=False)
        assert resp.headers["location"].startswith("/admin/dashboard?error=")
