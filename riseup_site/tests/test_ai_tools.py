"""Tests for assistant tool executors — every change becomes a draft."""

from riseup_site.tests.conftest import make_content


class TestUpdateTextContent:
    def test_creates_draft_with_preview_link(self, fake_db):
        from riseup_site.services.ai_tools import execute_tool

        fake_db.store["site_content"].append(make_content(content={"text": "Old Headline"}))

        result = execute_tool("updateTextContent",
                              {"contentKey": "hero.headline", "newText": "New Headline"}, "admin-1")

        assert result["success"] is True
        assert result["previewUrl"] == f"/admin/dashboard/preview?draft={result['draftId']}"
        assert "Old Headline" in result["message"]
        assert "New Headline" in result["message"]

        draft = fake_db.store["content_drafts"][0]
        assert draft["content"] == {"text": "New Headline"}
        assert draft["created_by"] == "admin-1"
        # live content untouched
        assert fake_db.store["site_content"][0]["content"] == {"text": "Old Headline"}

    def test_message_clips_long_text(self, fake_db):
        from riseup_site.services.ai_tools import execute_tool

        result = execute_tool("updateTextContent",
                              {"contentKey": "hero.headline", "newText": "x" * 80})
        assert '"' + "x" * 50 + '..."' in result["message"]

    def test_unknown_key_fails_without_draft(self, fake_db):
        from riseup_site.services.ai_tools import execute_tool

        result = execute_tool("updateTextContent", {"contentKey": "footer.copyright", "newText": "x"})
        assert result["success"] is False
        assert "footer.copyright" in result["error"]
        assert fake_db.store["content_drafts"] == []

    def test_empty_text_fails(self, fake_db):
        from riseup_site.services.ai_tools import execute_tool

        result = execute_tool("updateTextContent", {"contentKey": "hero.headline", "newText": ""})
        assert result["success"] is False
        assert fake_db.store["content_drafts"] == []


class TestUpdateAnnouncementBar:
    def test_add_requires_text(self, fake_db):
        from riseup_site.services.ai_tools import execute_tool

        result = execute_tool("updateAnnouncementBar", {"action": "add"})
        assert result == {"success": False, "message": "Please provide the announcement text."}
        assert fake_db.store["content_drafts"] == []

    def test_add_with_link(self, fake_db):
        from riseup_site.services.ai_tools import execute_tool

        result = execute_tool("updateAnnouncementBar", {
            "action": "add", "text": "Registration closes Friday",
            "linkUrl": "/register", "linkText": "Sign up",
        })
        assert result["success"] is True

        draft = fake_db.store["content_drafts"][0]
        assert draft["content_key"] == "announcement_bar"
        assert draft["draft_type"] == "announcement"
        assert draft["content"] == {
            "action": "add", "text": "Registration closes Friday",
            "linkUrl": "/register", "linkText": "Sign up",
        }

    def test_remove(self, fake_db):
        from riseup_site.services.ai_tools import execute_tool

        result = execute_tool("updateAnnouncementBar", {"action": "remove"})
        assert result["success"] is True
        assert "remove the announcement bar" in result["message"]

    def test_invalid_action_fails(self, fake_db):
        from riseup_site.services.ai_tools import execute_tool

        result = execute_tool("updateAnnouncementBar", {"action": "flash", "text": "Hi"})
        assert result["success"] is False
        assert fake_db.store["content_drafts"] == []


class TestToggleSectionVisibility:
    def test_hide_section(self, fake_db):
        from riseup_site.services.ai_tools import execute_tool

        result = execute_tool("toggleSectionVisibility",
                              {"sectionKey": "homepage.safety", "visible": False})
        assert result["success"] is True
        assert "hide" in result["message"]
        assert fake_db.store["content_drafts"][0]["content"] == {"visible": False}

    def test_rejects_malformed_key(self, fake_db):
        from riseup_site.services.ai_tools import execute_tool

        for key in ("safety", "Homepage.Safety", "homepage.", "home page.safety"):
            result = execute_tool("toggleSectionVisibility", {"sectionKey": key, "visible": True})
            assert result["success"] is False, key
        assert fake_db.store["content_drafts"] == []


class TestListEditableContent:
    def test_lists_every_key_with_current_value(self, fake_db):
        from riseup_site.content import TEXT_CONTENT_KEYS
        from riseup_site.services.ai_tools import execute_tool

        fake_db.store["site_content"].append(make_content(content={"text": "Live Headline"}))

        result = execute_tool("listEditableContent", {})
        assert result["success"] is True
        assert len(result["content"]) == len(TEXT_CONTENT_KEYS)
        assert "**hero.headline**" in result["message"]
        assert "Live Headline" in result["message"]
        assert fake_db.store["content_drafts"] == []


class TestExecuteTool:
    def test_unknown_tool(self, fake_db):
        from riseup_site.services.ai_tools import execute_tool

        result = execute_tool("deleteWebsite", {})
        assert result["success"] is False

    def test_executor_errors_become_results(self, fake_db):
        from unittest.mock import patch

        from riseup_site.services.ai_tools import execute_tool

        with patch("riseup_site.services.ai_tools.create_draft", side_effect=RuntimeError("db down")):
            result = execute_tool("updateTextContent",
                                  {"contentKey": "hero.headline", "newText": "Hi"})
        assert result["success"] is False
        assert "db down" in result["error"]

    def test_tool_schemas(self):
        from riseup_site.content import TEXT_CONTENT_KEYS
        from riseup_site.services.ai_tools import TOOLS

        by_name = {t["name"]: t for t in TOOLS}
        assert set(by_name) == {
            "updateTextContent", "updateAnnouncementBar",
            "toggleSectionVisibility", "listEditableContent",
        }
        key_schema = by_name["updateTextContent"]["input_schema"]["properties"]["contentKey"]
        assert key_schema["enum"] == TEXT_CONTENT_KEYS
