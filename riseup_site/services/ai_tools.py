"""Assistant tools — Anthropic tool definitions and their local executors.

Every tool that changes content only stages a draft and hands back a preview
link. Nothing here writes to the live stores.
"""

import logging
import re

from riseup_site.content import ANNOUNCEMENT_KEY, TEXT_CONTENT, TEXT_CONTENT_KEYS
from riseup_site.services.content import get_all_editable_content, get_content
from riseup_site.services.drafts import ANNOUNCEMENT_ACTIONS, DraftError, create_draft

logger = logging.getLogger(__name__)

PREVIEW_PATH = "/admin/dashboard/preview"

_SECTION_KEY_RE = re.compile(r"^[a-z0-9_-]+(\.[a-z0-9_-]+)+$")


def _key_help() -> str:
    return ", ".join(f"{k} ({TEXT_CONTENT[k]['description'].lower()})" for k in TEXT_CONTENT_KEYS)


TOOLS = [
    {
        "name": "updateTextContent",
        "description": (
            "Update a text content field on the website. Use this when the user wants to "
            "change text like headlines, subtitles, or button text."
        ),
        "input_schema": {
            "type": "object",
            "properties": {
                "contentKey": {
                    "type": "string",
                    "enum": TEXT_CONTENT_KEYS,
                    "description": f"The content field to update. Options: {_key_help()}",
                },
                "newText": {"type": "string", "description": "The new text content to set"},
            },
            "required": ["contentKey", "newText"],
        },
    },
    {
        "name": "updateAnnouncementBar",
        "description": (
            "Add, update, or remove the announcement bar at the top of the website. "
            "The announcement bar appears above the navigation on all pages."
        ),
        "input_schema": {
            "type": "object",
            "properties": {
                "action": {
                    "type": "string",
                    "enum": list(ANNOUNCEMENT_ACTIONS),
                    "description": (
                        "The action to perform: add a new announcement, update existing, "
                        "or remove it"
                    ),
                },
                "text": {
                    "type": "string",
                    "description": "The announcement text (required for add/update)",
                },
                "linkUrl": {
                    "type": "string",
                    "description": "Optional URL to link to when the announcement is clicked",
                },
                "linkText": {
                    "type": "string",
                    "description": 'Optional text for the link (e.g., "Learn more", "Register now")',
                },
            },
            "required": ["action"],
        },
    },
    {
        "name": "toggleSectionVisibility",
        "description": (
            "Show or hide a section on the website. Use this when the user wants to "
            "temporarily remove or restore a section."
        ),
        "input_schema": {
            "type": "object",
            "properties": {
                "sectionKey": {
                    "type": "string",
                    "description": (
                        "The section identifier (e.g., 'homepage.safety', 'sponsor.pricing')"
                    ),
                },
                "visible": {
                    "type": "boolean",
                    "description": "Whether the section should be visible (true) or hidden (false)",
                },
            },
            "required": ["sectionKey", "visible"],
        },
    },
    {
        "name": "listEditableContent",
        "description": (
            "List all content fields that can be edited on the website. Use this when the "
            "user asks what they can change or wants to see current content values."
        ),
        "input_schema": {"type": "object", "properties": {}},
    },
]


def _clip(text: str, n: int = 50) -> str:
    text = text or ""
    return text[:n] + ("..." if len(text) > n else "")


def preview_url(draft_id) -> str:
    return f"{PREVIEW_PATH}?draft={draft_id}"


def _failure(prefix: str, error: str) -> dict:
    return {"success": False, "message": f"{prefix}: {error}", "error": error}


def update_text_content(tool_input: dict, user_id: str | None = None) -> dict:
    content_key = tool_input.get("contentKey", "")
    new_text = tool_input.get("newText", "")
    if content_key not in TEXT_CONTENT:
        return _failure("Failed to prepare the change", f"Unknown content key: {content_key}")

    try:
        current = get_content(content_key)
        draft = create_draft(content_key, "text", {"text": new_text}, user_id)
    except DraftError as e:
        return _failure("Failed to prepare the change", str(e))

    return {
        "success": True,
        "draftId": draft["id"],
        "previewUrl": preview_url(draft["id"]),
        "message": (
            f'I\'ve prepared to change "{content_key}" from "{_clip(current)}" to '
            f'"{_clip(new_text)}". Please review the preview and publish when ready.'
        ),
    }


def update_announcement_bar(tool_input: dict, user_id: str | None = None) -> dict:
    action = tool_input.get("action", "")
    text = tool_input.get("text") or ""
    if action != "remove" and not text:
        return {"success": False, "message": "Please provide the announcement text."}

    content = {"action": action}
    if text:
        content["text"] = text
    if tool_input.get("linkUrl"):
        content["linkUrl"] = tool_input["linkUrl"]
    if tool_input.get("linkText"):
        content["linkText"] = tool_input["linkText"]

    try:
        draft = create_draft(ANNOUNCEMENT_KEY, "announcement", content, user_id)
    except DraftError as e:
        return _failure("Failed to prepare the announcement", str(e))

    if action == "remove":
        action_message = "remove the announcement bar"
    else:
        action_message = f'{action} the announcement bar with "{_clip(text)}"'

    return {
        "success": True,
        "draftId": draft["id"],
        "previewUrl": preview_url(draft["id"]),
        "message": (
            f"I've prepared to {action_message}. "
            "Please review the preview to see how it will look."
        ),
    }


def toggle_section_visibility(tool_input: dict, user_id: str | None = None) -> dict:
    section_key = (tool_input.get("sectionKey") or "").strip()
    visible = tool_input.get("visible")
    if not _SECTION_KEY_RE.match(section_key):
        return _failure("Failed to prepare visibility change", f"Invalid section key: {section_key!r}")

    try:
        draft = create_draft(section_key, "visibility", {"visible": visible}, user_id)
    except DraftError as e:
        return _failure("Failed to prepare visibility change", str(e))

    return {
        "success": True,
        "draftId": draft["id"],
        "previewUrl": preview_url(draft["id"]),
        "message": (
            f'I\'ve prepared to {"show" if visible else "hide"} the "{section_key}" section. '
            "Please review the preview."
        ),
    }


def list_editable_content(tool_input: dict, user_id: str | None = None) -> dict:
    content = get_all_editable_content()
    lines = [
        f"- **{item['content_key']}**: {item['description']}\n"
        f"  Current: \"{_clip(item['current_value'], 60)}\""
        for item in content
    ]
    return {
        "success": True,
        "content": content,
        "message": (
            "Here's all the content you can edit:\n\n" + "\n".join(lines)
            + "\n\nJust tell me which one you'd like to change and what the new text should be."
        ),
    }


_EXECUTORS = {
    "updateTextContent": update_text_content,
    "updateAnnouncementBar": update_announcement_bar,
    "toggleSectionVisibility": toggle_section_visibility,
    "listEditableContent": list_editable_content,
}


def execute_tool(name: str, tool_input: dict | None, user_id: str | None = None) -> dict:
    """Run a tool by name. Failures come back as results, never as exceptions."""
    executor = _EXECUTORS.get(name)
    if executor is None:
        return _failure("Unknown tool", name)
    try:
        return executor(tool_input or {}, user_id)
    except Exception as e:
        logger.exception("Tool %s failed", name)
        return _failure(f"{name} failed", str(e))
