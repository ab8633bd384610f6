"""Content assistant — runs the Anthropic tool-use loop for admin chat."""

import json
import logging

import anthropic

from riseup_site import supabase_client as db
from riseup_site import config
from riseup_site.services.ai_tools import TOOLS, execute_tool
from riseup_site.services.prompts import SYSTEM_PROMPT

logger = logging.getLogger(__name__)


class AssistantUnavailable(Exception):
    """No Anthropic credential is configured."""


def _message_text(message: dict) -> str:
    """Text of a UI message: the first text part if present, else `content`."""
    content = message.get("content")
    text = content if isinstance(content, str) else ""
    parts = message.get("parts")
    if isinstance(parts, list):
        for part in parts:
            if isinstance(part, dict) and part.get("type") == "text" and part.get("text"):
                text = part["text"]
                break
    return text


def to_model_messages(messages: list) -> list[dict]:
    """Convert UI chat messages to Messages API turns.

    Drops empty messages (tool-only assistant turns), unknown roles, and any
    assistant turns before the first user turn.
    """
    result = []
    for message in messages or []:
        if not isinstance(message, dict):
            continue
        role = message.get("role")
        if role not in ("user", "assistant"):
            continue
        text = _message_text(message)
        if not text.strip():
            continue
        if not result and role == "assistant":
            continue
        result.append({"role": role, "content": text})
    return result


def _get_client() -> anthropic.Anthropic:
    return anthropic.Anthropic(api_key=config.ANTHROPIC_API_KEY)


def _reply_text(response) -> str:
    return "".join(
        block.text for block in response.content if getattr(block, "type", "") == "text"
    ).strip()


def save_chat_message(user_id: str, role: str, content: str, tool_calls: list | None = None) -> None:
    """Persist a chat message. History is not critical: failures are logged only."""
    if not user_id or not content:
        return
    try:
        db.insert_chat_message(user_id, role, content, tool_calls)
    except Exception:
        logger.exception("Failed to save chat message for %s", user_id)


def run_assistant(messages: list, user_id: str | None = None, client=None) -> dict:
    """Answer the latest admin message, executing any tools the model calls.

    Returns {"reply", "tool_results", "drafts"}. Raises AssistantUnavailable
    when no API key is set and ValueError when there is nothing to answer.
    """
    if not config.ANTHROPIC_API_KEY:
        raise AssistantUnavailable("ANTHROPIC_API_KEY is not set")

    model_messages = to_model_messages(messages)
    if not model_messages or model_messages[-1]["role"] != "user":
        raise ValueError("No user message to answer")

    client = client or _get_client()
    tool_results = []
    response = None

    for _ in range(config.CHAT_MAX_TOOL_ROUNDS):
        response = client.messages.create(
            model=config.ANTHROPIC_MODEL,
            max_tokens=config.ANTHROPIC_MAX_TOKENS,
            system=SYSTEM_PROMPT,
            tools=TOOLS,
            messages=model_messages,
        )
        if response.stop_reason != "tool_use":
            break

        model_messages.append({"role": "assistant", "content": response.content})
        results = []
        for block in response.content:
            if getattr(block, "type", "") != "tool_use":
                continue
            result = execute_tool(block.name, block.input, user_id)
            tool_results.append({"tool": block.name, "input": block.input, "result": result})
            results.append({
                "type": "tool_result",
                "tool_use_id": block.id,
                "content": json.dumps(result, default=str),
                "is_error": not result.get("success", False),
            })
        model_messages.append({"role": "user", "content": results})
    else:
        logger.warning("Assistant hit the %d tool round limit", config.CHAT_MAX_TOOL_ROUNDS)

    reply = _reply_text(response) if response is not None else ""
    if not reply and tool_results:
        # Fall back to the last tool's own message when the model says nothing
        reply = tool_results[-1]["result"].get("message", "")

    drafts = [
        {"draftId": r["result"]["draftId"], "previewUrl": r["result"]["previewUrl"]}
        for r in tool_results
        if r["result"].get("success") and r["result"].get("draftId")
    ]

    save_chat_message(user_id, "user", _last_user_text(messages))
    save_chat_message(user_id, "assistant", reply,
                      [{"tool": r["tool"], "input": r["input"]} for r in tool_results] or None)

    return {"reply": reply, "tool_results": tool_results, "drafts": drafts}


def _last_user_text(messages: list) -> str:
    for message in reversed(to_model_messages(messages)):
        if message["role"] == "user":
            return message["content"]
    return ""


def get_chat_history(user_id: str, limit: int = 50) -> list[dict]:
    """Recent chat messages for an admin, oldest first."""
    return db.get_chat_messages(user_id, limit=limit)
