"""Version history view — recent versions, capped per content key."""

from riseup_site import supabase_client as db


def list_versions(limit: int = 100, per_key: int = 10) -> list[dict]:
    """Newest versions first, keeping at most `per_key` entries per content key."""
    kept: dict[str, int] = {}
    versions = []
    for version in db.get_versions(limit=limit):
        key = version["content_key"]
        if kept.get(key, 0) >= per_key:
            continue
        kept[key] = kept.get(key, 0) + 1
        versions.append(version)
    return versions


def history_summary(versions: list[dict]) -> dict:
    """Counts shown above the history table."""
    keys = {v["content_key"] for v in versions}
    return {"total_versions": len(versions), "content_keys": sorted(keys)}


def describe_value(content_type: str, content: dict | None) -> str:
    """One-line, human-readable rendering of a stored value."""
    content = content or {}
    if content_type == "announcement":
        if content.get("action") == "remove":
            return "(no announcement)"
        return content.get("text", "")
    if content_type == "visibility":
        return "Visible" if content.get("visible", True) else "Hidden"
    if content_type == "image":
        return content.get("url", "")
    return content.get("text", "")
