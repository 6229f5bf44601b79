"""
Chat transcript export.
"""

from datetime import datetime
from typing import Any, Dict, List


def export_filename(exported_at: datetime, extension: str) -> str:
    return f"theory-lab-chat-{exported_at.date().isoformat()}.{extension}"


def build_json_export(messages: List[Dict[str, Any]], exported_at: datetime) -> Dict[str, Any]:
    return {
        "exportedAt": exported_at.isoformat(),
        "sessionType": "theory-lab",
        "messageCount": len(messages),
        "messages": messages,
    }


def build_text_export(messages: List[Dict[str, Any]], exported_at: datetime) -> str:
    """Plain-text transcript, one block per message."""
    lines = [
        "Physics Theory Lab Chat Session",
        f"Exported: {exported_at.strftime('%Y-%m-%d %H:%M:%S %Z').strip()}",
        f"Messages: {len(messages)}",
        "",
        "---",
        "",
    ]
    for message in messages:
        role = str(message.get("role", "user")).upper()
        stamp = message.get("timestamp")
        header = f"{role} [{stamp}]:" if stamp else f"{role}:"
        lines.extend([header, str(message.get("content", "")), ""])
    lines.extend(["---", "", "End of session"])
    return "\n".join(lines)
