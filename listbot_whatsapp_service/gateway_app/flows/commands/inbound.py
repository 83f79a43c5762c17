"""
Inbound WhatsApp Cloud API messages, normalized.

The webhook hands us `value.messages[i]`; the text we care about lives in
a different place per message type:

    text         → text.body
    interactive  → interactive.button_reply.id / interactive.list_reply.id
    button       → button.payload  (template quick reply)

Everything else (audio, image, reactions, ...) is UNSUPPORTED.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

TEXT = "text"
BUTTON_REPLY = "button_reply"
QUICK_REPLY = "quick_reply"
UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class InboundMessage:
    sender_id: str
    conversation_id: str
    kind: str
    text: Optional[str] = None
    from_me: bool = False


def extract_text(message: InboundMessage) -> Optional[str]:
    """Normalized text of a message, or None when it carries no text."""
    if message.kind == UNSUPPORTED:
        return None
    return message.text or None


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def parse_cloud_message(msg: Dict[str, Any], own_phone: str = "") -> Optional[InboundMessage]:
    """
    Build an InboundMessage from one webhook message dict.
    Returns None when it is not a message dict or has no sender.
    """
    if not isinstance(msg, dict):
        return None
    sender = msg.get("from")
    if not sender:
        return None

    conversation = msg.get("group_id") or sender
    msg_type = msg.get("type")

    if msg_type == "text":
        kind, text = TEXT, _as_dict(msg.get("text")).get("body")
    elif msg_type == "interactive":
        interactive = _as_dict(msg.get("interactive"))
        reply = _as_dict(interactive.get("button_reply") or interactive.get("list_reply"))
        kind, text = BUTTON_REPLY, reply.get("id")
    elif msg_type == "button":
        kind, text = QUICK_REPLY, _as_dict(msg.get("button")).get("payload")
    else:
        kind, text = UNSUPPORTED, None

    return InboundMessage(
        sender_id=str(sender),
        conversation_id=str(conversation),
        kind=kind,
        text=text if isinstance(text, str) else None,
        from_me=bool(own_phone) and str(sender) == own_phone,
    )
