# gateway_app/flows/commands/pending.py
"""
Senders that ran `.addlist <name>` and owe us the reply text.

In memory only: a restart drops half-finished prompts.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class PendingReplyTracker:
    def __init__(self) -> None:
        self._waiting: Dict[str, str] = {}

    def begin_waiting(self, sender: str, command_name: str) -> None:
        previous = self._waiting.get(sender)
        if previous is not None and previous != command_name:
            logger.info(f"⏳ {sender} replaced pending .{previous} with .{command_name}")
        self._waiting[sender] = command_name

    def consume_if_waiting(self, sender: str) -> Optional[str]:
        return self._waiting.pop(sender, None)

    def is_waiting(self, sender: str) -> bool:
        return sender in self._waiting

    def clear(self) -> None:
        self._waiting.clear()
