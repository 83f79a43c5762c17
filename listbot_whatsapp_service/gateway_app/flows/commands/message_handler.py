"""
Single entry point for inbound messages.

Messages are routed one at a time, even when the web server hands them
over from several threads: the CommandStore rewrites its file on every
change and the pending-reply state is per sender.
"""

import logging
import threading

from .inbound import InboundMessage
from .router import CommandRouter

logger = logging.getLogger(__name__)

_HANDLE_LOCK = threading.Lock()


def handle_inbound_message(router: CommandRouter, message: InboundMessage) -> bool:
    """
    Route a message, never raising. Errors are logged and the message is dropped.
    """
    with _HANDLE_LOCK:
        try:
            return router.handle(message)
        except Exception:
            logger.exception(
                "⚠️ Error handling message from %s in %s",
                message.sender_id,
                message.conversation_id,
            )
            return False
