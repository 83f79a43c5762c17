"""
Command router for the list bot.

Order for a message that starts with the prefix:
  1) sender owes a reply for `.addlist <name>` → store the message as the response
  2) built-in verbs (ping, addlist, commands, dellist, stalk, help)
  3) custom commands from the CommandStore, matched on the full text after the prefix
Anything else is ignored without a reply.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Dict, Optional, Tuple

from listbot_whatsapp_service.gateway_app.services.command_store import CommandStore
from listbot_whatsapp_service.gateway_app.services.stalk_lookup import (
    LookupFn,
    ProfileNotFound,
)

from . import ui
from .inbound import InboundMessage, extract_text
from .outgoing import send_whatsapp
from .pending import PendingReplyTracker

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def split_command(body: str) -> Tuple[str, str]:
    """
    "AddList hi || hello" → ("addlist", "hi || hello")
    Splits on the first run of whitespace; the verb is lower-cased.
    """
    parts = _WHITESPACE.split(body, maxsplit=1)
    verb = parts[0].lower()
    args = parts[1] if len(parts) > 1 else ""
    return verb, args


class CommandRouter:
    def __init__(
        self,
        store: CommandStore,
        pending: PendingReplyTracker,
        lookup: LookupFn,
        send: Callable[[str, str], None] = send_whatsapp,
        prefix: str = ".",
        conversation_scope: Optional[str] = None,
    ) -> None:
        if not prefix:
            raise ValueError("prefix must not be empty")
        self.store = store
        self.pending = pending
        self.lookup = lookup
        self.send = send
        self.prefix = prefix
        self.conversation_scope = conversation_scope or None

        self._builtins: Dict[str, Callable[[InboundMessage, str], None]] = {
            "ping": self._cmd_ping,
            "addlist": self._cmd_addlist,
            "commands": self._cmd_commands,
            "dellist": self._cmd_dellist,
            "stalk": self._cmd_stalk,
            "help": self._cmd_help,
        }

    def handle(self, message: InboundMessage) -> bool:
        """
        Route one inbound message. Returns False when the message is not
        for the bot (own message, other conversation, no text, no prefix).
        """
        if message.from_me:
            return False
        if self.conversation_scope and message.conversation_id != self.conversation_scope:
            return False

        text = extract_text(message)
        if not text or not text.startswith(self.prefix):
            return False

        sender = message.sender_id

        waiting_for = self.pending.consume_if_waiting(sender)
        if waiting_for is not None:
            self.store.set(waiting_for, text)
            logger.info(f"✅ CMD | {sender} | stored .{waiting_for} from follow-up message")
            self._reply(message, ui.text_addlist_added(self.prefix, waiting_for))
            return True

        body = text[len(self.prefix):]
        verb, args = split_command(body)

        handler = self._builtins.get(verb)
        if handler is not None:
            logger.info(f"🤖 CMD | {sender} | {verb} '{args[:30]}'")
            handler(message, args)
            return True

        response = self.store.get(body)
        if response is not None:
            logger.info(f"📌 CMD | {sender} | custom '{body[:30]}'")
            self._reply(message, response)
        return True

    def _reply(self, message: InboundMessage, body: str) -> None:
        self.send(message.conversation_id, body)

    def _command_name(self, raw: str) -> str:
        """Drops leading prefixes: ".hi" and "hi" name the same command."""
        name = raw.strip()
        while name.startswith(self.prefix):
            name = name[len(self.prefix):].lstrip()
        return name

    # ---------- built-ins ----------

    def _cmd_ping(self, message: InboundMessage, args: str) -> None:
        self._reply(message, ui.text_pong())

    def _cmd_addlist(self, message: InboundMessage, args: str) -> None:
        raw = args.strip()
        if not raw:
            self._reply(message, ui.text_addlist_usage(self.prefix))
            return

        if "||" in raw:
            name, _, response = raw.partition("||")
            name, response = self._command_name(name), response.strip()
            if not name or not response:
                self._reply(message, ui.text_addlist_format(self.prefix))
                return
            self.store.set(name, response)
            self._reply(message, ui.text_addlist_added_inline(self.prefix, name))
            return

        name = self._command_name(raw)
        if not name:
            self._reply(message, ui.text_addlist_usage(self.prefix))
            return

        if name in self.store:
            self._reply(message, ui.text_addlist_exists(self.prefix, name))
            return

        self.pending.begin_waiting(message.sender_id, name)
        self._reply(message, ui.text_addlist_waiting(self.prefix, name))

    def _cmd_commands(self, message: InboundMessage, args: str) -> None:
        self._reply(message, ui.text_command_list(self.prefix, self.store.list()))

    def _cmd_dellist(self, message: InboundMessage, args: str) -> None:
        name = self._command_name(args)
        if not name:
            self._reply(message, ui.text_dellist_usage(self.prefix))
            return
        if not self.store.delete(name):
            self._reply(message, ui.text_dellist_not_found(self.prefix, name))
            return
        self._reply(message, ui.text_dellist_deleted(self.prefix, name))

    def _cmd_stalk(self, message: InboundMessage, args: str) -> None:
        tokens = args.split()
        if len(tokens) < 2:
            self._reply(message, ui.text_stalk_usage(self.prefix))
            return

        user_id, zone_id = tokens[0], tokens[1]
        try:
            profile = self.lookup(user_id, zone_id)
        except ProfileNotFound:
            logger.info(f"🔍 stalk {user_id} ({zone_id}) → not found")
            self._reply(message, ui.text_stalk_invalid())
            return
        except Exception:
            logger.exception("Stalk lookup error for %s (%s)", user_id, zone_id)
            self._reply(message, ui.text_stalk_failed())
            return

        self._reply(message, ui.text_stalk_profile(user_id, zone_id, profile))

    def _cmd_help(self, message: InboundMessage, args: str) -> None:
        self._reply(message, ui.text_help(self.prefix))
