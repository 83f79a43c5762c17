"""
WhatsApp simulator for the list bot, in the terminal.
Node 1 = input()   (you type)
Node 2 = logic     (the same router the webhook uses)
Node 3 = output    (printed on screen)

Uses the mock .stalk lookup unless LOOKUP_STRATEGY says otherwise.
"""

import os

os.environ.setdefault("LOOKUP_STRATEGY", "mock")

from listbot_whatsapp_service.gateway_app.config import Config
from listbot_whatsapp_service.gateway_app.flows.commands import (
    CommandRouter,
    InboundMessage,
    PendingReplyTracker,
    handle_inbound_message,
)
from listbot_whatsapp_service.gateway_app.flows.commands import outgoing as outgoing_mod
from listbot_whatsapp_service.gateway_app.flows.commands.inbound import TEXT
from listbot_whatsapp_service.gateway_app.services.command_store import CommandStore
from listbot_whatsapp_service.gateway_app.services.stalk_lookup import build_lookup


def send_whatsapp_cli(to: str, body: str) -> None:
    print(f"\nBOT → {to}: {body}\n")


# Patch SEND_IMPL (the implementation), not the send_whatsapp wrapper.
outgoing_mod.SEND_IMPL = send_whatsapp_cli


def main() -> None:
    fake_phone = "56900000000"

    store = CommandStore(Config.COMMANDS_FILE)
    store.load()
    router = CommandRouter(
        store=store,
        pending=PendingReplyTracker(),
        lookup=build_lookup(Config.LOOKUP_STRATEGY, timeout=Config.STALK_TIMEOUT),
        prefix=Config.COMMAND_PREFIX,
    )

    print("List bot simulator (CLI)")
    print(f"Type commands like {Config.COMMAND_PREFIX}help. 'exit' to quit.\n")

    while True:
        text = input("YOU → ").strip()
        if text.lower() in {"exit", "quit", "q"}:
            print("Bye.")
            break
        message = InboundMessage(
            sender_id=fake_phone,
            conversation_id=fake_phone,
            kind=TEXT,
            text=text,
        )
        if not handle_inbound_message(router, message):
            print("(ignored)")


if __name__ == "__main__":
    main()
