"""
WhatsApp Cloud API webhook for the list bot.
"""

from flask import Blueprint, current_app, jsonify, request
import logging

from listbot_whatsapp_service.gateway_app.config import Config
from listbot_whatsapp_service.gateway_app.flows.commands import (
    handle_inbound_message,
    parse_cloud_message,
)

bp = Blueprint("whatsapp_webhook", __name__)
logger = logging.getLogger(__name__)


@bp.get("/webhook")
def verify():
    """
    Webhook verification handshake (WhatsApp Cloud API).
    """
    mode = request.args.get("hub.mode")
    token = request.args.get("hub.verify_token")
    challenge = request.args.get("hub.challenge")

    if mode == "subscribe" and token == Config.VERIFY_TOKEN:
        logger.info("Webhook verified")
        return challenge, 200

    logger.warning("Webhook verification failed")
    return "Forbidden", 403


@bp.post("/webhook")
def inbound():
    """
    Inbound events. Status updates (sent/delivered/read) carry no
    `messages` and are acknowledged without routing.
    Always 200 so WhatsApp does not redeliver.
    """
    payload = request.get_json(silent=True) or {}

    try:
        entry = payload["entry"][0]
        change = entry["changes"][0]
        value = change["value"]
        messages = value.get("messages", [])

        if not messages:
            return jsonify(ok=True), 200

        message = parse_cloud_message(messages[0], own_phone=Config.BOT_PHONE_NUMBER)
        if message is None:
            logger.warning("Message without sender, skipping")
            return jsonify(ok=True), 200

        logger.info(f"📥 {message.kind} from {message.sender_id} in {message.conversation_id}")

        router = current_app.extensions["command_router"]
        handle_inbound_message(router, message)

        return jsonify(ok=True), 200

    except Exception as e:
        logger.exception("Error processing webhook")
        return jsonify(ok=False, error=str(e)), 200
