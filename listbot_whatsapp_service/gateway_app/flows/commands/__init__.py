# listbot_whatsapp_service/gateway_app/flows/commands/__init__.py

from .inbound import InboundMessage, extract_text, parse_cloud_message
from .message_handler import handle_inbound_message
from .pending import PendingReplyTracker
from .router import CommandRouter

__all__ = [
    'CommandRouter',
    'PendingReplyTracker',
    'InboundMessage',
    'extract_text',
    'parse_cloud_message',       # Webhook dict → InboundMessage
    'handle_inbound_message',    # Serialized, never raises
]
