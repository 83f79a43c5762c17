# app.py
import logging
from typing import Optional

from flask import Flask

from listbot_whatsapp_service.gateway_app.config import Config, ConfigError
from listbot_whatsapp_service.gateway_app.core.utils.retry import RetryPolicy
from listbot_whatsapp_service.gateway_app.flows.commands import CommandRouter, PendingReplyTracker
from listbot_whatsapp_service.gateway_app.flows.commands import outgoing
from listbot_whatsapp_service.gateway_app.routes.webhook import bp as whatsapp_bp
from listbot_whatsapp_service.gateway_app.services.command_store import CommandStore
from listbot_whatsapp_service.gateway_app.services.stalk_lookup import build_lookup
from listbot_whatsapp_service.gateway_app.services.whatsapp_client import send_whatsapp_text

logging.basicConfig(level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger(__name__)


def build_router(config=Config) -> CommandRouter:
    store = CommandStore(config.COMMANDS_FILE)
    store.load()
    lookup = build_lookup(config.LOOKUP_STRATEGY, timeout=config.STALK_TIMEOUT)

    logger.info(
        f"🚀 Router ready: prefix='{config.COMMAND_PREFIX}' lookup={config.LOOKUP_STRATEGY} "
        f"scope={config.TARGET_CONVERSATION or 'all conversations'}"
    )
    return CommandRouter(
        store=store,
        pending=PendingReplyTracker(),
        lookup=lookup,
        send=outgoing.send_whatsapp,
        prefix=config.COMMAND_PREFIX,
        conversation_scope=config.TARGET_CONVERSATION or None,
    )


def create_app(router: Optional[CommandRouter] = None) -> Flask:
    """
    Without a router: production wiring (commands file, configured lookup,
    Graph API sender). Tests pass their own router.
    """
    if router is None:
        outgoing.SEND_IMPL = lambda to, body: send_whatsapp_text(to=to, body=body)
        router = build_router()

    app = Flask(__name__)
    app.extensions["command_router"] = router
    app.register_blueprint(whatsapp_bp)

    @app.get("/")
    def home():
        return "List bot WhatsApp gateway running", 200

    @app.get("/healthz")
    def healthz():
        return "ok", 200

    return app


def _serve() -> None:
    app = create_app()
    app.run(host="0.0.0.0", port=Config.PORT)


def main() -> None:
    policy = RetryPolicy(
        delay_seconds=Config.STARTUP_RETRY_DELAY,
        max_attempts=Config.STARTUP_MAX_ATTEMPTS or None,
        fatal=(ConfigError,),
    )
    policy.run(_serve)


if __name__ == "__main__":
    main()
