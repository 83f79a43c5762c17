"""
Configuration for the list bot, read from the environment (and .env).
"""

import os

from dotenv import load_dotenv

load_dotenv()


class ConfigError(RuntimeError):
    """Invalid startup configuration. Never retried."""


class Config:
    # WhatsApp Cloud API
    WHATSAPP_TOKEN = os.getenv("WHATSAPP_TOKEN", "")
    PHONE_NUMBER_ID = os.getenv("PHONE_NUMBER_ID", "")
    VERIFY_TOKEN = os.getenv("VERIFY_TOKEN", "")
    PORT = int(os.getenv("PORT", "10000"))
    # Our own number; messages from it are ignored
    BOT_PHONE_NUMBER = os.getenv("BOT_PHONE_NUMBER", "")

    # Command routing
    COMMAND_PREFIX = os.getenv("COMMAND_PREFIX", ".")
    COMMANDS_FILE = os.getenv("COMMANDS_FILE", "commands.json")

    # Only this conversation is served when set (e.g. "1203...@g.us").
    # Empty means every conversation.
    TARGET_CONVERSATION = os.getenv("TARGET_CONVERSATION", "")

    # .stalk lookup: "network" (real endpoint) or "mock" (deterministic demo data)
    LOOKUP_STRATEGY = os.getenv("LOOKUP_STRATEGY", "network")
    STALK_TIMEOUT = float(os.getenv("STALK_TIMEOUT", "10"))

    # Startup retry; 0 attempts = forever
    STARTUP_RETRY_DELAY = float(os.getenv("STARTUP_RETRY_DELAY", "5"))
    STARTUP_MAX_ATTEMPTS = int(os.getenv("STARTUP_MAX_ATTEMPTS", "0"))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

