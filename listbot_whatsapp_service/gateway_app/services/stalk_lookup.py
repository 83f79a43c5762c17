"""
Account lookup behind the .stalk command.

Two interchangeable strategies, chosen by name (Config.LOOKUP_STRATEGY):

- "network": asks the Codashop payment-initiation endpoint to validate a
  Mobile Legends account; the nickname comes back in confirmationFields.
- "mock": derives a fake but stable profile from the user id. Ids that
  share the same value mod 1000 get the same profile.

Usage:
    lookup = build_lookup("mock")
    profile = lookup("12345678", "2001")
    # → Profile(nickname="SilentSniper", level=..., rank="Mythic", ...)
"""

from __future__ import annotations

import json
import logging
import re
import time
from dataclasses import dataclass
from typing import Callable, Optional

import requests

from listbot_whatsapp_service.gateway_app.config import ConfigError

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────
# Types
# ─────────────────────────────────────────────

@dataclass(frozen=True)
class Profile:
    nickname: str
    level: Optional[int] = None
    rank: Optional[str] = None
    hero: Optional[str] = None
    win_rate: Optional[float] = None
    matches: Optional[int] = None


class StalkLookupError(Exception):
    """The lookup could not be completed (timeout, HTTP error, bad body)."""


class ProfileNotFound(StalkLookupError):
    """The upstream answered but did not recognise the user id / zone."""


LookupFn = Callable[[str, str], Profile]


# ─────────────────────────────────────────────
# Network strategy
# ─────────────────────────────────────────────

CODASHOP_URL = "https://order.codashop.com/id/initPayment.action"
VOUCHER_PRICE_POINT_ID = "240631"
VOUCHER_TYPE_NAME = "MOBILE_LEGENDS"
PAYMENT_CHANNEL_ID = "302"


class NetworkLookup:
    """
    `timeout` bounds the whole call. requests only applies it per connect
    and per read, so the body is streamed and checked against a deadline.
    """

    def __init__(
        self,
        url: str = CODASHOP_URL,
        timeout: float = 10.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._clock = clock

    def __call__(self, user_id: str, zone_id: str) -> Profile:
        form = {
            "voucherPricePointId": VOUCHER_PRICE_POINT_ID,
            "voucherTypeName": VOUCHER_TYPE_NAME,
            "userId": user_id,
            "zoneId": zone_id,
            "paymentChannelId": PAYMENT_CHANNEL_ID,
            "checkoutId": str(int(time.time() * 1000)),
            "iapRefId": "",
        }

        deadline = self._clock() + self.timeout
        try:
            with requests.post(self.url, data=form, timeout=self.timeout, stream=True) as r:
                body = bytearray()
                for chunk in r.iter_content(chunk_size=4096):
                    if self._clock() > deadline:
                        raise StalkLookupError(f"lookup exceeded {self.timeout}s")
                    body.extend(chunk)
            data = json.loads(body.decode("utf-8"))
        except (requests.RequestException, ValueError) as e:
            raise StalkLookupError(f"lookup request failed: {e}") from e

        fields = data.get("confirmationFields") if isinstance(data, dict) else None
        username = fields.get("username") if isinstance(fields, dict) else None
        if not username:
            raise ProfileNotFound(f"no account for {user_id} ({zone_id})")

        logger.info(f"🔍 Codashop lookup {user_id} ({zone_id}) → {username}")

        return Profile(nickname=str(username))


# ─────────────────────────────────────────────
# Deterministic mock strategy
# ─────────────────────────────────────────────

MOCK_USERNAMES = [
    "ShadowBlade", "NightFury", "LunoxMain", "GusionGod", "TankOrDie",
    "MysticLing", "FannyFlyer", "KagChamp", "SilentSniper", "ChouKicks",
]
MOCK_RANKS = [
    "Warrior", "Elite", "Master", "Grandmaster",
    "Epic", "Legend", "Mythic", "Mythical Glory",
]
MOCK_HEROES = [
    "Ling", "Fanny", "Gusion", "Lancelot", "Chou", "Tigreal",
    "Kagura", "Granger", "Beatrix", "Khufra", "Estes", "Valentina",
]


def mock_seed(user_id: str) -> int:
    digits = re.sub(r"\D", "", user_id or "")
    return int(digits or "0") % 1000


def mock_lookup(user_id: str, zone_id: str) -> Profile:
    seed = mock_seed(user_id)
    return Profile(
        nickname=MOCK_USERNAMES[seed % len(MOCK_USERNAMES)],
        level=30 + seed % 71,
        rank=MOCK_RANKS[seed % len(MOCK_RANKS)],
        hero=MOCK_HEROES[(seed // 7) % len(MOCK_HEROES)],
        win_rate=45.0 + (seed % 200) / 10,
        matches=200 + seed * 7,
    )


def build_lookup(strategy: str, timeout: float = 10.0) -> LookupFn:
    name = (strategy or "").strip().lower()
    if name == "network":
        return NetworkLookup(timeout=timeout)
    if name == "mock":
        return mock_lookup
    raise ConfigError(f"Unknown LOOKUP_STRATEGY: {strategy!r} (use 'network' or 'mock')")
