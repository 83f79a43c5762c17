#!/usr/bin/env python3
"""
Tests for the .stalk lookup strategies.
"""

import json

import pytest
import requests

from listbot_whatsapp_service.gateway_app.config import ConfigError
from listbot_whatsapp_service.gateway_app.services import stalk_lookup
from listbot_whatsapp_service.gateway_app.services.stalk_lookup import (
    NetworkLookup,
    Profile,
    ProfileNotFound,
    StalkLookupError,
    build_lookup,
    mock_lookup,
    mock_seed,
)


class FakeResponse:
    """Streams `data` as JSON, or `raw` bytes as given, one chunk at a time."""

    def __init__(self, data=None, raw=None, chunks=1):
        payload = raw if raw is not None else json.dumps(data).encode("utf-8")
        size = max(1, -(-len(payload) // chunks))
        self._chunks = [payload[i:i + size] for i in range(0, len(payload), size)]

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def iter_content(self, chunk_size=1):
        yield from self._chunks


# ---------- mock ----------

def test_mock_is_deterministic():
    assert mock_lookup("12345678", "2001") == mock_lookup("12345678", "2001")


def test_mock_seed_collides_every_thousand_ids():
    # Expected: only userId mod 1000 feeds the generator.
    assert mock_seed("1234") == mock_seed("2234") == 234
    assert mock_lookup("1234", "1") == mock_lookup("2234", "1")


def test_mock_ignores_zone():
    assert mock_lookup("555", "1") == mock_lookup("555", "9999")


def test_mock_profile_fields_in_range():
    for user_id in ["0", "7", "999", "123456789"]:
        profile = mock_lookup(user_id, "1")
        assert profile.nickname in stalk_lookup.MOCK_USERNAMES
        assert profile.rank in stalk_lookup.MOCK_RANKS
        assert profile.hero in stalk_lookup.MOCK_HEROES
        assert 30 <= profile.level <= 100
        assert 45.0 <= profile.win_rate < 65.0
        assert profile.matches >= 200


def test_mock_non_numeric_id_does_not_fail():
    assert mock_seed("abc") == 0
    assert mock_lookup("abc", "1") == mock_lookup("0", "1")


# ---------- network ----------

def test_network_returns_nickname(monkeypatch):
    calls = []

    def fake_post(url, data=None, timeout=None, stream=False):
        calls.append({"url": url, "data": data, "timeout": timeout, "stream": stream})
        return FakeResponse({"confirmationFields": {"username": "KagChamp"}})

    monkeypatch.setattr(stalk_lookup.requests, "post", fake_post)

    profile = NetworkLookup(timeout=10)("12345678", "2001")

    assert profile == Profile(nickname="KagChamp")
    sent = calls[0]
    assert sent["url"] == stalk_lookup.CODASHOP_URL
    assert sent["timeout"] == 10
    assert sent["stream"] is True
    assert sent["data"]["userId"] == "12345678"
    assert sent["data"]["zoneId"] == "2001"
    assert sent["data"]["voucherPricePointId"] == "240631"
    assert sent["data"]["voucherTypeName"] == "MOBILE_LEGENDS"
    assert sent["data"]["paymentChannelId"] == "302"
    assert sent["data"]["checkoutId"].isdigit()
    assert sent["data"]["iapRefId"] == ""


def test_network_without_username_is_not_found(monkeypatch):
    monkeypatch.setattr(
        stalk_lookup.requests, "post",
        lambda *a, **kw: FakeResponse({"success": False, "confirmationFields": {}}),
    )
    with pytest.raises(ProfileNotFound):
        NetworkLookup()("1", "1")


def test_network_non_object_body_is_not_found(monkeypatch):
    monkeypatch.setattr(stalk_lookup.requests, "post", lambda *a, **kw: FakeResponse([1, 2]))
    with pytest.raises(ProfileNotFound):
        NetworkLookup()("1", "1")


def test_network_timeout_is_lookup_error(monkeypatch):
    def fake_post(*a, **kw):
        raise requests.Timeout("took too long")

    monkeypatch.setattr(stalk_lookup.requests, "post", fake_post)
    with pytest.raises(StalkLookupError) as exc:
        NetworkLookup()("1", "1")
    assert not isinstance(exc.value, ProfileNotFound)


def test_network_invalid_json_is_lookup_error(monkeypatch):
    monkeypatch.setattr(
        stalk_lookup.requests, "post",
        lambda *a, **kw: FakeResponse(raw=b"<html>Service Unavailable</html>"),
    )
    with pytest.raises(StalkLookupError):
        NetworkLookup()("1", "1")


def test_network_slow_body_hits_total_deadline(monkeypatch):
    # Each chunk arrives within the per-read timeout, but the whole
    # body takes longer than the 10s budget.
    ticks = iter([0.0, 4.0, 8.0, 12.0, 16.0, 20.0])
    body = {"confirmationFields": {"username": "KagChamp"}}
    monkeypatch.setattr(
        stalk_lookup.requests, "post", lambda *a, **kw: FakeResponse(body, chunks=5)
    )

    lookup = NetworkLookup(timeout=10, clock=lambda: next(ticks))
    with pytest.raises(StalkLookupError) as exc:
        lookup("1", "1")
    assert not isinstance(exc.value, ProfileNotFound)


def test_network_multi_chunk_body_within_deadline(monkeypatch):
    body = {"confirmationFields": {"username": "KagChamp"}}
    monkeypatch.setattr(
        stalk_lookup.requests, "post", lambda *a, **kw: FakeResponse(body, chunks=4)
    )

    assert NetworkLookup(timeout=10, clock=lambda: 0.0)("1", "1").nickname == "KagChamp"


# ---------- selection ----------

def test_build_lookup_by_name():
    assert build_lookup("mock") is mock_lookup
    assert build_lookup(" Mock ") is mock_lookup
    network = build_lookup("network", timeout=3)
    assert isinstance(network, NetworkLookup)
    assert network.timeout == 3


def test_build_lookup_unknown_name():
    with pytest.raises(ConfigError):
        build_lookup("carrier-pigeon")
