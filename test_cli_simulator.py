#!/usr/bin/env python3
"""
Tests for the terminal simulator.
"""

from listbot_whatsapp_service.gateway_app.config import Config
from listbot_whatsapp_service.gateway_app.flows.commands import outgoing as outgoing_mod


def test_simulator_routes_until_exit_word(tmp_path, monkeypatch, capsys):
    # Recorded before import so the simulator's SEND_IMPL is undone afterwards
    monkeypatch.setattr(outgoing_mod, "SEND_IMPL", outgoing_mod.SEND_IMPL)
    import listbot_cli_simulator

    monkeypatch.setattr(Config, "COMMANDS_FILE", str(tmp_path / "commands.json"))
    monkeypatch.setattr(Config, "LOOKUP_STRATEGY", "mock")
    inputs = iter([".ping", "hello", "salir", "quit", ".ping"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(inputs))

    listbot_cli_simulator.main()

    out = capsys.readouterr().out
    assert out.count("pong 🏓") == 1
    assert out.count("(ignored)") == 2, "'salir' is ordinary text now"
    assert "Bye." in out
    assert next(inputs) == ".ping", "loop stopped at 'quit'"
