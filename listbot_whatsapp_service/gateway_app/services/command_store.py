# gateway_app/services/command_store.py
"""
Custom command persistence.

The whole mapping lives in memory and is rewritten to a flat JSON file
(UTF-8, 2-space indent) on every mutation:

    {
      "hi": "hello",
      "rules": "1. be nice\n2. no spam"
    }

Keys never carry the command prefix. Order is insertion order.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


class CommandStore:
    def __init__(self, path: str) -> None:
        self.path = path
        self._commands: Dict[str, str] = {}

    def load(self) -> None:
        """
        Read the persisted mapping. A missing file means no commands;
        an unreadable or corrupt one is logged and treated the same way.
        """
        self._commands = {}
        if not os.path.exists(self.path):
            logger.info(f"📭 No commands file at {self.path}, starting empty")
            return

        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError):
            logger.exception("Error loading commands file %s", self.path)
            return

        if not isinstance(data, dict):
            logger.error("Commands file %s is not a JSON object, ignoring it", self.path)
            return

        commands: Dict[str, str] = {}
        for name, response in data.items():
            if not isinstance(response, str):
                logger.warning(
                    "Skipping command %r: response is %s, not text", name, type(response).__name__
                )
                continue
            commands[name] = response
        self._commands = commands
        logger.info(f"📌 Loaded {len(self._commands)} custom commands from {self.path}")

    def get(self, name: str) -> Optional[str]:
        return self._commands.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._commands

    def __len__(self) -> int:
        return len(self._commands)

    def set(self, name: str, response: str) -> None:
        updated = dict(self._commands)
        updated[name] = response
        self._save(updated)
        self._commands = updated

    def delete(self, name: str) -> bool:
        if name not in self._commands:
            return False
        updated = dict(self._commands)
        del updated[name]
        self._save(updated)
        self._commands = updated
        return True

    def list(self) -> List[str]:
        return list(self._commands)

    def _save(self, commands: Dict[str, str]) -> None:
        """
        Write `commands` to a temp file and swap it in. On failure the
        temp file is removed and the error propagates; callers only
        update memory after this returns.
        """
        tmp_path = f"{self.path}.tmp"
        try:
            with open(tmp_path, "w", encoding="utf-8") as fh:
                json.dump(commands, fh, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
