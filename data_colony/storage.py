"""High score and play count persistence."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class ScoreStore(Protocol):
    def get_high_score(self) -> int: ...
    def set_high_score(self, score: int) -> bool: ...
    def get_games_played(self) -> int: ...
    def increment_games_played(self) -> None: ...
    def clear(self) -> None: ...


class MemoryScoreStore:
    """Keeps the record for the lifetime of the process."""

    def __init__(self, high_score: int = 0, games_played: int = 0) -> None:
        self._high_score = high_score
        self._games_played = games_played

    def get_high_score(self) -> int:
        return self._high_score

    def set_high_score(self, score: int) -> bool:
        """Store ``score`` only if it beats the current best. True if it did."""
        if score > self._high_score:
            self._high_score = score
            return True
        return False

    def get_games_played(self) -> int:
        return self._games_played

    def increment_games_played(self) -> None:
        self._games_played += 1

    def clear(self) -> None:
        self._high_score = 0
        self._games_played = 0


class JsonScoreStore:
    """Stores ``{"high_score": int, "games_played": int}`` in a JSON file.

    A missing or unreadable file reads as zeros. Writes go straight to disk
    and let ``OSError`` propagate.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, Any]:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable score file %s: %s", self._path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    @staticmethod
    def _as_int(value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return 0
        return int(value)

    def get_high_score(self) -> int:
        return self._as_int(self._read().get("high_score"))

    def set_high_score(self, score: int) -> bool:
        data = self._read()
        if score > self._as_int(data.get("high_score")):
            data["high_score"] = score
            self._write(data)
            return True
        return False

    def get_games_played(self) -> int:
        return self._as_int(self._read().get("games_played"))

    def increment_games_played(self) -> None:
        data = self._read()
        data["games_played"] = self._as_int(data.get("games_played")) + 1
        self._write(data)

    def clear(self) -> None:
        self._write({"high_score": 0, "games_played": 0})
