"""Save and load game snapshots as JSON files."""

from __future__ import annotations

import json
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from gobang.errors import PersistenceFailure

from .snapshot import Snapshot

logger = logging.getLogger(__name__)


@dataclass
class GameSummary:
    id: str
    name: str
    mode: str
    difficulty: Optional[str]
    status: str
    created_at: str
    updated_at: str
    total_moves: int


class GameRecordStore:
    """One JSON file per saved game inside `directory`."""

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def _path(self, game_id: str) -> Path:
        return self.directory / f"{game_id}.json"

    def _read(self, path: Path) -> dict:
        with open(path, encoding="utf-8") as f:
            return json.load(f)

    def save(self, name: str, snapshot: Snapshot) -> str:
        """Write a new record and return its id."""
        game_id = uuid.uuid4().hex[:12]
        now = datetime.now().isoformat()
        record = {
            "id": game_id,
            "name": name,
            "created_at": now,
            "updated_at": now,
            "total_moves": len(snapshot.moves),
            **snapshot.to_dict(),
        }
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp = self._path(game_id).with_suffix(".tmp")
            tmp.write_text(json.dumps(record, indent=2), encoding="utf-8")
            tmp.replace(self._path(game_id))
        except OSError as exc:
            raise PersistenceFailure(f"Could not save game '{name}': {exc}") from exc
        logger.info("Saved game %s (%s, %d moves)", game_id, name, len(snapshot.moves))
        return game_id

    def list(self) -> list[GameSummary]:
        """Summaries of all saved games, most recently updated first."""
        if not self.directory.exists():
            return []
        summaries: list[GameSummary] = []
        try:
            paths = sorted(self.directory.glob("*.json"))
        except OSError as exc:
            raise PersistenceFailure(f"Could not list saved games: {exc}") from exc
        for path in paths:
            try:
                data = self._read(path)
                summaries.append(
                    GameSummary(
                        id=data["id"],
                        name=data["name"],
                        mode=data["mode"],
                        difficulty=data.get("difficulty"),
                        status=data["status"],
                        created_at=data["created_at"],
                        updated_at=data["updated_at"],
                        total_moves=data["total_moves"],
                    )
                )
            except (OSError, ValueError, KeyError, TypeError):
                logger.warning("Skipping unreadable save file %s", path.name)
        summaries.sort(key=lambda s: s.updated_at, reverse=True)
        return summaries

    def load(self, game_id: str) -> Snapshot:
        try:
            return Snapshot.from_dict(self._read(self._path(game_id)))
        except FileNotFoundError as exc:
            raise PersistenceFailure(f"No saved game with id {game_id}") from exc
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as exc:
            raise PersistenceFailure(f"Could not load game {game_id}: {exc}") from exc

    def delete(self, game_id: str) -> None:
        try:
            self._path(game_id).unlink()
        except FileNotFoundError as exc:
            raise PersistenceFailure(f"No saved game with id {game_id}") from exc
        except OSError as exc:
            raise PersistenceFailure(f"Could not delete game {game_id}: {exc}") from exc
        logger.info("Deleted saved game %s", game_id)
