from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import MutableMapping, Optional, Sequence

from colorflood.components.color import Color
from colorflood.components.level_spec import LevelSpec
from colorflood.constants import GRID_COLS, GRID_ROWS, PLAY_PALETTE, STORAGE_KEY

logger = logging.getLogger(__name__)


class LevelStore:
    """Single-slot storage for a custom level.

    Subclasses provide the raw transport; this class owns the payload format
    and its validation. A level that loads successfully is removed from
    storage, so each saved level is played once. Payloads that fail
    validation are left in place and reported as missing.
    """

    def __init__(
        self,
        *,
        rows: int = GRID_ROWS,
        cols: int = GRID_COLS,
        palette: Sequence[Color] = PLAY_PALETTE,
    ) -> None:
        self.rows = rows
        self.cols = cols
        self.palette = tuple(palette)

    def load(self) -> Optional[LevelSpec]:
        raw = self._read()
        if raw is None:
            return None
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("Ignoring stored level with malformed JSON: %s", exc)
            return None
        try:
            level = LevelSpec.from_json_dict(payload, rows=self.rows, cols=self.cols, palette=self.palette)
        except ValueError as exc:
            logger.warning("Ignoring invalid stored level: %s", exc)
            return None
        self._discard()
        logger.debug("Loaded stored level with target %s", level.target_color.value)
        return level

    def save(self, level: LevelSpec) -> None:
        self._write(json.dumps(level.to_json_dict()))
        logger.debug("Saved level with target %s", level.target_color.value)

    def _read(self) -> Optional[str]:
        raise NotImplementedError

    def _write(self, data: str) -> None:
        raise NotImplementedError

    def _discard(self) -> None:
        raise NotImplementedError


class KeyValueLevelStore(LevelStore):
    """Keeps the level as a JSON string under one key of a string mapping."""

    def __init__(
        self,
        storage: MutableMapping[str, str] | None = None,
        *,
        key: str = STORAGE_KEY,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.storage: MutableMapping[str, str] = storage if storage is not None else {}
        self.key = key

    def _read(self) -> Optional[str]:
        return self.storage.get(self.key)

    def _write(self, data: str) -> None:
        self.storage[self.key] = data

    def _discard(self) -> None:
        self.storage.pop(self.key, None)


class JsonFileLevelStore(LevelStore):
    """Keeps the level in a JSON file."""

    def __init__(self, path: Path | str, **kwargs) -> None:
        super().__init__(**kwargs)
        self.path = Path(path)

    def _read(self) -> Optional[str]:
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Ignoring unreadable stored level at %s: %s", self.path, exc)
            return None

    def _write(self, data: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(data, encoding="utf-8")

    def _discard(self) -> None:
        self.path.unlink(missing_ok=True)
