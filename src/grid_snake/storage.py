"""High-score persistence."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class HighScoreStore(Protocol):
    """A single persistent integer slot."""

    def load(self) -> int: ...

    def save(self, score: int) -> None: ...


class MemoryHighScoreStore:
    """In-process store; nothing survives the interpreter."""

    def __init__(self, initial: int = 0) -> None:
        self.value = initial
        self.saves = 0

    def load(self) -> int:
        return self.value

    def save(self, score: int) -> None:
        self.value = score
        self.saves += 1


class FileHighScoreStore:
    """Stores the high score as plain text in a single file.

    Missing, unreadable, or corrupt files load as 0. Failed writes are logged
    and skipped.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> int:
        try:
            raw = self.path.read_text().strip()
        except FileNotFoundError:
            return 0
        except OSError as exc:
            logger.warning("Could not read high score from %s: %s", self.path, exc)
            return 0
        try:
            score = int(raw or "0")
        except ValueError:
            logger.warning("Ignoring corrupt high score %r in %s.", raw, self.path)
            return 0
        return max(score, 0)

    def save(self, score: int) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(str(int(score)))
        except OSError as exc:
            logger.warning("Could not save high score to %s: %s", self.path, exc)
            return
        logger.info("High score %d saved to %s", score, self.path)
