"""High score persistence.

Loading is forgiving: anything that is not a positive finite number counts
as "no high score yet". Saving from the JSON store happens on a single
background thread so a slow disk never stalls a frame.
"""

import json
import logging
import math
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Any, List, Optional

logger = logging.getLogger(__name__)


def parse_high_score(value: Any) -> int:
    """Coerce a stored value to a high score.

    Fractional values are truncated toward zero (3.5 -> 3). Invalid,
    non-finite or non-positive values give 0.
    """
    if isinstance(value, bool) or value is None:
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(number) or number <= 0:
        return 0
    return int(number)


class HighScoreStore:
    """Persistence interface for the high score."""

    def load_high_score(self) -> int:
        raise NotImplementedError

    def save_high_score(self, value: int) -> None:
        raise NotImplementedError

    def close(self) -> None:
        pass


class MemoryHighScoreStore(HighScoreStore):
    """Keeps the high score in memory. Records every save for inspection."""

    def __init__(self, initial: Any = 0):
        self.value = initial
        self.saves: List[int] = []

    def load_high_score(self) -> int:
        return parse_high_score(self.value)

    def save_high_score(self, value: int) -> None:
        self.value = value
        self.saves.append(value)


class JsonHighScoreStore(HighScoreStore):
    """Stores the high score in a small JSON file.

    Usage:
        store = JsonHighScoreStore("data/high_score.json")
        best = store.load_high_score()
        store.save_high_score(12)   # returns immediately
        store.close()               # waits for pending writes
    """

    KEY = "high_score"

    def __init__(self, path: str = "data/high_score.json"):
        self.path = Path(path)
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="high-score")
        self._pending: Optional[Future] = None

    def load_high_score(self) -> int:
        if not self.path.exists():
            return 0
        try:
            with open(self.path) as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable high score file %s: %s", self.path, e)
            return 0

        raw = data.get(self.KEY) if isinstance(data, dict) else data
        value = parse_high_score(raw)
        if value == 0 and raw not in (0, None):
            logger.warning("Ignoring invalid stored high score %r", raw)
        return value

    def save_high_score(self, value: int) -> None:
        """Queue a write. Failures are logged, never raised."""
        self._pending = self._executor.submit(self._write, value)
        self._pending.add_done_callback(self._report_failure)

    def _write(self, value: int) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump({self.KEY: value}, f)

    @staticmethod
    def _report_failure(future: Future) -> None:
        error = future.exception()
        if error is not None:
            logger.warning("Could not save high score: %s", error)

    def flush(self) -> None:
        """Block until queued writes have finished."""
        if self._pending is not None:
            self._pending.exception()

    def close(self) -> None:
        self._executor.shutdown(wait=True)
