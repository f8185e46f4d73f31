"""
Session persistence for the last compared pair of texts.

SessionStore is a small JSON key-value file holding the old and new text
under the keys "oldCode" and "newCode". DebouncedSaver sits in front of it:
callers submit (old_text, new_text) pairs as the user edits, and only the
latest pair is written once the submissions go quiet for the configured
delay.
"""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Optional, Union

from .comparison import compare_texts
from .config import DiffConfig
from .errors import StorageError
from .models import ComparisonResult

logger = logging.getLogger(__name__)

OLD_KEY = "oldCode"
NEW_KEY = "newCode"


class SessionStore:
    """Persist the old/new text pair as JSON."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    @classmethod
    def from_config(cls, config: Optional[DiffConfig] = None) -> "SessionStore":
        """Create a store at the path configured in DiffConfig."""
        config = config or DiffConfig()
        return cls(config.resolved_storage_path)

    def load(self) -> dict[str, Any]:
        """Load all stored values (empty dict when nothing is stored)."""
        if not self.path.exists():
            return {}

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.error(f"Error loading session from {self.path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring session file with unexpected content: {self.path}")
            return {}
        return data

    def get_pair(self) -> tuple[Optional[str], Optional[str]]:
        """Return the stored (old_text, new_text); missing values are None."""
        data = self.load()
        return data.get(OLD_KEY), data.get(NEW_KEY)

    def save_pair(self, old_text: Optional[str], new_text: Optional[str]) -> None:
        """
        Store the given texts, keeping any other keys already in the file.

        A None text leaves the stored value for that side untouched.
        """
        if old_text is None and new_text is None:
            return
        data = self.load()
        if old_text is not None:
            data[OLD_KEY] = old_text
        if new_text is not None:
            data[NEW_KEY] = new_text
        self._write(data)

    def clear(self) -> None:
        """Remove both texts from the store."""
        data = self.load()
        if OLD_KEY not in data and NEW_KEY not in data:
            return
        data.pop(OLD_KEY, None)
        data.pop(NEW_KEY, None)
        self._write(data)

    def _write(self, data: dict[str, Any]) -> None:
        # The session file is only ever replaced whole, never rewritten in place
        tmp_path: Optional[Path] = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_path = Path(f.name)
                json.dump(data, f, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as e:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise StorageError(f"Failed to save session to {self.path}: {e}")


class DebouncedSaver:
    """
    Write the latest submitted pair after a quiet period.

    Each submit() cancels any pending write and schedules a new one, so a
    burst of edits produces a single save of the final texts.
    """

    def __init__(self, store: SessionStore, delay: float = 0.5):
        """
        Initialize the saver.

        Args:
            store: Destination for the pair.
            delay: Seconds to wait after the last submit before saving.
        """
        self.store = store
        self.delay = delay
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._generation = 0
        self._pending: Optional[tuple[Optional[str], Optional[str]]] = None

    @classmethod
    def from_config(cls, config: Optional[DiffConfig] = None) -> "DebouncedSaver":
        """Create a saver for the configured store and delay."""
        config = config or DiffConfig()
        return cls(SessionStore.from_config(config), delay=config.autosave_delay_seconds)

    @property
    def pending(self) -> bool:
        """Check if a pair is waiting to be saved."""
        with self._lock:
            return self._pending is not None

    def submit(self, old_text: Optional[str], new_text: Optional[str]) -> None:
        """
        Schedule a save of this pair, replacing any pending one.

        A None text keeps the value from the pending pair, if any.
        """
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            if self._pending is not None:
                pending_old, pending_new = self._pending
                old_text = pending_old if old_text is None else old_text
                new_text = pending_new if new_text is None else new_text
            self._pending = (old_text, new_text)
            self._generation += 1
            self._timer = threading.Timer(self.delay, self._fire, args=(self._generation,))
            self._timer.daemon = True
            self._timer.start()

    def flush(self) -> bool:
        """Save the pending pair now.

        Returns:
            True if a pair was saved, False if nothing was pending.
        """
        with self._lock:
            pair = self._take_pending()

        if pair is None:
            return False
        self.store.save_pair(*pair)
        return True

    def cancel(self) -> None:
        """Drop the pending pair without saving it."""
        with self._lock:
            self._take_pending()

    def _take_pending(self) -> Optional[tuple[Optional[str], Optional[str]]]:
        # Caller holds the lock
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._generation += 1
        pair = self._pending
        self._pending = None
        return pair

    def _fire(self, generation: int) -> None:
        with self._lock:
            # A submit, flush or cancel got in after this timer expired
            if generation != self._generation:
                return
            pair = self._pending
            self._pending = None
            self._timer = None

        if pair is None:
            return
        try:
            self.store.save_pair(*pair)
        except StorageError as e:
            # Runs on the timer thread, nobody is left to re-raise to
            logger.error(f"Auto-save failed: {e}")


def restore_session(
    store: SessionStore,
    config: Optional[DiffConfig] = None,
) -> Optional[ComparisonResult]:
    """
    Re-run the comparison for a saved session.

    Args:
        store: Session store to read.
        config: Comparison settings; auto_compare_on_restore gates the run.

    Returns:
        ComparisonResult when both texts are stored and the old one is
        non-blank, otherwise None.

    Raises:
        MissingInputError: If the stored new text is blank.
        InputTooLargeError: If the stored texts exceed the size guard.
    """
    config = config or DiffConfig()
    if not config.auto_compare_on_restore:
        return None

    old_text, new_text = store.get_pair()
    if old_text is None or new_text is None or not old_text.strip():
        return None

    logger.debug(f"Restoring session from {store.path}")
    return compare_texts(old_text, new_text, config)
