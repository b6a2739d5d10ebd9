"""
infrastructure.wallet.state_store - Persisted wallet state on disk.

The exported wallet is an opaque string: read once before the agent is
built, overwritten once after construction succeeds.
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class FileWalletStateStore:
    """Implements WalletStatePort with a single text file."""

    def __init__(self, path: Path | str):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> str | None:
        """Return the stored wallet data, or None if absent/unreadable."""
        if not self._path.exists():
            return None
        try:
            data = self._path.read_text(encoding="utf-8")
        except OSError:
            logger.exception("Error reading wallet data from %s", self._path)
            return None
        return data or None

    def write(self, data: str) -> None:
        """Overwrite the stored wallet data."""
        if self._path.parent and not self._path.parent.exists():
            self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(data, encoding="utf-8")
        logger.info("Wallet data saved to %s", self._path)
