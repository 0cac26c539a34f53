"""Availability check for the history backend, run once before the API is mounted."""

from __future__ import annotations

import logging
import os
import sqlite3
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from compound_calc.errors import EnvironmentUnavailableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EnvironmentStatus:
    enabled: bool
    reason: Optional[str] = None


def check_environment(db_path: Union[str, Path]) -> EnvironmentStatus:
    """Return a disabled status instead of raising when history cannot be kept."""
    path = Path(db_path)
    directory = path.parent

    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        return _disabled(f"cannot create history directory {directory}: {exc}")

    if not os.access(directory, os.W_OK):
        return _disabled(f"history directory {directory} is not writable")

    try:
        conn = sqlite3.connect(path)
        try:
            conn.execute("select 1").fetchone()
        finally:
            conn.close()
    except sqlite3.Error as exc:
        return _disabled(f"cannot open history database {path}: {exc}")

    return EnvironmentStatus(enabled=True)


def require_environment(status: EnvironmentStatus) -> None:
    if not status.enabled:
        raise EnvironmentUnavailableError(status.reason)


def _disabled(reason: str) -> EnvironmentStatus:
    logger.warning("History disabled: %s", reason)
    return EnvironmentStatus(enabled=False, reason=reason)
