"""Error taxonomy shared by the engine, the history store and the export."""

from __future__ import annotations

from typing import List, Optional


class CompoundCalcError(Exception):
    """Base class for every error raised by this package."""


class InvalidParameterError(CompoundCalcError, ValueError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


class PersistenceError(CompoundCalcError):
    """History store read or write failed."""


class ExportError(CompoundCalcError):
    """Building or delivering the export artifact failed."""


class EnvironmentUnavailableError(CompoundCalcError):
    def __init__(self, reason: Optional[str] = None):
        super().__init__(reason or "history backend is not available")
        self.reason = reason
