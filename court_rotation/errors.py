# court_rotation/errors.py
from __future__ import annotations
from typing import Optional


class RotationError(ValueError):
    """Base class for rejected rotation mutations."""


class InvalidSegment(RotationError):
    def __init__(self, message: str, segment=None):
        super().__init__(message)
        self.segment = segment


class OverlapConflict(RotationError):
    def __init__(self, message: str, segment=None, existing=None, player_id: Optional[str] = None):
        super().__init__(message)
        self.segment = segment
        self.existing = existing
        self.player_id = player_id


class UnknownPlayerReference(RotationError):
    def __init__(self, player_id: str, message: Optional[str] = None):
        super().__init__(message or f"Unknown player reference: {player_id}")
        self.player_id = player_id
