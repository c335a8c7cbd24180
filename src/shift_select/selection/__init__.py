"""Selection model, mouse-selection tracking, and session state."""

from .model import KeyboardSelection, MouseSelectionSnapshot, SelectionModel
from .session import SessionState
from .tracker import MouseSelectionTracker, PrimaryReader

__all__ = [
    "KeyboardSelection",
    "MouseSelectionSnapshot",
    "MouseSelectionTracker",
    "PrimaryReader",
    "SelectionModel",
    "SessionState",
]
