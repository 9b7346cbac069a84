"""Textual UI for swimlane."""

from swimlane.ui.app import SwimlaneApp
from swimlane.ui.board import BoardScreen

__all__ = [
    "BoardScreen",
    "SwimlaneApp",
]
