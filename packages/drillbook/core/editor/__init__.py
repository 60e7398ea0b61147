"""Undoable editing on top of the formation store."""

from drillbook.core.editor.commands import (
    AddAudioRegionCommand,
    ChangeSongCommand,
    EditorCommand,
    MoveAudioRegionCommand,
    MoveFormationCommand,
    MoveMemberCommand,
    PlaceMemberCommand,
    RemoveAudioRegionCommand,
    RemoveMemberCommand,
    ResizeAudioRegionCommand,
    ResizeFormationCommand,
)
from drillbook.core.editor.history import CommandHistory

__all__ = [
    "AddAudioRegionCommand",
    "ChangeSongCommand",
    "CommandHistory",
    "EditorCommand",
    "MoveAudioRegionCommand",
    "MoveFormationCommand",
    "MoveMemberCommand",
    "PlaceMemberCommand",
    "RemoveAudioRegionCommand",
    "RemoveMemberCommand",
    "ResizeAudioRegionCommand",
    "ResizeFormationCommand",
]
