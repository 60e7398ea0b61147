"""Reversible editor commands, each a thin adapter over one store call."""

from drillbook.core.editor.commands.audio import (
    AddAudioRegionCommand,
    MoveAudioRegionCommand,
    RemoveAudioRegionCommand,
    ResizeAudioRegionCommand,
)
from drillbook.core.editor.commands.base import EditorCommand
from drillbook.core.editor.commands.formation import MoveFormationCommand, ResizeFormationCommand
from drillbook.core.editor.commands.member import (
    MoveMemberCommand,
    PlaceMemberCommand,
    RemoveMemberCommand,
)
from drillbook.core.editor.commands.song import ChangeSongCommand

__all__ = [
    "AddAudioRegionCommand",
    "ChangeSongCommand",
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
