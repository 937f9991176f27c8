"""
Primitive tmux operations produced by the compiler.

Windows and panes are addressed by position (window index within the
session, pane index within the window), never by name: names are optional
and may collide.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union


def _target(session: str, window: int, pane: Optional[int] = None) -> str:
    if pane is None:
        return f"{session}:{window}"
    return f"{session}:{window}.{pane}"


def _cwd_args(root: Optional[Path]) -> List[str]:
    return ["-c", str(root)] if root is not None else []


@dataclass(frozen=True)
class CreateSession:
    """Create the detached session; tmux creates window 0 / pane 0 along with it."""

    name: str
    root: Optional[Path]
    first_window_name: Optional[str]
    first_pane_root: Optional[Path]

    def tmux_args(self, session: str) -> List[str]:
        args = ["new-session", "-d", "-s", session]
        if self.first_window_name is not None:
            args += ["-n", self.first_window_name]
        return args + _cwd_args(self.first_pane_root)


@dataclass(frozen=True)
class NewWindow:
    window: int
    name: Optional[str]
    root: Optional[Path]

    def tmux_args(self, session: str) -> List[str]:
        args = ["new-window", "-d", "-t", f"{session}:"]
        if self.name is not None:
            args += ["-n", self.name]
        return args + _cwd_args(self.root)


@dataclass(frozen=True)
class SplitPane:
    """Split the most recently created pane of ``window``, creating pane ``pane``.

    ``vertical`` is only a hint (top/bottom when true); the final geometry is
    set by the window's ApplyLayout.
    """

    window: int
    pane: int
    root: Optional[Path]
    vertical: bool = False

    def tmux_args(self, session: str) -> List[str]:
        return (
            ["split-window", "-d", "-v" if self.vertical else "-h", "-t", _target(session, self.window, self.pane - 1)]
            + _cwd_args(self.root)
        )


@dataclass(frozen=True)
class ApplyLayout:
    window: int
    layout: str

    def tmux_args(self, session: str) -> List[str]:
        return ["select-layout", "-t", _target(session, self.window), self.layout]


@dataclass(frozen=True)
class RunCommand:
    window: int
    pane: int
    command: str

    def tmux_args(self, session: str) -> List[str]:
        return ["send-keys", "-t", _target(session, self.window, self.pane), self.command, "Enter"]


Operation = Union[CreateSession, NewWindow, SplitPane, ApplyLayout, RunCommand]
