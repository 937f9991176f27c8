"""
Default resolution and validation of session definitions.

Turns a raw :class:`~precession.spec.SessionSpec` into a fully populated
:class:`ResolvedSession`: roots are inherited down the tree, layouts get
their default, and each window body becomes exactly one of
:class:`SingleCommand`, :class:`PaneList` or :class:`EmptyShell`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

from .errors import EmptySessionName, EmptyWindowList, InvalidSessionName, MutuallyExclusiveFields, UnknownLayout
from .spec import DEFAULT_LAYOUT, LAYOUTS, PaneSpec, SessionSpec, WindowSpec

logger = logging.getLogger(__name__)

# tmux parses these inside target specifiers (session:window.pane).
TARGET_SEPARATORS = (".", ":")


@dataclass(frozen=True)
class ResolvedPane:
    cmd: str
    root: Optional[Path]

    @property
    def is_empty(self) -> bool:
        return not self.cmd


@dataclass(frozen=True)
class SingleCommand:
    cmd: str


@dataclass(frozen=True)
class PaneList:
    panes: Tuple[ResolvedPane, ...]


@dataclass(frozen=True)
class EmptyShell:
    pass


WindowBody = Union[SingleCommand, PaneList, EmptyShell]


@dataclass(frozen=True)
class ResolvedWindow:
    name: Optional[str]
    root: Optional[Path]
    layout: str
    body: WindowBody

    @property
    def panes(self) -> Tuple[ResolvedPane, ...]:
        """Concrete panes of this window, in split order."""
        if isinstance(self.body, PaneList):
            return self.body.panes
        if isinstance(self.body, SingleCommand):
            return (ResolvedPane(cmd=self.body.cmd, root=self.root),)
        return (ResolvedPane(cmd="", root=self.root),)


@dataclass(frozen=True)
class ResolvedSession:
    name: str
    root: Optional[Path]
    windows: Tuple[ResolvedWindow, ...]


def _inherit(parent: Optional[Path], child: Optional[Path]) -> Optional[Path]:
    if child is None:
        return parent
    if parent is None or child.is_absolute():
        return child
    return parent / child


def _normalize_cmd(cmd: Optional[str]) -> str:
    if cmd is None or not cmd.strip():
        return ""
    return cmd


def _resolve_window(window: WindowSpec, session_root: Optional[Path], index: int) -> ResolvedWindow:
    where = f"windows[{index}]"

    layout = window.layout if window.layout is not None else DEFAULT_LAYOUT
    if layout not in LAYOUTS:
        raise UnknownLayout(where, layout)

    root = _inherit(session_root, window.root)
    panes = window.panes or ()
    if window.cmd is not None and panes:
        raise MutuallyExclusiveFields(where)
    cmd = _normalize_cmd(window.cmd)

    body: WindowBody
    if panes:
        body = PaneList(tuple(
            ResolvedPane(cmd=_normalize_cmd(p.cmd), root=_inherit(root, p.root)) for p in panes
        ))
    elif cmd:
        body = SingleCommand(cmd)
    else:
        body = EmptyShell()

    return ResolvedWindow(name=window.name, root=root, layout=layout, body=body)


def resolve(raw: SessionSpec) -> ResolvedSession:
    """! @brief Fill in defaults and validate a raw session definition.

    Inheritance:
      - pane root <- window root <- session root (relative roots are joined
        onto the inherited one)
      - window layout <- ``even-horizontal``

    The first invalid node fails the whole tree; nothing is partially
    resolved.

    @param raw Unresolved session.
    @return Fully populated ResolvedSession.
    @throws ValidationError (EmptySessionName, InvalidSessionName,
            EmptyWindowList, MutuallyExclusiveFields, UnknownLayout)
    """
    if not raw.name or not raw.name.strip():
        raise EmptySessionName()
    if any(c in raw.name for c in TARGET_SEPARATORS):
        raise InvalidSessionName(raw.name)
    if not raw.windows:
        raise EmptyWindowList()

    windows = tuple(_resolve_window(w, raw.root, i) for i, w in enumerate(raw.windows))
    logger.debug("Resolved session %r with %d window(s)", raw.name, len(windows))
    return ResolvedSession(name=raw.name, root=raw.root, windows=windows)


def _relativize(parent: Optional[Path], child: Optional[Path]) -> Optional[Path]:
    if child == parent:
        return None
    if child is None or parent is None or parent.is_absolute() or child.is_absolute():
        return child
    return child.relative_to(parent)


def unresolve(resolved: ResolvedSession) -> SessionSpec:
    """! @brief Express a resolved session as raw input again.

    Layouts are written out explicitly and inherited roots are left unset,
    so feeding the result back through
    :func:`resolve` yields the same resolved tree.
    """
    windows = []
    for w in resolved.windows:
        cmd: Optional[str] = None
        panes: Optional[Tuple[PaneSpec, ...]] = None
        if isinstance(w.body, SingleCommand):
            cmd = w.body.cmd
        elif isinstance(w.body, PaneList):
            panes = tuple(PaneSpec(cmd=p.cmd or None, root=_relativize(w.root, p.root)) for p in w.body.panes)
        windows.append(WindowSpec(name=w.name, root=_relativize(resolved.root, w.root), layout=w.layout, cmd=cmd, panes=panes))
    return SessionSpec(name=resolved.name, root=resolved.root, windows=tuple(windows))
