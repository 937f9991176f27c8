"""
Compile a resolved session into an ordered list of tmux operations.

Per window the order is fixed: create the window, split its panes, apply
its layout, then send commands. Replaying the list out of order is not
legal: a pane has to exist before it can be split, and a window before a
layout can be applied to it.
"""

from __future__ import annotations

import logging
from typing import List

from .operations import ApplyLayout, CreateSession, NewWindow, Operation, RunCommand, SplitPane
from .resolver import ResolvedSession, ResolvedWindow
from .spec import DEFAULT_LAYOUT, STACKED_LAYOUTS

logger = logging.getLogger(__name__)


def _compile_window(index: int, window: ResolvedWindow) -> List[Operation]:
    ops: List[Operation] = []
    panes = window.panes
    vertical = window.layout in STACKED_LAYOUTS

    for pane_index, pane in enumerate(panes[1:], start=1):
        ops.append(SplitPane(window=index, pane=pane_index, root=pane.root, vertical=vertical))

    # A single pane in the default layout has nothing to rearrange.
    if len(panes) > 1 or window.layout != DEFAULT_LAYOUT:
        ops.append(ApplyLayout(window=index, layout=window.layout))

    for pane_index, pane in enumerate(panes):
        if not pane.is_empty:
            ops.append(RunCommand(window=index, pane=pane_index, command=pane.cmd))

    return ops


def compile_session(resolved: ResolvedSession) -> List[Operation]:
    """! @brief Produce the operations that rebuild ``resolved`` from scratch.

    The first window and its first pane are created implicitly by
    CreateSession; every later window gets a NewWindow and every later pane
    a SplitPane. Empty panes get no RunCommand and are left at a shell
    prompt.

    @param resolved Output of :func:`precession.resolver.resolve`.
    @return Operations in replay order; CreateSession is always first.
    """
    first = resolved.windows[0]
    ops: List[Operation] = [
        CreateSession(
            name=resolved.name,
            root=resolved.root,
            first_window_name=first.name,
            first_pane_root=first.panes[0].root,
        )
    ]

    for index, window in enumerate(resolved.windows):
        if index > 0:
            ops.append(NewWindow(window=index, name=window.name, root=window.panes[0].root))
        ops.extend(_compile_window(index, window))

    logger.debug("Compiled session %r into %d operation(s)", resolved.name, len(ops))
    return ops
