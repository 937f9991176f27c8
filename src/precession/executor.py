"""
Replay compiled operations against a tmux server through libtmux.

Operations are executed strictly in order and execution stops at the first
failure. Nothing is rolled back: a session that fails half-way is left
behind as far as it got.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

import libtmux
from libtmux.constants import PaneDirection
from libtmux.exc import LibTmuxException

from .errors import ExecutionError
from .operations import ApplyLayout, CreateSession, NewWindow, Operation, RunCommand, SplitPane

logger = logging.getLogger(__name__)


def tmux_server(socket_name: Optional[str] = None) -> libtmux.Server:
    """! @brief Create a libtmux Server object.

    @param socket_name Optional tmux socket name (``tmux -L``); default socket when None.
    @return libtmux.Server bound to the requested socket.
    """
    if socket_name:
        return libtmux.Server(socket_name=socket_name)
    return libtmux.Server()


def _start_directory(root) -> Optional[str]:
    return str(root) if root is not None else None


class TmuxExecutor:
    """Executes an operation sequence against one tmux server.

    Keeps track of the windows and panes it created so that positional
    references in the operations can be mapped onto libtmux objects.
    """

    def __init__(self, server: Optional[libtmux.Server] = None) -> None:
        self.server = server if server is not None else tmux_server()
        self.session: Optional[libtmux.Session] = None
        self._windows: List[libtmux.Window] = []
        self._panes: Dict[int, List[libtmux.Pane]] = {}

    def execute(self, operations: Iterable[Operation]) -> libtmux.Session:
        """! @brief Execute ``operations`` one at a time, in order.

        @param operations Output of :func:`precession.compiler.compile_session`.
        @return The created libtmux Session.
        @throws ExecutionError on the first operation that fails.
        """
        for index, op in enumerate(operations):
            logger.debug("Executing operation #%d: %s", index, op)
            try:
                self._apply(op)
            except LibTmuxException as e:
                raise ExecutionError(index, op, str(e) or type(e).__name__) from e
            except LookupError as e:
                raise ExecutionError(index, op, str(e)) from e

        if self.session is None:
            raise ExecutionError(0, None, "operation sequence did not create a session")
        return self.session

    # ---------------------------
    # per-operation handlers
    # ---------------------------

    def _apply(self, op: Operation) -> None:
        if isinstance(op, CreateSession):
            self._create_session(op)
        elif isinstance(op, NewWindow):
            self._new_window(op)
        elif isinstance(op, SplitPane):
            self._split_pane(op)
        elif isinstance(op, ApplyLayout):
            self._window(op.window).select_layout(op.layout)
        elif isinstance(op, RunCommand):
            self._pane(op.window, op.pane).send_keys(op.command, enter=True)
        else:
            raise TypeError(f"Unknown operation: {op!r}")

    def _create_session(self, op: CreateSession) -> None:
        if self.session is not None:
            raise LookupError(f"session {self.session.session_name!r} already created")
        kwargs = {}
        if op.first_window_name is not None:
            kwargs["window_name"] = op.first_window_name
        self.session = self.server.new_session(
            session_name=op.name,
            start_directory=_start_directory(op.first_pane_root),
            attach=False,
            **kwargs,
        )
        window = self.session.windows[0]
        self._windows = [window]
        self._panes = {0: [window.panes[0]]}

    def _new_window(self, op: NewWindow) -> None:
        if self.session is None:
            raise LookupError("no session has been created yet")
        if op.window != len(self._windows):
            raise LookupError(f"window {op.window} out of order (have {len(self._windows)})")
        kwargs = {}
        if op.name is not None:
            kwargs["window_name"] = op.name
        window = self.session.new_window(
            start_directory=_start_directory(op.root),
            attach=False,
            **kwargs,
        )
        self._windows.append(window)
        self._panes[op.window] = [window.panes[0]]

    def _split_pane(self, op: SplitPane) -> None:
        panes = self._panes.get(op.window)
        if not panes:
            raise LookupError(f"window {op.window} does not exist")
        if op.pane != len(panes):
            raise LookupError(f"pane {op.pane} out of order in window {op.window} (have {len(panes)})")
        pane = panes[-1].split(
            direction=PaneDirection.Below if op.vertical else PaneDirection.Right,
            start_directory=_start_directory(op.root),
            attach=False,
        )
        panes.append(pane)

    def _window(self, index: int) -> libtmux.Window:
        if index < 0 or index >= len(self._windows):
            raise LookupError(f"window {index} does not exist (have {len(self._windows)})")
        return self._windows[index]

    def _pane(self, window: int, pane: int) -> libtmux.Pane:
        self._window(window)
        panes = self._panes[window]
        if pane < 0 or pane >= len(panes):
            raise LookupError(f"pane {pane} does not exist in window {window} (have {len(panes)})")
        return panes[pane]
