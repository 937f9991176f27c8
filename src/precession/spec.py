"""
Session definition model.

Raw, unresolved declarations of a tmux session as they come out of a
definition document:

  name: My web project
  root: ~/code/web
  windows:
    - name: Code
      cmd: vim .
    - name: Dev servers
      layout: even-horizontal
      panes:
        - docker-compose up
        - cmd: cargo run
          root: server

Every field except the session name is optional here; defaults are filled
in by :mod:`precession.resolver`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple

from .errors import DefinitionError


EVEN_HORIZONTAL = "even-horizontal"
EVEN_VERTICAL = "even-vertical"
MAIN_HORIZONTAL = "main-horizontal"
MAIN_VERTICAL = "main-vertical"
TILED = "tiled"

LAYOUTS: Tuple[str, ...] = (EVEN_HORIZONTAL, EVEN_VERTICAL, MAIN_HORIZONTAL, MAIN_VERTICAL, TILED)
DEFAULT_LAYOUT = EVEN_HORIZONTAL

# Layouts whose panes are stacked top/bottom rather than side by side.
STACKED_LAYOUTS = frozenset({EVEN_VERTICAL, MAIN_HORIZONTAL})


def _expect_str(value: Any, where: str) -> str:
    """! @brief Accept only YAML strings.

    Unquoted ``yes``, ``off`` or ``1.10`` load as bool or float and are
    rejected rather than converted back with ``str()``.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        raise DefinitionError(f"{where}: expected a string, got {type(value).__name__}")
    raise DefinitionError(f"{where}: expected a string, got {type(value).__name__}; quote it")


def _opt_str(data: Mapping[str, Any], key: str, where: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    return _expect_str(value, f"{where}.{key}")



def _opt_path(data: Mapping[str, Any], key: str, where: str) -> Optional[Path]:
    value = _opt_str(data, key, where)
    return Path(value) if value is not None else None


def _expect_mapping(data: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise DefinitionError(f"{where}: expected a mapping, got {type(data).__name__}")
    return data


@dataclass(frozen=True)
class PaneSpec:
    cmd: Optional[str] = None
    root: Optional[Path] = None

    @staticmethod
    def from_value(value: Any, where: str = "pane") -> "PaneSpec":
        """! @brief Build a pane from a document value.

        A pane may be written as a bare command string, ``null`` (an empty
        shell), or a mapping with ``cmd`` and ``root``.
        """
        if value is None:
            return PaneSpec()
        if isinstance(value, Mapping):
            return PaneSpec(cmd=_opt_str(value, "cmd", where), root=_opt_path(value, "root", where))
        if isinstance(value, list):
            raise DefinitionError(f"{where}: expected a command string or mapping, got list")
        return PaneSpec(cmd=_expect_str(value, where))


@dataclass(frozen=True)
class WindowSpec:
    name: Optional[str] = None
    root: Optional[Path] = None
    layout: Optional[str] = None
    cmd: Optional[str] = None
    panes: Optional[Tuple[PaneSpec, ...]] = None

    @staticmethod
    def from_mapping(data: Any, where: str = "window") -> "WindowSpec":
        data = _expect_mapping(data, where)
        raw_panes = data.get("panes")
        panes: Optional[Tuple[PaneSpec, ...]] = None
        if raw_panes is not None:
            if not isinstance(raw_panes, list):
                raise DefinitionError(f"{where}.panes: expected a list, got {type(raw_panes).__name__}")
            panes = tuple(PaneSpec.from_value(p, f"{where}.panes[{i}]") for i, p in enumerate(raw_panes))
        return WindowSpec(
            name=_opt_str(data, "name", where),
            root=_opt_path(data, "root", where),
            layout=_opt_str(data, "layout", where),
            cmd=_opt_str(data, "cmd", where),
            panes=panes,
        )


@dataclass(frozen=True)
class SessionSpec:
    name: str
    root: Optional[Path] = None
    windows: Tuple[WindowSpec, ...] = field(default_factory=tuple)

    @staticmethod
    def from_mapping(data: Any) -> "SessionSpec":
        """! @brief Build a raw session from a parsed definition document.

        Only the shape is checked here (types of fields); semantic validation
        such as empty names or conflicting fields belongs to the resolver.

        @param data Mapping produced by the YAML parser.
        @return Unresolved SessionSpec.
        @throws DefinitionError if the document does not have the expected shape.
        """
        data = _expect_mapping(data, "session")
        raw_windows = data.get("windows") or []
        if not isinstance(raw_windows, list):
            raise DefinitionError(f"windows: expected a list, got {type(raw_windows).__name__}")
        return SessionSpec(
            name=_opt_str(data, "name", "session") or "",
            root=_opt_path(data, "root", "session"),
            windows=tuple(WindowSpec.from_mapping(w, f"windows[{i}]") for i, w in enumerate(raw_windows)),
        )
