"""
Locate and parse session definition files.

Lookup order for a definition:
  1) an explicit file (``-f``)
  2) ``$XDG_CONFIG_HOME/precession/<session_name>.yaml``
     (``~/.config/precession/<session_name>.yaml`` if XDG_CONFIG_HOME is unset)
  3) ``./.session.yaml``
"""

from __future__ import annotations

import logging
import os
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

import yaml

from .errors import DefinitionError, DefinitionNotFound
from .spec import PaneSpec, SessionSpec, WindowSpec

logger = logging.getLogger(__name__)

APP_NAME = "precession"
LOCAL_DEFINITION = ".session.yaml"
DEFINITION_SUFFIXES = (".yaml", ".yml")


def config_dir() -> Path:
    """! @brief Directory holding named session definitions."""
    base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base) if base else Path.home() / ".config"
    return root / APP_NAME


def definition_path(session_name: Optional[str] = None, file: Optional[str] = None) -> Path:
    """! @brief Pick the definition file to load.

    @param session_name Named definition under :func:`config_dir`.
    @param file Explicit path; wins over everything else.
    @return Path to the definition (not checked for existence).
    """
    if file:
        return Path(file).expanduser()
    if session_name:
        directory = config_dir()
        for suffix in DEFINITION_SUFFIXES:
            candidate = directory / f"{session_name}{suffix}"
            if candidate.exists():
                return candidate
        return directory / f"{session_name}.yaml"
    return Path(LOCAL_DEFINITION)


def list_definitions() -> List[str]:
    """! @brief Names of all session definitions in :func:`config_dir`, sorted."""
    directory = config_dir()
    if not directory.is_dir():
        return []
    return sorted({p.stem for p in directory.iterdir() if p.is_file() and p.suffix in DEFINITION_SUFFIXES})


def _expand(path: Optional[Path]) -> Optional[Path]:
    return path.expanduser() if path is not None else None


def _expand_roots(spec: SessionSpec) -> SessionSpec:
    windows = []
    for w in spec.windows:
        panes = None
        if w.panes is not None:
            panes = tuple(PaneSpec(cmd=p.cmd, root=_expand(p.root)) for p in w.panes)
        windows.append(replace(w, root=_expand(w.root), panes=panes))
    return replace(spec, root=_expand(spec.root), windows=tuple(windows))


def _resolve_session_root(spec: SessionSpec, base: Path) -> SessionSpec:
    """A missing session root is the working directory; a relative one is relative to ``base``."""
    if spec.root is None:
        return replace(spec, root=Path.cwd())
    if not spec.root.is_absolute():
        return replace(spec, root=(base / spec.root).resolve())
    return spec


def parse_definition(text: str, base: Optional[Path] = None) -> SessionSpec:
    """! @brief Parse a YAML definition document into a raw SessionSpec.

    @param text YAML document.
    @param base Directory relative session roots are resolved against
                (defaults to the working directory).
    @return Unresolved SessionSpec with ``~`` expanded and an absolute session root.
    @throws DefinitionError on invalid YAML or an unexpected document shape.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DefinitionError(f"Invalid YAML: {e}") from e
    if data is None:
        raise DefinitionError("Definition document is empty")

    spec = _expand_roots(SessionSpec.from_mapping(data))
    return _resolve_session_root(spec, base if base is not None else Path.cwd())


def load_definition(path: Path, alias: Optional[str] = None) -> SessionSpec:
    """! @brief Read and parse a definition file.

    @param path Definition file.
    @param alias Replaces the session name from the file when given.
    @return Unresolved SessionSpec.
    @throws DefinitionNotFound if @p path does not exist.
    @throws DefinitionError if it cannot be read or parsed.
    """
    if not path.is_file():
        raise DefinitionNotFound(path)
    try:
        text = path.read_text()
    except OSError as e:
        raise DefinitionError(f"Cannot read {path}: {e}") from e

    logger.debug("Loading definition from %s", path)
    spec = parse_definition(text, base=path.resolve().parent)
    if alias:
        spec = replace(spec, name=alias)
    return spec
