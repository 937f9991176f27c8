"""Declarative tmux session starter."""

from .compiler import compile_session
from .errors import (
    DefinitionError,
    DefinitionNotFound,
    EmptySessionName,
    EmptyWindowList,
    ExecutionError,
    InvalidSessionName,
    MutuallyExclusiveFields,
    PrecessionError,
    UnknownLayout,
    ValidationError,
)
from .resolver import ResolvedSession, resolve
from .spec import PaneSpec, SessionSpec, WindowSpec

__all__ = [
    "compile_session",
    "resolve",
    "ResolvedSession",
    "SessionSpec",
    "WindowSpec",
    "PaneSpec",
    "PrecessionError",
    "ValidationError",
    "EmptySessionName",
    "EmptyWindowList",
    "InvalidSessionName",
    "MutuallyExclusiveFields",
    "UnknownLayout",
    "DefinitionError",
    "DefinitionNotFound",
    "ExecutionError",
]
__version__ = "0.1.0"
