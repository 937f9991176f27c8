"""Exception hierarchy for precession."""

from __future__ import annotations


class PrecessionError(Exception):
    """Base class for every error raised by precession."""


# ---------------------------
# Validation (resolver)
# ---------------------------

class ValidationError(PrecessionError):
    """! @brief A session definition is structurally invalid.

    @param message Human readable description.
    @param location Position of the offending node, e.g. ``windows[2]``.
    """

    def __init__(self, message: str, location: str = "session") -> None:
        self.message = message
        self.location = location
        super().__init__(f"{location}: {message}")


class EmptySessionName(ValidationError):
    def __init__(self) -> None:
        super().__init__("session name must not be empty", "name")


class InvalidSessionName(ValidationError):
    def __init__(self, name: str) -> None:
        self.session_name = name
        super().__init__(f"session name {name!r} must not contain '.' or ':'", "name")


class EmptyWindowList(ValidationError):
    def __init__(self) -> None:
        super().__init__("session must declare at least one window", "windows")


class MutuallyExclusiveFields(ValidationError):
    def __init__(self, location: str, fields: tuple = ("cmd", "panes")) -> None:
        self.fields = tuple(fields)
        joined = "' and '".join(self.fields)
        super().__init__(f"'{joined}' are mutually exclusive", location)


class UnknownLayout(ValidationError):
    def __init__(self, location: str, layout: str) -> None:
        self.layout = layout
        super().__init__(f"unknown layout {layout!r}", location)


# ---------------------------
# Loading
# ---------------------------

class DefinitionError(PrecessionError):
    """The definition document could not be read or does not have the expected shape."""


class DefinitionNotFound(DefinitionError):
    def __init__(self, path) -> None:
        self.path = path
        super().__init__(f"Definition file not found: {path}")


# ---------------------------
# Execution
# ---------------------------

class ExecutionError(PrecessionError):
    """! @brief An operation failed while being replayed against tmux.

    Execution stops at the failed operation; anything created before it is
    left in place.

    @param index Position of the failed operation in the sequence.
    @param operation The operation that failed.
    @param reason Underlying error message.
    """

    def __init__(self, index: int, operation: object, reason: str) -> None:
        self.index = index
        self.operation = operation
        self.reason = reason
        super().__init__(f"Operation #{index} ({operation}) failed: {reason}")
