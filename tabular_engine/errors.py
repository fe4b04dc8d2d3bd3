"""Error kinds raised by the engine and its adapters."""


class TabularEngineError(Exception):
    """Base class for every error raised by tabular_engine."""


class ParseError(TabularEngineError, ValueError):
    """Import file is malformed, empty or of an unsupported type."""


class InvalidArgument(TabularEngineError, ValueError):
    """A request is structurally invalid (unknown column, empty delimiter, ...)."""


class NotFound(TabularEngineError, KeyError):
    """A dataset id does not exist in the store, or no dataset is active."""

    def __str__(self) -> str:
        # KeyError wraps its message in quotes
        return str(self.args[0]) if self.args else ""


__all__ = ["TabularEngineError", "ParseError", "InvalidArgument", "NotFound"]
