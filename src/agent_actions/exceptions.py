from __future__ import annotations

from typing import Any, Dict, Mapping


class ActionsError(Exception):
    """Base exception for the action catalog."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class SourceError(ActionsError):
    """Base for errors tied to a single source file."""

    def __init__(
        self,
        message: str,
        *,
        path: str = "",
        details: Any = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if path:
            ctx["path"] = path
        super().__init__(message, context=ctx)
        self.path = path
        self.details = details


class SourceReadError(SourceError, OSError):
    """Raised when a source file cannot be read or parsed as YAML."""

    def __init__(
        self,
        message: str,
        *,
        path: str = "",
        details: Any = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        SourceError.__init__(self, message, path=path, details=details, context=context)


class SchemaError(SourceError, ValueError):
    """Raised when a parsed document is not a structurally valid namespace document."""

    def __init__(
        self,
        message: str,
        *,
        path: str = "",
        details: Any = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        SourceError.__init__(self, message, path=path, details=details, context=context)


class IndexIntegrityError(ActionsError):
    """Raised for actions that cannot be placed into the flat index."""

    def __init__(
        self,
        message: str,
        *,
        full_name: str = "",
        path: str = "",
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if full_name:
            ctx["full_name"] = full_name
        if path:
            ctx["path"] = path
        super().__init__(message, context=ctx)
        self.full_name = full_name
        self.path = path


class NoSourcesError(ActionsError):
    """Raised when no action source can be resolved at all."""


class ReloadInProgressError(ActionsError, RuntimeError):
    """Raised when a non-blocking reload finds another reload running."""

    def __init__(self, message: str = "Reload already in progress", *, context: Mapping[str, Any] | None = None) -> None:
        ActionsError.__init__(self, message, context=context)
        RuntimeError.__init__(self, message)


class ConfigError(ActionsError, ValueError):
    """Raised when a configuration file exists but is invalid."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ActionsError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


__all__ = [
    "ActionsError",
    "SourceError",
    "SourceReadError",
    "SchemaError",
    "IndexIntegrityError",
    "NoSourcesError",
    "ReloadInProgressError",
    "ConfigError",
]
