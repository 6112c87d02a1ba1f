"""Custom exceptions for the disposables registry."""


class DisposablesError(Exception):
    """Base exception for this package."""


class DisposedError(DisposablesError):
    """Raised when mutating or dereferencing something that was already disposed."""


class AlreadySetError(DisposablesError):
    """Raised when a settable disposable receives a second value."""


class MissingDependencyError(DisposablesError):
    """Raised when an optional dependency is required but not installed."""
