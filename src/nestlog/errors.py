"""Core exceptions for nestlog operations."""


class NestlogError(Exception):
    """Base exception for all nestlog errors."""

    def __init__(self, message: str, *, details: dict[str, object] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class SeverityError(NestlogError):
    """Raised when a severity level operation fails."""


class UnknownLevelError(SeverityError, LookupError):
    """Raised when a strict lookup names a level that is not registered."""

    def __init__(self, requested: str) -> None:
        level = requested.upper()
        super().__init__(
            f"No handler named '{requested}' found. (looked up as '{level}')",
            details={"level": level, "requested": requested},
        )
        self.level = level
        self.requested = requested


class BootstrapError(SeverityError):
    """Raised when the baseline severity ladder cannot be established."""


class InvalidConsoleMethodError(NestlogError, ValueError):
    """Raised when a console handler names a method the console does not have."""

    def __init__(self, method_name: str, allowed: list[str] | None = None) -> None:
        allowed_str = f" Allowed: {allowed}" if allowed else ""
        super().__init__(
            f"Invalid console method name: {method_name}.{allowed_str}",
            details={"method_name": method_name, "allowed": allowed or []},
        )


class InvalidNamespaceError(NestlogError, ValueError):
    """Raised when a namespace path cannot be resolved to a logger."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            f"Invalid namespace '{path}': {reason}",
            details={"path": path, "reason": reason},
        )
