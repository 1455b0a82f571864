"""Error types raised by the resolver.

Only caller mistakes and platform failures are raised. A name that cannot be
resolved is reported as ``None`` and never appears here.
"""

from __future__ import annotations


class ReflectionError(Exception):
    """Base class for every failure reported by dynresolve."""

    def __init__(self, message: str, details: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class MalformedSignatureError(ReflectionError, ValueError):
    """Raised when a signature or parameter token cannot be parsed."""

    def __init__(self, message: str, signature: str | None = None) -> None:
        super().__init__(message, details=signature)
        self.signature = signature


class ArityMismatchError(ReflectionError, TypeError):
    """Raised when an invocation supplies the wrong number of arguments."""

    def __init__(self, expected: int, supplied: int) -> None:
        super().__init__(
            f"Expected number of parameters is {expected}",
            details=f"{supplied} supplied",
        )
        self.expected = expected
        self.supplied = supplied


class InvocationError(ReflectionError, RuntimeError):
    """Raised when the platform call behind a handle fails.

    Exceptions raised by the target's own code are never wrapped; this type
    covers allocation failures, receiver mismatches and binding errors.
    """

    def __init__(self, message: str, signature: str) -> None:
        super().__init__(message, details=signature)
        self.signature = signature


class BackendError(ReflectionError):
    """Raised when a resolver backend cannot be selected or loaded."""
