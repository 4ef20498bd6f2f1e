"""Errors raised while compiling a cgo package.

Every failure is terminal for the compile call that raised it. Catch
CompileError for all of them or one of the subclasses for a single kind.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum


class ErrorKind(str, Enum):
    CONFIGURATION_MISSING = "configuration-missing"
    UNSUPPORTED_PLATFORM_VALUE = "unsupported-platform-value"
    TOOLCHAIN_NOT_FOUND = "toolchain-not-found"
    TOOLCHAIN_EXECUTION_FAILED = "toolchain-execution-failed"


class CompileError(Exception):
    """Base error: a kind tag plus a human-readable message."""

    kind: ErrorKind
    message: str

    def __init__(self, message: str, *, kind: ErrorKind) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __str__(self) -> str:
        return self.message


class ConfigurationMissing(CompileError):
    """A required setting is absent and no fallback could be resolved."""

    def __init__(self, message: str) -> None:
        super().__init__(message, kind=ErrorKind.CONFIGURATION_MISSING)


class UnsupportedPlatformValue(CompileError):
    """A platform identifier has no entry in the mapping tables."""

    def __init__(self, message: str, *, value: str) -> None:
        super().__init__(message, kind=ErrorKind.UNSUPPORTED_PLATFORM_VALUE)
        self.value = value


class ToolchainNotFound(CompileError):
    def __init__(self, message: str) -> None:
        super().__init__(message, kind=ErrorKind.TOOLCHAIN_NOT_FOUND)


class ToolchainExecutionFailed(CompileError):
    """The toolchain started but failed, or could not be started for a reason other than absence.

    returncode is None when the process never ran. A negative returncode means
    the child was terminated by that signal number.
    """

    def __init__(
        self,
        message: str,
        *,
        command: Sequence[str] = (),
        returncode: int | None = None,
    ) -> None:
        super().__init__(message, kind=ErrorKind.TOOLCHAIN_EXECUTION_FAILED)
        self.command = list(command)
        self.returncode = returncode


__all__ = [
    "CompileError",
    "ConfigurationMissing",
    "ErrorKind",
    "ToolchainExecutionFailed",
    "ToolchainNotFound",
    "UnsupportedPlatformValue",
]
