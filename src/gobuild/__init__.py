"""Compile cgo packages into linkable libraries from Cargo build scripts.

It's like the ``cc`` crate, for Go::

    from gobuild import Build

    Build().file("hello.go").compile("hello")
"""

from .build import Build, ToolchainInvocation
from .config import load_build_file
from .errors import (
    CompileError,
    ConfigurationMissing,
    ErrorKind,
    ToolchainExecutionFailed,
    ToolchainNotFound,
    UnsupportedPlatformValue,
)
from .naming import BuildMode, library_filename
from .platform import go_arch, go_os

__all__ = [
    "Build",
    "BuildMode",
    "CompileError",
    "ConfigurationMissing",
    "ErrorKind",
    "ToolchainExecutionFailed",
    "ToolchainInvocation",
    "ToolchainNotFound",
    "UnsupportedPlatformValue",
    "go_arch",
    "go_os",
    "library_filename",
    "load_build_file",
]
