"""Build modes and output library file names."""

from __future__ import annotations

from enum import Enum

from gobuild.platform import host_os


class BuildMode(str, Enum):
    """Value passed to `go build -buildmode`. See `go help buildmode`."""

    # Main package plus its imports as a C archive; only //export functions are callable.
    C_ARCHIVE = "c-archive"
    # Same, as a C shared library.
    C_SHARED = "c-shared"

    def __str__(self) -> str:
        return self.value

    @property
    def link_kind(self) -> str:
        """Kind used in the `rustc-link-lib` directive."""
        if self is BuildMode.C_ARCHIVE:
            return "static"
        return "dylib"


def library_filename(lib_name: str, mode: BuildMode, os_name: str | None = None) -> str:
    """libfoo.a for archives; libfoo.dll or libfoo.so for shared libraries.

    os_name is only consulted for shared libraries and defaults to the host OS.
    """
    if mode is BuildMode.C_ARCHIVE:
        return f"lib{lib_name}.a"
    system = host_os() if os_name is None else os_name
    ext = ".dll" if system == "windows" else ".so"
    return f"lib{lib_name}{ext}"
