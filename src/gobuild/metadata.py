"""Cargo build-script directives written to stdout."""

from __future__ import annotations

import sys
import threading
from pathlib import Path
from typing import TextIO

PREFIX = "cargo:"


class MetadataChannel:
    """Line-oriented writer for `cargo:` directives.

    Directives are dropped when ``enabled`` is False; warnings never are.
    ``stream`` defaults to whatever ``sys.stdout`` is at write time.
    """

    def __init__(self, *, enabled: bool = True, stream: TextIO | None = None) -> None:
        self.enabled = enabled
        self._stream = stream
        self._lock = threading.Lock()

    def _write_line(self, line: str) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        with self._lock:
            stream.write(line + "\n")
            stream.flush()

    def directive(self, key: str, value: str) -> None:
        if self.enabled:
            self._write_line(f"{PREFIX}{key}={value}")

    def rerun_if_changed(self, path: str | Path) -> None:
        self.directive("rerun-if-changed", str(path))

    def link_lib(self, kind: str, name: str) -> None:
        self.directive("rustc-link-lib", f"{kind}={name}")

    def link_search(self, path: str | Path) -> None:
        self.directive("rustc-link-search", f"native={path}")

    def warning(self, line: str) -> None:
        self._write_line(f"{PREFIX}warning={line}")
