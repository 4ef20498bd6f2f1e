"""Builder for compiling a cgo package from a Cargo build script.

Typical use from a build script::

    from gobuild import Build

    Build().file("hello.go").compile("hello")

This produces ``libhello.a`` and ``libhello.h`` in ``OUT_DIR`` and tells
Cargo to link the archive statically.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import NoReturn

from gobuild.ccompiler import resolve_c_compiler
from gobuild.errors import CompileError, ConfigurationMissing
from gobuild.metadata import MetadataChannel
from gobuild.naming import BuildMode, library_filename
from gobuild.platform import goarch_from_env, goos_from_env
from gobuild.process import format_command
from gobuild.process import run as run_toolchain

log = logging.getLogger(__name__)

OUT_DIR_VAR = "OUT_DIR"
DEFAULT_COMPILER = "go"


@dataclass(frozen=True)
class ToolchainInvocation:
    """One concrete `go build` command derived from a Build."""

    program: str
    args: tuple[str, ...]
    env_overrides: Mapping[str, str]
    out_dir: Path
    output_path: Path
    files: tuple[Path, ...] = field(default=())

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]

    def full_env(self, base: Mapping[str, str] | None = None) -> dict[str, str]:
        """Inherited environment (default: os.environ) with the overrides laid on top."""
        env = dict(os.environ if base is None else base)
        env.update(self.env_overrides)
        return env

    def format_command(self) -> str:
        return format_command(self.argv)


class Build:
    """Configuration for one compile of a native Go package.

    Setters return the builder so calls can be chained. Finish with
    compile() or try_compile().
    """

    def __init__(self) -> None:
        self._files: list[Path] = []
        self._env: dict[str, str] = {}
        self._out_dir: Path | None = None
        self._buildmode = BuildMode.C_ARCHIVE
        self._compiler = Path(DEFAULT_COMPILER)
        self._goarch: str | None = None
        self._goos: str | None = None
        self._cargo_metadata = True
        self._ldflags: str | None = None
        self._trim_paths = False

    def __repr__(self) -> str:
        return (
            f"Build(files={[str(f) for f in self._files]!r}, buildmode={self._buildmode.value!r}, "
            f"out_dir={self._out_dir!r}, compiler={str(self._compiler)!r})"
        )

    def file(self, path: str | os.PathLike[str]) -> Build:
        """Add a file to compile. Order is kept and duplicates are passed through."""
        self._files.append(Path(path))
        return self

    def files(self, paths: Iterable[str | os.PathLike[str]]) -> Build:
        for path in paths:
            self.file(path)
        return self

    def env(self, key: str, value: str) -> Build:
        """Set an environment variable for the toolchain; overrides any computed value."""
        self._env[str(key)] = str(value)
        return self

    def out_dir(self, path: str | os.PathLike[str]) -> Build:
        """Directory receiving the library and header. Defaults to $OUT_DIR."""
        self._out_dir = Path(path)
        return self

    def buildmode(self, mode: BuildMode | str) -> Build:
        self._buildmode = BuildMode(mode)
        return self

    def compiler(self, path: str | os.PathLike[str]) -> Build:
        """Go executable to run. Defaults to `go` on PATH."""
        self._compiler = Path(path)
        return self

    def goarch(self, arch: str) -> Build:
        """Set GOARCH instead of deriving it from CARGO_CFG_TARGET_ARCH."""
        self._goarch = arch
        return self

    def goos(self, os_name: str) -> Build:
        """Set GOOS instead of deriving it from CARGO_CFG_TARGET_OS."""
        self._goos = os_name
        return self

    def cargo_metadata(self, enabled: bool) -> Build:
        """Emit rerun-if-changed, rustc-link-lib and rustc-link-search directives. Default True."""
        self._cargo_metadata = enabled
        return self

    def ldflags(self, flags: str) -> Build:
        self._ldflags = flags
        return self

    def trim_paths(self, enabled: bool) -> Build:
        """Pass -trimpath to strip file system paths from the output."""
        self._trim_paths = enabled
        return self

    def get_out_dir(self) -> Path:
        if self._out_dir is not None:
            return self._out_dir
        value = os.environ.get(OUT_DIR_VAR)
        if value is None:
            msg = "Environment variable OUT_DIR not defined."
            raise ConfigurationMissing(msg)
        return Path(value)

    def get_goarch(self) -> str:
        if self._goarch is not None:
            return self._goarch
        return goarch_from_env()

    def get_goos(self) -> str:
        if self._goos is not None:
            return self._goos
        return goos_from_env()

    def _build_args(self, output_path: Path) -> list[str]:
        args = ["build", "-buildmode", str(self._buildmode), "-o", str(output_path)]
        if self._ldflags is not None:
            args += ["-ldflags", self._ldflags]
        if self._trim_paths:
            args.append("-trimpath")
        args += [str(f) for f in self._files]
        return args

    def _env_overrides(self, c_compiler: str) -> dict[str, str]:
        # computed defaults first, caller extras last
        env = {
            "CGO_ENABLED": "1",
            "CC": c_compiler,
            "GOARCH": self.get_goarch(),
            "GOOS": self.get_goos(),
        }
        env.update(self._env)
        return env

    def invocation(self, lib_name: str) -> ToolchainInvocation:
        """Resolve everything needed to run the toolchain without running it."""
        filename = library_filename(lib_name, self._buildmode)
        out_dir = self.get_out_dir()
        output_path = out_dir / filename
        log.debug("Output for %s: %s", lib_name, output_path)
        return self._invocation(out_dir, output_path)

    def _invocation(self, out_dir: Path, output_path: Path) -> ToolchainInvocation:
        c_compiler = resolve_c_compiler()
        return ToolchainInvocation(
            program=str(self._compiler),
            args=tuple(self._build_args(output_path)),
            env_overrides=self._env_overrides(c_compiler),
            out_dir=out_dir,
            output_path=output_path,
            files=tuple(self._files),
        )

    def try_compile(self, lib_name: str) -> None:
        """Compile into lib<lib_name> and emit link directives. Raises CompileError."""
        channel = MetadataChannel(enabled=self._cargo_metadata)
        filename = library_filename(lib_name, self._buildmode)
        out_dir = self.get_out_dir()

        for path in self._files:
            channel.rerun_if_changed(path)

        invocation = self._invocation(out_dir, out_dir / filename)
        log.debug(
            "Toolchain env overrides: %s",
            " ".join(f"{k}={v}" for k, v in sorted(invocation.env_overrides.items())),
        )
        run_toolchain(invocation.argv, invocation.full_env(), lib_name, channel)

        channel.link_lib(self._buildmode.link_kind, lib_name)
        channel.link_search(out_dir)

    def compile(self, lib_name: str) -> None:
        """Like try_compile(), but prints the error and exits with status 1 on failure."""
        try:
            self.try_compile(lib_name)
        except CompileError as e:
            fail(e.message)


def fail(message: str) -> NoReturn:
    print(f"\n\nerror occurred: {message}\n\n", file=sys.stderr)
    sys.exit(1)
