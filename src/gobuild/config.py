"""Build file loading.

A build file is YAML describing one library::

    library: hello            # required
    files: [hello.go]         # relative to base_dir
    out_dir: target/go        # default: $OUT_DIR
    buildmode: c-archive      # or c-shared
    compiler: go
    goarch: amd64             # default: from CARGO_CFG_TARGET_ARCH
    goos: linux               # default: from CARGO_CFG_TARGET_OS
    ldflags: "-s -w"
    trim_paths: false
    cargo_metadata: true
    env: {GOFLAGS: -mod=vendor}
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from gobuild.build import Build
from gobuild.naming import BuildMode

DEFAULT_BUILD_FILE: dict[str, Any] = {
    "library": None,
    "files": [],
    "out_dir": None,
    "buildmode": BuildMode.C_ARCHIVE.value,
    "compiler": None,
    "goarch": None,
    "goos": None,
    "ldflags": None,
    "trim_paths": False,
    "cargo_metadata": True,
    "env": {},
}

_STRING_KEYS = ("library", "out_dir", "buildmode", "compiler", "goarch", "goos", "ldflags")
_BOOL_KEYS = ("trim_paths", "cargo_metadata")


def resolve_build_file(data: dict[str, Any] | None) -> dict[str, Any]:
    """Return build file settings with defaults filled. Raises ValueError on bad keys or types."""
    if data is None:
        data = {}
    if not isinstance(data, dict):
        msg = "Build file must be a mapping"
        raise ValueError(msg)
    unknown = sorted(str(k) for k in data if k not in DEFAULT_BUILD_FILE)
    if unknown:
        msg = f"Build file contains unknown keys: {', '.join(unknown)}"
        raise ValueError(msg)

    out = dict(DEFAULT_BUILD_FILE)
    out.update(data)
    for key in _STRING_KEYS:
        if out[key] is not None and not isinstance(out[key], str):
            msg = f"Build file key {key!r} must be a string"
            raise ValueError(msg)
    for key in _BOOL_KEYS:
        if not isinstance(out[key], bool):
            msg = f"Build file key {key!r} must be true or false"
            raise ValueError(msg)
    if not isinstance(out["files"], list):
        msg = "Build file key 'files' must be a list"
        raise ValueError(msg)
    for entry in out["files"]:
        if not isinstance(entry, str) or not entry:
            msg = f"Build file 'files' entries must be non-empty strings, got {entry!r}"
            raise ValueError(msg)
    if not isinstance(out["env"], dict):
        msg = "Build file key 'env' must be a mapping"
        raise ValueError(msg)
    for key, value in out["env"].items():
        # bool is an int subclass; true/false would become "True"/"False"
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            msg = f"Build file env value for {key!r} must be a string or number, got {value!r}"
            raise ValueError(msg)
    if not out["library"]:
        msg = "Build file is missing 'library'"
        raise ValueError(msg)
    try:
        BuildMode(out["buildmode"])
    except ValueError:
        modes = ", ".join(m.value for m in BuildMode)
        msg = f"Unknown buildmode {out['buildmode']!r} (expected one of: {modes})"
        raise ValueError(msg) from None
    return out


def build_from_settings(settings: dict[str, Any], base_dir: Path) -> Build:
    """Apply resolved settings to a fresh Build. Relative paths are joined to base_dir."""
    build = Build()
    build.files(base_dir / f for f in settings["files"])
    if settings["out_dir"] is not None:
        build.out_dir(base_dir / settings["out_dir"])
    build.buildmode(settings["buildmode"])
    if settings["compiler"] is not None:
        build.compiler(settings["compiler"])
    if settings["goarch"] is not None:
        build.goarch(settings["goarch"])
    if settings["goos"] is not None:
        build.goos(settings["goos"])
    if settings["ldflags"] is not None:
        build.ldflags(settings["ldflags"])
    build.trim_paths(settings["trim_paths"])
    build.cargo_metadata(settings["cargo_metadata"])
    for key, value in settings["env"].items():
        build.env(str(key), str(value))
    return build


def load_build_file(path: Path, base_dir: Path | None = None) -> tuple[str, Build]:
    """Load a YAML build file. Returns (library name, configured Build).

    base_dir defaults to the build file's directory.
    """
    with path.open() as f:
        data = yaml.safe_load(f)
    settings = resolve_build_file(data)
    base = (Path(base_dir) if base_dir else path.parent).resolve()
    return settings["library"], build_from_settings(settings, base)
