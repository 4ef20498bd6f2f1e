"""Translate Cargo target identifiers into GOARCH/GOOS values.

The tables are plain dicts; add an entry to support another target.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping

from gobuild.errors import ConfigurationMissing, UnsupportedPlatformValue

TARGET_ARCH_VAR = "CARGO_CFG_TARGET_ARCH"
TARGET_OS_VAR = "CARGO_CFG_TARGET_OS"

# CARGO_CFG_TARGET_ARCH -> GOARCH
GOARCH_BY_TARGET_ARCH: dict[str, str] = {
    "x86": "386",
    "x86_64": "amd64",
    "arm": "arm",
    "aarch64": "arm64",
    "mips": "mips",
    "powerpc": "ppc",
    "powerpc64": "ppc64",
}

# CARGO_CFG_TARGET_OS -> GOOS
GOOS_BY_TARGET_OS: dict[str, str] = {
    "windows": "windows",
    "macos": "darwin",
    "ios": "darwin",
    "linux": "linux",
    "android": "android",
    "freebsd": "freebsd",
    "dragonfly": "dragonfly",
    "openbsd": "openbsd",
    "netbsd": "netbsd",
}


def go_arch(target_arch: str) -> str:
    """Return the GOARCH for a Cargo target arch. Raises UnsupportedPlatformValue."""
    try:
        return GOARCH_BY_TARGET_ARCH[target_arch]
    except KeyError:
        msg = f"Unknown arch {target_arch}"
        raise UnsupportedPlatformValue(msg, value=target_arch) from None


def go_os(target_os: str) -> str:
    """Return the GOOS for a Cargo target os. Raises UnsupportedPlatformValue."""
    try:
        return GOOS_BY_TARGET_OS[target_os]
    except KeyError:
        msg = f"Unknown os {target_os}"
        raise UnsupportedPlatformValue(msg, value=target_os) from None


def _require(environ: Mapping[str, str], name: str) -> str:
    value = environ.get(name)
    if value is None:
        msg = f"Cannot find {name} env var"
        raise ConfigurationMissing(msg)
    return value


def goarch_from_env(environ: Mapping[str, str] | None = None) -> str:
    """GOARCH derived from CARGO_CFG_TARGET_ARCH (default: os.environ)."""
    env = os.environ if environ is None else environ
    return go_arch(_require(env, TARGET_ARCH_VAR))


def goos_from_env(environ: Mapping[str, str] | None = None) -> str:
    """GOOS derived from CARGO_CFG_TARGET_OS (default: os.environ)."""
    env = os.environ if environ is None else environ
    return go_os(_require(env, TARGET_OS_VAR))


def host_os() -> str:
    """Operating system running this process, in Cargo's vocabulary."""
    if sys.platform.startswith(("win32", "cygwin")):
        return "windows"
    if sys.platform == "darwin":
        return "macos"
    if sys.platform.startswith("linux"):
        return "linux"
    return sys.platform
