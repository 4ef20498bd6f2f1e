"""Locate the C compiler handed to cgo through CC."""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Mapping

from gobuild.errors import ToolchainNotFound

log = logging.getLogger(__name__)

FALLBACK_COMPILERS: tuple[str, ...] = ("cc", "gcc", "clang")


def _env_candidates(environ: Mapping[str, str]) -> list[str]:
    """Variable names checked in order, most specific first (cc crate convention)."""
    names: list[str] = []
    target = environ.get("TARGET")
    if target:
        names.append(f"CC_{target}")
        names.append(f"CC_{target.replace('-', '_')}")
        host = environ.get("HOST")
        names.append("HOST_CC" if host and host == target else "TARGET_CC")
    names.append("CC")
    return names


def resolve_c_compiler(environ: Mapping[str, str] | None = None) -> str:
    """Return the C compiler path for cgo. Raises ToolchainNotFound.

    An explicit variable wins verbatim; otherwise the first of
    FALLBACK_COMPILERS found on PATH is used.
    """
    env = os.environ if environ is None else environ
    for name in _env_candidates(env):
        value = (env.get(name) or "").strip()
        if value:
            log.debug("C compiler from %s: %s", name, value)
            return value
    for candidate in FALLBACK_COMPILERS:
        path = shutil.which(candidate, path=env.get("PATH"))
        if path:
            log.debug("C compiler from PATH: %s", path)
            return path
    tried = ", ".join(FALLBACK_COMPILERS)
    msg = f"could not find c compiler: none of {tried} found on PATH and CC is not set"
    raise ToolchainNotFound(msg)
