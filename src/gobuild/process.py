"""Run the Go toolchain and forward its stderr as cargo warnings.

stderr is drained on a separate thread while the caller waits on the
child; a full pipe would otherwise block the child forever. There is no
timeout: a hung toolchain blocks the caller.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
import threading
from collections.abc import Mapping, Sequence
from typing import IO

from gobuild.errors import ToolchainExecutionFailed, ToolchainNotFound
from gobuild.metadata import MetadataChannel

log = logging.getLogger(__name__)


def format_command(command: Sequence[str]) -> str:
    return " ".join(shlex.quote(str(part)) for part in command)


def _drain(pipe: IO[bytes], channel: MetadataChannel) -> None:
    with pipe:
        for raw in pipe:
            line = raw.rstrip(b"\n").decode("utf-8", errors="replace")
            channel.warning(line)


def spawn(
    command: Sequence[str],
    env: Mapping[str, str] | None,
    label: str,
    channel: MetadataChannel,
) -> tuple[subprocess.Popen[bytes], threading.Thread]:
    """Start the child with stderr piped and a thread forwarding it line by line."""
    try:
        child = subprocess.Popen(
            list(command),
            env=dict(env) if env is not None else None,
            stderr=subprocess.PIPE,
        )
    except FileNotFoundError:
        msg = f"Failed to find tool. Is {command[0]} installed? (building {label})"
        raise ToolchainNotFound(msg) from None
    except OSError as e:
        msg = f"Command {format_command(command)} for {label} failed to start: {e}"
        raise ToolchainExecutionFailed(msg, command=command) from e

    if child.stderr is None:
        child.kill()
        child.wait()
        msg = f"Command {format_command(command)} for {label} started without a stderr pipe"
        raise ToolchainExecutionFailed(msg, command=command)
    drain = threading.Thread(
        target=_drain,
        args=(child.stderr, channel),
        name=f"gobuild-stderr-{label}",
        daemon=True,
    )
    drain.start()
    return child, drain


def run(
    command: Sequence[str],
    env: Mapping[str, str] | None,
    label: str,
    channel: MetadataChannel,
) -> None:
    """Run command to completion. Raises ToolchainNotFound or ToolchainExecutionFailed.

    Returns only after every stderr line has been forwarded.
    """
    log.debug("Running %s", format_command(command))
    child, drain = spawn(command, env, label, channel)
    try:
        returncode = child.wait()
    finally:
        drain.join()
    log.info("%s exited with status %d", command[0], returncode)

    if returncode != 0:
        if returncode < 0:
            status = f"terminated by signal {-returncode}"
        else:
            status = f"status code {returncode}"
        msg = (
            f"Command {format_command(command)} for {label} "
            f"did not execute successfully ({status})."
        )
        raise ToolchainExecutionFailed(msg, command=command, returncode=returncode)
