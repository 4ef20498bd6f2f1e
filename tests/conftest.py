"""Pytest fixtures for gobuild tests."""

import json
import stat
import sys
from pathlib import Path

import pytest

HOST_VARS = (
    "OUT_DIR",
    "CARGO_CFG_TARGET_ARCH",
    "CARGO_CFG_TARGET_OS",
    "TARGET",
    "HOST",
    "TARGET_CC",
    "HOST_CC",
    "CC",
)

FAKE_GO = """#!{python}
import json
import os
import sys

record = os.environ.get("FAKE_GO_RECORD")
if record:
    keys = ("CGO_ENABLED", "CC", "GOARCH", "GOOS", "GOFLAGS")
    with open(record, "w") as f:
        json.dump({{"argv": sys.argv[1:], "env": {{k: os.environ.get(k) for k in keys}}}}, f)
for i in range(int(os.environ.get("FAKE_GO_STDERR_LINES", "0"))):
    sys.stderr.write("line %d from go\\n" % i)
sys.stderr.flush()
sys.exit(int(os.environ.get("FAKE_GO_EXIT", "0")))
"""


@pytest.fixture
def cargo_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Cargo-like build-script environment. Returns OUT_DIR."""
    for name in HOST_VARS:
        monkeypatch.delenv(name, raising=False)
    out_dir = tmp_path / "out"
    out_dir.mkdir()
    monkeypatch.setenv("OUT_DIR", str(out_dir))
    monkeypatch.setenv("CARGO_CFG_TARGET_ARCH", "x86_64")
    monkeypatch.setenv("CARGO_CFG_TARGET_OS", "linux")
    monkeypatch.setenv("CC", "/usr/bin/cc")
    return out_dir


@pytest.fixture
def bare_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """No Cargo variables at all."""
    for name in HOST_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_go(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Executable standing in for `go`. Records argv/env for the go_record fixture."""
    if sys.platform.startswith("win"):
        pytest.skip("fake go executable needs a POSIX shebang")
    script = tmp_path / "fake-go"
    script.write_text(FAKE_GO.format(python=sys.executable))
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    monkeypatch.setenv("FAKE_GO_RECORD", str(tmp_path / "record.json"))
    return script


@pytest.fixture
def go_record(tmp_path: Path):
    """Callable returning what the fake go executable recorded on its last run."""

    def _read() -> dict:
        return json.loads((tmp_path / "record.json").read_text())

    return _read
