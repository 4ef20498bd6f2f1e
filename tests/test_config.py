"""Tests for gobuild.config (YAML build files)."""

from pathlib import Path

import pytest

from gobuild.config import load_build_file, resolve_build_file


def _write(path: Path, text: str) -> Path:
    path.write_text(text)
    return path


class TestResolveBuildFile:
    def test_fills_defaults(self) -> None:
        out = resolve_build_file({"library": "hello"})
        assert out["buildmode"] == "c-archive"
        assert out["files"] == []
        assert out["cargo_metadata"] is True
        assert out["trim_paths"] is False

    def test_unknown_keys_rejected(self) -> None:
        with pytest.raises(ValueError, match="unknown keys: gopath"):
            resolve_build_file({"library": "hello", "gopath": "/go"})

    def test_library_required(self) -> None:
        with pytest.raises(ValueError, match="library"):
            resolve_build_file({"files": ["a.go"]})

    def test_bad_buildmode(self) -> None:
        with pytest.raises(ValueError, match="Unknown buildmode 'plugin'"):
            resolve_build_file({"library": "x", "buildmode": "plugin"})

    def test_wrong_types(self) -> None:
        with pytest.raises(ValueError, match="'files' must be a list"):
            resolve_build_file({"library": "x", "files": "a.go"})
        with pytest.raises(ValueError, match="'trim_paths' must be true or false"):
            resolve_build_file({"library": "x", "trim_paths": "yes"})
        with pytest.raises(ValueError, match="'env' must be a mapping"):
            resolve_build_file({"library": "x", "env": ["A=1"]})

    @pytest.mark.parametrize("value", [None, True, False, ["a"], {"a": 1}])
    def test_env_values_must_be_scalars(self, value: object) -> None:
        with pytest.raises(ValueError, match="env value for 'FOO'"):
            resolve_build_file({"library": "x", "env": {"FOO": value}})

    def test_env_numbers_accepted(self) -> None:
        out = resolve_build_file({"library": "x", "env": {"GOAMD64": 3, "RATIO": 1.5, "S": "v"}})
        assert out["env"] == {"GOAMD64": 3, "RATIO": 1.5, "S": "v"}

    @pytest.mark.parametrize("entry", [{"a": 1}, 3, None, ""])
    def test_files_entries_must_be_strings(self, entry: object) -> None:
        with pytest.raises(ValueError, match="'files' entries must be non-empty strings"):
            resolve_build_file({"library": "x", "files": ["a.go", entry]})

    def test_non_mapping(self) -> None:
        with pytest.raises(ValueError, match="mapping"):
            resolve_build_file(["library"])  # type: ignore[arg-type]


class TestLoadBuildFile:
    def test_full_file(self, tmp_path: Path, cargo_env: Path) -> None:
        path = _write(
            tmp_path / "gobuild.yaml",
            "library: hello\n"
            "files: [go/main.go, go/util.go]\n"
            "out_dir: target/go\n"
            "buildmode: c-shared\n"
            "compiler: /opt/go/bin/go\n"
            "goarch: arm64\n"
            "goos: darwin\n"
            "ldflags: -s -w\n"
            "trim_paths: true\n"
            "cargo_metadata: false\n"
            "env:\n"
            "  GOFLAGS: -mod=vendor\n"
            "  GOAMD64: 3\n",
        )
        lib_name, build = load_build_file(path)
        assert lib_name == "hello"
        inv = build.invocation(lib_name)
        base = tmp_path.resolve()
        assert inv.program == "/opt/go/bin/go"
        assert inv.out_dir == base / "target" / "go"
        assert inv.args[:3] == ("build", "-buildmode", "c-shared")
        assert "-trimpath" in inv.args
        assert inv.args[-2:] == (str(base / "go" / "main.go"), str(base / "go" / "util.go"))
        assert inv.env_overrides["GOARCH"] == "arm64"
        assert inv.env_overrides["GOOS"] == "darwin"
        assert inv.env_overrides["GOFLAGS"] == "-mod=vendor"
        assert inv.env_overrides["GOAMD64"] == "3"

    def test_minimal_file_uses_cargo_env(self, tmp_path: Path, cargo_env: Path) -> None:
        path = _write(tmp_path / "gobuild.yaml", "library: hello\nfiles: [a.go]\n")
        lib_name, build = load_build_file(path)
        inv = build.invocation(lib_name)
        assert inv.output_path == cargo_env / "libhello.a"
        assert inv.env_overrides["GOARCH"] == "amd64"

    def test_base_dir_override(self, tmp_path: Path, cargo_env: Path) -> None:
        cfg_dir = tmp_path / "cfg"
        cfg_dir.mkdir()
        path = _write(cfg_dir / "gobuild.yaml", "library: x\nfiles: [a.go]\n")
        _, build = load_build_file(path, base_dir=tmp_path)
        inv = build.invocation("x")
        assert inv.args[-1] == str(tmp_path.resolve() / "a.go")

    def test_blank_and_boolean_env_values_rejected(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "gobuild.yaml", "library: x\nenv:\n  FOO:\n  BAR: true\n")
        with pytest.raises(ValueError, match="env value for 'FOO'"):
            load_build_file(path)

    def test_empty_file(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "gobuild.yaml", "")
        with pytest.raises(ValueError, match="missing 'library'"):
            load_build_file(path)
