"""`gobuild compile` — run `go build` for a cgo package and print cargo directives."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import yaml

from gobuild.build import Build, fail
from gobuild.config import load_build_file
from gobuild.errors import CompileError
from gobuild.naming import BuildMode


def _parse_env(pairs: list[str]) -> list[tuple[str, str]]:
    out: list[tuple[str, str]] = []
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            msg = f"--env expects KEY=VALUE, got {pair!r}"
            raise ValueError(msg)
        out.append((key, value))
    return out


def run_compile_argv(argv: list[str] | None = None) -> None:
    """Parse argv, configure a Build, and compile (or print the command with --dry-run)."""
    import argparse

    if argv is None:
        argv = sys.argv[2:] if len(sys.argv) > 2 else []  # skip 'gobuild compile'
    ap = argparse.ArgumentParser(
        prog="gobuild compile",
        description="Compile a cgo package into a C archive or shared library",
    )
    ap.add_argument("library", nargs="?", help="Library name (lib<name>.a); required without --config")
    ap.add_argument("files", nargs="*", help="Go source files, passed to go build in order")
    ap.add_argument("--config", type=Path, default=None, help="YAML build file")
    ap.add_argument("--out-dir", type=Path, default=None, help="Output directory (default: $OUT_DIR)")
    ap.add_argument(
        "--buildmode",
        choices=[m.value for m in BuildMode],
        default=None,
        help="go build -buildmode (default: c-archive)",
    )
    ap.add_argument("--compiler", default=None, help="Go executable (default: go)")
    ap.add_argument("--goarch", default=None, help="GOARCH (default: from CARGO_CFG_TARGET_ARCH)")
    ap.add_argument("--goos", default=None, help="GOOS (default: from CARGO_CFG_TARGET_OS)")
    ap.add_argument("--ldflags", default=None, help="go build -ldflags")
    ap.add_argument("--trimpath", action="store_true", help="Pass -trimpath")
    ap.add_argument(
        "--env",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Extra toolchain environment (repeatable; wins over computed values)",
    )
    ap.add_argument("--no-metadata", action="store_true", help="Do not print cargo: directives")
    ap.add_argument("--dry-run", action="store_true", help="Print the go build command and exit")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        extra_env = _parse_env(args.env)
        if args.config is not None:
            lib_name, build = load_build_file(args.config)
            if args.library:
                lib_name = args.library
        else:
            if not args.library:
                ap.error("library is required without --config")
            lib_name, build = args.library, Build()
    except (OSError, yaml.YAMLError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)

    build.files(args.files)
    if args.out_dir is not None:
        build.out_dir(args.out_dir)
    if args.buildmode is not None:
        build.buildmode(args.buildmode)
    if args.compiler is not None:
        build.compiler(args.compiler)
    if args.goarch is not None:
        build.goarch(args.goarch)
    if args.goos is not None:
        build.goos(args.goos)
    if args.ldflags is not None:
        build.ldflags(args.ldflags)
    if args.trimpath:
        build.trim_paths(True)
    if args.no_metadata:
        build.cargo_metadata(False)
    for key, value in extra_env:
        build.env(key, value)

    if args.dry_run:
        try:
            invocation = build.invocation(lib_name)
        except CompileError as e:
            fail(e.message)
        for key, value in sorted(invocation.env_overrides.items()):
            print(f"{key}={value}")
        print(invocation.format_command())
        return

    build.compile(lib_name)
