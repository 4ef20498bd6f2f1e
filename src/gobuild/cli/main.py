"""Main CLI entry point for gobuild."""

import sys

from gobuild.cli import compile_cmd


def main() -> None:
    """Main CLI entry point."""
    if len(sys.argv) < 2:
        print("Usage: gobuild <command> [args...]", file=sys.stderr)
        print("Commands:", file=sys.stderr)
        print(
            "  compile <lib> [files...]  - Build a cgo package into lib<lib>.a or a shared library",
            file=sys.stderr,
        )
        sys.exit(1)

    command = sys.argv[1]

    if command == "compile":
        compile_cmd.run_compile_argv()
    else:
        print(f"Error: Unknown command: {command}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
