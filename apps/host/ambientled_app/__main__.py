"""``python -m ambientled_app`` mirrors the screen unless another command is named."""

from __future__ import annotations

import sys

try:
    from .cli import main as cli_main
except ImportError:
    # executed as a plain script, no parent package
    from ambientled_app.cli import main as cli_main


def with_default_command(args: list[str]) -> list[str]:
    if any(not arg.startswith("-") for arg in args):
        return list(args)
    return [*args, "run"]


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    return int(cli_main(with_default_command(args)))


if __name__ == "__main__":
    raise SystemExit(main())
