from __future__ import annotations

import argparse
import sys
from collections.abc import Callable, Mapping

from image_ci.common import ImageCiError


def command_map() -> dict[str, Callable[[], None]]:
    """
    Map CLI command names to Python entry functions.

    Each value is a `main()` function from one generator module.
    """
    from image_ci.generate_config import main as generate_config
    from image_ci.show_images import main as show_images

    return {
        "generate-config": generate_config,
        "show-images": show_images,
    }


def build_parser(commands: Mapping[str, Callable[[], None]]) -> argparse.ArgumentParser:
    """Build argument parser with one positional command choice."""
    parser = argparse.ArgumentParser(
        prog="python3 -m image_ci.cli",
        description="Generate or inspect the CircleCI config for the image folders.",
    )
    parser.add_argument("command", choices=sorted(commands.keys()))
    return parser


def run_command(command: str, commands: Mapping[str, Callable[[], None]]) -> None:
    """
    Run one registered command.

    `commands` is passed in to keep this function easy to test.
    """
    commands[command]()


def main(
    argv: list[str] | None = None,
    commands: Mapping[str, Callable[[], None]] | None = None,
) -> None:
    if commands is None:
        commands = command_map()
    parser = build_parser(commands)
    args = parser.parse_args(argv)

    try:
        run_command(args.command, commands)
    except ImageCiError as exc:
        # Keep failures short: they name the folder to rename or the skip entry to fix.
        print(str(exc), file=sys.stderr)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
