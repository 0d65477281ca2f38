"""
Main CLI entry point
"""

import typer

from ffpack.cli import scaffold
from ffpack.cli.shared import setup_logging

app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
)

app.command()(scaffold.scaffold)


def main() -> None:
    """Main entry point"""
    setup_logging()
    app()


if __name__ == "__main__":
    main()
