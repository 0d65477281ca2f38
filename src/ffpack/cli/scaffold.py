"""
Scaffold command - Print a placeholder manifest
"""

import logging

from pydantic_core import PydanticSerializationError
import typer

from ffpack.cli.shared import err_console
from ffpack.core import Pack

logger = logging.getLogger(__name__)


def scaffold() -> None:
    """Print a new placeholder manifest as pretty JSON"""
    pack = Pack.default()

    try:
        output = pack.to_json()
    except PydanticSerializationError as e:
        logger.debug("Serializing the default pack failed", exc_info=True)
        err_console.print(f"[red]Failed to serialize manifest:[/red] {e}")
        raise typer.Exit(1) from e

    typer.echo(output)
