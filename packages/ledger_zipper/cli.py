"""CLI for the ``ledger_zipper`` package.

This module exposes the command handler :func:`cmd_zip` and a Typer-based
console interface (``zipper <dest> <master> <source>``). Environment variables
are loaded from a local ``.env`` using ``python-dotenv`` before settings are
resolved. Merge logic lives in :mod:`ledger_zipper.api`.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv

from .logging_setup import configure_logging

USAGE = """\
Usage:

  zipper dest master source

This program takes two ledger files and "zips" them together to make a single
file. All directives will be moved to the beginning of the file!

For this to work properly, each transaction needs an "ID" K/V to be set to a
unique transaction ID, otherwise it is not possible to sync partial files
and syncing full files is not deterministic. Any non-deterministic result is
an error.
"""


def cmd_zip(
    dest: str,
    master: str,
    source: str,
    *,
    encoding: str | None = None,
    log_level: str | None = None,
) -> int:
    """Merge ``source`` into ``master`` and write the result to ``dest``.

    Errors are written to stderr and the function returns a non-zero exit
    status; ``dest`` is left untouched in that case. On success, returns ``0``.
    """

    from .api import zip_files
    from .config import load_settings
    from .errors import ZipperError

    try:
        settings = load_settings(encoding=encoding, log_level=log_level)
    except ZipperError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    configure_logging(settings.log_level)

    try:
        zip_files(dest, master, source, settings=settings)
    except ZipperError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
    rich_markup_mode=None,
)


@app.command(help=USAGE)
def zipper_cmd(
    dest: Annotated[str | None, typer.Argument(show_default=False)] = None,
    master: Annotated[str | None, typer.Argument(show_default=False)] = None,
    source: Annotated[str | None, typer.Argument(show_default=False)] = None,
    *,
    encoding: str | None = typer.Option(
        None, help="Text encoding of all three files (falls back to LEDGER_ZIPPER_ENCODING)."
    ),
    log_level: str | None = typer.Option(
        None, help="Log level (falls back to LEDGER_ZIPPER_LOG_LEVEL)."
    ),
) -> None:
    # Load environment from .env in CWD (override=False to keep existing env)
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)

    if dest == "help" or dest is None or master is None or source is None:
        typer.echo(USAGE, nl=False)
        raise typer.Exit(0)

    code = cmd_zip(dest, master, source, encoding=encoding, log_level=log_level)
    if code:
        raise typer.Exit(code)


if __name__ == "__main__":  # pragma: no cover - exercised via the console script
    app()
