import logging
import shutil
import sys
from pathlib import Path
from typing import Annotated, Iterable, Optional

from cyclopts import App, Parameter

import xread

app = App(
    help="Read files, transparently decompressing .zst, .xz, .gz and .bz2 by suffix.",
    version=xread.__version__,
)


def write(identifiers: Iterable[str], dst):
    for identifier in identifiers:
        with xread.open(identifier) as f:
            shutil.copyfileobj(f, dst)


@app.command()
def cat(
    *files: str,
    output: Annotated[Optional[Path], Parameter(name=["--output", "-o"])] = None,
    verbose: bool = False,
):
    """Decompress files and write them, concatenated, to stdout.

    Parameters
    ----------
    files: str
        Files to read; ``-`` reads stdin. Defaults to stdin.
    output: Optional[Path]
        Output file. Defaults to stdout.
    verbose: bool
        Log how each file is opened to stderr.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    identifiers = files or (xread.STDIN,)
    if output is None:
        write(identifiers, sys.stdout.buffer)
        sys.stdout.buffer.flush()
    else:
        with output.open("wb") as dst:
            write(identifiers, dst)


def run_app():
    app()
