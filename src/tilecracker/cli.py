import logging
import pathlib
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import IO

import typer

from tilecracker.aseprite.document import from_path, list_chunks, render_chunks
from tilecracker.errors import TileCrackerError
from tilecracker.graphics.image import tile_sheet
from tilecracker.kernel.preset import aseprite
from tilecracker.tic.mapping import encode_map
from tilecracker.tic.render import render_map, render_palette, render_tiles

app = typer.Typer()

logger = logging.getLogger('tilecracker')


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(levelname)s: %(message)s',
    )


@contextmanager
def open_output(path: pathlib.Path | None) -> Iterator[IO[str]]:
    if path is None:
        yield sys.stdout
        return
    with path.open('w') as stream:
        yield stream


@contextmanager
def fatal_errors() -> Iterator[None]:
    try:
        yield
    except (TileCrackerError, OSError) as exc:
        logger.error(exc)
        raise typer.Exit(code=1) from exc


@app.command()
def convert(
    filename: pathlib.Path = typer.Argument(..., help='.aseprite file to read from'),
    output: pathlib.Path | None = typer.Option(
        None, '--output', '-o', help='write cartridge text here instead of stdout'
    ),
    sheet: pathlib.Path | None = typer.Option(
        None, '--sheet', help='also save the tiles as a sprite sheet png'
    ),
    strict: bool = typer.Option(
        False, '--strict', help='fail when the map does not fit in TIC-80 map'
    ),
    verbose: bool = typer.Option(False, '--verbose', '-v'),
) -> None:
    """Convert frame 1 of an indexed .aseprite file to TIC-80 tiles and map."""
    setup_logging(verbose)
    cfg = aseprite(errors='strict' if strict else 'ignore')

    with fatal_errors(), open_output(output) as stream:
        # palette goes out as soon as it is read, a later error leaves it behind
        doc = from_path(
            filename,
            cfg,
            on_palette=lambda table: render_palette(table, stream=stream),
        )
        render_tiles(doc.tiles, stream=stream)
        rows = list(encode_map(cfg, list(doc.layers), doc.width, doc.height))
        render_map(rows, stream=stream)

        if sheet:
            tile_sheet(doc.tiles, doc.palette).save(sheet)


@app.command()
def chunks(
    filename: pathlib.Path = typer.Argument(..., help='.aseprite file to read from'),
    verbose: bool = typer.Option(False, '--verbose', '-v'),
) -> None:
    """List the chunks of the first frame."""
    setup_logging(verbose)
    with fatal_errors(), filename.open('rb') as resource:
        render_chunks(list_chunks(aseprite, resource), stream=sys.stdout)


if __name__ == '__main__':
    app()
