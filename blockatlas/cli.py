"""
BlockAtlas CLI - Command-line interface for building block atlases
"""

import logging
import os
import sys

import click

from blockatlas import __version__
from blockatlas.cache import create
from blockatlas.exceptions import AtlasBuildError
from blockatlas.layout import default_layout
from blockatlas.schema.settings import AtlasSettings


@click.group()
@click.version_option(version=__version__)
def cli():
    """
    BlockAtlas - Build cached isometric block images from terrain.png.

    Examples:
        blockatlas build ./images -B 6
        blockatlas lookup 53 2
    """
    pass


@cli.command()
@click.argument('imgpath', required=False, type=click.Path(file_okay=False))
@click.option('-B', '--scale', type=int, default=6, show_default=True,
              help='Half-tile size in pixels; each block image is 4B x 4B')
@click.option('--verbose', '-v', is_flag=True, help='Show cache decisions and build details')
def build(imgpath, scale, verbose):
    """
    Build (or validate) blocks-B.png in IMGPATH.

    IMGPATH must contain terrain.png unless a complete blocks-B.png is
    already there. Defaults to $BLOCKATLAS_IMGPATH, then the current
    directory.

    Examples:
        blockatlas build ./images -B 6
        blockatlas build -B 2 --verbose
    """
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )
    imgpath = imgpath or os.environ.get('BLOCKATLAS_IMGPATH', '.')

    try:
        images = create(scale, imgpath)
    except AtlasBuildError as e:
        click.secho(f"Error: {e}", fg='red', err=True)
        sys.exit(1)
    except OSError as e:
        click.secho(f"Error: {e}", fg='red', err=True)
        sys.exit(1)

    width, height = images.size
    atlas_path = AtlasSettings.for_path(imgpath).atlas_path(scale)
    click.echo(f"Atlas: {atlas_path} ({width}x{height}, {images.layout.num_images} block images at B={scale})")
    click.echo(f"  Opaque: {sum(images.opacity)}")
    click.echo(f"  Transparent: {sum(images.transparency)}")
    click.secho(f"✓ Success! blocks-{scale} ready in {imgpath}", fg='green')


@cli.command()
@click.argument('block_id', type=click.IntRange(0, 255))
@click.argument('data', type=click.IntRange(0, 15), default=0)
def lookup(block_id, data):
    """
    Show which atlas slot a block id/data pair is drawn from.

    Examples:
        blockatlas lookup 1
        blockatlas lookup 53 2
    """
    layout = default_layout()
    slot = layout.offsets.lookup(block_id, data)
    label = layout.label(slot) or "no image"
    click.echo(f"{block_id}:{data} -> slot {slot} ({label})")


def main():
    """Entry point for the CLI"""
    cli()


if __name__ == '__main__':
    main()
