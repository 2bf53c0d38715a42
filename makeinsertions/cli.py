"""
MakeInsertions CLI

Command-line interface for placing an insert image into a template and for
listing the insertion regions a template already records.
"""

from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError

from makeinsertions import logger
from makeinsertions.api import Compositor, format_insert_spec, read_image, read_insertions
from makeinsertions.core.configs import InsertionConfig, load_config
from makeinsertions.core.defs import InsertionError

app = typer.Typer(
    name="make-insertions",
    help="Overlay an insert image onto a template at one or more regions",
    add_completion=False,
    no_args_is_help=True,
)


def _resolve_config(
    config: Optional[Path], coalesce_duplicates: bool, strict_rotation: bool
) -> InsertionConfig:
    base = load_config(config) if config else InsertionConfig()
    update = {}
    if coalesce_duplicates:
        update["duplicate_policy"] = "coalesce"
    if strict_rotation:
        update["strict_rotation"] = True
    return base.model_copy(update=update) if update else base


@app.command()
def insert(
    images: Optional[List[Path]] = typer.Argument(
        None, help="INSERT TARGET OUTPUT image paths (options take precedence)"
    ),
    insert_img: Optional[Path] = typer.Option(
        None, "-i", "--insert-img", help="Image to insert"
    ),
    target_img: Optional[Path] = typer.Option(
        None, "-t", "--target-img", help="Template image to insert into"
    ),
    output_img: Optional[Path] = typer.Option(
        None, "-o", "--output-img", help="Output image path"
    ),
    insert_specs: Optional[List[str]] = typer.Option(
        None,
        "-w",
        "--insert-spec",
        help="Insertion region as WxH+X+Y[/degrees]; repeatable. "
        "When omitted, regions recorded in the template are reused.",
    ),
    config: Optional[Path] = typer.Option(
        None, "--config", help="Python file defining an 'insertion_config' dict"
    ),
    coalesce_duplicates: bool = typer.Option(
        False, "--coalesce-duplicates", help="Merge duplicate specs instead of failing"
    ),
    strict_rotation: bool = typer.Option(
        False, "--strict-rotation", help="Fail on a rotation that is not a number"
    ),
):
    """
    Insert an image into a template at every given region.

    Example:
        make-insertions insert logo.png template.png out.png \\
            -w 200x150+50+60/15 -w 100x100+400+60
    """
    paths = list(images or [])
    insert_img = insert_img or (paths.pop(0) if paths else None)
    target_img = target_img or (paths.pop(0) if paths else None)
    output_img = output_img or (paths.pop(0) if paths else None)

    if paths or not (insert_img and target_img and output_img):
        typer.echo(
            "Error: expected exactly an insert, a target and an output image", err=True
        )
        raise typer.Exit(1)

    try:
        compositor = Compositor(
            _resolve_config(config, coalesce_duplicates, strict_rotation)
        )
        result = compositor.composite_files(
            insert_img, target_img, output_img, insert_specs
        )
    except (InsertionError, ValidationError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        logger.exception(e)
        raise typer.Exit(1)

    for placement in result.placements:
        typer.echo(f"  {placement.key}: {format_insert_spec(placement.spec)}")
    typer.echo(f"Saved {result.count} insertion(s) to: {output_img}")


@app.command()
def display(
    image: Path = typer.Argument(..., help="Image whose insertion regions to list"),
    config: Optional[Path] = typer.Option(
        None, "--config", help="Python file defining an 'insertion_config' dict"
    ),
):
    """
    List the insertion regions recorded in an image without compositing.
    """
    try:
        resolved = _resolve_config(config, False, False)
        texts = read_insertions(read_image(image, resolved), resolved)
    except (InsertionError, ValidationError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if not texts:
        typer.echo(f"No insertions recorded in {image}")
        return

    typer.echo(f"Insertions recorded in {image}:")
    for index, text in enumerate(texts, start=1):
        typer.echo(f"  {index}: {text}")


@app.command()
def version():
    """Show MakeInsertions version and the image stack it was built with."""
    import cv2
    import numpy as np
    import PySide6
    from PySide6.QtCore import qVersion

    from makeinsertions import __version__

    typer.echo(f"MakeInsertions version {__version__}")
    typer.echo(f"   Using Qt {qVersion()} through PySide6 {PySide6.__version__}.")
    typer.echo(f"   Using NumPy {np.__version__} and OpenCV {cv2.__version__}.")


def main():
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
