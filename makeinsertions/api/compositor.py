"""
MakeInsertions Compositor

Places transformed copies of one insert image into a template image at every
region of an insertion spec set and records those regions in the output's
metadata.
"""

from pathlib import Path
from typing import Optional, Sequence, Union

from PySide6.QtGui import QImage

from makeinsertions import logger
from makeinsertions.api.codec import read_image, write_image
from makeinsertions.api.metadata import clear_insertions, write_count, write_insertion
from makeinsertions.api.spec import format_insert_spec
from makeinsertions.api.spec_set import build_spec_set, collect_spec_texts
from makeinsertions.core.configs import InsertionConfig
from makeinsertions.core.defs import (
    CompositeResult,
    EmptySpecSetError,
    Geometry,
    InsertSpec,
    Placement,
)
from makeinsertions.utils.image import (
    composite_over,
    copy_text,
    key_color_transparent,
    resize_to,
    rotate,
)
from makeinsertions.utils.utils import ensure_qapp


def placement_region(target: Geometry, width: int, height: int) -> Geometry:
    """
    Center a width x height image inside target.

    Each half is truncated separately, so a 200x100 box holding a 100x100
    image gives an offset of (50, 0).
    """
    dx = target.width // 2 - width // 2
    dy = target.height // 2 - height // 2
    return Geometry(width=width, height=height, x=target.x + dx, y=target.y + dy)


class Compositor:
    """
    Composites an insert image into a template at a set of regions.

    Example:
        >>> from makeinsertions.api import Compositor
        >>> compositor = Compositor()
        >>> result = compositor.composite_files(
        ...     "logo.png", "template.png", "out.png", ["200x150+50+60/15"]
        ... )
        >>> result.count
        1
    """

    def __init__(self, config: Optional[InsertionConfig] = None):
        ensure_qapp()
        self.config = config or InsertionConfig()

    def background_color(self, insert: QImage) -> tuple[int, int, int]:
        """Colour keyed out of the insert: the configured one, or its top-left pixel."""
        if not self.config.sample_background:
            return tuple(self.config.background_color)
        color = insert.pixelColor(0, 0)
        return (color.red(), color.green(), color.blue())

    def transform_insert(
        self, insert: QImage, spec: InsertSpec, background: tuple[int, int, int]
    ) -> QImage:
        """Rotate, zoom and key a fresh copy of insert for one region."""
        smooth = self.config.smooth_transform
        tolerance = self.config.key_tolerance
        # keyed before resampling too, so smoothed edges fade to transparent
        # instead of blending with the background colour
        image = key_color_transparent(insert.copy(), background, tolerance)
        image = rotate(image, spec.rotation, smooth=smooth)
        image = resize_to(
            image,
            spec.geometry.width,
            spec.geometry.height,
            keep_aspect_ratio=self.config.keep_aspect_ratio,
            smooth=smooth,
        )
        logger.debug(
            f"Insert rotated by {spec.rotation} and zoomed to "
            f"{image.width()}x{image.height()}"
        )
        return key_color_transparent(image, background, tolerance)

    def composite(
        self, insert: QImage, target: QImage, specs: Sequence[InsertSpec]
    ) -> CompositeResult:
        """
        Place insert into a copy of target at every spec.

        Args:
            insert: Insert image, never modified
            target: Template image, never modified
            specs: Validated insertion specs

        Returns:
            CompositeResult with the output image and one Placement per spec
        """
        if not specs:
            raise EmptySpecSetError("cannot composite without insertion specs")

        fmt = QImage.Format_ARGB32 if target.hasAlphaChannel() else QImage.Format_RGB32
        output = target.convertToFormat(fmt)
        copy_text(target, output)

        background = self.background_color(insert)
        result = CompositeResult(image=output)

        # metadata indices follow sorted order
        for index, spec in enumerate(sorted(specs), start=1):
            image = self.transform_insert(insert, spec, background)
            region = placement_region(spec.geometry, image.width(), image.height())
            composite_over(output, image, region.x, region.y)

            key = write_insertion(output, index, spec, self.config)
            result.placements.append(
                Placement(
                    index=index,
                    spec=spec,
                    target=spec.geometry,
                    region=region,
                    key=key,
                )
            )
            logger.info(
                f"Placed insert {index} at {format_insert_spec(spec)} "
                f"(drawn at {region.x},{region.y})"
            )

        clear_insertions(output, result.count + 1, self.config)
        write_count(output, result.count, self.config)
        return result

    def composite_files(
        self,
        insert_path: Union[str, Path],
        target_path: Union[str, Path],
        output_path: Union[str, Path],
        spec_texts: Optional[Sequence[str]] = None,
    ) -> CompositeResult:
        """
        Read both images, build the spec set, composite and save.

        When spec_texts is empty the regions recorded in the target's metadata
        are reused. Nothing is written if any step before saving fails.
        """
        insert = read_image(insert_path, self.config)
        target = read_image(target_path, self.config)

        texts = collect_spec_texts(spec_texts, target, self.config)
        specs = build_spec_set(texts, self.config)

        result = self.composite(insert, target, specs)
        write_image(result.image, output_path)
        return result
