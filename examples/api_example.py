"""
Example: Using MakeInsertions as a Python library

Builds a small insert and template in memory, places the insert twice, saves
the result and reads the recorded regions back.
"""

import sys
from pathlib import Path

from PySide6.QtGui import QColor, QImage

from makeinsertions.api import Compositor, build_spec_set, read_image, read_insertions, write_image


def solid(width, height, color):
    image = QImage(width, height, QImage.Format_RGB32)
    image.fill(QColor(*color))
    return image


def main(output_dir: Path):
    print("=== MakeInsertions API Example ===\n")

    compositor = Compositor()

    insert = solid(64, 32, (220, 40, 40))
    template = solid(400, 300, (250, 250, 250))

    specs = build_spec_set(["120x60+20+20", "100x100+250+150/30"])
    result = compositor.composite(insert, template, specs)

    for placement in result.placements:
        print(f"{placement.key}: box {placement.target}, drawn in {placement.region}")

    output_path = write_image(result.image, output_dir / "template_with_inserts.png")
    print(f"\nSaved to: {output_path}")

    print("Recorded regions:", read_insertions(read_image(output_path)))


if __name__ == "__main__":
    main(Path(sys.argv[1]) if len(sys.argv) > 1 else Path("examples/output"))
