from PySide6.QtGui import QImage

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, order=True)
class Geometry:
    """
    Rectangle in the target image's pixel space.

    Ordering is lexicographic over (width, height, x, y).
    """

    width: int
    height: int
    x: int = 0
    y: int = 0

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    @property
    def is_degenerate(self) -> bool:
        return self.width <= 0 or self.height <= 0


# reserved zero-size value, never part of a validated set
INVALID_GEOMETRY = Geometry(0, 0, 0, 0)


@dataclass(frozen=True, order=True)
class InsertSpec:
    """One insertion region: where to place the insert and how far to rotate it."""

    geometry: Geometry
    rotation: float = 0.0


@dataclass(frozen=True)
class ParseResult:
    text: str
    spec: InsertSpec | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.spec is not None and self.error is None


@dataclass(frozen=True)
class Placement:
    index: int
    spec: InsertSpec
    # box recorded in metadata
    target: Geometry
    # box the resized insert was actually blended into
    region: Geometry
    key: str


@dataclass
class CompositeResult:
    image: QImage = field(default=None)
    placements: list[Placement] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.placements)


class InsertionError(Exception):
    """Base class for every failure that aborts an insertion run."""


class MalformedSpecError(InsertionError):
    def __init__(self, text: str, reason: str = "malformed insertion spec"):
        self.text = text
        self.reason = reason
        super().__init__(f'{reason}: "{text}"')


class DuplicateSpecError(InsertionError):
    def __init__(self, text: str):
        self.text = text
        super().__init__(
            f'insertion spec "{text}" is a duplicate, check your list of insert specs'
        )


class EmptySpecSetError(InsertionError):
    def __init__(self, message: str = "no insertion specs given or found in template"):
        super().__init__(message)


class ImageIOError(InsertionError):
    def __init__(self, path: Path | str, message: str):
        self.path = Path(path)
        super().__init__(f'{message}: "{self.path}"')
