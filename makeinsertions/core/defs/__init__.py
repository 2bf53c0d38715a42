from .defs import (  # noqa
    INVALID_GEOMETRY,
    CompositeResult,
    DuplicateSpecError,
    EmptySpecSetError,
    Geometry,
    ImageIOError,
    InsertionError,
    InsertSpec,
    MalformedSpecError,
    ParseResult,
    Placement,
)
