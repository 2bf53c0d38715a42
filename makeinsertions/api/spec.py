"""
Insertion Spec Parsing

Converts insertion descriptors such as ``200x150+50+60/15`` into InsertSpec
values and back.
"""

import math
import re

from makeinsertions import logger
from makeinsertions.core.defs import Geometry, InsertSpec, ParseResult

ROTATION_DELIMITER = "/"

# WxH with optional +X+Y; each offset may be "+5", "-5" or "+-5"
_GEOMETRY_RE = re.compile(
    r"^(?P<width>\d+)x(?P<height>\d+)"
    r"(?:(?P<x>\+-?\d+|-\d+)(?P<y>\+-?\d+|-\d+))?$"
)


def _offset(token: str | None) -> int:
    if not token:
        return 0
    return int(token[1:]) if token.startswith("+") else int(token)


def parse_geometry(text: str) -> Geometry | None:
    """Parse ``WxH+X+Y``; returns None when text is not a geometry."""
    match = _GEOMETRY_RE.match(text.strip())
    if match is None:
        return None
    return Geometry(
        width=int(match["width"]),
        height=int(match["height"]),
        x=_offset(match["x"]),
        y=_offset(match["y"]),
    )


def parse_rotation(text: str, strict: bool = False) -> float | None:
    """
    Parse the rotation part of a descriptor.

    Unreadable text becomes 0 unless strict, in which case None is returned.
    """
    text = text.strip()
    if not text:
        return None if strict else 0.0
    try:
        rotation = float(text)
    except ValueError:
        rotation = math.nan
    if not math.isfinite(rotation):
        if strict:
            return None
        logger.debug(f'Rotation "{text}" is not a number, using 0')
        return 0.0
    # normalise -0.0 so it formats like 0
    return rotation + 0.0


def parse_insert_spec(text: str, strict_rotation: bool = False) -> ParseResult:
    """
    Parse an insertion descriptor.

    Args:
        text: Descriptor in the form ``WxH+X+Y[/degrees]``
        strict_rotation: Treat an unreadable rotation as a parse failure

    Returns:
        ParseResult: Carries the InsertSpec on success, an error message otherwise.
            Malformed input never raises.
    """
    geometry_text, delimiter, rotation_text = text.partition(ROTATION_DELIMITER)

    geometry = parse_geometry(geometry_text)
    if geometry is None:
        return ParseResult(text=text, error="malformed insertion geometry")
    if geometry.is_degenerate:
        return ParseResult(text=text, error="insertion geometry has zero size")

    rotation = 0.0
    if delimiter:
        rotation = parse_rotation(rotation_text, strict=strict_rotation)
        if rotation is None:
            return ParseResult(text=text, error="malformed insertion rotation")

    return ParseResult(text=text, spec=InsertSpec(geometry=geometry, rotation=rotation))


def format_rotation(rotation: float) -> str:
    if float(rotation).is_integer():
        return str(int(rotation))
    return repr(float(rotation))


def format_geometry(geometry: Geometry) -> str:
    return f"{geometry.width}x{geometry.height}{geometry.x:+d}{geometry.y:+d}"


def format_insert_spec(spec: InsertSpec) -> str:
    """
    Canonical descriptor for an InsertSpec.

    The rotation suffix is left out when the rotation is 0, so
    ``format_insert_spec(parse_insert_spec("100x100+0+0/0").spec)`` gives
    ``100x100+0+0``.
    """
    text = format_geometry(spec.geometry)
    if spec.rotation != 0:
        text += f"{ROTATION_DELIMITER}{format_rotation(spec.rotation)}"
    return text
