"""Immutable value objects for the kumiko domain.

Grid-space geometry (Point, Line, Intersection) uses integer grid
coordinates. Physical quantities (Notch.dist, DesignStrip.length_mm,
Piece.x) are in millimeters.
"""

from __future__ import annotations

import secrets
import string
from dataclasses import dataclass, replace
from enum import Enum

_ID_ALPHABET = string.digits + string.ascii_lowercase


def new_id() -> str:
    """Generate a short random identifier such as ``id_k3v9x0a2q``."""
    return "id_" + "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))


class ExportPass(str, Enum):
    """Manufacturing pass selected for export.

    - ALL: profile cuts and every notch
    - TOP: top-face notches only, no profile cuts (piece stays in the stock)
    - BOTTOM: bottom-face notches plus profile cuts
    """

    ALL = "all"
    TOP = "top"
    BOTTOM = "bottom"


class DisplayUnit(str, Enum):
    """Units used when presenting physical values to people."""

    MM = "mm"
    IN = "in"


@dataclass(frozen=True)
class Point:
    """A grid coordinate."""

    x: float
    y: float


@dataclass(frozen=True)
class Line:
    """A grid-space line segment drawn by the user."""

    id: str
    x1: float
    y1: float
    x2: float
    y2: float

    @property
    def start(self) -> Point:
        return Point(self.x1, self.y1)

    @property
    def end(self) -> Point:
        return Point(self.x2, self.y2)

    @property
    def is_horizontal(self) -> bool:
        return self.y1 == self.y2

    @property
    def is_vertical(self) -> bool:
        return self.x1 == self.x2

    @property
    def is_degenerate(self) -> bool:
        """True when both endpoints coincide."""
        return self.x1 == self.x2 and self.y1 == self.y2

    def has_endpoint(self, x: float, y: float) -> bool:
        """Check whether (x, y) is one of the segment's endpoints."""
        return (x == self.x1 and y == self.y1) or (x == self.x2 and y == self.y2)


@dataclass(frozen=True)
class Intersection:
    """A unique physical crossing point between two lines.

    Attributes:
        id: Deterministic id ``int_{line1_id}_{line2_id}``.
        x: Grid x coordinate.
        y: Grid y coordinate.
        line1_id: First line of the pair (line map insertion order).
        line2_id: Second line of the pair.
        line1_over: True when line1 sits physically on top.
    """

    id: str
    x: float
    y: float
    line1_id: str
    line2_id: str
    line1_over: bool

    def involves(self, line_id: str) -> bool:
        return line_id in (self.line1_id, self.line2_id)

    def other_line_id(self, line_id: str) -> str:
        return self.line2_id if line_id == self.line1_id else self.line1_id


@dataclass(frozen=True)
class Notch:
    """A half-depth relief cut on a strip.

    Attributes:
        id: Notch id ``{intersection_id}_{line_id}``.
        other_line_id: Line that crosses the strip at this notch.
        dist: Distance from the strip's start in millimeters.
        from_top: True when the top face is relieved.
    """

    id: str
    other_line_id: str
    dist: float
    from_top: bool

    def flipped(self) -> Notch:
        """Return the same notch seen with the strip turned over."""
        return replace(self, from_top=not self.from_top)


@dataclass(frozen=True)
class DesignStrip(Line):
    """The physical, cuttable strip derived from one grid Line.

    ``id`` is a geometry-derived identity (length plus notch pattern) that
    does not depend on drawing direction or which face is up, so identical
    strips share an id. ``source_line_id`` points back to the grid Line.

    Attributes:
        length_mm: Physical length after butt-joint trimming.
        notches: Notches sorted by ascending distance.
        source_line_id: Originating Line.id.
        display_code: Short base-36 label derived from ``id``.
    """

    length_mm: float = 0.0
    notches: tuple[Notch, ...] = ()
    source_line_id: str = ""
    display_code: str = ""

    @property
    def has_top_notches(self) -> bool:
        return any(n.from_top for n in self.notches)

    @property
    def has_bottom_notches(self) -> bool:
        return any(not n.from_top for n in self.notches)


@dataclass(frozen=True)
class Piece:
    """One placement of a DesignStrip inside a layout row.

    Attributes:
        id: Piece identifier.
        line_id: DesignStrip.id of the placed strip.
        x: Offset along the row in millimeters.
        y: Vertical offset (kept for the canvas, unused by packing).
        row_index: Row the piece is placed on, row 0 is the top row.
    """

    id: str
    line_id: str
    x: float
    y: float = 0.0
    row_index: int = 0

    def __post_init__(self) -> None:
        if self.row_index < 0:
            raise ValueError("Row index must be non-negative")


@dataclass(frozen=True)
class Cut:
    """A manual full-depth cut line from legacy layouts."""

    id: str
    x1: float
    y1: float
    x2: float
    y2: float
