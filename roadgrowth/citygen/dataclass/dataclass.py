"""Module for data classes describing road proposals and the roads they realize.

Angles are in degrees throughout. A heading of 0 points along +y and grows
clockwise, so a heading of 90 points along +x.
"""
import math
from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass(frozen=True)
class Point:
    """A point in a 2D plane."""
    x: float
    y: float

    def is_finite(self) -> bool:
        """Return True when neither coordinate is NaN or infinite."""
        return math.isfinite(self.x) and math.isfinite(self.y)

    def to_dict(self):
        """Convert the point to dictionary representation."""
        return {
            'x': self.x,
            'y': self.y
        }


@dataclass(frozen=True)
class Bounds:
    """An axis-aligned bounding box.

    (x, y) is the bottom-left corner of the bounding box
    width: width of the bounding box
    height: height of the bounding box
    """
    x: float
    y: float
    width: float
    height: float

    def intersects(self, other: 'Bounds') -> bool:
        """Checks if two Bounds objects' bounding boxes intersect."""
        return not (self.x + self.width < other.x or
                    self.x > other.x + other.width or
                    self.y + self.height < other.y or
                    self.y > other.y + other.height)

    def contains_point(self, point: Point) -> bool:
        """Checks if a point lies inside the box, edges included."""
        return (self.x <= point.x <= self.x + self.width and
                self.y <= point.y <= self.y + self.height)


@dataclass(frozen=True)
class RoadSpec:
    """Shape of a proposed road.

    Attributes:
        angle: Signed rotation in degrees relative to the incoming heading.
        length: Length in world units.
    """
    angle: float
    length: float


@dataclass(frozen=True)
class GrowthContext:
    """Where a proposed road grows from.

    Attributes:
        origin: Start point of the proposed road.
        prev_angle: Absolute heading in degrees that the road continues from.
    """
    origin: Point
    prev_angle: float


@dataclass(frozen=True)
class RoadQuery:
    """A pending proposal waiting in the growth queue.

    Attributes:
        timer: Tick at which the query becomes eligible; lower fires first.
        lifetime: Number of generations elapsed along this lineage.
        spec: Shape of the proposed road.
        context: Origin and incoming heading.
        valid: Queries with valid=False are always rejected.
    """
    timer: int
    lifetime: int
    spec: RoadSpec
    context: GrowthContext
    valid: bool = True

    @property
    def heading(self) -> float:
        """Absolute heading of the proposed road in degrees."""
        return self.context.prev_angle + self.spec.angle


@dataclass(frozen=True)
class MetaInfo:
    """Provenance of an accepted road segment."""
    timer: int = 0
    lifetime: int = 0


@dataclass(frozen=True)
class Segment:
    """A road segment connecting two points."""
    start: Point
    end: Point
    meta: MetaInfo = field(default_factory=MetaInfo)

    def get_heading(self) -> float:
        """Heading of the segment in degrees, in [0, 360)."""
        dx = self.end.x - self.start.x
        dy = self.end.y - self.start.y
        return math.degrees(math.atan2(dx, dy)) % 360.0

    def length(self) -> float:
        """Euclidean length of the segment."""
        return math.hypot(self.end.x - self.start.x, self.end.y - self.start.y)

    def to_3d(self, elevation: float = 0.0) -> Tuple[Tuple[float, float, float], Tuple[float, float, float]]:
        """Embed both endpoints into y-up 3D space at a fixed elevation."""
        return (
            (self.start.x, elevation, self.start.y),
            (self.end.x, elevation, self.end.y),
        )

    def to_dict(self):
        """Convert the segment to dictionary representation."""
        return {
            'start': self.start.to_dict(),
            'end': self.end.to_dict(),
            'timer': self.meta.timer,
            'lifetime': self.meta.lifetime
        }


@dataclass
class Intersection:
    """A road junction where two or more segments share an endpoint."""
    point: Point
    segments: List[Segment]
