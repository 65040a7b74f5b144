"""Accepted road network module.

The network is an append-only sequence of accepted segments backed by a quadtree,
so legality checks only look at segments near the candidate.
"""
import math
from typing import Dict, Iterator, List, Optional, Tuple

import numpy as np

from roadgrowth.citygen.dataclass import Bounds, Intersection, Point, Segment
from roadgrowth.utils.math_utils import MathUtils
from roadgrowth.utils.quadtree import QuadTree

_CROSSING_BLOCK_CELLS = 1 << 22


class RoadNetwork:
    """Append-only collection of accepted road segments and their spatial index."""

    def __init__(self, config):
        """Initialize an empty network.

        Args:
            config: Configuration providing world bounds, quadtree tuning and
                junction tolerance.
        """
        self.junction_tolerance = float(config['growth.junction_tolerance'])
        self.elevation = float(config.get('render.elevation', 0.0))

        self._roads: List[Segment] = []
        self.world_bounds = Bounds(
            float(config['growth.world.x']),
            float(config['growth.world.y']),
            float(config['growth.world.width']),
            float(config['growth.world.height']),
        )
        self.road_quadtree = QuadTree[Segment](
            self.world_bounds,
            int(config['growth.quadtree.max_objects']),
            int(config['growth.quadtree.max_levels']),
        )

    @property
    def roads(self) -> Tuple[Segment, ...]:
        """Accepted segments in acceptance order."""
        return tuple(self._roads)

    def add_segment(self, segment: Segment) -> None:
        """Append a segment to the network. Segments are never removed."""
        self._roads.append(segment)
        self.road_quadtree.insert(self.bounds_for_segment(segment), segment)

    def get_nearby_segments(self, segment: Segment) -> List[Segment]:
        """Get accepted segments whose padded bounds overlap the given segment's."""
        return self.road_quadtree.retrieve_exact(self.bounds_for_segment(segment))

    def segments_since(self, index: int) -> List[Segment]:
        """Segments accepted after the first ``index`` ones."""
        return self._roads[index:]

    def bounds_for_segment(self, segment: Segment) -> Bounds:
        """Create a bounding box for a road segment, padded by the junction tolerance."""
        return Bounds(*MathUtils.bounding_box(segment.start, segment.end, self.junction_tolerance))

    def as_array(self, elevation: float = None) -> np.ndarray:
        """Endpoints of every segment embedded into y-up 3D space.

        Args:
            elevation: Height of the road plane; defaults to render.elevation.

        Returns:
            Float array of shape (N, 2, 3).
        """
        if elevation is None:
            elevation = self.elevation
        if not self._roads:
            return np.zeros((0, 2, 3), dtype=float)
        return np.array([segment.to_3d(elevation) for segment in self._roads], dtype=float)

    def count_crossings(self, block_rows: int = None) -> int:
        """Number of unordered segment pairs that properly cross.

        Rows of the pairwise test are evaluated in blocks so memory stays around a
        few million cells per block regardless of network size.

        Args:
            block_rows: Segments tested against the whole network per block.
        """
        count = len(self._roads)
        if count < 2:
            return 0
        if block_rows is None:
            block_rows = max(1, _CROSSING_BLOCK_CELLS // count)

        lines = np.array(
            [((s.start.x, s.start.y), (s.end.x, s.end.y)) for s in self._roads], dtype=float
        )
        columns = np.arange(count)
        total = 0
        for first in range(0, count, block_rows):
            rows = np.arange(first, min(first + block_rows, count))
            crossings = MathUtils.crossing_matrix(lines[rows], lines)
            total += int((crossings & (rows[:, None] < columns[None, :])).sum())
        return total

    def find_intersections(self) -> List[Intersection]:
        """Find every junction where two or more segments share an endpoint.

        Endpoints within the junction tolerance of a junction's first endpoint are
        treated as the same point.
        """
        tolerance = self.junction_tolerance
        cells: Dict[Tuple[int, int], List[Intersection]] = {}
        junctions: List[Intersection] = []
        for segment in self._roads:
            for point in (segment.start, segment.end):
                junction = self._find_junction(cells, point)
                if junction is None:
                    junction = Intersection(point, [])
                    cell = (math.floor(point.x / tolerance), math.floor(point.y / tolerance))
                    cells.setdefault(cell, []).append(junction)
                    junctions.append(junction)
                if not any(other is segment for other in junction.segments):
                    junction.segments.append(segment)
        return [junction for junction in junctions if len(junction.segments) > 1]

    def _find_junction(self, cells, point: Point) -> Optional[Intersection]:
        tolerance = self.junction_tolerance
        cx = math.floor(point.x / tolerance)
        cy = math.floor(point.y / tolerance)
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                for junction in cells.get((cx + dx, cy + dy), ()):
                    if MathUtils.length(junction.point, point) <= tolerance:
                        return junction
        return None

    def __len__(self):
        """Number of accepted segments."""
        return len(self._roads)

    def __iter__(self) -> Iterator[Segment]:
        """Iterate over accepted segments in acceptance order."""
        return iter(list(self._roads))

    def __getitem__(self, index):
        """Get an accepted segment by position."""
        return self._roads[index]
