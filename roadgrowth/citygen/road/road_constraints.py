"""Road constraint checking module.

Decides whether a proposed road may join the accepted network. Rules are applied in
a fixed order and the first failing rule names the rejection.
"""
import math
from typing import Iterable, Optional

from roadgrowth.citygen.dataclass import Point, RoadQuery, Segment
from roadgrowth.citygen.road.road_expander import materialize_query
from roadgrowth.citygen.road.road_network import RoadNetwork
from roadgrowth.utils.math_utils import MathUtils

INVALID = 'invalid'
LIFETIME = 'lifetime'
NON_FINITE = 'non_finite'
DEGENERATE = 'degenerate'
TOO_SHORT = 'too_short'
OUT_OF_BOUNDS = 'out_of_bounds'
CROSSING = 'crossing'
OVERLAP = 'overlap'
ANGLE = 'angle'

REJECTION_REASONS = (
    INVALID, LIFETIME, NON_FINITE, DEGENERATE, TOO_SHORT, OUT_OF_BOUNDS, CROSSING, OVERLAP, ANGLE,
)


class RoadConstraints:
    """Legality rules for candidate road queries."""

    def __init__(self, config):
        """Initialize the checker.

        Args:
            config: Configuration with the growth.* policy keys.

        Raises:
            ValueError: If a limit is negative.
        """
        self.max_lifetime = int(config['growth.max_lifetime'])
        self.min_segment_length = float(config['growth.min_segment_length'])
        self.min_intersection_deviation = float(config['growth.min_intersection_deviation'])
        self.junction_tolerance = float(config['growth.junction_tolerance'])

        if self.max_lifetime < 0:
            raise ValueError(f'growth.max_lifetime must not be negative, got {self.max_lifetime}')
        if self.min_segment_length < 0 or self.min_intersection_deviation < 0:
            raise ValueError('growth.min_segment_length and growth.min_intersection_deviation must not be negative')
        if not self.junction_tolerance > 0:
            raise ValueError(f'growth.junction_tolerance must be positive, got {self.junction_tolerance}')

    def legal(self, candidate: RoadQuery, network: RoadNetwork) -> bool:
        """Check whether a candidate may be accepted into the network."""
        return self.rejection_reason(candidate, network) is None

    def rejection_reason(
        self, candidate: RoadQuery, network: RoadNetwork, segment: Segment = None
    ) -> Optional[str]:
        """Find the first rule the candidate breaks.

        Args:
            candidate: The query to check.
            network: The accepted network.
            segment: The candidate's materialized segment, computed if omitted.

        Returns:
            The name of the failing rule, or None if the candidate is legal.
        """
        if not candidate.valid:
            return INVALID
        if candidate.lifetime > self.max_lifetime:
            return LIFETIME

        if segment is None:
            segment = materialize_query(candidate)

        length = candidate.spec.length
        if not (math.isfinite(length) and math.isfinite(candidate.heading)
                and segment.start.is_finite() and segment.end.is_finite()):
            return NON_FINITE
        if length <= 0:
            return DEGENERATE
        if length < self.min_segment_length:
            return TOO_SHORT
        if not network.world_bounds.contains_point(segment.end):
            return OUT_OF_BOUNDS

        return self.check_conflicts(segment, network.get_nearby_segments(segment))

    def check_conflicts(self, segment: Segment, others: Iterable[Segment]) -> Optional[str]:
        """Check a finite segment against a set of accepted segments.

        Args:
            segment: The candidate segment.
            others: Accepted segments to test against.

        Returns:
            CROSSING, OVERLAP or ANGLE, whichever rule fails first over all of them,
            else None.
        """
        others = list(others)
        if any(MathUtils.do_line_segments_intersect(segment.start, segment.end, other.start, other.end)
               for other in others):
            return CROSSING
        if any(MathUtils.collinear_overlap(segment.start, segment.end, other.start, other.end, self.junction_tolerance)
               for other in others):
            return OVERLAP

        heading = segment.get_heading()
        reverse_heading = (heading + 180.0) % 360.0
        if any(self._too_sharp(other, segment.start, heading) or self._too_sharp(other, segment.end, reverse_heading)
               for other in others):
            return ANGLE
        return None

    def _too_sharp(self, other: Segment, point: Point, heading: float) -> bool:
        """Whether ``other`` leaves ``point`` within the minimum deviation of ``heading``."""
        if MathUtils.length(other.start, point) <= self.junction_tolerance:
            outgoing = other.get_heading()
        elif MathUtils.length(other.end, point) <= self.junction_tolerance:
            outgoing = (other.get_heading() + 180.0) % 360.0
        else:
            return False
        return MathUtils.angle_difference(heading, outgoing) < self.min_intersection_deviation
