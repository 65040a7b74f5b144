"""Road query expansion module.

Turns an accepted query into its concrete segment and into the three follow-on
queries (straight continuation plus two side branches) that grow the network.
"""
import math
import random
from dataclasses import replace
from typing import Tuple

from roadgrowth.citygen.dataclass import (GrowthContext, MetaInfo, RoadQuery,
                                          RoadSpec, Segment)
from roadgrowth.utils.math_utils import MathUtils


def materialize_query(query: RoadQuery) -> Segment:
    """Compute the segment a query describes.

    The end point is origin + length * (sin θ, cos θ) where θ is the query heading.
    Non-finite inputs produce a segment with non-finite coordinates rather than
    raising, so the caller can reject it.

    Args:
        query: The query to realize.

    Returns:
        The segment from the query origin to its end point.
    """
    origin = query.context.origin
    direction = MathUtils.heading_to_direction(query.heading)
    offset = MathUtils.scale_point(direction, query.spec.length)
    end = MathUtils.add_points(origin, offset)
    return Segment(origin, end, MetaInfo(timer=query.timer, lifetime=query.lifetime))


class RoadExpander:
    """Materializes accepted queries and spawns their children."""

    def __init__(self, config):
        """Initialize the expander from the growth policy configuration.

        Args:
            config: Configuration with the growth.* policy keys.

        Raises:
            ValueError: If the growth policy is structurally invalid.
        """

        branch_angles = config['growth.branch_angles']
        if len(branch_angles) != 2:
            raise ValueError(f'growth.branch_angles must hold exactly two angles, got {branch_angles!r}')
        self.branch_angles = (float(branch_angles[0]), float(branch_angles[1]))
        self.continuation_angle = float(config.get('growth.continuation_angle', 0.0))
        self.angle_jitter = float(config.get('growth.angle_jitter', 0.0))

        self.length_falloff = float(config['growth.length_falloff'])
        if math.isfinite(self.length_falloff) and not 0 < self.length_falloff <= 1:
            raise ValueError(f'growth.length_falloff must be in (0, 1], got {self.length_falloff}')

        self.timer_increment = int(config['growth.timer_increment'])
        if self.timer_increment < 1:
            raise ValueError(f'growth.timer_increment must be at least 1, got {self.timer_increment}')

        if self.angle_jitter < 0:
            raise ValueError(f'growth.angle_jitter must not be negative, got {self.angle_jitter}')

        self.seed = config.get('roadgrowth.seed', 0)
        self.rng = random.Random(self.seed)

    def reset(self):
        """Rewind the jitter RNG so a new run repeats the previous one."""
        self.rng = random.Random(self.seed)

    def materialize(self, query: RoadQuery) -> Segment:
        """Compute the segment a query describes."""
        return materialize_query(query)

    def expand(self, accepted: RoadQuery) -> Tuple[RoadQuery, RoadQuery, RoadQuery]:
        """Produce the follow-on queries of an accepted query.

        Every child starts at the parent's end point, continues from the parent's
        heading, is one generation older, and fires timer_increment ticks later.

        Args:
            accepted: A query that passed the constraint check.

        Returns:
            The straight continuation, the first side branch and the second side branch.
        """
        segment = self.materialize(accepted)
        context = GrowthContext(segment.end, MathUtils.normalize_angle(accepted.heading))
        length = accepted.spec.length * self.length_falloff
        template = replace(
            accepted,
            timer=accepted.timer + self.timer_increment,
            lifetime=accepted.lifetime + 1,
            context=context,
            valid=True,
        )

        angles = (self.continuation_angle,) + self.branch_angles
        return tuple(
            replace(template, spec=RoadSpec(angle + self._jitter(), length))
            for angle in angles
        )

    def _jitter(self) -> float:
        if not self.angle_jitter:
            return 0.0
        return self.rng.uniform(-self.angle_jitter, self.angle_jitter)
