"""Road network generation module.

This module drives procedural road growth: road queries are drained from a priority
queue in timer order, checked against the accepted network, and accepted queries
spawn three follow-on queries that continue the network outward.
"""
from collections import Counter
from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from roadgrowth.citygen.dataclass import (GrowthContext, Point, RoadQuery,
                                          RoadSpec, Segment)
from roadgrowth.citygen.road.road_constraints import RoadConstraints
from roadgrowth.citygen.road.road_expander import RoadExpander
from roadgrowth.citygen.road.road_network import RoadNetwork
from roadgrowth.config import Config
from roadgrowth.utils.logger import Logger
from roadgrowth.utils.priority_queue import PriorityQueue


@dataclass
class GenerationStats:
    """Counters describing one generation run."""
    processed: int = 0
    accepted: int = 0
    pruned: int = 0
    rejected: Counter = field(default_factory=Counter)

    def to_dict(self):
        """Convert the stats to dictionary representation."""
        return {
            'processed': self.processed,
            'accepted': self.accepted,
            'pruned': self.pruned,
            'rejected': dict(self.rejected),
        }


class RoadGenerator:
    """Handles procedural road network growth."""

    def __init__(self, config):
        """Initialize the road generator.

        Args:
            config: Configuration with the growth.* policy keys.

        Raises:
            ValueError: If the growth policy is structurally invalid.
        """
        self.config = config
        self.max_lifetime = int(config['growth.max_lifetime'])
        self.segment_count_limit = int(config.get('growth.segment_count_limit', 0))
        self.check_workers = int(config.get('growth.check_workers', 0))
        if self.segment_count_limit < 0 or self.check_workers < 0:
            raise ValueError('growth.segment_count_limit and growth.check_workers must not be negative')

        self.constraints = RoadConstraints(config)
        self.expander = RoadExpander(config)
        self.logger = Logger.get_logger('RoadGenerator')
        self._executor: Optional[Executor] = None
        self.reset()

    def reset(self) -> None:
        """Discard the queue, network and stats of any previous run."""
        self.network = RoadNetwork(self.config)
        self.queue = PriorityQueue()
        self.stats = GenerationStats()
        self.expander.reset()

    def create_seed_query(
        self, origin: Point = None, heading: float = None, length: float = None
    ) -> RoadQuery:
        """Create the first query of a lineage.

        Args:
            origin: Start point; defaults to growth.seed.origin.
            heading: Absolute heading in degrees; defaults to growth.seed.heading.
            length: Length of the first road; defaults to growth.seed.length.

        Returns:
            A valid query with timer 0 and lifetime 0.
        """
        if origin is None:
            x, y = self.config['growth.seed.origin']
            origin = Point(float(x), float(y))
        if heading is None:
            heading = float(self.config['growth.seed.heading'])
        if length is None:
            length = float(self.config['growth.seed.length'])
        return RoadQuery(
            timer=0,
            lifetime=0,
            spec=RoadSpec(angle=0.0, length=length),
            context=GrowthContext(origin=origin, prev_angle=heading),
            valid=True,
        )

    def generate_initial_queries(self) -> None:
        """Enqueue the configured seed, and its opposite when growing both ways."""
        seed = self.create_seed_query()
        self.enqueue(seed)
        if self.config.get('growth.seed.two_way', False):
            self.enqueue(self.create_seed_query(heading=seed.context.prev_angle + 180.0))

    def enqueue(self, query: RoadQuery) -> None:
        """Add a query to the growth queue."""
        self.queue.enqueue(query)

    def generate(self, seeds: Iterable[RoadQuery] = None) -> RoadNetwork:
        """Grow a network from scratch until no query is left.

        Args:
            seeds: Queries to start from; the configured seed is used if omitted.

        Returns:
            The accepted network of this run.
        """
        self.reset()
        if seeds is None:
            self.generate_initial_queries()
        else:
            for seed in seeds:
                self.enqueue(seed)

        self.logger.info(f'Growing road network from {len(self.queue)} seed queries')
        if self.check_workers:
            with ThreadPoolExecutor(max_workers=self.check_workers) as executor:
                self._executor = executor
                try:
                    while not self.generate_step():
                        pass
                finally:
                    self._executor = None
        else:
            while not self.generate_step():
                pass

        self.logger.info(
            f'Road network complete: {len(self.network)} segments, '
            f'{self.stats.processed} queries processed, stats {self.stats.to_dict()}'
        )
        return self.network

    def generate_step(self) -> bool:
        """Process the next query, or the next timer tick when checking in parallel.

        Returns:
            True when generation should stop, False otherwise.
        """
        if self._limit_reached():
            self.logger.info(f'Segment count limit {self.segment_count_limit} reached')
            return True
        if self.queue.empty():
            return True

        if self._executor is None:
            query = self.queue.dequeue()
            segment = self.expander.materialize(query)
            self._commit(query, segment, self.constraints.rejection_reason(query, self.network, segment))
        else:
            self._generate_tick()
        return False

    def _generate_tick(self) -> None:
        """Check every query of the current tick concurrently, then commit them in queue order.

        Pre-checks run against the network as it stood before the tick. Each survivor
        is re-checked against segments accepted earlier in the same tick before it
        is committed, which gives the same result as processing one query at a time.
        """
        timer = self.queue.peek().timer
        batch: List[RoadQuery] = []
        while not self.queue.empty() and self.queue.peek().timer == timer:
            batch.append(self.queue.dequeue())

        snapshot = len(self.network)
        segments = [self.expander.materialize(query) for query in batch]
        reasons = list(self._executor.map(
            lambda pair: self.constraints.rejection_reason(pair[0], self.network, pair[1]),
            zip(batch, segments),
        ))

        for query, segment, reason in zip(batch, segments, reasons):
            if self._limit_reached():
                break
            if reason is None:
                reason = self.constraints.check_conflicts(segment, self.network.segments_since(snapshot))
            self._commit(query, segment, reason)

    def _commit(self, query: RoadQuery, segment: Segment, reason: Optional[str]) -> None:
        """Accept or reject a checked query, enqueuing its children on acceptance."""
        self.stats.processed += 1
        if reason is not None:
            self.stats.rejected[reason] += 1
            self.logger.debug(f'Rejected query at t={query.timer} lifetime={query.lifetime}: {reason}')
            return

        self.network.add_segment(segment)
        self.stats.accepted += 1

        for child in self.expander.expand(query):
            if child.lifetime > self.max_lifetime:
                self.stats.pruned += 1
                self.logger.debug(f'Pruned child at lifetime {child.lifetime}')
                continue
            self.enqueue(child)

    def _limit_reached(self) -> bool:
        return bool(self.segment_count_limit) and len(self.network) >= self.segment_count_limit


def generate_road_network(config: Config = None, seeds: Iterable[RoadQuery] = None) -> RoadNetwork:
    """Grow a road network once and return it.

    Args:
        config: Configuration to use; the packaged defaults if omitted.
        seeds: Queries to start from; the configured seed is used if omitted.

    Returns:
        The accepted network.
    """
    return RoadGenerator(config or Config()).generate(seeds)
