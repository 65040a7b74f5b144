"""roadgrowth package for procedural growth of road networks.

A network is grown once from a seed road: pending road queries are processed in
timer order, each is checked against the roads accepted so far, and every accepted
road branches into three new queries until the lineages age out.
"""

from roadgrowth.citygen.dataclass import (GrowthContext, Point, RoadQuery,
                                          RoadSpec, Segment)
from roadgrowth.citygen.road.road_constraints import RoadConstraints
from roadgrowth.citygen.road.road_expander import RoadExpander
from roadgrowth.citygen.road.road_generator import (GenerationStats,
                                                    RoadGenerator,
                                                    generate_road_network)
from roadgrowth.citygen.road.road_network import RoadNetwork
from roadgrowth.config import Config
from roadgrowth.utils.logger import Logger

__all__ = [
    'Config',
    'GenerationStats',
    'GrowthContext',
    'Logger',
    'Point',
    'RoadConstraints',
    'RoadExpander',
    'RoadGenerator',
    'RoadNetwork',
    'RoadQuery',
    'RoadSpec',
    'Segment',
    'generate_road_network',
]
