"""Dataclass module for road growth."""
from roadgrowth.citygen.dataclass.dataclass import (Bounds, GrowthContext,
                                                    Intersection, MetaInfo,
                                                    Point, RoadQuery,
                                                    RoadSpec, Segment)

__all__ = ['Bounds', 'GrowthContext', 'Intersection', 'MetaInfo', 'Point', 'RoadQuery', 'RoadSpec', 'Segment']
