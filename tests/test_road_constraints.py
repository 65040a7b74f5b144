import math
from dataclasses import replace

import pytest

from roadgrowth.citygen.dataclass import GrowthContext, MetaInfo, Point, RoadQuery, RoadSpec, Segment
from roadgrowth.citygen.road import road_constraints
from roadgrowth.citygen.road.road_constraints import RoadConstraints
from roadgrowth.citygen.road.road_network import RoadNetwork


def make_query(origin=(0.0, 0.0), heading=0.0, length=10.0, lifetime=0, valid=True):
    return RoadQuery(0, lifetime, RoadSpec(0.0, length), GrowthContext(Point(*origin), heading), valid)


def make_segment(x0, y0, x1, y1):
    return Segment(Point(x0, y0), Point(x1, y1), MetaInfo())


@pytest.fixture
def config(make_config):
    return make_config(max_lifetime=3)


@pytest.fixture
def network(config):
    return RoadNetwork(config)


@pytest.fixture
def constraints(config):
    return RoadConstraints(config)


def test_empty_network_accepts_plain_query(constraints, network):
    assert constraints.legal(make_query(), network)
    assert constraints.rejection_reason(make_query(), network) is None


def test_invalid_query_is_rejected_unconditionally(constraints, network):
    query = make_query(valid=False)
    assert constraints.rejection_reason(query, network) == road_constraints.INVALID
    assert not constraints.legal(query, network)


def test_lifetime_beyond_limit_is_rejected(constraints, network):
    assert constraints.rejection_reason(make_query(lifetime=3), network) is None
    assert constraints.rejection_reason(make_query(lifetime=4), network) == road_constraints.LIFETIME


@pytest.mark.parametrize('length', [0.0, -5.0])
def test_degenerate_length_is_rejected(constraints, network, length):
    assert constraints.rejection_reason(make_query(length=length), network) == road_constraints.DEGENERATE


@pytest.mark.parametrize('query', [
    make_query(length=math.nan),
    make_query(length=math.inf),
    make_query(heading=math.nan),
    make_query(heading=math.inf),
])
def test_non_finite_geometry_is_rejected(constraints, network, query):
    assert constraints.rejection_reason(query, network) == road_constraints.NON_FINITE


def test_short_segment_is_rejected(constraints, network):
    assert constraints.rejection_reason(make_query(length=0.5), network) == road_constraints.TOO_SHORT


def test_segment_leaving_the_world_is_rejected(constraints, network):
    assert constraints.rejection_reason(make_query(length=6000.0), network) == road_constraints.OUT_OF_BOUNDS


def test_crossing_existing_road_is_rejected(constraints, network):
    network.add_segment(make_segment(-5, 5, 5, 5))
    assert constraints.rejection_reason(make_query(), network) == road_constraints.CROSSING


def test_ending_on_existing_road_is_legal(constraints, network):
    network.add_segment(make_segment(-5, 5, 5, 5))
    assert constraints.legal(make_query(length=5.0), network)


def test_continuing_from_shared_endpoint_is_legal(constraints, network):
    network.add_segment(make_segment(0, 0, 0, 10))
    assert constraints.legal(make_query(origin=(0.0, 10.0), heading=90.0), network)
    assert constraints.legal(make_query(origin=(0.0, 10.0), heading=0.0), network)


def test_collinear_overlap_is_rejected(constraints, network):
    network.add_segment(make_segment(0, 0, 0, 10))
    query = make_query(origin=(0.0, 5.0), heading=0.0)
    assert constraints.rejection_reason(query, network) == road_constraints.OVERLAP


def test_doubling_back_is_rejected(constraints, network):
    network.add_segment(make_segment(0, 0, 0, 10))
    query = make_query(origin=(0.0, 10.0), heading=180.0, length=4.0)
    assert constraints.rejection_reason(query, network) == road_constraints.OVERLAP


def test_sharp_angle_at_shared_origin_is_rejected(constraints, network):
    network.add_segment(make_segment(0, 0, 0, 10))
    query = make_query(heading=10.0)
    assert constraints.rejection_reason(query, network) == road_constraints.ANGLE


def test_sharp_angle_at_shared_end_is_rejected(constraints, network):
    network.add_segment(make_segment(10, 0, 0, 1))
    query = make_query(heading=90.0)
    assert constraints.rejection_reason(query, network) == road_constraints.ANGLE


def test_crossing_is_reported_before_angle(constraints, network):
    # the first road leaves the origin at a sharp angle, the second crosses the candidate
    network.add_segment(make_segment(0, 0, 1, 9))
    network.add_segment(make_segment(-5, 5, 5, 5))
    assert constraints.rejection_reason(make_query(), network) == road_constraints.CROSSING


def test_crossing_is_reported_before_overlap(constraints, network):
    network.add_segment(make_segment(0, 3, 0, 8))
    network.add_segment(make_segment(-5, 5, 5, 5))
    assert constraints.rejection_reason(make_query(), network) == road_constraints.CROSSING


def test_angle_rule_can_be_disabled(make_config, network):
    constraints = RoadConstraints(make_config(max_lifetime=3, min_intersection_deviation=0.0))
    network.add_segment(make_segment(0, 0, 0, 10))
    assert constraints.legal(make_query(heading=10.0), network)


def test_check_conflicts_uses_given_segments_only(constraints):
    segment = make_segment(0, 0, 0, 10)
    assert constraints.check_conflicts(segment, []) is None
    assert constraints.check_conflicts(segment, [make_segment(-5, 5, 5, 5)]) == road_constraints.CROSSING


def test_precomputed_segment_is_used(constraints, network):
    network.add_segment(make_segment(-5, 5, 5, 5))
    query = make_query()
    harmless = make_segment(20, 0, 20, 10)
    assert constraints.rejection_reason(query, network, harmless) is None
    assert constraints.rejection_reason(replace(query, valid=False), network, harmless) == road_constraints.INVALID


def test_negative_limits_are_rejected(make_config):
    with pytest.raises(ValueError):
        RoadConstraints(make_config(max_lifetime=-1))
    with pytest.raises(ValueError):
        RoadConstraints(make_config(junction_tolerance=0.0))
