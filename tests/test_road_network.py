import numpy as np
import pytest

from roadgrowth.citygen.dataclass import MetaInfo, Point, Segment
from roadgrowth.citygen.road.road_network import RoadNetwork


def make_segment(x0, y0, x1, y1):
    return Segment(Point(x0, y0), Point(x1, y1), MetaInfo())


@pytest.fixture
def network(make_config):
    return RoadNetwork(make_config())


def test_network_is_an_ordered_sequence(network):
    first = make_segment(0, 0, 0, 10)
    second = make_segment(0, 10, 10, 10)
    network.add_segment(first)
    network.add_segment(second)
    assert len(network) == 2
    assert list(network) == [first, second]
    assert network[1] == second
    assert network.roads == (first, second)
    assert network.segments_since(1) == [second]


def test_as_array_embeds_at_elevation(network):
    assert network.as_array().shape == (0, 2, 3)
    network.add_segment(make_segment(1, 2, 3, 4))
    lines = network.as_array(elevation=5.0)
    assert lines.shape == (1, 2, 3)
    np.testing.assert_array_equal(lines[0], [[1, 5, 2], [3, 5, 4]])


def test_as_array_defaults_to_configured_elevation(make_config):
    network = RoadNetwork(make_config({'render.elevation': 1.5}))
    network.add_segment(make_segment(0, 0, 0, 1))
    assert (network.as_array()[:, :, 1] == 1.5).all()


def test_count_crossings(network):
    network.add_segment(make_segment(0, 0, 2, 2))
    network.add_segment(make_segment(2, 2, 3, 2))
    assert network.count_crossings() == 0
    network.add_segment(make_segment(0, 2, 2, 0))
    assert network.count_crossings() == 1


def test_find_intersections(network):
    stem = make_segment(0, 0, 0, 10)
    east = make_segment(0, 10, 10, 10)
    west = make_segment(0, 10, -10, 10)
    for segment in (stem, east, west):
        network.add_segment(segment)

    junctions = network.find_intersections()
    assert len(junctions) == 1
    assert junctions[0].point == Point(0, 10)
    assert junctions[0].segments == [stem, east, west]


def test_count_crossings_is_the_same_for_any_block_size(network):
    for offset in (1, 2, 3):
        network.add_segment(make_segment(0, offset, 4, offset))
        network.add_segment(make_segment(offset, 0, offset, 4))
    assert network.count_crossings() == 9
    assert network.count_crossings(block_rows=1) == 9
    assert network.count_crossings(block_rows=4) == 9


def test_find_intersections_merges_endpoints_within_tolerance(network):
    # 0.0004 and 0.0006 round to different multiples of the tolerance
    first = make_segment(0, 0, 0.0004, 10)
    second = make_segment(0.0006, 10, 10, 10)
    network.add_segment(first)
    network.add_segment(second)

    junctions = network.find_intersections()
    assert len(junctions) == 1
    assert junctions[0].point == Point(0.0004, 10)
    assert junctions[0].segments == [first, second]


def test_find_intersections_keeps_distant_endpoints_apart(network):
    network.add_segment(make_segment(0, 0, 0, 10))
    network.add_segment(make_segment(0.002, 10, 10, 10))
    assert network.find_intersections() == []


def test_nearby_segments_come_from_the_spatial_index(network):
    near = make_segment(0, 0, 0, 10)
    far = make_segment(1000, 1000, 1000, 1010)
    network.add_segment(near)
    network.add_segment(far)
    assert network.get_nearby_segments(make_segment(-5, 5, 5, 5)) == [near]
