import pytest

from roadgrowth import Config, Logger

Logger.configure(logging_enabled=True, log_to_console=False, log_to_file=False)


@pytest.fixture
def make_config():
    """Build a Config from the packaged defaults with growth.* overrides given as keywords."""
    def _make(overrides=None, **growth):
        values = {f'growth.{key}': value for key, value in growth.items()}
        values.update(overrides or {})
        return Config(overrides=values)
    return _make


@pytest.fixture
def organic_config(make_config):
    """A policy with uneven angles and jitter so lineages collide often."""
    return make_config(
        {'roadgrowth.seed': 7},
        max_lifetime=5,
        branch_angles=[-70.0, 80.0],
        continuation_angle=5.0,
        angle_jitter=12.0,
        length_falloff=0.95,
        min_intersection_deviation=20.0,
        seed={'origin': [0.0, 0.0], 'heading': 0.0, 'length': 100.0, 'two_way': True},
    )
