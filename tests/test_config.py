import pytest
import yaml

from roadgrowth.config import Config


def test_defaults_are_loaded():
    config = Config()
    assert config['growth.max_lifetime'] == 6
    assert config['growth.branch_angles'] == [-90.0, 90.0]
    assert config['growth.timer_increment'] == 1


def test_missing_key_raises_unless_default_given():
    config = Config()
    with pytest.raises(ValueError):
        config['growth.no_such_key']
    assert config.get('growth.no_such_key', 3) == 3


def test_user_file_is_merged_over_defaults(tmp_path):
    path = tmp_path / 'user.yaml'
    path.write_text(yaml.safe_dump({'growth': {'max_lifetime': 2, 'world': {'width': 500.0}}}))
    config = Config(str(path))
    assert config['growth.max_lifetime'] == 2
    assert config['growth.world.width'] == 500.0
    assert config['growth.world.height'] == 10000.0


def test_overrides_win_and_do_not_leak_between_instances():
    config = Config(overrides={'growth.length_falloff': 0.5, 'render.elevation': 2.0})
    assert config['growth.length_falloff'] == 0.5
    assert config['render.elevation'] == 2.0
    assert Config()['growth.length_falloff'] == 0.9


def test_missing_user_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Config(str(tmp_path / 'missing.yaml'))
