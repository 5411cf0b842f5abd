import argparse

import pytest

from areamesh.config import MeshConfig


def test_defaults():
    config = MeshConfig()
    assert config.fork_policy == "lowest_id"
    assert config.hole_policy == "skip_group"
    assert config.degenerate_policy == "skip_group"
    assert config.workers == 1


@pytest.mark.parametrize("kwargs", [
    {"fork_policy": "nearest"},
    {"hole_policy": "ignore"},
    {"degenerate_policy": "fail"},
    {"workers": 0},
    {"chunksize": 0},
])
def test_rejects_bad_values(kwargs):
    with pytest.raises(ValueError):
        MeshConfig(**kwargs)


def test_from_command_line():
    parser = argparse.ArgumentParser()
    MeshConfig.add_arguments(parser)
    args = parser.parse_args(["--hole-policy", "drop_hole", "--workers", "3"])
    config = MeshConfig.from_args(args)
    assert config == MeshConfig(hole_policy="drop_hole", workers=3)


def test_frozen():
    with pytest.raises(AttributeError):
        MeshConfig().workers = 4
