"""Pytest configuration and shared image fixtures.

Slow tests (large images) are skipped unless --slow is passed.
Run the full suite:   pytest --slow
Run fast tests only:  pytest          (default)
"""
import numpy as np
import pytest
from PIL import Image


def pytest_addoption(parser):
    parser.addoption(
        "--slow",
        action="store_true",
        default=False,
        help="Run slow tests on large images",
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--slow"):
        return  # run everything
    skip_slow = pytest.mark.skip(reason="slow test skipped, pass --slow to include")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def white_rgb():
    return np.full((4, 4, 3), 255, dtype=np.uint8)


@pytest.fixture
def random_rgb():
    rng = np.random.default_rng(1234)
    return rng.integers(0, 256, (48, 64, 3), dtype=np.uint8)


@pytest.fixture
def random_gray():
    rng = np.random.default_rng(5678)
    return rng.integers(0, 256, (48, 64), dtype=np.uint8)


@pytest.fixture
def photo_file(tmp_path, random_rgb):
    """A small RGB PNG on disk."""
    path = tmp_path / "photo.png"
    Image.fromarray(random_rgb).save(path)
    return path
