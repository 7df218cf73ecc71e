"""Pytest configuration of GeomKernel.

Tests marked ``skipped`` are heavy randomized checks. They are left out of the default
run and collected only when pytest is called with ``--run-skipped``.

Credits: https://jwodder.github.io/kbits/posts/pytest-mark-off/ (Option 1).
"""

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--run-skipped",
        action="store_true",
        default=False,
        help="Also run the tests marked as skipped",
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--run-skipped"):
        return
    skipper = pytest.mark.skip(reason="Only run when --run-skipped is given")
    for item in items:
        if "skipped" in item.keywords:
            item.add_marker(skipper)


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "skipped: Heavy randomized test, run with --run-skipped."
    )
