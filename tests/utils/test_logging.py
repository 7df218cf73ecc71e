"""Tests of the timing logger and of the configuration read at import."""
import logging

import pytest

import geomkernel as gk
from geomkernel.utils import logging as gk_logging


@pytest.fixture
def active_relations(monkeypatch, tmp_path):
    """Timing switched on for the relations section only, logging to a temporary
    file."""
    monkeypatch.setattr(gk_logging, "logger_is_active", True)
    monkeypatch.setattr(gk_logging, "always_log", False)
    monkeypatch.setattr(gk_logging, "active_sections", ["relations"])
    monkeypatch.setattr(gk_logging, "log_file", str(tmp_path / "timings.log"))
    yield tmp_path / "timings.log"
    for handler in list(gk_logging.t_logger.handlers):
        gk_logging.t_logger.removeHandler(handler)
        handler.close()


def test_config_is_a_dict():
    assert isinstance(gk.config, dict)


def test_inactive_logger_is_silent(monkeypatch, caplog):
    monkeypatch.setattr(gk_logging, "logger_is_active", False)

    @gk.time_logger(sections=["all"])
    def double(x):
        return 2 * x

    with caplog.at_level(logging.INFO, logger="geomkernel.Timer"):
        assert double(3) == 6
    assert len(caplog.records) == 0


def test_logger_times_active_sections(active_relations, caplog):
    @gk.time_logger(sections=["relations"])
    def timed(x):
        return 2 * x

    @gk.time_logger(sections=["algorithms"])
    def skipped(x):
        return x

    with caplog.at_level(logging.INFO, logger="geomkernel.Timer"):
        assert timed(2) == 4
        assert skipped(3) == 3
    messages = [r.getMessage() for r in caplog.records]
    assert len(messages) == 2
    assert messages[0].startswith("Calling")
    assert messages[1].startswith("Finished")
    assert all("timed" in m for m in messages)


def test_decorated_library_functions_keep_their_result(active_relations, caplog):
    a = gk.LineSegment2D(gk.Point2D(0, 0), gk.Point2D(2, 2))
    b = gk.LineSegment2D(gk.Point2D(0, 2), gk.Point2D(2, 0))
    with caplog.at_level(logging.INFO, logger="geomkernel.Timer"):
        assert a.intersection(b).value == gk.Point2D(1, 1)
    assert any("intersection" in r.getMessage() for r in caplog.records)


def test_degenerate_geometry_error_is_a_value_error():
    with pytest.raises(ValueError):
        gk.Vector2D(0, 0).normalize()


def test_timings_reach_the_file_when_root_has_handlers(active_relations):
    root = logging.getLogger()
    handler = logging.NullHandler()
    root.addHandler(handler)
    try:

        @gk.time_logger(sections=["relations"])
        def timed(x):
            return x + 1

        assert timed(1) == 2
    finally:
        root.removeHandler(handler)

    file_handlers = [
        h for h in gk_logging.t_logger.handlers if isinstance(h, logging.FileHandler)
    ]
    assert len(file_handlers) == 1
    file_handlers[0].flush()
    lines = active_relations.read_text().splitlines()
    assert lines[0].startswith("Calling")
    assert lines[1].startswith("Finished")
