import logging

import pytest

from pairlink.components.selection_state import SelectionPhase
from pairlink.components.tile_kinds import TileKinds
from pairlink.errors import ConfigurationError
from pairlink.events.bus import EVENT_GAME_STARTED, EventBus
from pairlink.logging_config import setup_logging
from pairlink.session import create_session
from tests.helpers import collect


def test_create_session_starts_standard_game():
    session = create_session({"seed": 3})
    snapshot = session.get_snapshot()
    assert (snapshot.grid.rows, snapshot.grid.cols) == (8, 10)
    assert len(snapshot.grid.active_positions()) == 80
    assert snapshot.selected is None
    assert snapshot.phase == SelectionPhase.IDLE
    assert not snapshot.complete
    assert session.animation is not None


def test_create_session_with_external_bus_and_deferred_start():
    bus = EventBus()
    events = collect(bus, EVENT_GAME_STARTED)
    session = create_session({"rows": 2, "columns": 2, "tileKindsCount": 1}, event_bus=bus, animate=False, start=False)
    assert events == []
    assert session.animation is None
    session.new_game()
    assert len(events) == 1
    assert session.event_bus is bus


def test_create_session_rejects_bad_config():
    with pytest.raises(ConfigurationError):
        create_session({"rows": 0})


def test_seeded_sessions_deal_identical_boards():
    first = create_session({"seed": 42, "rows": 4, "columns": 4})
    second = create_session({"seed": 42, "rows": 4, "columns": 4})
    assert first.get_snapshot().grid == second.get_snapshot().grid


def test_session_exposes_config():
    session = create_session({"rows": 3, "columns": 4, "tileKindsCount": 2}, animate=False)
    assert session.config.rows == 3
    session.new_game(2, 2, 1)
    assert session.config.rows == 2
    assert session.config.tile_kinds_count == 1


def test_new_game_is_logged(caplog):
    session = create_session({"rows": 2, "columns": 2, "tileKindsCount": 1, "seed": 1}, start=False)
    with caplog.at_level(logging.INFO, logger="pairlink"):
        session.new_game()
    assert any("New game" in record.getMessage() for record in caplog.records)


def test_setup_logging_replaces_handlers(tmp_path):
    log_file = tmp_path / "pairlink.log"
    logger = setup_logging(logging.DEBUG, str(log_file))
    setup_logging(logging.DEBUG, str(log_file))
    try:
        assert logger.name == "pairlink"
        assert len(logger.handlers) == 2
        logger.info("hello")
        for handler in logger.handlers:
            handler.flush()
        assert "hello" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)


def test_tile_kind_palette_cycles():
    kinds = TileKinds()
    assert kinds.name_for(1) == "ember"
    assert kinds.name_for(9) == "ember_2"
    assert kinds.name_for(0) == "empty"
    assert kinds.color_for(9) == kinds.color_for(1)
    with pytest.raises(KeyError):
        kinds.color_for(0)


def test_setup_logging_closes_replaced_file_handler(tmp_path):
    log_file = tmp_path / "pairlink.log"
    logger = setup_logging(logging.INFO, str(log_file))
    old_file_handler = next(h for h in logger.handlers if isinstance(h, logging.FileHandler))
    try:
        setup_logging(logging.INFO, str(log_file))
        assert old_file_handler not in logger.handlers
        assert old_file_handler.stream is None
    finally:
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)
