import logging

import img_indexer
from img_indexer.utils.logging import get_configured_logger, log_and_display, log_manager

logger = get_configured_logger("LoggingTest")


def test_log_and_display_uses_callers_logger(caplog, capsys):
    caplog.set_level(logging.INFO, logger="LoggingTest")

    log_and_display("Indexed 2 places", sticky=True)

    assert [(r.name, r.getMessage()) for r in caplog.records] == [("LoggingTest", "Indexed 2 places")]
    assert "Indexed 2 places" in capsys.readouterr().err


def test_display_only_messages_are_not_logged(caplog):
    caplog.set_level(logging.INFO, logger="LoggingTest")
    log_and_display("progress only", sticky=True, log=False)
    assert caplog.records == []


def test_verbose_switch_raises_registered_loggers(monkeypatch):
    monkeypatch.setattr(img_indexer, "VERBOSE_LOGGING", False)
    quiet = get_configured_logger("LoggingTest.Quiet")
    assert quiet.level == logging.WARNING

    img_indexer.enable_verbose_logging()

    assert quiet.level == logging.INFO


def test_progress_stops_when_finished():
    log_manager.start_progress(total=2, description="Indexing")
    log_manager.update_progress()
    assert log_manager._progress is not None
    log_manager.update_progress(description="Done")
    assert log_manager._progress is None
