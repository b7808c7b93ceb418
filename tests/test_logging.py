import logging

from hrtime.core.logging import QUIET_LOGGERS, get_logger, setup_logging


def test_component_loggers_are_children_of_the_app_logger():
    assert get_logger("upstream").name == "hrtime.upstream"
    assert get_logger("upstream").parent is logging.getLogger("hrtime")


def test_setup_logging_is_idempotent_and_quiets_request_loggers():
    handlers = list(logging.getLogger().handlers)
    app_logger = setup_logging("debug")
    assert app_logger.level == logging.DEBUG
    assert logging.getLogger().handlers == handlers
    assert all(logging.getLogger(name).level == logging.WARNING for name in QUIET_LOGGERS)
    setup_logging()


def test_upstream_messages_reach_caplog(caplog):
    with caplog.at_level(logging.INFO, logger="hrtime"):
        get_logger("upstream").info("GET /api/timesheets")
    assert "GET /api/timesheets" in caplog.text
