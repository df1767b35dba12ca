import logging

from photoindex.utils.logging import configure_logging, get_logger


def test_get_logger_is_namespaced():
    assert get_logger().name == "photoindex"
    assert get_logger("photoindex.index").name == "photoindex.index"
    assert get_logger("tests").name == "photoindex.tests"


def test_configure_logging_does_not_duplicate_handlers():
    logger = configure_logging("debug")
    count = len(logger.handlers)

    configure_logging("INFO")

    assert len(logger.handlers) == count
    assert logger.level == logging.INFO
    configure_logging("WARNING")


def test_unknown_level_falls_back_to_default():
    assert configure_logging("chatty").level == logging.WARNING
