"""
This file (test_logging.py) contains the unit tests for the logging configuration.
"""
import logging

from jsonapi_posts import create_app


def test_logging_handler_is_attached_once():
    """
    GIVEN several Flask applications created in the same process
    WHEN their loggers are inspected
    THEN check that the shared logger has a single stream handler
    """
    first_app = create_app('config.TestingConfig')
    second_app = create_app('config.TestingConfig')
    third_app = create_app('config.TestingConfig')

    assert first_app.logger is third_app.logger
    stream_handlers = [handler for handler in third_app.logger.handlers
                       if type(handler) is logging.StreamHandler]
    assert len(stream_handlers) == 1
    assert second_app.logger.level == logging.INFO
