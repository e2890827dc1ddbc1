import io
import logging

from tabular_db._log import UTCColoredFormatter, setup_logging


def test_setup_logging(root_logging):
    stream = io.StringIO()
    handler = setup_logging('debug', stream=stream)

    assert root_logging.handlers == [handler]
    assert root_logging.level == logging.DEBUG
    assert isinstance(handler.formatter, UTCColoredFormatter)

    logging.getLogger('tabular_db.test').debug('hello there')

    out = stream.getvalue()
    assert 'hello there' in out
    assert 'DEBUG' in out
    assert 'tabular_db.test' in out
    assert 'Z ' in out


def test_setup_logging_twice(root_logging):
    setup_logging('info', stream=io.StringIO())
    setup_logging('info', stream=io.StringIO())

    assert len(root_logging.handlers) == 1


def test_setup_logging_env_level(root_logging, monkeypatch):
    monkeypatch.setenv('TABULAR_DB_LOGLEVEL', 'warning')
    setup_logging(stream=io.StringIO(), silence=('chatty',))

    assert root_logging.level == logging.WARNING
    assert logging.getLogger('chatty').level == logging.WARNING
