import logging

import pytest

from tabular_db._testing import employees_db


@pytest.fixture
def db():
    return employees_db()


@pytest.fixture
def root_logging():
    '''
    Give tests the root logger and put its handlers & level back afterwards.

    '''
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
