import logging

import pytest

from discussboard.logging import NOISY_LOGGERS, setup_logging


@pytest.mark.parametrize("debug", [True, False])
def test_pymongo_loggers_quieted(debug):
    setup_logging(debug)
    for name in NOISY_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING
