import logging

import pytest

from eb_course.utils.decorators import log_execution_time


@log_execution_time
def resize_image(size):
    return size * 2


@log_execution_time
def corrupt_image():
    raise ValueError("bad header")


def test_logs_duration_under_qualified_name(caplog):
    with caplog.at_level(logging.INFO, logger="eb_course.utils.decorators"):
        assert resize_image(2) == 4

    assert "resize_image finished in" in caplog.text
    assert resize_image.__name__ == "resize_image"


def test_logs_and_reraises_failures(caplog):
    with caplog.at_level(logging.INFO, logger="eb_course.utils.decorators"):
        with pytest.raises(ValueError, match="bad header"):
            corrupt_image()

    assert "corrupt_image raised ValueError after" in caplog.text
