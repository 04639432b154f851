" generic fixtures "
import logging

import pytest
from pytest_asyncio import fixture

from chatroute.channels.memory import MemoryChannel
from chatroute.router import Router

from .testtools import make_message

PREFIX = ";;"


def pytest_configure():
    "Runs once before all"
    from chatroute.logging_setup import init_logger

    init_logger("/dev/null", force_debug=True)


@pytest.fixture
def test_logger():
    "A logger for objects requiring one"
    return logging.getLogger("chatroute.tests")


@pytest.fixture
def router(test_logger):
    "A router with no command, colors disabled"
    return Router(PREFIX, colored_handlers_log=False, logger=test_logger)


@pytest.fixture
def message():
    "Factory of reply-recording messages"
    return make_message


@fixture
async def memory_channel(router):
    "A memory channel the router listens to"
    channel = MemoryChannel()
    router.listen(channel)
    yield channel
    await router.close()
