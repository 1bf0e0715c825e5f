# -*- coding: utf-8 -*-

"""
Shared fixtures for Request Validator tests.
"""

import pytest
from loguru import logger


@pytest.fixture
def person_schema():
    """Body schema with a string name and a numeric age."""
    return {
        "type": "object",
        "properties": {
            "name": {"type": "string"},
            "age": {"type": "number"},
        },
    }


@pytest.fixture
def log_messages():
    """Collects loguru messages (DEBUG and above) emitted during a test."""
    messages = []
    handler_id = logger.add(
        lambda message: messages.append(message.record["message"]),
        level="DEBUG",
    )
    yield messages
    logger.remove(handler_id)
