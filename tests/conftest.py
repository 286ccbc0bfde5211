# tests/conftest.py
from __future__ import annotations

from datetime import datetime, timezone

import pytest
from loguru import logger


def utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def quiet_logger():
    logger.remove()
    logger.add(lambda msg: None)
    yield


@pytest.fixture
def log_records():
    """Collect cronzone log records (all levels) for the duration of a test."""
    records = []
    logger.enable("cronzone")
    handler_id = logger.add(lambda msg: records.append(msg.record), level="TRACE")
    yield records
    logger.remove(handler_id)
    logger.disable("cronzone")
