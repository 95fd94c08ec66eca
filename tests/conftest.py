import pytest
from loguru import logger


@pytest.fixture
def warnings_sink():
    """Collect loguru records at WARNING and above for the duration of a test."""
    records = []
    handler_id = logger.add(lambda msg: records.append(msg.record), level="WARNING")
    yield records
    logger.remove(handler_id)
