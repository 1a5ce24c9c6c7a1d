"""Shared pytest fixtures.

- letters: the sample records used throughout the graph tests
- dag: an empty cycle-checked graph keyed on ``letter``
- log_records: Loguru records emitted during a test
"""

import pytest
from loguru import logger

from dagweave.core.config import clear_config_cache
from dagweave.core.domain.dag import DirectedAcyclicGraph


@pytest.fixture
def letters() -> dict[str, dict[str, str]]:
    """Fresh letter records for each test."""
    return {
        "a": {"letter": "a", "text": "b is my child"},
        "b": {"letter": "b", "text": "a is my parent and c and d are my children"},
        "c": {"letter": "c", "text": "b is my parent"},
        "d": {"letter": "d", "text": "b is my parent"},
        "e": {"letter": "e", "text": "a is my parent and f and g are my children"},
        "f": {"letter": "f", "text": "e is my parent"},
        "g": {"letter": "g", "text": "e is my parent"},
        "z": {"letter": "z", "text": "a is my child"},
    }


@pytest.fixture
def dag() -> DirectedAcyclicGraph:
    """Empty graph keyed on ``letter`` with cycle checking enabled."""
    return DirectedAcyclicGraph(unique_key="letter", description_key="text", check_cycles=True)


@pytest.fixture
def log_records():
    """Collect Loguru records (DEBUG and above) emitted during the test."""
    records: list[dict] = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch):
    """Keep DAGWEAVE_* variables and cached configs from leaking between tests."""
    for name in (
        "DAGWEAVE_CONFIG_PATH",
        "DAGWEAVE_CHECK_CYCLES",
        "DAGWEAVE_DEBUG",
        "DAGWEAVE_LOG_LEVEL",
        "DAGWEAVE_LOG_FORMAT",
        "DAGWEAVE_LOG_FILE",
    ):
        monkeypatch.delenv(name, raising=False)
    clear_config_cache()
    yield
    clear_config_cache()
