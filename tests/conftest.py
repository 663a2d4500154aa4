"""
Pytest configuration for EventLens tests

Every test starts from a clean environment and fresh telemetry,
so nothing reaches the network unless a test opts in explicitly.
"""

import os
from datetime import datetime
from unittest import mock

import pytest

from eventlens.insights.categories import get_category_table
from eventlens.insights.pipeline import close_pipeline
from eventlens.observability.telemetry import reset_counters

ISOLATED_ENV_VARS = (
    "HUGGINGFACE_API_KEY",
    "OPENAI_API_KEY",
    "EVENTLENS_USE_REMOTE",
    "EVENTLENS_HF_MODELS",
    "EVENTLENS_CATEGORY_RULES",
    "EVENTLENS_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def isolated_environment():
    """Strip remote credentials and reset shared state around each test"""
    env = {k: v for k, v in os.environ.items() if k not in ISOLATED_ENV_VARS}
    with mock.patch.dict(os.environ, env, clear=True):
        reset_counters()
        get_category_table.cache_clear()
        yield
    get_category_table.cache_clear()
    close_pipeline()


@pytest.fixture
def now():
    """Fixed clock: Sunday, October 18, 2026, 9:00 AM local time"""
    return datetime(2026, 10, 18, 9, 0)


@pytest.fixture
def future_tuesday():
    """Tuesday, October 20, 2026, 3:00 PM local time (ISO string)"""
    return "2026-10-20T15:00:00"
