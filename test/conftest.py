"""
Test Configuration and Fixtures

This module provides:
- Kvrocks key isolation with worker-specific key prefixes
- An in-memory key-value store standing in for Kvrocks
- A FastAPI TestClient whose container providers point at the in-memory doubles
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# This ensures KVROCKS_KEY_PREFIX and TEST_LOG_DIR are set before modules
# that read them at import time (e.g., kv_store_impl.py, loguru_io_config.py)
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    if worker_id == 'master':
        os.environ['KVROCKS_KEY_PREFIX'] = 'test_'
    else:
        os.environ['KVROCKS_KEY_PREFIX'] = f'test_{worker_id}_'

    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ.setdefault('BOOKING_TIMEZONE', 'Asia/Tokyo')


# Call immediately to set env vars before any imports
_early_setup_test_environment()

from collections.abc import Generator  # noqa: E402

from dependency_injector import providers  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402

from src.platform.config.di import container  # noqa: E402
from test.service.line_booking.fake_kv_store import FakeKvStore  # noqa: E402
from test.service.line_booking.fake_notifier import FakeNotifier  # noqa: E402


@pytest.fixture
def fake_kv_store() -> FakeKvStore:
    return FakeKvStore()


@pytest.fixture
def fake_notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def client(
    fake_kv_store: FakeKvStore, fake_notifier: FakeNotifier
) -> Generator[TestClient, None, None]:
    from test.test_main import app

    with (
        container.kv_store.override(providers.Object(fake_kv_store)),
        container.reservation_notifier.override(providers.Object(fake_notifier)),
        TestClient(app) as test_client,
    ):
        yield test_client
