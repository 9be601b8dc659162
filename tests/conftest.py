"""
Shared fixtures for portal client tests.
"""
import pytest

from portal_client.config import AppSettings
from portal_client.http import HttpClient
from portal_client.session import MemorySessionStore, SessionContext

BASE_URL = "http://portal.test/api"


def make_settings(**overrides):
    values = dict(
        base_url=BASE_URL,
        timeout_seconds=10,
        retry_attempts=2,
        retry_base_delay_ms=200,
        get_max_age_seconds=60,
        get_stale_while_revalidate_seconds=300,
        page_size=10,
        count_probe_limit=1000,
        token_header_scheme="Trendora",
        session_path="",
        log_level="INFO",
    )
    values.update(overrides)
    return AppSettings(**values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def session():
    return SessionContext(MemorySessionStore())


@pytest.fixture
def signed_in_session(session):
    session.begin("abc123", {"id": "u1", "email": "jane@corp.test", "role": "HR"})
    return session


@pytest.fixture
def sleeps():
    """Records backoff delays instead of sleeping."""
    return []


@pytest.fixture
def http_client(settings, session, sleeps):
    return HttpClient(settings, session, sleep=sleeps.append)
