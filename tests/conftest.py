"""
Test configuration and fixtures.
Development-mode strategy runs without delay; Twilio calls are mocked with respx.
"""
import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app import create_app
from app.config.config import ProviderCredentials
from app.core.verification_strategies import FallbackStrategy, select_strategy
from app.utils.db import Base

TWILIO_BASE = "https://verify.twilio.test/v2"


@pytest.fixture
def credentials():
    return ProviderCredentials(account_id="AC_test_account", auth_token="test_token", service_id="VA_test_service")


@pytest.fixture
def no_credentials():
    return ProviderCredentials()


@pytest.fixture
def live_strategy(credentials):
    return select_strategy(credentials, base_url=TWILIO_BASE, timeout=2.0)


@pytest.fixture
def fallback_strategy():
    return FallbackStrategy(delay_seconds=0)


@pytest.fixture
def dev_app(no_credentials, fallback_strategy):
    return create_app(credentials=no_credentials, strategy=fallback_strategy, create_tables=False)


@pytest.fixture
def live_app(credentials, live_strategy):
    return create_app(credentials=credentials, strategy=live_strategy, create_tables=False)


@pytest.fixture
def dev_client(dev_app):
    return TestClient(dev_app)


@pytest.fixture
def live_client(live_app):
    return TestClient(live_app)


@pytest_asyncio.fixture
async def dev_http(dev_app):
    """httpx client wired straight into the development-mode app."""
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=dev_app), base_url="http://test") as client:
        yield client


@pytest.fixture
def session_factory():
    """In-memory SQLite database for lead storage tests."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()
