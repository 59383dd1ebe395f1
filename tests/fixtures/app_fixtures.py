"""App fixtures: a FastAPI test client wired to the moto backend."""
import pytest
from fastapi.testclient import TestClient

from eb_course.main import create_app


@pytest.fixture
def app(mocked_aws, test_settings):
    return create_app(settings=test_settings)


@pytest.fixture
def client(app, signup_store) -> TestClient:
    """Test client with the signups table in place."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def client_without_table(app) -> TestClient:
    with TestClient(app) as test_client:
        yield test_client
