"""AWS fixtures: fake credentials and an in-process moto backend."""
import pytest
from moto import mock_aws

from eb_course.aws.clients import AWSClients
from eb_course.aws.signups import SignupStore
from eb_course.settings import Settings, get_settings
from eb_course.worker.context import WorkerContext
from tests.consts import (
    TEST_ENVIRONMENT,
    TEST_METRICS_NAMESPACE,
    TEST_REGION,
    TEST_TABLE_NAME,
)


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch):
    """Point boto3 at fake credentials so nothing can reach a real account."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", TEST_REGION)
    monkeypatch.delenv("AWS_ENDPOINT_URL", raising=False)
    monkeypatch.delenv("DEPLOYMENT_MODE", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def mocked_aws():
    with mock_aws():
        yield


@pytest.fixture
def test_settings() -> Settings:
    # aws-prod leaves the endpoint unset, so moto intercepts the calls
    return Settings(
        deployment_mode="aws-prod",
        environment_name=TEST_ENVIRONMENT,
        signups_table_name=TEST_TABLE_NAME,
        metrics_namespace=TEST_METRICS_NAMESPACE,
        health_min_free_disk_ratio=0.0,
    )


@pytest.fixture
def aws_clients(mocked_aws, test_settings) -> AWSClients:
    return AWSClients(test_settings)


@pytest.fixture
def signup_store(aws_clients) -> SignupStore:
    """A signup store whose table already exists."""
    store = SignupStore(aws_clients.dynamodb, TEST_TABLE_NAME)
    store.ensure_table()
    return store


@pytest.fixture
def worker_context(aws_clients, signup_store) -> WorkerContext:
    return WorkerContext.from_clients(aws_clients)


def list_metric_names(aws_clients: AWSClients, namespace: str = TEST_METRICS_NAMESPACE):
    metrics = aws_clients.cloudwatch.list_metrics(Namespace=namespace)["Metrics"]
    return {metric["MetricName"] for metric in metrics}
