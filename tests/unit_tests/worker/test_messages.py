import pytest

from eb_course.errors import InvalidMessageError
from eb_course.worker.messages import dispatch_message, validate_message
from tests.fixtures.aws_fixtures import list_metric_names


@pytest.mark.parametrize("message", [[], "text", 42, {}, {"type": ""}, {"type": 7}])
def test_validate_message_rejects_messages_without_type(message):
    with pytest.raises(InvalidMessageError):
        validate_message(message)


def test_unknown_type_returns_none(worker_context):
    assert dispatch_message({"type": "video-transcode"}, worker_context) is None


def test_signup_message_is_stored(worker_context):
    result = dispatch_message(
        {"type": "signup", "name": "Grace Hopper", "email": "Grace@Example.com"},
        worker_context,
    )

    assert result["stored"] is True
    assert result["email"] == "grace@example.com"
    assert worker_context.signups.get_signup("grace@example.com").name == "Grace Hopper"


def test_duplicate_signup_message_is_acknowledged(worker_context):
    message = {"type": "signup", "name": "Grace", "email": "grace@example.com"}
    dispatch_message(message, worker_context)

    result = dispatch_message(message, worker_context)

    assert result == {"stored": False, "email": "grace@example.com", "reason": "duplicate"}


def test_invalid_signup_payload_is_rejected(worker_context):
    with pytest.raises(InvalidMessageError):
        dispatch_message({"type": "signup", "name": "No Email"}, worker_context)


def test_metric_message_is_published(worker_context, aws_clients):
    result = dispatch_message(
        {"type": "metric", "name": "ImagesResized", "value": 3, "unit": "Count"},
        worker_context,
    )

    assert result["published"] is True
    assert "ImagesResized" in list_metric_names(aws_clients)


@pytest.mark.parametrize(
    "payload",
    [
        {"value": 1},
        {"name": "Latency", "value": "fast"},
        {"name": "Latency", "value": True},
        {"name": "Latency", "value": 1, "unit": "Parsecs"},
        {"name": "Latency", "value": float("nan")},
        {"name": "Latency", "value": float("inf")},
        {"name": "Latency", "value": 10 ** 400},
    ],
)
def test_invalid_metric_message_is_rejected(worker_context, payload):
    with pytest.raises(InvalidMessageError):
        dispatch_message({"type": "metric", **payload}, worker_context)


def test_log_message(worker_context, caplog):
    with caplog.at_level("INFO"):
        result = dispatch_message({"type": "log", "text": "hello worker"}, worker_context)

    assert result == {"logged": True}
    assert "hello worker" in caplog.text


def test_non_finite_metric_is_rejected_with_metrics_disabled(worker_context):
    worker_context.metrics.enabled = False

    with pytest.raises(InvalidMessageError):
        dispatch_message({"type": "metric", "name": "Latency", "value": float("-inf")}, worker_context)


@pytest.mark.parametrize("email", ["a..b@example.com", "ada@-x-.com", "ada@"])
def test_signup_message_with_invalid_email_is_rejected(worker_context, email):
    with pytest.raises(InvalidMessageError):
        dispatch_message({"type": "signup", "name": "Ada", "email": email}, worker_context)
