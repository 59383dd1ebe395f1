import pytest
from pydantic import ValidationError

from eb_course.settings import DEFAULT_LOCAL_ENDPOINT, Settings


def test_local_dev_defaults_to_moto_endpoint(monkeypatch):
    monkeypatch.delenv("AWS_ACCESS_KEY_ID", raising=False)
    monkeypatch.delenv("AWS_SECRET_ACCESS_KEY", raising=False)

    settings = Settings(deployment_mode="local-dev")

    assert settings.aws_endpoint_url == DEFAULT_LOCAL_ENDPOINT
    assert settings.aws_access_key_id == "mock"
    assert settings.is_local


def test_prod_leaves_endpoint_unset():
    settings = Settings(deployment_mode="aws-prod")

    assert settings.aws_endpoint_url is None
    assert not settings.is_local


@pytest.mark.parametrize(
    "given, expected",
    [("cloud", "aws-prod"), ("local", "local-dev"), ("mock", "aws-mock")],
)
def test_legacy_deployment_modes_are_normalized(given, expected):
    assert Settings(deployment_mode=given).deployment_mode == expected


def test_invalid_deployment_mode_is_rejected():
    with pytest.raises(ValidationError):
        Settings(deployment_mode="staging")


def test_environment_variables_override_defaults(monkeypatch):
    monkeypatch.setenv("DEPLOYMENT_MODE", "aws-prod")
    monkeypatch.setenv("SIGNUPS_TABLE", "from-env")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings()

    assert settings.deployment_mode == "aws-prod"
    assert settings.signups_table_name == "from-env"
    assert settings.log_level == "DEBUG"


def test_environment_dict_only_carries_credentials_in_local_modes():
    local = Settings(deployment_mode="aws-mock").get_environment_dict()
    prod = Settings(deployment_mode="aws-prod").get_environment_dict()

    assert local["AWS_ENDPOINT_URL"] == DEFAULT_LOCAL_ENDPOINT
    assert "AWS_ACCESS_KEY_ID" not in prod
    assert prod["DEPLOYMENT_MODE"] == "aws-prod"
