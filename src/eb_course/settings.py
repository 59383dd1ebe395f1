# src/eb_course/settings.py
from functools import lru_cache
from typing import Optional, Dict

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_DEPLOYMENT_MODES = ["local-dev", "aws-mock", "aws-prod"]
LOCAL_MODES = ["local-dev", "aws-mock"]
DEFAULT_LOCAL_ENDPOINT = "http://localhost:5000"


class Settings(BaseSettings):
    """
    Single source of truth for all application settings.

    Configuration precedence:
    1. Environment variables (highest priority)
    2. .env file (if exists)
    3. Default values in this class (lowest priority)

    Usage:
        from eb_course.settings import get_settings
        settings = get_settings()
        table = settings.signups_table_name
    """

    # Application Settings
    app_name: str = Field(
        default="eb-course-app",
        description="Application name shown by the sample pages"
    )

    app_version: str = Field(
        default="1.0.0",
        description="Version label reported by /api/info"
    )

    environment_name: str = Field(
        default="development",
        validation_alias=AliasChoices("environment_name", "ENVIRONMENT", "EB_ENVIRONMENT_NAME"),
        description="Beanstalk environment name, used as a metric dimension"
    )

    # Deployment Mode
    deployment_mode: str = Field(
        default="local-dev",
        validation_alias=AliasChoices("deployment_mode", "DEPLOYMENT_MODE", "EXEC_MODE"),
        description="Deployment mode: local-dev, aws-mock, or aws-prod"
    )

    # AWS Core Settings
    aws_region: str = Field(
        default="us-east-1",
        alias="AWS_DEFAULT_REGION"
    )

    aws_access_key_id: Optional[str] = Field(
        default=None,
        alias="AWS_ACCESS_KEY_ID"
    )

    aws_secret_access_key: Optional[str] = Field(
        default=None,
        alias="AWS_SECRET_ACCESS_KEY"
    )

    aws_endpoint_url: Optional[str] = Field(
        default=None,
        alias="AWS_ENDPOINT_URL"
    )

    # DynamoDB Configuration
    signups_table_name: str = Field(
        default="eb-course-signups",
        validation_alias=AliasChoices("signups_table_name", "SIGNUPS_TABLE", "STARTUP_SIGNUP_TABLE"),
        description="DynamoDB table holding signup records"
    )

    # SQS Configuration
    sqs_queue_url: Optional[str] = Field(
        default=None,
        alias="SQS_QUEUE_URL",
        description="Worker environment queue URL (used by the send-message command)"
    )

    # CloudWatch Configuration
    metrics_enabled: bool = Field(
        default=True,
        description="Publish custom CloudWatch metrics from the worker"
    )

    metrics_namespace: str = Field(
        default="EBCourse/Worker",
        description="CloudWatch namespace for custom metrics"
    )

    # Scheduled tasks
    signup_retention_days: int = Field(
        default=30,
        ge=1,
        description="Signups older than this are removed by the cleanup task"
    )

    # Health checks
    health_check_dynamodb: bool = Field(
        default=True,
        description="Include the signups table in /health"
    )

    health_min_free_disk_ratio: float = Field(
        default=0.05,
        ge=0.0,
        le=1.0,
        description="Minimum free fraction of the root volume for /health"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    @field_validator("deployment_mode", mode="before")
    @classmethod
    def normalize_deployment_mode(cls, v):
        """Normalize deployment mode values for backwards compatibility."""
        if v:
            mode_mapping = {
                "local": "local-dev",
                "local-mock": "local-dev",
                "mock": "aws-mock",
                "cloud": "aws-prod",
                "prod": "aws-prod",
            }
            return mode_mapping.get(v, v)
        return v

    @field_validator("deployment_mode")
    @classmethod
    def validate_deployment_mode(cls, v):
        """Validate deployment mode is one of the allowed values."""
        if v not in VALID_DEPLOYMENT_MODES:
            raise ValueError(f"Invalid deployment_mode: {v}. Must be one of {VALID_DEPLOYMENT_MODES}")
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v):
        return v.upper()

    @model_validator(mode="after")
    def apply_local_mode_defaults(self):
        """Point local modes at a moto server with mock credentials unless told otherwise."""
        if self.deployment_mode in LOCAL_MODES:
            if self.aws_endpoint_url is None:
                self.aws_endpoint_url = DEFAULT_LOCAL_ENDPOINT
            if self.aws_access_key_id is None:
                self.aws_access_key_id = "mock"
            if self.aws_secret_access_key is None:
                self.aws_secret_access_key = "mock"
        # In production, leave credentials unset so the instance profile is used
        return self

    @property
    def is_local(self) -> bool:
        return self.deployment_mode in LOCAL_MODES

    def get_environment_dict(self) -> Dict[str, str]:
        """Get configuration as a dictionary suitable for `eb setenv` or docker-compose.

        Returns:
            Dictionary of environment variables
        """
        env_dict = {
            "DEPLOYMENT_MODE": self.deployment_mode,
            "ENVIRONMENT": self.environment_name,
            "AWS_DEFAULT_REGION": self.aws_region,
            "SIGNUPS_TABLE": self.signups_table_name,
            "SQS_QUEUE_URL": self.sqs_queue_url or "",
            "METRICS_ENABLED": str(self.metrics_enabled).lower(),
            "METRICS_NAMESPACE": self.metrics_namespace,
            "LOG_LEVEL": self.log_level,
        }

        # Only include AWS credentials for local/mock modes
        if self.is_local:
            env_dict.update({
                "AWS_ENDPOINT_URL": self.aws_endpoint_url or "",
                "AWS_ACCESS_KEY_ID": self.aws_access_key_id or "mock",
                "AWS_SECRET_ACCESS_KEY": self.aws_secret_access_key or "mock",
            })

        return env_dict

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one Settings instance per process.
    """
    return Settings()
