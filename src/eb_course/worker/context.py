"""Services shared by message handlers, scheduled tasks and health checks."""
from dataclasses import dataclass

from eb_course.aws.clients import AWSClients
from eb_course.aws.metrics import MetricsPublisher
from eb_course.aws.signups import SignupStore
from eb_course.settings import Settings


@dataclass
class WorkerContext:
    settings: Settings
    signups: SignupStore
    metrics: MetricsPublisher

    @classmethod
    def from_clients(cls, aws: AWSClients) -> "WorkerContext":
        settings = aws.settings
        metrics_client = aws.cloudwatch if settings.metrics_enabled else None
        return cls(
            settings=settings,
            signups=SignupStore(aws.dynamodb, settings.signups_table_name),
            metrics=MetricsPublisher(
                metrics_client,
                namespace=settings.metrics_namespace,
                environment=settings.environment_name,
                enabled=settings.metrics_enabled,
            ),
        )
