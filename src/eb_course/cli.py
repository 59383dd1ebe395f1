# cli.py
import json
import logging

import click

from eb_course.aws.clients import AWSClients
from eb_course.aws.signups import SignupStore
from eb_course.logging_config import configure_logging
from eb_course.settings import get_settings

# Configure logging
logger = logging.getLogger(__name__)


@click.group()
@click.option("--log-level", default=None, help="Override the LOG_LEVEL setting")
def cli(log_level):
    """CLI commands for the Elastic Beanstalk course apps"""
    configure_logging(log_level)


@cli.command()
def show_config():
    """Show current configuration"""
    settings = get_settings()

    print("Current Configuration:")
    print(f"  App Name: {settings.app_name}")
    print(f"  Environment: {settings.environment_name}")
    print(f"  Deployment Mode: {settings.deployment_mode}")
    print(f"  AWS Region: {settings.aws_region}")
    print(f"  AWS Endpoint: {settings.aws_endpoint_url}")
    print(f"  Signups Table: {settings.signups_table_name}")
    print(f"  SQS Queue URL: {settings.sqs_queue_url}")
    print(f"  Metrics: {'enabled' if settings.metrics_enabled else 'disabled'} ({settings.metrics_namespace})")
    print(f"  Signup Retention: {settings.signup_retention_days} days")


@cli.command()
@click.option("--host", default="0.0.0.0", help="Interface to bind")
@click.option("--port", default=8000, type=int, help="Port to listen on")
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host, port, reload):
    """Run the sample apps with uvicorn"""
    import uvicorn

    uvicorn.run("eb_course.main:create_app", factory=True, host=host, port=port, reload=reload)


@cli.command()
def create_table():
    """Create the signups table if it does not exist"""
    settings = get_settings()
    store = SignupStore(AWSClients(settings).dynamodb, settings.signups_table_name)

    if store.ensure_table():
        print(f"✅ Created table {settings.signups_table_name}")
    else:
        print(f"Table {settings.signups_table_name} already exists")


@cli.command()
@click.argument("message_type")
@click.option("--payload", default="{}", help="JSON object merged into the message")
@click.option("--queue-url", default=None, help="Queue URL (defaults to SQS_QUEUE_URL)")
def send_message(message_type, payload, queue_url):
    """Send one message to the worker environment's queue"""
    settings = get_settings()
    queue_url = queue_url or settings.sqs_queue_url
    if not queue_url:
        raise click.UsageError("No queue URL: pass --queue-url or set SQS_QUEUE_URL")

    try:
        body = json.loads(payload)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"not valid JSON: {e}", param_hint="--payload")
    if not isinstance(body, dict):
        raise click.BadParameter("must be a JSON object", param_hint="--payload")
    body["type"] = message_type

    response = AWSClients(settings).sqs.send_message(
        QueueUrl=queue_url,
        MessageBody=json.dumps(body),
    )
    logger.info(f"Sent {message_type} message to {queue_url}")
    print(f"✅ Sent message {response['MessageId']}")


if __name__ == "__main__":
    cli()
