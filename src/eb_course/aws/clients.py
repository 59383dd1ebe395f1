"""AWS client management."""
import logging
from typing import Any, Dict, Optional

import boto3

from eb_course.settings import Settings, get_settings

logger = logging.getLogger(__name__)


class AWSClients:
    """Lazily created boto3 clients sharing one set of settings.

    One instance lives on ``app.state.aws`` so that every request handler in
    an app reuses the same clients, while separate apps (and tests) stay
    isolated from each other.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._clients: Dict[str, Any] = {}

        logger.info("Initializing AWSClients")
        logger.info("  Mode: %s", self.settings.deployment_mode)
        logger.info("  Region: %s", self.settings.aws_region)
        logger.info("  Endpoint: %s", self.settings.aws_endpoint_url)

    def get_client(self, service_name: str) -> Any:
        """Get or create an AWS service client."""
        if service_name in self._clients:
            return self._clients[service_name]

        client_kwargs = {
            "region_name": self.settings.aws_region,
        }

        if self.settings.aws_access_key_id:
            client_kwargs["aws_access_key_id"] = self.settings.aws_access_key_id
        if self.settings.aws_secret_access_key:
            client_kwargs["aws_secret_access_key"] = self.settings.aws_secret_access_key

        # Local modes talk to a moto server
        if self.settings.aws_endpoint_url:
            client_kwargs["endpoint_url"] = self.settings.aws_endpoint_url

        try:
            client = boto3.client(service_name, **client_kwargs)
        except Exception as e:
            logger.error(f"Error creating {service_name} client: {str(e)}")
            raise

        self._clients[service_name] = client
        logger.debug(f"Created {service_name} client")
        return client

    @property
    def dynamodb(self):
        return self.get_client("dynamodb")

    @property
    def cloudwatch(self):
        return self.get_client("cloudwatch")

    @property
    def sqs(self):
        return self.get_client("sqs")

    def clear_clients(self) -> None:
        """Clear all cached clients."""
        self._clients.clear()
        logger.debug("Cleared all AWS clients")
