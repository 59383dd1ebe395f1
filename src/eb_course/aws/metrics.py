"""Custom CloudWatch metrics written by the worker."""
import logging
from typing import Dict, Optional

from botocore.exceptions import BotoCoreError, ClientError

try:
    from mypy_boto3_cloudwatch import CloudWatchClient
except ImportError:
    ...

logger = logging.getLogger(__name__)

VALID_UNITS = {
    "Seconds", "Microseconds", "Milliseconds", "Bytes", "Kilobytes", "Megabytes",
    "Gigabytes", "Terabytes", "Bits", "Kilobits", "Megabits", "Gigabits", "Terabits",
    "Percent", "Count", "Bytes/Second", "Kilobytes/Second", "Megabytes/Second",
    "Gigabytes/Second", "Terabytes/Second", "Bits/Second", "Kilobits/Second",
    "Megabits/Second", "Gigabits/Second", "Terabits/Second", "Count/Second", "None",
}


class MetricsPublisher:
    """Publishes single data points under one namespace.

    Every data point carries an ``Environment`` dimension so that metrics from
    several Beanstalk environments sharing a namespace stay apart.
    """

    def __init__(
        self,
        client: Optional["CloudWatchClient"],
        namespace: str,
        environment: str,
        enabled: bool = True,
    ):
        self.client = client
        self.namespace = namespace
        self.environment = environment
        self.enabled = enabled and client is not None

    def put_metric(
        self,
        name: str,
        value: float,
        unit: str = "Count",
        dimensions: Optional[Dict[str, str]] = None,
    ) -> bool:
        """Publish one data point.

        Raises:
            ValueError: for an unknown unit.
            botocore errors: propagated to the caller.

        Returns:
            False when publishing is disabled, True otherwise.
        """
        if unit not in VALID_UNITS:
            raise ValueError(f"Invalid metric unit: {unit}")
        if not self.enabled:
            logger.debug(f"Metrics disabled, skipping {name}={value}")
            return False

        metric_dimensions = [{"Name": "Environment", "Value": self.environment}]
        for key, dim_value in (dimensions or {}).items():
            metric_dimensions.append({"Name": key, "Value": str(dim_value)})

        self.client.put_metric_data(
            Namespace=self.namespace,
            MetricData=[
                {
                    "MetricName": name,
                    "Value": float(value),
                    "Unit": unit,
                    "Dimensions": metric_dimensions,
                }
            ],
        )
        logger.debug(f"Published metric {self.namespace}/{name}={value} {unit}")
        return True

    def try_put_metric(self, name: str, value: float, unit: str = "Count", dimensions: Optional[Dict[str, str]] = None) -> bool:
        """Like :meth:`put_metric` but logs AWS failures instead of raising them.

        Used for bookkeeping metrics that must never change a request's outcome.
        """
        try:
            return self.put_metric(name, value, unit=unit, dimensions=dimensions)
        except (BotoCoreError, ClientError) as e:
            logger.warning(f"Could not publish metric {name}: {e}")
            return False
