"""Signup records stored in DynamoDB--the data behind the signup form."""
import logging
from datetime import datetime
from typing import Any, Dict, Optional

from botocore.exceptions import ClientError

from eb_course.errors import SignupExistsError, SignupNotFoundError
from eb_course.schemas import SignupRecord
from eb_course.utils.clock import to_iso

try:
    from mypy_boto3_dynamodb import DynamoDBClient
except ImportError:
    ...

logger = logging.getLogger(__name__)


def _to_item(record: SignupRecord) -> Dict[str, Dict[str, str]]:
    return {
        "email": {"S": record.email},
        "name": {"S": record.name},
        "timestamp": {"S": record.timestamp},
    }


def _from_item(item: Dict[str, Dict[str, Any]]) -> SignupRecord:
    return SignupRecord(
        email=item["email"]["S"],
        name=item.get("name", {}).get("S", ""),
        timestamp=item.get("timestamp", {}).get("S", ""),
    )


class SignupStore:
    """Reads and writes signup items keyed by email address."""

    def __init__(self, client: "DynamoDBClient", table_name: str):
        self.client = client
        self.table_name = table_name

    def ensure_table(self) -> bool:
        """Create the signups table if it does not exist.

        Returns:
            True if the table was created, False if it already existed.
        """
        try:
            self.client.create_table(
                TableName=self.table_name,
                KeySchema=[{"AttributeName": "email", "KeyType": "HASH"}],
                AttributeDefinitions=[{"AttributeName": "email", "AttributeType": "S"}],
                BillingMode="PAY_PER_REQUEST",
            )
        except self.client.exceptions.ResourceInUseException:
            logger.info(f"Signups table already exists: {self.table_name}")
            return False

        self.client.get_waiter("table_exists").wait(TableName=self.table_name)
        logger.info(f"Created signups table: {self.table_name}")
        return True

    def table_available(self) -> bool:
        """Return True when the table exists and is ACTIVE."""
        try:
            response = self.client.describe_table(TableName=self.table_name)
        except self.client.exceptions.ResourceNotFoundException:
            logger.warning(f"Signups table not found: {self.table_name}")
            return False
        return response["Table"]["TableStatus"] == "ACTIVE"

    def put_signup(self, name: str, email: str, timestamp: Optional[datetime] = None) -> SignupRecord:
        """Store a new signup. Existing records are never overwritten.

        Raises:
            SignupExistsError: if the email address is already signed up.
        """
        record = SignupRecord(email=email, name=name, timestamp=to_iso(timestamp))
        try:
            self.client.put_item(
                TableName=self.table_name,
                Item=_to_item(record),
                ConditionExpression="attribute_not_exists(email)",
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise SignupExistsError(email) from e
            logger.error(f"Error storing signup for {email}: {e}")
            raise

        logger.info(f"Stored signup for {email}")
        return record

    def get_signup(self, email: str) -> SignupRecord:
        response = self.client.get_item(
            TableName=self.table_name,
            Key={"email": {"S": email}},
            ConsistentRead=True,
        )
        item = response.get("Item")
        if not item:
            raise SignupNotFoundError(email)
        return _from_item(item)

    def count(self) -> int:
        """Count every signup in the table."""
        total = 0
        scan_kwargs: Dict[str, Any] = {"TableName": self.table_name, "Select": "COUNT"}
        while True:
            response = self.client.scan(**scan_kwargs)
            total += response["Count"]
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                return total
            scan_kwargs["ExclusiveStartKey"] = last_key

    def delete_older_than(self, cutoff: datetime) -> int:
        """Delete signups stored before ``cutoff``.

        Returns:
            Number of deleted items.
        """
        cutoff_iso = to_iso(cutoff)
        deleted = 0
        scan_kwargs: Dict[str, Any] = {
            "TableName": self.table_name,
            "ProjectionExpression": "email",
            "FilterExpression": "#ts < :cutoff",
            "ExpressionAttributeNames": {"#ts": "timestamp"},
            "ExpressionAttributeValues": {":cutoff": {"S": cutoff_iso}},
        }
        while True:
            response = self.client.scan(**scan_kwargs)
            for item in response.get("Items", []):
                self.client.delete_item(TableName=self.table_name, Key={"email": item["email"]})
                deleted += 1
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                break
            scan_kwargs["ExclusiveStartKey"] = last_key

        logger.info(f"Deleted {deleted} signups older than {cutoff_iso}")
        return deleted
