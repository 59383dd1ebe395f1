"""AWS service access: boto3 clients, the signups table and CloudWatch metrics."""
