"""
Token store backed by a remote DynamoDB table keyed on ``branch``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import boto3

from meeting_broker.core.config import StorageSettings
from meeting_broker.models.token import TokenRecord


class DynamoDBTokenStore:
    """Persist token records as items in a DynamoDB table."""

    def __init__(self, settings: StorageSettings, table: Any = None) -> None:
        if table is None:
            if not settings.dynamodb_table_name:
                raise ValueError(
                    "DYNAMODB_TABLE_NAME must be set for the dynamodb token store."
                )
            resource = boto3.resource("dynamodb", region_name=settings.region_name)
            table = resource.Table(settings.dynamodb_table_name)
        self._table = table

    def upsert(self, record: TokenRecord) -> None:
        """Put the record, replacing any previous item for the branch."""
        self._table.put_item(Item=record.to_item())

    def get(self, branch: str) -> Optional[TokenRecord]:
        """Retrieve the record for a branch."""
        response = self._table.get_item(Key={"branch": branch})
        item: Optional[Dict[str, Any]] = response.get("Item")
        if not item:
            return None
        # Numbers come back from DynamoDB as Decimal.
        return TokenRecord(
            branch=item["branch"],
            access_token=item["access_token"],
            refresh_token=item["refresh_token"],
            expires_at=int(item["expires_at"]),
        )

    def list_branches(self) -> List[str]:
        """Scan the table for every branch that has a record."""
        branches: List[str] = []
        kwargs: Dict[str, Any] = {"ProjectionExpression": "branch"}
        while True:
            response = self._table.scan(**kwargs)
            branches.extend(item["branch"] for item in response.get("Items", []))
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                break
            kwargs["ExclusiveStartKey"] = last_key
        return sorted(branches)


__all__ = ["DynamoDBTokenStore"]
