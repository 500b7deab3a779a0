import logging
from decimal import Decimal
from functools import reduce
from typing import Any, Dict, List, Optional

import boto3
from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import ClientError

from cost_manager.core.config import Settings
from cost_manager.core.errors import DuplicateKeyError, StorageError
from cost_manager.db.base import (
    COSTS,
    USERS,
    Conditions,
    Document,
    DocumentStore,
    normalize_filter,
)

logger = logging.getLogger(__name__)

# (hash key, range key) of each table
KEY_SCHEMA = {
    USERS: ("id", None),
    COSTS: ("userid", "_id"),
}

_CONDITION_METHODS = {
    "$eq": "eq",
    "$gt": "gt",
    "$gte": "gte",
    "$lt": "lt",
    "$lte": "lte",
}


class DynamoDocumentStore(DocumentStore):
    """
    DynamoDB backend. The users table is keyed by ``id``; the costs table by
    ``userid`` (hash) and ``_id`` (range), so a user's costs are one Query.
    """

    def __init__(self, users_table, costs_table):
        self._tables = {USERS: users_table, COSTS: costs_table}

    @classmethod
    def from_settings(cls, settings: Settings) -> "DynamoDocumentStore":
        dynamodb = boto3.resource(
            "dynamodb",
            region_name=settings.DYNAMO_REGION,
            endpoint_url=settings.DYNAMO_ENDPOINT_URL,
        )
        return cls(
            dynamodb.Table(settings.DYNAMO_USERS_TABLE),
            dynamodb.Table(settings.DYNAMO_COSTS_TABLE),
        )

    def ping(self) -> None:
        for collection, table in self._tables.items():
            try:
                table.load()
            except ClientError as e:
                logger.error(f"[ERROR] {collection} table is not accessible: {e.response['Error']['Message']}")
                raise StorageError(f"{collection} table is not accessible") from e

    def find_one(self, collection: str, filter: Optional[Dict[str, Any]] = None) -> Optional[Document]:
        self._model(collection)
        hash_key, range_key = KEY_SCHEMA[collection]
        conditions = normalize_filter(filter)
        if range_key is None and list(conditions) == [hash_key] and list(conditions[hash_key]) == ["$eq"]:
            try:
                response = self._tables[collection].get_item(Key={hash_key: conditions[hash_key]["$eq"]})
            except ClientError as e:
                raise self._storage_error("find_one", collection, e) from e
            item = response.get("Item")
            return _from_dynamo(item) if item else None
        return super().find_one(collection, filter)

    def _insert(self, collection: str, documents: List[Document]) -> None:
        table = self._tables[collection]
        try:
            if collection == USERS:
                # One conditional put per user keeps ``id`` unique
                for document in documents:
                    self._put_user(table, document)
            elif len(documents) == 1:
                table.put_item(Item=_convert_for_dynamo(documents[0]))
            else:
                with table.batch_writer() as batch:
                    for document in documents:
                        batch.put_item(Item=_convert_for_dynamo(document))
        except ClientError as e:
            raise self._storage_error("insert", collection, e) from e

    @staticmethod
    def _put_user(table, document: Document) -> None:
        try:
            table.put_item(
                Item=_convert_for_dynamo(document),
                ConditionExpression=Attr("id").not_exists(),
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise DuplicateKeyError(f"Duplicate key: users.id {document['id']!r}") from e
            raise

    def _find(self, collection: str, conditions: Conditions) -> List[Document]:
        table = self._tables[collection]
        hash_key, _ = KEY_SCHEMA[collection]
        remaining = dict(conditions)
        kwargs: Dict[str, Any] = {}

        key_ops = remaining.get(hash_key)
        if key_ops is not None and list(key_ops) == ["$eq"]:
            del remaining[hash_key]
            kwargs["KeyConditionExpression"] = Key(hash_key).eq(key_ops["$eq"])
            operation = table.query
        else:
            operation = table.scan

        filter_expression = _build_filter_expression(remaining)
        if filter_expression is not None:
            kwargs["FilterExpression"] = filter_expression

        items: List[Document] = []
        try:
            while True:
                response = operation(**kwargs)
                items.extend(response.get("Items", []))
                last_key = response.get("LastEvaluatedKey")
                if not last_key:
                    break
                kwargs["ExclusiveStartKey"] = last_key
        except ClientError as e:
            raise self._storage_error("find", collection, e) from e
        return [_from_dynamo(item) for item in items]

    @staticmethod
    def _storage_error(action: str, collection: str, e: ClientError) -> StorageError:
        message = e.response["Error"]["Message"]
        logger.error(f"[ERROR] {action} on {collection} failed: {message}")
        return StorageError(f"{action} on {collection} failed: {message}")


def _build_filter_expression(conditions: Conditions):
    expressions = [
        getattr(Attr(field), _CONDITION_METHODS[op])(_convert_for_dynamo(value))
        for field, ops in conditions.items()
        for op, value in ops.items()
    ]
    if not expressions:
        return None
    return reduce(lambda left, right: left & right, expressions)


def _convert_for_dynamo(obj: Any):
    """
    Recursively convert floats to Decimal for DynamoDB compatibility.
    """
    if isinstance(obj, float):
        return Decimal(str(obj))
    if isinstance(obj, dict):
        return {k: _convert_for_dynamo(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_convert_for_dynamo(v) for v in obj]
    return obj


def _from_dynamo(obj: Any):
    """
    Recursively convert Decimal instances back to native Python numeric types.
    """
    if isinstance(obj, list):
        return [_from_dynamo(item) for item in obj]
    if isinstance(obj, dict):
        return {k: _from_dynamo(v) for k, v in obj.items()}
    if isinstance(obj, Decimal):
        if obj % 1 == 0:
            return int(obj)
        return float(obj)
    return obj
