"""
Document store interface shared by every storage backend.

Documents are validated against their collection model on write and returned
verbatim (plain dicts, timestamps as fixed-width UTC strings) on read.
Filters are Mongo-style dicts::

    {"userid": "u1"}                                  # equality
    {"date": {"$gte": start, "$lt": end}}             # range

Datetime and date values inside filters are encoded the same way they are
stored, so range comparisons work on the stored strings.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional, Type

from pydantic import BaseModel, ValidationError as PydanticValidationError

from cost_manager.core.errors import DocumentValidationError
from cost_manager.models.cost import CostInDB
from cost_manager.models.user import UserInDB
from cost_manager.utils.timestamps import encode_value

logger = logging.getLogger(__name__)

Document = Dict[str, Any]
Conditions = Dict[str, Dict[str, Any]]

USERS = "users"
COSTS = "costs"

COLLECTION_MODELS: Dict[str, Type[BaseModel]] = {
    USERS: UserInDB,
    COSTS: CostInDB,
}

# Unique key per collection
PRIMARY_KEYS = {
    USERS: "id",
    COSTS: "_id",
}

OPERATORS = ("$eq", "$gt", "$gte", "$lt", "$lte")


def format_validation_error(collection: str, exc: PydanticValidationError) -> str:
    details = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return f"{collection} validation failed: {details}"


def normalize_filter(filter: Optional[Dict[str, Any]]) -> Conditions:
    """Turn a filter into ``{field: {operator: encoded value}}``."""
    conditions: Conditions = {}
    for field, spec in (filter or {}).items():
        if isinstance(spec, dict):
            unknown = set(spec) - set(OPERATORS)
            if unknown:
                raise ValueError(f"Unsupported filter operator(s) for {field}: {', '.join(sorted(unknown))}")
            conditions[field] = {op: encode_value(value) for op, value in spec.items()}
        else:
            conditions[field] = {"$eq": encode_value(spec)}
    return conditions


def _compare(op: str, actual: Any, expected: Any) -> bool:
    if op == "$eq":
        return actual == expected
    if actual is None:
        return False
    try:
        if op == "$gt":
            return actual > expected
        if op == "$gte":
            return actual >= expected
        if op == "$lt":
            return actual < expected
        if op == "$lte":
            return actual <= expected
    except TypeError:
        return False
    raise ValueError(f"Unsupported filter operator: {op}")


def matches(document: Document, conditions: Conditions) -> bool:
    return all(
        _compare(op, document.get(field), expected)
        for field, ops in conditions.items()
        for op, expected in ops.items()
    )


class DocumentStore:
    """Base class for storage backends. Subclasses implement _insert and _find."""

    def validate(self, collection: str, document: Document) -> Document:
        """Validate a document against its collection model and return its stored form."""
        model = self._model(collection)
        try:
            instance = model.model_validate(document)
        except PydanticValidationError as exc:
            raise DocumentValidationError(format_validation_error(collection, exc)) from exc
        return instance.to_document()

    def insert_one(self, collection: str, document: Document) -> Document:
        stored = self.validate(collection, document)
        self._insert(collection, [stored])
        return dict(stored)

    def insert_many(self, collection: str, documents: Iterable[Document]) -> List[Document]:
        # Validate everything before writing anything
        stored = [self.validate(collection, document) for document in documents]
        if stored:
            self._insert(collection, stored)
        logger.info(f"Inserted {len(stored)} document(s) into {collection}")
        return [dict(document) for document in stored]

    def find_many(self, collection: str, filter: Optional[Dict[str, Any]] = None) -> List[Document]:
        self._model(collection)
        return self._find(collection, normalize_filter(filter))

    def find_one(self, collection: str, filter: Optional[Dict[str, Any]] = None) -> Optional[Document]:
        documents = self.find_many(collection, filter)
        return documents[0] if documents else None

    def ping(self) -> None:
        """Raise StorageError if the backing store is unreachable."""

    def close(self) -> None:
        pass

    @staticmethod
    def _model(collection: str) -> Type[BaseModel]:
        try:
            return COLLECTION_MODELS[collection]
        except KeyError:
            raise ValueError(f"Unknown collection: {collection}") from None

    def _insert(self, collection: str, documents: List[Document]) -> None:
        raise NotImplementedError

    def _find(self, collection: str, conditions: Conditions) -> List[Document]:
        raise NotImplementedError
