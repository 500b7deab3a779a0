import logging

from fastapi import Request

from cost_manager.core.config import Settings
from cost_manager.db.base import DocumentStore
from cost_manager.db.dynamo import DynamoDocumentStore
from cost_manager.db.memory import MemoryDocumentStore

logger = logging.getLogger(__name__)


def build_store(settings: Settings) -> DocumentStore:
    """Create the document store selected by STORAGE_BACKEND."""
    if settings.STORAGE_BACKEND == "memory":
        logger.warning("Using the in-memory store; data is lost on restart")
        return MemoryDocumentStore()
    logger.info(
        f"Using DynamoDB tables {settings.DYNAMO_USERS_TABLE}, {settings.DYNAMO_COSTS_TABLE} "
        f"in {settings.DYNAMO_REGION}"
    )
    return DynamoDocumentStore.from_settings(settings)


def get_store(request: Request) -> DocumentStore:
    """FastAPI dependency returning the store opened at startup."""
    return request.app.state.store
