"""Process-local document store, used for local runs (STORAGE_BACKEND=memory) and tests."""
import threading
from typing import Dict, List

from cost_manager.core.errors import DuplicateKeyError
from cost_manager.db.base import (
    COLLECTION_MODELS,
    PRIMARY_KEYS,
    Conditions,
    Document,
    DocumentStore,
    matches,
)


class MemoryDocumentStore(DocumentStore):
    def __init__(self) -> None:
        self._collections: Dict[str, List[Document]] = {name: [] for name in COLLECTION_MODELS}
        self._lock = threading.Lock()

    def _insert(self, collection: str, documents: List[Document]) -> None:
        key = PRIMARY_KEYS[collection]
        with self._lock:
            existing = {document[key] for document in self._collections[collection]}
            for document in documents:
                if document[key] in existing:
                    raise DuplicateKeyError(f"Duplicate key: {collection}.{key} {document[key]!r}")
                existing.add(document[key])
            self._collections[collection].extend(dict(document) for document in documents)

    def _find(self, collection: str, conditions: Conditions) -> List[Document]:
        with self._lock:
            return [
                dict(document)
                for document in self._collections[collection]
                if matches(document, conditions)
            ]
