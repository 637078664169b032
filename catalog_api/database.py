import itertools
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

# In-memory document store standing in for the production database.
# Documents are plain dicts keyed by a server-assigned hex id.


def _now() -> datetime:
    return datetime.now(timezone.utc)


class DocumentStore:
    def __init__(self) -> None:
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self._seq: Dict[str, int] = {}
        self._counter = itertools.count()

    def _collection(self, name: str) -> Dict[str, Dict[str, Any]]:
        return self._collections.setdefault(name, {})

    def find(self, name: str) -> List[Dict[str, Any]]:
        """All documents of a collection, newest first."""
        docs = self._collection(name).values()
        return sorted(docs, key=lambda d: (d["createdAt"], self._seq[d["id"]]), reverse=True)

    def get(self, name: str, doc_id: str) -> Optional[Dict[str, Any]]:
        return self._collection(name).get(doc_id)

    def insert(self, name: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        doc_id = uuid.uuid4().hex
        now = _now()
        doc = {"id": doc_id, **fields, "createdAt": now, "updatedAt": now}
        self._collection(name)[doc_id] = doc
        self._seq[doc_id] = next(self._counter)
        return doc

    def update(self, name: str, doc_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        doc = self._collection(name).get(doc_id)
        if doc is None:
            return None
        # id and createdAt are never overwritten
        fields = {k: v for k, v in fields.items() if k not in ("id", "createdAt")}
        doc.update(fields)
        doc["updatedAt"] = _now()
        return doc

    def delete(self, name: str, doc_id: str) -> bool:
        removed = self._collection(name).pop(doc_id, None)
        if removed is None:
            return False
        self._seq.pop(doc_id, None)
        return True

    def clear(self) -> None:
        self._collections.clear()
        self._seq.clear()


db = DocumentStore()
