"""Key-value storage backed by a single Firestore collection.

Every record is one document whose id is the record key::

    kv_store/<key> -> {"key": <key>, "value": <JSON value>}

Keeping the key as a field lets prefix scans run as a range query on ``key``.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, cast

from firebase_admin import firestore
from flask import current_app, has_app_context

from .constants import FIRESTORE_BATCH_LIMIT, KV_COLLECTION

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client
    from google.cloud.firestore_v1.document import DocumentReference


def prefix_upper_bound(prefix: str) -> str:
    """Return the smallest string greater than every string starting with ``prefix``."""
    if not prefix:
        raise ValueError("Prefix may not be empty")
    return prefix[:-1] + chr(ord(prefix[-1]) + 1)


class KVStore:
    """Namespaced map from string key to JSON value."""

    def __init__(self, db: Client | None = None, collection: str | None = None) -> None:
        if collection is None and has_app_context():
            collection = current_app.config.get("KV_COLLECTION")
        self.collection = collection or KV_COLLECTION
        self.db = db if db is not None else firestore.client()

    def _ref(self, key: str) -> DocumentReference:
        if not key or "/" in key:
            raise ValueError(f"Invalid key: {key!r}")
        return self.db.collection(self.collection).document(key)

    def get(self, key: str) -> Any:
        """Return the value stored under ``key``, or None."""
        doc = cast("DocumentSnapshot", self._ref(key).get())
        if not doc.exists:
            return None
        data = doc.to_dict() or {}
        return data.get("value")

    def set(self, key: str, value: Any) -> None:
        self._ref(key).set({"key": key, "value": value})

    def delete(self, key: str) -> None:
        self._ref(key).delete()

    def scan(self, prefix: str) -> list[tuple[str, Any]]:
        """Return ``(key, value)`` pairs for every key starting with ``prefix``."""
        query = (
            self.db.collection(self.collection)
            .where(filter=firestore.FieldFilter("key", ">=", prefix))
            .where(filter=firestore.FieldFilter("key", "<", prefix_upper_bound(prefix)))
        )
        results = []
        for doc in query.stream():
            data = doc.to_dict()
            if not data or "key" not in data:
                continue
            results.append((data["key"], data.get("value")))
        results.sort(key=lambda item: item[0])
        return results

    def get_by_prefix(self, prefix: str) -> list[Any]:
        """Return the values of every key starting with ``prefix``."""
        return [value for _, value in self.scan(prefix)]

    def apply(
        self,
        sets: dict[str, Any] | None = None,
        deletes: Iterable[str] = (),
    ) -> None:
        """Write and delete several keys in one atomic batch."""
        sets = sets or {}
        deletes = list(deletes)
        if len(sets) + len(deletes) > FIRESTORE_BATCH_LIMIT:
            raise ValueError("Too many writes for a single batch.")

        batch = self.db.batch()
        for key, value in sets.items():
            batch.set(self._ref(key), {"key": key, "value": value})
        for key in deletes:
            batch.delete(self._ref(key))
        batch.commit()

    def delete_many(self, keys: Iterable[str]) -> int:
        """Delete ``keys`` in chunks of at most one batch each.

        Chunks are committed independently, so a failure part-way leaves the
        earlier chunks deleted.
        """
        keys = list(keys)
        for start in range(0, len(keys), FIRESTORE_BATCH_LIMIT):
            self.apply(deletes=keys[start : start + FIRESTORE_BATCH_LIMIT])
        return len(keys)
