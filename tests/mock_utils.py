"""Mock utilities for Firestore."""

from __future__ import annotations

import unittest.mock
from typing import Any, Optional

from mockfirestore import CollectionReference, MockFirestore, Query
from mockfirestore.document import DocumentSnapshot


class MockBatch:
    """Write batch that applies its operations on commit."""

    def __init__(self, db: Any) -> None:
        self.db = db
        self.operations: list[tuple[str, Any, Any]] = []
        self.commit = unittest.mock.MagicMock(side_effect=self._real_commit)

    def set(self, ref: Any, data: Any, merge: bool = False) -> None:
        self.operations.append(("set", ref, data))

    def update(self, ref: Any, data: Any) -> None:
        self.operations.append(("update", ref, data))

    def delete(self, ref: Any) -> None:
        self.operations.append(("delete", ref, None))

    def _real_commit(self) -> None:
        for op, ref, data in self.operations:
            if op == "set":
                ref.set(data)
            elif op == "update":
                ref.update(data)
            elif ref.get().exists:
                ref.delete()


class EnhancedMockFirestore(MockFirestore):
    """MockFirestore with write batch support."""

    def batch(self) -> MockBatch:
        return MockBatch(self)


class MockFirestoreBuilder:
    """Builder to modularize mockfirestore patching."""

    @staticmethod
    def patch_db_read() -> None:
        """Apply monkeypatches to mockfirestore to support FieldFilter range queries."""

        def collection_where(
            self: Any,
            field_path: Optional[str] = None,
            op_string: Optional[str] = None,
            value: Any = None,
            filter: Any = None,
        ) -> Any:
            if filter:
                return self._where(filter.field_path, filter.op_string, filter.value)
            return self._where(field_path, op_string, value)

        if not hasattr(CollectionReference, "_where"):
            CollectionReference._where = CollectionReference.where
            CollectionReference.where = collection_where

        def query_where(
            self: Any,
            field_path: Optional[str] = None,
            op_string: Optional[str] = None,
            value: Any = None,
            filter: Any = None,
        ) -> Any:
            if filter:
                return self._where(filter.field_path, filter.op_string, filter.value)
            return self._where(field_path, op_string, value)

        if not hasattr(Query, "_where"):
            Query._where = Query.where
            Query.where = query_where

        # Documents without the filtered field never match, as in Firestore.
        if not hasattr(DocumentSnapshot, "_orig_get_by_field_path"):
            DocumentSnapshot._orig_get_by_field_path = DocumentSnapshot._get_by_field_path

            def get_by_field_path(self: Any, field_path: str) -> Any:
                try:
                    return self._orig_get_by_field_path(field_path)
                except KeyError:
                    return None

            DocumentSnapshot._get_by_field_path = get_by_field_path

        if not hasattr(Query, "_orig_compare_func"):
            Query._orig_compare_func = Query._compare_func

            def compare_func(self: Any, op: str) -> Any:
                compare = self._orig_compare_func(op)

                def safe_compare(x: Any, y: Any) -> bool:
                    if x is None:
                        return False
                    return compare(x, y)

                return safe_compare

            Query._compare_func = compare_func


def patch_mockfirestore() -> None:
    """Apply monkeypatches to mockfirestore."""
    MockFirestoreBuilder.patch_db_read()
