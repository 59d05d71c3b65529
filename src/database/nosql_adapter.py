"""
SQLite document adapter for local development and tests.
Stores every collection as JSON documents and exposes the same interface as MongoAdapter.
"""

import json
import re
import sqlite3
import logging
from datetime import datetime
from typing import Dict, Any, List, Optional, Sequence, Tuple

from bson import ObjectId

from .schemas import (
    COLLECTIONS,
    DOCUMENT_ID,
    get_collection_schema,
    stamp_new_document,
    stamp_update,
)

logger = logging.getLogger(__name__)

ASCENDING = 1
DESCENDING = -1

_FIELD_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class NoSQLAdapter:
    """SQLite-backed adapter for document-based database operations"""

    def __init__(self, db_path: str = "portfolio.db"):
        self.db_path = db_path

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection with JSON support"""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    @staticmethod
    def _table(collection: str) -> str:
        # Only collections listed in COLLECTIONS ever reach SQL
        return f"{get_collection_schema(collection).name}_docs"

    def _serialize_document(self, document: Dict[str, Any]) -> str:
        """Serialize document to JSON string"""
        def json_serializer(obj):
            if isinstance(obj, datetime):
                # fixed width keeps stored timestamps sortable as text
                return obj.isoformat(timespec="microseconds")
            raise TypeError(f"Object of type {type(obj)} is not JSON serializable")

        return json.dumps(document, default=json_serializer)

    def _deserialize_row(self, row: sqlite3.Row) -> Dict[str, Any]:
        """Turn a stored row back into a document carrying its `_id`"""
        document = json.loads(row["document"])
        document[DOCUMENT_ID] = row["doc_id"]
        return document

    def init_collections(self) -> None:
        """Initialize document collections (tables)"""
        conn = self._get_connection()
        try:
            for collection in COLLECTIONS:
                conn.execute(f'''
                    CREATE TABLE IF NOT EXISTS {self._table(collection)} (
                        doc_id TEXT PRIMARY KEY,
                        document TEXT NOT NULL
                    )
                ''')
            conn.commit()
            logger.info("NoSQL collections initialized successfully")
        except Exception as e:
            logger.error(f"Error initializing collections: {e}")
            raise
        finally:
            conn.close()

    def ping(self) -> bool:
        """Check the database file can be opened and queried"""
        try:
            conn = self._get_connection()
            try:
                conn.execute("SELECT 1")
            finally:
                conn.close()
            return True
        except sqlite3.Error as e:
            logger.error(f"SQLite ping failed: {e}")
            return False

    def _fetch(self, conn: sqlite3.Connection, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        row = conn.execute(
            f"SELECT rowid, doc_id, document FROM {self._table(collection)} WHERE doc_id = ?",
            (doc_id,),
        ).fetchone()
        return self._deserialize_row(row) if row else None

    def find_one_document(self, collection: str) -> Optional[Dict[str, Any]]:
        """Return the first document in insertion order, if any"""
        conn = self._get_connection()
        try:
            row = conn.execute(
                f"SELECT doc_id, document FROM {self._table(collection)} ORDER BY rowid ASC LIMIT 1"
            ).fetchone()
            return self._deserialize_row(row) if row else None
        except Exception as e:
            logger.error(f"Error finding document in {collection}: {e}")
            raise
        finally:
            conn.close()

    def query_documents(
        self,
        collection: str,
        sort: Optional[Sequence[Tuple[str, int]]] = None,
    ) -> List[Dict[str, Any]]:
        """List every document, optionally sorted by top-level fields"""
        order_terms = []
        params = []
        for field, direction in sort or []:
            if not _FIELD_NAME.match(field):
                raise ValueError(f"Invalid sort field: {field}")
            order_terms.append(f"json_extract(document, ?) {'DESC' if direction == DESCENDING else 'ASC'}")
            params.append(f"$.{field}")
        # Insertion order breaks ties, newest first when the primary key is descending
        tiebreak = "DESC" if sort and sort[0][1] == DESCENDING else "ASC"
        order_terms.append(f"rowid {tiebreak}")

        conn = self._get_connection()
        try:
            rows = conn.execute(
                f"SELECT doc_id, document FROM {self._table(collection)} ORDER BY {', '.join(order_terms)}",
                params,
            ).fetchall()
            return [self._deserialize_row(row) for row in rows]
        except Exception as e:
            logger.error(f"Error querying documents from {collection}: {e}")
            raise
        finally:
            conn.close()

    def create_document(self, collection: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Create a new document in the collection"""
        document = stamp_new_document(collection, fields)
        doc_id = str(ObjectId())
        conn = self._get_connection()
        try:
            conn.execute(
                f"INSERT INTO {self._table(collection)} (doc_id, document) VALUES (?, ?)",
                (doc_id, self._serialize_document(document)),
            )
            conn.commit()
            logger.info(f"Created document in {collection} with ID: {doc_id}")
            return self._fetch(conn, collection, doc_id)
        except Exception as e:
            logger.error(f"Error creating document in {collection}: {e}")
            raise
        finally:
            conn.close()

    def update_document(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Merge fields into an existing document; None when the ID is unknown"""
        update = stamp_update(collection, fields)
        conn = self._get_connection()
        try:
            existing = self._fetch(conn, collection, doc_id)
            if existing is None:
                logger.warning(f"No document found to update in {collection} with ID: {doc_id}")
                return None

            existing.pop(DOCUMENT_ID)
            existing.update(json.loads(self._serialize_document(update)))
            conn.execute(
                f"UPDATE {self._table(collection)} SET document = ? WHERE doc_id = ?",
                (self._serialize_document(existing), doc_id),
            )
            conn.commit()
            logger.info(f"Updated document in {collection} with ID: {doc_id}")
            return self._fetch(conn, collection, doc_id)
        except Exception as e:
            logger.error(f"Error updating document in {collection}: {e}")
            raise
        finally:
            conn.close()

    def delete_document(self, collection: str, doc_id: str) -> bool:
        """Delete a document by ID"""
        conn = self._get_connection()
        try:
            cursor = conn.execute(f"DELETE FROM {self._table(collection)} WHERE doc_id = ?", (doc_id,))
            conn.commit()
            success = cursor.rowcount > 0

            if success:
                logger.info(f"Deleted document from {collection} with ID: {doc_id}")
            else:
                logger.warning(f"No document found to delete in {collection} with ID: {doc_id}")

            return success

        except Exception as e:
            logger.error(f"Error deleting document from {collection}: {e}")
            raise
        finally:
            conn.close()

    def count_documents(self, collection: str) -> int:
        """Count documents in a collection"""
        conn = self._get_connection()
        try:
            return conn.execute(f"SELECT COUNT(*) FROM {self._table(collection)}").fetchone()[0]
        finally:
            conn.close()

    def close(self) -> None:
        """Nothing to release; connections are opened per operation"""
