"""
MongoDB adapter for document-based operations.
Provides identical interface to NoSQLAdapter but uses native MongoDB collections.
"""

import logging
from typing import Dict, Any, List, Optional, Sequence, Tuple

from bson import ObjectId
from pymongo import MongoClient, ReturnDocument
from pymongo.errors import ConnectionFailure, PyMongoError

from .schemas import (
    COLLECTIONS,
    DOCUMENT_ID,
    get_collection_schema,
    stamp_new_document,
    stamp_update,
)

logger = logging.getLogger(__name__)


def _object_id(doc_id: str) -> Optional[ObjectId]:
    """Parse a public document ID; malformed IDs simply match nothing"""
    if isinstance(doc_id, ObjectId):
        return doc_id
    if ObjectId.is_valid(doc_id):
        return ObjectId(doc_id)
    return None


def _to_public(document: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Expose `_id` as a plain string"""
    if document is None:
        return None
    document[DOCUMENT_ID] = str(document[DOCUMENT_ID])
    return document


class MongoAdapter:
    """MongoDB adapter for document-based database operations"""

    def __init__(self, connection_string: str, default_db_name: str = "portfolio", client: Optional[MongoClient] = None):
        if not connection_string and client is None:
            raise ValueError("MongoDB connection string required. Set MONGO_URI environment variable or pass connection_string")

        self.connection_string = connection_string
        self.default_db_name = default_db_name
        self.client = client
        self.db = None
        self._connect()

    def _connect(self) -> None:
        """Establish MongoDB connection"""
        try:
            if self.client is None:
                self.client = MongoClient(self.connection_string, tz_aware=True)
            # Database named in the URI path wins over the configured default
            self.db = self.client.get_default_database(default=self.default_db_name)

            # Test connection
            self.client.admin.command('ping')
            logger.info(f"Connected to MongoDB database: {self.db.name}")

        except ConnectionFailure as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            raise
        except Exception as e:
            logger.error(f"MongoDB connection error: {e}")
            raise

    def _collection(self, collection: str):
        return self.db[get_collection_schema(collection).name]

    def init_collections(self) -> None:
        """Initialize MongoDB collections and indexes"""
        try:
            for name, schema in COLLECTIONS.items():
                if schema.created_at:
                    self.db[name].create_index([("createdAt", -1)])
            logger.info("MongoDB collections and indexes initialized successfully")
        except Exception as e:
            logger.error(f"Error initializing MongoDB collections: {e}")
            raise

    def ping(self) -> bool:
        try:
            self.client.admin.command('ping')
            return True
        except PyMongoError as e:
            logger.error(f"MongoDB ping failed: {e}")
            return False

    def find_one_document(self, collection: str) -> Optional[Dict[str, Any]]:
        """Return the first document in natural order, if any"""
        try:
            return _to_public(self._collection(collection).find_one())
        except Exception as e:
            logger.error(f"Error finding document in {collection}: {e}")
            raise

    def query_documents(
        self,
        collection: str,
        sort: Optional[Sequence[Tuple[str, int]]] = None,
    ) -> List[Dict[str, Any]]:
        """List every document, optionally sorted"""
        try:
            cursor = self._collection(collection).find()
            if sort:
                # ObjectIds grow with insertion time and break timestamp ties
                cursor = cursor.sort(list(sort) + [(DOCUMENT_ID, sort[0][1])])
            return [_to_public(doc) for doc in cursor]
        except Exception as e:
            logger.error(f"Error querying documents from {collection}: {e}")
            raise

    def create_document(self, collection: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Create a new document in the collection"""
        try:
            document = stamp_new_document(collection, fields)
            result = self._collection(collection).insert_one(document)
            logger.info(f"Created document in {collection} with ID: {result.inserted_id}")
            document[DOCUMENT_ID] = result.inserted_id
            return _to_public(document)
        except Exception as e:
            logger.error(f"Error creating document in {collection}: {e}")
            raise

    def update_document(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Merge fields into an existing document; None when the ID is unknown"""
        object_id = _object_id(doc_id)
        if object_id is None:
            logger.warning(f"No document found to update in {collection} with ID: {doc_id}")
            return None

        try:
            update = stamp_update(collection, fields)
            collection_obj = self._collection(collection)
            if update:
                document = collection_obj.find_one_and_update(
                    {DOCUMENT_ID: object_id},
                    {"$set": update},
                    return_document=ReturnDocument.AFTER,
                )
            else:
                document = collection_obj.find_one({DOCUMENT_ID: object_id})

            if document is None:
                logger.warning(f"No document found to update in {collection} with ID: {doc_id}")
                return None

            logger.info(f"Updated document in {collection} with ID: {doc_id}")
            return _to_public(document)

        except Exception as e:
            logger.error(f"Error updating document in {collection}: {e}")
            raise

    def delete_document(self, collection: str, doc_id: str) -> bool:
        """Delete a document by ID"""
        object_id = _object_id(doc_id)
        if object_id is None:
            logger.warning(f"No document found to delete in {collection} with ID: {doc_id}")
            return False

        try:
            result = self._collection(collection).delete_one({DOCUMENT_ID: object_id})
            success = result.deleted_count > 0

            if success:
                logger.info(f"Deleted document from {collection} with ID: {doc_id}")
            else:
                logger.warning(f"No document found to delete in {collection} with ID: {doc_id}")

            return success

        except Exception as e:
            logger.error(f"Error deleting document from {collection}: {e}")
            raise

    def count_documents(self, collection: str) -> int:
        """Count documents in a collection"""
        try:
            return self._collection(collection).count_documents({})
        except Exception as e:
            logger.error(f"Error counting documents in {collection}: {e}")
            raise

    def close(self) -> None:
        """Close MongoDB connection"""
        if self.client:
            self.client.close()
