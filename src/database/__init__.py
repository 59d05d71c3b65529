"""
Document store layer.

Provides the SQLite JSON adapter (local development, tests) and the MongoDB
adapter behind one interface, plus the collection definitions they share.
"""

from .local import DocumentStore, get_nosql_adapter, init_db
from .mongo_adapter import MongoAdapter
from .nosql_adapter import ASCENDING, DESCENDING, NoSQLAdapter

__all__ = [
    'DocumentStore', 'get_nosql_adapter', 'init_db',
    'MongoAdapter', 'NoSQLAdapter',
    'ASCENDING', 'DESCENDING',
]
