import logging
from typing import Optional, Union

from .mongo_adapter import MongoAdapter
from .nosql_adapter import NoSQLAdapter

logger = logging.getLogger(__name__)

DocumentStore = Union[NoSQLAdapter, MongoAdapter]


def get_nosql_adapter(
    mongo_uri: Optional[str] = None,
    db_path: str = "portfolio.db",
    mongo_db_name: str = "portfolio",
) -> DocumentStore:
    """Pick the document store: MongoDB when a URI is configured, SQLite documents otherwise."""
    if mongo_uri:
        return MongoAdapter(mongo_uri, default_db_name=mongo_db_name)
    logger.info(f"No MongoDB URI configured, using SQLite documents at {db_path}")
    return NoSQLAdapter(db_path)


def init_db(
    mongo_uri: Optional[str] = None,
    db_path: str = "portfolio.db",
    mongo_db_name: str = "portfolio",
) -> DocumentStore:
    """Create the store once at startup and prepare its collections."""
    adapter = get_nosql_adapter(mongo_uri=mongo_uri, db_path=db_path, mongo_db_name=mongo_db_name)
    adapter.init_collections()
    return adapter
