from pymongo import MongoClient
from pymongo.errors import PyMongoError

from mongoadmin.core.config import MONGO_URI, MONGO_DB_NAME, SERVER_SELECTION_TIMEOUT_MS
from mongoadmin.core.errors import StoreConnectionError
from mongoadmin.core.logging_config import get_logger

logger = get_logger()


class MongoDBConnection:
    """
    Explicit connection handle passed into the admin routines.

    Use it as a context manager so the client is closed on every exit path:

        with MongoDBConnection(uri) as conn:
            prune_null_fields(conn.get_collection("users"))
    """

    def __init__(self, uri=None, db_name=None, server_selection_timeout_ms=None):
        self.uri = uri or MONGO_URI
        self.db_name = db_name or MONGO_DB_NAME
        self.server_selection_timeout_ms = server_selection_timeout_ms or SERVER_SELECTION_TIMEOUT_MS
        self.client = None

    def connect(self):
        if self.client is not None:
            return self.client
        try:
            self.client = MongoClient(self.uri, serverSelectionTimeoutMS=self.server_selection_timeout_ms)
            # MongoClient connects lazily; ping so bad hosts and credentials fail here
            self.client.admin.command("ping")
        except PyMongoError as e:
            logger.error(f"cannot reach document store, error_info:{e}")
            self.close()
            raise StoreConnectionError(f"cannot reach document store: {e}") from e
        logger.debug(f"connected to document store, db:{self.db_name}")
        return self.client

    def close(self):
        if self.client is not None:
            self.client.close()
            self.client = None

    def get_client(self):
        return self.connect()

    def get_db(self, name=None):
        return self.connect()[name or self.db_name]

    def get_collection(self, name, db_name=None):
        return self.get_db(db_name)[name]

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
