# src/mets_sync/store.py
import logging

from pymongo import MongoClient, UpdateOne
from pymongo.errors import PyMongoError

from .sync_config import StoreCredentials

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when the document store cannot be reached."""


def build_upserts(documents: dict) -> list:
    """Turns {key: document} into merge-style upserts keyed on _id."""
    return [
        UpdateOne({'_id': key}, {'$set': doc}, upsert=True)
        for key, doc in documents.items()
    ]


class MongoStore:
    """Batch upsert interface over a MongoDB database."""

    def __init__(self, client: MongoClient, db_name: str):
        self.client = client
        self.db = client[db_name]

    def upsert_batch(self, collection: str, documents: dict) -> int:
        """
        Writes every document in one transaction, so a failed commit leaves none
        of this batch behind. $set only touches the fields present in each document.
        """
        if not documents:
            return 0

        operations = build_upserts(documents)
        with self.client.start_session() as session:
            with session.start_transaction():
                result = self.db[collection].bulk_write(operations, ordered=True, session=session)

        logger.info(
            f"{collection}: {result.upserted_count} inserted, {result.modified_count} modified, "
            f"{len(operations)} upserted in total."
        )
        return len(operations)

    def close(self):
        self.client.close()


class MemoryStore:
    """In-process store with the same merge semantics. Used for dry runs."""

    def __init__(self):
        self.collections: dict[str, dict[str, dict]] = {}

    def upsert_batch(self, collection: str, documents: dict) -> int:
        target = self.collections.setdefault(collection, {})
        for key, doc in documents.items():
            target.setdefault(key, {}).update(doc)
        return len(documents)

    def close(self):
        pass


def connect_store(credentials: StoreCredentials) -> MongoStore:
    """Returns a MongoStore for the configured database, after confirming the server answers."""
    try:
        client = MongoClient(credentials.uri)
    except PyMongoError as e:
        raise StoreError(f"Error connecting to MongoDB: {e}") from e

    try:
        # Ping the server to confirm a successful connection
        client.admin.command('ping')
    except PyMongoError as e:
        client.close()
        raise StoreError(f"Error connecting to MongoDB: {e}") from e

    logger.info(f"MongoDB connection successful. Using database: '{credentials.database}'")
    return MongoStore(client, credentials.database)
