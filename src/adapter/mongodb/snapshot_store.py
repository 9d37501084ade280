"""MongoDB implementation of SnapshotStorePort.

One document per slot: ``{'_id': <slot>, 'value': <json value>}``.
Driver errors surface as SnapshotReadError / SnapshotWriteError; a failed
read is never reported as an empty snapshot.
"""

from logging import getLogger
from typing import Any

from pymongo.database import Database
from pymongo.errors import PyMongoError

from adapter.mongodb.connection import SNAPSHOT_COLLECTION_NAME
from port.snapshot_store import SnapshotReadError, SnapshotWriteError

logger = getLogger(__name__)


class MongoSnapshotStore:
    def __init__(self, db: Database):
        self.db = db
        self.collection = db[SNAPSHOT_COLLECTION_NAME]

    def load(self) -> dict[str, Any]:
        try:
            return {doc['_id']: doc.get('value') for doc in self.collection.find({})}
        except PyMongoError as e:
            logger.error("Failed to load snapshot slots", extra={"error": str(e)})
            raise SnapshotReadError(f"Cannot load snapshot slots: {e}") from e

    def save(self, slot: str, value: Any) -> None:
        try:
            self.collection.replace_one({'_id': slot}, {'_id': slot, 'value': value}, upsert=True)
        except PyMongoError as e:
            logger.error("Failed to save snapshot slot", extra={"slot": slot, "error": str(e)})
            raise SnapshotWriteError(f"Cannot save slot '{slot}': {e}") from e

    def clear(self) -> None:
        try:
            result = self.collection.delete_many({})
        except PyMongoError as e:
            raise SnapshotWriteError(f"Cannot clear snapshot slots: {e}") from e
        logger.info("Snapshot slots cleared", extra={"deleted": result.deleted_count})

    def ping(self) -> bool:
        try:
            self.db.client.admin.command('ping')
            return True
        except PyMongoError:
            return False
