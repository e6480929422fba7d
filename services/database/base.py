from pymongo import MongoClient
from typing import Optional
from config.settings import settings
import logging

logger = logging.getLogger(__name__)


class BaseMongoService:
    """Base class for MongoDB collections"""

    def __init__(self, collection_name: str, uri: Optional[str] = None, database: Optional[str] = None):
        self.collection_name = collection_name
        self.uri = uri or settings.get_mongodb_uri()
        self.database = database or settings.MONGODB_DATABASE
        self.sync_client: Optional[MongoClient] = None
        self.sync_db = None
        self.collection = None
        self._connected = False

    def connect(self):
        """Connect to MongoDB"""
        if self._connected:
            return

        try:
            self.sync_client = MongoClient(self.uri)
            self.sync_client.admin.command('ping')

            self.sync_db = self.sync_client[self.database]
            self.collection = self.sync_db[self.collection_name]

            self._connected = True
            logger.info(f"✓ Connected to '{self.database}.{self.collection_name}'")

        except Exception as e:
            logger.error(f"✗ Connection failed for '{self.collection_name}': {e}")
            self._connected = False
            raise

    def ensure_connected(self):
        """Ensure database is connected before operations"""
        if not self._connected:
            self.connect()
