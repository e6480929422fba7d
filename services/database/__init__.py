"""
Database services

Usage:
    from services.database import MongoQuotaStore

    store = MongoQuotaStore("metadata", "emailCount")
    record = store.get()
"""
from .base import BaseMongoService
from .quota import QuotaStore, MemoryQuotaStore, MongoQuotaStore

__all__ = ['BaseMongoService', 'QuotaStore', 'MemoryQuotaStore', 'MongoQuotaStore']
