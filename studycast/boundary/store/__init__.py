"""
Content store boundary.

Exports the ContentStore interface, its in-memory and SQL implementations,
and the configuration-driven factory.
"""

from studycast.boundary.store.content_store import ContentStore
from studycast.boundary.store.memory_store import InMemoryContentStore
from studycast.boundary.store.sql_store import SQLContentStore
from studycast.boundary.store.store_factory import get_content_store

__all__ = [
    "ContentStore",
    "InMemoryContentStore",
    "SQLContentStore",
    "get_content_store",
]
